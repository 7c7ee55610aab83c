"""SQLAlchemy-backed repositories (PostgreSQL in production, SQLite in tests)."""
