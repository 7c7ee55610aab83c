"""Database layer for Parcelbook: SQLAlchemy 2.0 async."""

from __future__ import annotations

from parcelbook.db.base import Base
from parcelbook.db.engine import DatabaseManager

__all__ = ["Base", "DatabaseManager"]
