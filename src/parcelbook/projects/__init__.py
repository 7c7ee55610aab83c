"""Project editing, in-memory persistence and debounced auto-save."""
