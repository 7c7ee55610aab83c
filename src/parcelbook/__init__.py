"""Parcelbook: bookkeeping for real-estate development projects."""

__version__ = "0.1.0"
