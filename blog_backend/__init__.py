"""Personal blog backend.

A thin HTTP layer over SQLite:
- One admin user logs in and receives a JWT.
- Posts are soft-deleted and may be scheduled (future `date`).
- Uploaded images get resized variants on disk.
- Newsletter signups are stored as plain rows.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
