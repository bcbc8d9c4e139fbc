"""
Backend.

- core/: Configuration, database, logging, exceptions, utilities
- models/: SQLAlchemy models for the note store
- repositories/: Data access
- schemas/: Pydantic note projection and request schemas
- services/: Note service (store boundary) and note state (session view)
"""
