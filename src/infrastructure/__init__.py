"""Infrastructure layer for data persistence.

This package provides the concrete implementation of the item store the
domain layer depends on:

- **Database access**: Async PostgreSQL with SQLAlchemy 2.0+
- **Repository pattern**: Generic record operations for all entities
- **Connection management**: Pooling, health checks, and lifecycle
"""
