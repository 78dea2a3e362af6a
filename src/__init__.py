"""Items API - CRUD service over a single resource with a strict request pipeline.

The service exposes create/read/update/delete operations for items, backed by
PostgreSQL. Most of the code lives in the request validation pipeline that
runs before and around the handlers.

Architecture Overview:
- **API Layer**: FastAPI app, middleware, content-type guards, error normalizer
- **Core Layer**: Configuration, logging, tracing, exception taxonomy
- **Domain Layer**: Item validators, service and store protocol
- **Infrastructure Layer**: Async SQLAlchemy models, sessions and repositories
"""
