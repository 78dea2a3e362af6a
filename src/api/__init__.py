"""HTTP API layer of the Items API, built on FastAPI.

Key components:
- **main**: Application factory and lifecycle management
- **content_type**: The Content-Type/charset validator shared by both guards
- **dependencies**: Router guard, JSON body decoding and service wiring
- **routes**: The items endpoints
- **middleware**: Cross-cutting concerns for all requests
  - Request context with correlation ID tracking
  - Request logging with timing
  - Pre-parse Content-Type guard
  - Exception normalization into ``{statusCode, error, message}``
- **schemas**: Pydantic models for the wire format
- **utils**: orjson response class and error rendering
"""
