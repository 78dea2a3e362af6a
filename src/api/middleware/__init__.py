"""FastAPI middleware package for cross-cutting request/response concerns.

- **RequestContextMiddleware**: Manages correlation IDs and request context
- **RequestLoggingMiddleware**: Structured request logging with timing
- **ContentTypeMiddleware**: Rejects non-JSON bodies before they are read
- **error_handler**: Exception normalization and handlers

Processing order of a request:
1. Request context (sets up correlation IDs)
2. Request logging (logs with correlation context)
3. Content-Type guard (short-circuits unacceptable bodies)
4. Exception handlers (render every error in the same shape)
"""
