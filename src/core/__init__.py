"""Core infrastructure package for shared application functionality.

- **config**: Centralized configuration management with environment support
- **context**: Request context and correlation ID management
- **exceptions**: Error kinds, error details and the domain exception hierarchy
- **error_context**: Sensitive and personal data sanitization for safe logging
- **logging**: Structured logging with Loguru
- **observability**: Distributed tracing with OpenTelemetry
- **types**: Type aliases for dynamic data
"""
