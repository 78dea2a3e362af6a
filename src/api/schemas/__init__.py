"""Pydantic schema models for API request/response serialization.

- **errors**: The ``{statusCode, error, message}`` error body
- **items**: Item responses and the raw create/update payload
"""
