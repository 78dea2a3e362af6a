"""Utility modules for API-specific functionality.

- **responses**: orjson response class and the error response helper
"""
