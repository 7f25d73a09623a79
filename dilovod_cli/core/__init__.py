"""
Core layer - Wire types and HTTP client.

This layer provides:
- The request envelope and getObjects query types
- Low-level HTTP client with auth and error classification
"""

from dilovod_cli.core.client import APIClient, APIError, CLIError, ErrorKind, ValidationError
from dilovod_cli.core.types import Envelope, ObjectQuery, strip_defaults

__all__ = [
    "APIClient",
    "APIError",
    "CLIError",
    "Envelope",
    "ErrorKind",
    "ObjectQuery",
    "ValidationError",
    "strip_defaults",
]
