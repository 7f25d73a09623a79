"""
Dilovod CLI - Three-layer client for the Dilovod API.

Layers:
- core: Wire types and HTTP client
- sdk: High-level DilovodClient with one method per remote action
- cli: Opinionated command-line interface
"""

from dilovod_cli.core.client import APIError, ErrorKind
from dilovod_cli.sdk import DilovodClient

__version__ = "0.1.0"
__all__ = ["APIError", "DilovodClient", "ErrorKind"]
