"""Optional middleware plugins."""

from .logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
