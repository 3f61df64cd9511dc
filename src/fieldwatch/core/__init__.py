"""Core interceptor: chains, configuration and the watched view."""

from .chain import MISSING, SKIP, Middleware, MiddlewareChain
from .config import Configuration
from .watch import Record, Watched, build, watch

__all__ = [
    "MISSING",
    "SKIP",
    "Middleware",
    "MiddlewareChain",
    "Configuration",
    "Record",
    "Watched",
    "build",
    "watch",
]
