"""Unified error handling for fieldwatch.

- ErrorCode/FieldError: Structured description of a rejected write
- ValidationFailure/ConfigurationError: Exceptions raised to callers
- Result/Ok/Err: Monadic error handling for the non-raising write path
"""

from .errors import ConfigurationError, ErrorCode, FieldError, FieldwatchError, ValidationFailure
from .result import Err, Ok, Result, collect_results, sequence

__all__ = [
    # Core errors
    "ErrorCode", "FieldError", "FieldwatchError", "ValidationFailure", "ConfigurationError",
    # Result monad
    "Result", "Ok", "Err",
    # Collection ops
    "sequence", "collect_results",
]
