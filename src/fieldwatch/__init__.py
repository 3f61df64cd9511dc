"""fieldwatch - Middleware-gated writes for plain Python mappings.

Wraps a caller-owned dict so that every write to a configured field is
folded through an ordered chain of transform/validation steps before it is
stored. Reads pass straight through; unconfigured fields are untouched.

Quick Start:
    >>> from fieldwatch import build, is_string, longer_than, shorter_than
    >>>
    >>> org = build({"name": "Needs a name"}, {
    ...     "name": [is_string, shorter_than(26), longer_than(2)],
    ... })
    >>> org["name"] = "Skydiving Rocks!"
    >>> org["name"]
    'Skydiving Rocks!'

Rejected Writes:
    >>> org["name"] = "Skydiving Scarf Knitters Association"
    Traceback (most recent call last):
        ...
    ValidationFailure: 'name' rejected [OUT_OF_BOUNDS]: expected length < 26, got length 36
    >>>
    >>> # Or without exceptions
    >>> org.try_set("name", 42).unwrap_err().code
    <ErrorCode.TYPE_MISMATCH: 'TYPE_MISMATCH'>

Optional Fields:
    >>> from fieldwatch import SKIP, is_int
    >>> view = build({}, {"age": [SKIP, is_int]})
    >>> "age" in view  # absent field left alone at build time
    False

Typed Schemas:
    >>> from pydantic import BaseModel, Field
    >>> from fieldwatch import from_model
    >>>
    >>> class Org(BaseModel):
    ...     name: str = Field(min_length=3, max_length=25)
    ...     members: int = 0
    >>>
    >>> org = build({"name": "Knitters"}, from_model(Org))
    >>> org["members"] = "12"  # coerced by pydantic
    >>> org["members"]
    12
"""

from __future__ import annotations

__version__ = "0.1.0"

# Core
from .core import MISSING, SKIP, Configuration, Middleware, MiddlewareChain, Record, Watched, build, watch

# Errors
from .foundation.errors import (
    ConfigurationError,
    Err,
    ErrorCode,
    FieldError,
    FieldwatchError,
    Ok,
    Result,
    ValidationFailure,
    collect_results,
    sequence,
)

# Settings
from .foundation.config import (
    FieldwatchSettings,
    clear_settings_cache,
    configure_logging,
    get_settings,
)

# Middleware
from .middleware import (
    LoggingMiddleware,
    check,
    clamp,
    coerce,
    default,
    from_model,
    in_range,
    is_bool,
    is_int,
    is_number,
    is_string,
    is_type,
    length_between,
    longer_than,
    lower,
    matches,
    not_empty,
    one_of,
    shorter_than,
    strip,
    typed,
    upper,
)

__all__ = [
    "__version__",
    # Core
    "MISSING", "SKIP", "Configuration", "Middleware", "MiddlewareChain", "Record", "Watched", "build", "watch",
    # Errors
    "ConfigurationError", "ErrorCode", "FieldError", "FieldwatchError", "ValidationFailure",
    "Result", "Ok", "Err", "collect_results", "sequence",
    # Settings
    "FieldwatchSettings", "clear_settings_cache", "configure_logging", "get_settings",
    # Middleware
    "LoggingMiddleware", "check", "clamp", "coerce", "default", "from_model", "in_range",
    "is_bool", "is_int", "is_number", "is_string", "is_type", "length_between", "longer_than",
    "lower", "matches", "not_empty", "one_of", "shorter_than", "strip", "typed", "upper",
]
