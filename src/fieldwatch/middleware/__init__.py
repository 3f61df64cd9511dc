"""Ready-made chain steps.

Validators raise ValidationFailure or return the value unchanged;
transforms return a new value for the next step.

Example:
    >>> from fieldwatch import build
    >>> from fieldwatch.middleware import is_string, longer_than, shorter_than, strip
    >>>
    >>> org = build({"name": "Needs a name"}, {
    ...     "name": [strip, is_string, shorter_than(26), longer_than(2)],
    ... })
    >>> org["name"] = "  Skydiving Rocks!  "
    >>> org["name"]
    'Skydiving Rocks!'
"""

from .plugins import LoggingMiddleware
from .schema import format_validation_error, from_model, typed
from .transforms import clamp, coerce, default, lower, strip, upper
from .validators import (
    check,
    in_range,
    is_bool,
    is_int,
    is_number,
    is_string,
    is_type,
    length_between,
    longer_than,
    matches,
    not_empty,
    one_of,
    shorter_than,
)

__all__ = [
    # Validators
    "check",
    "in_range",
    "is_bool",
    "is_int",
    "is_number",
    "is_string",
    "is_type",
    "length_between",
    "longer_than",
    "matches",
    "not_empty",
    "one_of",
    "shorter_than",
    # Transforms
    "clamp",
    "coerce",
    "default",
    "lower",
    "strip",
    "upper",
    # Schema
    "format_validation_error",
    "from_model",
    "typed",
    # Plugins
    "LoggingMiddleware",
]
