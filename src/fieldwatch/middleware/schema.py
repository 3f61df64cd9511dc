"""Typed fields backed by Pydantic TypeAdapters.

typed() validates (and, in lax mode, coerces) a value against any type
Pydantic understands. from_model() derives a whole Configuration from a
BaseModel class, so a record can be watched against a declared schema.

Optimizations:
- One TypeAdapter per typed() step, built when the step is created
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping, Sequence
from typing import Annotated, Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..core.chain import MISSING, Middleware, MiddlewareChain
from ..core.config import Configuration
from ..foundation.errors import ConfigurationError, ErrorCode, ValidationFailure


def _label(annotation: object) -> str:
    return getattr(annotation, "__name__", None) or repr(annotation).replace("typing.", "")


def format_validation_error(exc: ValidationError) -> str:
    """First Pydantic error as a short sentence, location included when nested."""
    errors = exc.errors(include_url=False)
    if not errors:
        return str(exc)
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    msg = first.get("msg", "invalid value")
    extra = f" (+{len(errors) - 1} more)" if len(errors) > 1 else ""
    return f"{loc}: {msg}{extra}" if loc else f"{msg}{extra}"


def typed(annotation: Any, *, strict: bool = False) -> Middleware:
    """Validate the value against `annotation` and return Pydantic's output.

    In lax mode (default) Pydantic's usual coercions apply, so "42" becomes
    42 for `int`. With strict=True the value must already have the type.

    Example:
        >>> age = typed(int)
        >>> age("42", "age", {})
        42
    """
    adapter: TypeAdapter[Any] = TypeAdapter(annotation)
    label = _label(annotation)
    expected = f"type {label}"

    def step(value: Any, field: str, record: MutableMapping[str, Any]) -> Any:
        if value is MISSING:
            raise ValidationFailure.create(
                field, value, expected, ErrorCode.TYPE_MISMATCH, message="field required",
            )
        try:
            return adapter.validate_python(value, strict=strict)
        except ValidationError as exc:
            raise ValidationFailure.create(
                field, value, expected, ErrorCode.TYPE_MISMATCH, message=format_validation_error(exc),
            ) from exc
    step.__name__ = step.__qualname__ = f"typed({label})"
    return step


def from_model(
    model: type[BaseModel],
    extra: Mapping[str, Sequence[Middleware]] | None = None,
    *,
    strict: bool = False,
) -> Configuration:
    """Build a Configuration with one typed() chain per model field.

    Field constraints declared with `Field(...)` are enforced. Fields that
    are not required get optional chains, so build() leaves them absent
    instead of failing. `extra` steps run after the type check.

    Example:
        >>> class Org(BaseModel):
        ...     name: str = Field(min_length=3, max_length=25)
        ...     members: int = 0
        >>> cfg = from_model(Org, extra={"name": [strip]})
    """
    if not (isinstance(model, type) and issubclass(model, BaseModel)):
        raise ConfigurationError(f"from_model() expects a pydantic BaseModel class, got {model!r}")
    extra = dict(extra or {})
    unknown = set(extra) - set(model.model_fields)
    if unknown:
        raise ConfigurationError(f"extra steps for unknown field(s): {', '.join(sorted(unknown))}")

    chains: dict[str, MiddlewareChain] = {}
    for name, info in model.model_fields.items():
        annotation = Annotated[(info.annotation, *info.metadata)] if info.metadata else info.annotation
        steps = (typed(annotation, strict=strict), *extra.get(name, ()))
        chains[name] = MiddlewareChain(steps, optional=not info.is_required(), name=name)
    return Configuration(chains)
