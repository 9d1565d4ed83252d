"""Field copying from inbound forms onto domain entities."""

import types
from collections.abc import Collection
from enum import Enum
from typing import Any, Literal, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)

_SKIP = object()


def _coerce(annotation: Any, value: Any) -> Any:
    """Return ``value`` if it fits ``annotation``, the enum member it maps to, or ``_SKIP``."""
    if annotation is Any:
        return value

    origin = get_origin(annotation)
    if origin in (Union, types.UnionType):
        for arg in get_args(annotation):
            coerced = _coerce(arg, value)
            if coerced is not _SKIP:
                return coerced
        return _SKIP
    if origin is Literal:
        return value if value in get_args(annotation) else _SKIP

    if annotation is None or annotation is type(None):
        return value if value is None else _SKIP

    target = origin or annotation
    if not isinstance(target, type):
        return _SKIP
    # bool is an int subclass; it only lands in bool fields
    if isinstance(value, bool) and not issubclass(target, bool):
        return _SKIP
    if isinstance(value, target):
        return value
    if issubclass(target, Enum):
        try:
            return target(value)
        except ValueError:
            return _SKIP
    return _SKIP


def copy_matching_fields(
    source: Any, destination: ModelT, exclude: Collection[str] = ()
) -> ModelT:
    """Copy every same-named, type-compatible attribute of ``source`` onto ``destination``.

    ``source`` may be any object (or a mapping); ``destination`` must be a
    pydantic or SQLModel instance, whose declared fields drive the copy.
    Missing attributes and incompatible values are skipped silently.

    Args:
        source: Object to read attributes from.
        destination: Model instance that receives the values, modified in place.
        exclude: Field names never copied.

    Returns:
        The destination, for chaining.
    """
    for name, field in type(destination).model_fields.items():
        if name in exclude:
            continue
        if isinstance(source, dict):
            if name not in source:
                continue
            value = source[name]
        elif hasattr(source, name):
            value = getattr(source, name)
        else:
            continue

        coerced = _coerce(field.annotation, value)
        if coerced is not _SKIP:
            setattr(destination, name, coerced)
    return destination
