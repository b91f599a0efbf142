from __future__ import annotations

import dataclasses
from collections.abc import MutableMapping, MutableSequence
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from .errors import DeserializationError


class Result:
    """Holder for a decoded value of any shape."""

    def __init__(self, value: Any = None):
        self.value = value

    def __repr__(self) -> str:
        return f"Result({self.value!r})"


@lru_cache(maxsize=None)
def _adapter(tp: type) -> TypeAdapter:
    return TypeAdapter(tp)


def _fill_model(target: BaseModel, value: dict) -> None:
    model = type(target)
    merged = {name: getattr(target, name) for name in model.model_fields}
    merged.update(value)
    try:
        validated = model.model_validate(merged)
        for name in model.model_fields:
            setattr(target, name, getattr(validated, name))
    except ValidationError as e:
        raise DeserializationError(f"invalid {model.__name__}: {e}") from e


def _fill_dataclass(target: Any, value: dict) -> None:
    names = [f.name for f in dataclasses.fields(target) if f.init]
    merged = {name: getattr(target, name) for name in names}
    merged.update({k: v for k, v in value.items() if k in merged})
    try:
        validated = _adapter(type(target)).validate_python(merged)
    except ValidationError as e:
        raise DeserializationError(f"invalid {type(target).__name__}: {e}") from e
    try:
        for name in names:
            setattr(target, name, getattr(validated, name))
    except dataclasses.FrozenInstanceError as e:
        raise DeserializationError(f"cannot fill frozen {type(target).__name__}") from e


def fill_target(target: Any, value: Any) -> None:
    """Copy a decoded value into a caller-supplied container in place.

    Pydantic models and dataclasses are validated against their field types;
    fields missing from ``value`` keep their current values.
    """
    if isinstance(target, Result):
        target.value = value
        return

    if isinstance(target, BaseModel) and isinstance(value, dict):
        _fill_model(target, value)
        return

    if isinstance(target, MutableMapping) and isinstance(value, dict):
        target.clear()
        target.update(value)
        return

    if isinstance(target, MutableSequence) and isinstance(value, list):
        target[:] = value
        return

    if dataclasses.is_dataclass(target) and not isinstance(target, type) and isinstance(value, dict):
        _fill_dataclass(target, value)
        return

    raise DeserializationError(
        f"cannot unmarshal {type(value).__name__} into {type(target).__name__}"
    )
