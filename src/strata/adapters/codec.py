"""Structured payload encoding for persisted events and readmodels.

Payloads are JSON objects built from frozen dataclasses:

- field names are written in camelCase (``new_name`` -> ``newName``),
- fields whose value is None are omitted,
- nested dataclasses become nested objects, tuples and sets become lists,
- datetimes, dates and times become ISO-8601 strings, UUIDs and Decimals
  their ``str``, enums their ``value``.

Decoding is case-insensitive on keys (``NewName``, ``newname`` and ``newName``
all resolve to ``new_name``), rebuilds every value from the field's type hint
(recursing into containers), and fills omitted optional fields with None.

Type tags are the class ``__name__``; a registry maps tags back to classes.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import MISSING, fields, is_dataclass
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from types import NoneType, UnionType
from typing import Any, TypeVar, Union, get_args, get_origin, get_type_hints
from uuid import UUID

T = TypeVar("T")

JSON_SCALARS = (str, int, float, bool)


def to_camel(name: str) -> str:
    """Convert a snake_case field name to camelCase."""
    first, *rest = name.split("_")
    return first + "".join(part[:1].upper() + part[1:] for part in rest)


def _fold_key(name: str) -> str:
    return name.replace("_", "").lower()


def type_tag(value: object) -> str:
    """Return the type tag stored alongside an encoded value (or class)."""
    cls = value if isinstance(value, type) else type(value)
    return cls.__name__


def build_registry(types: Iterable[type[T]]) -> dict[str, type[T]]:
    """Build a tag -> type registry.

    Raises:
        ValueError: If two types share the same tag.
    """
    registry: dict[str, type[T]] = {}
    for cls in types:
        tag = type_tag(cls)
        if (existing := registry.get(tag)) is not None and existing is not cls:
            raise ValueError(
                f"Type tag {tag!r} is used by both {existing.__module__} "
                f"and {cls.__module__}"
            )
        registry[tag] = cls
    return registry


# --- Encode ---


def encode_payload(value: object) -> dict[str, Any]:
    """Encode a dataclass instance into a JSON-ready payload.

    Raises:
        TypeError: If `value` is not a dataclass instance, or holds a value
            with no JSON form.
    """
    if not is_dataclass(value) or isinstance(value, type):
        raise TypeError(f"{type(value).__name__} is not a dataclass instance")
    return _encode(value)


def _encode(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return {
            to_camel(f.name): _encode(item)
            for f in fields(value)
            if f.init and (item := getattr(value, f.name)) is not None
        }
    if isinstance(value, Enum):
        return _encode(value.value)
    if isinstance(value, JSON_SCALARS):
        return value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (UUID, Decimal)):
        return str(value)
    if isinstance(value, Mapping):
        return {str(key): _encode(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_encode(item) for item in value]
    raise TypeError(f"Cannot encode value of type {type(value).__name__}")


# --- Decode ---

# scalars written as strings, keyed by the annotated type
_PARSERS: dict[type[Any], Callable[[str], Any]] = {
    datetime: datetime.fromisoformat,
    date: date.fromisoformat,
    time: time.fromisoformat,
    UUID: UUID,
    Decimal: Decimal,
}


def decode_payload(cls: type[T], data: Mapping[str, Any]) -> T:
    """Decode a payload produced by `encode_payload` into an instance of `cls`.

    Keys are matched to fields ignoring case and underscores; unknown keys are
    ignored. A field missing from the payload takes its default, else None if
    its type is optional. Values are rebuilt from the field's type hint.

    Raises:
        TypeError: If `cls` is not a dataclass, or two of its fields only
            differ by case or underscores.
        KeyError: If a required field is missing.
    """
    if not is_dataclass(cls):
        raise TypeError(f"{cls!r} is not a dataclass type")
    hints = get_type_hints(cls)
    by_folded_name = _fields_by_folded_name(cls)
    values = {
        name: _decode_value(hints.get(name), value)
        for key, value in data.items()
        if (name := by_folded_name.get(_fold_key(key))) is not None
    }
    for f in fields(cls):
        if not f.init or f.name in values:
            continue
        if f.default is MISSING and f.default_factory is MISSING:
            if not _is_optional(hints.get(f.name)):
                raise KeyError(f"Missing required field '{f.name}'")
            values[f.name] = None
    return cls(**values)


def _fields_by_folded_name(cls: type[Any]) -> dict[str, str]:
    by_folded_name: dict[str, str] = {}
    for f in fields(cls):
        if not f.init:
            continue
        key = _fold_key(f.name)
        if (other := by_folded_name.get(key)) is not None:
            raise TypeError(
                f"Fields '{other}' and '{f.name}' of {cls.__name__} "
                f"both decode from key '{key}'"
            )
        by_folded_name[key] = f.name
    return by_folded_name


def _decode_value(field_type: Any, value: Any) -> Any:
    if value is None:
        return None
    candidates = [arg for arg in _union_args(field_type) if arg is not NoneType]
    if len(candidates) != 1:
        # untyped, or a union we cannot pick a member of
        return value
    target = candidates[0]
    origin, args = get_origin(target), get_args(target)

    if origin is tuple or target is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return tuple(_decode_value(args[0], item) for item in value)
        if args and len(args) == len(value):
            return tuple(_decode_value(arg, item) for arg, item in zip(args, value))
        return tuple(value)
    if origin in (list, Sequence) or target is list:
        item_type = args[0] if args else Any
        return [_decode_value(item_type, item) for item in value]
    if origin in (set, frozenset) or target in (set, frozenset):
        container = origin or target
        item_type = args[0] if args else Any
        return container(_decode_value(item_type, item) for item in value)
    if origin in (dict, Mapping) or target is dict:
        item_type = args[1] if len(args) == 2 else Any
        return {key: _decode_value(item_type, item) for key, item in value.items()}
    if not isinstance(target, type):
        return value
    if is_dataclass(target) and isinstance(value, Mapping):
        return decode_payload(target, value)
    if issubclass(target, Enum):
        return target(value)
    if isinstance(value, str) and (parse := _PARSERS.get(target)) is not None:
        return parse(value)
    return value


def _union_args(field_type: Any) -> tuple[Any, ...]:
    if get_origin(field_type) in (Union, UnionType):
        return get_args(field_type)
    return (field_type,)


def _is_optional(field_type: Any) -> bool:
    return NoneType in _union_args(field_type)
