"""Shape-checked access to decoded document values.

Values bags and raw manifests hold decoded YAML/JSON: null, bool, number,
string, list, or string-keyed map. ``kind_of`` tags a value with its
``ValueKind``; the ``as_*`` accessors return the value only when it has the
expected kind and ``None`` otherwise. Callers treat ``None`` as "no
evidence", never as an error.

Note that ``bool`` is tagged BOOL, never NUMBER, so ``replicas: true`` does
not read as ``replicas: 1``.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ValueKind(StrEnum):
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    LIST = "list"
    MAP = "map"
    UNKNOWN = "unknown"


def kind_of(value: object) -> ValueKind:
    """Return the ValueKind tag of a decoded value."""
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, list):
        return ValueKind.LIST
    if isinstance(value, dict):
        if all(isinstance(k, str) for k in value):
            return ValueKind.MAP
        return ValueKind.UNKNOWN
    return ValueKind.UNKNOWN


def as_map(value: object) -> dict[str, Any] | None:
    return value if kind_of(value) is ValueKind.MAP else None  # type: ignore[return-value]


def as_list(value: object) -> list[Any] | None:
    return value if kind_of(value) is ValueKind.LIST else None  # type: ignore[return-value]


def as_str(value: object) -> str | None:
    return value if kind_of(value) is ValueKind.STRING else None  # type: ignore[return-value]


def as_bool(value: object) -> bool | None:
    return value if kind_of(value) is ValueKind.BOOL else None  # type: ignore[return-value]


def as_int(value: object) -> int | None:
    """Return *value* if it is an integral number (bools excluded)."""
    if kind_of(value) is not ValueKind.NUMBER:
        return None
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    return value  # type: ignore[return-value]


def is_true(value: object) -> bool:
    """True only for the boolean ``True``; strings like "true" do not count."""
    return as_bool(value) is True


def nested(value: object, *path: str) -> Any:
    """Walk string keys through nested maps. Returns None when any step is missing or not a map."""
    current = value
    for key in path:
        mapping = as_map(current)
        if mapping is None:
            return None
        current = mapping.get(key)
    return current


def nested_str(value: object, *path: str) -> str:
    """Like ``nested`` but returns "" unless the leaf is a string."""
    return as_str(nested(value, *path)) or ""


def map_list(value: object) -> list[dict[str, Any]] | None:
    """Return *value* if it is a list whose every element is a map, else None.

    An empty list qualifies.
    """
    items = as_list(value)
    if items is None:
        return None
    if not all(kind_of(item) is ValueKind.MAP for item in items):
        return None
    return items


def container_list(values: dict[str, Any], key: str = "containers") -> list[dict[str, Any]] | None:
    """Return the usable container list from a values bag.

    ``None`` covers both "missing" and "wrong shape"; use ``key in values``
    where the two must be told apart.
    """
    return map_list(values.get(key))


def string_map(value: object) -> dict[str, str]:
    """Return the string-valued entries of a map; anything else yields ``{}``."""
    mapping = as_map(value)
    if mapping is None:
        return {}
    return {k: v for k, v in mapping.items() if isinstance(v, str)}


def maps_in(value: object) -> list[dict[str, Any]]:
    """Return the map elements of a list, skipping anything else."""
    return [item for item in as_list(value) or [] if kind_of(item) is ValueKind.MAP]
