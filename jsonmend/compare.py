"""Key ordering, key lookup and structural equality for JSON values.

JSON values are plain Python data: ``dict``, ``list``, ``str``, ``int``,
``float``, ``bool`` and ``None``.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Any

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


class _Kind(Enum):
    NULL = auto()
    BOOL = auto()
    NUMBER = auto()
    STRING = auto()
    ARRAY = auto()
    OBJECT = auto()


def _fold(text: str, case_sensitive: bool) -> str:
    """Lower-case ASCII letters only, unless the comparison is case sensitive."""
    return text if case_sensitive else text.translate(_ASCII_LOWER)


def _kind(value: Any) -> _Kind:
    if value is None:
        return _Kind.NULL
    if isinstance(value, bool):
        return _Kind.BOOL
    if isinstance(value, (int, float)):
        return _Kind.NUMBER
    if isinstance(value, str):
        return _Kind.STRING
    if isinstance(value, list):
        return _Kind.ARRAY
    if isinstance(value, dict):
        return _Kind.OBJECT
    raise TypeError(f"not a JSON value: {type(value).__name__}")


def compare_keys(first: str, second: str, case_sensitive: bool = False) -> int:
    """Order two object keys: negative, zero or positive like ``strcmp``."""
    a = _fold(first, case_sensitive)
    b = _fold(second, case_sensitive)
    return (a > b) - (a < b)


def _sorted_items(obj: dict, case_sensitive: bool) -> list[tuple[str, Any]]:
    return sorted(obj.items(), key=lambda item: _fold(item[0], case_sensitive))


def sort_object(obj: dict, case_sensitive: bool = False) -> None:
    """Reorder the members of ``obj`` in place by key."""
    if not isinstance(obj, dict):
        raise TypeError(f"expected a JSON object, got {type(obj).__name__}")
    items = _sorted_items(obj, case_sensitive)
    obj.clear()
    obj.update(items)


def json_equal(first: Any, second: Any, case_sensitive: bool = False) -> bool:
    """Tell whether two JSON values are structurally equal.

    Object member order does not matter; ``case_sensitive`` applies to
    object keys only, string values are always compared exactly.
    """
    kind = _kind(first)
    if kind is not _kind(second):
        return False
    if kind is _Kind.NULL:
        return True
    if kind in (_Kind.BOOL, _Kind.NUMBER, _Kind.STRING):
        return first == second
    if kind is _Kind.ARRAY:
        return len(first) == len(second) and all(
            json_equal(a, b, case_sensitive) for a, b in zip(first, second)
        )
    if len(first) != len(second):
        return False
    return all(
        compare_keys(key_a, key_b, case_sensitive) == 0
        and json_equal(value_a, value_b, case_sensitive)
        for (key_a, value_a), (key_b, value_b) in zip(
            _sorted_items(first, case_sensitive),
            _sorted_items(second, case_sensitive),
        )
    )


def find_key(obj: dict, name: str, case_sensitive: bool = False) -> str | None:
    """Return the first key of ``obj`` matching ``name``, or None."""
    if not isinstance(obj, dict):
        raise TypeError(f"expected a JSON object, got {type(obj).__name__}")
    if case_sensitive:
        return name if name in obj else None
    folded = _fold(name, False)
    return next((key for key in obj if _fold(key, False) == folded), None)