"""JSON Pointer (RFC 6901) encoding, lookup and search."""

from __future__ import annotations

import re
from typing import Any

from jsonmend.compare import find_key

_ESCAPE = re.compile(r"~(.?)", re.DOTALL)
_INDEX = re.compile(r"0|[1-9][0-9]*")
_UNESCAPED = {"0": "~", "1": "/"}


def encode_token(name: str) -> str:
    """Escape a key for use as a pointer token (``~`` -> ``~0``, ``/`` -> ``~1``)."""
    return name.replace("~", "~0").replace("/", "~1")


def decode_token(token: str) -> str:
    """Undo the ``~0`` and ``~1`` escapes; raise ValueError on any other ``~``."""

    def unescape(match: re.Match) -> str:
        try:
            return _UNESCAPED[match.group(1)]
        except KeyError:
            raise ValueError(f"invalid escape in pointer token: {token!r}") from None

    return _ESCAPE.sub(unescape, token)


def parse_array_index(token: str) -> int:
    """Read an array index token; leading zeroes and non-digits are rejected."""
    if not _INDEX.fullmatch(token):
        raise ValueError(f"invalid array index: {token!r}")
    return int(token)


def _tokens(pointer: str) -> list[str]:
    if pointer == "":
        return []
    if not pointer.startswith("/"):
        raise KeyError(pointer)
    return pointer[1:].split("/")


def get_pointer(document: Any, pointer: str, case_sensitive: bool = False) -> Any:
    """Return the value that ``pointer`` refers to inside ``document``.

    Raises KeyError when the pointer cannot be resolved.
    """
    current = document
    for token in _tokens(pointer):
        if isinstance(current, list):
            try:
                index = parse_array_index(token)
            except ValueError:
                raise KeyError(pointer) from None
            if index >= len(current):
                raise KeyError(pointer)
            current = current[index]
        elif isinstance(current, dict):
            try:
                name = decode_token(token)
            except ValueError:
                raise KeyError(pointer) from None
            key = find_key(current, name, case_sensitive)
            if key is None:
                raise KeyError(pointer)
            current = current[key]
        else:
            raise KeyError(pointer)
    return current


def find_pointer(root: Any, target: Any) -> str | None:
    """Return the pointer from ``root`` to the very object ``target``, or None.

    Values are matched by identity, not by equality.
    """
    if root is target:
        return ""
    if isinstance(root, list):
        for index, child in enumerate(root):
            found = find_pointer(child, target)
            if found is not None:
                return f"/{index}{found}"
    elif isinstance(root, dict):
        for key, child in root.items():
            found = find_pointer(child, target)
            if found is not None:
                return f"/{encode_token(key)}{found}"
    return None


def split_pointer(pointer: str) -> tuple[str, str]:
    """Split a pointer into its parent pointer and its decoded last token."""
    parent, separator, child = pointer.rpartition("/")
    if not separator:
        raise ValueError(f"pointer has no parent: {pointer!r}")
    return parent, decode_token(child)