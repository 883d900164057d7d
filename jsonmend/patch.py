"""JSON Patch (RFC 6902): applying patch documents and generating them."""

from __future__ import annotations

import copy
from enum import Enum
from functools import cmp_to_key
from typing import Any

from jsonmend.compare import compare_keys, find_key, json_equal
from jsonmend.pointer import (
    encode_token,
    get_pointer,
    parse_array_index,
    split_pointer,
)

_MISSING: Any = object()


class PatchError(ValueError):
    """A JSON Patch operation could not be applied."""


class PatchOperation(Enum):
    """The operations a JSON Patch document may contain."""

    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"
    MOVE = "move"
    COPY = "copy"
    TEST = "test"

    @classmethod
    def parse(cls, value: Any) -> PatchOperation:
        """Return the operation named by ``value``; names are case sensitive."""
        if not isinstance(value, str):
            raise PatchError("patch operation is missing or not a string")
        try:
            return cls(value)
        except ValueError:
            raise PatchError(f"unknown patch operation: {value!r}") from None


def _member(patch: dict, name: str, case_sensitive: bool) -> Any:
    key = find_key(patch, name, case_sensitive)
    return _MISSING if key is None else patch[key]


def _lookup(document: Any, pointer: str, case_sensitive: bool) -> Any:
    try:
        return get_pointer(document, pointer, case_sensitive)
    except KeyError:
        return _MISSING


def _detach(document: Any, pointer: str, case_sensitive: bool) -> Any:
    """Remove and return the value at ``pointer``, or _MISSING."""
    try:
        parent_pointer, name = split_pointer(pointer)
    except ValueError:
        return _MISSING
    parent = _lookup(document, parent_pointer, case_sensitive)
    if isinstance(parent, list):
        try:
            index = parse_array_index(name)
        except ValueError:
            return _MISSING
        if index >= len(parent):
            return _MISSING
        return parent.pop(index)
    if isinstance(parent, dict):
        key = find_key(parent, name, case_sensitive)
        if key is None:
            return _MISSING
        return parent.pop(key)
    return _MISSING


def _insert(document: Any, path: str, value: Any, case_sensitive: bool) -> None:
    try:
        parent_pointer, name = split_pointer(path)
    except ValueError as error:
        raise PatchError(f"cannot add at {path!r}: {error}") from None
    parent = _lookup(document, parent_pointer, case_sensitive)
    if isinstance(parent, list):
        if name == "-":
            parent.append(value)
            return
        try:
            index = parse_array_index(name)
        except ValueError:
            raise PatchError(f"invalid array index in {path!r}") from None
        if index > len(parent):
            raise PatchError(f"array index out of range in {path!r}")
        parent.insert(index, value)
    elif isinstance(parent, dict):
        key = find_key(parent, name, case_sensitive)
        if key is not None:
            del parent[key]
        parent[name] = value
    else:
        raise PatchError(f"no object or array to add to at {path!r}")


def _required_value(patch: dict, case_sensitive: bool) -> Any:
    value = _member(patch, "value", case_sensitive)
    if value is _MISSING:
        raise PatchError("missing 'value' for add/replace")
    return copy.deepcopy(value)


def apply_patch(document: Any, patch: Any, case_sensitive: bool = False) -> Any:
    """Apply one patch operation to ``document`` and return the result.

    Containers are changed in place; the return value differs from
    ``document`` only when the root itself is replaced or removed, in
    which case removal yields None.
    """
    if not isinstance(patch, dict):
        raise PatchError("patch operation must be an object")
    path = _member(patch, "path", case_sensitive)
    if not isinstance(path, str):
        raise PatchError("patch 'path' is missing or not a string")
    operation = PatchOperation.parse(_member(patch, "op", case_sensitive))

    if operation is PatchOperation.TEST:
        actual = _lookup(document, path, case_sensitive)
        expected = _member(patch, "value", case_sensitive)
        if (
            actual is _MISSING
            or expected is _MISSING
            or not json_equal(actual, expected, case_sensitive)
        ):
            raise PatchError(f"test failed at {path!r}")
        return document

    if path == "":
        if operation is PatchOperation.REMOVE:
            return None
        if operation in (PatchOperation.ADD, PatchOperation.REPLACE):
            return _required_value(patch, case_sensitive)

    if operation in (PatchOperation.REMOVE, PatchOperation.REPLACE):
        if _detach(document, path, case_sensitive) is _MISSING:
            raise PatchError(f"nothing to {operation.value} at {path!r}")
        if operation is PatchOperation.REMOVE:
            return document

    if operation in (PatchOperation.MOVE, PatchOperation.COPY):
        source = _member(patch, "from", case_sensitive)
        if not isinstance(source, str):
            raise PatchError(f"missing 'from' for {operation.value}")
        if operation is PatchOperation.MOVE:
            value = _detach(document, source, case_sensitive)
        else:
            value = _lookup(document, source, case_sensitive)
        if value is _MISSING:
            raise PatchError(f"nothing to {operation.value} from {source!r}")
        if operation is PatchOperation.COPY:
            value = copy.deepcopy(value)
    else:
        value = _required_value(patch, case_sensitive)

    _insert(document, path, value, case_sensitive)
    return document


def apply_patches(document: Any, patches: Any, case_sensitive: bool = False) -> Any:
    """Apply a list of patch operations in order and return the result.

    Stops at the first failing operation with PatchError; operations
    already applied stay applied.
    """
    if not isinstance(patches, list):
        raise PatchError("patches must be an array")
    for patch in patches:
        document = apply_patch(document, patch, case_sensitive)
    return document


def _compose(
    patches: list,
    operation: str,
    path: str,
    suffix: str | None = None,
    value: Any = _MISSING,
) -> None:
    if suffix is not None:
        path = f"{path}/{encode_token(suffix)}"
    patch: dict[str, Any] = {"op": operation, "path": path}
    if value is not _MISSING:
        patch["value"] = copy.deepcopy(value)
    patches.append(patch)


def add_patch(patches: list, operation: Any, path: str, value: Any = _MISSING) -> None:
    """Append a patch operation to ``patches``; ``value`` is copied if given."""
    if not isinstance(patches, list):
        raise TypeError("patches must be a list")
    if isinstance(operation, PatchOperation):
        operation = operation.value
    if not isinstance(operation, str) or not isinstance(path, str):
        raise TypeError("operation and path must be strings")
    _compose(patches, operation, path, value=value)


def _sorted_members(obj: dict, case_sensitive: bool) -> list[tuple[str, Any]]:
    order = cmp_to_key(lambda a, b: compare_keys(a[0], b[0], case_sensitive))
    return sorted(obj.items(), key=order)


def _diff(patches: list, path: str, source: Any, target: Any, case_sensitive: bool) -> None:
    if isinstance(source, list) and isinstance(target, list):
        common = min(len(source), len(target))
        for index, (old, new) in enumerate(zip(source, target)):
            _diff(patches, f"{path}/{index}", old, new, case_sensitive)
        for _ in source[common:]:
            _compose(patches, "remove", path, str(common))
        for new in target[common:]:
            _compose(patches, "add", path, "-", new)
        return

    if isinstance(source, dict) and isinstance(target, dict):
        source_members = iter(_sorted_members(source, case_sensitive))
        target_members = iter(_sorted_members(target, case_sensitive))
        old = next(source_members, None)
        new = next(target_members, None)
        while old is not None or new is not None:
            if old is None:
                diff = 1
            elif new is None:
                diff = -1
            else:
                diff = compare_keys(old[0], new[0], case_sensitive)
            if diff == 0:
                child = f"{path}/{encode_token(old[0])}"
                _diff(patches, child, old[1], new[1], case_sensitive)
                old = next(source_members, None)
                new = next(target_members, None)
            elif diff < 0:
                _compose(patches, "remove", path, old[0])
                old = next(source_members, None)
            else:
                _compose(patches, "add", path, new[0], new[1])
                new = next(target_members, None)
        return

    if not json_equal(source, target, case_sensitive):
        _compose(patches, "replace", path, value=target)


def generate_patches(source: Any, target: Any, case_sensitive: bool = False) -> list:
    """Return a list of patch operations that turns ``source`` into ``target``."""
    patches: list = []
    _diff(patches, "", source, target, case_sensitive)
    return patches