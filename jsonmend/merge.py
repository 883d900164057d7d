"""JSON Merge Patch (RFC 7396): applying and generating merge patches."""

from __future__ import annotations

import copy
from functools import cmp_to_key
from typing import Any

from jsonmend.compare import compare_keys, find_key, json_equal


def merge_patch(target: Any, patch: Any, case_sensitive: bool = False) -> Any:
    """Apply the merge patch ``patch`` to ``target`` and return the result.

    A non-object patch replaces the target with a copy of itself. An object
    patch turns a non-object target into an empty object first; a ``None``
    member removes the matching key, any other member is merged into it.
    Merged members move to the end of the object. Object targets are
    changed in place.
    """
    if not isinstance(patch, dict):
        return copy.deepcopy(patch)

    if not isinstance(target, dict):
        target = {}

    for name, value in patch.items():
        key = find_key(target, name, case_sensitive)
        if value is None:
            if key is not None:
                del target[key]
            continue
        current = target.pop(key) if key is not None else None
        target[name] = merge_patch(current, value, case_sensitive)
    return target


def _sorted_members(obj: dict, case_sensitive: bool) -> list[tuple[str, Any]]:
    order = cmp_to_key(lambda a, b: compare_keys(a[0], b[0], case_sensitive))
    return sorted(obj.items(), key=order)


def generate_merge_patch(source: Any, target: Any, case_sensitive: bool = False) -> Any:
    """Return a merge patch that turns ``source`` into ``target``.

    When both are objects the patch holds only the members that differ;
    an empty object means no change is needed. Otherwise the patch is a
    copy of ``target``.
    """
    if not isinstance(target, dict) or not isinstance(source, dict):
        return copy.deepcopy(target)

    source_members = iter(_sorted_members(source, case_sensitive))
    target_members = iter(_sorted_members(target, case_sensitive))
    old = next(source_members, None)
    new = next(target_members, None)
    patch: dict[str, Any] = {}

    while old is not None or new is not None:
        if old is None:
            diff = 1
        elif new is None:
            diff = -1
        else:
            diff = compare_keys(old[0], new[0], True)

        if diff < 0:
            patch[old[0]] = None
            old = next(source_members, None)
        elif diff > 0:
            patch[new[0]] = copy.deepcopy(new[1])
            new = next(target_members, None)
        else:
            if not json_equal(old[1], new[1], case_sensitive):
                patch[new[0]] = generate_merge_patch(old[1], new[1], case_sensitive)
            old = next(source_members, None)
            new = next(target_members, None)

    return patch