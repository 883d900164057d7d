# jsonmend

Tools for JSON documents held as ordinary Python data (`dict`, `list`,
`str`, `int`, `float`, `bool` and `None`):

- **JSON Pointer** (`jsonmend.pointer`): look values up by path, find the
  path to a value, and encode or decode pointer tokens.
- **JSON Patch** (`jsonmend.patch`): apply patch operations (`add`, `remove`,
  `replace`, `move`, `copy`, `test`) and generate a patch that turns one
  document into another.
- **JSON Merge Patch** (`jsonmend.merge`): apply a merge patch and generate
  one from two documents.
- **Comparison** (`jsonmend.compare`): structural equality, key ordering and
  key lookup.

Object keys match case-insensitively by default (ASCII letters only). Pass
`case_sensitive=True` to make them match exactly.

## Installation

```
pip install jsonmend
```

## JSON Pointer

```python
from jsonmend.pointer import get_pointer, find_pointer, encode_token, decode_token

doc = {"foo": ["bar", "baz"], "a/b": 1, "m~n": 8}

get_pointer(doc, "")           # doc itself
get_pointer(doc, "/foo/0")     # "bar"
get_pointer(doc, "/a~1b")      # 1
get_pointer(doc, "/m~0n")      # 8

find_pointer(doc, doc["foo"])  # "/foo"
encode_token("a/b")            # "a~1b"
decode_token("m~0n")           # "m~n"
```

`get_pointer` raises `KeyError` when the pointer cannot be resolved.
`find_pointer` matches the target by identity, not by equality, and returns
`None` when it is not found. `decode_token` raises `ValueError` on an escape
other than `~0` or `~1`. `parse_array_index` reads an array index token and
rejects leading zeroes and non-digits with `ValueError`. `split_pointer`
splits a pointer into its parent pointer and its decoded last token.

## JSON Patch

```python
from jsonmend.patch import apply_patches, generate_patches, add_patch, PatchError

doc = {"foo": "bar"}
patches = [
    {"op": "add", "path": "/baz", "value": "qux"},
    {"op": "remove", "path": "/foo"},
]
doc = apply_patches(doc, patches, case_sensitive=True)
# {"baz": "qux"}

diff = generate_patches({"a": 1}, {"a": 2, "b": 3})
# [{"op": "replace", "path": "/a", "value": 2},
#  {"op": "add", "path": "/b", "value": 3}]
apply_patches({"a": 1}, diff)   # {"a": 2, "b": 3}

ops = []
add_patch(ops, "add", "/x", 1)  # ops == [{"op": "add", "path": "/x", "value": 1}]
```

`apply_patches` and `apply_patch` change containers in place and return the
result; use the return value, since replacing the root returns a new value and
removing the root returns `None`. They stop at the first operation that fails
and raise `PatchError` (a `ValueError`); operations already applied stay
applied. Operation names are matched exactly; `PatchOperation` lists them and
`PatchOperation.parse` turns a name into one.

## JSON Merge Patch

```python
from jsonmend.merge import merge_patch, generate_merge_patch

merge_patch({"a": "b", "b": "c"}, {"a": None})   # {"b": "c"}

generate_merge_patch({"a": "b"}, {"a": "c"})     # {"a": "c"}
generate_merge_patch({"a": "b"}, {"a": "b"})     # {} (no change needed)
```

`merge_patch` changes an object target in place and returns the result; a
non-object patch replaces the target with a copy of the patch.

## Comparing documents

`json_equal(first, second, case_sensitive=False)` compares two documents
structurally; object key order does not matter, and string values are always
compared exactly. `sort_object(obj, case_sensitive=False)` reorders an
object's keys in place and returns `None`. `compare_keys` orders two keys like
`strcmp`, and `find_key` returns the first matching key of an object or `None`.

## What it does not do

The package works on Python data only: it does not read or write JSON text.
Use the standard `json` module to parse and serialise documents. It has no
command-line interface.