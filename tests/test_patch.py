import copy

import pytest

from jsonmend.patch import (
    PatchError,
    PatchOperation,
    add_patch,
    apply_patch,
    apply_patches,
    generate_patches,
)

SUCCESS_CASES = [
    (
        {"foo": "bar"},
        [{"op": "add", "path": "/baz", "value": "qux"}],
        {"baz": "qux", "foo": "bar"},
    ),
    (
        {"foo": ["bar", "baz"]},
        [{"op": "add", "path": "/foo/1", "value": "qux"}],
        {"foo": ["bar", "qux", "baz"]},
    ),
    (
        {"baz": "qux", "foo": "bar"},
        [{"op": "remove", "path": "/baz"}],
        {"foo": "bar"},
    ),
    (
        {"foo": ["bar", "qux", "baz"]},
        [{"op": "remove", "path": "/foo/1"}],
        {"foo": ["bar", "baz"]},
    ),
    (
        {"baz": "qux", "foo": "bar"},
        [{"op": "replace", "path": "/baz", "value": "boo"}],
        {"baz": "boo", "foo": "bar"},
    ),
    (
        {"foo": {"bar": "baz", "waldo": "fred"}, "qux": {"corge": "grault"}},
        [{"op": "move", "from": "/foo/waldo", "path": "/qux/thud"}],
        {"foo": {"bar": "baz"}, "qux": {"corge": "grault", "thud": "fred"}},
    ),
    (
        {"foo": ["all", "grass", "cows", "eat"]},
        [{"op": "move", "from": "/foo/1", "path": "/foo/3"}],
        {"foo": ["all", "cows", "eat", "grass"]},
    ),
    (
        {"baz": "qux", "foo": ["a", 2, "c"]},
        [
            {"op": "test", "path": "/baz", "value": "qux"},
            {"op": "test", "path": "/foo/1", "value": 2},
        ],
        {"baz": "qux", "foo": ["a", 2, "c"]},
    ),
    (
        {"foo": "bar"},
        [{"op": "add", "path": "/child", "value": {"grandchild": {}}}],
        {"foo": "bar", "child": {"grandchild": {}}},
    ),
    (
        {"/": 9, "~1": 10},
        [{"op": "test", "path": "/~01", "value": 10}],
        {"/": 9, "~1": 10},
    ),
    (
        {"foo": ["bar"]},
        [{"op": "add", "path": "/foo/-", "value": ["abc", "def"]}],
        {"foo": ["bar", ["abc", "def"]]},
    ),
    (
        {"foo": 1},
        [{"op": "copy", "from": "/foo", "path": "/bar"}],
        {"foo": 1, "bar": 1},
    ),
    (
        {"foo": 1},
        [{"op": "replace", "path": "", "value": [1, 2]}],
        [1, 2],
    ),
    (
        {"foo": 1},
        [{"op": "add", "path": "", "value": {"bar": 2}}],
        {"bar": 2},
    ),
    (
        [1, 2],
        [{"op": "add", "path": "/2", "value": 3}],
        [1, 2, 3],
    ),
]

ERROR_CASES = [
    ({"baz": "qux"}, [{"op": "test", "path": "/baz", "value": "bar"}]),
    ({"foo": "bar"}, [{"op": "add", "path": "/baz/bat", "value": "qux"}]),
    ({"/": 9, "~1": 10}, [{"op": "test", "path": "/~01", "value": "10"}]),
    ({"foo": 1}, [{"op": "test", "path": "/missing", "value": 1}]),
    ({"foo": 1}, [{"op": "remove", "path": "/bar"}]),
    ([1, 2], [{"op": "add", "path": "/3", "value": 3}]),
    ([1, 2], [{"op": "add", "path": "/01", "value": 3}]),
    ([1, 2], [{"op": "remove", "path": "/5"}]),
    ({"foo": 1}, [{"op": "add", "path": "/bar"}]),
    ({"foo": 1}, [{"op": "spam", "path": "/bar", "value": 1}]),
    ({"foo": 1}, [{"path": "/bar", "value": 1}]),
    ({"foo": 1}, [{"op": "add", "value": 1}]),
    ({"foo": 1}, [{"op": "move", "path": "/bar"}]),
    ({"foo": 1}, [{"op": "copy", "from": "/nope", "path": "/bar"}]),
    ({"foo": 1}, [{"op": "replace", "path": "/bar", "value": 2}]),
    ({"foo": "bar"}, ["not an object"]),
]


@pytest.mark.parametrize("doc, patches, expected", SUCCESS_CASES)
def test_apply_patches(doc, patches, expected):
    result = apply_patches(copy.deepcopy(doc), patches, case_sensitive=True)
    assert result == expected


@pytest.mark.parametrize("doc, patches", ERROR_CASES)
def test_apply_patches_errors(doc, patches):
    with pytest.raises(PatchError):
        apply_patches(copy.deepcopy(doc), patches, case_sensitive=True)


@pytest.mark.parametrize("doc, patches, expected", SUCCESS_CASES)
def test_generated_patches_reach_expected(doc, patches, expected):
    generated = generate_patches(doc, expected, case_sensitive=True)
    result = apply_patches(copy.deepcopy(doc), generated, case_sensitive=True)
    assert result == expected


def test_remove_root_yields_none():
    assert apply_patch({"a": 1}, {"op": "remove", "path": ""}) is None


def test_patches_must_be_a_list():
    with pytest.raises(PatchError):
        apply_patches({"a": 1}, None)
    with pytest.raises(PatchError):
        apply_patches(None, "item")


def test_add_value_is_copied():
    value = {"inner": [1]}
    doc = apply_patch({}, {"op": "add", "path": "/x", "value": value})
    value["inner"].append(2)
    assert doc == {"x": {"inner": [1]}}


def test_case_insensitive_add_replaces_existing_key():
    doc = apply_patch({"Foo": 1}, {"op": "add", "path": "/foo", "value": 2})
    assert doc == {"foo": 2}


def test_case_sensitive_add_keeps_other_case():
    doc = apply_patch(
        {"Foo": 1}, {"op": "add", "path": "/foo", "value": 2}, case_sensitive=True
    )
    assert doc == {"Foo": 1, "foo": 2}


def test_case_insensitive_member_names_in_patch():
    doc = apply_patch({}, {"OP": "add", "Path": "/a", "VALUE": 1})
    assert doc == {"a": 1}


def test_move_into_own_child_fails():
    with pytest.raises(PatchError):
        apply_patch({"a": {"b": 1}}, {"op": "move", "from": "/a", "path": "/a/c"})


def test_operation_parse():
    assert PatchOperation.parse("move") is PatchOperation.MOVE
    with pytest.raises(PatchError):
        PatchOperation.parse("ADD")
    with pytest.raises(PatchError):
        PatchOperation.parse(3)


def test_add_patch_with_value():
    patches = []
    value = [1, 2]
    add_patch(patches, "add", "/a", value)
    value.append(3)
    assert patches == [{"op": "add", "path": "/a", "value": [1, 2]}]


def test_add_patch_without_value():
    patches = []
    add_patch(patches, PatchOperation.REMOVE, "/a")
    assert patches == [{"op": "remove", "path": "/a"}]


def test_add_patch_rejects_bad_arguments():
    with pytest.raises(TypeError):
        add_patch(None, "add", "/a", 1)
    with pytest.raises(TypeError):
        add_patch([], "add", None, 1)
    with pytest.raises(TypeError):
        add_patch([], None, "/a", 1)


def test_generate_object_patches():
    patches = generate_patches({"a": 1, "b": 2}, {"b": 3, "c": 4})
    assert patches == [
        {"op": "remove", "path": "/a"},
        {"op": "replace", "path": "/b", "value": 3},
        {"op": "add", "path": "/c", "value": 4},
    ]


def test_generate_array_shrink():
    assert generate_patches([1, 2, 3], [1]) == [
        {"op": "remove", "path": "/1"},
        {"op": "remove", "path": "/1"},
    ]


def test_generate_array_grow():
    assert generate_patches([1], [1, 2, 3]) == [
        {"op": "add", "path": "/-", "value": 2},
        {"op": "add", "path": "/-", "value": 3},
    ]


def test_generate_escapes_keys():
    assert generate_patches({"a/b": 1}, {"a/b": 2}) == [
        {"op": "replace", "path": "/a~1b", "value": 2}
    ]


def test_generate_type_change_and_equal_values():
    assert generate_patches({"a": True}, {"a": False}) == [
        {"op": "replace", "path": "/a", "value": False}
    ]
    assert generate_patches({"a": 1}, {"a": 1.0}) == []


def test_generate_root_replace():
    assert generate_patches([1], {"a": 1}) == [
        {"op": "replace", "path": "", "value": {"a": 1}}
    ]


def test_generate_does_not_touch_inputs():
    source = {"b": 1, "a": 2}
    target = {"c": [1], "a": 3}
    generate_patches(source, target)
    assert list(source) == ["b", "a"]
    assert list(target) == ["c", "a"]


def test_generated_patch_values_are_copies():
    target = {"a": [1]}
    patches = generate_patches({}, target)
    target["a"].append(2)
    assert patches == [{"op": "add", "path": "/a", "value": [1]}]