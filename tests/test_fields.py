import copy

from admincore.rpclog.fields import Fields


def test_constructor_sets_field():
    assert Fields("a", 1).values() == {"a": 1}


def test_empty_fields():
    assert Fields().values() == {}


def test_set_replaces_value():
    fields = Fields("a", 1)
    fields.set("a", 2)
    fields.set("b", 3)
    assert fields.values() == {"a": 2, "b": 3}


def test_merge_adds_and_overrides():
    fields = Fields("a", 1)
    fields.set("b", 2)
    fields.merge(Fields("b", 9))
    assert fields.values() == {"a": 1, "b": 9}


def test_merge_empty_changes_nothing():
    fields = Fields("a", 1)
    fields.merge(Fields())
    assert fields.values() == {"a": 1}


def test_values_is_a_copy():
    fields = Fields("a", 1)
    fields.values()["a"] = 5
    assert fields.values() == {"a": 1}


def test_copy_is_independent():
    original = Fields("a", 1)
    duplicate = copy.copy(original)
    duplicate.set("b", 2)
    assert original.values() == {"a": 1}
    assert duplicate.values() == {"a": 1, "b": 2}


def test_equality():
    assert Fields("a", 1) == Fields("a", 1)
    assert not Fields("a", 1) == Fields("a", 2)