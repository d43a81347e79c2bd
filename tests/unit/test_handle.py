import copy

import pytest

from treepath_lib.errors import EditReadonlyError, InvalidTypeError, RouteNotFoundError
from treepath_lib.handle import JsonManager, PathHandle
from treepath_lib.values import ABSENT, ValueKind


def test_quickstart_flow():
    m = JsonManager({})
    m.set("a", 2)
    m.set("b", 4)
    m.get("c").set("d", [])
    m.get("c", "d").add(6)
    assert m.data == {"a": 2, "b": 4, "c": {"d": [6]}}
    assert m.get("c", "d", 0).get_value() == 6


def test_get_is_lazy_and_extends_route():
    m = JsonManager({})
    h = m.get("a", 0)
    assert isinstance(h, PathHandle)
    assert h.route == ("a", 0)
    assert h.get("b").route == ("a", 0, "b")
    assert m["a"][0].route == ("a", 0)
    # nothing was created by deriving handles
    assert m.data == {}


def test_get_value_reads_and_reports_absence():
    m = JsonManager({"a": [1, {"b": None}]})
    assert m.get_value() == {"a": [1, {"b": None}]}
    assert m.get("a", 1, "b").get_value() is None
    assert m.get("a").get_value(1, "b") is None
    assert m.get("a", 5).get_value() is ABSENT
    assert m.get("a", "x").get_value() is ABSENT
    assert m.get("a", 0, "deeper").get_value() is ABSENT


def test_handles_share_the_root():
    m = JsonManager({})
    h1 = m.get("x")
    h2 = m.get("x")
    h1.set("k", 1)
    assert h2.get_value() == {"k": 1}
    assert m.data == {"x": {"k": 1}}


def test_set_auto_vivifies_and_replaces_conflicting_kinds():
    m = JsonManager({})
    m.get("a", 0).set("b", "v")
    assert m.data == {"a": [{"b": "v"}]}

    m = JsonManager({"0": "x"})
    m.set(0, "v")
    assert m.data == ["v"]


def test_setitem_and_set_here():
    m = JsonManager({})
    m["a"] = 1
    m.get("b", "c").set_here(True)
    assert m.data == {"a": 1, "b": {"c": True}}
    m.set_here([1, 2])
    assert m.data == [1, 2]


def test_add_builds_sequence_in_order():
    m = JsonManager({})
    m.get("list").add(1).add(2)
    assert m.data == {"list": [1, 2]}


def test_add_discards_non_sequence_value():
    m = JsonManager({"list": {"a": 1}, "s": "text"})
    m.get("list").add("x")
    m.get("s").add(None)
    assert m.data == {"list": ["x"], "s": [None]}


def test_has_and_exists_never_raise():
    m = JsonManager({"a": {"b": 1, "n": None}, "s": "text", "l": [0]})
    assert m.has("a", "b") is True
    assert m.has("a", "n") is True
    assert m.has("a", "n", "x") is False
    assert m.has("s", "x") is False
    assert m.has("missing", "x", 0) is False
    assert m.has("l", "0") is False
    assert m.has("l", 0) is True
    assert m.get("a").has("b") is True
    assert "a" in m
    assert "zzz" not in m
    assert m.get("a", "b").exists() is True
    assert m.get("a", "zzz").exists() is False
    assert m.get("s", "x", "y").has("z") is False


def test_create_path():
    m = JsonManager({})
    assert m.get("a", "b").create_path() is True
    assert m.data == {"a": {"b": None}}
    assert m.get("a", "b").create_path() is False
    assert m.get("a", "b").create_path(ValueKind.SEQUENCE) is True
    assert m.data == {"a": {"b": []}}


def test_delete():
    m = JsonManager({"a": [1, 2, 3], "b": {"c": 1}})
    assert m.get("a").delete(0) is True
    del m["b"]
    assert m.data == {"a": [2, 3]}
    assert m.delete("b") is False
    with pytest.raises(RouteNotFoundError):
        del m["b"]
    with pytest.raises(KeyError):
        del m["b"]


def test_iteration_helpers_over_sequence():
    m = JsonManager({"items": [{"n": 1}, {"n": 2}, {"n": 3}]})
    items = m.get("items")
    assert items.map(lambda h: h.get_value("n")) == [1, 2, 3]
    assert [h.route for h in items] == [("items", 0), ("items", 1), ("items", 2)]
    found = items.find(lambda h: h.get_value("n") == 2)
    assert found is not None and found.route == ("items", 1)
    assert items.find(lambda h: h.get_value("n") == 9) is None
    assert [h.route[-1] for h in items.filter(lambda h: h.get_value("n") != 2)] == [0, 2]
    seen = []
    items.for_each(lambda h: seen.append(h.get_as_number("n")))
    assert seen == [1, 2, 3]


def test_iteration_over_mapping_keeps_insertion_order():
    m = JsonManager({"z": 1, "a": 2, "m": 3})
    assert m.keys() == ["z", "a", "m"]
    assert m.map(lambda h: h.route[-1]) == ["z", "a", "m"]


def test_children_can_be_written_through():
    m = JsonManager({"items": [1, 2]})
    m.get("items").for_each(lambda h: h.set_here(h.get_value() * 10))
    assert m.data == {"items": [10, 20]}


@pytest.mark.parametrize("value", ["text", 3, None, True])
def test_iteration_over_non_container_fails_loudly(value):
    m = JsonManager({"x": value})
    with pytest.raises(InvalidTypeError):
        m.get("x").map(lambda h: h)
    with pytest.raises(InvalidTypeError):
        m.get("x").for_each(lambda h: None)
    with pytest.raises(InvalidTypeError):
        list(m.get("x"))


def test_iteration_over_absent_route_fails_loudly():
    m = JsonManager({})
    with pytest.raises(InvalidTypeError) as exc:
        m.get("missing").keys()
    assert exc.value.kind == "absent"


def test_as_mapping_and_as_sequence():
    m = JsonManager({"o": {}, "l": []})
    assert m.get("o").as_mapping().route == ("o",)
    assert m.get("l").as_sequence().route == ("l",)
    with pytest.raises(InvalidTypeError):
        m.get("o").as_sequence()
    with pytest.raises(InvalidTypeError):
        m.get("l").as_mapping()


def test_reset_path_returns_new_root_handle():
    m = JsonManager({"a": {"b": 1}})
    h = m.get("a", "b")
    root = h.reset_path()
    assert root.route == ()
    # the original handle keeps its own route
    assert h.route == ("a", "b")
    assert root.get_value() is m.data
    assert m.reset_path().route == ()


def test_detach_copies_the_subtree():
    m = JsonManager({"a": {"b": [1, 2]}}, fast_mode=True)
    detached = m.get("a").detach()
    assert isinstance(detached, JsonManager)
    assert detached.data == {"b": [1, 2]}
    assert detached.fast_mode is True
    detached.get("b").add(3)
    assert m.data == {"a": {"b": [1, 2]}}
    m.get("a", "b").add(9)
    assert detached.data == {"b": [1, 2, 3]}


def test_detach_absent_raises():
    m = JsonManager({})
    with pytest.raises(RouteNotFoundError):
        m.get("nope").detach()


def test_readonly_rejects_every_mutation():
    original = {"a": {"b": [1]}, "s": "x"}
    m = JsonManager(copy.deepcopy(original), readonly=True)
    attempts = [
        lambda: m.set("a", 1),
        lambda: m.get("a").set("new", 1),
        lambda: m.get("a", "b").add(2),
        lambda: m.get("missing", 0, "deep").set_here(1),
        lambda: m.get("missing", "path").create_path(),
        lambda: m.get("a").delete("b"),
        lambda: m.get("a").__setitem__("c", 1),
        lambda: setattr(m, "data", {}),
    ]
    for attempt in attempts:
        with pytest.raises(EditReadonlyError):
            attempt()
    assert m.data == original
    # derived handles inherit the flag
    assert m.get("a").readonly is True
    # reading still works
    assert m.get_as_string("s") == "x"


def test_readonly_detach_stays_readonly():
    m = JsonManager({"a": {}}, readonly=True)
    with pytest.raises(EditReadonlyError):
        m.get("a").detach().set("x", 1)


def test_data_setter_replaces_root():
    m = JsonManager({"a": 1})
    m.data = [1]
    assert m.get_value(0) == 1
