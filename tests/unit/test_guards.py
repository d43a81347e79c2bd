import pytest

from treepath_lib.errors import BigIntegerNotAllowedError, InvalidTypeError
from treepath_lib.handle import JsonManager
from treepath_lib.options import JsonOptions
from treepath_lib.values import MAX_SAFE_INTEGER


@pytest.fixture
def manager():
    return JsonManager({
        "num": 5,
        "flt": 2.5,
        "str": "5",
        "bool": True,
        "null": None,
        "obj": {"k": [1]},
        "arr": [1, "a"],
        "bad_obj": {"k": (1, 2)},
    })


def test_exact_kind_reads(manager):
    assert manager.get_as_number("num") == 5
    assert manager.get_as_number("flt") == 2.5
    assert manager.get_as_string("str") == "5"
    assert manager.get_as_boolean("bool") is True
    assert manager.get_as_mapping("obj") == {"k": [1]}
    assert manager.get_as_sequence("arr") == [1, "a"]
    assert manager.get("num").get_as_number() == 5
    assert manager.get_as("obj", "k", 0) == 1


@pytest.mark.parametrize("method,key", [
    ("get_as_number", "str"),
    ("get_as_number", "bool"),
    ("get_as_number", "null"),
    ("get_as_number", "missing"),
    ("get_as_string", "num"),
    ("get_as_boolean", "num"),
    ("get_as_mapping", "arr"),
    ("get_as_sequence", "obj"),
    ("get_as_mapping", "bad_obj"),
])
def test_mismatch_raises(manager, method, key):
    with pytest.raises(InvalidTypeError):
        getattr(manager, method)(key)


def test_error_carries_value_and_kind(manager):
    with pytest.raises(InvalidTypeError) as exc:
        manager.get_as_number("str")
    assert exc.value.value == "5"
    assert exc.value.kind == "string"
    assert str(exc.value) == 'Unexpected value "5" (type: string) detected.'
    # also usable as a plain TypeError
    assert isinstance(exc.value, TypeError)


def test_nullable_variants(manager):
    assert manager.get_as_nullable_number("null") is None
    assert manager.get_as_nullable_number("num") == 5
    assert manager.get_as_nullable_string("null") is None
    assert manager.get_as_nullable_boolean("null") is None
    assert manager.get_as_nullable_mapping("null") is None
    assert manager.get_as_nullable_sequence("null") is None
    with pytest.raises(InvalidTypeError):
        manager.get_as_nullable_number("str")
    # absent is not null
    with pytest.raises(InvalidTypeError):
        manager.get_as_nullable_number("missing")


def test_with_default_only_covers_absence(manager):
    assert manager.get_as_number_with_default(0, "missing") == 0
    assert manager.get_as_number_with_default(0, "num") == 5
    with pytest.raises(InvalidTypeError):
        manager.get_as_number_with_default(0, "str")
    assert manager.get_as_string_with_default("d", "missing", "deeper") == "d"
    assert manager.get_as_boolean_with_default(False, "missing") is False
    assert manager.get_as_mapping_with_default({}, "missing") == {}
    assert manager.get_as_sequence_with_default([], "missing") == []
    assert manager.get_as_nullable_string_with_default("d", "null") is None
    assert manager.get_as_nullable_number_with_default(1, "missing") == 1
    with pytest.raises(InvalidTypeError):
        manager.get_as_nullable_boolean_with_default(False, "str")


def test_handle_without_keys_uses_own_route():
    m = JsonManager({"a": "5"})
    with pytest.raises(InvalidTypeError):
        m.get("a").get_as_number()
    assert m.get("b").get_as_number_with_default(0) == 0
    with pytest.raises(InvalidTypeError):
        m.get("a").get_as_number_with_default(0)


def test_big_integer_requires_capability():
    m = JsonManager({"n": 1})
    with pytest.raises(BigIntegerNotAllowedError):
        m.get_as_big_integer("n")
    with pytest.raises(BigIntegerNotAllowedError):
        m.get_as_number_or_big_integer_with_default(0, "n")


def test_big_integer_reads():
    big = MAX_SAFE_INTEGER * 10
    m = JsonManager({"big": big, "small": 3, "flt": 1.5, "null": None}, options=JsonOptions(allow_big_integer=True))
    assert m.get_as_big_integer("big") == big
    assert m.get_as_big_integer("small") == 3
    with pytest.raises(InvalidTypeError):
        m.get_as_big_integer("flt")
    # a big integer is not a plain number
    with pytest.raises(InvalidTypeError):
        m.get_as_number("big")
    assert m.get_as_number_or_big_integer("big") == big
    assert m.get_as_number_or_big_integer("flt") == 1.5
    assert m.get_as_nullable_big_integer("null") is None
    assert m.get_as_big_integer_with_default(7, "missing") == 7
    assert m.get_as_nullable_number_or_big_integer_with_default(7, "null") is None
    assert m.get_as_nullable_big_integer_with_default(7, "missing") == 7
    assert m.get_as_nullable_number_or_big_integer("small") == 3
    assert m.get_as_number_or_big_integer_with_default(0, "missing") == 0


def test_large_ints_read_as_numbers_without_big_integers():
    m = JsonManager({"n": 2 ** 60, "l": [12345678901234567890]})
    assert m.get_as_number("n") == 2 ** 60
    assert m.get_as_nullable_number_with_default(0, "l", 0) == 12345678901234567890
    assert m.get_as_sequence("l") == [12345678901234567890]


def test_container_guards_accept_large_ints_either_way():
    big = MAX_SAFE_INTEGER + 1
    plain = JsonManager({"l": [big]})
    assert plain.get_as_sequence("l") == [big]
    allowed = JsonManager({"l": [big]}, options=JsonOptions(allow_big_integer=True))
    assert allowed.get_as_sequence("l") == [big]
