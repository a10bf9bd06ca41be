import pytest
from hypothesis import given, strategies as st

from ember.errors import EmberInvalidCast, EmberInvalidArgumentValue
from ember.types.expression import (
    FALSE,
    TRUE,
    VOID,
    FnCall,
    Int,
    String,
    U64_MAX,
    Var,
    VoidType,
    boolean,
    eql,
    from_python,
)


def test_void_is_a_singleton():
    assert VoidType() is VOID
    assert not VOID
    assert repr(VOID) == "Void"


@pytest.mark.parametrize("value", [-1, U64_MAX + 1])
def test_int_range(value):
    with pytest.raises(ValueError):
        Int(value)


@pytest.mark.parametrize("value", [True, "1", 1.0])
def test_int_rejects_non_ints(value):
    with pytest.raises(TypeError):
        Int(value)


def test_accessors():
    assert Int(3).as_int() == 3
    assert String("s").as_string() == "s"
    assert Var("v").as_var() == "v"
    call = FnCall("f", [Int(1)])
    assert call.as_fn_call() is call
    assert call.args == (Int(1),)


@pytest.mark.parametrize(
    "expr, accessor",
    [
        (String("3"), "as_int"),
        (Int(3), "as_string"),
        (String("x"), "as_var"),
        (Var("f"), "as_fn_call"),
        (VOID, "as_int"),
    ],
)
def test_accessor_variant_mismatch(expr, accessor):
    with pytest.raises(EmberInvalidCast):
        getattr(expr, accessor)()


def test_booleans():
    assert TRUE.as_bool() is True
    assert FALSE.as_bool() is False
    assert boolean(True) == String("true")
    with pytest.raises(EmberInvalidArgumentValue):
        String("yes").as_bool()
    with pytest.raises(EmberInvalidCast):
        Int(1).as_bool()


@pytest.mark.parametrize(
    "a, b, equal",
    [
        (VOID, VOID, True),
        (Int(1), Int(1), True),
        (Int(1), Int(2), False),
        (String("a"), Var("a"), False),
        (String("1"), Int(1), False),
        (FnCall("f", []), FnCall("f", []), True),
        (FnCall("f", []), FnCall("g", []), False),
        (FnCall("f", [Int(1)]), FnCall("f", [Int(1), Int(1)]), False),
        (FnCall("f", [FnCall("g", [Var("x")])]), FnCall("f", [FnCall("g", [Var("x")])]), True),
        (FnCall("f", [FnCall("g", [Var("x")])]), FnCall("f", [FnCall("g", [Var("y")])]), False),
    ],
)
def test_structural_equality(a, b, equal):
    assert eql(a, b) is equal
    assert a.eql(b) is equal
    assert (a == b) is equal
    if equal:
        assert hash(a) == hash(b)


@given(st.integers(min_value=0, max_value=U64_MAX), st.text())
def test_eql_is_reflexive(n, s):
    for expr in (Int(n), String(s), FnCall("f", [Int(n), String(s)])):
        assert eql(expr, expr)


def test_from_python():
    assert from_python("hi") == String("hi")
    assert from_python(5) == Int(5)
    assert from_python(None) is VOID
    assert from_python(Var("x")) == Var("x")
    with pytest.raises(TypeError):
        from_python(1.5)
    with pytest.raises(TypeError):
        from_python(False)
