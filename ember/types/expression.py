"""The expression tree shared by the parser and the interpreter.

An Expression is one of a closed set of variants:

    - Void      the unit result (singleton VOID)
    - Int       unsigned 64-bit integer
    - String    text
    - Var       reference to a binding, resolved at evaluation time
    - FnCall    named call with unevaluated argument expressions

Trees are immutable and acyclic. Equality is structural and syntactic: it
compares the unevaluated trees, so Var("a") never equals String("a").
"""

from __future__ import annotations

from typing import Iterable

from ember.errors import EmberInvalidCast, EmberInvalidArgumentValue

U64_MAX = (1 << 64) - 1


class Expression:
    __slots__ = ()

    # --- Typed accessors ---
    def as_int(self) -> int:
        raise EmberInvalidCast(f"expected an int, got {self!r}")

    def as_string(self) -> str:
        raise EmberInvalidCast(f"expected a string, got {self!r}")

    def as_var(self) -> str:
        raise EmberInvalidCast(f"expected a variable, got {self!r}")

    def as_fn_call(self) -> FnCall:
        raise EmberInvalidCast(f"expected a function call, got {self!r}")

    def as_bool(self) -> bool:
        """Booleans are the strings "true" and "false"."""
        text = self.as_string()
        if text == "true":
            return True
        if text == "false":
            return False
        raise EmberInvalidArgumentValue(f'expected "true" or "false", got {text!r}')

    # --- Equality ---
    def _key(self) -> tuple:
        raise NotImplementedError

    def eql(self, other: Expression) -> bool:
        return eql(self, other)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Expression) and eql(self, other)

    def __ne__(self, other: object) -> bool:
        return not self == other

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._key()))


class VoidType(Expression):
    __slots__ = ()
    _instance: VoidType | None = None

    def __new__(cls) -> VoidType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def _key(self) -> tuple:
        return ()

    def __repr__(self) -> str:
        return "Void"

    def __bool__(self) -> bool:
        return False


VOID = VoidType()


class Int(Expression):
    __slots__ = ("value",)

    def __init__(self, value: int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Int expects an int, got {type(value).__name__}")
        if not 0 <= value <= U64_MAX:
            raise ValueError(f"{value} does not fit in an unsigned 64-bit integer")
        self.value: int = value

    def as_int(self) -> int:
        return self.value

    def _key(self) -> tuple:
        return (self.value,)

    def __repr__(self) -> str:
        return f"Int({self.value})"


class String(Expression):
    __slots__ = ("text",)

    def __init__(self, text: str):
        if not isinstance(text, str):
            raise TypeError(f"String expects a str, got {type(text).__name__}")
        self.text: str = text

    def as_string(self) -> str:
        return self.text

    def _key(self) -> tuple:
        return (self.text,)

    def __repr__(self) -> str:
        return f"String({self.text!r})"


class Var(Expression):
    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name: str = name

    def as_var(self) -> str:
        return self.name

    def _key(self) -> tuple:
        return (self.name,)

    def __repr__(self) -> str:
        return f"Var({self.name!r})"


class FnCall(Expression):
    __slots__ = ("name", "args")

    def __init__(self, name: str, args: Iterable[Expression] = ()):
        self.name: str = name
        self.args: tuple[Expression, ...] = tuple(args)

    def as_fn_call(self) -> FnCall:
        return self

    def _key(self) -> tuple:
        return (self.name, self.args)

    def __repr__(self) -> str:
        return f"FnCall({self.name!r}, {list(self.args)!r})"


def eql(a: Expression, b: Expression) -> bool:
    """Structural equality: same variant, and recursively the same contents."""
    if a is b:
        return True
    if type(a) is not type(b):
        return False
    # FnCall args are tuples of Expressions, so this recurses through __eq__
    return a._key() == b._key()


TRUE = String("true")
FALSE = String("false")


def boolean(flag: bool) -> String:
    return TRUE if flag else FALSE


def from_python(value: object) -> Expression:
    """Wrap a host value: str -> String, int -> Int, None -> VOID."""
    if isinstance(value, Expression):
        return value
    if value is None:
        return VOID
    if isinstance(value, str):
        return String(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return Int(value)
    raise TypeError(f"Cannot convert {type(value).__name__} to an expression")
