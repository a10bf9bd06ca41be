"""Runtime environment for ember.

The Environment holds the two binding tables of a session, variables and
functions, together with the session's memory scopes, the output sink used by
echo/log, and the evaluation depth budget.

Variables are macro-style: a name is bound to an expression, and every reference
evaluates that expression again. There is a single flat table per session; the
functions created by define bind their parameters into it temporarily.
"""

from __future__ import annotations

from io import StringIO
from typing import Callable, Optional

from ember import NativeCallable
from ember.config import get_arena_limit, get_scratch_limit, get_max_eval_depth
from ember.errors import (
    EmberUnknownVariable,
    EmberUnknownFn,
    EmberShadowing,
    EmberRecursionLimit,
)
from ember.types.expression import Expression
from ember.types.native_fn import NativeFn
from ember.types.scope import Scope

OutputFn = Callable[[str], None]

_MISSING = object()


class Environment:
    __slots__ = (
        "vars",
        "functions",
        "arena",
        "scratch",
        "output",
        "max_depth",
        "depth",
    )

    def __init__(
        self,
        *,
        arena: Optional[Scope] = None,
        scratch: Optional[Scope] = None,
        output: Optional[OutputFn] = None,
        max_depth: Optional[int] = None,
    ):
        self.vars: dict[str, Expression] = {}
        self.functions: dict[str, NativeFn] = {}
        self.arena: Scope = arena if arena is not None else Scope("arena", get_arena_limit())
        self.scratch: Scope = scratch if scratch is not None else Scope("scratch", get_scratch_limit())
        self.output: OutputFn = output if output is not None else print
        self.max_depth: int = max_depth if max_depth is not None else get_max_eval_depth()
        self.depth: int = 0

    # --- Variables ---
    def set_var(self, name: str, value: Expression) -> None:
        """Bind `name` to `value`, replacing any previous binding."""
        if not isinstance(value, Expression):
            raise TypeError(f"Cannot bind {name} to non-expression {value!r}")
        self.vars[name] = value

    def has_var(self, name: str) -> bool:
        return name in self.vars

    def lookup_var(self, name: str) -> Expression:
        """Return the (unevaluated) expression bound to `name`.

        Raises EmberUnknownVariable if the name is not bound.
        """
        try:
            return self.vars[name]
        except KeyError:
            raise EmberUnknownVariable(f"Cannot lookup unbound variable {name}") from None

    def bind_var(self, name: str, value: Expression) -> None:
        """Bind `name` only if it is free; raises EmberShadowing otherwise."""
        if name in self.vars:
            raise EmberShadowing(f"{name} is already bound in the calling scope")
        self.vars[name] = value

    def unbind_var(self, name: str) -> None:
        """Remove a binding made by bind_var. The binding must exist."""
        if self.vars.pop(name, _MISSING) is _MISSING:
            raise RuntimeError(f"binding {name} vanished before it could be removed")

    # --- Functions ---
    def register(self, name: str, fn: NativeCallable, host: bool = False) -> NativeFn:
        """Install `fn` under `name`, replacing any previous implementation."""
        native = fn if isinstance(fn, NativeFn) else NativeFn(name, fn, host=host)
        self.functions[name] = native
        return native

    def lookup_fn(self, name: str) -> NativeFn:
        try:
            return self.functions[name]
        except KeyError:
            raise EmberUnknownFn(f"Cannot call unknown function {name}") from None

    # --- Evaluation ---
    def eval(self, expr: Expression) -> Expression:
        # Lazy import; the evaluator depends on this module
        from ember.evaluation.evaluator import evaluate
        return evaluate(expr, self)

    def enter(self) -> None:
        if self.depth >= self.max_depth:
            raise EmberRecursionLimit(
                f"evaluation exceeded the maximum depth of {self.max_depth}"
            )
        self.depth += 1

    def leave(self) -> None:
        self.depth -= 1

    def emit(self, text: str) -> None:
        self.output(text)

    # --- Lifetime ---
    def reset_scratch(self) -> None:
        self.scratch.reset()

    def close(self) -> None:
        """Release the binding tables and both scopes (end of session)."""
        self.vars.clear()
        self.functions.clear()
        self.scratch.reset()
        self.arena.reset()
        self.depth = 0

    def _write_vars(self, buffer: StringIO) -> None:
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {v!r}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vars(buffer)
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment vars=")
            self._write_vars(buffer)
            buffer.write(f" functions={len(self.functions)} {self.arena!r} {self.scratch!r}>")
            return buffer.getvalue()
