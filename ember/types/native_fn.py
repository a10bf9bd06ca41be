"""Native function wrappers and functions created at runtime by define."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ember import EvaluatorFn, NativeCallable
from ember.errors import EmberError, EmberArityError, EmberHostError
from ember.types.expression import Expression, VOID

if TYPE_CHECKING:
    from ember.types.environment import Environment

logger = logging.getLogger(__name__)


class NativeFn:
    """A named entry in the function table.

    `fn(args, env, evaluate_fn)` receives the call's arguments unevaluated and
    decides itself what to evaluate. Any state the function needs is captured by
    the callable (a closure, or an object such as DefinedFn).

    Host functions (host=True) are held to the protocol: None becomes VOID, and
    foreign exceptions are wrapped in EmberHostError so the interpreter's error
    type stays closed.
    """

    __slots__ = ("name", "fn", "host")

    def __init__(self, name: str, fn: NativeCallable, host: bool = False):
        self.name: str = name
        self.fn: NativeCallable = fn
        self.host: bool = host

    def __call__(
        self, args: tuple[Expression, ...], env: Environment, evaluate_fn: EvaluatorFn
    ) -> Expression:
        if not self.host:
            return self.fn(args, env, evaluate_fn)

        try:
            result = self.fn(args, env, evaluate_fn)
        except (EmberError, MemoryError):
            raise
        except Exception as e:
            logger.warning("host function %s failed: %r", self.name, e)
            raise EmberHostError(f"{self.name}: {e}") from e

        if result is None:
            return VOID
        if not isinstance(result, Expression):
            raise EmberHostError(
                f"{self.name} returned {type(result).__name__}, expected an expression"
            )
        return result

    def __repr__(self) -> str:
        kind = "host" if self.host else "builtin"
        return f"<{kind} {self.name}>"


class DefinedFn:
    """A function created by define(name, args(p1, ...), body).

    Calling it binds each formal parameter to the matching actual argument
    (unevaluated) in the caller's variable table, evaluates the body, and then
    removes the bindings again whether or not the body succeeded. A formal that
    is already bound in the caller's table is rejected as shadowing.
    """

    __slots__ = ("name", "formals", "body")

    def __init__(self, name: str, formals: tuple[str, ...], body: Expression):
        self.name: str = name
        self.formals: tuple[str, ...] = formals
        self.body: Expression = body

    @property
    def size(self) -> int:
        return len(self.name) + sum(len(f) for f in self.formals)

    def __call__(
        self, args: tuple[Expression, ...], env: Environment, evaluate_fn: EvaluatorFn
    ) -> Expression:
        if len(args) != len(self.formals):
            raise EmberArityError(
                f"{self.name} expects {len(self.formals)} arguments, got {len(args)}"
            )

        bound: list[str] = []
        try:
            for formal, actual in zip(self.formals, args):
                env.bind_var(formal, actual)
                bound.append(formal)
            return evaluate_fn(self.body, env)
        finally:
            for formal in bound:
                env.unbind_var(formal)

    def __repr__(self) -> str:
        return f"<defined {self.name}({', '.join(self.formals)})>"
