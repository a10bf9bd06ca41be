from __future__ import annotations

import logging
from typing import Iterator, Optional, Union

from ember import NativeCallable
from ember.errors import EmberEvalError, EmberSyntaxError
from ember.evaluation.builtin_forms import register_builtins
from ember.reader.parser import ParseError, Parser
from ember.types.environment import Environment, OutputFn
from ember.types.expression import Expression, VOID, from_python
from ember.types.native_fn import NativeFn

logger = logging.getLogger(__name__)

RunResult = Union[Expression, list[Expression]]


class Interpreter:
    """
    Host-facing session: owns an Environment (binding tables, memory scopes,
    output sink) and drives parse/evaluate over source text.
    """

    def __init__(self, output: Optional[OutputFn] = None, *, builtins: bool = True):
        self.env: Environment = Environment(output=output)
        if builtins:
            register_builtins(self.env)

    # --- Host surface ---
    def register(self, name: str, fn: NativeCallable) -> NativeFn:
        """Register a host function `fn(args, env, evaluate_fn)` under `name`."""
        return self.env.register(name, fn, host=True)

    def set_var(self, name: str, value: Union[Expression, str, int]) -> None:
        if not isinstance(value, Expression):
            value = from_python(value)
        self.env.set_var(name, value)

    def get_var(self, name: str) -> Expression:
        return self.env.lookup_var(name)

    # --- Reading and evaluation ---
    def parse(self, code: str, source_name: Optional[str] = None) -> Iterator[Expression]:
        """Yield the top-level expressions of `code`.

        Raises EmberSyntaxError on the first ParseError, after every expression
        before it has been yielded.
        """
        for res in Parser(code, source_name).parse_all():
            if isinstance(res, ParseError):
                logger.warning("syntax error: %s", res)
                raise EmberSyntaxError(res)
            logger.debug("parsed %r", res)
            yield res

    def eval(self, expr: Expression) -> Expression:
        """Evaluate one top-level expression.

        The scratch scope is reset afterwards, unless this call is nested inside
        another evaluation (a host function calling back into the interpreter).
        """
        try:
            return self.env.eval(expr)
        finally:
            if self.env.depth == 0:
                self.reset_scratch()

    def reset_scratch(self) -> None:
        self.env.reset_scratch()
        logger.debug("scratch scope reset")

    def run(self, code: str, source_name: Optional[str] = None) -> RunResult:
        results: list[Expression] = []
        for expr in self.parse(code, source_name):
            results.append(self.eval(expr))
        if not results:
            return VOID
        if len(results) == 1:
            return results[0]
        return results

    def execute(self, code: str, source_name: Optional[str] = None) -> Optional[str]:
        """Run `code` for a chat host.

        Returns None on success, otherwise the text to show the user: the
        formatted parse error, or the evaluation error's user message.
        EmberOutOfMemory is not caught.
        """
        try:
            self.run(code, source_name)
        except EmberSyntaxError as e:
            return e.parse_error.format()
        except EmberEvalError as e:
            logger.info("evaluation failed: %s", e)
            return e.user_message
        return None

    # --- Lifetime ---
    def close(self) -> None:
        self.env.close()

    def __enter__(self) -> Interpreter:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
