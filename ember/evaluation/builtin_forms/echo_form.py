import logging

from ember import EvaluatorFn
from ember.errors import EmberArityError, EmberInvalidCast
from ember.types.environment import Environment
from ember.types.expression import Expression, Int, String, VOID

logger = logging.getLogger(__name__)


def echo_form(
    tail: tuple[Expression, ...],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Expression:
    """
    echo(a, b, ...) / log(a, b, ...)
    Evaluates every argument, joins ints (as decimal) and strings into one line and
    sends it to the environment's output sink. Any other value is an invalid cast.
    """
    if not tail:
        raise EmberArityError("echo requires at least 1 argument")

    buffer = env.scratch.buffer()
    try:
        for arg in tail:
            val = evaluate_fn(arg, env)
            match val:
                case Int(value=n):
                    buffer.write(str(n))
                case String(text=s):
                    buffer.write(s)
                case _:
                    raise EmberInvalidCast(f"echo cannot print {val!r}")
        text = buffer.getvalue()
    finally:
        env.scratch.release(buffer)

    logger.debug("echo %r", text)
    env.emit(text)
    return VOID
