from ember import EvaluatorFn
from ember.errors import EmberArityError
from ember.types.environment import Environment
from ember.types.expression import Expression, String, VOID


def repeat_form(
    tail: tuple[Expression, ...],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Expression:
    """
    repeat(body, n)
    Evaluates n first, then body n times. String results are concatenated and
    returned; results of any other variant are dropped without complaint. Returns
    VOID when nothing was accumulated.
    """
    if len(tail) != 2:
        raise EmberArityError("repeat requires exactly 2 arguments: repeat(body, n)")

    n = evaluate_fn(tail[1], env).as_int()

    buffer = env.scratch.buffer()
    try:
        for _ in range(n):
            res = evaluate_fn(tail[0], env)
            if isinstance(res, String):
                buffer.write(res.text)
        text = buffer.getvalue() if len(buffer) else None
    finally:
        env.scratch.release(buffer)

    if text is None:
        return VOID
    return String(text)
