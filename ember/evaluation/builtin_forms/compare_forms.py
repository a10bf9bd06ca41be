from ember import EvaluatorFn
from ember.errors import EmberArityError
from ember.types.environment import Environment
from ember.types.expression import Expression, boolean


def _two_ints(
    name: str, tail: tuple[Expression, ...], env: Environment, evaluate_fn: EvaluatorFn
) -> tuple[int, int]:
    if len(tail) != 2:
        raise EmberArityError(f"{name} requires exactly 2 arguments")
    a = evaluate_fn(tail[0], env).as_int()
    b = evaluate_fn(tail[1], env).as_int()
    return a, b


def gt_form(tail: tuple[Expression, ...], env: Environment, evaluate_fn: EvaluatorFn) -> Expression:
    a, b = _two_ints("gt", tail, env, evaluate_fn)
    return boolean(a > b)


def gte_form(tail: tuple[Expression, ...], env: Environment, evaluate_fn: EvaluatorFn) -> Expression:
    a, b = _two_ints("gte", tail, env, evaluate_fn)
    return boolean(a >= b)


def ls_form(tail: tuple[Expression, ...], env: Environment, evaluate_fn: EvaluatorFn) -> Expression:
    a, b = _two_ints("ls", tail, env, evaluate_fn)
    return boolean(a < b)


def lse_form(tail: tuple[Expression, ...], env: Environment, evaluate_fn: EvaluatorFn) -> Expression:
    a, b = _two_ints("lse", tail, env, evaluate_fn)
    return boolean(a <= b)
