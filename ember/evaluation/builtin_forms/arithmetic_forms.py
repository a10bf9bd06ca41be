from ember import EvaluatorFn
from ember.errors import EmberArityError
from ember.types.environment import Environment
from ember.types.expression import Expression, Int, U64_MAX


def add_form(tail: tuple[Expression, ...], env: Environment, evaluate_fn: EvaluatorFn) -> Expression:
    """Return the sum of all arguments, wrapping around like a u64."""
    if not tail:
        raise EmberArityError("add requires at least 1 argument")

    total = 0
    for expr in tail:
        total = (total + evaluate_fn(expr, env).as_int()) & U64_MAX
    return Int(total)
