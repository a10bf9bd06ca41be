from ember import EvaluatorFn
from ember.errors import EmberArityError
from ember.types.environment import Environment
from ember.types.expression import Expression, VOID


def let_form(
    tail: tuple[Expression, ...],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Expression:
    """
    let(name, value)
    Binds the evaluated value to name, overwriting any previous binding. Unlike the
    parameters of a defined function, let is never rejected as shadowing.
    """
    if len(tail) != 2:
        raise EmberArityError("let requires exactly 2 arguments: let(name, value)")

    name = tail[0].as_var()
    value = evaluate_fn(tail[1], env)
    env.set_var(name, value)
    return VOID
