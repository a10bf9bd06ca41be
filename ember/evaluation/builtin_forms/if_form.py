from ember import EvaluatorFn
from ember.errors import EmberArityError
from ember.types.environment import Environment
from ember.types.expression import Expression


def if_form(
    tail: tuple[Expression, ...],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Expression:
    if len(tail) != 3:
        raise EmberArityError("if requires a condition, a then-expression and an else-expression")

    cond = evaluate_fn(tail[0], env).as_bool()

    # Only the taken branch is evaluated
    if cond:
        return evaluate_fn(tail[1], env)
    return evaluate_fn(tail[2], env)
