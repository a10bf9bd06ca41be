from ember import EvaluatorFn
from ember.types.environment import Environment
from ember.types.expression import Expression, VOID


def do_form(
    tail: tuple[Expression, ...],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Expression:
    for e in tail:
        evaluate_fn(e, env)
    return VOID
