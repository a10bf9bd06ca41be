from ember import EvaluatorFn
from ember.errors import EmberArityError
from ember.types.environment import Environment
from ember.types.expression import Expression, FALSE, TRUE, boolean


def eql_form(tail: tuple[Expression, ...], env: Environment, evaluate_fn: EvaluatorFn) -> Expression:
    """eql(a, b): "true" if both evaluate to structurally equal expressions."""
    if len(tail) != 2:
        raise EmberArityError("eql requires exactly 2 arguments")
    a = evaluate_fn(tail[0], env)
    b = evaluate_fn(tail[1], env)
    return boolean(a.eql(b))


def not_form(tail: tuple[Expression, ...], env: Environment, evaluate_fn: EvaluatorFn) -> Expression:
    if len(tail) != 1:
        raise EmberArityError("not requires exactly 1 argument")
    return boolean(not evaluate_fn(tail[0], env).as_bool())


def and_form(tail: tuple[Expression, ...], env: Environment, evaluate_fn: EvaluatorFn) -> Expression:
    """Short-circuiting logical AND.

    and(a, b, c, ...) evaluates each operand left-to-right; the first "false"
    stops evaluation and is returned. Every operand has to be "true" or "false".
    """
    if not tail:
        raise EmberArityError("and requires at least 1 argument")

    for expr in tail:
        if not evaluate_fn(expr, env).as_bool():
            return FALSE
    return TRUE
