import logging

from ember import EvaluatorFn
from ember.errors import EmberArityError, EmberInvalidArgumentName, EmberInvalidCast
from ember.types.environment import Environment
from ember.types.expression import Expression, FnCall, Var, VOID
from ember.types.native_fn import DefinedFn

logger = logging.getLogger(__name__)


def _formal_names(params: Expression) -> tuple[str, ...]:
    if not isinstance(params, FnCall) or params.name != "args":
        raise EmberInvalidArgumentName(
            f"define expects its parameters as args(p1, ...), got {params!r}"
        )

    names: list[str] = []
    for p in params.args:
        if not isinstance(p, Var):
            raise EmberInvalidArgumentName(f"parameter {p!r} is not a name")
        if p.name in names:
            raise EmberInvalidArgumentName(f"parameter {p.name} appears more than once")
        names.append(p.name)
    return tuple(names)


def define_form(
    tail: tuple[Expression, ...],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Expression:
    """
    define(name, args(p1, ...), body)
    Registers a function called name. Each call binds p1... to the unevaluated call
    arguments, evaluates body, and unbinds them again. The function is kept in the
    arena scope, so it survives until the session ends.
    """
    if len(tail) != 3:
        raise EmberArityError("define requires exactly 3 arguments: define(name, args(...), body)")

    try:
        name = tail[0].as_var()
    except EmberInvalidCast:
        raise EmberInvalidArgumentName(f"function name must be a bare name, got {tail[0]!r}") from None

    formals = _formal_names(tail[1])
    fn = DefinedFn(name, formals, tail[2])
    env.arena.keep(fn, fn.size)
    env.register(name, fn)
    logger.debug("defined %r", fn)
    return VOID
