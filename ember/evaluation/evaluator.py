"""Core evaluator for ember.

Literals evaluate to themselves, variables evaluate whatever expression they are
bound to, and function calls are dispatched by name to a native implementation
that receives its arguments unevaluated. There is no special-form layer: `if`,
`let` and `define` are ordinary entries of the function table that happen to
evaluate their arguments selectively.
"""

from __future__ import annotations

import logging

from ember.types.environment import Environment
from ember.types.expression import Expression, FnCall, Var

logger = logging.getLogger(__name__)


def evaluate(expr: Expression, env: Environment) -> Expression:
    """Evaluate `expr` in `env`.

    Each nested evaluation counts against env.max_depth, so a binding that
    refers back to itself fails with EmberRecursionLimit instead of exhausting
    the Python stack.
    """
    env.enter()
    try:
        match expr:
            case Var(name=name):
                return evaluate(env.lookup_var(name), env)
            case FnCall(name=name, args=args):
                fn = env.lookup_fn(name)
                logger.debug("call %s with %d argument(s)", name, len(args))
                return fn(args, env, evaluate)

        # --- Atoms return as-is ---
        return expr
    finally:
        env.leave()
