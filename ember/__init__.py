# Core type aliases for ember's data model.
# Expressions are used both as code (parser output, unevaluated arguments) and as
# values (evaluator output). The closed set of variants lives in
# ember.types.expression; the aliases below only describe the callables that
# move expressions around.

from typing import Any, Callable

__version__ = "0.3.0"

# Evaluator function type: handed to native functions so they can evaluate
# their (unevaluated) arguments on demand, as often as they like.
EvaluatorFn = Callable[..., Any]

# Native function type: fn(args, env, evaluate_fn) -> Expression
NativeCallable = Callable[..., Any]
