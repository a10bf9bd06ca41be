from __future__ import annotations

from typing import Optional

from ember.types.expression import Expression, FnCall, Int, String, Var, VoidType

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
COLOR_VAR = "\033[94m"
COLOR_FN = "\033[92m"
COLOR_BUILTIN = "\033[90m"
COLOR_INT = "\033[95m"
COLOR_STRING = "\033[93m"
COLOR_VOID = "\033[36m"

# ----------------- Defaults -----------------
DEFAULT_OPTIONS = {
    "color_vars": True,
    "color_fns": True,
    "color_builtins": True,
    "color_literals": True,
}


def _quote(text: str) -> str:
    # No escapes exist, so the quote must be one the text does not contain
    if '"' not in text:
        return f'"{text}"'
    if "'" not in text:
        return f"'{text}'"
    raise ValueError(f"string {text!r} contains both quote characters and cannot be written as source")


# ----------------- Source rendering -----------------
def to_source(expr: Expression) -> str:
    """Render `expr` as source text that parses back to an equal tree."""
    match expr:
        case Int(value=n):
            return str(n)
        case String(text=s):
            return _quote(s)
        case Var(name=name):
            return name
        case FnCall(name=name, args=args):
            return f"{name}({', '.join(to_source(a) for a in args)})"
        case VoidType():
            return "do()"
    raise TypeError(f"Cannot render {expr!r}")


# ----------------- Colorize utility -----------------
def colorize(
    expr: Expression,
    builtins: Optional[set[str]] = None,
    options: dict = DEFAULT_OPTIONS,
) -> str:
    """Like to_source, with ANSI colours per variant.

    Calls whose name is in `builtins` are coloured separately from other calls.
    """
    def paint(color: str, text: str, flag: str) -> str:
        return f"{color}{text}{RESET}" if options.get(flag, True) else text

    match expr:
        case Int():
            return paint(COLOR_INT, to_source(expr), "color_literals")
        case String():
            return paint(COLOR_STRING, to_source(expr), "color_literals")
        case Var(name=name):
            return paint(COLOR_VAR, name, "color_vars")
        case FnCall(name=name, args=args):
            if builtins and name in builtins:
                head = paint(COLOR_BUILTIN, name, "color_builtins")
            else:
                head = paint(COLOR_FN, name, "color_fns")
            inner = ", ".join(colorize(a, builtins, options) for a in args)
            return f"{head}({inner})"
        case VoidType():
            return paint(COLOR_VOID, "do()", "color_literals")
    raise TypeError(f"Cannot render {expr!r}")

