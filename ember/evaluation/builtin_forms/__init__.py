"""Builtin function table for ember.

Every builtin is an ordinary entry of the function table. Like any native
function it receives its arguments unevaluated, so conditionals and binding forms
need no special treatment by the evaluator.
"""

from __future__ import annotations

from dataclasses import dataclass

from ember import NativeCallable
from ember.types.environment import Environment
from ember.evaluation.builtin_forms.echo_form import echo_form
from ember.evaluation.builtin_forms.if_form import if_form
from ember.evaluation.builtin_forms.logic_forms import eql_form, not_form, and_form
from ember.evaluation.builtin_forms.compare_forms import gt_form, gte_form, ls_form, lse_form
from ember.evaluation.builtin_forms.arithmetic_forms import add_form
from ember.evaluation.builtin_forms.let_form import let_form
from ember.evaluation.builtin_forms.repeat_form import repeat_form
from ember.evaluation.builtin_forms.do_form import do_form
from ember.evaluation.builtin_forms.define_form import define_form


@dataclass(frozen=True)
class Builtin:
    name: str
    fn: NativeCallable
    signature: str


BUILTINS: tuple[Builtin, ...] = (
    Builtin("echo", echo_form, "echo(value, ...)"),
    Builtin("log", echo_form, "log(value, ...)"),
    Builtin("if", if_form, "if(cond, then, else)"),
    Builtin("eql", eql_form, "eql(a, b)"),
    Builtin("not", not_form, "not(cond)"),
    Builtin("and", and_form, "and(cond, ...)"),
    Builtin("gt", gt_form, "gt(a, b)"),
    Builtin("gte", gte_form, "gte(a, b)"),
    Builtin("ls", ls_form, "ls(a, b)"),
    Builtin("lse", lse_form, "lse(a, b)"),
    Builtin("add", add_form, "add(n, ...)"),
    Builtin("let", let_form, "let(name, value)"),
    Builtin("repeat", repeat_form, "repeat(body, n)"),
    Builtin("do", do_form, "do(expr, ...)"),
    Builtin("define", define_form, "define(name, args(param, ...), body)"),
)


def register_builtins(env: Environment) -> None:
    """Install the builtin table into `env`, replacing same-named functions."""
    for b in BUILTINS:
        env.register(b.name, b.fn)
