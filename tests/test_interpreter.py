import pytest

from ember.errors import (
    EmberHostError,
    EmberOutOfMemory,
    EmberSyntaxError,
    EmberUnknownFn,
    EmberUnknownVariable,
)
from ember.interpreter import Interpreter
from ember.types.expression import VOID, FnCall, Int, String, Var
from ember.types.scope import Scope


def test_run_results(interp):
    assert interp.run("") is VOID
    assert interp.run("1") == Int(1)
    assert interp.run("1 'two'") == [Int(1), String("two")]


def test_run_stops_at_syntax_error_after_earlier_expressions(interp, output):
    with pytest.raises(EmberSyntaxError) as err:
        interp.run("echo(1) f(1,)", "chat")
    assert output == ["1"]
    assert err.value.parse_error.location.col == 12
    assert str(err.value) == "chat:1:13: error: tried to parse function argument as a ')'"


def test_run_stops_at_first_evaluation_error(interp, output):
    with pytest.raises(EmberUnknownFn):
        interp.run("echo(1) missing() echo(2)")
    assert output == ["1"]


def test_parse_yields_expressions(interp):
    assert list(interp.parse("a(b) 1")) == [FnCall("a", [Var("b")]), Int(1)]
    with pytest.raises(EmberSyntaxError):
        list(interp.parse(")"))


def test_eval_single_expression(interp):
    assert interp.eval(FnCall("add", [Int(1), Int(2)])) == Int(3)


def test_execute_returns_user_facing_text(interp, output):
    assert interp.execute("echo('ok')") is None
    assert output == ["ok"]
    assert interp.execute("missing()") == "error: found unknown function"
    assert interp.execute("nobody") == "error: found unknown variable"
    assert interp.execute("add('a')") == "error: found invalid cast"
    assert interp.execute("gt(1)") == "error: invalid number of arguments were supplied"
    assert interp.execute("f(1,)") == "1:5: error: tried to parse function argument as a ')'"


def test_execute_does_not_hide_resource_exhaustion(interp):
    interp.env.scratch = Scope("scratch", limit=4)
    with pytest.raises(EmberOutOfMemory):
        interp.execute("repeat('ab', 3)")


def test_scratch_is_reset_after_each_expression(interp):
    interp.env.scratch = Scope("scratch", limit=8)
    # each repeat fits on its own; together they would not
    interp.run("repeat('ab', 3) repeat('ab', 3)")
    assert interp.env.scratch.used == 0


def test_vars(interp):
    interp.set_var("author", "ana")
    interp.set_var("count", 3)
    interp.set_var("expr", FnCall("add", [Int(1)]))
    assert interp.get_var("author") == String("ana")
    assert interp.get_var("count") == Int(3)
    assert interp.run("expr") == Int(1)
    with pytest.raises(TypeError):
        interp.set_var("bad", 1.5)
    with pytest.raises(EmberUnknownVariable):
        interp.get_var("nobody")


def test_host_function(interp):
    def shout(args, env, evaluate_fn):
        return String(evaluate_fn(args[0], env).as_string().upper())

    interp.register("shout", shout)
    interp.set_var("name", "ana")
    assert interp.run("shout(name)") == String("ANA")


def test_host_function_returning_none_is_void(interp):
    interp.register("nothing", lambda args, env, evaluate_fn: None)
    assert interp.run("nothing()") is VOID


def test_host_function_errors_are_wrapped(interp):
    def broken(args, env, evaluate_fn):
        raise ValueError("boom")

    interp.register("broken", broken)
    with pytest.raises(EmberHostError) as err:
        interp.run("broken()")
    assert isinstance(err.value.__cause__, ValueError)
    assert interp.execute("broken()") == "error: a host function failed"


def test_host_function_must_return_expressions(interp):
    interp.register("raw", lambda args, env, evaluate_fn: 5)
    with pytest.raises(EmberHostError):
        interp.run("raw()")


def test_host_function_ember_errors_pass_through(interp):
    interp.register("strict", lambda args, env, evaluate_fn: evaluate_fn(args[0], env).as_int())
    with pytest.raises(EmberUnknownVariable):
        interp.run("strict(nobody)")


def test_without_builtins():
    with Interpreter(output=lambda text: None, builtins=False) as it:
        with pytest.raises(EmberUnknownFn):
            it.run("echo(1)")


def test_default_output_is_stdout(capsys):
    with Interpreter() as it:
        it.run("echo('hi')")
    assert capsys.readouterr().out == "hi\n"


def test_close_ends_the_session(output):
    with Interpreter(output=output.append) as it:
        it.run("let(x, 1) define(f, args(), 1)")
    assert not it.env.vars
    assert not it.env.functions
    assert len(it.env.arena) == 0


def test_eval_resets_scratch_between_top_level_expressions(interp, output):
    interp.env.scratch = Scope("scratch", limit=1000)
    for _ in range(200):
        interp.eval(FnCall("echo", [String("x" * 10)]))
        assert len(interp.env.scratch) == 0
        assert interp.env.scratch.used == 0
    assert len(output) == 200


def test_nested_eval_from_host_keeps_outer_buffers(interp, output):
    def inner(args, env, evaluate_fn):
        interp.eval(FnCall("echo", [String("in")]))
        # the enclosing echo's buffer is still alive
        return String(str(len(env.scratch)))

    interp.register("inner", inner)
    interp.run('echo("out", inner())')
    assert output == ["in", "out1"]
    assert len(interp.env.scratch) == 0
