import pytest

from ember.interpreter import Interpreter
from ember.evaluation.builtin_forms import register_builtins
from ember.types.environment import Environment


@pytest.fixture
def output():
    return []


@pytest.fixture
def interp(output):
    # echo/log write into `output` instead of stdout
    with Interpreter(output=output.append) as it:
        yield it


@pytest.fixture
def env(output):
    env = Environment(output=output.append)
    register_builtins(env)
    return env
