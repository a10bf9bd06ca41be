import pytest

from ember import config
from ember.types.environment import Environment


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, 7),
        ("", 7),
        ("12", 12),
        (" 3 ", 3),
        ("not-a-number", 7),
        ("-4", 7),
    ],
)
def test_int_from_env(monkeypatch, raw, expected):
    if raw is None:
        monkeypatch.delenv("EMBER_TEST_VALUE", raising=False)
    else:
        monkeypatch.setenv("EMBER_TEST_VALUE", raw)
    assert config.int_from_env("EMBER_TEST_VALUE", 7) == expected


def test_defaults(monkeypatch):
    for var in ("EMBER_MAX_EVAL_DEPTH", "EMBER_MAX_PARSE_DEPTH", "EMBER_SCRATCH_LIMIT", "EMBER_ARENA_LIMIT"):
        monkeypatch.delenv(var, raising=False)
    assert config.get_max_eval_depth() == 150
    assert config.get_max_parse_depth() == 200
    assert config.get_scratch_limit() == 1 << 20
    assert config.get_arena_limit() is None


def test_zero_disables_scope_limits(monkeypatch):
    monkeypatch.setenv("EMBER_SCRATCH_LIMIT", "0")
    assert config.get_scratch_limit() is None


def test_zero_depth_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("EMBER_MAX_EVAL_DEPTH", "0")
    assert config.get_max_eval_depth() == 150


def test_environment_reads_config(monkeypatch):
    monkeypatch.setenv("EMBER_MAX_EVAL_DEPTH", "20")
    monkeypatch.setenv("EMBER_ARENA_LIMIT", "64")
    env = Environment()
    assert env.max_depth == 20
    assert env.arena.limit == 64
