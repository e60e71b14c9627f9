import pytest

from genmeta_backend import config
from genmeta_backend.utils import parse_bool


def test_env_int_default_when_unset(monkeypatch):
    monkeypatch.delenv("GENMETA_TEST_INT", raising=False)
    assert config._env_int(7, "GENMETA_TEST_INT") == 7


def test_env_int_invalid_falls_back(monkeypatch):
    monkeypatch.setenv("GENMETA_TEST_INT", "lots")
    assert config._env_int(7, "GENMETA_TEST_INT") == 7


def test_env_int_is_clamped(monkeypatch):
    monkeypatch.setenv("GENMETA_TEST_INT", "5")
    assert config._env_int(4096, "GENMETA_TEST_INT", min_value=1024) == 1024


def test_env_float_first_name_wins(monkeypatch):
    monkeypatch.setenv("GENMETA_TEST_A", "2.5")
    monkeypatch.setenv("GENMETA_TEST_B", "9")
    assert config._env_float(1.0, "GENMETA_TEST_A", "GENMETA_TEST_B") == 2.5


def test_env_bool(monkeypatch):
    monkeypatch.setenv("GENMETA_TEST_BOOL", "off")
    assert config._env_bool(True, "GENMETA_TEST_BOOL") is False
    monkeypatch.delenv("GENMETA_TEST_BOOL")
    assert config._env_bool(True, "GENMETA_TEST_BOOL") is True


@pytest.mark.parametrize(
    "value,expected",
    [("yes", True), ("Disabled", False), ("1.0", True), ("0", False), ("maybe", None), (3, True)],
)
def test_parse_bool(value, expected):
    if expected is None:
        assert parse_bool(value, default=True) is True
        assert parse_bool(value, default=False) is False
    else:
        assert parse_bool(value) is expected


def test_defaults_are_sane():
    assert config.MAX_DECOMPRESSED_SIZE >= 1024
    assert config.FETCH_TIMEOUT_SECONDS > 0


def test_debug_flag_accepts_extended_truthy_values(monkeypatch):
    monkeypatch.setenv("GENMETA_DEBUG", "enabled")
    assert config._env_bool(False, "GENMETA_DEBUG") is True
