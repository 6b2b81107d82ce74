import pytest

from dcflags import _settings


def test_key_value_delimiter_context() -> None:
    assert _settings.options["key_value_delimiter"] == "="
    with _settings.key_value_delimiter_context(":"):
        assert _settings.options["key_value_delimiter"] == ":"
    assert _settings.options["key_value_delimiter"] == "="


def test_key_value_delimiter_context_restores_on_error() -> None:
    with pytest.raises(RuntimeError):
        with _settings.key_value_delimiter_context(":"):
            raise RuntimeError()
    assert _settings.options["key_value_delimiter"] == "="


def test_read_option(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PYTHON_DCFLAGS_TEST_OPTION", "::")
    assert _settings.read_option("PYTHON_DCFLAGS_TEST_OPTION", "=") == "::"
    monkeypatch.delenv("PYTHON_DCFLAGS_TEST_OPTION")
    assert _settings.read_option("PYTHON_DCFLAGS_TEST_OPTION", "=") == "="
