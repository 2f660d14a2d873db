import pytest
from pydantic import ValidationError as PydanticValidationError

from core import config
from core.config import AppSettings, write_user_env_vars


def test_defaults():
    settings = AppSettings(_env_file=None)
    assert settings.api_base_url == "http://localhost:8080"
    assert settings.api_prefix == "/api/v1beta1/distributions"
    assert settings.http_timeout_seconds == 30.0
    assert settings.newest_first is True
    assert settings.log_level == "WARNING"


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("CDNVALIDATOR_API_BASE_URL", "https://cdn.example.com/")
    monkeypatch.setenv("CDNVALIDATOR_NEWEST_FIRST", "false")
    monkeypatch.setenv("CDNVALIDATOR_LOG_LEVEL", "debug")

    settings = AppSettings(_env_file=None)

    assert settings.api_base_url == "https://cdn.example.com"
    assert settings.newest_first is False
    assert settings.log_level == "DEBUG"


def test_env_file_is_read(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("CDNVALIDATOR_HTTP_TIMEOUT_SECONDS=7.5\n", encoding="utf-8")

    settings = AppSettings(_env_file=env_file)

    assert settings.http_timeout_seconds == 7.5


@pytest.mark.parametrize("field, value", [("http_timeout_seconds", 0), ("log_level", "LOUD")])
def test_invalid_values_are_rejected(field, value):
    with pytest.raises(PydanticValidationError):
        AppSettings(_env_file=None, **{field: value})


def test_write_user_env_vars_merges_existing_values(tmp_path):
    env_path = tmp_path / "cfg" / ".env"
    write_user_env_vars({"CDNVALIDATOR_API_BASE_URL": "http://a"}, env_path=env_path)
    write_user_env_vars({"CDNVALIDATOR_HTTP_TIMEOUT_SECONDS": "10"}, env_path=env_path)

    lines = env_path.read_text(encoding="utf-8").splitlines()

    assert lines[0].startswith("#")
    assert "CDNVALIDATOR_API_BASE_URL=http://a" in lines
    assert "CDNVALIDATOR_HTTP_TIMEOUT_SECONDS=10" in lines


def test_user_config_dir_honours_xdg(monkeypatch, tmp_path):
    monkeypatch.setattr(config.sys, "platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert config.get_user_config_dir() == tmp_path / "cdnvalidator-panel"
