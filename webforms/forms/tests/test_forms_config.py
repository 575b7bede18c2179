import pytest
from pydantic import ValidationError

from webforms.forms.config import FormsConfig


def test_defaults(monkeypatch):
    for name in (
        "MULTIPART_SPOOL_MAX_SIZE",
        "MULTIPART_MAX_FILES",
        "MULTIPART_MAX_FIELDS",
        "LOG_CONFIG_PATH",
    ):
        monkeypatch.delenv(name, raising=False)

    config = FormsConfig(_env_file=None)

    assert config.MULTIPART_SPOOL_MAX_SIZE == 2048
    assert config.MULTIPART_MAX_FILES == 1000
    assert config.MULTIPART_MAX_FIELDS == 1000
    assert config.LOG_CONFIG_PATH == "config/forms_log.yaml"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MULTIPART_SPOOL_MAX_SIZE", "0")
    monkeypatch.setenv("MULTIPART_MAX_FILES", "5")
    monkeypatch.setenv("LOG_CONFIG_PATH", "/etc/forms/log.yaml")

    config = FormsConfig(_env_file=None)

    assert config.MULTIPART_SPOOL_MAX_SIZE == 0
    assert config.MULTIPART_MAX_FILES == 5
    assert config.LOG_CONFIG_PATH == "/etc/forms/log.yaml"


def test_rejects_invalid_limits(monkeypatch):
    monkeypatch.setenv("MULTIPART_MAX_FIELDS", "0")

    with pytest.raises(ValidationError):
        FormsConfig(_env_file=None)
