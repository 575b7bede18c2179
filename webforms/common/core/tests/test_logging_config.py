import logging
import json
from webforms.common.core import logging_config, request_context


def _record(msg="Test message", **extra):
    record = logging.LogRecord(
        name="test_logger",
        level=logging.INFO,
        pathname="test_path.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_custom_json_formatter_includes_request_id():
    """Ensure the formatter includes the RequestID from context."""
    request_context.clear_request_id()
    req_id_str = request_context.generate_request_id()

    log_json = json.loads(logging_config.CustomJsonFormatter().format(_record()))

    assert log_json["message"] == "Test message"
    assert log_json["level"] == "INFO"
    assert log_json["logger"] == "test_logger"
    assert log_json.get("request_id") == req_id_str

    request_context.clear_request_id()


def test_custom_json_formatter_omits_request_id_outside_request():
    request_context.clear_request_id()

    log_json = json.loads(logging_config.CustomJsonFormatter().format(_record()))

    assert "request_id" not in log_json


def test_custom_json_formatter_includes_extra_fields():
    request_context.clear_request_id()

    record = _record(content_type="application/json", field_count=3)
    log_json = json.loads(logging_config.CustomJsonFormatter().format(record))

    assert log_json["content_type"] == "application/json"
    assert log_json["field_count"] == 3


def test_setup_logging_falls_back_to_basic_config(monkeypatch, tmp_path):
    calls = {}

    def fake_basic_config(**kwargs):
        calls.update(kwargs)

    monkeypatch.setattr(logging, "basicConfig", fake_basic_config)
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    logging_config.setup_logging(str(tmp_path / "missing.yml"))

    assert calls == {"level": "DEBUG"}


def test_setup_logging_substitutes_environment(monkeypatch, tmp_path):
    config_file = tmp_path / "logging.yml"
    config_file.write_text(
        """
version: 1
disable_existing_loggers: false
loggers:
  webforms.test:
    level: ${TEST_FORMS_LEVEL}
""",
        encoding="utf-8",
    )
    monkeypatch.setenv("TEST_FORMS_LEVEL", "WARNING")

    logging_config.setup_logging(str(config_file))

    assert logging.getLogger("webforms.test").level == logging.WARNING
