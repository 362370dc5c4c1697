import json
import logging

from crisp.core.logging import JSONFormatter, configure_logging, set_request_id


def make_record(msg="submission 1 created"):
    return logging.LogRecord("crisp.services.submissions", logging.INFO, __file__, 1, msg, None, None)


def test_configure_logging_returns_app_logger_with_json_handler():
    logger = configure_logging("WARNING")
    try:
        assert logger.name == "crisp"
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert any(isinstance(h.formatter, JSONFormatter) for h in root.handlers)
    finally:
        configure_logging("INFO")


def test_formatter_tags_records_with_request_id():
    record = make_record()
    set_request_id("abc123")
    try:
        line = JSONFormatter().format(record)
    finally:
        set_request_id(None)

    payload = json.loads(line)
    assert payload["request_id"] == "abc123"
    assert payload["msg"] == "submission 1 created"
    assert payload["logger"] == "crisp.services.submissions"
    assert payload["ts"] == round(record.created, 3)


def test_formatter_omits_request_id_outside_requests():
    payload = json.loads(JSONFormatter().format(make_record()))
    assert "request_id" not in payload
