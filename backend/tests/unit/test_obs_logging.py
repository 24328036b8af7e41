import json
import logging

from techconnect.obs import logging as obs_logging


def _record(**extra):
    record = logging.LogRecord("techconnect.test", logging.INFO, __file__, 1, "announcement.create", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_json_with_bound_context():
    tokens = obs_logging.bind_context(request_id="req-1", user_id="u-9")
    try:
        line = obs_logging.JSONLogFormatter().format(_record(club="iet"))
    finally:
        obs_logging.reset_context(tokens)

    payload = json.loads(line)
    assert payload["msg"] == "announcement.create"
    assert payload["request_id"] == "req-1"
    assert payload["user_id"] == "u-9"
    assert payload["club"] == "iet"
    assert obs_logging.current_request_id() is None


def test_formatter_redacts_sensitive_fields():
    payload = json.loads(
        obs_logging.JSONLogFormatter().format(_record(password="hunter22", token="abc", email="a@b.c"))
    )
    assert payload["password"] == "[redacted]"
    assert payload["token"] == "[redacted]"
    assert payload["email"] == "[redacted]"


def test_formatter_truncates_long_values():
    payload = json.loads(obs_logging.JSONLogFormatter().format(_record(note="x" * 1000)))
    assert len(payload["note"]) <= 257
