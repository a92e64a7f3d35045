import json
import logging

from app.logging import JsonFormatter, MaskingFilter, RequestIdFilter


def _record(msg, level=logging.INFO, name="bookstore.test"):
    return logging.LogRecord(name, level, __file__, 1, msg, None, None)


def test_request_id_header_and_propagation(client):
    resp = client.get("/__log", headers={"X-Request-ID": "my-fixed-id-123"})
    assert resp.status_code == 200
    assert resp.headers.get("X-Request-ID") == "my-fixed-id-123"


def test_request_id_filter_reads_flask_g(app):
    from flask import g
    with app.test_request_context("/"):
        g.request_id = "rid-abc"
        record = _record("hello")
        assert RequestIdFilter().filter(record) is True
        assert record.request_id == "rid-abc"


def test_request_id_filter_outside_request():
    record = _record("hello")
    RequestIdFilter().filter(record)
    assert record.request_id == "n/a"


def test_sensitive_fields_masked_in_info(monkeypatch, caplog):
    monkeypatch.setenv("APP_ENV", "testing")
    caplog.set_level("INFO")
    caplog.handler.addFilter(MaskingFilter())
    logger = logging.getLogger("mask_test")
    logger.info({"event": "user_registered", "email": "user@example.com", "password": "hunter22", "user_id": 7})
    record = next(r for r in caplog.records if r.name == "mask_test")
    assert isinstance(record.msg, dict)
    assert record.msg["email"] == "[REDACTED]"
    assert record.msg["password"] == "[REDACTED]"
    assert record.msg["user_id"] == 7


def test_shipping_address_masked(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    record = _record({"event": "order_placed", "shipping_address": "1 Main Street, Springfield"}, level=logging.DEBUG)
    MaskingFilter().filter(record)
    assert record.msg["shipping_address"] == "[REDACTED]"


def test_sensitive_fields_visible_in_debug(monkeypatch, caplog):
    monkeypatch.setenv("APP_ENV", "development")
    caplog.set_level("DEBUG")
    caplog.handler.addFilter(MaskingFilter())
    logger = logging.getLogger("mask_test_debug")
    logger.debug({"password": "secret"})
    record = next(r for r in caplog.records if r.name == "mask_test_debug")
    assert isinstance(record.msg, dict)
    assert record.msg["password"] == "secret"


def test_json_formatter_merges_dict_messages():
    record = _record({"event": "order_placed", "order_id": 3})
    RequestIdFilter().filter(record)
    out = json.loads(JsonFormatter().format(record))
    assert out["event"] == "order_placed"
    assert out["order_id"] == 3
    assert out["level"] == "INFO"
    assert out["request_id"] == "n/a"
    assert "message" not in out


def test_json_formatter_includes_exception():
    try:
        raise ValueError("bad")
    except ValueError:
        import sys
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed %s", ("op",), sys.exc_info())
    out = json.loads(JsonFormatter().format(record))
    assert out["message"] == "failed op"
    assert "ValueError: bad" in out["exc_info"]


def test_nested_payloads_are_masked(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    record = _record({"event": "login", "user": {"id": 1, "email": "a@b.co"}, "tokens": [{"access_token": "x"}]})
    MaskingFilter().filter(record)
    assert record.msg["user"] == {"id": 1, "email": "[REDACTED]"}
    assert record.msg["tokens"] == [{"access_token": "[REDACTED]"}]
