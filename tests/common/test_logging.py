from __future__ import annotations

import json
import logging

from s3util.common.logging import JsonFormatter, mask_secrets, setup_logging


def _record(message: str, *args, extra=None) -> logging.LogRecord:
    record = logging.LogRecord(
        name="s3util.storage",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=args,
        exc_info=None,
    )
    if extra is not None:
        record.extra = extra
    return record


def test_json_formatter_merges_extra():
    formatter = JsonFormatter()
    record = _record(
        "storage operation=%s", "create_bucket", extra={"bucket": "b", "status": "ok"}
    )

    payload = json.loads(formatter.format(record))

    assert payload == {
        "level": "INFO",
        "logger": "s3util.storage",
        "message": "storage operation=create_bucket",
        "bucket": "b",
        "status": "ok",
    }


def test_json_formatter_masks_sensitive_extra():
    formatter = JsonFormatter()
    record = _record("connect", extra={"secret_access_key": "hunter2", "region": "x"})

    payload = json.loads(formatter.format(record))

    assert payload["secret_access_key"] == "***"
    assert payload["region"] == "x"


def test_mask_secrets_nested():
    masked = mask_secrets(
        {"outer": [{"Password": "p"}, {"ok": 1}], "token": "t", "name": "n"}
    )

    assert masked == {
        "outer": [{"Password": "***"}, {"ok": 1}],
        "token": "***",
        "name": "n",
    }


def test_setup_logging_quiets_botocore():
    root = logging.getLogger()
    saved_level, saved_handlers = root.level, list(root.handlers)
    try:
        setup_logging("DEBUG", "plain")

        assert root.level == logging.DEBUG
        assert logging.getLogger("botocore").level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
