from __future__ import annotations

import json
import logging
import re

from ulidkit.identifier import Ulid
from ulidkit.logging import ConsoleLogFormatter, JsonLogFormatter, log_context, setup_logging
from ulidkit.settings import Settings

TIMESTAMP_PATTERN = r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z"


def _record(message: str, **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="ulidkit.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_console_formatter_appends_sorted_extras() -> None:
    line = ConsoleLogFormatter().format(_record("ulidkit.test.event", policy="fast", count=3, seed=None))

    assert re.match(rf"^{TIMESTAMP_PATTERN} INFO  ulidkit\.test ulidkit\.test\.event ", line)
    assert line.endswith("count=3 policy=fast seed=null")


def test_console_formatter_without_extras() -> None:
    line = ConsoleLogFormatter().format(_record("plain"))
    assert line.endswith("ulidkit.test plain")


def test_json_formatter_payload() -> None:
    ulid = Ulid.parse("01ARZ3NDEKTSV4RRFFQ69G5FAV")
    payload = json.loads(JsonLogFormatter().format(_record("ulidkit.test.event", **log_context(ulid=ulid, count=2))))

    assert re.fullmatch(TIMESTAMP_PATTERN, payload["timestamp"])
    assert payload["level"] == "INFO"
    assert payload["service"] == "ulidkit"
    assert payload["logger"] == "ulidkit.test"
    assert payload["message"] == "ulidkit.test.event"
    assert payload["ulid"] == "01ARZ3NDEKTSV4RRFFQ69G5FAV"
    assert payload["count"] == 2


def test_json_formatter_stringifies_unknown_values() -> None:
    payload = json.loads(JsonLogFormatter().format(_record("event", ulid=Ulid(0))))
    assert payload["ulid"] == "0" * 26


def test_log_context_skips_missing_ulid() -> None:
    assert log_context(count=1) == {"count": 1}
    assert log_context(ulid=Ulid(0)) == {"ulid": "0" * 26}


def test_setup_logging_is_idempotent() -> None:
    setup_logging(Settings(_env_file=None, log_level="debug"))
    setup_logging(Settings(_env_file=None, log_level="info", log_format="json"))

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, JsonLogFormatter)
    assert root.level == logging.INFO
