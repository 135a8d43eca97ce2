"""
leafmint.logger
~~~~~~~~~~~~~~~
Human-readable *and* JSON issuance logs with daily rotation.

Library code only emits through :class:`IssuanceLogger`; handlers are
installed once by :func:`configure_logging` (see ``main.py``).
"""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

LOGGER_NAME = "leafmint"

_ISO = "%Y-%m-%dT%H:%M:%SZ"

def _now() -> str:  # RFC-3339 without microseconds
    return datetime.now(tz=timezone.utc).strftime(_ISO)


class _PlainFormatter(logging.Formatter):
    """ e.g. 2026-10-18T15:07:02Z issued example.com serial=1f3a... 212 ms """

    def format(self, record):  # type: ignore[override]
        d: Dict[str, Any] = record.msg if isinstance(record.msg, dict) else {}
        if not d:
            return super().format(record)

        parts = [d.get("ts", _now()), d.get("event", "-"), d.get("host", "-")]
        if d.get("event") == "issued":
            parts.extend([f'serial={d.get("serial", "-")}', f'{d.get("ms", 0)} ms'])
        elif d.get("event") == "issue_fail":
            parts.extend([d.get("category", "-"), d.get("error", "")])
        return " ".join(parts)


class _JSONFormatter(logging.Formatter):
    def format(self, record):  # type: ignore[override]
        if isinstance(record.msg, dict):
            return json.dumps(record.msg, separators=(",", ":"))
        return json.dumps({"ts": _now(), "msg": record.getMessage()}, separators=(",", ":"))


def configure_logging(basename: str | Path, console: bool = True) -> logging.Logger:
    root = logging.getLogger(LOGGER_NAME)
    root.setLevel(logging.INFO)
    root.propagate = False  # don't spam the root logger

    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    basename = Path(basename).with_suffix("")  # leafmint
    jsonl_file = basename.with_suffix(".jsonl")

    # json lines
    h = logging.handlers.TimedRotatingFileHandler(
        jsonl_file, when="midnight", backupCount=7, encoding="utf-8"
    )
    h.setFormatter(_JSONFormatter())
    root.addHandler(h)

    if console:
        c = logging.StreamHandler()
        c.setFormatter(_PlainFormatter())
        root.addHandler(c)

    return root


class IssuanceLogger:
    def __init__(self, name: str = LOGGER_NAME):
        self.log = logging.getLogger(name)

    def request(self, host: str):
        self.log.info({"event": "request", "ts": _now(), "host": host})

    def issued(self, host: str, serial: int, duration_ms: int):
        self.log.info(
            {
                "event": "issued",
                "ts": _now(),
                "host": host,
                "serial": f"{serial:x}",
                "ms": duration_ms,
            }
        )

    def fail(self, host: str, category: str, error: str):
        self.log.error(
            {
                "event": "issue_fail",
                "ts": _now(),
                "host": host,
                "category": category,
                "error": error,
            }
        )
