"""
Logging for homeharness.

Scenario runs interleave harness, device and asset-origin messages, so every
record emitted inside `scenario_context` carries the scenario name and
attempt number: as JSON fields with HOMEHARNESS_LOG_JSON=1, or as a
`[name#attempt]` tag in the text format. `info_with` and friends attach
further fields to a single record.
"""
import json
import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional

_scenario_fields: ContextVar[Dict[str, Any]] = ContextVar("homeharness_scenario_fields", default={})


@contextmanager
def scenario_context(**fields) -> Iterator[Dict[str, Any]]:
    """Attach `fields` to every record logged from this thread until exit. Nests."""
    merged = {**_scenario_fields.get(), **fields}
    token = _scenario_fields.set(merged)
    try:
        yield merged
    finally:
        _scenario_fields.reset(token)


def current_scenario_fields() -> Dict[str, Any]:
    return dict(_scenario_fields.get())


def _record_fields(record: logging.LogRecord) -> Dict[str, Any]:
    # Per-call fields win over the surrounding scenario context
    fields = current_scenario_fields()
    fields.update(getattr(record, "extra_fields", None) or {})
    return fields


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        log_data.update(_record_fields(record))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ScenarioTextFormatter(logging.Formatter):
    """Plain text with a `[scenario#attempt]` tag while a scenario is running."""

    def __init__(self):
        super().__init__(
            "[%(asctime)s] %(levelname)s %(name)s%(scenario_tag)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        fields = _record_fields(record)
        scenario = fields.get("scenario")
        if scenario is None:
            record.scenario_tag = ""
        elif "attempt" in fields:
            record.scenario_tag = f" [{scenario}#{fields['attempt']}]"
        else:
            record.scenario_tag = f" [{scenario}]"
        return super().format(record)


class StructuredLogger(logging.Logger):
    def _log_with_fields(self, level: int, msg: str, fields: Optional[Dict[str, Any]] = None, **kwargs):
        if not self.isEnabledFor(level):
            return
        extra = kwargs.get("extra", {})
        extra["extra_fields"] = fields or {}
        kwargs["extra"] = extra
        super()._log(level, msg, (), **kwargs)

    def info_with(self, msg: str, **fields):
        self._log_with_fields(logging.INFO, msg, fields)

    def error_with(self, msg: str, **fields):
        self._log_with_fields(logging.ERROR, msg, fields)

    def warning_with(self, msg: str, **fields):
        self._log_with_fields(logging.WARNING, msg, fields)

    def debug_with(self, msg: str, **fields):
        self._log_with_fields(logging.DEBUG, msg, fields)


logging.setLoggerClass(StructuredLogger)


def setup_logging(
    level: Optional[str] = None,
    json_format: Optional[bool] = None,
    log_file: Optional[str] = None
):
    """
    Configure the root logger for a harness run.

    Arguments win over HOMEHARNESS_LOG_LEVEL, HOMEHARNESS_LOG_JSON and
    HOMEHARNESS_LOG_FILE. A log file always gets JSON lines so runs can be
    diffed and grepped by scenario.
    """
    level = level or os.environ.get("HOMEHARNESS_LOG_LEVEL", "INFO")
    json_format = json_format if json_format is not None else os.environ.get("HOMEHARNESS_LOG_JSON", "0") == "1"
    log_file = log_file or os.environ.get("HOMEHARNESS_LOG_FILE")

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(JSONFormatter() if json_format else ScenarioTextFormatter())
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)

    # The asset origin runs uvicorn per attempt; its startup chatter drowns scenario logs
    for name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> StructuredLogger:
    return logging.getLogger(name)
