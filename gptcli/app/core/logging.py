"""
Structured logging with command context.

Logs go to stderr (and optionally a file) so they never interleave with the
command output written to stdout.
"""

import json
import logging
import sys
from pathlib import Path
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

# Context variables for invocation-scoped data
command_ctx: ContextVar[str | None] = ContextVar("command", default=None)
endpoint_ctx: ContextVar[str | None] = ContextVar("endpoint", default=None)

PLAIN_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
PLAIN_DATEFMT = "%Y-%m-%d %H:%M:%S"


class JSONFormatter(logging.Formatter):
    """One JSON object per record, tagged with the running command."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "ts": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for key, var in (("command", command_ctx), ("endpoint", endpoint_ctx)):
            value = var.get()
            if value:
                log_data[key] = value

        data = getattr(record, "extra_data", None)
        if data is not None:
            log_data["data"] = data

        return json.dumps(log_data, default=str, ensure_ascii=False)


class ContextLogger(logging.LoggerAdapter):
    """Adapter so call sites can write ``logger.info(msg, data={...})``."""

    def process(
        self, msg: str, kwargs: dict[str, Any]
    ) -> tuple[str, dict[str, Any]]:
        if "data" in kwargs:
            kwargs.setdefault("extra", {})["extra_data"] = kwargs.pop("data")
        return msg, kwargs


def _formatter(json_output: bool) -> logging.Formatter:
    if json_output:
        return JSONFormatter()
    return logging.Formatter(PLAIN_FORMAT, datefmt=PLAIN_DATEFMT)


def setup_logging(
    level: str = "WARNING", json_output: bool = False, log_file: str | None = None
) -> None:
    """
    Configure CLI logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: If True, output JSON; if False, output plain text
        log_file: Optional path that receives a copy of every record
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(getattr(logging, level.upper()))
    handler.setFormatter(_formatter(json_output))
    root_logger.addHandler(handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(getattr(logging, level.upper()))
        file_handler.setFormatter(_formatter(json_output))
        root_logger.addHandler(file_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str) -> ContextLogger:
    return ContextLogger(logging.getLogger(name), {})
