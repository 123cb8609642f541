# Copyright 2025 CNOE Contributors
# SPDX-License-Identifier: Apache-2.0

"""Logging utilities for the Grafana dashboards client.

This module provides JSON logging for structured log collection and a plain
text fallback for interactive use.
"""

import json
import logging
from datetime import datetime, timezone

PLAIN_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


def _utc_timestamp(created: float) -> str:
    stamp = datetime.fromtimestamp(created, tz=timezone.utc)
    return stamp.strftime("%Y-%m-%dT%H:%M:%S.") + f"{stamp.microsecond // 1000:03d}Z"


def _exception_fields(exc_info) -> dict:
    exc_type, exc_value, _ = exc_info
    return {
        "type": exc_type.__name__ if exc_type else None,
        "value": str(exc_value) if exc_value else None,
    }


class JSONFormatter(logging.Formatter):
    """Render each record as a single JSON object.

    Request context passed with ``extra=`` (method, path, status) is grouped
    under ``context``. The rendered traceback stays in ``message``.
    """

    def __init__(self, service_name: str = "grafana-dashboards"):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        # base Formatter appends exc_text and stack_info to the message
        entry = {
            "timestamp": _utc_timestamp(record.created),
            "service": self.service_name,
            "level": record.levelname,
            "logger": record.name,
            "message": super().format(record),
            "source": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        if record.exc_info:
            entry["exception"] = _exception_fields(record.exc_info)

        context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        }
        if context:
            entry["context"] = context

        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(
    level: int = logging.WARNING,
    json_format: bool = False,
    service_name: str = "grafana-dashboards",
) -> None:
    """
    Configure logging for the package.

    Args:
        level: The minimum logging level to display (default: WARNING)
        json_format: Emit JSON records instead of plain text
        service_name: Name of the service for JSON log entries
    """
    handler = logging.StreamHandler()
    if json_format:
        handler.setFormatter(JSONFormatter(service_name=service_name))
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))

    package_logger = logging.getLogger("grafana_dashboards")
    package_logger.setLevel(level)
    package_logger.handlers = [handler]
    package_logger.propagate = False

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
