import logging
import sys
from typing import Any

from opentelemetry import trace
from pythonjsonlogger import jsonlogger

# Chatty libraries whose INFO output duplicates the request log
QUIET_LOGGERS = ("uvicorn.access", "urllib3", "botocore", "pymongo")


class OTelJSONFormatter(jsonlogger.JsonFormatter):
    """JSON log lines, tagged with the active OpenTelemetry trace and span ids."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["level"] = str(log_record.get("level") or record.levelname).upper()

        ctx = trace.get_current_span().get_span_context()
        if ctx.is_valid:
            log_record["trace_id"] = trace.format_trace_id(ctx.trace_id)
            log_record["span_id"] = trace.format_span_id(ctx.span_id)


def setup_logging(level: str = "INFO") -> None:
    """Send every log record to stdout as one JSON object per line."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        OTelJSONFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"asctime": "timestamp", "levelname": "level"},
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
