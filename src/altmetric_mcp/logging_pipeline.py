"""Structured JSON logging for the server process.

Records are written to stderr because stdout carries the stdio transport.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime, timezone
from queue import Full, Queue
from typing import Final, Iterable

from typing_extensions import override

LOGGER = logging.getLogger(__name__)

REDACTED: Final[str] = "***"

# Context keys whose values are never written out.
SENSITIVE_KEYS: Final[frozenset[str]] = frozenset(
    {"key", "api_key", "secret", "api_secret", "token", "password"}
)

# Third-party loggers that write request URLs, and with them the `key` query
# parameter, at INFO.
_URL_LOGGERS: Final[tuple[str, ...]] = ("httpx", "httpcore")

_RESERVED_KEYS: tuple[str, ...] = (
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
    "message",
)


def redact(context: dict[str, object]) -> dict[str, object]:
    """Return ``context`` with credential-like values replaced."""

    return {
        key: REDACTED if key.lower() in SENSITIVE_KEYS else value
        for key, value in context.items()
    }


class JsonFormatter(logging.Formatter):
    """Render log records as single-line JSON with redacted context."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - inherited
        exception_text: str | None = None
        if record.exc_info:
            exception_text = self.formatException(record.exc_info)
        elif record.exc_text:
            exception_text = record.exc_text

        context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_KEYS
        }

        payload: dict[str, object] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "context": redact(context),
        }
        if exception_text:
            payload["exception"] = exception_text

        return json.dumps(payload, default=str)


class BoundedQueueHandler(logging.handlers.QueueHandler):
    """Queue handler that drops records when the queue is full."""

    @override
    def enqueue(self, record: logging.LogRecord) -> None:
        try:
            self.queue.put_nowait(record)
        except Full:
            self.handleError(record)

    @override
    def handleError(self, record: logging.LogRecord) -> None:
        return


def configure_logging(
    logger: logging.Logger | None = None,
    *,
    level: int | str = logging.INFO,
    json_output: bool = True,
) -> logging.handlers.QueueListener:
    """Route ``logger`` (the root logger by default) to stderr via a queue.

    The HTTP client loggers are held at WARNING so request URLs carrying API
    keys never reach the output.

    Args:
        logger: Target logger to configure.
        level: Logging level as a number or a name such as ``"DEBUG"``.
        json_output: Emit JSON lines; otherwise a plain text format.

    Returns:
        The started queue listener; stop it with :func:`shutdown_listeners`.
    """

    target = logger if logger is not None else logging.getLogger()
    target.setLevel(level)
    for name in _URL_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    record_queue: Queue[logging.LogRecord] = Queue(maxsize=1024)
    target.addHandler(BoundedQueueHandler(record_queue))

    stream_handler = logging.StreamHandler()
    if json_output:
        stream_handler.setFormatter(JsonFormatter())
    else:
        stream_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    listener = logging.handlers.QueueListener(record_queue, stream_handler)
    listener.start()
    return listener


def shutdown_listeners(listeners: Iterable[logging.handlers.QueueListener]) -> None:
    """Stop all queue listeners while suppressing shutdown errors."""
    for listener in listeners:
        try:
            listener.stop()
        except Exception as exc:  # pragma: no cover - defensive logging cleanup
            LOGGER.warning("Failed to stop logging listener", exc_info=exc)
