"""Logging helpers that keep jsembed logger names, configuration and tracing uniform.

This module provides:
    - JsonLogFormatter: JSON log formatter with stable fields and optional context.
    - setup_base_logger: configuration of the base 'jsembed' logger.
    - get_logger: namespaced logger factory ('jsembed.*').
    - trace_render: debug tracing gated by JSEMBED_TRACE=1.

The library never configures handlers on import; only the CLI (or an
embedding application) calls setup_base_logger.
"""
from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Optional, TextIO

from jsembed.constants import LOGGER_ROOT

TRACE_ENV = 'JSEMBED_TRACE'


class JsonLogFormatter(logging.Formatter):
    """Emit logs as compact JSON with a fixed schema.

    Fields:
        - ts: ISO-8601 timestamp in UTC with millisecond precision.
        - level: Log level name.
        - module: Logger name (e.g., 'jsembed.render').
        - msg: Formatted message string.
        - version: jsembed.__version__ (fixed per formatter instance).
        - ctx: Optional dictionary attached to the record as 'context'.
    """

    def __init__(self) -> None:
        super().__init__()
        self._version = self._resolve_version()

    @staticmethod
    def _resolve_version() -> str:
        # Imported lazily: jsembed/__init__ imports this module indirectly.
        from jsembed import __version__

        return str(__version__)

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        ts_str = ts.isoformat(timespec='milliseconds').replace('+00:00', 'Z')

        payload = {
            'ts': ts_str,
            'level': record.levelname,
            'module': record.name,
            'msg': record.getMessage(),
            'version': self._version,
        }

        ctx = getattr(record, 'context', None)
        if isinstance(ctx, dict) and ctx:
            payload['ctx'] = ctx

        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_base_logger(
    *, json_logs: bool = False, level: int = logging.INFO, stream: Optional[TextIO] = None
) -> logging.Logger:
    """Configure the base 'jsembed' logger and return it.

    Calling it again replaces the handler, so switching between plain and
    JSON output (or redirecting the stream) takes effect immediately.

    Args:
        json_logs: If True, configure a JSON formatter, else plain text.
        level: Logging level for the base logger.
        stream: Optional stream (stderr by default).
    """
    base = logging.getLogger(LOGGER_ROOT)
    for handler in list(base.handlers):
        base.removeHandler(handler)
    base.setLevel(level)
    base.propagate = False

    handler = logging.StreamHandler(stream or sys.stderr)
    if json_logs:
        handler.setFormatter(JsonLogFormatter())
    else:
        handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    base.addHandler(handler)

    return base


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a namespaced logger under 'jsembed'."""
    if not name or name == LOGGER_ROOT:
        return logging.getLogger(LOGGER_ROOT)
    if name.startswith(LOGGER_ROOT + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f'{LOGGER_ROOT}.{name}')


def is_trace_enabled() -> bool:
    """Check if render tracing is enabled via env flag."""
    return os.getenv(TRACE_ENV) == '1'


def trace_render(logger: logging.Logger, message: str, **ctx) -> None:
    """Emit debug trace messages only when JSEMBED_TRACE=1.

    Context is attached to the record, so the JSON formatter emits it
    under 'ctx' while the plain formatter appends it to the message.
    """
    if not is_trace_enabled():
        return
    if ctx:
        logger.debug('%s | ctx=%r', message, ctx, extra={'context': ctx})
    else:
        logger.debug('%s', message)
