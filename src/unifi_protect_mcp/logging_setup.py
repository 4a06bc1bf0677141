"""
Process-wide logging for the gateway.

Records go to stderr only, since stdout carries the MCP stream in stdio mode.
A rotating log file can be added on top.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
from pathlib import Path
from typing import Optional

TEXT_FORMAT = '%(asctime)s %(levelname)s %(name)s [%(service)s] %(message)s'
LOG_FILE_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 5

_configured = False


class _ServiceFilter(logging.Filter):
    """Stamp every record with the server name."""

    def __init__(self, service: str):
        super().__init__()
        self.service = service

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = getattr(record, 'service', self.service)
        return True


class _JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'ts': self.formatTime(record, datefmt='%Y-%m-%dT%H:%M:%S'),
            'level': record.levelname,
            'logger': record.name,
            'service': getattr(record, 'service', ''),
            'message': record.getMessage(),
        }
        if record.exc_info:
            entry['exc_info'] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def setup_logging(service: str, level: str = 'INFO', *, json_format: bool = False,
                  log_file: Optional[str] = None) -> None:
    """Install the stderr handler (and optional file handler) on the root logger once."""
    global _configured
    if _configured:
        return

    formatter = _JSONFormatter() if json_format else logging.Formatter(TEXT_FORMAT)
    handlers = [logging.StreamHandler()]
    if log_file:
        try:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.handlers.RotatingFileHandler(
                log_file, maxBytes=LOG_FILE_BYTES, backupCount=LOG_FILE_BACKUPS, encoding='utf-8'))
        except OSError as exc:
            logging.getLogger(__name__).warning(f"Cannot open log file {log_file}: {exc}")

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    service_filter = _ServiceFilter(service)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(service_filter)
        root.addHandler(handler)

    _configured = True
