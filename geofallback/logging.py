from __future__ import annotations

import logging
import os
from typing import Any

import structlog

# syslog priorities understood by journald when prefixed as "<N>"
_SYSTEMD_PRIORITIES = {
    "critical": 2,
    "error": 3,
    "warning": 4,
    "info": 6,
    "debug": 7,
}


def _get_log_level() -> int:
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level, logging.INFO)


def render_systemd(_: Any, __: str, event_dict: dict[str, Any]) -> str:
    """Render ``<priority>logger: event key=value ...`` for journald."""
    level = str(event_dict.pop("level", "info")).lower()
    name = event_dict.pop("logger", None) or "root"
    event = event_dict.pop("event", "")
    exc = event_dict.pop("exception", None)
    extras = " ".join(f"{key}={value}" for key, value in sorted(event_dict.items()))
    line = f"<{_SYSTEMD_PRIORITIES.get(level, 6)}>{name}: {event}"
    if extras:
        line = f"{line} {extras}"
    if exc:
        line = f"{line}\n{exc}"
    return line


def setup_logging() -> None:
    """Configure structlog on top of stdlib logging.

    - LOG_FORMAT=json (default) renders JSON lines; APP_ENV=dev defaults to console
    - LOG_STYLE=systemd renders journald priority-prefixed lines without timestamps
    - request_id and other contextvars are merged into every event
    - stdlib/uvicorn records share the same formatter
    """
    log_style = os.getenv("LOG_STYLE", "").lower()
    systemd = log_style == "systemd"

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
    ]
    if not systemd:
        shared_processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))
    shared_processors.append(structlog.processors.format_exc_info)

    log_format = os.getenv("LOG_FORMAT", "json").lower()
    if os.getenv("APP_ENV") == "dev" and "LOG_FORMAT" not in os.environ:
        log_format = "console"

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if systemd:
        renderer = render_systemd
    elif log_format == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logging.basicConfig(level=_get_log_level(), handlers=[handler], force=True)
