"""Logging setup for applications embedding tumblr-api.

The library never configures logging on import. Codec modules log through
``logging.getLogger(__name__)``; the token manager and the HTTP client use
``structlog.get_logger(__name__)`` with an event name plus keyword context::

    logger.info("token_exchange_succeeded", expires_in=3600)

Calling :func:`configure_logging` sends both kinds of record through one
structlog processor chain, so they share timestamps, levels and redaction.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

_REDACTED = "[REDACTED]"

_SECRET_MARKERS: tuple[str, ...] = (
    "secret",
    "token",
    "bearer",
    "authorization",
    "consumer_key",
    "client_id",
    "password",
)
"""Case-insensitive fragments of event-dict keys whose values are masked."""

_QUIET_LOGGERS: tuple[str, ...] = ("httpx", "httpcore")
"""Third-party loggers that echo full request URLs at INFO."""


def _looks_secret(key: Any) -> bool:
    lowered = str(key).lower()
    return any(marker in lowered for marker in _SECRET_MARKERS)


def _mask(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _REDACTED if _looks_secret(k) else v for k, v in value.items()}
    return value


def _redact_secrets(
    logger: WrappedLogger,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: EventDict,
) -> EventDict:
    """Mask consumer keys, client secrets and bearer tokens.

    Top-level keys are checked, then the keys of any ``dict`` value (a
    ``headers`` mapping, for instance). The ``event`` name itself is left
    alone so events such as ``token_exchange_started`` stay readable.
    """
    for key, value in list(event_dict.items()):
        if key == "event":
            continue
        event_dict[key] = _REDACTED if _looks_secret(key) else _mask(value)
    return event_dict


def _pre_chain() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        _redact_secrets,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def configure_logging(log_level: str = "INFO") -> None:
    """Install a single stdout handler rendering every record through structlog.

    Output is one JSON object per line, with ``timestamp``, ``level``,
    ``logger`` and ``event`` keys. At ``DEBUG`` the console renderer is used
    instead and the HTTP transport loggers are left at their own level.

    Safe to call repeatedly; the root handler list is replaced each time.

    Args:
        log_level: ``"DEBUG"``, ``"INFO"``, ``"WARNING"``, ``"ERROR"`` or
            ``"CRITICAL"``, in any case. Unknown names fall back to INFO.
    """
    level_name = log_level.upper()
    debug = level_name == "DEBUG"
    pre_chain = _pre_chain()

    renderer: Processor = (
        structlog.dev.ConsoleRenderer(colors=True) if debug else structlog.processors.JSONRenderer()
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(getattr(logging, level_name, logging.INFO))

    if not debug:
        for name in _QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
