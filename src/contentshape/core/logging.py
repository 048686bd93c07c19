"""
contentshape logging - structured logging with structlog.

Every module obtains its logger through :func:`get_logger` and emits
event-style messages (``logger.debug("shape_created", shape_type=...)``).
Hosts configure output once at startup, usually from settings with
:func:`configure_from_settings`; the ``contentshape`` CLI does this in its
root callback.

Manifesto:
    Display pipelines run once per request and fan out across many drivers.
    Structured events keyed by shape type, part name and content type make
    it possible to see which driver produced which shape without stepping
    through the renderer.

Features:
    - ``json`` or ``console`` rendering, matching ``DisplaySettings.log_format``
    - Events go to stderr so command output on stdout stays parseable
    - Per-request keys (content type, display type) through structlog contextvars

Examples:
    >>> from contentshape.core.config import get_settings
    >>> from contentshape.core.logging import configure_from_settings, get_logger
    >>> configure_from_settings(get_settings())
    >>> get_logger(__name__).debug("part_driver_skipped", part_type="BodyPart")

Tags:
    logging, structlog, observability, contentshape

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

if TYPE_CHECKING:
    from contentshape.core.config import DisplaySettings

_SERVICE_NAME = "contentshape"


def _add_service_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("service.name", _SERVICE_NAME)
    return event_dict


def configure_logging(
    level: str = "INFO",
    log_format: str = "console",
    *,
    service: str = "contentshape",
    add_timestamp: bool = True,
) -> None:
    """Route contentshape events through stdlib logging on stderr.

    Args:
        level: Minimum level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: ``json`` for one JSON object per event, ``console`` otherwise
        service: Value of the ``service.name`` key on every event
        add_timestamp: Prefix events with an ISO timestamp
    """
    global _SERVICE_NAME
    _SERVICE_NAME = service
    numeric_level = getattr(logging, level.upper())

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _add_service_name,
    ]
    if add_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=numeric_level)


def configure_from_settings(settings: DisplaySettings) -> None:
    """Apply ``log_level`` and ``log_format`` from ``settings``."""
    configure_logging(level=settings.log_level, log_format=settings.log_format)


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger (usually ``get_logger(__name__)``)."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind keys onto every later event in this context.

    Example:
        bind_context(content_type="BlogPost", display_type="Summary")
        logger.debug("part_display_built")  # carries both keys
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


class LogContext:
    """Binds keys for the duration of a ``with`` or ``async with`` block.

    Example:
        async with LogContext(content_item_id="4x2k", display_type="Detail"):
            await coordinator.build_display(item, type_definition, context)
    """

    def __init__(self, **kwargs: Any):
        self._context = kwargs

    def __enter__(self) -> LogContext:
        bind_context(**self._context)
        return self

    def __exit__(self, *args) -> None:
        unbind_context(*self._context)

    async def __aenter__(self) -> LogContext:
        return self.__enter__()

    async def __aexit__(self, *args) -> None:
        self.__exit__(*args)


__all__ = [
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
    "LogContext",
]
