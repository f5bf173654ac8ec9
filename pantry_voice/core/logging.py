"""Logfire setup and the two helpers the services use for tracing.

Services log through ``logging.getLogger(__name__)``; once ``configure_logfire``
has run, those records are shipped alongside the spans opened with ``span``.
Voice sessions pass their session id as structured context:

    log_with_context(logger, "info", "Listening session started", session_id=3, locale="it-IT")
"""

import logging

import logfire
from fastapi import FastAPI

from pantry_voice.core.config import settings


def configure_logfire() -> None:
    """Configure Logfire for pantry-voice. Without a token nothing leaves the process."""
    logfire.configure(
        token=settings.logfire_token,
        service_name="pantry-voice",
        service_version="0.1.0",
        environment=settings.environment,
        send_to_logfire="if-token-present",
    )
    logging.getLogger(__name__).info("Logfire configured", extra={"environment": settings.environment})


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request to the voice endpoints."""
    logfire.instrument_fastapi(app)


def span(name: str) -> logfire.LogfireSpan:
    """Open a span named after the service operation, e.g. ``"query_engine.answer_query"``."""
    return logfire.span(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **context: object,
) -> None:
    """Log ``message`` at ``level`` with ``context`` attached as record attributes.

    Args:
        logger: Logger of the calling module
        level: "debug", "info", "warning", "error" or "critical"
        message: Log message
        **context: Fields such as session_id, code or outcome
    """
    log_method = getattr(logger, level.lower())
    log_method(message, extra=context)
