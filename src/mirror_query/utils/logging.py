"""Logging setup and request-scoped loggers."""

import logging
import sys
from typing import Any

ROOT_LOGGER = "mirror_query"


class ContextFormatter(logging.Formatter):
    """Render a record's request context after the message.

    A request logged through ``request_logger`` comes out as::

        2024-05-01 12:00:00 DEBUG mirror_query.query.client GET url=http://reg/v2/ mode=body
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = getattr(record, "context", None)
        if not context:
            return message
        pairs = " ".join(f"{k}={_render(v)}" for k, v in context.items())
        return f"{message} {pairs}"


def _render(value: Any) -> str:
    text = str(value)
    if not text or any(c.isspace() for c in text):
        return repr(text)
    return text


def configure_logging(level: str = "INFO", structured: bool = False) -> None:
    """Configure the mirror_query logger hierarchy.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        structured: Prefix timestamps and logger names and append request context
    """
    handler = logging.StreamHandler(sys.stderr)
    if structured:
        handler.setFormatter(ContextFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers = [handler]
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the mirror_query hierarchy."""
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


class ContextAdapter(logging.LoggerAdapter):
    """Attach a fixed context to every record, merged with per-call context.

    ``log.debug("done", extra={"context": {"status": 200}})`` adds ``status``
    to the adapter's own fields for that record only.
    """

    def process(
        self, msg: str, kwargs: dict[str, Any]
    ) -> tuple[str, dict[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra["context"] = {**self.extra, **extra.get("context", {})}
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger_with_context(name: str, **context: Any) -> ContextAdapter:
    """Get a logger whose records carry the given context fields."""
    return ContextAdapter(get_logger(name), context)


def request_logger(name: str, url: str, extract_digest: bool) -> ContextAdapter:
    """Get a logger for one registry request.

    Records carry the dispatched URL and the query mode ("digest" or "body").
    The bearer token is never part of the context.
    """
    mode = "digest" if extract_digest else "body"
    return get_logger_with_context(name, url=url, mode=mode)
