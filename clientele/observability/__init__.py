"""Observability: structured logging with PII redaction."""

from clientele.observability.logging import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
