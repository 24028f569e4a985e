"""
Observability module.

Provides structured logging, correlation ID tracking and request logging.
"""

from fairform.observability.correlation import get_correlation_id, set_correlation_id
from fairform.observability.logger import configure_logging

__all__ = ["configure_logging", "get_correlation_id", "set_correlation_id"]
