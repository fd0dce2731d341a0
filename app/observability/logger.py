import os
import time
import json
import logging
from contextlib import contextmanager
from typing import Dict, Any, Optional
from datetime import datetime, timezone

# Import sentry_sdk at module level for testing
try:
    import sentry_sdk
except ImportError:
    sentry_sdk = None

logger = logging.getLogger(__name__)


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class TimingContext:
    """Context manager for timing operations."""

    def __init__(self, operation_name: str):
        self.operation_name = operation_name
        self.start_time: Optional[float] = None
        self.duration_ms: Optional[float] = None

    def __enter__(self):
        self.start_time = time.time()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.start_time is not None:
            self.duration_ms = (time.time() - self.start_time) * 1000

    def get_duration_ms(self) -> Optional[float]:
        """Get duration in milliseconds."""
        return self.duration_ms


@contextmanager
def timing(operation_name: str):
    """Context manager for timing operations."""
    context = TimingContext(operation_name)
    with context:
        yield context


def log_event(
    action: str,
    collection: str,
    outcome: str = "ok",
    duration_ms: Optional[float] = None,
    **kwargs
) -> None:
    """
    Log a structured write/read event.

    Args:
        action: The action performed (e.g., 'created', 'updated', 'rejected')
        collection: The collection touched ('events' or 'bookings')
        outcome: 'ok' or a short failure reason (e.g., 'validation', 'conflict')
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional fields to include in the log; an 'email' field is masked
    """
    log_entry = {
        "timestamp": _utc_timestamp(),
        "action": action,
        "collection": collection,
        "outcome": outcome,
    }

    if duration_ms is not None:
        log_entry["duration_ms"] = round(duration_ms, 2)

    if "email" in kwargs:
        kwargs["email"] = mask_email(kwargs["email"])

    log_entry.update(kwargs)

    # Log as JSON string for structured logging
    logger.info(json.dumps(log_entry, separators=(',', ':'), default=str))


def mask_email(email: Optional[str]) -> str:
    """
    Mask an email address before it is logged.

    "ada@example.com" -> "a**@example.com"
    """
    if not email or "@" not in email:
        return "[REDACTED]"
    local, _, domain = email.strip().partition("@")
    if not local:
        return "[REDACTED]"
    return f"{local[0]}{'*' * max(len(local) - 1, 2)}@{domain}"


def init_sentry() -> bool:
    """
    Initialize Sentry if enabled and DSN is provided.

    Returns:
        True if Sentry was initialized, False otherwise
    """
    if not os.getenv("OBS_ENABLED", "false").lower() == "true":
        return False

    sentry_dsn = os.getenv("SENTRY_DSN")
    if not sentry_dsn:
        logger.info("Sentry DSN not provided, skipping Sentry initialization")
        return False

    try:
        if sentry_sdk is None:
            raise ImportError("sentry_sdk not available")

        from sentry_sdk.integrations.fastapi import FastApiIntegration
        from sentry_sdk.integrations.logging import LoggingIntegration

        sentry_sdk.init(
            dsn=sentry_dsn,
            integrations=[
                FastApiIntegration(),
                LoggingIntegration(
                    level=logging.INFO,
                    event_level=logging.ERROR
                ),
            ],
            traces_sample_rate=0.1,  # Sample 10% of transactions
            environment=os.getenv("ENVIRONMENT", "development"),
        )

        logger.info("Sentry initialized successfully")
        return True

    except ImportError:
        logger.warning("Sentry SDK not installed, skipping Sentry initialization")
        return False
    except Exception as e:
        logger.error(f"Failed to initialize Sentry: {e}")
        return False


def log_error(error: Exception, context: Dict[str, Any] = None) -> None:
    """
    Log an error with optional context.

    Args:
        error: The exception to log
        context: Optional context dictionary
    """
    log_entry = {
        "timestamp": _utc_timestamp(),
        "level": "ERROR",
        "error": str(error),
        "error_type": type(error).__name__,
    }

    if context:
        log_entry.update(context)

    logger.error(json.dumps(log_entry, separators=(',', ':'), default=str))


def log_warning(message: str, context: Dict[str, Any] = None) -> None:
    """
    Log a warning with optional context.

    Args:
        message: The warning message
        context: Optional context dictionary
    """
    log_entry = {
        "timestamp": _utc_timestamp(),
        "level": "WARNING",
        "message": message,
    }

    if context:
        log_entry.update(context)

    logger.warning(json.dumps(log_entry, separators=(',', ':'), default=str))
