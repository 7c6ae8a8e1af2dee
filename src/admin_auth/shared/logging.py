"""Structured logging configuration for security and observability.

This module provides JSON-formatted logging with security event tracking
for token issuance, revocation and authorization decisions.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from admin_auth.shared.security.config import security_settings


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add application context to all log entries."""
    event_dict["app"] = "admin-auth"
    event_dict["environment"] = security_settings.env
    return event_dict


def mask_sensitive_data(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Mask sensitive fields in log entries.

    Fields like 'password', 'token', 'secret' will be masked with '***'.
    The token_type field only names the kind of token and is kept.
    """
    sensitive_fields = {"password", "token", "secret", "api_key", "password_hash"}

    for key in event_dict:
        if key == "token_type":
            continue
        if any(sensitive in key.lower() for sensitive in sensitive_fields):
            event_dict[key] = "***MASKED***"

    return event_dict


def configure_logging() -> None:
    """Configure structured logging for the application.

    - Development: Human-readable console output
    - Production: JSON-formatted logs
    """
    log_level = logging.DEBUG if security_settings.env == "development" else logging.INFO

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
        mask_sensitive_data,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if security_settings.env == "development":
        processors = [*shared_processors, structlog.dev.ConsoleRenderer(colors=True)]
    else:
        processors = [
            *shared_processors,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a configured structured logger.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Structured logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("token_issued", user_id=123)
    """
    return structlog.get_logger(name)


class SecurityLogger:
    """Helper class for logging security-related events.

    Raw token strings are never passed to these helpers.
    """

    def __init__(self) -> None:
        self.logger = get_logger("security")

    def log_login_success(self, user_id: int, username: str, session_mode: str) -> None:
        """Log successful login."""
        self.logger.info(
            "login_success",
            event_type="authentication",
            user_id=user_id,
            username=username,
            session_mode=session_mode,
        )

    def log_login_failed(self, username: str, reason: str) -> None:
        """Log failed login attempt.

        Args:
            username: Submitted username
            reason: Failure reason (account_not_found, account_frozen, invalid_password)
        """
        self.logger.warning(
            "login_failed",
            event_type="authentication",
            username=username,
            reason=reason,
        )

    def log_token_rejected(self, token_type: str, reason: str, user_id: int | None = None) -> None:
        """Log a rejected access or refresh token.

        Args:
            token_type: Type of token (access, refresh)
            reason: Rejection reason (blacklisted, malformed, stale_version, wrong_type, ...)
            user_id: User ID when it could be recovered
        """
        self.logger.info(
            "token_rejected",
            event_type="authentication",
            token_type=token_type,
            reason=reason,
            user_id=user_id,
        )

    def log_session_superseded(self, user_id: int) -> None:
        """Log that a new login replaced the user's previous token pair."""
        self.logger.info(
            "session_superseded",
            event_type="session",
            user_id=user_id,
        )

    def log_tokens_invalidated(self, user_id: int | None, security_version: int | None) -> None:
        """Log explicit token invalidation (logout or forced revocation)."""
        self.logger.info(
            "tokens_invalidated",
            event_type="session",
            user_id=user_id,
            security_version=security_version,
        )

    def log_data_scope_applied(self, user_id: int, scopes: list[int], unrestricted: bool) -> None:
        """Log the data scopes used to filter a query."""
        self.logger.debug(
            "data_scope_applied",
            event_type="authorization",
            user_id=user_id,
            scopes=scopes,
            unrestricted=unrestricted,
        )

    def log_slow_query(
        self,
        query_name: str,
        duration_ms: float,
        params: dict[str, Any] | None = None,
    ) -> None:
        """Log slow database query (> 100ms)."""
        self.logger.warning(
            "slow_query",
            event_type="performance",
            query_name=query_name,
            duration_ms=duration_ms,
            params=params or {},
        )


# Global security logger instance
security_logger = SecurityLogger()
