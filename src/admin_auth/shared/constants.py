"""Application-wide constants and configuration values.

This module centralizes error codes, messages and security constants
to prevent hardcoded values scattered throughout the codebase.
"""

from enum import StrEnum

# ===== Security =====


class SecurityConstants:
    """Authentication related fixed values."""

    ROLE_PREFIX = "ROLE_"
    """Prefix carried by every role authority"""

    USER_STATUS_ENABLED = 1
    """sys_user.status value of an enabled account"""


class TokenType(StrEnum):
    """Token type discriminator embedded in signed tokens."""

    ACCESS = "access"
    REFRESH = "refresh"


# ===== Pagination =====


class Pagination:
    """Pagination limits for list APIs."""

    DEFAULT_PAGE_SIZE = 10
    """Default number of items per page"""

    MAX_PAGE_SIZE = 100
    """Maximum allowed page size"""


# ===== Error Codes =====


class ErrorCode(StrEnum):
    """Standardized result codes for the entire application.

    Result code naming convention:
    - AXXXX: Client side errors
    - BXXXX: System execution errors
    """

    # Login (A02XX)
    ACCOUNT_NOT_FOUND = "A0201"
    ACCOUNT_FROZEN = "A0202"
    USER_PASSWORD_ERROR = "A0210"

    # Tokens (A023X)
    ACCESS_TOKEN_INVALID = "A0230"
    REFRESH_TOKEN_INVALID = "A0231"

    # Authorization (A03XX)
    ACCESS_UNAUTHORIZED = "A0301"

    # Request parameters (A04XX)
    REQUEST_REQUIRED_PARAMETER_IS_EMPTY = "A0410"

    # System
    SYSTEM_ERROR = "B0001"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# ===== Error Messages =====


class ErrorMessage:
    """User-facing error messages.

    Note: S105 warnings suppressed - these are error messages, not passwords.
    """

    ACCOUNT_NOT_FOUND = "User account does not exist"
    ACCOUNT_FROZEN = "User account is frozen"
    USER_PASSWORD_ERROR = "Incorrect username or password"  # noqa: S105

    ACCESS_TOKEN_INVALID = "Access token is invalid or expired"  # noqa: S105
    REFRESH_TOKEN_INVALID = "Refresh token is invalid or expired"  # noqa: S105

    ACCESS_UNAUTHORIZED = "Access unauthorized"

    REQUEST_REQUIRED_PARAMETER_IS_EMPTY = "Required request parameter is empty"

    SYSTEM_ERROR = "System execution error"
    INTERNAL_SERVER_ERROR = "Internal server error"
