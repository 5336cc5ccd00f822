"""plotgate error types."""

from __future__ import annotations

from enum import Enum


class PlotGateErrorCode(Enum):
    """Error classification codes."""

    VALIDATION_DROPPED = "validation_dropped"
    CREDENTIAL_CHECK_FAILED = "credential_check_failed"
    CREDENTIAL_SAVE_FAILED = "credential_save_failed"
    FORWARD_FAILED = "forward_failed"
    INGESTION_MALFORMED = "ingestion_malformed"
    AUTH_FAILED = "auth_failed"
    ALREADY_LOGGED_IN = "already_logged_in"
    UNAUTHORIZED = "unauthorized"


class PlotGateError(Exception):
    """plotgate exception with error code and retryable flag.

    Attributes:
        message: Human-readable error description.
        code: Structured error code for programmatic handling.
        retryable: Whether repeating the same call may succeed.
        status_code: HTTP status of the failed response, if any.
    """

    def __init__(
        self,
        message: str,
        code: PlotGateErrorCode = PlotGateErrorCode.FORWARD_FAILED,
        retryable: bool = False,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.retryable = retryable
        self.status_code = status_code
