"""In-memory backends for testing and offline use — no network required."""

from __future__ import annotations

from plotgate.backends.base import BaseActionForwarder, BaseCredentialGate
from plotgate.errors import PlotGateError, PlotGateErrorCode
from plotgate.models.action import TrendlineAction
from plotgate.models.session import ServiceCredentials, SessionContext


class MockCredentialGate(BaseCredentialGate):
    """Credential store held in a dict keyed by user id.

    Use ``fail_checks`` / ``fail_saves`` to simulate an unreachable API.
    """

    def __init__(self, users_with_credentials: set[str] | None = None) -> None:
        self._credentials: dict[str, ServiceCredentials | None] = {
            user_id: None for user_id in users_with_credentials or set()
        }
        self.fail_checks = False
        self.fail_saves = False
        self.check_calls = 0
        self.save_calls: list[ServiceCredentials] = []

    async def has_credentials(self, context: SessionContext) -> bool:
        self.check_calls += 1
        if self.fail_checks:
            raise PlotGateError(
                "Credential check unavailable",
                code=PlotGateErrorCode.CREDENTIAL_CHECK_FAILED,
                retryable=True,
            )
        return context.user_id in self._credentials

    async def save_credentials(
        self, context: SessionContext, credentials: ServiceCredentials,
    ) -> None:
        self.save_calls.append(credentials)
        if self.fail_saves:
            raise PlotGateError(
                "Credential save rejected",
                code=PlotGateErrorCode.CREDENTIAL_SAVE_FAILED,
            )
        self._credentials[context.user_id] = credentials

    def credentials_for(self, user_id: str) -> ServiceCredentials | None:
        return self._credentials.get(user_id)


class MockActionForwarder(BaseActionForwarder):
    """Records forwarded actions; optionally fails the next N calls."""

    def __init__(self) -> None:
        self.forwarded: list[tuple[SessionContext, TrendlineAction]] = []
        self.attempts = 0
        self.failures_remaining = 0
        self.failure_retryable = True

    def fail_next(self, count: int = 1, retryable: bool = True) -> None:
        self.failures_remaining = count
        self.failure_retryable = retryable

    async def forward(self, context: SessionContext, action: TrendlineAction) -> None:
        self.attempts += 1
        if self.failures_remaining > 0:
            self.failures_remaining -= 1
            raise PlotGateError(
                "Trendline endpoint returned 502",
                code=PlotGateErrorCode.FORWARD_FAILED,
                retryable=self.failure_retryable,
                status_code=502,
            )
        self.forwarded.append((context, action))

    @property
    def actions(self) -> list[TrendlineAction]:
        return [action for _, action in self.forwarded]
