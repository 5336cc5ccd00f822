"""Abstract base classes for the credential gate and action forwarder."""

from __future__ import annotations

from abc import ABC, abstractmethod

from plotgate.models.action import TrendlineAction
from plotgate.models.session import ServiceCredentials, SessionContext


class BaseCredentialGate(ABC):
    """Answers whether a user has charting-service credentials on file.

    ``has_credentials`` must reflect the most recent successful
    ``save_credentials`` for the same user. Both methods raise
    ``PlotGateError`` on failure; callers decide how to degrade.
    """

    @abstractmethod
    async def has_credentials(self, context: SessionContext) -> bool:
        """Return True if credentials are stored for ``context.user_id``."""
        ...

    @abstractmethod
    async def save_credentials(
        self, context: SessionContext, credentials: ServiceCredentials,
    ) -> None:
        """Store credentials for ``context.user_id``."""
        ...


class BaseActionForwarder(ABC):
    """Delivers a trendline action to the external charting trigger."""

    @abstractmethod
    async def forward(self, context: SessionContext, action: TrendlineAction) -> None:
        """Send ``action``; raise ``PlotGateError`` if it was not accepted."""
        ...
