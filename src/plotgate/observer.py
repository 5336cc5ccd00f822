"""Session observer — the caller-facing side of the dispatcher."""

from __future__ import annotations

from plotgate.errors import PlotGateError
from plotgate.models.action import TrendlineAction


class SessionObserver:
    """No-op hooks; subclass and override the ones the UI cares about."""

    def on_credentials_requested(self, action: TrendlineAction) -> None:
        """Show the credential-entry form."""

    def on_credentials_request_cleared(self) -> None:
        """Hide the credential-entry form."""

    def on_save_failed(self, error: PlotGateError) -> None:
        """Credential submission was rejected; the form stays open."""

    def on_forward_succeeded(self, action: TrendlineAction) -> None:
        pass

    def on_forward_failed(self, action: TrendlineAction, error: PlotGateError) -> None:
        pass
