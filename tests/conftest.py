"""Shared fixtures for plotgate tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from plotgate.backends.mock import MockActionForwarder, MockCredentialGate
from plotgate.models.action import TrendlineAction
from plotgate.models.session import ServiceCredentials, SessionContext
from plotgate.observer import SessionObserver


class RecordingObserver(SessionObserver):
    """Observer that records every callback as (name, arg) tuples."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def on_credentials_requested(self, action):
        self.calls.append(("requested", action))

    def on_credentials_request_cleared(self):
        self.calls.append(("cleared", None))

    def on_save_failed(self, error):
        self.calls.append(("save_failed", error))

    def on_forward_succeeded(self, action):
        self.calls.append(("forward_succeeded", action))

    def on_forward_failed(self, action, error):
        self.calls.append(("forward_failed", error))


@pytest.fixture
def context() -> SessionContext:
    return SessionContext(user_id="user-1", token="tok-abc")


@pytest.fixture
def click_action() -> TrendlineAction:
    return TrendlineAction(
        symbol="EURUSD",
        timeframe="1h",
        price="1.08452",
        volume=1250,
        timestamp="2024-01-15T10:00:00Z",
        source="click",
        color="#ff0000",
        credential_token="tok-abc",
        window_start="2024-01-15T00:00:00Z",
        window_end="2024-01-16T00:00:00Z",
    )


@pytest.fixture
def credentials() -> ServiceCredentials:
    return ServiceCredentials(username="trader", password="s3cret")


@pytest.fixture
def gate() -> MockCredentialGate:
    return MockCredentialGate()


@pytest.fixture
def forwarder() -> MockActionForwarder:
    return MockActionForwarder()


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def upload_result() -> dict:
    """Upload-processor response with one dirty price per series."""
    def series(field: str) -> list[dict]:
        return [
            {"time": "10:00", field: 1.2, "volume": 300},
            {"time": "10:01", field: "1.1234567", "volume": 100},
            {"time": "10:02", field: 1.1, "volume": 200},
            {"time": "10:03", field: 1.15, "volume": 50000, "note": "spike"},
        ]
    return {f"volume_vs_{f}": series(f) for f in ("open", "close", "high", "low")}

