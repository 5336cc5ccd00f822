"""plotgate configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class BackendType(Enum):
    """Supported credential gate / action forwarder backends."""

    HTTP = "http"
    MOCK = "mock"


@dataclass
class PlotGateConfig:
    """Configuration for ActionSession and AuthClient.

    Attributes:
        backend: Which gate/forwarder pair to build.
        api_base_url: Base URL of the credential and trendline API.
        auth_base_url: Base URL of the login/profile API.
        credentials_status_path: GET endpoint answering ``hasCredentials``.
        credentials_path: POST endpoint storing service login fields.
        trendline_path: POST endpoint that draws the trendline.
        request_timeout: Seconds before an HTTP call is abandoned
            (``None`` waits indefinitely).
        forward_retries: Extra forward attempts after a retryable failure.
        forward_retry_delay: Seconds to wait between forward attempts.
    """

    backend: BackendType = BackendType.HTTP
    api_base_url: str = "http://localhost:8000"
    auth_base_url: str = "https://admin-ones.onrender.com/api"
    credentials_status_path: str = "/api/tradingview/credentials/status"
    credentials_path: str = "/api/tradingview/credentials"
    trendline_path: str = "/api/tradingview/trendline"
    request_timeout: float | None = None
    forward_retries: int = 0
    forward_retry_delay: float = 1.0
