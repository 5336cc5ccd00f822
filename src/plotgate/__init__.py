"""plotgate — ordered price/volume plot data and credential-gated chart actions.

Builds clean-before-dirty ordered series with volume-axis scaling, and runs
the trendline workflow that waits for charting-service credentials before
forwarding a click.

Quick start::

    from plotgate import build_charts, create_session_from_env
    charts = build_charts(upload_result)
    session = create_session_from_env(SessionContext("u1", token))
    await session.dispatch(UserEvent(TrendlineAction.from_dict(click)))
"""

from __future__ import annotations

import os

from plotgate.auth import AuthClient
from plotgate.backends import create_backends
from plotgate.classifier import is_clean
from plotgate.config import BackendType, PlotGateConfig
from plotgate.dispatcher import (
    AwaitingCredentials,
    Cancel,
    CredentialSubmit,
    Dispatching,
    Idle,
    UserEvent,
    transition,
)
from plotgate.errors import PlotGateError, PlotGateErrorCode
from plotgate.ingestion import ChartSet, build_charts, parse_upload_result
from plotgate.models.action import TrendlineAction
from plotgate.models.point import PriceField, SeriesPoint
from plotgate.models.scale import ScaleParams
from plotgate.models.session import ServiceCredentials, SessionContext, UserProfile
from plotgate.observer import SessionObserver
from plotgate.plot_builder import (
    PlotData,
    build_ordered,
    build_plot,
    compute_scale,
    compute_trimmed_ceiling,
    format_volume,
    should_use_log_scale,
)
from plotgate.session import ActionSession

__version__ = "0.1.0"

__all__ = [
    # Session
    "ActionSession",
    "SessionObserver",
    "create_session_from_env",
    "config_from_env",
    # Dispatcher
    "transition",
    "Idle",
    "AwaitingCredentials",
    "Dispatching",
    "UserEvent",
    "CredentialSubmit",
    "Cancel",
    # Plot builder
    "is_clean",
    "build_ordered",
    "build_plot",
    "compute_trimmed_ceiling",
    "should_use_log_scale",
    "compute_scale",
    "format_volume",
    "PlotData",
    # Ingestion
    "ChartSet",
    "build_charts",
    "parse_upload_result",
    # Auth
    "AuthClient",
    # Config
    "PlotGateConfig",
    "BackendType",
    # Errors
    "PlotGateError",
    "PlotGateErrorCode",
    # Models
    "TrendlineAction",
    "PriceField",
    "SeriesPoint",
    "ScaleParams",
    "ServiceCredentials",
    "SessionContext",
    "UserProfile",
]


def config_from_env() -> PlotGateConfig:
    """Build a PlotGateConfig from env vars.

    Environment variables:
        PLOTGATE_BACKEND: "http" or "mock" (default: "http").
        PLOTGATE_API_URL: Credential/trendline API base URL.
        PLOTGATE_AUTH_URL: Account API base URL.
        PLOTGATE_REQUEST_TIMEOUT: HTTP timeout in seconds (default: none).
        PLOTGATE_FORWARD_RETRIES: Extra forward attempts (default: 0).
        PLOTGATE_FORWARD_RETRY_DELAY: Seconds between attempts (default: 1).
    """
    defaults = PlotGateConfig()
    timeout = os.getenv("PLOTGATE_REQUEST_TIMEOUT")
    return PlotGateConfig(
        backend=BackendType(os.getenv("PLOTGATE_BACKEND", "http").strip().lower()),
        api_base_url=os.getenv("PLOTGATE_API_URL", defaults.api_base_url),
        auth_base_url=os.getenv("PLOTGATE_AUTH_URL", defaults.auth_base_url),
        request_timeout=float(timeout) if timeout else None,
        forward_retries=int(os.getenv("PLOTGATE_FORWARD_RETRIES", "0")),
        forward_retry_delay=float(os.getenv("PLOTGATE_FORWARD_RETRY_DELAY", "1.0")),
    )


def create_session_from_env(
    context: SessionContext,
    observer: SessionObserver | None = None,
) -> ActionSession:
    """Zero-config factory — backend and endpoints come from env vars."""
    config = config_from_env()
    gate, forwarder = create_backends(config)
    return ActionSession(
        context,
        gate,
        forwarder,
        observer=observer,
        forward_retries=config.forward_retries,
        forward_retry_delay=config.forward_retry_delay,
    )
