"""HTTP backends — credential gate and trendline forwarder over REST.

Both share one ``requests.Session``. The blocking calls run in a worker
thread so the async gate/forwarder contract holds.
"""

from __future__ import annotations

import asyncio
from typing import Any

import requests
from loguru import logger

from plotgate.backends.base import BaseActionForwarder, BaseCredentialGate
from plotgate.errors import PlotGateError, PlotGateErrorCode
from plotgate.models.action import TrendlineAction
from plotgate.models.session import ServiceCredentials, SessionContext


class ApiClient:
    """Bearer-authorized JSON client for the plotgate API."""

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def request(
        self,
        method: str,
        path: str,
        context: SessionContext,
        code: PlotGateErrorCode,
        json: dict[str, Any] | None = None,
    ) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.request(
                method, url, json=json, headers=context.auth_header, timeout=self.timeout,
            )
        except requests.exceptions.InvalidJSONError as exc:
            raise PlotGateError(
                f"{method} {path} body is not valid JSON: {exc}",
                code=code,
            ) from exc
        except requests.RequestException as exc:
            raise PlotGateError(
                f"{method} {path} failed: {exc}",
                code=code,
                retryable=True,
            ) from exc
        except (TypeError, ValueError) as exc:
            # Body could not be encoded; repeating the call cannot help.
            raise PlotGateError(
                f"{method} {path} body could not be encoded: {exc}",
                code=code,
            ) from exc
        self._check_response(resp, method, path, code)
        return resp

    @staticmethod
    def _check_response(
        resp: requests.Response, method: str, path: str, code: PlotGateErrorCode,
    ) -> None:
        if 200 <= resp.status_code < 300:
            return
        retryable = resp.status_code == 429 or resp.status_code >= 500
        raise PlotGateError(
            f"{method} {path} returned {resp.status_code}",
            code=code,
            retryable=retryable,
            status_code=resp.status_code,
        )


class HttpCredentialGate(BaseCredentialGate):
    """Credential gate backed by the credentials status/save endpoints."""

    def __init__(
        self,
        client: ApiClient,
        status_path: str = "/api/tradingview/credentials/status",
        save_path: str = "/api/tradingview/credentials",
    ) -> None:
        self.client = client
        self.status_path = status_path
        self.save_path = save_path

    async def has_credentials(self, context: SessionContext) -> bool:
        return await asyncio.to_thread(self._has_credentials, context)

    async def save_credentials(
        self, context: SessionContext, credentials: ServiceCredentials,
    ) -> None:
        await asyncio.to_thread(self._save_credentials, context, credentials)

    def _has_credentials(self, context: SessionContext) -> bool:
        code = PlotGateErrorCode.CREDENTIAL_CHECK_FAILED
        resp = self.client.request("GET", self.status_path, context, code)
        try:
            data = resp.json()
        except ValueError as exc:
            raise PlotGateError(
                f"Credential status is not JSON: {exc}", code=code,
            ) from exc
        if not isinstance(data, dict) or not isinstance(data.get("hasCredentials"), bool):
            raise PlotGateError(
                f"Credential status missing hasCredentials: {data!r}", code=code,
            )
        return data["hasCredentials"]

    def _save_credentials(
        self, context: SessionContext, credentials: ServiceCredentials,
    ) -> None:
        self.client.request(
            "POST",
            self.save_path,
            context,
            PlotGateErrorCode.CREDENTIAL_SAVE_FAILED,
            json=credentials.to_wire(),
        )
        logger.info(f"Saved charting credentials for user {context.user_id}")


class HttpActionForwarder(BaseActionForwarder):
    """Posts trendline actions to the drawing endpoint."""

    def __init__(self, client: ApiClient, path: str = "/api/tradingview/trendline") -> None:
        self.client = client
        self.path = path

    async def forward(self, context: SessionContext, action: TrendlineAction) -> None:
        await asyncio.to_thread(self._forward, context, action)

    def _forward(self, context: SessionContext, action: TrendlineAction) -> None:
        self.client.request(
            "POST",
            self.path,
            context,
            PlotGateErrorCode.FORWARD_FAILED,
            json=action.to_wire(),
        )
