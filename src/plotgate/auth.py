"""Account API client — login, signup, profile, logout, admin user creation.

Produces the ``SessionContext`` the dispatcher runs under. The token itself
is the caller's to keep; nothing here persists it.
"""

from __future__ import annotations

from typing import Any

import requests
from loguru import logger

from plotgate.errors import PlotGateError, PlotGateErrorCode
from plotgate.models.session import SessionContext, UserProfile


class AuthClient:
    """Client for the ``/auth`` and ``/profile`` endpoints."""

    def __init__(
        self,
        base_url: str = "https://admin-ones.onrender.com/api",
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    # -------------------------------------------------------------- login

    def login(self, email: str, password: str) -> SessionContext:
        """Log in and return a session for the authenticated user.

        Raises:
            PlotGateError: ``ALREADY_LOGGED_IN`` if the account is active on
                another device, ``AUTH_FAILED`` for any other rejection.
        """
        resp = self._post("/auth/login", {"email": email, "password": password})

        if resp.status_code == 403:
            data = self._json_or_empty(resp)
            if data.get("alreadyLoggedIn"):
                raise PlotGateError(
                    f"Already logged in on {self._describe_device(data.get('deviceInfo'))}",
                    code=PlotGateErrorCode.ALREADY_LOGGED_IN,
                    status_code=403,
                )
        if not resp.ok:
            raise PlotGateError(
                "Login failed",
                code=PlotGateErrorCode.AUTH_FAILED,
                status_code=resp.status_code,
            )
        return self._session_from_token(self._access_token(resp))

    def signup(self, email: str, password: str, name: str) -> SessionContext:
        resp = self._post("/auth/signup", {"email": email, "password": password, "name": name})
        if not resp.ok:
            raise PlotGateError(
                "Signup failed",
                code=PlotGateErrorCode.AUTH_FAILED,
                status_code=resp.status_code,
            )
        return self._session_from_token(self._access_token(resp))

    def logout(self, token: str | None) -> None:
        """Best-effort server logout; local cleanup is the caller's."""
        if not token:
            return
        try:
            self.session.post(
                f"{self.base_url}/auth/logout",
                headers={"Authorization": f"Bearer {token}"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning(f"Logout request failed: {exc}")

    # ------------------------------------------------------------ profile

    def fetch_profile(self, token: str) -> UserProfile | None:
        """Return the profile for ``token``, or None if it is no longer valid."""
        try:
            resp = self.session.get(
                f"{self.base_url}/profile/me",
                headers={"Authorization": f"Bearer {token}"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning(f"Profile fetch failed: {exc}")
            return None
        if not resp.ok:
            return None
        data = self._json_or_empty(resp)
        if not data:
            return None
        return UserProfile.from_dict(data)

    # -------------------------------------------------------------- admin

    def create_user(self, admin: SessionContext, user_data: dict[str, Any]) -> dict[str, Any]:
        """Create an account on behalf of an admin user."""
        profile = self.fetch_profile(admin.token)
        if profile is None or not profile.is_admin:
            raise PlotGateError("Unauthorized", code=PlotGateErrorCode.UNAUTHORIZED)

        resp = self._post("/auth/signup", user_data, headers=admin.auth_header)
        if not resp.ok:
            raise PlotGateError(
                "Failed to create user",
                code=PlotGateErrorCode.AUTH_FAILED,
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as exc:
            raise PlotGateError(
                f"Create user response is not JSON: {exc}",
                code=PlotGateErrorCode.AUTH_FAILED,
                status_code=resp.status_code,
            ) from exc

    # ----------------------------------------------------------- internal

    def _post(
        self, path: str, body: dict[str, Any], headers: dict[str, str] | None = None,
    ) -> requests.Response:
        try:
            return self.session.post(
                f"{self.base_url}{path}", json=body, headers=headers, timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise PlotGateError(
                f"POST {path} failed: {exc}",
                code=PlotGateErrorCode.AUTH_FAILED,
                retryable=True,
            ) from exc

    def _session_from_token(self, token: str) -> SessionContext:
        profile = self.fetch_profile(token)
        if profile is None:
            raise PlotGateError(
                "Could not load profile for new session",
                code=PlotGateErrorCode.AUTH_FAILED,
            )
        return SessionContext(user_id=profile.id, token=token)

    @staticmethod
    def _access_token(resp: requests.Response) -> str:
        token = AuthClient._json_or_empty(resp).get("access_token")
        if not token:
            raise PlotGateError(
                "Response has no access_token",
                code=PlotGateErrorCode.AUTH_FAILED,
                status_code=resp.status_code,
            )
        return token

    @staticmethod
    def _json_or_empty(resp: requests.Response) -> dict[str, Any]:
        try:
            data = resp.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}

    @staticmethod
    def _describe_device(info: Any) -> str:
        if not isinstance(info, dict):
            return "another device"
        return (
            f"{info.get('deviceType', 'unknown')} "
            f"({info.get('browser', 'unknown')} on {info.get('os', 'unknown')})"
        )
