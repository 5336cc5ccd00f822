"""Session, profile and credential models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True)
class SessionContext:
    """Explicit per-user session passed to gates and forwarders.

    Attributes:
        user_id: Identifier of the signed-in user.
        token: Bearer token for the API.
    """

    user_id: str
    token: str

    @property
    def auth_header(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


@dataclass(frozen=True)
class ServiceCredentials:
    """Charting-service login fields submitted by the user."""

    username: str
    password: str

    def to_wire(self) -> dict[str, str]:
        return {"username": self.username, "password": self.password}

    def __repr__(self) -> str:
        return f"ServiceCredentials(username={self.username!r}, password='***')"


@dataclass(frozen=True)
class UserProfile:
    """Profile of the signed-in user as returned by ``/profile/me``."""

    id: str
    email: str
    name: str | None = None
    role: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> UserProfile:
        user_id = raw.get("id", raw.get("_id", ""))
        known = {"id", "_id", "email", "name", "role"}
        return cls(
            id=str(user_id),
            email=str(raw.get("email", "")),
            name=raw.get("name"),
            role=raw.get("role"),
            extra={k: v for k, v in raw.items() if k not in known},
        )
