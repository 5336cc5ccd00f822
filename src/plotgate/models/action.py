"""Trendline action payload — the unit the dispatcher gates and forwards."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

CLICK_SOURCE = "click"

# Wire / camelCase names accepted by ``from_dict`` for each attribute.
_ALIASES: dict[str, tuple[str, ...]] = {
    "color": ("trendline_color", "color"),
    "credential_token": ("jwt_token", "credentialToken", "credential_token"),
    "window_start": ("start_time", "windowStart", "window_start"),
    "window_end": ("end_time", "windowEnd", "window_end"),
}


@dataclass(frozen=True)
class TrendlineAction:
    """Chart interaction that should draw a trendline on the charting service.

    Attributes:
        symbol: Instrument symbol.
        timeframe: Chart timeframe, e.g. ``"1h"``.
        price: Clicked price (number or numeric string).
        volume: Volume at the clicked point.
        timestamp: Time label of the clicked point.
        source: Origin of the event; only ``"click"`` is dispatched.
        color: Trendline color.
        credential_token: Session token sent along as ``jwt_token``.
        window_start: Start of the visible time window.
        window_end: End of the visible time window.
    """

    symbol: str | None = None
    timeframe: str | None = None
    price: Any = None
    volume: Any = None
    timestamp: str | None = None
    source: str | None = CLICK_SOURCE
    color: str | None = None
    credential_token: str | None = None
    window_start: str | None = None
    window_end: str | None = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> TrendlineAction:
        kwargs: dict[str, Any] = {}
        for f in fields(cls):
            for key in _ALIASES.get(f.name, (f.name,)):
                if key in raw:
                    kwargs[f.name] = raw[key]
                    break
        return cls(**kwargs)

    def to_wire(self) -> dict[str, Any]:
        """Request body for the trendline endpoint."""
        return {
            "symbol": self.symbol,
            "timeframe": self.timeframe,
            "price": self.price,
            "volume": self.volume,
            "timestamp": self.timestamp,
            "source": self.source,
            "trendline_color": self.color,
            "jwt_token": self.credential_token,
            "start_time": self.window_start,
            "end_time": self.window_end,
        }
