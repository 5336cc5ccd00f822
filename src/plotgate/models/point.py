"""Series point data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from plotgate.classifier import to_number


class PriceField(Enum):
    """Price field plotted against volume."""

    OPEN = "open"
    CLOSE = "close"
    HIGH = "high"
    LOW = "low"

    @property
    def series_key(self) -> str:
        """Key of this series in an upload result, e.g. ``volume_vs_open``."""
        return f"volume_vs_{self.value}"

    @classmethod
    def coerce(cls, value: PriceField | str) -> PriceField:
        if isinstance(value, cls):
            return value
        return cls(str(value).lower())


_CORE_KEYS = {"time", "volume"} | {f.value for f in PriceField}


@dataclass(frozen=True)
class SeriesPoint:
    """Single point of a price-vs-volume series.

    Attributes:
        time: Time label as supplied by the upload processor.
        volume: Traded volume (NaN when the source value is not numeric).
        prices: Price fields present on the point, keyed by field name.
            Values are kept as supplied (number or numeric string).
        extra: Any other fields, passed through untouched.
    """

    time: str
    volume: float
    prices: Mapping[str, Any] = field(default_factory=dict)
    extra: Mapping[str, Any] = field(default_factory=dict)

    def price(self, price_field: PriceField | str) -> Any:
        """Raw price value for ``price_field`` (None when absent)."""
        return self.prices.get(PriceField.coerce(price_field).value)

    def numeric_price(self, price_field: PriceField | str) -> float:
        return to_number(self.price(price_field))

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> SeriesPoint:
        prices = {f.value: raw[f.value] for f in PriceField if f.value in raw}
        extra = {k: v for k, v in raw.items() if k not in _CORE_KEYS}
        time = raw.get("time")
        return cls(
            time="" if time is None else str(time),
            volume=to_number(raw.get("volume")),
            prices=prices,
            extra=extra,
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = dict(self.extra)
        out.update(self.prices)
        out["time"] = self.time
        out["volume"] = self.volume
        return out
