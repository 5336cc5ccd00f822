"""plotgate models."""

from plotgate.models.action import CLICK_SOURCE, TrendlineAction
from plotgate.models.point import PriceField, SeriesPoint
from plotgate.models.scale import ScaleParams
from plotgate.models.session import ServiceCredentials, SessionContext, UserProfile

__all__ = [
    "CLICK_SOURCE",
    "TrendlineAction",
    "PriceField",
    "SeriesPoint",
    "ScaleParams",
    "ServiceCredentials",
    "SessionContext",
    "UserProfile",
]
