"""Axis scale parameters."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScaleParams:
    """Volume-axis scaling derived from a series' volume values.

    Attributes:
        use_log_scale: Render the volume axis logarithmically.
        suggested_max: Suggested axis maximum, or None to let the
            renderer choose (always None on a log axis).
    """

    use_log_scale: bool
    suggested_max: float | None = None

    def to_dict(self) -> dict:
        return {
            "useLogScale": self.use_log_scale,
            "suggestedMax": self.suggested_max,
        }
