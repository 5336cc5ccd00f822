"""Precondition checks for trendline actions and upload results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from plotgate.models.action import CLICK_SOURCE, TrendlineAction
from plotgate.models.point import PriceField

REQUIRED_ACTION_FIELDS = ("symbol", "timeframe", "price", "volume", "timestamp")


@dataclass
class ValidationCheck:
    """Single validation check result."""

    name: str
    passed: bool
    message: str = ""


@dataclass
class ValidationResult:
    """Aggregate validation result."""

    checks: list[ValidationCheck] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)

    @property
    def failed_checks(self) -> list[ValidationCheck]:
        return [c for c in self.checks if not c.passed]

    @property
    def summary(self) -> str:
        return "; ".join(c.message for c in self.failed_checks)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def validate_action(action: TrendlineAction) -> ValidationResult:
    """Check that a chart event carries full context and came from a click.

    Checks:
        1. symbol, timeframe, price, volume, timestamp are non-empty
           (``None`` or a blank string; numeric zero counts as present)
        2. source is exactly ``"click"``
    """
    result = ValidationResult()

    missing = [name for name in REQUIRED_ACTION_FIELDS if _is_empty(getattr(action, name))]
    if missing:
        result.checks.append(
            ValidationCheck("required_fields", False, f"missing {', '.join(missing)}")
        )
    else:
        result.checks.append(ValidationCheck("required_fields", True))

    if action.source != CLICK_SOURCE:
        result.checks.append(
            ValidationCheck("click_source", False, f"source is {action.source!r}, not 'click'")
        )
    else:
        result.checks.append(ValidationCheck("click_source", True))

    return result


def validate_upload_result(result_data: Any) -> ValidationResult:
    """Check that all four ``volume_vs_*`` series are present and are sequences."""
    result = ValidationResult()

    if not isinstance(result_data, Mapping):
        result.checks.append(
            ValidationCheck("is_mapping", False, f"expected an object, got {type(result_data).__name__}")
        )
        return result
    result.checks.append(ValidationCheck("is_mapping", True))

    for pf in PriceField:
        key = pf.series_key
        series = result_data.get(key)
        if series is None:
            result.checks.append(ValidationCheck(key, False, f"{key} missing"))
        elif isinstance(series, (str, bytes)) or not isinstance(series, Sequence):
            result.checks.append(ValidationCheck(key, False, f"{key} is not a sequence"))
        elif not all(isinstance(p, Mapping) for p in series):
            result.checks.append(ValidationCheck(key, False, f"{key} has non-object points"))
        else:
            result.checks.append(ValidationCheck(key, True, f"{len(series)} points"))

    return result
