from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import HoursMode
from .policies.base import HoursPolicy
from .policies.derived_policy import DerivedHoursPolicy
from .policies.manual_policy import ManualHoursPolicy


@dataclass
class HoursPolicyFactory:
    """Factory Pattern: choose the hours policy from configuration."""

    def for_mode(self, mode: HoursMode | str) -> HoursPolicy:
        if HoursMode(mode) == HoursMode.DERIVED:
            return DerivedHoursPolicy()
        return ManualHoursPolicy()
