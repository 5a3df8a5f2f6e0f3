"""Coverage gap and category-need records."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

GAP_TYPES = ("critical", "improvement", "expansion", "satisfied", "oversaturated")
ACTIONABLE_GAP_TYPES = frozenset({"critical", "improvement", "expansion"})
ALL_SEASONS = "All seasons"
ALL_SCENARIOS = "All scenarios"


@dataclass(frozen=True)
class CoverageGap:
    """A coverage row produced by the external coverage tracker."""

    category: str
    season: str
    scenario_name: str
    gap_type: str | None = None
    gap_count: int = 0
    coverage_percent: float = 0

    @property
    def description(self) -> str:
        return f"{self.category} for {self.season} for {self.scenario_name}"

    @property
    def is_actionable(self) -> bool:
        """True for gaps that suggest room for a purchase in a specific slot."""

        return (
            self.gap_type in ACTIONABLE_GAP_TYPES
            and bool(self.season)
            and self.season != ALL_SEASONS
            and bool(self.scenario_name)
            and self.scenario_name != ALL_SCENARIOS
        )

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["description"] = self.description
        return payload


@dataclass(frozen=True)
class CategoryNeed:
    """Item-count targets for one category; ``min <= ideal <= max``."""

    min: int
    ideal: int
    max: int

    def __post_init__(self) -> None:
        if not 0 <= self.min <= self.ideal <= self.max:
            raise ValueError(f"Invalid category need range: {self.min}/{self.ideal}/{self.max}")

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


__all__ = [
    "CoverageGap",
    "CategoryNeed",
    "GAP_TYPES",
    "ACTIONABLE_GAP_TYPES",
    "ALL_SEASONS",
    "ALL_SCENARIOS",
]
