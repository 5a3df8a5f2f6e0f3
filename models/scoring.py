"""Scoring inputs handed from outfit analysis to the score integrator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple, Union

from models.coverage import CoverageGap

NOT_APPLICABLE_SENTINEL = -1


@dataclass(frozen=True)
class NotApplicable:
    """Outfit analysis was intentionally skipped (accessory/outerwear items)."""

    reason: str = "outfit analysis not applicable"


@dataclass(frozen=True)
class OutfitCount:
    """Number of outfits allocated across all complete scenarios."""

    count: int

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError("OutfitCount cannot be negative; use NotApplicable instead")


OutfitAvailability = Union[NotApplicable, OutfitCount]


@dataclass(frozen=True)
class ScoringInput:
    total_outfits: OutfitAvailability
    coverage_gaps_with_no_outfits: Tuple[CoverageGap, ...] = field(default_factory=tuple)

    @property
    def is_applicable(self) -> bool:
        return isinstance(self.total_outfits, OutfitCount)

    @property
    def total_outfits_value(self) -> int:
        """Legacy integer form; ``-1`` means "not applicable", never zero."""

        if isinstance(self.total_outfits, OutfitCount):
            return self.total_outfits.count
        return NOT_APPLICABLE_SENTINEL

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_outfits": self.total_outfits_value,
            "outfit_analysis_applicable": self.is_applicable,
            "coverage_gaps_with_no_outfits": [gap.to_dict() for gap in self.coverage_gaps_with_no_outfits],
        }


@dataclass(frozen=True)
class ScoreResult:
    score: float
    reason: str
    gap_type: str | None = None
    base_score: float | None = None
    adjustments: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "reason": self.reason,
            "gap_type": self.gap_type,
            "base_score": self.base_score,
            "adjustments": list(self.adjustments),
        }


__all__ = [
    "NotApplicable",
    "OutfitCount",
    "OutfitAvailability",
    "ScoringInput",
    "ScoreResult",
    "NOT_APPLICABLE_SENTINEL",
]
