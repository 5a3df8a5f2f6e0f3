"""Cross-reference coverage gaps against the allocated outfit buckets."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence

from models.coverage import CoverageGap
from models.outfit import ScenarioOutfitBucket

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CrossReferenceResult:
    gaps_without_outfits: List[CoverageGap]
    diagnostics: Dict[str, object]


def outfits_for_slot(buckets: Sequence[ScenarioOutfitBucket], season: str, scenario_name: str) -> int:
    """Total outfits in buckets whose season and scenario equal the slot, ignoring case."""

    season_key = season.lower()
    scenario_key = scenario_name.lower()
    return sum(
        len(bucket.outfits or [])
        for bucket in buckets
        if bucket.season
        and bucket.scenario
        and bucket.season.lower() == season_key
        and bucket.scenario.lower() == scenario_key
    )


def cross_reference_coverage(
    coverage: Sequence[CoverageGap] | None, buckets: Sequence[ScenarioOutfitBucket] | None
) -> CrossReferenceResult:
    """Find actionable gaps for which the allocation holds zero outfits.

    Only gaps typed critical, improvement or expansion with a specific season
    and scenario are considered; the rest are not tied to a single slot.
    """

    rows = list(coverage or [])
    actionable = [gap for gap in rows if gap.is_actionable]
    missing: List[CoverageGap] = []
    matched: Dict[str, int] = {}
    for gap in actionable:
        found = outfits_for_slot(buckets or [], gap.season, gap.scenario_name)
        if found:
            matched[gap.description] = found
            logger.debug("Coverage '%s' (%s) has %s outfit(s)", gap.description, gap.gap_type, found)
        else:
            missing.append(gap)
            logger.info("Coverage '%s' (%s) has no outfits despite the gap", gap.description, gap.gap_type)

    return CrossReferenceResult(
        gaps_without_outfits=missing,
        diagnostics={
            "coverage_rows": len(rows),
            "actionable_rows": len(actionable),
            "gaps_with_outfits": matched,
            "gaps_without_outfits": len(missing),
        },
    )


def find_gaps_without_outfits(
    coverage: Sequence[CoverageGap] | None, buckets: Sequence[ScenarioOutfitBucket] | None
) -> List[CoverageGap]:
    return cross_reference_coverage(coverage, buckets).gaps_without_outfits


__all__ = ["find_gaps_without_outfits", "cross_reference_coverage", "outfits_for_slot", "CrossReferenceResult"]
