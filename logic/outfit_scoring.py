"""Purchase-recommendation scoring from coverage gaps and outfit availability.

The base score comes from the most critical coverage gap relevant to the
item's suitable scenarios. Outfit analysis then adjusts it: an item that
cannot be styled at all loses 3 points, and an item with only one or two
outfits while several gaps still have no outfits loses 2. Scores never drop
below 1.0.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from models.coverage import ALL_SCENARIOS, CoverageGap
from models.outfit import ScenarioOutfitBucket
from models.scoring import NotApplicable, OutfitAvailability, OutfitCount, ScoreResult, ScoringInput
from models.taxonomy import ACCESSORY, ONE_PIECE, normalize_category

logger = logging.getLogger(__name__)

CONSTRAINT_GOALS = frozenset({"buy-less-shop-more-intentionally", "declutter-downsize", "save-money"})
STANDARD_SCORES = {"critical": 10.0, "improvement": 9.0, "expansion": 8.0, "satisfied": 6.0, "oversaturated": 3.0}
CONSTRAINED_SCORES = {"critical": 10.0, "improvement": 9.0, "expansion": 6.0, "satisfied": 4.0, "oversaturated": 2.0}
DEFAULT_SCORE = 5.0
MIN_SCORE = 1.0
NO_OUTFITS_PENALTY = 3.0
LIMITED_UTILITY_PENALTY = 2.0
LIMITED_UTILITY_MAX_OUTFITS = 2
LIMITED_UTILITY_MIN_GAPS = 2

NO_COVERAGE_REASON = "No coverage data available for analysis."
ERROR_REASON = "Error in outfit analysis"
NO_OUTFITS_MESSAGE = "Unfortunately, you don't have the right pieces in your wardrobe to style this item."
LIMITED_UTILITY_MESSAGE = "However, you're missing several key pieces to style this for all occasions."

_GAP_PRIORITY = {"critical": 0, "improvement": 1, "expansion": 2}
_FRIENDLY_CATEGORY = {
    "top": "tops",
    "bottom": "bottoms",
    "footwear": "shoes",
    "outerwear": "outerwear",
    "accessory": "accessories",
}
_MASS_NOUNS = {"outerwear", "footwear", "sleepwear", "activewear", "underwear"}
_NON_SEASONAL_ACCESSORIES = {"bag", "belt", "jewelry", "watch", "sunglasses"}
_MAIN_SEASONS = ("summer", "winter", "spring/fall")


def build_scoring_input(
    buckets: Sequence[ScenarioOutfitBucket] | None,
    gaps_without_outfits: Iterable[CoverageGap] = (),
    applicable: bool = True,
) -> ScoringInput:
    """Summarise the allocation for the score integrator.

    Non-applicable analyses (accessory and outerwear items) carry no gaps.
    """

    if not applicable:
        return ScoringInput(total_outfits=NotApplicable(), coverage_gaps_with_no_outfits=())
    total = sum(len(bucket.outfits) for bucket in buckets or [])
    return ScoringInput(total_outfits=OutfitCount(total), coverage_gaps_with_no_outfits=tuple(gaps_without_outfits))


def relevant_coverage(coverage: Sequence[CoverageGap], suitable_scenarios: Sequence[str]) -> List[CoverageGap]:
    """Rows matching a suitable scenario by case-insensitive containment.

    "All scenarios" rows are always kept. When nothing matches, every row is
    returned.
    """

    if not suitable_scenarios:
        return list(coverage)
    names = [name.lower() for name in suitable_scenarios if name]
    selected = []
    for gap in coverage:
        scenario = (gap.scenario_name or "").lower()
        if ALL_SCENARIOS.lower() in scenario or any(name in scenario or scenario in name for name in names):
            selected.append(gap)
    return selected or list(coverage)


def most_critical_gap_type(coverage: Iterable[CoverageGap]) -> str | None:
    """critical > improvement > expansion; other types keep the first one seen."""

    chosen: str | None = None
    for gap in coverage:
        if not gap.gap_type:
            continue
        if chosen is None or _GAP_PRIORITY.get(gap.gap_type, 3) < _GAP_PRIORITY.get(chosen, 3):
            chosen = gap.gap_type
    return chosen


def base_score(gap_type: str | None, user_goals: Iterable[str] = ()) -> float:
    table = CONSTRAINED_SCORES if has_constraint_goals(user_goals) else STANDARD_SCORES
    return table.get(gap_type or "", DEFAULT_SCORE)


def has_constraint_goals(user_goals: Iterable[str]) -> bool:
    return any(goal in CONSTRAINT_GOALS for goal in user_goals or ())


def _item_type(category: str, subcategory: str | None) -> str | None:
    """Reader-friendly plural for the category; ``None`` means use generic wording."""

    item_type = (category or "this category").lower()
    if item_type == ACCESSORY and subcategory:
        item_type = subcategory.lower()
    if item_type in (ONE_PIECE, "one_pieces"):
        return None
    if item_type in _FRIENDLY_CATEGORY:
        return _FRIENDLY_CATEGORY[item_type]
    if not item_type.endswith("s") and item_type not in _MASS_NOUNS:
        item_type += "s"
    return item_type


def format_seasons(seasons: Iterable[str]) -> str:
    unique: List[str] = []
    for season in seasons:
        if season not in unique:
            unique.append(season)
    if len(unique) == len(_MAIN_SEASONS) and all(season in unique for season in _MAIN_SEASONS):
        return "all seasons"
    return " and ".join(unique)


def _season_phrase(coverage: Sequence[CoverageGap], prioritized: CoverageGap, seasonal: bool) -> str | None:
    if not seasonal:
        return None
    seasons = [gap.season for gap in coverage if gap.season and gap.season != "all_seasons"]
    if len(seasons) > 1:
        return format_seasons(seasons)
    if prioritized.season and prioritized.season != "all_seasons":
        return prioritized.season
    return None


def _worst_gap(coverage: Sequence[CoverageGap]) -> CoverageGap:
    return min(coverage, key=lambda gap: (-gap.gap_count, gap.coverage_percent))


def _best_gap(coverage: Sequence[CoverageGap]) -> CoverageGap:
    return min(coverage, key=lambda gap: (gap.gap_count, -gap.coverage_percent))


def build_reason(
    coverage: Sequence[CoverageGap],
    gap_type: str | None,
    category: str,
    subcategory: str | None = None,
    suitable_scenarios: Sequence[str] = (),
    constrained: bool = False,
) -> str:
    """Human-readable explanation of the base score."""

    if not coverage:
        return NO_COVERAGE_REASON

    item_type = _item_type(category, subcategory)
    generic = item_type is None or normalize_category(category) == ONE_PIECE
    seasonal = not (subcategory and subcategory.lower() in _NON_SEASONAL_ACCESSORIES)

    if gap_type in ("critical", "improvement"):
        worst = _worst_gap(coverage)
        seasons = _season_phrase(coverage, worst, seasonal)
        if generic:
            opening = "This could add versatility" if gap_type == "critical" else "This could add a different styling option"
            reason = f"{opening} for {worst.scenario_name}"
            if seasons:
                reason += f" in {seasons}"
            closing = (
                ", even if you already have separates that work."
                if gap_type == "critical"
                else ", complementing your existing separates."
            )
            return reason + closing
        if gap_type == "critical":
            reason = f"You're missing essential {item_type} pieces"
            if seasons:
                reason += f" for {seasons}"
            if worst.scenario_name != ALL_SCENARIOS:
                reason += f" for {worst.scenario_name}"
            return reason + ". This could be a great addition to fill that gap!"
        reason = f"Your {item_type} collection could use some variety"
        if seasons:
            reason += f" for {seasons}"
        coverage_names = [gap.scenario_name for gap in coverage if gap.scenario_name and gap.scenario_name != ALL_SCENARIOS]
        if coverage_names and suitable_scenarios:
            names = [name for name in suitable_scenarios if name and name != ALL_SCENARIOS]
        else:
            names = list(dict.fromkeys(coverage_names))
        if names:
            reason += f", especially for {' and '.join(names)}"
        return reason + ". This would be a nice addition!"

    if gap_type == "expansion":
        worst = _worst_gap(coverage)
        seasons = _season_phrase(coverage, worst, seasonal)
        if generic:
            reason = f"You have good coverage for {worst.scenario_name}"
            if seasons:
                reason += f" in {seasons}"
        else:
            reason = f"You have good coverage in {item_type}"
            if seasons:
                reason += f" for {seasons}"
            if worst.scenario_name != ALL_SCENARIOS:
                reason += f" for {worst.scenario_name}"
        suffix = ". Maybe skip unless it's really special?" if constrained else ", so this would be nice-to-have rather than essential."
        return reason + suffix

    if gap_type in ("satisfied", "oversaturated"):
        best = _best_gap(coverage)
        seasons = _season_phrase(coverage, best, seasonal)
        if gap_type == "satisfied":
            reason = "You're well-stocked" if item_type is None else f"You're well-stocked with {item_type}"
        else:
            reason = (
                "You already have plenty in this category" if item_type is None else f"You already have plenty of {item_type}"
            )
        if seasons:
            reason += f" for {seasons}"
        if best.scenario_name != ALL_SCENARIOS:
            reason += f" for {best.scenario_name}"
        if gap_type == "oversaturated":
            return reason + "."
        return reason + (". This might be a pass." if constrained else ". Only consider if it offers something truly unique.")

    return "Based on your current wardrobe, this would be a moderate priority."


def apply_outfit_adjustments(score: float, reason: str, availability: OutfitAvailability, gaps_without_outfits: int):
    """Return ``(score, reason, adjustments)`` after outfit-based penalties."""

    if isinstance(availability, NotApplicable):
        return score, reason, ()
    if availability.count == 0:
        return max(MIN_SCORE, score - NO_OUTFITS_PENALTY), f"{reason} {NO_OUTFITS_MESSAGE}", ("no_outfits",)
    if availability.count <= LIMITED_UTILITY_MAX_OUTFITS and gaps_without_outfits >= LIMITED_UTILITY_MIN_GAPS:
        return max(MIN_SCORE, score - LIMITED_UTILITY_PENALTY), f"{reason} {LIMITED_UTILITY_MESSAGE}", ("limited_utility",)
    return score, reason, ()


def score_item(
    category: str,
    coverage: Sequence[CoverageGap] | None,
    suitable_scenarios: Sequence[str] = (),
    user_goals: Sequence[str] = (),
    scoring_input: ScoringInput | None = None,
    subcategory: str | None = None,
) -> ScoreResult:
    """Fold coverage gaps and outfit availability into a single score."""

    rows = list(coverage or [])
    if not rows:
        return ScoreResult(score=DEFAULT_SCORE, reason=NO_COVERAGE_REASON, gap_type=None, base_score=DEFAULT_SCORE)

    relevant = relevant_coverage(rows, suitable_scenarios)
    gap_type = most_critical_gap_type(relevant)
    constrained = has_constraint_goals(user_goals)
    initial = base_score(gap_type, user_goals)
    reason = build_reason(relevant, gap_type, category, subcategory, suitable_scenarios, constrained)

    score, adjustments = initial, ()
    if scoring_input is not None:
        score, reason, adjustments = apply_outfit_adjustments(
            initial, reason, scoring_input.total_outfits, len(scoring_input.coverage_gaps_with_no_outfits)
        )
    logger.info(
        "Scored %s item: gap_type=%s base=%s final=%s adjustments=%s",
        category,
        gap_type,
        initial,
        score,
        list(adjustments),
    )
    return ScoreResult(score=score, reason=reason, gap_type=gap_type, base_score=initial, adjustments=tuple(adjustments))


__all__ = [
    "build_scoring_input",
    "score_item",
    "build_reason",
    "relevant_coverage",
    "most_critical_gap_type",
    "base_score",
    "apply_outfit_adjustments",
    "format_seasons",
    "ERROR_REASON",
    "NO_COVERAGE_REASON",
    "NO_OUTFITS_MESSAGE",
    "LIMITED_UTILITY_MESSAGE",
]
