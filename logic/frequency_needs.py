"""Frequency-driven outfit and category targets for a scenario and season.

Free-text usage frequencies ("3 times per week", "daily", "rarely") are
converted into a seasonal use count, then into the number of distinct
outfits a season calls for, and finally into min/ideal/max item counts per
category. The same targets feed a per-scenario needs report that compares
them with the wardrobe and produces short shopping hints.
"""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence

from models.coverage import CategoryNeed
from models.taxonomy import NEED_CATEGORIES, ONE_PIECE, TOP, BOTTOM, TRANSITIONAL_SEASONS
from models.wardrobe_item import Scenario, WardrobeItem

logger = logging.getLogger(__name__)

STANDARD_SEASON_MONTHS = 3
TRANSITIONAL_SEASON_MONTHS = 6
DAYS_PER_MONTH = 30
WEEKS_PER_MONTH = 4.33
# Outfit needs always assume a 13 week season, even for transitional seasons.
WEEKS_PER_SEASON_FOR_VARIETY = 13
REPEAT_EVERY_USES = 4
DEFAULT_SEASONAL_USES = 5
RARE_SEASONAL_USES = 2
FREQUENT_SEASONAL_USES = 30
MAX_SEASONAL_USES = 90
LOW_COVERAGE_THRESHOLD = 80
MAX_RECOMMENDATIONS = 5

_WEEKLY = re.compile(r"(\d+)\s*times?\s*per\s*week")
_MONTHLY = re.compile(r"(\d+)\s*times?\s*per\s*month")
_ANY_NUMBER = re.compile(r"(\d+)")

# (min, ideal, max) fractions of outfits needed; ``None`` pins the bound to 0.
CATEGORY_FRACTIONS: Dict[str, tuple] = {
    "top": (0.5, 0.8, 1.2),
    "bottom": (0.3, 0.6, 0.9),
    "one_piece": (None, 0.3, 0.7),
    "outerwear": (0.1, 0.2, 0.4),
    "footwear": (0.2, 0.4, 0.6),
    "accessory": (None, 0.3, 0.5),
}
# Categories that always need at least one item.
CATEGORY_MINIMUM_FLOOR: Dict[str, int] = {"footwear": 1}


@dataclass(frozen=True)
class NeedsResult:
    outfits_needed: int
    seasonal_uses: int
    category_needs: Dict[str, CategoryNeed]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "outfits_needed": self.outfits_needed,
            "seasonal_uses": self.seasonal_uses,
            "category_needs": {category: need.to_dict() for category, need in self.category_needs.items()},
        }


@dataclass(frozen=True)
class ScenarioNeeds:
    """Needs report for one scenario in one season."""

    scenario_id: str
    scenario_name: str
    frequency: str
    season: str
    outfits_needed: int
    category_needs: Dict[str, CategoryNeed]
    outfit_strategies: Dict[str, Dict[str, Any]]
    current_items: Dict[str, int]
    gaps: Dict[str, int]
    category_coverage: Dict[str, Dict[str, int]]
    overall_coverage: int
    possible_outfits: int
    diagnostics: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scenario_id": self.scenario_id,
            "scenario_name": self.scenario_name,
            "frequency": self.frequency,
            "season": self.season,
            "outfits_needed": self.outfits_needed,
            "category_needs": {category: need.to_dict() for category, need in self.category_needs.items()},
            "outfit_strategies": self.outfit_strategies,
            "current_items": dict(self.current_items),
            "gaps": dict(self.gaps),
            "category_coverage": self.category_coverage,
            "overall_coverage": self.overall_coverage,
            "possible_outfits": self.possible_outfits,
        }


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def season_duration_months(season: str) -> int:
    if (season or "").strip().lower() in TRANSITIONAL_SEASONS:
        return TRANSITIONAL_SEASON_MONTHS
    return STANDARD_SEASON_MONTHS


def parse_frequency_to_seasonal_use(frequency_text: str | None, season: str) -> int:
    """Estimate how many times a scenario occurs during ``season``.

    Recognised phrasings are checked in a fixed order: daily, weekly, monthly,
    rarely, often, then any number (x4, capped at 90). Anything else,
    including empty text, counts as 5 uses.
    """

    text = (frequency_text or "").strip().lower()
    if not text:
        return DEFAULT_SEASONAL_USES

    months = season_duration_months(season)
    weeks = round(months * WEEKS_PER_MONTH)

    if "daily" in text or "every day" in text:
        return months * DAYS_PER_MONTH

    if "per week" in text or "weekly" in text:
        match = _WEEKLY.search(text)
        if match:
            return int(match.group(1)) * weeks
        if "twice" in text:
            return 2 * weeks
        if "weekly" in text:
            return weeks

    if "per month" in text or "monthly" in text:
        match = _MONTHLY.search(text)
        if match:
            return int(match.group(1)) * months
        if "twice" in text:
            return 2 * months
        if "monthly" in text:
            return months

    if "rarely" in text or "seldom" in text:
        return RARE_SEASONAL_USES

    if "often" in text or "frequently" in text:
        return FREQUENT_SEASONAL_USES

    match = _ANY_NUMBER.search(text)
    if match:
        return min(int(match.group(1)) * 4, MAX_SEASONAL_USES)

    logger.debug("Unrecognised frequency '%s' - using default of %s uses", frequency_text, DEFAULT_SEASONAL_USES)
    return DEFAULT_SEASONAL_USES


def calculate_outfit_needs(seasonal_uses: int) -> int:
    """Outfits needed so nothing repeats within a week of heavy use.

    At most one use a week an outfit may repeat every fourth wear; above
    that twice the weekly use rate is needed.
    """

    uses_per_week = seasonal_uses / WEEKS_PER_SEASON_FOR_VARIETY
    if uses_per_week <= 1:
        return max(1, math.ceil(seasonal_uses / REPEAT_EVERY_USES))
    return math.ceil(uses_per_week * 2)


def calculate_category_needs(outfits_needed: int) -> Dict[str, CategoryNeed]:
    needs: Dict[str, CategoryNeed] = {}
    for category in NEED_CATEGORIES:
        low, ideal, high = CATEGORY_FRACTIONS[category]
        minimum = 0 if low is None else math.ceil(outfits_needed * low)
        minimum = max(CATEGORY_MINIMUM_FLOOR.get(category, 0), minimum)
        needs[category] = CategoryNeed(
            min=minimum,
            ideal=max(minimum, math.ceil(outfits_needed * ideal)),
            max=max(minimum, math.ceil(outfits_needed * high)),
        )
    return needs


def outfit_strategies(outfits_needed: int) -> Dict[str, Dict[str, Any]]:
    """Alternative wardrobe shapes that would cover ``outfits_needed``."""

    def share(fraction: float) -> int:
        return math.ceil(outfits_needed * fraction)

    return {
        "separates_focused": {
            "tops": share(0.9),
            "bottoms": share(0.7),
            "description": f"Focus on {share(0.9)} versatile tops + {share(0.7)} bottoms for mix-and-match flexibility",
        },
        "dress_focused": {
            "one_piece": share(0.6),
            "tops": share(0.3),
            "description": f"Build around {share(0.6)} dresses/one-pieces with {share(0.3)} tops for layering",
        },
        "balanced": {
            "tops": share(0.6),
            "bottoms": share(0.4),
            "one_piece": share(0.3),
            "description": f"Balanced approach: {share(0.6)} tops, {share(0.4)} bottoms, {share(0.3)} dresses",
        },
    }


def calculate_needs(frequency_text: str | None, season: str) -> NeedsResult:
    seasonal_uses = parse_frequency_to_seasonal_use(frequency_text, season)
    outfits_needed = calculate_outfit_needs(seasonal_uses)
    return NeedsResult(
        outfits_needed=outfits_needed,
        seasonal_uses=seasonal_uses,
        category_needs=calculate_category_needs(outfits_needed),
    )


def _coverage_percent(current: int, needed: int) -> int:
    if needed <= 0:
        return 100
    return min(100, _round_half_up(current / needed * 100))


def _scenario_items(items: Iterable[WardrobeItem], scenario: Scenario, season: str) -> List[WardrobeItem]:
    """Items assigned to ``scenario`` that are untagged or tagged exactly ``season``."""

    return [
        item
        for item in items
        if scenario.scenario_id in item.scenario_ids and (not item.seasons or season in item.seasons)
    ]


def calculate_scenario_needs(items: Sequence[WardrobeItem], scenario: Scenario, season: str) -> ScenarioNeeds:
    needs = calculate_needs(scenario.frequency, season)
    scenario_items = _scenario_items(items, scenario, season)
    current = {category: sum(1 for item in scenario_items if item.category == category) for category in NEED_CATEGORIES}
    gaps = {category: max(0, needs.category_needs[category].ideal - current[category]) for category in NEED_CATEGORIES}
    possible_outfits = min(current[TOP], current[BOTTOM]) + current[ONE_PIECE]
    overall = _coverage_percent(possible_outfits, needs.outfits_needed)
    category_coverage = {
        category: {
            "current": current[category],
            "needed": needs.category_needs[category].ideal,
            "coverage": _coverage_percent(current[category], needs.category_needs[category].ideal),
        }
        for category in NEED_CATEGORIES
    }
    logger.info(
        "%s: %s/%s outfits (%s%%) for %s",
        scenario.name,
        possible_outfits,
        needs.outfits_needed,
        overall,
        season,
    )
    return ScenarioNeeds(
        scenario_id=scenario.scenario_id,
        scenario_name=scenario.name,
        frequency=scenario.frequency,
        season=season,
        outfits_needed=needs.outfits_needed,
        category_needs=needs.category_needs,
        outfit_strategies=outfit_strategies(needs.outfits_needed),
        current_items=current,
        gaps=gaps,
        category_coverage=category_coverage,
        overall_coverage=overall,
        possible_outfits=possible_outfits,
        diagnostics={"seasonal_uses": needs.seasonal_uses, "matched_items": len(scenario_items)},
    )


def calculate_frequency_based_needs(
    items: Sequence[WardrobeItem], scenarios: Sequence[Scenario], season: str
) -> List[ScenarioNeeds]:
    """Build one needs report per scenario, in scenario order."""

    logger.info("Calculating frequency-based needs for %s scenarios in %s", len(scenarios), season)
    return [calculate_scenario_needs(items, scenario, season) for scenario in scenarios]


def frequency_recommendations(needs: Sequence[ScenarioNeeds]) -> List[str]:
    """Shopping hints for under-covered scenarios, most demanding first."""

    under_covered = sorted(
        (need for need in needs if need.overall_coverage < LOW_COVERAGE_THRESHOLD),
        key=lambda need: need.outfits_needed,
        reverse=True,
    )
    recommendations: List[str] = []
    for need in under_covered[:3]:
        biggest = sorted(
            ((category, count) for category, count in need.gaps.items() if count > 0),
            key=lambda entry: entry[1],
            reverse=True,
        )[:2]
        for category, count in biggest:
            recommendations.append(f'Add {count} more {category} for "{need.scenario_name}" (used {need.frequency})')
    return recommendations[:MAX_RECOMMENDATIONS]


__all__ = [
    "calculate_needs",
    "calculate_outfit_needs",
    "calculate_category_needs",
    "calculate_scenario_needs",
    "calculate_frequency_based_needs",
    "frequency_recommendations",
    "outfit_strategies",
    "parse_frequency_to_seasonal_use",
    "season_duration_months",
    "NeedsResult",
    "ScenarioNeeds",
]
