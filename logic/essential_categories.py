"""Essential-category completeness checks for season and scenario pairs.

An item can only anchor an outfit when the wardrobe holds at least one
season-matching item in each of its complementary categories, e.g. a top
needs a bottom and footwear. The fixed requirement table lives in
:mod:`models.taxonomy`.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from logic.item_pool import CompatiblePool, flatten_pool
from logic.season_matching import filter_available_items
from models.outfit import SeasonScenarioCombination
from models.taxonomy import (
    ESSENTIAL_CATEGORIES,
    FOOTWEAR,
    essential_categories_for,
    is_home_scenario,
    normalize_category,
)
from models.wardrobe_item import Scenario, WardrobeItem

logger = logging.getLogger(__name__)


def _as_scenario(scenario: Scenario | str | None) -> Scenario | None:
    if scenario is None or isinstance(scenario, Scenario):
        return scenario
    return Scenario(scenario_id="", name=str(scenario))


def required_categories(
    analyzed_item: WardrobeItem, scenario: Scenario | None = None, relax_footwear_for_home: bool = False
) -> List[str]:
    category = normalize_category(analyzed_item.category)
    if category not in ESSENTIAL_CATEGORIES:
        logger.info("Unknown item category %s - treating as no requirements", category)
    required = list(essential_categories_for(category))
    if relax_footwear_for_home and scenario is not None and is_home_scenario(scenario.name) and FOOTWEAR in required:
        required.remove(FOOTWEAR)
        logger.info("Home scenario '%s' - footwear requirement removed", scenario.name)
    return required


def evaluate_essentials(
    analyzed_item: WardrobeItem,
    pool: CompatiblePool | Iterable[WardrobeItem] | None,
    season: str,
    scenario: Scenario | str | None = None,
    relax_footwear_for_home: bool = False,
) -> SeasonScenarioCombination:
    """Decide whether ``pool`` completes an outfit for ``season`` and ``scenario``."""

    scenario_obj = _as_scenario(scenario)
    required = required_categories(analyzed_item, scenario_obj, relax_footwear_for_home)
    available_items = filter_available_items(flatten_pool(pool), season, scenario_obj)
    present = {normalize_category(item.category) for item in available_items}

    available = tuple(category for category in required if category in present)
    missing = tuple(category for category in required if category not in present)
    logger.debug(
        "Essentials for %s in %s/%s: required=%s missing=%s (%s items in season)",
        analyzed_item.category,
        season,
        scenario_obj.name if scenario_obj else None,
        required,
        list(missing),
        len(available_items),
    )
    return SeasonScenarioCombination(
        season=season,
        scenario=scenario_obj.name if scenario_obj else "",
        scenario_id=(scenario_obj.scenario_id or None) if scenario_obj else None,
        missing_categories=missing,
        available_categories=available,
        required_categories=tuple(required),
    )


def create_season_scenario_combinations(
    analyzed_item: WardrobeItem,
    pool: CompatiblePool | Iterable[WardrobeItem] | None,
    seasons: Sequence[str],
    scenarios: Sequence[Scenario | str],
    relax_footwear_for_home: bool = False,
) -> List[SeasonScenarioCombination]:
    """Evaluate every season x scenario pair, seasons as the outer loop."""

    if not seasons or not scenarios:
        logger.info(
            "Cannot create season-scenario combinations: seasons=%s scenarios=%s", len(seasons or []), len(scenarios or [])
        )
        return []

    flattened = flatten_pool(pool)
    combinations = [
        evaluate_essentials(analyzed_item, flattened, season, scenario, relax_footwear_for_home)
        for season in seasons
        for scenario in scenarios
    ]
    complete = sum(1 for combo in combinations if combo.has_all_essentials)
    logger.info("Coverage: %s/%s combinations have complete outfits", complete, len(combinations))
    return combinations


__all__ = ["evaluate_essentials", "create_season_scenario_combinations", "required_categories"]
