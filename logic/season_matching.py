"""Season and scenario availability checks for wardrobe items."""

from __future__ import annotations

from typing import Iterable, List

from models.wardrobe_item import Scenario, WardrobeItem


def season_matches(item_season: str, target_season: str) -> bool:
    """Bidirectional, case-sensitive substring containment.

    A compound tag such as ``"spring/fall"`` matches ``"spring"`` and
    ``"fall"``, and a target of ``"spring/fall"`` matches items tagged just
    ``"spring"``. Empty strings never match.
    """

    if not item_season or not target_season:
        return False
    return target_season in item_season or item_season in target_season


def item_matches_season(item: WardrobeItem, season: str) -> bool:
    return any(season_matches(tag, season) for tag in item.seasons)


def item_matches_scenario(item: WardrobeItem, scenario: Scenario | None) -> bool:
    """Items without scenario assignments are available to every scenario."""

    if scenario is None or not scenario.scenario_id or not item.scenario_ids:
        return True
    return scenario.scenario_id in item.scenario_ids


def filter_available_items(
    items: Iterable[WardrobeItem], season: str, scenario: Scenario | None = None
) -> List[WardrobeItem]:
    """Keep items usable for ``season`` (and ``scenario`` when it has an id)."""

    return [item for item in items if item_matches_season(item, season) and item_matches_scenario(item, scenario)]


__all__ = ["season_matches", "item_matches_season", "item_matches_scenario", "filter_available_items"]
