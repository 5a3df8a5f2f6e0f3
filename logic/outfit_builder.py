"""Deterministic outfit assembly with transparent diagnostics.

The category of the analyzed item selects a construction strategy. Every
strategy is a generator so enumeration order is explicit and the builder cap
only consumes what it returns. Optional layers are picked by rotation,
``candidates[index % len(candidates)]``, over immutable tuples.
"""
from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Mapping, Sequence, Tuple

from logic.item_pool import CompatiblePool, normalize_pool
from models.outfit import Outfit
from models.taxonomy import (
    ACCESSORY,
    BOTTOM,
    DRESS,
    FOOTWEAR,
    LAYERING_SEASON_KEYWORDS,
    NON_ANCHOR_CATEGORIES,
    ONE_PIECE,
    OUTERWEAR,
    TOP,
    normalize_category,
)
from models.wardrobe_item import WardrobeItem

logger = logging.getLogger(__name__)

DEFAULT_MAX_OUTFITS = 3
GENERAL_MAX_CATEGORIES = 3

Pool = Mapping[str, Tuple[WardrobeItem, ...]]
Strategy = Callable[[WardrobeItem, Pool, str], Iterator[Outfit]]


@dataclass(frozen=True)
class OutfitBuildResult:
    outfits: List[Outfit]
    diagnostics: Dict[str, object]


def _rotate(candidates: Sequence[WardrobeItem], index: int) -> WardrobeItem:
    return candidates[index % len(candidates)]


def is_layering_season(season: str) -> bool:
    """Seasons that call for an outer layer on dresses; tags are matched case-sensitively."""

    return any(keyword in (season or "") for keyword in LAYERING_SEASON_KEYWORDS)


def _dress_outfits(item: WardrobeItem, pool: Pool, season: str) -> Iterator[Outfit]:
    outerwear = pool.get(OUTERWEAR, ())
    accessories = pool.get(ACCESSORY, ())
    layered = bool(outerwear) and is_layering_season(season)
    for index, shoe in enumerate(pool.get(FOOTWEAR, ())):
        if layered:
            yield Outfit("dress-based-layered", (item, shoe, _rotate(outerwear, index)))
        elif accessories:
            yield Outfit("dress-based", (item, shoe, _rotate(accessories, index)))
        else:
            yield Outfit("dress-based", (item, shoe))


def _top_outfits(item: WardrobeItem, pool: Pool, season: str) -> Iterator[Outfit]:
    outerwear = pool.get(OUTERWEAR, ())
    combos = itertools.product(pool.get(BOTTOM, ()), pool.get(FOOTWEAR, ()))
    for index, (bottom, shoe) in enumerate(combos):
        if outerwear:
            yield Outfit("top-based-layered", (item, bottom, shoe, _rotate(outerwear, index)))
        else:
            yield Outfit("top-based", (item, bottom, shoe))


def _bottom_outfits(item: WardrobeItem, pool: Pool, season: str) -> Iterator[Outfit]:
    for top, shoe in itertools.product(pool.get(TOP, ()), pool.get(FOOTWEAR, ())):
        yield Outfit("bottom-based", (item, top, shoe))


def _footwear_outfits(item: WardrobeItem, pool: Pool, season: str) -> Iterator[Outfit]:
    for top, bottom in itertools.product(pool.get(TOP, ()), pool.get(BOTTOM, ())):
        yield Outfit("footwear-based", (item, top, bottom))


def _general_outfits(item: WardrobeItem, pool: Pool, season: str) -> Iterator[Outfit]:
    picks: List[WardrobeItem] = []
    for candidates in pool.values():
        choice = next((candidate for candidate in candidates if candidate.item_id != item.item_id), None)
        if choice is None:
            continue
        picks.append(choice)
        if len(picks) == GENERAL_MAX_CATEGORIES:
            break
    if picks:
        yield Outfit("general", (item, *picks))


STRATEGIES: Dict[str, Strategy] = {
    DRESS: _dress_outfits,
    ONE_PIECE: _dress_outfits,
    TOP: _top_outfits,
    BOTTOM: _bottom_outfits,
    FOOTWEAR: _footwear_outfits,
}
GENERAL_STRATEGY: Strategy = _general_outfits


def strategy_for(category: str) -> Strategy:
    """Return the construction strategy; unmatched categories use ``general``."""

    return STRATEGIES.get(normalize_category(category), GENERAL_STRATEGY)


def build_outfits(
    analyzed_item: WardrobeItem,
    pool_by_category: CompatiblePool | None,
    season: str,
    scenario: str | None = None,
    max_outfits: int = DEFAULT_MAX_OUTFITS,
) -> OutfitBuildResult:
    """Enumerate up to ``max_outfits`` outfits anchored on ``analyzed_item``.

    ``pool_by_category`` must already be filtered to the season and scenario.
    Missing or empty category pools simply yield no outfits for that branch.
    """

    category = normalize_category(analyzed_item.category)
    pool: Dict[str, Tuple[WardrobeItem, ...]] = {
        key: tuple(items) for key, items in normalize_pool(pool_by_category).items() if items
    }
    diagnostics: Dict[str, object] = {
        "category": category,
        "season": season,
        "scenario": scenario,
        "pool_sizes": {key: len(items) for key, items in pool.items()},
    }

    if category in NON_ANCHOR_CATEGORIES:
        diagnostics["reason"] = "non_anchor_category"
        diagnostics["returned"] = 0
        logger.info("Skipping outfit build for %s item %s", category, analyzed_item.item_id)
        return OutfitBuildResult(outfits=[], diagnostics=diagnostics)

    strategy = strategy_for(category)
    diagnostics["strategy"] = "general" if strategy is GENERAL_STRATEGY else category

    limit = max(0, max_outfits)
    enumerated = list(itertools.islice(strategy(analyzed_item, pool, season), limit + 1))
    outfits = [outfit for outfit in enumerated[:limit] if len(outfit.items) >= 2]
    diagnostics["truncated"] = len(enumerated) > limit
    diagnostics["returned"] = len(outfits)
    logger.info(
        "Built %s %s outfits for %s in %s/%s",
        len(outfits),
        diagnostics["strategy"],
        analyzed_item.item_id,
        season,
        scenario,
    )
    return OutfitBuildResult(outfits=outfits, diagnostics=diagnostics)


__all__ = [
    "build_outfits",
    "strategy_for",
    "is_layering_season",
    "OutfitBuildResult",
    "STRATEGIES",
    "DEFAULT_MAX_OUTFITS",
]
