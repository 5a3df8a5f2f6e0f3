"""Canonical taxonomy definitions for wardrobe categories and seasons.

This module centralises the category labels, their aliases and the fixed
lookup tables that drive outfit completeness. Helper functions keep
normalisation consistent across models, logic and the HTTP layer.
"""

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Tuple

TOP = "top"
BOTTOM = "bottom"
ONE_PIECE = "one_piece"
DRESS = "dress"
OUTERWEAR = "outerwear"
FOOTWEAR = "footwear"
ACCESSORY = "accessory"
OTHER = "other"

CATEGORIES: Tuple[str, ...] = (TOP, BOTTOM, ONE_PIECE, DRESS, OUTERWEAR, FOOTWEAR, ACCESSORY, OTHER)

# Need-tracked categories, in report order.
NEED_CATEGORIES: Tuple[str, ...] = (TOP, BOTTOM, ONE_PIECE, OUTERWEAR, FOOTWEAR, ACCESSORY)

CATEGORY_ALIASES: Dict[str, str] = {
    "tops": TOP,
    "bottoms": BOTTOM,
    "one_pieces": ONE_PIECE,
    "one-piece": ONE_PIECE,
    "dresses": DRESS,
    "shoes": FOOTWEAR,
    "accessories": ACCESSORY,
}

ESSENTIAL_CATEGORIES: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        DRESS: (FOOTWEAR,),
        ONE_PIECE: (FOOTWEAR,),
        TOP: (BOTTOM, FOOTWEAR),
        BOTTOM: (TOP, FOOTWEAR),
        FOOTWEAR: (TOP, BOTTOM),
        OUTERWEAR: (),
        ACCESSORY: (),
    }
)

# Items in these categories complement existing outfits instead of anchoring one.
NON_ANCHOR_CATEGORIES = frozenset({OUTERWEAR, ACCESSORY})

LAYERING_SEASON_KEYWORDS: Tuple[str, ...] = ("fall", "winter", "spring")
TRANSITIONAL_SEASONS = frozenset({"spring/fall", "transitional"})
SEASON_PRIORITY: Dict[str, int] = {"winter": 1, "spring/fall": 2, "summer": 3}
HOME_SCENARIO_KEYWORDS: Tuple[str, ...] = ("home", "house", "remote work")


def normalize_category(value: object) -> str:
    """Map a free-form category label onto its canonical name.

    Unknown labels are returned lowercased rather than rejected so they can
    fall through to the general outfit strategy.
    """

    key = str(value or "").strip().lower().replace(" ", "_")
    return CATEGORY_ALIASES.get(key, key)


def essential_categories_for(category: str) -> Tuple[str, ...]:
    """Return the complementary categories an item of ``category`` needs."""

    return ESSENTIAL_CATEGORIES.get(normalize_category(category), ())


def is_home_scenario(scenario_name: str | None) -> bool:
    if not scenario_name:
        return False
    name = scenario_name.lower()
    return any(keyword in name for keyword in HOME_SCENARIO_KEYWORDS)


def season_priority(season: str | None) -> int:
    """Layering priority of a season; unknown seasons sort last."""

    return SEASON_PRIORITY.get((season or "").lower(), 999)


def dedupe_preserving_order(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered = []
    for value in values:
        if value not in seen:
            ordered.append(value)
            seen.add(value)
    return ordered


__all__ = [
    "TOP",
    "BOTTOM",
    "ONE_PIECE",
    "DRESS",
    "OUTERWEAR",
    "FOOTWEAR",
    "ACCESSORY",
    "OTHER",
    "CATEGORIES",
    "NEED_CATEGORIES",
    "CATEGORY_ALIASES",
    "ESSENTIAL_CATEGORIES",
    "NON_ANCHOR_CATEGORIES",
    "LAYERING_SEASON_KEYWORDS",
    "TRANSITIONAL_SEASONS",
    "SEASON_PRIORITY",
    "HOME_SCENARIO_KEYWORDS",
    "normalize_category",
    "essential_categories_for",
    "is_home_scenario",
    "season_priority",
    "dedupe_preserving_order",
]
