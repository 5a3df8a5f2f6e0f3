"""Outfit, season-scenario combination and scenario bucket schemas."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple

from models.wardrobe_item import WardrobeItem

SIGNATURE_SEPARATOR = " + "


def canonical_signature(names: Iterable[str]) -> str:
    """Join item names in lexicographic order; order and type independent."""

    return SIGNATURE_SEPARATOR.join(sorted(names))


@dataclass(frozen=True, eq=False)
class Outfit:
    """A candidate outfit; ``items[0]`` is always the analyzed item.

    Equality and hashing use the signature so two outfits with the same item
    names compare equal regardless of ordering or ``outfit_type``.
    """

    outfit_type: str
    items: Tuple[WardrobeItem, ...]

    @property
    def signature(self) -> str:
        return canonical_signature(item.name for item in self.items)

    @property
    def anchor(self) -> WardrobeItem:
        return self.items[0]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Outfit):
            return NotImplemented
        return self.signature == other.signature

    def __hash__(self) -> int:
        return hash(self.signature)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.outfit_type,
            "signature": self.signature,
            "items": [item.to_dict() for item in self.items],
        }


@dataclass(frozen=True)
class SeasonScenarioCombination:
    """Completeness record for one (season, scenario) pair of the analyzed item."""

    season: str
    scenario: str
    missing_categories: Tuple[str, ...] = ()
    available_categories: Tuple[str, ...] = ()
    required_categories: Tuple[str, ...] = ()
    scenario_id: str | None = None

    @property
    def has_all_essentials(self) -> bool:
        return not self.missing_categories

    @property
    def combination(self) -> str:
        return f"{self.season} + {self.scenario}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "combination": self.combination,
            "season": self.season,
            "scenario": self.scenario,
            "scenario_id": self.scenario_id,
            "has_all_essentials": self.has_all_essentials,
            "missing_categories": list(self.missing_categories),
            "available_categories": list(self.available_categories),
            "required_categories": list(self.required_categories),
        }


@dataclass
class ScenarioOutfitBucket:
    """Outfits grouped under one complete season-scenario combination."""

    combination: str
    season: str
    scenario: str
    outfits: List[Outfit] = field(default_factory=list)

    @classmethod
    def for_combination(cls, combo: SeasonScenarioCombination, outfits: Iterable[Outfit] = ()) -> "ScenarioOutfitBucket":
        return cls(combination=combo.combination, season=combo.season, scenario=combo.scenario, outfits=list(outfits))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "combination": self.combination,
            "season": self.season,
            "scenario": self.scenario,
            "outfits": [outfit.to_dict() for outfit in self.outfits],
        }


__all__ = [
    "Outfit",
    "SeasonScenarioCombination",
    "ScenarioOutfitBucket",
    "canonical_signature",
    "SIGNATURE_SEPARATOR",
]
