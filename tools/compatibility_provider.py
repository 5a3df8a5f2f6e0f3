"""Compatibility provider abstractions and implementations.

A provider answers three questions about the analyzed item against the rest
of the wardrobe: which items complement it, which can be layered with it and
which outerwear goes over it. Each answer is a mapping of category to items.
The production classifier is model-backed and lives outside this package;
the rule-based provider below gives deterministic answers from season tags.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Mapping, Sequence

from logic.item_pool import group_by_category
from models.taxonomy import DRESS, ONE_PIECE, OUTERWEAR, TOP, normalize_category
from models.wardrobe_item import WardrobeItem

LOGGER = logging.getLogger(__name__)

CompatibilityMapping = Dict[str, List[WardrobeItem]]
CHECKS = ("complementing", "layering", "outerwear")
ALL_SEASON_TAG = "ALL_SEASON"
_LAYERING_BASES = frozenset({TOP, ONE_PIECE, DRESS})


class CompatibilityProvider(ABC):
    """Abstract compatibility classifier interface."""

    @abstractmethod
    def check_complementing(self, item: WardrobeItem, wardrobe: Sequence[WardrobeItem]) -> CompatibilityMapping:
        """Items from other categories that complete an outfit with ``item``."""

    @abstractmethod
    def check_layering(self, item: WardrobeItem, wardrobe: Sequence[WardrobeItem]) -> CompatibilityMapping:
        """Items that can be layered with ``item``."""

    @abstractmethod
    def check_outerwear(self, item: WardrobeItem, wardrobe: Sequence[WardrobeItem]) -> CompatibilityMapping:
        """Outerwear that can be worn over ``item``."""


def has_season_overlap(base: WardrobeItem, candidate: WardrobeItem) -> bool:
    """Exact tag overlap; untagged items and ``ALL_SEASON`` match everything."""

    if not base.seasons or not candidate.seasons:
        return True
    return any(
        base_season == candidate_season or ALL_SEASON_TAG in (base_season, candidate_season)
        for base_season in base.seasons
        for candidate_season in candidate.seasons
    )


class RuleBasedCompatibilityProvider(CompatibilityProvider):
    """Offline deterministic provider grouping season-compatible items by category."""

    def _candidates(self, item: WardrobeItem, wardrobe: Sequence[WardrobeItem]) -> List[WardrobeItem]:
        return [
            candidate
            for candidate in wardrobe
            if candidate.item_id != item.item_id and has_season_overlap(item, candidate)
        ]

    def _grouped(self, items: Sequence[WardrobeItem]) -> CompatibilityMapping:
        grouped = group_by_category(items)
        return {category: sorted(entries, key=lambda entry: entry.name) for category, entries in grouped.items()}

    def check_complementing(self, item: WardrobeItem, wardrobe: Sequence[WardrobeItem]) -> CompatibilityMapping:
        own = normalize_category(item.category)
        matches = [
            candidate
            for candidate in self._candidates(item, wardrobe)
            if candidate.category not in (own, OUTERWEAR)
        ]
        LOGGER.info("Rule-based complementing check", extra={"matches": len(matches)})
        return self._grouped(matches)

    def check_layering(self, item: WardrobeItem, wardrobe: Sequence[WardrobeItem]) -> CompatibilityMapping:
        if normalize_category(item.category) not in _LAYERING_BASES:
            return {}
        matches = [candidate for candidate in self._candidates(item, wardrobe) if candidate.category == TOP]
        return self._grouped(matches)

    def check_outerwear(self, item: WardrobeItem, wardrobe: Sequence[WardrobeItem]) -> CompatibilityMapping:
        if normalize_category(item.category) == OUTERWEAR:
            return {}
        matches = [candidate for candidate in self._candidates(item, wardrobe) if candidate.category == OUTERWEAR]
        return self._grouped(matches)


class StaticCompatibilityProvider(CompatibilityProvider):
    """Returns canned mappings; useful for tests and replaying stored classifier output."""

    def __init__(
        self,
        complementing: Mapping[str, Sequence[WardrobeItem]] | None = None,
        layering: Mapping[str, Sequence[WardrobeItem]] | None = None,
        outerwear: Mapping[str, Sequence[WardrobeItem]] | None = None,
    ) -> None:
        self.responses = {
            "complementing": complementing,
            "layering": layering,
            "outerwear": outerwear,
        }

    def _response(self, check: str) -> CompatibilityMapping:
        response = self.responses.get(check) or {}
        return {category: list(items) for category, items in response.items()}

    def check_complementing(self, item: WardrobeItem, wardrobe: Sequence[WardrobeItem]) -> CompatibilityMapping:
        return self._response("complementing")

    def check_layering(self, item: WardrobeItem, wardrobe: Sequence[WardrobeItem]) -> CompatibilityMapping:
        return self._response("layering")

    def check_outerwear(self, item: WardrobeItem, wardrobe: Sequence[WardrobeItem]) -> CompatibilityMapping:
        return self._response("outerwear")


__all__ = [
    "CompatibilityProvider",
    "CompatibilityMapping",
    "RuleBasedCompatibilityProvider",
    "StaticCompatibilityProvider",
    "has_season_overlap",
    "CHECKS",
]
