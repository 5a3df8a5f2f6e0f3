"""Helpers for shaping compatible-item pools."""
from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Sequence

from models.taxonomy import normalize_category
from models.wardrobe_item import WardrobeItem

CompatiblePool = Mapping[str, Sequence[WardrobeItem]]


def flatten_pool(pool: CompatiblePool | Iterable[WardrobeItem] | None) -> List[WardrobeItem]:
    """Flatten a category mapping (or pass through a sequence) into one list.

    ``None`` and non-list category values are treated as empty.
    """

    if not pool:
        return []
    if isinstance(pool, Mapping):
        flattened: List[WardrobeItem] = []
        for items in pool.values():
            if isinstance(items, (list, tuple)):
                flattened.extend(items)
        return flattened
    return list(pool)


def group_by_category(items: Iterable[WardrobeItem]) -> Dict[str, List[WardrobeItem]]:
    """Group items by normalised category keeping first-seen category order."""

    grouped: Dict[str, List[WardrobeItem]] = {}
    for item in items:
        grouped.setdefault(normalize_category(item.category), []).append(item)
    return grouped


def normalize_pool(pool: CompatiblePool | None) -> Dict[str, List[WardrobeItem]]:
    """Re-key a category mapping by canonical category, merging aliases in key order."""

    normalised: Dict[str, List[WardrobeItem]] = {}
    for key, items in (pool or {}).items():
        if not isinstance(items, (list, tuple)):
            continue
        normalised.setdefault(normalize_category(key), []).extend(items)
    return normalised


__all__ = ["CompatiblePool", "flatten_pool", "group_by_category", "normalize_pool"]
