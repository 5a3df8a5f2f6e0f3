"""Outfit identity keys and deduplication."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence

from models.outfit import Outfit, ScenarioOutfitBucket, canonical_signature

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeduplicationResult:
    outfits: List[Outfit]
    diagnostics: Dict[str, object]


def outfit_signature(outfit: Outfit) -> str:
    """Sorted item names joined with ``" + "``.

    Item order and the outfit type are not part of the key. Names are compared
    as given, so case and whitespace differences produce distinct signatures.
    """

    return canonical_signature(item.name for item in outfit.items)


def deduplicate_outfits(outfits: Iterable[Outfit]) -> DeduplicationResult:
    """Drop repeated signatures, keeping the first occurrence in input order."""

    seen = set()
    unique: List[Outfit] = []
    total = 0
    for outfit in outfits:
        total += 1
        signature = outfit_signature(outfit)
        if signature in seen:
            continue
        seen.add(signature)
        unique.append(outfit)

    removed = total - len(unique)
    if removed:
        logger.debug("Removed %s duplicate outfits out of %s", removed, total)
    return DeduplicationResult(outfits=unique, diagnostics={"input": total, "unique": len(unique), "removed": removed})


def build_signature_index(buckets: Sequence[ScenarioOutfitBucket]) -> Dict[str, List[int]]:
    """Map each signature to the positions of the buckets it appears in.

    Signatures are keyed in first-seen order and bucket positions are listed
    in ascending order without repeats.
    """

    index: Dict[str, List[int]] = {}
    for position, bucket in enumerate(buckets):
        for outfit in bucket.outfits:
            positions = index.setdefault(outfit_signature(outfit), [])
            if not positions or positions[-1] != position:
                positions.append(position)
    return index


__all__ = ["outfit_signature", "deduplicate_outfits", "build_signature_index", "DeduplicationResult"]
