"""Fair allocation of generated outfits across complete scenario buckets.

Outfits are generated per season-scenario combination, so the same outfit
often shows up in several buckets. Allocation works on signatures:

1. each bucket is deduplicated internally (first occurrence wins);
2. signatures found in a single bucket ("exclusive") are assigned there first;
3. signatures found in several buckets ("shared") are handed out in rounds:
   each round, buckets below the cap take one shared candidate each, the
   bucket holding the fewest outfits first (earliest bucket on ties), and
   each bucket picks the candidate currently held by the fewest buckets
   (first-seen order on ties);
4. every bucket is truncated to the cap, keeping assignment order.

A signature appears at most once per bucket. Every bucket with candidates
receives at least one outfit unless its exclusives already fill it, and every
complete combination gets a bucket in the output even when it received nothing.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence

from logic.outfit_signature import build_signature_index, deduplicate_outfits, outfit_signature
from models.outfit import Outfit, ScenarioOutfitBucket, SeasonScenarioCombination

logger = logging.getLogger(__name__)

DEFAULT_MAX_OUTFITS_PER_SCENARIO = 10


@dataclass(frozen=True)
class DistributionResult:
    buckets: List[ScenarioOutfitBucket]
    diagnostics: Dict[str, object]

    @property
    def total_outfits(self) -> int:
        return sum(len(bucket.outfits) for bucket in self.buckets)


def _collect_slots(
    buckets: Sequence[ScenarioOutfitBucket],
    complete_combinations: Sequence[SeasonScenarioCombination] | None,
) -> List[ScenarioOutfitBucket]:
    """One working bucket per label: complete combinations first, then leftovers."""

    slots: Dict[str, ScenarioOutfitBucket] = {}
    for combo in complete_combinations or ():
        if combo.combination not in slots:
            slots[combo.combination] = ScenarioOutfitBucket.for_combination(combo)
    for bucket in buckets:
        slot = slots.get(bucket.combination)
        if slot is None:
            slot = ScenarioOutfitBucket(bucket.combination, bucket.season, bucket.scenario, [])
            slots[bucket.combination] = slot
        slot.outfits.extend(bucket.outfits)
    return list(slots.values())


def distribute_outfits(
    buckets: Sequence[ScenarioOutfitBucket],
    complete_combinations: Sequence[SeasonScenarioCombination] | None = None,
    max_per_scenario: int = DEFAULT_MAX_OUTFITS_PER_SCENARIO,
) -> DistributionResult:
    """Spread a deduplicated outfit pool across scenario buckets under a cap.

    The input buckets are not modified; new bucket objects are returned in
    the order of ``complete_combinations`` followed by any input bucket whose
    label is not among them.
    """

    cap = max(0, max_per_scenario)
    slots = _collect_slots(buckets, complete_combinations)
    candidates: List[Dict[str, Outfit]] = []
    for slot in slots:
        unique = deduplicate_outfits(slot.outfits).outfits
        candidates.append({outfit_signature(outfit): outfit for outfit in unique})

    index = build_signature_index(
        [ScenarioOutfitBucket(slot.combination, slot.season, slot.scenario, list(pool.values())) for slot, pool in zip(slots, candidates)]
    )
    exclusive = {signature for signature, positions in index.items() if len(positions) == 1}
    assigned: List[List[Outfit]] = [[] for _ in slots]

    for position, pool in enumerate(candidates):
        for signature, outfit in pool.items():
            if signature in exclusive:
                assigned[position].append(outfit)

    shared_queues = [[signature for signature in pool if signature not in exclusive] for pool in candidates]
    holders = {signature: 0 for signature in index if signature not in exclusive}
    while True:
        open_positions = [
            position for position, queue in enumerate(shared_queues) if queue and len(assigned[position]) < cap
        ]
        if not open_positions:
            break
        for position in sorted(open_positions, key=lambda position: (len(assigned[position]), position)):
            queue = shared_queues[position]
            signature = min(queue, key=lambda candidate: holders[candidate])
            queue.remove(signature)
            assigned[position].append(candidates[position][signature])
            holders[signature] += 1
    dropped_shared = sum(1 for count in holders.values() if count == 0)

    truncated: Dict[str, int] = {}
    result: List[ScenarioOutfitBucket] = []
    for slot, outfits in zip(slots, assigned):
        if len(outfits) > cap:
            truncated[slot.combination] = len(outfits) - cap
            logger.info("Capping %s at %s outfits (%s dropped)", slot.combination, cap, len(outfits) - cap)
        result.append(ScenarioOutfitBucket(slot.combination, slot.season, slot.scenario, outfits[:cap]))

    diagnostics: Dict[str, object] = {
        "buckets": len(result),
        "unique_signatures": len(index),
        "exclusive_signatures": len(exclusive),
        "shared_signatures": len(index) - len(exclusive),
        "dropped_shared": dropped_shared,
        "truncated": truncated,
        "empty_buckets": [bucket.combination for bucket in result if not bucket.outfits],
        "max_per_scenario": cap,
    }
    logger.info(
        "Distributed %s outfits across %s scenarios (%s exclusive, %s shared)",
        sum(len(bucket.outfits) for bucket in result),
        len(result),
        diagnostics["exclusive_signatures"],
        diagnostics["shared_signatures"],
    )
    return DistributionResult(buckets=result, diagnostics=diagnostics)


__all__ = ["distribute_outfits", "DistributionResult", "DEFAULT_MAX_OUTFITS_PER_SCENARIO"]
