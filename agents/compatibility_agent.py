"""Compatibility agent that consolidates the three classifier checks."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Sequence

from outfit_app.logging_config import get_logger, log_event, operation_context
from logic.item_pool import normalize_pool
from models.wardrobe_item import WardrobeItem
from tools.compatibility_provider import CHECKS, CompatibilityMapping, CompatibilityProvider
from tools.observability import instrument_tool


LOGGER = get_logger(__name__)


@dataclass
class CompatibilityReport:
    """Merged compatible items plus per-check bookkeeping."""

    items_by_category: Dict[str, List[WardrobeItem]] = field(default_factory=dict)
    succeeded: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    @property
    def total_items(self) -> int:
        return sum(len(items) for items in self.items_by_category.values())


class CompatibilityAgent:
    """Runs complementing, layering and outerwear checks in sequence.

    A failing check is logged and contributes nothing; the remaining checks
    still run. Results are merged category by category in check order and
    repeated item ids are dropped.
    """

    def __init__(self, provider: CompatibilityProvider) -> None:
        self.provider = provider

    def _checks(self) -> Dict[str, Callable[..., CompatibilityMapping]]:
        return {
            "complementing": self.provider.check_complementing,
            "layering": self.provider.check_layering,
            "outerwear": self.provider.check_outerwear,
        }

    def collect(self, item: WardrobeItem, wardrobe: Sequence[WardrobeItem]) -> CompatibilityReport:
        with operation_context("agent:compatibility.collect", item_id=item.item_id) as correlation_id:
            report = CompatibilityReport()
            seen_ids = {item.item_id}
            checks = self._checks()
            for check in CHECKS:
                runner = instrument_tool(f"compatibility_{check}")(checks[check])
                try:
                    mapping = runner(item, list(wardrobe))
                except Exception:
                    LOGGER.exception("Compatibility check %s failed; continuing without it", check)
                    report.failed.append(check)
                    continue
                report.succeeded.append(check)
                for category, items in normalize_pool(mapping).items():
                    bucket = report.items_by_category.setdefault(category, [])
                    for candidate in items:
                        if candidate.item_id in seen_ids:
                            continue
                        seen_ids.add(candidate.item_id)
                        bucket.append(candidate)

            report.items_by_category = {category: items for category, items in report.items_by_category.items() if items}
            log_event(
                LOGGER,
                level=logging.INFO,
                event="agent_call_completed",
                agent="compatibility",
                method="collect",
                correlation_id=correlation_id,
                succeeded=report.succeeded,
                failed=report.failed,
                total_items=report.total_items,
            )
            return report


__all__ = ["CompatibilityAgent", "CompatibilityReport"]
