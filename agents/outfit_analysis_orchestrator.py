"""Outfit analysis workflow: completeness, generation, allocation and scoring."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from outfit_app.config import EngineConfig
from outfit_app.logging_config import get_logger, log_event, operation_context
from logic.coverage_cross_reference import cross_reference_coverage
from logic.essential_categories import create_season_scenario_combinations
from logic.item_pool import CompatiblePool, flatten_pool, group_by_category, normalize_pool
from logic.outfit_builder import build_outfits
from logic.outfit_distribution import distribute_outfits
from logic.outfit_scoring import ERROR_REASON, build_scoring_input, score_item
from logic.season_matching import filter_available_items
from models.coverage import CoverageGap
from models.outfit import ScenarioOutfitBucket, SeasonScenarioCombination
from models.scoring import NotApplicable, ScoreResult, ScoringInput
from models.taxonomy import NON_ANCHOR_CATEGORIES, normalize_category, season_priority
from models.wardrobe_item import Scenario, WardrobeItem


LOGGER = get_logger(__name__)


@dataclass
class OutfitAnalysisResult:
    season_scenario_combinations: List[SeasonScenarioCombination] = field(default_factory=list)
    outfit_combinations: List[ScenarioOutfitBucket] = field(default_factory=list)
    coverage_gaps_with_no_outfits: List[CoverageGap] = field(default_factory=list)
    scoring_input: ScoringInput = field(default_factory=lambda: build_scoring_input([]))
    score: ScoreResult | None = None
    diagnostics: Dict[str, Any] = field(default_factory=dict)

    @property
    def total_outfits(self) -> int:
        return sum(len(bucket.outfits) for bucket in self.outfit_combinations)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "season_scenario_combinations": [combo.to_dict() for combo in self.season_scenario_combinations],
            "outfit_combinations": [bucket.to_dict() for bucket in self.outfit_combinations],
            "coverage_gaps_with_no_outfits": [gap.to_dict() for gap in self.coverage_gaps_with_no_outfits],
            "scoring_input": self.scoring_input.to_dict(),
            "score": self.score.to_dict() if self.score else None,
            "diagnostics": self.diagnostics,
        }


def _as_scenarios(scenarios: Sequence[Scenario | str] | None) -> List[Scenario]:
    return [
        scenario if isinstance(scenario, Scenario) else Scenario(scenario_id="", name=str(scenario))
        for scenario in scenarios or []
    ]


def order_by_layering_priority(combinations: Sequence[SeasonScenarioCombination]) -> List[SeasonScenarioCombination]:
    """Winter first, then spring/fall, then summer; unknown seasons last."""

    return sorted(combinations, key=lambda combo: season_priority(combo.season))


class OutfitAnalysisOrchestrator:
    """Drives one analysis request from compatible items to a final score."""

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    def analyze(
        self,
        item: WardrobeItem,
        scenarios: Sequence[Scenario | str] | None,
        compatible_items: CompatiblePool | None,
        coverage: Sequence[CoverageGap] | None = None,
        seasons: Sequence[str] | None = None,
        suitable_scenarios: Sequence[str] | None = None,
        user_goals: Sequence[str] = (),
    ) -> OutfitAnalysisResult:
        """Run the full workflow for ``item``.

        ``seasons`` defaults to the item's own season tags and
        ``suitable_scenarios`` to the scenario names. Unexpected failures are
        logged and reported as an empty result with a neutral score.
        """

        scenario_list = _as_scenarios(scenarios)
        season_list = list(seasons) if seasons is not None else list(item.seasons)
        suitable = list(suitable_scenarios) if suitable_scenarios is not None else [s.name for s in scenario_list]
        coverage_rows = list(coverage or [])
        category = normalize_category(item.category)

        with operation_context("agent:outfit_analysis.analyze", item_id=item.item_id) as correlation_id:
            if category in NON_ANCHOR_CATEGORIES:
                scoring_input = build_scoring_input([], applicable=False)
                score = score_item(item.category, coverage_rows, suitable, user_goals, scoring_input, item.subcategory)
                log_event(
                    LOGGER,
                    level=logging.INFO,
                    event="outfit_analysis_skipped",
                    correlation_id=correlation_id,
                    category=category,
                    reason=NotApplicable().reason,
                )
                return OutfitAnalysisResult(
                    scoring_input=scoring_input,
                    score=score,
                    diagnostics={"skipped": True, "category": category},
                )

            try:
                result = self._run(item, scenario_list, season_list, compatible_items, coverage_rows, suitable, user_goals)
            except Exception:
                LOGGER.exception("Error in outfit analysis orchestration")
                return OutfitAnalysisResult(
                    score=ScoreResult(score=5.0, reason=ERROR_REASON),
                    diagnostics={"error": True, "category": category},
                )

            log_event(
                LOGGER,
                level=logging.INFO,
                event="agent_call_completed",
                agent="outfit_analysis",
                method="analyze",
                correlation_id=correlation_id,
                combinations=len(result.season_scenario_combinations),
                total_outfits=result.total_outfits,
                gaps_without_outfits=len(result.coverage_gaps_with_no_outfits),
                score=result.score.score if result.score else None,
            )
            return result

    def _run(
        self,
        item: WardrobeItem,
        scenarios: List[Scenario],
        seasons: List[str],
        compatible_items: CompatiblePool | None,
        coverage: List[CoverageGap],
        suitable: List[str],
        user_goals: Sequence[str],
    ) -> OutfitAnalysisResult:
        pool = normalize_pool(compatible_items)
        combinations = create_season_scenario_combinations(
            item, pool, seasons, scenarios, self.config.relax_footwear_for_home
        )
        complete = order_by_layering_priority([combo for combo in combinations if combo.has_all_essentials])

        scenario_by_name: Dict[str, Scenario] = {}
        for scenario in scenarios:
            scenario_by_name.setdefault(scenario.name, scenario)

        flattened = flatten_pool(pool)
        buckets: List[ScenarioOutfitBucket] = []
        builds: Dict[str, Any] = {}
        for combo in complete:
            scenario = scenario_by_name.get(combo.scenario)
            available = group_by_category(filter_available_items(flattened, combo.season, scenario))
            built = build_outfits(
                item, available, combo.season, combo.scenario, max_outfits=self.config.max_outfits_per_build
            )
            builds[combo.combination] = built.diagnostics
            buckets.append(ScenarioOutfitBucket.for_combination(combo, built.outfits))

        distribution = distribute_outfits(buckets, complete, self.config.max_outfits_per_scenario)
        cross_reference = cross_reference_coverage(coverage, distribution.buckets)
        scoring_input = build_scoring_input(distribution.buckets, cross_reference.gaps_without_outfits)
        score = score_item(item.category, coverage, suitable, user_goals, scoring_input, item.subcategory)

        return OutfitAnalysisResult(
            season_scenario_combinations=combinations,
            outfit_combinations=distribution.buckets,
            coverage_gaps_with_no_outfits=cross_reference.gaps_without_outfits,
            scoring_input=scoring_input,
            score=score,
            diagnostics={
                "processing_order": [combo.combination for combo in complete],
                "builds": builds,
                "distribution": distribution.diagnostics,
                "cross_reference": cross_reference.diagnostics,
            },
        )


__all__ = ["OutfitAnalysisOrchestrator", "OutfitAnalysisResult", "order_by_layering_priority"]
