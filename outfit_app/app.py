"""Application bootstrap for the wardrobe outfit engine."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping

from pydantic import ValidationError

from agents.compatibility_agent import CompatibilityAgent
from agents.outfit_analysis_orchestrator import OutfitAnalysisOrchestrator
from logic.frequency_needs import calculate_frequency_based_needs, frequency_recommendations
from logic.validation import NeedsRequest, OutfitAnalysisRequest, validation_failure
from outfit_app.config import EngineConfig
from outfit_app.logging_config import configure_logging, get_logger, log_event, operation_context
from tools.compatibility_provider import CompatibilityProvider, RuleBasedCompatibilityProvider


LOGGER = get_logger(__name__)


class OutfitAnalysisApp:
    """Wires together configuration, logging, agents and payload validation."""

    def __init__(self, config: EngineConfig | None = None, provider: CompatibilityProvider | None = None) -> None:
        self.config = config or EngineConfig.from_env()
        configure_logging(self.config.log_level)
        self.compatibility_agent = CompatibilityAgent(provider or RuleBasedCompatibilityProvider())
        self.orchestrator = OutfitAnalysisOrchestrator(config=self.config)

    def analyze_outfits(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Validate ``payload`` and run the outfit analysis workflow.

        When no compatible-items mapping is supplied but a wardrobe is, the
        compatibility agent derives the mapping from the wardrobe.
        """

        with operation_context("app:analyze_outfits") as correlation_id:
            try:
                request = OutfitAnalysisRequest.model_validate(payload)
            except ValidationError as exc:
                log_event(
                    LOGGER,
                    level=logging.WARNING,
                    event="app_request_invalid",
                    agent="app",
                    method="analyze_outfits",
                    details=str(exc),
                    correlation_id=correlation_id,
                )
                return validation_failure("Invalid outfit analysis payload", exc)

            item = request.item.to_item()
            compatible = {
                category: [entry.to_item() for entry in entries] for category, entries in request.compatible_items.items()
            }
            compatibility_source = "payload"
            if not compatible and request.wardrobe:
                report = self.compatibility_agent.collect(item, [entry.to_item() for entry in request.wardrobe])
                compatible = report.items_by_category
                compatibility_source = "compatibility_agent"

            result = self.orchestrator.analyze(
                item=item,
                scenarios=[scenario.to_scenario() for scenario in request.scenarios],
                compatible_items=compatible,
                coverage=[gap.to_gap() for gap in request.coverage],
                seasons=request.seasons,
                suitable_scenarios=request.suitable_scenarios,
                user_goals=request.user_goals,
            )
            response = {"status": "ok", **result.to_dict()}
            response["diagnostics"]["compatibility_source"] = compatibility_source

            log_event(
                LOGGER,
                level=logging.INFO,
                event="app_call_completed",
                agent="app",
                method="analyze_outfits",
                correlation_id=correlation_id,
                total_outfits=result.total_outfits,
            )
            return response

    def calculate_needs(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Frequency-based needs per scenario plus shopping hints."""

        with operation_context("app:calculate_needs") as correlation_id:
            try:
                request = NeedsRequest.model_validate(payload)
            except ValidationError as exc:
                log_event(
                    LOGGER,
                    level=logging.WARNING,
                    event="app_request_invalid",
                    agent="app",
                    method="calculate_needs",
                    details=str(exc),
                    correlation_id=correlation_id,
                )
                return validation_failure("Invalid needs payload", exc)

            needs = calculate_frequency_based_needs(
                [entry.to_item() for entry in request.items],
                [scenario.to_scenario() for scenario in request.scenarios],
                request.season,
            )
            response = {
                "status": "ok",
                "season": request.season,
                "needs": [need.to_dict() for need in needs],
                "recommendations": frequency_recommendations(needs),
            }
            log_event(
                LOGGER,
                level=logging.INFO,
                event="app_call_completed",
                agent="app",
                method="calculate_needs",
                correlation_id=correlation_id,
                scenarios=len(needs),
            )
            return response


__all__ = ["OutfitAnalysisApp"]
