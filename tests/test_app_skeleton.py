"""
Skeleton validation tests for the wardrobe outfit engine.
These tests ensure modules import cleanly and the application object wires
configuration, agents and validation together.
"""

from importlib import import_module
from pathlib import Path
from typing import Tuple

import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from outfit_app.app import OutfitAnalysisApp
from outfit_app.config import EngineConfig
from tools.compatibility_provider import RuleBasedCompatibilityProvider


@pytest.fixture()
def analysis_app() -> OutfitAnalysisApp:
    return OutfitAnalysisApp(config=EngineConfig())


def test_app_wires_agents(analysis_app: OutfitAnalysisApp) -> None:
    """App builds an orchestrator sharing its config and a rule-based provider by default."""

    assert analysis_app.orchestrator.config is analysis_app.config
    assert isinstance(analysis_app.compatibility_agent.provider, RuleBasedCompatibilityProvider)


def test_invalid_payload_returns_review_status(analysis_app: OutfitAnalysisApp) -> None:
    response = analysis_app.analyze_outfits({"item": {"name": "No id", "category": "top"}})

    assert response["status"] == "needs_review"
    assert response["message"] == "Invalid outfit analysis payload"
    assert tuple(response["details"][0]["loc"]) == ("item", "id")


def test_wardrobe_is_used_when_no_compatible_items(analysis_app: OutfitAnalysisApp) -> None:
    response = analysis_app.analyze_outfits(
        {
            "item": {"item_id": "tee", "name": "Tee", "category": "tops", "season": "summer"},
            "scenarios": [{"scenario_id": "sc_social", "name": "Social Outings"}],
            "wardrobe": [
                {"id": "jeans", "name": "Jeans", "category": "bottom", "seasons": ["summer"]},
                {"id": "sneakers", "name": "Sneakers", "category": "shoes", "seasons": ["summer"]},
                {"id": "boots", "name": "Boots", "category": "footwear", "seasons": ["winter"]},
            ],
        }
    )

    assert response["status"] == "ok"
    assert response["diagnostics"]["compatibility_source"] == "compatibility_agent"
    [bucket] = response["outfit_combinations"]
    assert [outfit["signature"] for outfit in bucket["outfits"]] == ["Jeans + Sneakers + Tee"]


def test_needs_payload_validation(analysis_app: OutfitAnalysisApp) -> None:
    response = analysis_app.calculate_needs({"scenarios": []})
    assert response["status"] == "needs_review"


@pytest.mark.parametrize(
    "module_path, public_members",
    [
        ("agents.outfit_analysis_orchestrator", ("OutfitAnalysisOrchestrator", "OutfitAnalysisResult")),
        ("agents.compatibility_agent", ("CompatibilityAgent", "CompatibilityReport")),
        ("logic.season_matching", ("season_matches", "filter_available_items")),
        ("logic.essential_categories", ("evaluate_essentials", "create_season_scenario_combinations")),
        ("logic.frequency_needs", ("calculate_needs", "calculate_frequency_based_needs")),
        ("logic.outfit_builder", ("build_outfits",)),
        ("logic.outfit_signature", ("outfit_signature", "deduplicate_outfits")),
        ("logic.outfit_distribution", ("distribute_outfits",)),
        ("logic.coverage_cross_reference", ("find_gaps_without_outfits",)),
        ("logic.outfit_scoring", ("score_item", "build_scoring_input")),
    ],
)
def test_modules_export_expected_members(module_path: str, public_members: Tuple[str, ...]) -> None:
    """Modules should import cleanly and expose expected members."""

    module = import_module(module_path)
    for member in public_members:
        assert hasattr(module, member), f"{module_path} is missing {member}"
        assert member in module.__all__


@pytest.mark.parametrize(
    "module_path, public_members",
    [
        ("tools.compatibility_provider", ("CompatibilityProvider", "RuleBasedCompatibilityProvider")),
        ("tools.observability", ("instrument_tool",)),
    ],
)
def test_tool_modules_export_expected_members(module_path: str, public_members: Tuple[str, ...]) -> None:
    """Tool modules should import cleanly and expose expected members."""

    module = import_module(module_path)
    for member in public_members:
        assert hasattr(module, member), f"{module_path} is missing {member}"
