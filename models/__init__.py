"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.coverage import CategoryNeed, CoverageGap
from models.outfit import Outfit, ScenarioOutfitBucket, SeasonScenarioCombination
from models.scoring import NotApplicable, OutfitCount, ScoreResult, ScoringInput
from models.wardrobe_item import Scenario, WardrobeItem, from_raw_metadata

__all__ = [
    "WardrobeItem",
    "Scenario",
    "from_raw_metadata",
    "Outfit",
    "ScenarioOutfitBucket",
    "SeasonScenarioCombination",
    "CoverageGap",
    "CategoryNeed",
    "NotApplicable",
    "OutfitCount",
    "ScoringInput",
    "ScoreResult",
]
