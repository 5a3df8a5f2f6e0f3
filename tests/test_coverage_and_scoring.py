"""Coverage cross-reference and purchase score tests."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.coverage_cross_reference import cross_reference_coverage, find_gaps_without_outfits, outfits_for_slot
from logic.outfit_scoring import (
    LIMITED_UTILITY_MESSAGE,
    NO_COVERAGE_REASON,
    NO_OUTFITS_MESSAGE,
    apply_outfit_adjustments,
    base_score,
    build_scoring_input,
    format_seasons,
    most_critical_gap_type,
    relevant_coverage,
    score_item,
)
from models.coverage import CoverageGap
from models.outfit import Outfit, ScenarioOutfitBucket
from models.scoring import NotApplicable, OutfitCount, ScoringInput
from models.wardrobe_item import WardrobeItem


def _gap(category: str, season: str, scenario: str, gap_type: str | None, count: int = 1) -> CoverageGap:
    return CoverageGap(category=category, season=season, scenario_name=scenario, gap_type=gap_type, gap_count=count)


def _bucket(season: str, scenario: str, size: int) -> ScenarioOutfitBucket:
    anchor = WardrobeItem("anchor", "Tee", "top", [season])
    outfits = [Outfit("top-based", (anchor, WardrobeItem(f"b{index}", f"Bottom {index}", "bottom", [season]))) for index in range(size)]
    return ScenarioOutfitBucket(f"{season} + {scenario}", season, scenario, outfits)


def _input(count: int, gaps: int = 0) -> ScoringInput:
    rows = tuple(_gap("top", "summer", f"Scenario {index}", "critical") for index in range(gaps))
    return ScoringInput(total_outfits=OutfitCount(count), coverage_gaps_with_no_outfits=rows)


def test_actionable_gaps_without_outfits_are_reported() -> None:
    office_gap = _gap("top", "summer", "Office Work", "critical")
    social_gap = _gap("top", "summer", "Social Outings", "improvement")
    coverage = [
        office_gap,
        social_gap,
        _gap("top", "All seasons", "Office Work", "expansion"),
        _gap("top", "winter", "All scenarios", "critical"),
        _gap("top", "winter", "Office Work", "satisfied"),
    ]
    buckets = [_bucket("summer", "Office Work", 0), _bucket("Summer", "social outings", 1)]

    result = cross_reference_coverage(coverage, buckets)

    assert result.gaps_without_outfits == [office_gap]
    assert result.diagnostics["actionable_rows"] == 2
    assert result.diagnostics["gaps_with_outfits"] == {"top for summer for Social Outings": 1}
    assert find_gaps_without_outfits(coverage, buckets) == [office_gap]


def test_slot_lookup_requires_exact_season_and_scenario() -> None:
    buckets = [_bucket("spring/fall", "Office Work", 2)]
    assert outfits_for_slot(buckets, "spring/fall", "office work") == 2
    assert outfits_for_slot(buckets, "spring", "Office Work") == 0
    assert outfits_for_slot(buckets, "spring/fall", "Office") == 0


def test_cross_reference_with_nothing_to_check() -> None:
    assert find_gaps_without_outfits(None, None) == []
    assert find_gaps_without_outfits([_gap("top", "summer", "Office Work", "critical")], []) == [
        _gap("top", "summer", "Office Work", "critical")
    ]


def test_scoring_input_counts_outfits_or_marks_not_applicable() -> None:
    gap = _gap("top", "summer", "Office Work", "critical")
    applicable = build_scoring_input([_bucket("summer", "Office Work", 2), _bucket("summer", "Social", 1)], [gap])
    skipped = build_scoring_input(None, [gap], applicable=False)

    assert applicable.total_outfits == OutfitCount(3)
    assert applicable.coverage_gaps_with_no_outfits == (gap,)
    assert skipped.to_dict() == {
        "total_outfits": -1,
        "outfit_analysis_applicable": False,
        "coverage_gaps_with_no_outfits": [],
    }
    assert build_scoring_input([]).total_outfits == OutfitCount(0)


def test_outfit_count_cannot_be_negative() -> None:
    with pytest.raises(ValueError):
        OutfitCount(-1)


@pytest.mark.parametrize(
    "types, expected",
    [
        (["expansion", "critical", "improvement"], "critical"),
        (["expansion", "improvement"], "improvement"),
        (["satisfied", "expansion"], "expansion"),
        (["oversaturated", "satisfied"], "oversaturated"),
        ([None, "satisfied"], "satisfied"),
        ([], None),
    ],
)
def test_most_critical_gap_type(types, expected) -> None:
    rows = [_gap("top", "summer", "Office Work", gap_type) for gap_type in types]
    assert most_critical_gap_type(rows) == expected


def test_base_score_tables() -> None:
    assert base_score("critical") == 10.0
    assert base_score("expansion") == 8.0
    assert base_score("expansion", ["save-money"]) == 6.0
    assert base_score("satisfied", ["declutter-downsize"]) == 4.0
    assert base_score(None) == 5.0


def test_relevant_coverage_matches_scenarios_loosely() -> None:
    office = _gap("top", "summer", "Office Work", "critical")
    social = _gap("top", "summer", "Social Outings", "expansion")
    everywhere = _gap("top", "summer", "All scenarios", "satisfied")

    assert relevant_coverage([office, social, everywhere], ["office"]) == [office, everywhere]
    assert relevant_coverage([office, social], ["Beach"]) == [office, social]
    assert relevant_coverage([office, social], []) == [office, social]


def test_expansion_score_and_reason() -> None:
    coverage = [_gap("top", "summer", "Social Outings", "expansion")]

    result = score_item("top", coverage, suitable_scenarios=["Social Outings"])

    assert result.score == 8.0
    assert result.gap_type == "expansion"
    assert result.reason == (
        "You have good coverage in tops for summer for Social Outings, "
        "so this would be nice-to-have rather than essential."
    )


def test_critical_reason_for_shoes() -> None:
    result = score_item("footwear", [_gap("footwear", "winter", "Office Work", "critical", 3)])
    assert result.score == 10.0
    assert result.reason == (
        "You're missing essential shoes pieces for winter for Office Work. This could be a great addition to fill that gap!"
    )


def test_one_piece_reason_uses_generic_wording() -> None:
    result = score_item("one_piece", [_gap("one_piece", "summer", "Office Work", "critical")])
    assert result.reason == (
        "This could add versatility for Office Work in summer, even if you already have separates that work."
    )


def test_improvement_reason_lists_seasons_and_scenarios() -> None:
    coverage = [_gap("top", "summer", "Office Work", "improvement"), _gap("top", "winter", "Office Work", "improvement")]
    result = score_item("top", coverage, suitable_scenarios=["Office Work"])
    assert result.score == 9.0
    assert result.reason == (
        "Your tops collection could use some variety for summer and winter, especially for Office Work. "
        "This would be a nice addition!"
    )


def test_format_seasons() -> None:
    assert format_seasons(["summer", "winter", "spring/fall"]) == "all seasons"
    assert format_seasons(["summer", "summer", "winter"]) == "summer and winter"


def test_no_coverage_gives_neutral_score() -> None:
    result = score_item("top", [], scoring_input=_input(0, 3))
    assert result.score == 5.0
    assert result.reason == NO_COVERAGE_REASON


def test_no_outfits_penalty() -> None:
    result = score_item("top", [_gap("top", "summer", "Office Work", "expansion")], scoring_input=_input(0))
    assert result.score == 5.0
    assert result.reason.endswith(f" {NO_OUTFITS_MESSAGE}")
    assert result.adjustments == ("no_outfits",)


def test_limited_utility_penalty() -> None:
    result = score_item("top", [_gap("top", "summer", "Office Work", "expansion")], scoring_input=_input(2, 2))
    assert result.score == 6.0
    assert result.base_score == 8.0
    assert result.reason.endswith(f" {LIMITED_UTILITY_MESSAGE}")


@pytest.mark.parametrize("count, gaps", [(3, 5), (2, 1), (1, 0)])
def test_no_penalty_when_outfits_are_sufficient(count: int, gaps: int) -> None:
    result = score_item("top", [_gap("top", "summer", "Office Work", "critical")], scoring_input=_input(count, gaps))
    assert result.score == 10.0
    assert result.adjustments == ()


def test_score_never_drops_below_floor() -> None:
    result = score_item(
        "top",
        [_gap("top", "summer", "Office Work", "oversaturated")],
        user_goals=["save-money"],
        scoring_input=_input(0),
    )
    assert result.score == 1.0


def test_not_applicable_skips_outfit_adjustments() -> None:
    assert apply_outfit_adjustments(8.0, "Reason", NotApplicable(), 4) == (8.0, "Reason", ())
    result = score_item(
        "accessory",
        [_gap("accessory", "summer", "Office Work", "expansion")],
        scoring_input=build_scoring_input(None, applicable=False),
    )
    assert result.score == 8.0
    assert result.adjustments == ()
