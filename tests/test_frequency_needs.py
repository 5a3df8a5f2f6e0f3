"""Frequency parsing and category-needs tests."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.frequency_needs import (
    calculate_category_needs,
    calculate_frequency_based_needs,
    calculate_needs,
    calculate_outfit_needs,
    frequency_recommendations,
    outfit_strategies,
    parse_frequency_to_seasonal_use,
    season_duration_months,
)
from models.coverage import CategoryNeed
from models.wardrobe_item import Scenario, WardrobeItem


def test_season_duration() -> None:
    assert season_duration_months("summer") == 3
    assert season_duration_months("winter") == 3
    assert season_duration_months("spring/fall") == 6
    assert season_duration_months("Transitional") == 6


@pytest.mark.parametrize(
    "text, season, expected",
    [
        ("daily", "summer", 90),
        ("Every day", "spring/fall", 180),
        ("3 times per week", "summer", 39),
        ("1 time per week", "spring/fall", 26),
        ("twice per week", "winter", 26),
        ("weekly", "summer", 13),
        ("2 times per month", "summer", 6),
        ("twice per month", "spring/fall", 12),
        ("monthly", "winter", 3),
        ("rarely", "summer", 2),
        ("Seldom, maybe for weddings", "summer", 2),
        ("often", "summer", 30),
        ("frequently", "winter", 30),
        ("7 events", "summer", 28),
        ("50 days a season", "summer", 90),
        ("whenever", "summer", 5),
        ("", "summer", 5),
        (None, "summer", 5),
    ],
)
def test_parse_frequency_to_seasonal_use(text, season: str, expected: int) -> None:
    assert parse_frequency_to_seasonal_use(text, season) == expected


@pytest.mark.parametrize(
    "uses, expected",
    [(0, 1), (2, 1), (5, 2), (13, 4), (30, 5), (39, 6), (90, 14), (104, 16)],
)
def test_outfit_needs_heuristic(uses: int, expected: int) -> None:
    assert calculate_outfit_needs(uses) == expected


def test_three_times_per_week_targets() -> None:
    first = calculate_needs("3 times per week", "summer")
    second = calculate_needs("3 times per week", "summer")

    assert first == second
    assert first.outfits_needed == 6
    assert first.seasonal_uses == 39
    assert first.category_needs == {
        "top": CategoryNeed(3, 5, 8),
        "bottom": CategoryNeed(2, 4, 6),
        "one_piece": CategoryNeed(0, 2, 5),
        "outerwear": CategoryNeed(1, 2, 3),
        "footwear": CategoryNeed(2, 3, 4),
        "accessory": CategoryNeed(0, 2, 3),
    }


@pytest.mark.parametrize(
    "text, season, outfits",
    [("daily", "summer", 14), ("rarely", "summer", 1), ("", "winter", 2), ("4 times per week", "spring/fall", 16)],
)
def test_outfits_needed_examples(text: str, season: str, outfits: int) -> None:
    assert calculate_needs(text, season).outfits_needed == outfits


@pytest.mark.parametrize("outfits", [1, 2, 3, 6, 14, 30])
def test_category_ranges_are_ordered(outfits: int) -> None:
    for category, need in calculate_category_needs(outfits).items():
        assert 0 <= need.min <= need.ideal <= need.max, category
    assert calculate_category_needs(outfits)["footwear"].min >= 1


def test_category_need_rejects_inverted_range() -> None:
    with pytest.raises(ValueError):
        CategoryNeed(min=3, ideal=2, max=4)


def test_outfit_strategies_text() -> None:
    strategies = outfit_strategies(6)
    assert strategies["separates_focused"]["tops"] == 6
    assert strategies["separates_focused"]["bottoms"] == 5
    assert strategies["separates_focused"]["description"] == (
        "Focus on 6 versatile tops + 5 bottoms for mix-and-match flexibility"
    )
    assert strategies["dress_focused"]["one_piece"] == 4
    assert strategies["balanced"] == {
        "tops": 4,
        "bottoms": 3,
        "one_piece": 2,
        "description": "Balanced approach: 4 tops, 3 bottoms, 2 dresses",
    }


def _wardrobe() -> list:
    return [
        WardrobeItem("t1", "Blouse", "top", ["summer"], ["sc_office"]),
        WardrobeItem("t2", "Shirt", "top", ["summer", "winter"], ["sc_office"]),
        WardrobeItem("t3", "Sweater", "top", ["winter"], ["sc_office"]),
        WardrobeItem("t4", "Tank", "top", ["summer"], ["sc_gym"]),
        WardrobeItem("b1", "Trousers", "bottom", ["summer"], ["sc_office"]),
        WardrobeItem("d1", "Shirt Dress", "one_piece", [], ["sc_office"]),
    ]


def test_scenario_needs_report() -> None:
    office = Scenario("sc_office", "Office Work", "3 times per week")

    [need] = calculate_frequency_based_needs(_wardrobe(), [office], "summer")

    assert need.outfits_needed == 6
    assert need.current_items == {
        "top": 2,
        "bottom": 1,
        "one_piece": 1,
        "outerwear": 0,
        "footwear": 0,
        "accessory": 0,
    }
    assert need.gaps == {"top": 3, "bottom": 3, "one_piece": 1, "outerwear": 2, "footwear": 3, "accessory": 2}
    assert need.possible_outfits == 2
    assert need.overall_coverage == 33
    assert need.category_coverage["top"] == {"current": 2, "needed": 5, "coverage": 40}
    assert need.category_coverage["one_piece"]["coverage"] == 50
    assert need.to_dict()["scenario_name"] == "Office Work"


def test_coverage_caps_at_one_hundred() -> None:
    items = [WardrobeItem(f"t{index}", f"Top {index}", "top", ["summer"], ["sc_home"]) for index in range(5)]
    items += [WardrobeItem(f"b{index}", f"Bottom {index}", "bottom", ["summer"], ["sc_home"]) for index in range(5)]
    home = Scenario("sc_home", "Home", "rarely")

    [need] = calculate_frequency_based_needs(items, [home], "summer")

    assert need.overall_coverage == 100
    assert need.category_coverage["top"]["coverage"] == 100


def test_recommendations_prioritise_biggest_needs() -> None:
    scenarios = [
        Scenario("sc_office", "Office Work", "3 times per week"),
        Scenario("sc_rare", "Weddings", "rarely"),
        Scenario("sc_daily", "Everyday", "daily"),
        Scenario("sc_social", "Social Outings", "often"),
    ]
    needs = calculate_frequency_based_needs([], scenarios, "summer")

    recommendations = frequency_recommendations(needs)

    assert recommendations == [
        'Add 12 more top for "Everyday" (used daily)',
        'Add 9 more bottom for "Everyday" (used daily)',
        'Add 5 more top for "Office Work" (used 3 times per week)',
        'Add 4 more bottom for "Office Work" (used 3 times per week)',
        'Add 4 more top for "Social Outings" (used often)',
    ]


def test_recommendations_skip_well_covered_scenarios() -> None:
    items = [WardrobeItem("t1", "Tee", "top", [], ["sc_rare"]), WardrobeItem("b1", "Jeans", "bottom", [], ["sc_rare"])]
    needs = calculate_frequency_based_needs(items, [Scenario("sc_rare", "Weddings", "rarely")], "summer")
    assert frequency_recommendations(needs) == []
