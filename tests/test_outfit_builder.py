"""Outfit construction strategy tests."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import List

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.outfit_builder import build_outfits, is_layering_season, strategy_for, STRATEGIES
from models.wardrobe_item import WardrobeItem


def _item(name: str, category: str, seasons: List[str] | None = None) -> WardrobeItem:
    return WardrobeItem(item_id=name.lower().replace(" ", "_"), name=name, category=category, seasons=seasons or ["summer"])


def _names(outfit) -> List[str]:
    return [item.name for item in outfit.items]


def test_summer_dress_with_sandals_builds_single_plain_outfit() -> None:
    dress = _item("Floral Dress", "dress")
    result = build_outfits(dress, {"footwear": [_item("Sandals", "footwear")]}, "summer", "Social Outings")

    assert len(result.outfits) == 1
    outfit = result.outfits[0]
    assert outfit.outfit_type == "dress-based"
    assert _names(outfit) == ["Floral Dress", "Sandals"]
    assert outfit.anchor is dress


def test_dress_prefers_outerwear_in_cool_seasons() -> None:
    dress = _item("Knit Dress", "dress", ["winter"])
    pool = {
        "footwear": [_item("Boots", "footwear"), _item("Flats", "footwear")],
        "outerwear": [_item("Coat", "outerwear"), _item("Trench", "outerwear")],
        "accessory": [_item("Scarf", "accessory")],
    }

    result = build_outfits(dress, pool, "winter")

    assert [outfit.outfit_type for outfit in result.outfits] == ["dress-based-layered", "dress-based-layered"]
    assert [_names(outfit) for outfit in result.outfits] == [
        ["Knit Dress", "Boots", "Coat"],
        ["Knit Dress", "Flats", "Trench"],
    ]


def test_dress_uses_rotated_accessory_in_summer() -> None:
    dress = _item("Sun Dress", "one_piece")
    pool = {
        "footwear": [_item("Sandals", "footwear"), _item("Espadrilles", "footwear"), _item("Sneakers", "footwear")],
        "outerwear": [_item("Denim Jacket", "outerwear")],
        "accessory": [_item("Hat", "accessory"), _item("Bag", "accessory")],
    }

    result = build_outfits(dress, pool, "summer")

    assert all(outfit.outfit_type == "dress-based" for outfit in result.outfits)
    assert [outfit.items[-1].name for outfit in result.outfits] == ["Hat", "Bag", "Hat"]
    assert all("Denim Jacket" not in _names(outfit) for outfit in result.outfits)


def test_dress_without_extras_is_just_dress_and_shoes() -> None:
    result = build_outfits(_item("Slip Dress", "dress"), {"footwear": [_item("Mules", "footwear")]}, "spring/fall")
    assert _names(result.outfits[0]) == ["Slip Dress", "Mules"]


def test_top_never_emits_both_plain_and_layered_variants() -> None:
    top = _item("Tee", "top", ["spring/fall"])
    pool = {
        "bottom": [_item("Jeans", "bottom")],
        "footwear": [_item("Sneakers", "footwear"), _item("Boots", "footwear")],
        "outerwear": [_item("Blazer", "outerwear")],
    }

    result = build_outfits(top, pool, "spring/fall")

    assert [outfit.outfit_type for outfit in result.outfits] == ["top-based-layered", "top-based-layered"]
    pairs = [(outfit.items[1].name, outfit.items[2].name) for outfit in result.outfits]
    assert pairs == [("Jeans", "Sneakers"), ("Jeans", "Boots")]


def test_top_rotates_outerwear_across_combinations() -> None:
    top = _item("Shirt", "top")
    pool = {
        "bottom": [_item("Chinos", "bottom"), _item("Skirt", "bottom")],
        "footwear": [_item("Loafers", "footwear"), _item("Heels", "footwear")],
        "outerwear": [_item("Cardigan", "outerwear"), _item("Blazer", "outerwear")],
    }

    result = build_outfits(top, pool, "summer")

    assert [_names(outfit) for outfit in result.outfits] == [
        ["Shirt", "Chinos", "Loafers", "Cardigan"],
        ["Shirt", "Chinos", "Heels", "Blazer"],
        ["Shirt", "Skirt", "Loafers", "Cardigan"],
    ]
    assert result.diagnostics["truncated"] is True


def test_top_without_outerwear_is_plain() -> None:
    result = build_outfits(
        _item("Tee", "top"), {"bottoms": [_item("Shorts", "bottom")], "shoes": [_item("Slides", "footwear")]}, "summer"
    )
    assert [outfit.outfit_type for outfit in result.outfits] == ["top-based"]


def test_bottom_and_footwear_strategies() -> None:
    tops = [_item("Tee", "top"), _item("Blouse", "top")]
    bottoms = [_item("Jeans", "bottom")]
    shoes = [_item("Sneakers", "footwear")]

    bottom_result = build_outfits(_item("Skirt", "bottom"), {"top": tops, "footwear": shoes}, "summer")
    footwear_result = build_outfits(_item("Loafers", "footwear"), {"top": tops, "bottom": bottoms}, "summer")

    assert [_names(outfit) for outfit in bottom_result.outfits] == [
        ["Skirt", "Tee", "Sneakers"],
        ["Skirt", "Blouse", "Sneakers"],
    ]
    assert {outfit.outfit_type for outfit in bottom_result.outfits} == {"bottom-based"}
    assert [_names(outfit) for outfit in footwear_result.outfits] == [
        ["Loafers", "Tee", "Jeans"],
        ["Loafers", "Blouse", "Jeans"],
    ]
    assert {outfit.outfit_type for outfit in footwear_result.outfits} == {"footwear-based"}


def test_builder_caps_at_three_outfits() -> None:
    pool = {
        "bottom": [_item(f"Bottom {index}", "bottom") for index in range(3)],
        "footwear": [_item(f"Shoe {index}", "footwear") for index in range(3)],
    }
    result = build_outfits(_item("Tee", "top"), pool, "summer")

    assert len(result.outfits) == 3
    assert result.diagnostics["returned"] == 3


def test_missing_pools_yield_nothing() -> None:
    assert build_outfits(_item("Tee", "top"), {"bottom": [_item("Jeans", "bottom")]}, "summer").outfits == []
    assert build_outfits(_item("Tee", "top"), None, "summer").outfits == []
    assert build_outfits(_item("Dress", "dress"), {"footwear": []}, "summer").outfits == []


def test_unknown_category_falls_back_to_general() -> None:
    scarf = _item("Scarf", "scarf")
    pool = {
        "top": [_item("Tee", "top"), _item("Shirt", "top")],
        "bottom": [_item("Jeans", "bottom")],
        "footwear": [_item("Boots", "footwear")],
        "accessory": [_item("Belt", "accessory")],
    }

    result = build_outfits(scarf, pool, "summer")

    assert strategy_for("scarf") is not None
    assert len(result.outfits) == 1
    assert result.outfits[0].outfit_type == "general"
    assert _names(result.outfits[0]) == ["Scarf", "Tee", "Jeans", "Boots"]
    assert result.diagnostics["strategy"] == "general"


def test_general_with_empty_pool_returns_nothing() -> None:
    assert build_outfits(_item("Scarf", "scarf"), {}, "summer").outfits == []


@pytest.mark.parametrize("category", ["accessory", "outerwear"])
def test_non_anchor_categories_are_not_built(category: str) -> None:
    pool = {"top": [_item("Tee", "top")], "footwear": [_item("Boots", "footwear")]}
    result = build_outfits(_item("Piece", category), pool, "summer")
    assert result.outfits == []
    assert result.diagnostics["reason"] == "non_anchor_category"


def test_every_outfit_has_anchor_plus_one() -> None:
    pool = {"footwear": [_item("Boots", "footwear")], "top": [_item("Tee", "top")], "bottom": [_item("Jeans", "bottom")]}
    for category in STRATEGIES:
        for outfit in build_outfits(_item("Anchor", category), pool, "winter").outfits:
            assert len(outfit.items) >= 2
            assert outfit.items[0].name == "Anchor"


def test_layering_season_keywords() -> None:
    assert is_layering_season("winter")
    assert is_layering_season("spring/fall")
    assert not is_layering_season("summer")
    assert not is_layering_season("")


def test_layering_season_tags_are_case_sensitive() -> None:
    pool = {
        "footwear": [_item("Boots", "footwear")],
        "outerwear": [_item("Coat", "outerwear")],
        "accessory": [_item("Scarf", "accessory")],
    }

    assert not is_layering_season("Winter")
    assert [outfit.outfit_type for outfit in build_outfits(_item("Dress", "dress"), pool, "Winter").outfits] == [
        "dress-based"
    ]
