"""Evaluation scenarios exercising categories, seasons and scenario sharing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List


@dataclass
class EvaluationScenario:
    name: str
    description: str
    payload: Dict[str, object]
    expectations: Dict[str, object]


def _item(item_id: str, name: str, category: str, seasons: List[str], **extra: object) -> Dict[str, object]:
    return {"id": item_id, "name": name, "category": category, "seasons": seasons, **extra}


SOCIAL = {"id": "sc_social", "name": "Social Outings", "frequency": "2 times per week"}
OFFICE = {"id": "sc_office", "name": "Office Work", "frequency": "5 times per week"}


def _wardrobe_fixtures() -> List[Dict[str, object]]:
    return [
        _item("bottom_jeans", "Blue Jeans", "bottom", ["summer", "spring/fall"]),
        _item("bottom_linen", "Linen Trousers", "bottom", ["summer"]),
        _item("shoes_sneakers", "White Sneakers", "footwear", ["summer", "spring/fall"]),
        _item("shoes_boots", "Ankle Boots", "footwear", ["winter"]),
        _item("coat_wool", "Wool Coat", "outerwear", ["winter"]),
        _item("acc_belt", "Leather Belt", "accessory", ["summer", "winter", "spring/fall"]),
    ]


SCENARIOS: List[EvaluationScenario] = [
    EvaluationScenario(
        name="summer_dress_sandals",
        description="A summer dress with a single pair of sandals yields one plain dress outfit.",
        payload={
            "item": _item("dress_1", "Floral Dress", "dress", ["summer"]),
            "scenarios": [SOCIAL],
            "compatible_items": {"footwear": [_item("shoes_sandals", "Sandals", "footwear", ["summer"])]},
        },
        expectations={"total_outfits": 1, "outfit_types": ["dress-based"]},
    ),
    EvaluationScenario(
        name="winter_dress_layered",
        description="In winter a dress picks up outerwear instead of an accessory.",
        payload={
            "item": _item("dress_2", "Knit Dress", "dress", ["winter"]),
            "scenarios": [SOCIAL],
            "compatible_items": {
                "footwear": [_item("shoes_boots", "Ankle Boots", "footwear", ["winter"])],
                "outerwear": [_item("coat_wool", "Wool Coat", "outerwear", ["winter"])],
                "accessory": [_item("acc_scarf", "Silk Scarf", "accessory", ["winter"])],
            },
        },
        expectations={"total_outfits": 1, "outfit_types": ["dress-based-layered"]},
    ),
    EvaluationScenario(
        name="top_shared_between_scenarios",
        description="Outfits valid for two scenarios reach both of them, each listed once per scenario.",
        payload={
            "item": _item("top_tee", "Striped Tee", "top", ["summer"]),
            "scenarios": [OFFICE, SOCIAL],
            "compatible_items": {
                "bottom": [
                    _item("bottom_jeans", "Blue Jeans", "bottom", ["summer"]),
                    _item("bottom_linen", "Linen Trousers", "bottom", ["summer"]),
                ],
                "footwear": [
                    _item("shoes_sneakers", "White Sneakers", "footwear", ["summer"]),
                    _item("shoes_loafers", "Loafers", "footwear", ["summer"]),
                ],
            },
        },
        expectations={"total_outfits": 6, "every_bucket_served": True, "unique_signatures": True},
    ),
    EvaluationScenario(
        name="accessory_not_applicable",
        description="Accessories skip outfit generation and report the not-applicable signal.",
        payload={
            "item": _item("acc_hat", "Straw Hat", "accessory", ["summer"]),
            "scenarios": [SOCIAL],
            "compatible_items": {"top": [_item("top_tee", "Striped Tee", "top", ["summer"])]},
        },
        expectations={"applicable": False, "total_outfits": 0},
    ),
    EvaluationScenario(
        name="one_piece_missing_footwear",
        description="A jumpsuit without footwear cannot be styled and the critical gap stays uncovered.",
        payload={
            "item": _item("jumpsuit_1", "Denim Jumpsuit", "one_piece", ["summer"]),
            "scenarios": [SOCIAL],
            "compatible_items": {"accessory": [_item("acc_belt", "Leather Belt", "accessory", ["summer"])]},
            "coverage": [
                {
                    "category": "one_piece",
                    "season": "summer",
                    "scenario_name": "Social Outings",
                    "gap_type": "critical",
                    "gap_count": 2,
                    "coverage_percent": 0,
                }
            ],
        },
        expectations={"total_outfits": 0, "gaps_without_outfits": 1, "score": 7.0},
    ),
    EvaluationScenario(
        name="wardrobe_driven_compatibility",
        description="Without a compatible-items mapping the rule-based provider derives one from the wardrobe.",
        payload={
            "item": _item("top_linen_shirt", "Linen Shirt", "top", ["summer"]),
            "scenarios": [SOCIAL],
            "wardrobe": _wardrobe_fixtures(),
        },
        expectations={"min_outfits": 1, "outfit_types": ["top-based"]},
    ),
]


__all__ = ["EvaluationScenario", "SCENARIOS"]
