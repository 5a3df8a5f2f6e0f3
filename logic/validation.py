"""Pydantic schemas and helpers for validating analysis IO payloads."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from models.coverage import CoverageGap
from models.wardrobe_item import Scenario, WardrobeItem


def _as_list(value: Any) -> Any:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    return value


class ItemPayload(BaseModel):
    """Wardrobe item as supplied by callers."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1, validation_alias=AliasChoices("id", "item_id"))
    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    seasons: List[str] = Field(default_factory=list, validation_alias=AliasChoices("seasons", "season"))
    scenario_ids: List[str] = Field(default_factory=list, validation_alias=AliasChoices("scenario_ids", "scenarios"))
    subcategory: Optional[str] = None

    @field_validator("seasons", "scenario_ids", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> Any:
        return _as_list(value)

    def to_item(self) -> WardrobeItem:
        return WardrobeItem(
            item_id=self.id,
            name=self.name,
            category=self.category,
            seasons=tuple(self.seasons),
            scenario_ids=tuple(self.scenario_ids),
            subcategory=self.subcategory,
        )


class ScenarioPayload(BaseModel):
    """Usage scenario with a free-text frequency."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default="", validation_alias=AliasChoices("id", "scenario_id"))
    name: str = Field(min_length=1)
    frequency: str = ""

    @field_validator("frequency", mode="before")
    @classmethod
    def _blank_frequency(cls, value: Any) -> Any:
        return "" if value is None else value

    def to_scenario(self) -> Scenario:
        return Scenario(scenario_id=self.id, name=self.name, frequency=self.frequency)


class CoverageGapPayload(BaseModel):
    """Coverage row from the coverage tracker."""

    model_config = ConfigDict(populate_by_name=True)

    category: str
    season: str
    scenario_name: str = Field(validation_alias=AliasChoices("scenario_name", "scenarioName"))
    gap_type: Optional[str] = Field(default=None, validation_alias=AliasChoices("gap_type", "gapType"))
    gap_count: int = Field(default=0, ge=0, validation_alias=AliasChoices("gap_count", "gapCount"))
    coverage_percent: float = Field(default=0, validation_alias=AliasChoices("coverage_percent", "coveragePercent"))

    def to_gap(self) -> CoverageGap:
        return CoverageGap(
            category=self.category,
            season=self.season,
            scenario_name=self.scenario_name,
            gap_type=self.gap_type,
            gap_count=self.gap_count,
            coverage_percent=self.coverage_percent,
        )


class OutfitAnalysisRequest(BaseModel):
    """Request envelope for a full outfit analysis."""

    item: ItemPayload
    scenarios: List[ScenarioPayload] = Field(default_factory=list)
    wardrobe: List[ItemPayload] = Field(default_factory=list)
    compatible_items: Dict[str, List[ItemPayload]] = Field(default_factory=dict)
    coverage: List[CoverageGapPayload] = Field(default_factory=list)
    seasons: Optional[List[str]] = None
    suitable_scenarios: Optional[List[str]] = None
    user_goals: List[str] = Field(default_factory=list)

    @field_validator("compatible_items", mode="before")
    @classmethod
    def _drop_null_categories(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, dict):
            return {key: entries for key, entries in value.items() if isinstance(entries, list)}
        return value


class NeedsRequest(BaseModel):
    """Request envelope for frequency-based needs."""

    season: str = Field(min_length=1)
    scenarios: List[ScenarioPayload] = Field(default_factory=list)
    items: List[ItemPayload] = Field(default_factory=list)


class ValidationResult(BaseModel):
    """Wrapper returned to callers when validation fails."""

    status: Literal["needs_review"] = "needs_review"
    message: str
    details: List[Dict[str, Any]]


def validation_failure(message: str, exc: ValidationError) -> Dict[str, Any]:
    """Translate Pydantic errors into a consistent review payload."""

    return ValidationResult(message=message, details=exc.errors(include_url=False, include_context=False)).model_dump()


__all__ = [
    "ItemPayload",
    "ScenarioPayload",
    "CoverageGapPayload",
    "OutfitAnalysisRequest",
    "NeedsRequest",
    "ValidationResult",
    "validation_failure",
]
