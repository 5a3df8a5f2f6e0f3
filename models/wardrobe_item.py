"""Wardrobe item and scenario data models and helpers."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, Tuple

from models.taxonomy import normalize_category


def _ensure_tuple(value: Any) -> Tuple[str, ...]:
    """Coerce a scalar or iterable of labels into a tuple of strings."""

    if value is None:
        return ()
    if isinstance(value, str):
        return (value,) if value else ()
    if isinstance(value, (list, tuple, set, frozenset)):
        return tuple(str(entry) for entry in value if entry is not None and str(entry) != "")
    return (str(value),)


@dataclass(frozen=True)
class WardrobeItem:
    """Immutable snapshot of a wardrobe item supplied by the caller.

    ``seasons`` are free-text tags kept exactly as given because season
    matching is case-sensitive substring containment. ``scenario_ids`` lists
    the scenarios the item is assigned to; an empty tuple means "any".
    """

    item_id: str
    name: str
    category: str
    seasons: Tuple[str, ...] = field(default_factory=tuple)
    scenario_ids: Tuple[str, ...] = field(default_factory=tuple)
    subcategory: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "item_id", str(self.item_id))
        object.__setattr__(self, "name", str(self.name))
        object.__setattr__(self, "category", normalize_category(self.category))
        object.__setattr__(self, "seasons", _ensure_tuple(self.seasons))
        object.__setattr__(self, "scenario_ids", _ensure_tuple(self.scenario_ids))

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["seasons"] = list(self.seasons)
        payload["scenario_ids"] = list(self.scenario_ids)
        return payload


@dataclass(frozen=True)
class Scenario:
    """A usage scenario (e.g. "Office Work") with a free-text frequency."""

    scenario_id: str
    name: str
    frequency: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def from_raw_metadata(metadata: Dict[str, Any]) -> WardrobeItem:
    """Factory to build a :class:`WardrobeItem` from loose caller metadata.

    Accepts the key variants seen in stored wardrobe rows (``id``/``item_id``,
    ``season``/``seasons``, ``scenarios``/``scenario_ids``).
    """

    item_id = metadata.get("item_id", metadata.get("id"))
    missing = [
        name
        for name, value in (("item_id", item_id), ("name", metadata.get("name")), ("category", metadata.get("category")))
        if value in (None, "")
    ]
    if missing:
        raise ValueError(f"Missing required fields for WardrobeItem: {missing}")

    seasons = metadata.get("seasons", metadata.get("season"))
    scenario_ids = metadata.get("scenario_ids", metadata.get("scenarios"))
    return WardrobeItem(
        item_id=str(item_id),
        name=str(metadata["name"]),
        category=str(metadata["category"]),
        seasons=_ensure_tuple(seasons),
        scenario_ids=_ensure_tuple(scenario_ids),
        subcategory=metadata.get("subcategory"),
    )


def scenario_from_raw(metadata: Dict[str, Any]) -> Scenario:
    scenario_id = metadata.get("scenario_id", metadata.get("id"))
    if scenario_id in (None, "") or not metadata.get("name"):
        raise ValueError("Scenario requires an id and a name")
    return Scenario(
        scenario_id=str(scenario_id),
        name=str(metadata["name"]),
        frequency=str(metadata.get("frequency") or ""),
    )


def find_scenario(scenarios: Iterable[Scenario], name: str) -> Scenario | None:
    """Return the first scenario whose name equals ``name`` exactly."""

    for scenario in scenarios:
        if scenario.name == name:
            return scenario
    return None


__all__ = ["WardrobeItem", "Scenario", "from_raw_metadata", "scenario_from_raw", "find_scenario"]
