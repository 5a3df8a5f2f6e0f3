"""Configuration helpers for the wardrobe outfit engine."""

from dataclasses import asdict, dataclass, fields
from pathlib import Path
import os
from typing import Dict, Optional

from logic.outfit_builder import DEFAULT_MAX_OUTFITS as DEFAULT_MAX_OUTFITS_PER_BUILD
from logic.outfit_distribution import DEFAULT_MAX_OUTFITS_PER_SCENARIO

DEFAULT_CONFIG_DIR = "config/environments"

_TRUTHY = {"1", "true", "yes", "on"}


def load_config_file(path: Path) -> Dict[str, str]:
    """Read flat ``key: value`` lines; comments, blanks and nested keys are skipped."""

    values: Dict[str, str] = {}
    for line in path.read_text().splitlines():
        if not line.strip() or line.lstrip().startswith("#") or line[:1].isspace() or ":" not in line:
            continue
        key, raw_value = line.split(":", 1)
        value = raw_value.split(" #", 1)[0].strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        values[key.strip().lower()] = value
    return values


def _config_path(env_name: Optional[str]) -> Optional[Path]:
    explicit = os.getenv("APP_CONFIG_PATH")
    if explicit:
        return Path(explicit)
    if env_name:
        return Path(os.getenv("ENGINE_CONFIG_DIR", DEFAULT_CONFIG_DIR)) / f"{env_name}.yaml"
    return None


def _as_int(raw: Optional[str], default: int) -> int:
    """Positive integer from ``raw``; anything else yields ``default``."""

    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


def _as_bool(raw: Optional[str]) -> bool:
    return str(raw or "").strip().lower() in _TRUTHY


@dataclass
class EngineConfig:
    """Tunable limits and runtime settings for outfit analysis.

    The defaults reproduce the production heuristics: at most three outfits
    per builder call and ten outfits per scenario after distribution.
    ``relax_footwear_for_home`` drops the footwear requirement for
    home-like scenarios.
    """

    max_outfits_per_build: int = DEFAULT_MAX_OUTFITS_PER_BUILD
    max_outfits_per_scenario: int = DEFAULT_MAX_OUTFITS_PER_SCENARIO
    relax_footwear_for_home: bool = False
    log_level: str = "INFO"
    environment: str | None = None

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Build a config from environment variables and an optional config file.

        The file is ``APP_CONFIG_PATH`` or ``<ENGINE_CONFIG_DIR>/<APP_ENV>.yaml``.
        Environment variables (upper-cased field names) take precedence over
        file values.
        """

        env_name = os.getenv("APP_ENV")
        path = _config_path(env_name)
        file_values = load_config_file(path) if path and path.exists() else {}
        known = {field.name for field in fields(cls)} - {"environment"}
        raw = {name: os.getenv(name.upper(), file_values.get(name)) for name in known}

        return cls(
            max_outfits_per_build=_as_int(raw["max_outfits_per_build"], DEFAULT_MAX_OUTFITS_PER_BUILD),
            max_outfits_per_scenario=_as_int(raw["max_outfits_per_scenario"], DEFAULT_MAX_OUTFITS_PER_SCENARIO),
            relax_footwear_for_home=_as_bool(raw["relax_footwear_for_home"]),
            log_level=str(raw["log_level"] or "INFO").upper(),
            environment=env_name,
        )

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


__all__ = [
    "EngineConfig",
    "load_config_file",
    "DEFAULT_MAX_OUTFITS_PER_BUILD",
    "DEFAULT_MAX_OUTFITS_PER_SCENARIO",
]
