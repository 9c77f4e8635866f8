from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"

FACTOR_KEYS = (
    'cM',
    'triangulationDepth',
    'gedcomConvergence',
    'surnameMatch',
    'haplogroupConsistency',
    'lifespanScore',
    'locationScore',
)


def _load_yaml(yaml_path: Path) -> Dict[str, Any]:
    if not yaml_path or not Path(yaml_path).exists():
        raise FileNotFoundError(f"Configuration file not found: {yaml_path}")
    try:
        with open(yaml_path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing {yaml_path}: {e}")


@dataclass
class AceConfig:
    """
    Configuration for ancestral convergence scoring.

    Defaults are loaded from config.yaml in the scoring directory; values given
    to from_dict() or found in another YAML file override them.
    """
    generation_cap: int = field(init=False)

    weights: Dict[str, float] = field(init=False)

    cm_full_score: float = field(init=False)
    cm_per_generation: float = field(init=False)

    name_match_ratio: float = field(init=False)

    estimated_lifespan_years: int = field(init=False)
    lifespan_gap_likely: List[int] = field(init=False)
    lifespan_gap_plausible: List[int] = field(init=False)
    lifespan_likely_score: float = field(init=False)
    lifespan_plausible_score: float = field(init=False)
    lifespan_unlikely_score: float = field(init=False)

    location_match_score: float = field(init=False)
    location_mismatch_score: float = field(init=False)

    neutral_score: float = field(init=False)

    explanation_thresholds: Dict[str, float] = field(init=False)

    min_candidate_score: float = field(init=False)
    max_candidates: int = field(init=False)

    confidence_thresholds: Dict[str, float] = field(init=False)

    segment_unit: str = field(init=False)

    def __post_init__(self):
        """Load the packaged defaults."""
        self._apply(_load_yaml(DEFAULT_CONFIG_PATH))
        self.validate()

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> AceConfig:
        """
        Load configuration from a specific YAML file.

        Keys missing from the file keep their packaged defaults.

        Args:
            yaml_path: Path to YAML config file.

        Returns:
            AceConfig: Configuration instance.
        """
        return cls.from_dict(_load_yaml(Path(yaml_path)))

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> AceConfig:
        """
        Create configuration from a dictionary of overrides.

        Unknown keys are ignored. Nested dictionaries (weights, thresholds) are
        merged key by key into the defaults.

        Args:
            config_dict (Dict[str, Any]): Dictionary with configuration values.

        Returns:
            AceConfig: Configuration instance.
        """
        instance = cls()
        unknown = [key for key in config_dict if key not in cls.__dataclass_fields__]
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {unknown}")
        instance._apply({k: v for k, v in config_dict.items() if k in cls.__dataclass_fields__})
        instance.validate()
        return instance

    def _apply(self, config_dict: Dict[str, Any]) -> None:
        for key in self.__dataclass_fields__.keys():
            if key not in config_dict:
                if not hasattr(self, key):
                    raise ValueError(f"Required configuration field '{key}' not found in config.yaml")
                continue
            value = config_dict[key]
            current = getattr(self, key, None)
            if isinstance(current, dict) and isinstance(value, dict):
                value = {**current, **value}
            setattr(self, key, value)

    def validate(self) -> None:
        """
        Check every factor has a non-negative weight.

        Weights need not sum to 1.0; the scorer clamps the weighted sum to
        [0, 100].

        Raises:
            ValueError: If the configuration is inconsistent.
        """
        missing = [key for key in FACTOR_KEYS if key not in self.weights]
        if missing:
            raise ValueError(f"Missing factor weights: {missing}")
        negative = [key for key in FACTOR_KEYS if self.weights[key] < 0]
        if negative:
            raise ValueError(f"Factor weights must not be negative: {negative}")
        if self.generation_cap < 0:
            raise ValueError("generation_cap must not be negative")
        if self.max_candidates < 0:
            raise ValueError("max_candidates must not be negative")

    def explanation_threshold(self, factor_key: str) -> Optional[float]:
        return self.explanation_thresholds.get(factor_key)
