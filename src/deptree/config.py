"""Configuration for dependency-tree layout.

Defaults live in module-level constants. A ``TreeConfig`` can be built from a
nested dict, or loaded from a YAML file with environment-variable overrides:

    DEPTREE_MAX_DEPTH          -> max_depth
    DEPTREE_MAX_NODES          -> max_nodes_per_diagram
    DEPTREE_COMPLEX_THRESHOLD  -> complex_tree_threshold
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from deptree.errors import ConfigError

logger = logging.getLogger(__name__)

# ─── Defaults ─────────────────────────────────────────────────────────────────

MAX_DEPTH: int = 10
MAX_NODES_PER_DIAGRAM: int = 100
COMPLEX_TREE_THRESHOLD: int = 50  # node count above which the compact profile is used

MAX_CANVAS_WIDTH: int = 8000
MAX_CANVAS_HEIGHT: int = 8000
MIN_CANVAS_WIDTH: int = 800
MIN_CANVAS_HEIGHT: int = 600

STAGGER_OFFSET: int = 8  # pixels between parallel horizontal connections


class SizeMode(Enum):
    """Discrete node-size policy, chosen once per render from the node count."""

    NORMAL = "normal"
    COMPACT = "compact"


_ENV_OVERRIDES: dict[str, str] = {
    "DEPTREE_MAX_DEPTH": "max_depth",
    "DEPTREE_MAX_NODES": "max_nodes_per_diagram",
    "DEPTREE_COMPLEX_THRESHOLD": "complex_tree_threshold",
}


@dataclass(frozen=True)
class SizeProfile:
    """Pixel geometry of one size mode."""

    node_width: int
    node_height: int
    level_gap: int
    horizontal_gap: int
    font_size: int
    canvas_padding: int


NORMAL_PROFILE = SizeProfile(
    node_width=300,
    node_height=40,
    level_gap=80,
    horizontal_gap=20,
    font_size=12,
    canvas_padding=40,
)

COMPACT_PROFILE = SizeProfile(
    node_width=180,
    node_height=25,
    level_gap=40,
    horizontal_gap=10,
    font_size=9,
    canvas_padding=20,
)


@dataclass
class TreeConfig:
    """All knobs recognised by the layout pipeline."""

    max_depth: int = MAX_DEPTH
    max_nodes_per_diagram: int = MAX_NODES_PER_DIAGRAM
    complex_tree_threshold: int = COMPLEX_TREE_THRESHOLD
    normal_profile: SizeProfile = field(default_factory=lambda: NORMAL_PROFILE)
    compact_profile: SizeProfile = field(default_factory=lambda: COMPACT_PROFILE)
    max_canvas_width: int = MAX_CANVAS_WIDTH
    max_canvas_height: int = MAX_CANVAS_HEIGHT
    min_canvas_width: int = MIN_CANVAS_WIDTH
    min_canvas_height: int = MIN_CANVAS_HEIGHT
    stagger_offset: int = STAGGER_OFFSET
    abbreviate_labels: bool = True

    def profile_for(self, mode: SizeMode) -> SizeProfile:
        return self.compact_profile if mode is SizeMode.COMPACT else self.normal_profile

    def validate(self) -> None:
        """Raise ``ConfigError`` if any value cannot produce a sane layout."""
        for name in ("max_depth", "max_nodes_per_diagram"):
            if getattr(self, name) < 1:
                raise ConfigError(f"{name} must be at least 1, got {getattr(self, name)}")
        if self.complex_tree_threshold < 0:
            raise ConfigError(f"complex_tree_threshold must be non-negative, got {self.complex_tree_threshold}")
        if self.stagger_offset < 0:
            raise ConfigError(f"stagger_offset must be non-negative, got {self.stagger_offset}")
        if self.min_canvas_width > self.max_canvas_width or self.min_canvas_height > self.max_canvas_height:
            raise ConfigError(
                f"minimum canvas {self.min_canvas_width}x{self.min_canvas_height} exceeds "
                f"maximum {self.max_canvas_width}x{self.max_canvas_height}"
            )
        for profile_name in ("normal_profile", "compact_profile"):
            profile: SizeProfile = getattr(self, profile_name)
            if profile.node_width <= 0 or profile.node_height <= 0 or profile.font_size <= 0:
                raise ConfigError(f"{profile_name} node size and font size must be positive")
            if profile.level_gap < 0 or profile.horizontal_gap < 0 or profile.canvas_padding < 0:
                raise ConfigError(f"{profile_name} gaps and padding must be non-negative")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TreeConfig:
        """Build a config from a nested dict; unknown keys are ignored with a warning."""
        config = cls()
        known = {f.name for f in fields(cls)}
        updates: dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                logger.warning(f"Unknown config key '{key}', ignoring")
                continue
            if key in ("normal_profile", "compact_profile") and isinstance(value, dict):
                base: SizeProfile = getattr(config, key)
                profile_fields = {f.name for f in fields(SizeProfile)}
                for unknown in sorted(value.keys() - profile_fields):
                    logger.warning(f"Unknown config key '{key}.{unknown}', ignoring")
                value = replace(base, **{k: v for k, v in value.items() if k in profile_fields})
            updates[key] = value
        return replace(config, **updates)


def load_config(config_path: Path | None = None) -> TreeConfig:
    """Load a ``TreeConfig`` from YAML (if given) and apply environment overrides.

    The YAML file may hold the options at top level or under a ``deptree`` key.
    """
    config = TreeConfig()

    if config_path is not None and config_path.exists():
        logger.info(f"Loading config from: {config_path}")
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        config = TreeConfig.from_dict(data.get("deptree", data))
    elif config_path is not None:
        logger.info(f"Config file {config_path} not found, using defaults")

    config = _apply_env_overrides(config)
    config.validate()
    return config


def _apply_env_overrides(config: TreeConfig) -> TreeConfig:
    for env_name, attr in _ENV_OVERRIDES.items():
        raw = os.environ.get(env_name)
        if not raw:
            continue
        try:
            setattr(config, attr, int(raw))
        except ValueError:
            raise ConfigError(f"{env_name} must be an integer, got '{raw}'") from None
    return config
