"""
Global Configuration and Layout Defaults.

This module centralizes the defaults used by the layout engine, the
connector geometry and the viewport, and loads per-project overrides from
`.orgtree/config.yaml`.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from .core.errors import ConfigError
from .core.types import ConnectorStyle, CyclePolicy

# --- Card Geometry (diagram units) ---
DEFAULT_CARD_WIDTH = 240.0
DEFAULT_CARD_HEIGHT = 120.0

# --- Spacing ---
DEFAULT_H_GAP = 40.0
DEFAULT_V_GAP = 90.0

# --- Viewport ---
DEFAULT_MIN_SCALE = 0.2
DEFAULT_MAX_SCALE = 2.0
DEFAULT_ZOOM_STEP = 0.1
DEFAULT_MARGIN = 40.0

# --- Behaviour ---
DEFAULT_CONNECTOR_STYLE = ConnectorStyle.CURVE
DEFAULT_EXPAND_DEPTH = 2

CONFIG_DIR = ".orgtree"
CONFIG_FILE = "config.yaml"


class LayoutSettings(BaseModel):
    card_width: float = Field(DEFAULT_CARD_WIDTH, gt=0)
    card_height: float = Field(DEFAULT_CARD_HEIGHT, gt=0)
    h_gap: float = Field(DEFAULT_H_GAP, ge=0)
    v_gap: float = Field(DEFAULT_V_GAP, ge=0)
    root_gap: Optional[float] = Field(None, ge=0)
    cycle_policy: CyclePolicy = CyclePolicy.BREAK


class ViewportSettings(BaseModel):
    min_scale: float = Field(DEFAULT_MIN_SCALE, gt=0)
    max_scale: float = Field(DEFAULT_MAX_SCALE, gt=0)
    zoom_step: float = Field(DEFAULT_ZOOM_STEP, gt=0)
    margin: float = Field(DEFAULT_MARGIN, ge=0)

    @model_validator(mode="after")
    def _ordered_bounds(self) -> "ViewportSettings":
        if self.min_scale > self.max_scale:
            raise ValueError("min_scale must not exceed max_scale")
        return self


class ConnectorSettings(BaseModel):
    style: ConnectorStyle = DEFAULT_CONNECTOR_STYLE


class ExpansionSettings(BaseModel):
    # Nodes above this level start expanded; None expands everything.
    depth: Optional[int] = Field(DEFAULT_EXPAND_DEPTH, ge=0)
    active_only: bool = True


class OrgTreeConfig(BaseModel):
    """Project configuration, one section per engine component."""
    version: str = "1.0"
    layout: LayoutSettings = Field(default_factory=LayoutSettings)
    viewport: ViewportSettings = Field(default_factory=ViewportSettings)
    connectors: ConnectorSettings = Field(default_factory=ConnectorSettings)
    expansion: ExpansionSettings = Field(default_factory=ExpansionSettings)

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.model_dump(mode="json"), sort_keys=False,
                              default_flow_style=False)


def default_config_path(root: Optional[Path] = None) -> Path:
    return (root or Path.cwd()) / CONFIG_DIR / CONFIG_FILE


def load_config(path: Optional[Path] = None) -> OrgTreeConfig:
    """
    Load configuration from YAML.

    A missing file yields the defaults. Unreadable YAML or invalid values
    raise ConfigError.
    """
    config_path = Path(path) if path else default_config_path()
    if not config_path.exists():
        return OrgTreeConfig()

    try:
        data: Dict[str, Any] = yaml.safe_load(config_path.read_text()) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {config_path}")

    try:
        return OrgTreeConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e
