"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from mdrich.core.style import DEFAULT_BASE_SIZE
from mdrich.core.styler import MatchMode


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "MDRICH_"


class Settings(BaseModel):
    base_size:     float = Field(default=DEFAULT_BASE_SIZE, gt=0, description="Body text size; anchors heading size encoding")
    parser_config: str = Field(default="gfm-like", description="MarkdownIt parser preset name")
    match_mode:    MatchMode = Field(default=MatchMode.aligned, description="aligned or legacy literal matching")
    log_level:     str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDRICH_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
