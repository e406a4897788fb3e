"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:         str = "strata-wiki"
    site_name:        str = Field(default="Strata Wiki", description="Suffix of every page <title>")
    wiki_dir:         str = Field(default="wiki",   description="Root directory of the markdown tree")
    static_dir:       str = Field(default="static", description="Directory served under /static")
    host:             str = "0.0.0.0"
    port:             int = Field(default=5004, ge=1, le=65535)
    nav_max_depth:    int = Field(default=3,    ge=0, description="Sidebar directory recursion depth")
    max_query_length: int = Field(default=1000, ge=1, description="Search queries are truncated to this")
    excerpt_radius:   int = Field(default=50,   ge=0, description="Chars shown on each side of a search hit")
    log_level:        str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then STRATAWIKI_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"STRATAWIKI_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
