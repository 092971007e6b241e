"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "NOTIONMD_"


class Settings(BaseModel):
    app_name:       str = "notionmd"
    notion_token:   str = Field(default="", description="Notion integration secret")
    notion_version: str = Field(default="2022-06-28", description="Value of the Notion-Version header")
    base_url:       str = Field(default="https://api.notion.com/v1", description="Notion API root")
    timeout:        float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")
    page_size:      int = Field(default=100, ge=1, le=100, description="Children fetched per page (first page only)")
    strict:         bool = Field(default=False, description="Fail on unsupported block types instead of dropping them")
    log_level:      str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    log_file:       Optional[str] = Field(default=None, description="Optional log file path")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then NOTIONMD_<FIELD> env vars, then non-None CLI overrides."""
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
