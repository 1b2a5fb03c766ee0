"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    required_keys:    list[str] = Field(default=[], description="Metadata keys that must be present and non-empty")
    block_directives: list[str] = Field(default=["highlight", "raw", "comment"], min_length=1,
                                        description="Directive families that open and close regions")
    extensions:       list[str] = Field(default=[".html", ".md", ".markdown"], description="Post file suffixes")

    @field_validator("required_keys", "block_directives", "extensions", mode="before")
    @classmethod
    def _split_csv(cls, value: Any) -> Any:
        """Accept comma-separated strings (env vars) as lists."""
        if isinstance(value, str):
            return [v.strip() for v in value.split(",") if v.strip()]
        return value


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then POSTDOC_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"POSTDOC_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
