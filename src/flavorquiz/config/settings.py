"""Configuration model for FlavorQuiz."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator


class ComparisonOptions(BaseModel):
    """Thresholds and switches for answer comparison."""

    model_config = ConfigDict(frozen=True)

    perfect_threshold: float = Field(default=1.0, ge=0.0, le=1.0)
    close_threshold: float = Field(default=0.85, ge=0.0, le=1.0)
    accept_threshold: float = Field(default=0.80, ge=0.0, le=1.0)
    strict_flavors: bool = True
    log_details: bool = False

    @model_validator(mode="after")
    def _thresholds_descend(self) -> "ComparisonOptions":
        if not (self.perfect_threshold >= self.close_threshold >= self.accept_threshold):
            raise ValueError(
                "thresholds must satisfy perfect >= close >= accept"
            )
        return self


class Settings(BaseModel):
    comparison: ComparisonOptions = Field(default_factory=ComparisonOptions)
    taxonomy_path: Optional[Path] = None
    data_dir: Path = Path.home() / ".flavorquiz"

    def get_taxonomy_path(self) -> Optional[Path]:
        env = os.environ.get("FLAVORQUIZ_TAXONOMY")
        if env:
            return Path(env)
        return self.taxonomy_path

    @classmethod
    def load(cls) -> "Settings":
        config_path = Path.home() / ".flavorquiz" / "config.yaml"
        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
            return cls(**data)
        return cls()

    def save(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        config_path = self.data_dir / "config.yaml"
        with open(config_path, "w") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False)
