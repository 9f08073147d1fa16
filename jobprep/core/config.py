"""Configuration models and YAML loader for job analysis."""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator


class StorageConfig(BaseModel):
    """Key-value store backend."""

    backend: Literal["sqlite", "memory"] = "sqlite"
    path: str = "data/jobprep.db"


class AnalysisConfig(BaseModel):
    """Validation threshold and output limits for the analysis pipeline."""

    min_description_length: int = Field(default=50, ge=1)
    max_responsibilities: int = Field(default=8, ge=1)
    max_behavioral: int = Field(default=7, ge=0)
    max_technical: int = Field(default=7, ge=0)
    max_system_design: int = Field(default=2, ge=0)
    max_coding: int = Field(default=3, ge=0)


class ScoringConfig(BaseModel):
    """Constants for the simulated compatibility score.

    No candidate profile feeds the score; match_ratio is a fixed placeholder
    that splits the required skills positionally into matched and missing.
    """

    match_ratio: float = Field(default=0.75, ge=0.0, le=1.0)
    experience_scores: dict[str, int] = Field(
        default_factory=lambda: {"senior": 85, "mid": 75},
    )
    default_experience_score: int = Field(default=65, ge=0, le=100)
    baseline_score: int = Field(default=75, ge=0, le=100)
    technical_stack_score: int = Field(default=75, ge=0, le=100)
    culture_fit_score: int = Field(default=75, ge=0, le=100)
    max_recommendations: int = Field(default=5, ge=0)

    @field_validator("experience_scores")
    @classmethod
    def scores_in_range(cls, v: dict[str, int]) -> dict[str, int]:
        for level, score in v.items():
            if not 0 <= score <= 100:
                msg = f"experience score for '{level}' must be within 0-100, got {score}"
                raise ValueError(msg)
        return v


class SessionConfig(BaseModel):
    """Who the CLI acts as. demo_mode signs in a local demo user when no username is set."""

    username: str | None = None
    demo_mode: bool = True


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)

    @classmethod
    def load(cls, path: str | Path | None) -> "Settings":
        """Like from_yaml, but fall back to defaults when no file exists."""
        if path is None or not Path(path).exists():
            return cls()
        return cls.from_yaml(path)
