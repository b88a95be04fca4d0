"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ClassifierSection(BaseModel):
    permanent_after_years: float | None = None

    model_config = ConfigDict(extra="forbid")


class TenureSection(BaseModel):
    term_length_years: int | None = Field(default=None, gt=0)
    term_limit: int | None = Field(default=None, gt=0)
    threshold_days: int | None = None

    model_config = ConfigDict(extra="forbid")


class AuditSection(BaseModel):
    min_age: int | None = None
    max_age: int | None = None

    model_config = ConfigDict(extra="forbid")


class StatsSection(BaseModel):
    top_units: int | None = None
    valid_kecamatan: list[str] | None = None

    model_config = ConfigDict(extra="forbid")


class LinkerSection(BaseModel):
    min_similarity: float | None = None

    model_config = ConfigDict(extra="forbid")


class AppConfig(BaseModel):
    classifier: ClassifierSection = Field(default_factory=ClassifierSection)
    tenure: TenureSection = Field(default_factory=TenureSection)
    audit: AuditSection = Field(default_factory=AuditSection)
    stats: StatsSection = Field(default_factory=StatsSection)
    linker: LinkerSection = Field(default_factory=LinkerSection)

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        for name in ("classifier", "tenure", "audit", "stats", "linker"):
            section = getattr(self, name).model_dump(exclude_none=True)
            if section:
                settings[name] = section
        return settings


def load_config(raw: Any) -> AppConfig:
    if raw is None:
        return AppConfig()
    if not isinstance(raw, dict):
        raise ValueError("Config must be a mapping")
    return AppConfig.model_validate(raw)
