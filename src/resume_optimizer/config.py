"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path

import yaml


def _check_range(name: str, value: float, low: float, high: float) -> None:
    if not low <= value <= high:
        raise ValueError(f"{name} must be between {low} and {high}, got {value}")


@dataclass(frozen=True)
class AnalysisConfig:
    max_keywords: int = 25
    max_skills: int = 20
    min_bullet_length: int = 10
    contact_scan_lines: int = 10

    def __post_init__(self):
        _check_range("max_keywords", self.max_keywords, 1, 200)
        _check_range("max_skills", self.max_skills, 1, 200)
        _check_range("min_bullet_length", self.min_bullet_length, 0, 200)
        _check_range("contact_scan_lines", self.contact_scan_lines, 1, 100)


@dataclass(frozen=True)
class ScoringConfig:
    no_keywords_default: int = 50
    overall_floor: int = 65
    overall_cap: int = 95
    quantification_bonus: int = 5
    action_verb_bonus: int = 5
    skills_empty_default: int = 40
    skills_floor: int = 50
    skills_cap: int = 98
    skills_bonus: int = 20
    experience_empty_default: int = 30
    experience_base: int = 70
    experience_quantified_base: int = 85
    experience_keyword_bonus: int = 3
    experience_cap: int = 96
    education_empty_default: int = 40
    education_present_score: int = 82
    ats_keyword_weight: float = 0.6
    ats_section_bonus: int = 20
    ats_contact_bonus: int = 15
    ats_structure_bonus: int = 10
    ats_floor: int = 50
    ats_cap: int = 95

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "ats_keyword_weight":
                _check_range(f.name, value, 0.0, 1.0)
            else:
                _check_range(f.name, value, 0, 100)
        for floor, cap in (
            ("overall_floor", "overall_cap"),
            ("skills_floor", "skills_cap"),
            ("ats_floor", "ats_cap"),
        ):
            if getattr(self, floor) > getattr(self, cap):
                raise ValueError(f"{floor} must not exceed {cap}")


@dataclass(frozen=True)
class RewriteConfig:
    max_skill_keywords: int = 6
    max_summary_keywords: int = 4
    max_bullet_keywords: int = 2
    summary_header: str = "PROFESSIONAL SUMMARY"

    def __post_init__(self):
        _check_range("max_skill_keywords", self.max_skill_keywords, 0, 50)
        _check_range("max_summary_keywords", self.max_summary_keywords, 0, 20)
        _check_range("max_bullet_keywords", self.max_bullet_keywords, 0, 10)
        if not self.summary_header.strip():
            raise ValueError("summary_header must not be blank")


@dataclass(frozen=True)
class UIConfig:
    analyze_delay_seconds: float = 3.0
    optimize_delay_seconds: float = 3.5
    max_upload_mb: int = 10

    def __post_init__(self):
        _check_range("analyze_delay_seconds", self.analyze_delay_seconds, 0, 30)
        _check_range("optimize_delay_seconds", self.optimize_delay_seconds, 0, 30)
        _check_range("max_upload_mb", self.max_upload_mb, 1, 100)


@dataclass(frozen=True)
class AppConfig:
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    rewrite: RewriteConfig = field(default_factory=RewriteConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    vocabulary: str = "default"


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        candidate = Path.cwd() / "config.yaml"
        if candidate.exists():
            path = candidate

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}

    return AppConfig(
        analysis=AnalysisConfig(**raw.get("analysis", {})),
        scoring=ScoringConfig(**raw.get("scoring", {})),
        rewrite=RewriteConfig(**raw.get("rewrite", {})),
        ui=UIConfig(**raw.get("ui", {})),
        vocabulary=raw.get("vocabulary", "default"),
    )
