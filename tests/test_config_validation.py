"""Tests for config value validation."""

import pytest

from resume_optimizer.config import AnalysisConfig, RewriteConfig, ScoringConfig, UIConfig, load_config


class TestLoadConfigValidation:
    def test_invalid_max_keywords(self, tmp_path):
        """max_keywords above 200 raises ValueError."""
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("analysis:\n  max_keywords: 500\n")
        with pytest.raises(ValueError, match="max_keywords"):
            load_config(yaml)

    def test_invalid_delay(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("ui:\n  optimize_delay_seconds: 60\n")
        with pytest.raises(ValueError, match="optimize_delay_seconds"):
            load_config(yaml)


class TestAnalysisValidation:
    def test_max_keywords_zero(self):
        with pytest.raises(ValueError, match="max_keywords"):
            AnalysisConfig(max_keywords=0)

    def test_max_skills_too_large(self):
        with pytest.raises(ValueError, match="max_skills"):
            AnalysisConfig(max_skills=500)

    def test_valid(self):
        assert AnalysisConfig(max_keywords=1, min_bullet_length=0).max_keywords == 1


class TestScoringValidation:
    def test_score_out_of_range(self):
        with pytest.raises(ValueError, match="education_present_score"):
            ScoringConfig(education_present_score=101)

    def test_weight_out_of_range(self):
        with pytest.raises(ValueError, match="ats_keyword_weight"):
            ScoringConfig(ats_keyword_weight=1.5)

    def test_floor_above_cap(self):
        with pytest.raises(ValueError, match="overall_floor must not exceed overall_cap"):
            ScoringConfig(overall_floor=96)

    def test_negative_bonus(self):
        with pytest.raises(ValueError, match="skills_bonus"):
            ScoringConfig(skills_bonus=-1)


class TestRewriteValidation:
    def test_blank_header(self):
        with pytest.raises(ValueError, match="summary_header"):
            RewriteConfig(summary_header="   ")

    def test_zero_caps_allowed(self):
        config = RewriteConfig(max_skill_keywords=0, max_summary_keywords=0, max_bullet_keywords=0)
        assert config.max_bullet_keywords == 0


class TestUIValidation:
    def test_delay_too_long(self):
        with pytest.raises(ValueError, match="analyze_delay_seconds"):
            UIConfig(analyze_delay_seconds=31)

    def test_negative_delay(self):
        with pytest.raises(ValueError, match="optimize_delay_seconds"):
            UIConfig(optimize_delay_seconds=-1)

    def test_upload_limit(self):
        with pytest.raises(ValueError, match="max_upload_mb"):
            UIConfig(max_upload_mb=0)
