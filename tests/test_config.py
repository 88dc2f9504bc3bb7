"""Tests for config loading."""

import pytest

from resume_optimizer.config import AppConfig, RewriteConfig, ScoringConfig, load_config


class TestConfig:
    def test_defaults(self):
        config = AppConfig()
        assert config.analysis.max_keywords == 25
        assert config.scoring.overall_floor == 65
        assert config.rewrite.summary_header == "PROFESSIONAL SUMMARY"
        assert config.ui.analyze_delay_seconds == 3.0
        assert config.vocabulary == "default"

    def test_load_config_defaults(self, tmp_path):
        """Loading from non-existent path returns defaults."""
        config = load_config(tmp_path / "nonexistent.yaml")
        assert config == AppConfig()

    def test_load_config_from_yaml(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text(
            "analysis:\n  max_keywords: 10\nscoring:\n  ats_keyword_weight: 0.5\n"
            "ui:\n  analyze_delay_seconds: 0\n"
        )
        config = load_config(yaml_path)
        assert config.analysis.max_keywords == 10
        assert config.scoring.ats_keyword_weight == 0.5
        assert config.ui.analyze_delay_seconds == 0
        # Defaults for unspecified
        assert config.rewrite.max_skill_keywords == 6

    def test_empty_yaml(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text("")
        assert load_config(yaml_path) == AppConfig()

    def test_cwd_config_picked_up(self, tmp_path, monkeypatch):
        (tmp_path / "config.yaml").write_text("rewrite:\n  max_bullet_keywords: 1\n")
        monkeypatch.chdir(tmp_path)
        assert load_config().rewrite.max_bullet_keywords == 1

    def test_unknown_key_rejected(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text("scoring:\n  bogus: 1\n")
        with pytest.raises(TypeError):
            load_config(yaml_path)

    def test_frozen_config(self):
        config = RewriteConfig()
        with pytest.raises(AttributeError):
            config.summary_header = "changed"

    def test_scoring_defaults_match_documented_constants(self):
        sc = ScoringConfig()
        assert (sc.overall_floor, sc.overall_cap) == (65, 95)
        assert (sc.skills_floor, sc.skills_cap) == (50, 98)
        assert (sc.ats_floor, sc.ats_cap) == (50, 95)
        assert sc.experience_cap == 96
