"""Tests for vocabulary tables."""

import re

import pytest

from resume_optimizer.vocabulary.loader import list_vocabularies, load_vocabulary


class TestVocabulary:
    def test_default_listed(self):
        assert "default" in list_vocabularies()

    def test_missing(self):
        with pytest.raises(FileNotFoundError):
            load_vocabulary("nonexistent")

    def test_pattern_order(self, vocabulary):
        patterns = vocabulary.all_keyword_patterns()
        assert patterns[0] == vocabulary.keyword_patterns["technical"][0]
        assert patterns[-1] == vocabulary.keyword_patterns["industry"][-1]

    def test_patterns_compile(self, vocabulary):
        for pattern in vocabulary.all_keyword_patterns():
            re.compile(pattern)
        for group in vocabulary.contextual_keywords.values():
            re.compile(group.context)

    def test_display_form(self, vocabulary):
        assert vocabulary.display_form("sql") == "SQL"
        assert vocabulary.display_form("node.js") == "Node.js"
        assert vocabulary.display_form("communication") == "communication"

    def test_section_aliases(self, vocabulary):
        assert set(vocabulary.section_aliases) >= {"summary", "skills", "experience", "education"}
        assert "professional summary" in vocabulary.section_aliases["summary"]

    def test_verb_classes_cover_metrics(self, vocabulary):
        metrics = {vc.name: vc.metric for vc in vocabulary.verb_classes}
        assert metrics == {
            "improvement": "by 30%",
            "reduction": "by 25%",
            "leadership": "for a team of 5+ members",
            "creation": "serving 1000+ users",
        }
