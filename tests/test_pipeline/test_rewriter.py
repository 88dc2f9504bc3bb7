"""Tests for RewriteEngine."""

import pytest

from resume_optimizer.analysis.keywords import extract_job_keywords, find_missing_keywords
from resume_optimizer.analysis.sections import extract_sections
from resume_optimizer.config import AppConfig, RewriteConfig
from resume_optimizer.pipeline.rewriter import (
    RewriteEngine,
    enhance,
    normalize_layout,
    replay_changes,
)

SUMMARY = (
    "Experienced backend engineer with proven expertise in SQL and Docker. "
    "Skilled in AWS, Kubernetes. Committed to delivering quality results and "
    "collaborating effectively with cross-functional teams."
)

EXPECTED = f"""Jane Doe
jane.doe@example.com | (555) 123-4567

PROFESSIONAL SUMMARY
{SUMMARY}

EXPERIENCE
Software Engineer, Acme Corp (2020 - Present)
• Developed the customer billing platform serving 1000+ users
• Improved deployment pipeline by 30%
• Led the onboarding redesign with measurable impact, reducing time by 42%

SKILLS
Python, JavaScript, Git, SQL, Docker, AWS, Kubernetes, communication, strong communication skills

EDUCATION
B.S. Computer Science, State University"""


@pytest.fixture
def engine():
    return RewriteEngine()


@pytest.fixture
def sample_result(engine, sample_resume_text, sample_jd_text):
    keywords = extract_job_keywords(sample_jd_text)
    missing = find_missing_keywords(sample_resume_text, keywords)
    return engine.enhance(sample_resume_text, sample_jd_text, missing)


class TestSampleRewrite:
    def test_rewritten_text(self, sample_result):
        assert sample_result.rewritten_text == EXPECTED

    def test_change_log(self, sample_result):
        assert [c.type for c in sample_result.changes] == [
            "formatting",
            "keyword",
            "achievement",
            "achievement",
        ]
        bullet = sample_result.changes[2]
        assert bullet.original == "• Worked on the customer billing platform"
        assert bullet.improved == "• Developed the customer billing platform serving 1000+ users"
        assert bullet.reason.startswith("Replaced weak phrase 'Worked on' with 'Developed'")

    def test_counts(self, sample_result):
        counts = sample_result.counts
        assert counts.keywords_added == 6
        assert counts.achievements_quantified == 2
        assert counts.skills_enhanced == 1
        assert counts.total_changes == len(sample_result.changes) == 4

    def test_replay_reproduces_output(self, sample_resume_text, sample_result):
        text = sample_resume_text
        for change in sample_result.changes:
            text = text.replace(change.original, change.improved, 1)
        assert text == sample_result.rewritten_text
        assert replay_changes(sample_resume_text, sample_result.changes) == sample_result.rewritten_text

    def test_idempotent(self, engine, sample_jd_text, sample_result):
        rewritten = sample_result.rewritten_text
        missing = find_missing_keywords(rewritten, extract_job_keywords(sample_jd_text))
        again = engine.enhance(rewritten, sample_jd_text, missing, extract_sections(rewritten))
        assert again.changes == []
        assert again.rewritten_text == rewritten

    def test_idempotent_without_keywords(self, engine, sample_jd_text, sample_result):
        rewritten = sample_result.rewritten_text
        again = engine.enhance(rewritten, sample_jd_text, [], extract_sections(rewritten))
        assert again.changes == []


class TestScenarios:
    def test_single_unquantified_bullet(self, engine):
        result = engine.enhance("• Improved deployment pipeline", "Requirements: Python", ["python"])
        assert result.rewritten_text == "• Improved deployment pipeline by 30%"
        assert len(result.changes) == 1
        change = result.changes[0]
        assert change.type == "achievement"
        assert change.original == "• Improved deployment pipeline"
        assert change.improved == "• Improved deployment pipeline by 30%"

    def test_quantified_bullet_unchanged(self, engine):
        raw = "• Led the onboarding redesign with measurable impact, reducing time by 42%"
        result = engine.enhance(raw, "Requirements: SQL", ["sql"])
        assert result.changes == []
        assert result.rewritten_text == raw

    def test_noop_returns_raw_text_exactly(self, engine):
        raw = "  Some notes\n\n\n\nwithout structure  "
        result = engine.enhance(raw, "Requirements: Python", [])
        assert result.rewritten_text == raw
        assert result.counts.total_changes == 0


class TestSummary:
    def test_not_inserted_without_contact_block(self, engine):
        raw = "Jane Doe\n\nSKILLS\nPython"
        result = engine.enhance(raw, "Requirements: SQL", ["sql"])
        assert "PROFESSIONAL SUMMARY" not in result.rewritten_text

    def test_not_duplicated(self, engine):
        raw = "Jane Doe\njane@example.com\n\nSUMMARY\nBackend engineer.\n\nSKILLS\nPython"
        result = engine.enhance(raw, "Requirements: SQL", ["sql"])
        assert "PROFESSIONAL SUMMARY" not in result.rewritten_text
        assert [c.type for c in result.changes] == ["keyword"]

    def test_compose_without_keywords(self, engine):
        summary = engine.compose_summary("Position: Data Analyst", [])
        assert summary.startswith(
            "Experienced Data Analyst with a track record of delivering measurable results."
        )

    def test_compose_with_one_keyword(self, engine):
        summary = engine.compose_summary("Position: Data Analyst", ["sql"])
        assert summary.startswith("Experienced Data Analyst with proven expertise in SQL.")

    def test_blank_line_kept_before_next_section(self, engine):
        raw = "Jane Doe\njane@example.com\nEXPERIENCE\n• Built the billing service"
        result = engine.enhance(raw, "Position: Engineer", [])
        assert "\n\nPROFESSIONAL SUMMARY\n" in result.rewritten_text
        assert "teams.\n\nEXPERIENCE" in result.rewritten_text


class TestSkills:
    def test_only_technical_or_posting_keywords_added(self, engine):
        raw = "SKILLS\nPython"
        result = engine.enhance(raw, "Requirements: Docker", ["docker", "terraform"])
        assert result.rewritten_text == "SKILLS\nPython, Docker"

    def test_capped(self):
        engine = RewriteEngine(AppConfig(rewrite=RewriteConfig(max_skill_keywords=2)))
        result = engine.enhance("SKILLS\nPython", "", ["sql", "docker", "aws"])
        assert result.rewritten_text == "SKILLS\nPython, SQL, Docker"
        assert result.counts.keywords_added == 2

    def test_disabled(self):
        engine = RewriteEngine(AppConfig(rewrite=RewriteConfig(max_skill_keywords=0)))
        result = engine.enhance("SKILLS\nPython", "", ["sql"])
        assert result.changes == []

    def test_trailing_comma(self, engine):
        result = engine.enhance("SKILLS\nPython,", "", ["sql"])
        assert result.rewritten_text == "SKILLS\nPython, SQL"

    def test_not_counted_as_section_enhancement(self, engine):
        result = engine.enhance("SKILLS\nPython", "Requirements: Docker", ["docker"])
        assert result.counts.keywords_added == 1
        assert result.counts.skills_enhanced == 0

    def test_long_posting_augmented_once(self, engine):
        jd = "Requirements: Python, Java, React, Angular, TypeScript, MongoDB, Git, Docker, AWS, SQL"
        raw = "SKILLS\nPython"
        keywords = extract_job_keywords(jd)
        first = engine.enhance(raw, jd, find_missing_keywords(raw, keywords))
        assert first.counts.keywords_added == 6

        rewritten = first.rewritten_text
        missing = find_missing_keywords(rewritten, keywords)
        assert missing
        again = engine.enhance(rewritten, jd, missing, extract_sections(rewritten))
        assert again.changes == []
        assert again.rewritten_text == rewritten

    def test_section_listing_enough_posting_terms_untouched(self):
        engine = RewriteEngine(AppConfig(rewrite=RewriteConfig(max_skill_keywords=2)))
        result = engine.enhance("SKILLS\nPython, SQL", "Requirements: Python, SQL, Docker", ["docker"])
        assert result.changes == []


class TestBullets:
    def test_weak_phrase_keeps_period(self, engine):
        bullet, reasons, woven = engine.improve_bullet("Helped with the data migration.", [])
        assert bullet == "Collaborated on the data migration."
        assert reasons == ["replaced weak phrase 'Helped with' with 'Collaborated on'"]
        assert woven == 0

    def test_metric_goes_before_period(self, engine):
        bullet, _, _ = engine.improve_bullet("Built a reporting service.", [])
        assert bullet == "Built a reporting service serving 1000+ users."

    def test_keywords_woven_by_context(self, engine):
        bullet, _, woven = engine.improve_bullet(
            "Coordinated the project rollout across regions", ["agile", "scrum", "docker"]
        )
        assert bullet == (
            "Coordinated the project rollout across regions for a team of 5+ members "
            "using Agile and Scrum"
        )
        assert woven == 2

    def test_keyword_context_read_from_bullet_as_written(self, engine):
        # "Worked on" becomes "Developed", which alone must not pull in technical keywords
        bullet, _, woven = engine.improve_bullet("Worked on the billing platform", ["aws", "docker"])
        assert bullet == "Developed the billing platform serving 1000+ users"
        assert woven == 0

    def test_process_keywords_need_process_context(self, engine):
        bullet, reasons, woven = engine.improve_bullet("Led the billing migration", ["agile", "scrum"])
        assert bullet == "Led the billing migration for a team of 5+ members"
        assert reasons == ["added a measurable outcome"]
        assert woven == 0

    def test_every_occurrence_of_weak_phrase_replaced(self, engine):
        bullet, reasons, _ = engine.improve_bullet(
            "Worked on the API and worked on the admin UI", []
        )
        assert bullet == "Developed the API and developed the admin UI serving 1000+ users"
        assert reasons[0] == "replaced weak phrase 'Worked on' with 'Developed'"

    def test_repeated_weak_phrase_settles_in_one_pass(self, engine):
        raw = "• Worked on the API and worked on the admin UI"
        result = engine.enhance(raw, "", [])
        assert result.rewritten_text == (
            "• Developed the API and developed the admin UI serving 1000+ users"
        )
        again = engine.enhance(result.rewritten_text, "", [])
        assert again.changes == []

    def test_bullets_outside_experience_untouched(self, engine):
        raw = "EXPERIENCE\n• Improved deployment pipeline\n\nPROJECTS\n• Improved home network setup"
        result = engine.enhance(raw, "", [])
        assert result.rewritten_text == (
            "EXPERIENCE\n• Improved deployment pipeline by 30%\n\nPROJECTS\n• Improved home network setup"
        )

    def test_bullets_under_employer_header_in_scope(self, engine):
        raw = "EXPERIENCE\nACME CORPORATION\n• Reduced build times"
        result = engine.enhance(raw, "", [])
        assert result.rewritten_text.endswith("• Reduced build times by 25%")

    def test_bullet_spacing_normalized(self, engine):
        result = engine.enhance("•Improved deployment pipeline", "", [])
        assert result.rewritten_text == "• Improved deployment pipeline by 30%"


class TestHelpers:
    def test_normalize_layout(self):
        assert normalize_layout("\n\nA\n\n\n\n•B\n  •   C\n") == "A\n\n• B\n  • C"

    def test_replay_without_changes(self):
        assert replay_changes("  raw  ", []) == "  raw  "

    def test_module_level_enhance(self, sample_resume_text, sample_jd_text):
        result = enhance(sample_resume_text, sample_jd_text, ["sql"])
        assert result.counts.total_changes > 0
