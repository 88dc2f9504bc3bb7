"""Tests for the typer CLI."""

import pytest
from docx import Document
from typer.testing import CliRunner

from resume_optimizer.cli import app

runner = CliRunner()


@pytest.fixture
def inputs(tmp_path, sample_resume_text, sample_jd_text):
    resume = tmp_path / "jane.txt"
    resume.write_text(sample_resume_text, encoding="utf-8")
    jd = tmp_path / "jd.txt"
    jd.write_text(sample_jd_text, encoding="utf-8")
    return resume, jd, tmp_path / "missing-config.yaml"


class TestAnalyzeCommand:
    def test_prints_report(self, inputs):
        resume, jd, config = inputs
        result = runner.invoke(app, ["analyze", str(resume), "--jd", str(jd), "--config", str(config)])
        assert result.exit_code == 0
        assert "Overall" in result.output
        assert "Missing keywords" in result.output

    def test_missing_resume(self, inputs, tmp_path):
        _, jd, config = inputs
        result = runner.invoke(
            app, ["analyze", str(tmp_path / "nope.txt"), "--jd", str(jd), "--config", str(config)]
        )
        assert result.exit_code == 1

    def test_unsupported_resume(self, inputs, tmp_path):
        _, jd, config = inputs
        bad = tmp_path / "resume.xyz"
        bad.write_bytes(b"data")
        result = runner.invoke(app, ["analyze", str(bad), "--jd", str(jd), "--config", str(config)])
        assert result.exit_code == 1
        assert "Unsupported" in result.output

    def test_blank_job_description(self, inputs, tmp_path):
        resume, _, config = inputs
        jd = tmp_path / "blank.txt"
        jd.write_text("   \n", encoding="utf-8")
        result = runner.invoke(app, ["analyze", str(resume), "--jd", str(jd), "--config", str(config)])
        assert result.exit_code == 1


class TestOptimizeCommand:
    def test_writes_text(self, inputs, tmp_path):
        resume, jd, config = inputs
        output = tmp_path / "out" / "jane_optimized.txt"
        result = runner.invoke(
            app,
            ["optimize", str(resume), "--jd", str(jd), "-o", str(output), "--config", str(config)],
        )
        assert result.exit_code == 0
        text = output.read_text(encoding="utf-8")
        assert "PROFESSIONAL SUMMARY" in text
        assert "• Improved deployment pipeline by 30%" in text

    def test_writes_docx(self, inputs, tmp_path):
        resume, jd, config = inputs
        output = tmp_path / "jane.docx"
        result = runner.invoke(
            app,
            ["optimize", str(resume), "--jd", str(jd), "-o", str(output), "--config", str(config)],
        )
        assert result.exit_code == 0
        headings = [p.text for p in Document(str(output)).paragraphs if p.style.name == "Heading 2"]
        assert headings == ["PROFESSIONAL SUMMARY", "EXPERIENCE", "SKILLS", "EDUCATION"]

    def test_writes_html(self, inputs, tmp_path):
        resume, jd, config = inputs
        output = tmp_path / "jane.html"
        result = runner.invoke(
            app,
            ["optimize", str(resume), "--jd", str(jd), "-o", str(output), "--config", str(config)],
        )
        assert result.exit_code == 0
        assert "<title>Jane Doe</title>" in output.read_text(encoding="utf-8")
