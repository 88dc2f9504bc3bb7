"""Shared test fixtures."""

from __future__ import annotations

import pytest

from resume_optimizer.config import AppConfig, UIConfig
from resume_optimizer.models.document import RawDocument
from resume_optimizer.vocabulary.loader import load_vocabulary


@pytest.fixture
def sample_resume_text() -> str:
    return """Jane Doe
jane.doe@example.com | (555) 123-4567

EXPERIENCE
Software Engineer, Acme Corp (2020 - Present)
• Worked on the customer billing platform
• Improved deployment pipeline
• Led the onboarding redesign with measurable impact, reducing time by 42%

SKILLS
Python, JavaScript, Git

EDUCATION
B.S. Computer Science, State University"""


@pytest.fixture
def sample_jd_text() -> str:
    return """Senior Backend Engineer

We are hiring a backend engineer to build scalable services.

Requirements:
- Python, SQL, Docker
- Experience with AWS and Kubernetes
- Strong communication skills"""


@pytest.fixture
def expected_keywords() -> list[str]:
    return [
        "python",
        "sql",
        "docker",
        "aws",
        "kubernetes",
        "communication",
        "strong communication skills",
    ]


@pytest.fixture
def sample_document(sample_resume_text) -> RawDocument:
    return RawDocument(file_name="jane_doe.txt", mime_type="text/plain", text=sample_resume_text)


@pytest.fixture
def vocabulary():
    return load_vocabulary()


@pytest.fixture
def fast_config() -> AppConfig:
    return AppConfig(ui=UIConfig(analyze_delay_seconds=0, optimize_delay_seconds=0))
