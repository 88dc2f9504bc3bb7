"""Synthetic "semantic" signals for the insights view.

These are string-containment formulas, not a language model. They are
deterministic unless a ``random.Random`` is passed, in which case a bounded
jitter is added to each signal.
"""

from __future__ import annotations

import random

from resume_optimizer.analysis.scoring import clamp, is_quantified
from resume_optimizer.models.analysis import SemanticAnalysis
from resume_optimizer.models.document import ExtractedSections
from resume_optimizer.vocabulary.loader import Vocabulary, load_vocabulary

MAX_CONTEXTUAL_MATCHES = 8


def _jitter(rng: random.Random | None, spread: float) -> float:
    return rng.uniform(0, spread) if rng is not None else 0.0


def semantic_similarity(resume_text: str, job_description: str, rng=None) -> int:
    resume_words = resume_text.lower().split()
    job_words = job_description.lower().split()
    job_vocab = set(job_words)
    common = [w for w in resume_words if len(w) > 3 and w in job_vocab]
    similarity = len(common) / max(len(resume_words), len(job_words), 1) * 100
    return clamp(similarity * 2.5 + _jitter(rng, 10), 45, 95)


def contextual_matches(resume_text: str, job_description: str, vocabulary: Vocabulary) -> list[str]:
    resume_lower = resume_text.lower()
    job_lower = job_description.lower()
    matches = [
        label
        for term, label in vocabulary.contextual_matches.items()
        if term in resume_lower and term in job_lower
    ]
    return matches[:MAX_CONTEXTUAL_MATCHES]


def industry_alignment(
    resume_text: str, job_description: str, vocabulary: Vocabulary, rng=None
) -> int:
    resume_lower = resume_text.lower()
    job_lower = job_description.lower()
    resume_hits = sum(1 for t in vocabulary.industry_terms if t in resume_lower)
    job_hits = sum(1 for t in vocabulary.industry_terms if t in job_lower)
    alignment = resume_hits / max(job_hits, 1) * 100
    return clamp(alignment + _jitter(rng, 15), 50, 95)


def skill_relevance(skills: list[str], keywords: list[str], rng=None) -> int:
    if not skills:
        return 40
    if not keywords:
        return 50
    skills_text = " ".join(skills).lower()
    relevant = sum(1 for k in keywords if k.lower() in skills_text)
    return clamp(relevant / len(keywords) * 100 + _jitter(rng, 20), 35, 95)


def experience_depth(bullets: list[str], vocabulary: Vocabulary, rng=None) -> int:
    if not bullets:
        return 30
    depth = min(90.0, len(" ".join(bullets)) / 100 * 10 + 40)
    if any(is_quantified(b, vocabulary) for b in bullets):
        depth += 15
    return clamp(depth + _jitter(rng, 10))


def analyze_semantics(
    resume_text: str,
    job_description: str,
    sections: ExtractedSections,
    keywords: list[str],
    *,
    vocabulary: Vocabulary | None = None,
    rng: random.Random | None = None,
) -> SemanticAnalysis:
    vocabulary = vocabulary or load_vocabulary()

    similarity = semantic_similarity(resume_text, job_description, rng)
    alignment = industry_alignment(resume_text, job_description, vocabulary, rng)
    relevance = skill_relevance(sections.skills, keywords, rng)
    depth = experience_depth(sections.experience_bullets, vocabulary, rng)
    confidence = clamp(similarity * 0.3 + alignment * 0.25 + relevance * 0.25 + depth * 0.2)

    return SemanticAnalysis(
        semantic_similarity=similarity,
        contextual_matches=contextual_matches(resume_text, job_description, vocabulary),
        industry_alignment=alignment,
        skill_relevance=relevance,
        experience_depth=depth,
        confidence_score=confidence,
    )
