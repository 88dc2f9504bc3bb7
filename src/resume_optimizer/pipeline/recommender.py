"""Advisory strengths, improvement areas and ranked recommendations."""

from __future__ import annotations

import re
from dataclasses import dataclass

from resume_optimizer.analysis.scoring import is_quantified
from resume_optimizer.models.analysis import SemanticAnalysis
from resume_optimizer.models.document import ExtractedSections
from resume_optimizer.models.recommendation import IMPACT_RANK, MLRecommendation, Synthesis
from resume_optimizer.vocabulary.loader import Vocabulary, load_vocabulary

_METRIC = re.compile(r"\d+%|\d+\+|\$[\d,]+")

STRENGTH_RULES = (
    (_METRIC, "Quantified achievements and measurable results"),
    (re.compile(r"led|managed|supervised|directed"), "Leadership and management experience"),
    (re.compile(r"project|initiative|program"), "Project management and execution skills"),
    (re.compile(r"team|collaborate|cross-functional"), "Strong teamwork and collaboration abilities"),
    (re.compile(r"improved|optimized|enhanced|increased"), "Process improvement and optimization focus"),
)


@dataclass(frozen=True)
class Signals:
    """Everything the synthesizer reads; produced by the analyzer."""

    resume_text: str
    job_description: str
    sections: ExtractedSections
    keywords: list[str]
    missing_keywords: list[str]
    job_title: str
    semantic: SemanticAnalysis


def identify_strengths(resume_text: str) -> list[str]:
    text = resume_text.lower()
    strengths = [label for pattern, label in STRENGTH_RULES if pattern.search(text)]
    return strengths or ["Professional presentation", "Clear structure"]


def identify_improvements(resume_text: str, missing_keywords: list[str], job_title: str) -> list[str]:
    improvements = []
    text = resume_text.lower()
    if len(missing_keywords) > 5:
        improvements.append("Add more role-specific keywords and terminology")
    if not _METRIC.search(resume_text):
        improvements.append("Quantify achievements with specific metrics and numbers")
    if "result" not in text and "impact" not in text:
        improvements.append("Emphasize results and business impact of your work")
    if "senior" in job_title.lower() and "mentor" not in text:
        improvements.append("Highlight mentoring and knowledge-sharing activities")
    return improvements or ["Strong overall presentation"]


def _technical_terms(text: str, vocabulary: Vocabulary) -> list[str]:
    lowered = text.lower()
    return [s for s in vocabulary.technical_skills if s.lower() in lowered]


def _semantic_recommendations(semantic: SemanticAnalysis) -> list[MLRecommendation]:
    recs = []
    if semantic.semantic_similarity < 70:
        recs.append(MLRecommendation(
            type="semantic",
            section="Professional Summary",
            original="Generic professional summary without job-specific context",
            improved="Tailored professional summary built around the key job requirements",
            reason="Low overlap with the job description's wording; a targeted summary improves contextual relevance and ATS matching.",
            confidence=88,
            impact="high",
        ))
    if semantic.industry_alignment < 75:
        recs.append(MLRecommendation(
            type="semantic",
            section="Experience",
            original="Job descriptions without industry-specific terminology",
            improved="Industry-focused descriptions using the sector's technical vocabulary",
            reason="Industry terms from the posting are underrepresented in the resume.",
            confidence=82,
            impact="high",
        ))
    return recs


def _keyword_recommendations(missing_keywords: list[str], vocabulary: Vocabulary) -> list[MLRecommendation]:
    if not missing_keywords:
        return []
    top = ", ".join(vocabulary.display_form(k) for k in missing_keywords[:3])
    return [MLRecommendation(
        type="keyword",
        section="Skills",
        original=f"Current resume missing: {top}",
        improved=f"Skills and experience that mention: {top} with relevant context",
        reason=f"Adding these {len(missing_keywords)} missing keywords improves ATS matching and shows relevant expertise.",
        confidence=92,
        impact="high",
    )]


def _achievement_recommendations(bullets: list[str], vocabulary: Vocabulary) -> list[MLRecommendation]:
    recs = []
    weak = re.compile(
        r"^(?:" + "|".join(re.escape(w) for w in vocabulary.weak_verbs) + r")\b", re.IGNORECASE
    )
    weak_bullets = [b for b in bullets if weak.match(b.strip())]
    if weak_bullets:
        example = weak_bullets[0].strip()
        recs.append(MLRecommendation(
            type="achievement",
            section="Experience",
            original=example,
            improved=weak.sub("Led and delivered", example, count=1) + " resulting in 25% improved efficiency",
            reason="Weak action verbs reduce impact. Strong verbs with quantified results show measurable value.",
            confidence=85,
            impact="medium",
        ))
    unquantified = [b for b in bullets if not is_quantified(b, vocabulary)]
    if len(unquantified) > 2:
        recs.append(MLRecommendation(
            type="achievement",
            section="Experience",
            original="Experience descriptions lack quantifiable metrics",
            improved="Experience descriptions with specific numbers, percentages and outcomes",
            reason="Quantified achievements catch recruiter attention and demonstrate concrete value.",
            confidence=90,
            impact="high",
        ))
    return recs


def _skill_recommendations(skills: list[str], job_description: str, vocabulary: Vocabulary) -> list[MLRecommendation]:
    skills_text = " ".join(skills).lower()
    missing = [t for t in _technical_terms(job_description, vocabulary) if t.lower() not in skills_text]
    if not missing:
        return []
    top = ", ".join(missing[:3])
    return [MLRecommendation(
        type="skill",
        section="Skills",
        original=f"Skills section missing key technologies: {top}",
        improved=f"Skills section including: {top} with proficiency levels",
        reason="Missing technical skills lower the ATS matching score; listing them shows technical breadth.",
        confidence=87,
        impact="high",
    )]


def _formatting_recommendations(resume_text: str) -> list[MLRecommendation]:
    recs = []
    if "•" not in resume_text:
        recs.append(MLRecommendation(
            type="formatting",
            section="Overall",
            original="Resume uses inconsistent or no bullet points",
            improved="Consistent bullet point formatting throughout all sections",
            reason="Consistent formatting improves ATS parsing accuracy and readability.",
            confidence=75,
            impact="medium",
        ))
    if len(resume_text.split("\n")) < 15:
        recs.append(MLRecommendation(
            type="formatting",
            section="Overall",
            original="Resume appears too brief with insufficient detail",
            improved="Expanded content with detailed descriptions and broader skill coverage",
            reason="Longer resumes give ATS filters more keyword matching opportunities.",
            confidence=70,
            impact="medium",
        ))
    return recs


def rank(recommendations: list[MLRecommendation]) -> list[MLRecommendation]:
    """Impact high to low, then confidence descending; ties keep their order."""
    return sorted(recommendations, key=lambda r: (-IMPACT_RANK[r.impact], -r.confidence))


def synthesize(signals: Signals, vocabulary: Vocabulary | None = None) -> Synthesis:
    vocabulary = vocabulary or load_vocabulary()
    recommendations = [
        *_semantic_recommendations(signals.semantic),
        *_keyword_recommendations(signals.missing_keywords, vocabulary),
        *_achievement_recommendations(signals.sections.experience_bullets, vocabulary),
        *_skill_recommendations(signals.sections.skills, signals.job_description, vocabulary),
        *_formatting_recommendations(signals.resume_text),
    ]
    return Synthesis(
        strengths=identify_strengths(signals.resume_text),
        improvements=identify_improvements(
            signals.resume_text, signals.missing_keywords, signals.job_title
        ),
        recommendations=rank(recommendations),
    )
