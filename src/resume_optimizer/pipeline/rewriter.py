"""Rule-based resume rewriting.

Each step edits exact located spans of a working copy and logs one
RewriteChange per substitution. An edit is applied only when its ``original``
text is the first occurrence in the working copy, so replaying the change log
with first-occurrence replacement reproduces the rewritten text. Every step is
a no-op on its own output, which makes the whole rewrite idempotent.
"""

from __future__ import annotations

import logging
import re

from resume_optimizer.analysis.keywords import extract_job_title
from resume_optimizer.analysis.scoring import is_quantified
from resume_optimizer.analysis.sections import (
    BULLET_LINE,
    EMAIL_PATTERN,
    PHONE_PATTERN,
    extract_sections,
    match_header,
    owning_section,
    split_sections,
)
from resume_optimizer.config import AppConfig
from resume_optimizer.models.document import ExtractedSections
from resume_optimizer.models.rewrite import Improvements, RewriteChange, RewriteResult
from resume_optimizer.vocabulary.loader import Vocabulary, load_vocabulary

logger = logging.getLogger(__name__)

_BULLET_SPACING = re.compile(r"^([ \t]*)•[ \t]*(?=\S)", re.MULTILINE)
_LEADING_WORD = re.compile(r"[A-Za-z]+")


def normalize_layout(text: str) -> str:
    """Collapse 3+ newlines, normalize bullet spacing and trim the text."""
    text = re.sub(r"\n{3,}", "\n\n", text)
    text = _BULLET_SPACING.sub(r"\1• ", text)
    return text.strip()


def replay_changes(raw_text: str, changes: list[RewriteChange]) -> str:
    """Re-apply a change log to the text it was produced from."""
    if not changes:
        return raw_text
    text = raw_text
    for change in changes:
        text = text.replace(change.original, change.improved, 1)
    return normalize_layout(text)


def _sentence(parts: list[str]) -> str:
    text = "; ".join(parts)
    return text[:1].upper() + text[1:]


def _match_case(found: str, replacement: str) -> str:
    return replacement[0].upper() + replacement[1:] if found[:1].isupper() else replacement


def _mentions(text: str, term: str) -> bool:
    term = term.strip().lower()
    return bool(term) and re.search(rf"(?<!\w){re.escape(term)}(?!\w)", text) is not None


def _splice(text: str, start: int, original: str, improved: str) -> str | None:
    if text.find(original) != start:
        logger.debug("Skipping edit at %d: %r is not the first occurrence", start, original[:40])
        return None
    return text[:start] + improved + text[start + len(original):]


class RewriteEngine:
    """Insert keywords, quantification and a summary into resume text."""

    def __init__(self, config: AppConfig | None = None, vocabulary: Vocabulary | None = None):
        self.config = config or AppConfig()
        self.vocabulary = vocabulary or load_vocabulary(self.config.vocabulary)
        self._aliases = {
            alias.lower(): canonical
            for canonical, aliases in self.vocabulary.section_aliases.items()
            for alias in aliases
        }
        self._weak_verbs = [
            (re.compile(rf"\b{re.escape(weak)}\b", re.IGNORECASE), strong)
            for weak, strong in self.vocabulary.weak_verbs.items()
        ]
        self._verb_metrics = {
            verb.lower(): vc.metric
            for vc in self.vocabulary.verb_classes
            for verb in vc.verbs
        }

    def enhance(
        self,
        raw_text: str,
        job_description: str,
        missing_keywords: list[str],
        sections: ExtractedSections | None = None,
    ) -> RewriteResult:
        if sections is None:
            sections = extract_sections(raw_text, self.config.analysis, self.vocabulary)

        changes: list[RewriteChange] = []
        counts = {"keywords_added": 0, "achievements_quantified": 0, "skills_enhanced": 0}

        text = self._insert_summary(raw_text, job_description, missing_keywords, changes, counts)
        text = self._augment_skills(
            text, job_description, missing_keywords, sections, changes, counts
        )
        text = self._enhance_achievements(text, missing_keywords, sections, changes, counts)

        if not changes:
            logger.info("Rewrite found nothing to change")
            return RewriteResult(rewritten_text=raw_text, changes=[], counts=Improvements())

        text = normalize_layout(text)
        logger.info(
            "Rewrite complete: %d changes (%d keywords, %d achievements, %d sections)",
            len(changes),
            counts["keywords_added"],
            counts["achievements_quantified"],
            counts["skills_enhanced"],
        )
        return RewriteResult(
            rewritten_text=text,
            changes=changes,
            counts=Improvements(**counts, total_changes=len(changes)),
        )

    # -- step 1 --------------------------------------------------------------

    def _contact_anchor(self, text: str) -> tuple[int, str] | None:
        """Last contact line (email or phone) near the top of the document."""
        anchor = None
        offset = 0
        for i, line in enumerate(text.split("\n")[: self.config.analysis.contact_scan_lines]):
            if EMAIL_PATTERN.search(line) or PHONE_PATTERN.search(line):
                anchor = (offset, line)
            elif i > 2 and match_header(line, self._aliases) is not None:
                break
            offset += len(line) + 1
        return anchor

    def compose_summary(self, job_description: str, missing_keywords: list[str]) -> str:
        role = extract_job_title(job_description, self.vocabulary)
        limit = self.config.rewrite.max_summary_keywords
        keywords = [self.vocabulary.display_form(k) for k in missing_keywords[:limit]]
        closing = (
            "Committed to delivering quality results and collaborating effectively "
            "with cross-functional teams."
        )
        if len(keywords) >= 2:
            summary = f"Experienced {role} with proven expertise in {keywords[0]} and {keywords[1]}."
            if keywords[2:]:
                summary += f" Skilled in {', '.join(keywords[2:])}."
        elif keywords:
            summary = f"Experienced {role} with proven expertise in {keywords[0]}."
        else:
            summary = f"Experienced {role} with a track record of delivering measurable results."
        return f"{summary} {closing}"

    def _insert_summary(self, text, job_description, missing_keywords, changes, counts) -> str:
        blocks = split_sections(text, self.vocabulary)
        if any(b.name == "summary" for b in blocks):
            return text
        anchor = self._contact_anchor(text)
        if anchor is None:
            logger.debug("No contact block found, summary not inserted")
            return text

        start, line = anchor
        summary = self.compose_summary(job_description, missing_keywords)
        improved = f"{line}\n\n{self.config.rewrite.summary_header}\n{summary}"
        rest = text[start + len(line):]
        if rest.startswith("\n") and not rest.startswith("\n\n") and rest.strip():
            improved += "\n"

        new_text = _splice(text, start, line, improved)
        if new_text is None:
            return text
        changes.append(
            RewriteChange(
                type="formatting",
                section="Professional Summary",
                original=line,
                improved=improved,
                reason=(
                    "Added a professional summary with relevant keywords so recruiters "
                    "and ATS filters see the fit immediately"
                ),
            )
        )
        counts["skills_enhanced"] += 1
        return new_text

    # -- step 2 --------------------------------------------------------------

    def _augment_skills(
        self, text, job_description, missing_keywords, sections, changes, counts
    ) -> str:
        if not sections.skills or not missing_keywords:
            return text
        block = next((b for b in split_sections(text, self.vocabulary) if b.name == "skills"), None)
        if block is None:
            return text
        body = block.body(text).rstrip()
        if not body.strip():
            return text

        limit = self.config.rewrite.max_skill_keywords
        jd_lower = job_description.lower()
        listed = sum(1 for skill in sections.skills if _mentions(jd_lower, skill))
        if listed >= limit:
            logger.debug("Skills already list %d posting terms, not augmented", listed)
            return text

        original = text[block.start:block.body_start + len(body)]
        skills_lower = body.lower()
        technical = {s.lower() for s in self.vocabulary.technical_skills}

        additions: list[str] = []
        for keyword in missing_keywords:
            if len(additions) >= limit:
                break
            k = keyword.lower()
            if k in skills_lower or any(a.lower() == k for a in additions):
                continue
            if k in technical or k in jd_lower:
                additions.append(self.vocabulary.display_form(keyword))
        if not additions:
            return text

        joined = ", ".join(additions)
        improved = original + (" " if original.endswith(",") else ", ") + joined
        new_text = _splice(text, block.start, original, improved)
        if new_text is None:
            return text
        changes.append(
            RewriteChange(
                type="keyword",
                section="Skills",
                original=original,
                improved=improved,
                reason=(
                    f"Added {len(additions)} keywords from the job description: {joined}. "
                    "These improve ATS matching and show relevant expertise."
                ),
            )
        )
        counts["keywords_added"] += len(additions)
        return new_text

    # -- step 3 --------------------------------------------------------------

    def _in_scope(self, blocks, position: int, has_experience: bool) -> bool:
        owner = owning_section(blocks, position)
        if has_experience:
            return owner == "experience"
        return owner in (None, "summary")

    def _metric_for(self, bullet: str) -> str | None:
        m = _LEADING_WORD.search(bullet)
        return self._verb_metrics.get(m.group(0).lower()) if m else None

    def _contextual_keywords(self, bullet: str, missing_keywords: list[str]) -> list[str]:
        missing = {k.lower() for k in missing_keywords}
        lowered = bullet.lower()
        picked: list[str] = []
        for group in self.vocabulary.contextual_keywords.values():
            if not re.search(group.context, bullet, re.IGNORECASE):
                continue
            for keyword in group.keywords:
                if keyword in missing and keyword not in lowered and keyword not in picked:
                    picked.append(keyword)
        return [
            self.vocabulary.display_form(k)
            for k in picked[: self.config.rewrite.max_bullet_keywords]
        ]

    def improve_bullet(self, bullet: str, missing_keywords: list[str]) -> tuple[str, list[str], int]:
        """Return the improved bullet, the reasons, and the count of keywords woven in."""
        reasons = []
        improved = bullet
        for pattern, strong in self._weak_verbs:
            m = pattern.search(improved)
            if not m:
                continue
            improved = pattern.sub(lambda w: _match_case(w.group(0), strong), improved)
            reasons.append(
                f"replaced weak phrase '{m.group(0)}' with '{_match_case(m.group(0), strong)}'"
            )

        stem, period = (improved[:-1], ".") if improved.endswith(".") else (improved, "")
        if not is_quantified(improved, self.vocabulary):
            metric = self._metric_for(stem)
            if metric:
                stem = f"{stem} {metric}"
                reasons.append("added a measurable outcome")

        # Keyword context is read from the bullet as written
        keywords = self._contextual_keywords(bullet, missing_keywords)
        if keywords:
            stem = f"{stem} using {' and '.join(keywords)}"
            reasons.append(f"wove in job keywords: {', '.join(keywords)}")

        return stem + period, reasons, len(keywords)

    def _enhance_achievements(self, text, missing_keywords, sections, changes, counts) -> str:
        if not sections.experience_bullets:
            return text
        known = set(sections.experience_bullets)
        blocks = split_sections(text, self.vocabulary)
        has_experience = any(b.name == "experience" for b in blocks)

        delta = 0
        for m in list(BULLET_LINE.finditer(text)):
            body = m.group("body").strip()
            if body not in known or not self._in_scope(blocks, m.start(), has_experience):
                continue
            new_body, reasons, woven = self.improve_bullet(body, missing_keywords)
            if new_body == body:
                continue

            original = m.group("marker") + body
            improved = m.group("marker") + new_body
            new_text = _splice(text, m.start() + delta, original, improved)
            if new_text is None:
                continue
            text = new_text
            delta += len(improved) - len(original)
            changes.append(
                RewriteChange(
                    type="achievement",
                    section="Experience",
                    original=original,
                    improved=improved,
                    reason=_sentence(reasons),
                )
            )
            counts["achievements_quantified"] += 1
            counts["keywords_added"] += woven
        return text


def enhance(
    raw_text: str,
    job_description: str,
    missing_keywords: list[str],
    sections: ExtractedSections | None = None,
    *,
    config: AppConfig | None = None,
    vocabulary: Vocabulary | None = None,
) -> RewriteResult:
    """Rewrite resume text against a job description; see RewriteEngine."""
    return RewriteEngine(config, vocabulary).enhance(
        raw_text, job_description, missing_keywords, sections
    )
