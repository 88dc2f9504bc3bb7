import logging
from pathlib import Path

import yaml
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class VerbClass(BaseModel):
    name: str
    verbs: list[str]
    metric: str


class ContextualKeywords(BaseModel):
    keywords: list[str]
    context: str  # regex the bullet must match


class Vocabulary(BaseModel):
    name: str
    keyword_patterns: dict[str, list[str]]
    section_aliases: dict[str, list[str]]
    action_verbs: list[str]
    weak_verbs: dict[str, str]
    verb_classes: list[VerbClass]
    quantity_units: list[str]
    technical_skills: list[str]
    contextual_keywords: dict[str, ContextualKeywords]
    contextual_matches: dict[str, str]
    industry_terms: list[str]
    common_titles: list[str]

    def all_keyword_patterns(self) -> list[str]:
        """Patterns in scan order: technical, soft, then industry."""
        ordered = []
        for category in ("technical", "soft", "industry"):
            ordered.extend(self.keyword_patterns.get(category, []))
        for category, patterns in self.keyword_patterns.items():
            if category not in ("technical", "soft", "industry"):
                ordered.extend(patterns)
        return ordered

    def display_form(self, keyword: str) -> str:
        """Return the allow-list casing of a keyword, or the keyword unchanged."""
        lowered = keyword.lower()
        for skill in self.technical_skills:
            if skill.lower() == lowered:
                return skill
        return keyword


VOCABULARY_DIR = Path(__file__).parent


def load_vocabulary(name: str = "default") -> Vocabulary:
    """Load a vocabulary table by name from the vocabulary directory."""
    path = VOCABULARY_DIR / f"{name}.yaml"
    if not path.exists():
        raise FileNotFoundError(f"Vocabulary not found: {name}")
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    logger.debug("Loaded vocabulary %s from %s", name, path)
    return Vocabulary(**data)


def list_vocabularies() -> list[str]:
    """List available vocabulary table names."""
    return sorted(p.stem for p in VOCABULARY_DIR.glob("*.yaml"))
