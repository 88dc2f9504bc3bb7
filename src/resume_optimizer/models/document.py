"""Pydantic models for decoded documents and extracted resume sections."""

from __future__ import annotations

from pydantic import BaseModel


class RawDocument(BaseModel):
    """Text produced once by the document decoder."""

    file_name: str
    mime_type: str
    text: str

    model_config = {"frozen": True}


class ExtractedSections(BaseModel):
    """Structured view of a resume; absent sections are empty lists or None."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    skills: list[str] = []
    experience_bullets: list[str] = []
    education_lines: list[str] = []

    model_config = {"frozen": True}

    @property
    def display_name(self) -> str:
        return self.name or "Candidate"
