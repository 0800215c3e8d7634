"""
Structured CV record shared by extraction and enhancement.

A CV record has the same shape whichever backend produced it, so a
single set of frozen pydantic models describes both.  Sequences are
stored as tuples: once a record is received it is never modified in
place, only replaced by a new record.
"""

from __future__ import annotations

import json
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from .exceptions import MalformedSubmission


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def none_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        # Extractors emit null for fields they could not find.
        if value is None:
            annotation = cls.model_fields[info.field_name].annotation
            if annotation is str:
                return ""
            if getattr(annotation, "__origin__", None) is tuple:
                return ()
        return value


class Contact(_Record):
    """Contact block of a CV.  Every field may be empty."""

    email: str = ""
    linkedin: str = ""
    phone: str = ""


class ExperienceEntry(_Record):
    title: str = ""
    company: str = ""
    years: str = ""


class EducationEntry(_Record):
    degree: str = ""
    school: str = ""
    year: str = ""


class CVRecord(_Record):
    """A complete CV.

    Attributes:
        name: Full name of the candidate (required).
        contact: Email, LinkedIn URL and phone number.
        skills: Skills in the order supplied by the source.
        technologies: Technologies in the order supplied by the source.
        experience: Work history in the order supplied by the source.
        education: Education history in the order supplied by the source.
    """

    name: str
    contact: Contact = Field(default_factory=Contact)
    skills: Tuple[str, ...] = ()
    technologies: Tuple[str, ...] = ()
    experience: Tuple[ExperienceEntry, ...] = ()
    education: Tuple[EducationEntry, ...] = ()

    @field_validator("contact", mode="before")
    @classmethod
    def missing_contact(cls, value: Any) -> Any:
        return {} if value is None else value

    def to_payload(self) -> dict:
        """Return the JSON-compatible wire form of this record."""
        return self.model_dump(mode="json")


def serialize_cv(record: CVRecord) -> str:
    """Serialise ``record`` for a hidden form field or an HTTP body."""
    return record.model_dump_json()


def parse_submission(raw: Optional[str]) -> Optional[CVRecord]:
    """Parse a serialised CV record submitted by the browser.

    Returns ``None`` when nothing was submitted: a missing field, a blank
    string, JSON ``null`` or an empty object.  Raises
    ``MalformedSubmission`` when the data is not JSON or does not
    describe a CV record.
    """
    if raw is None or not raw.strip():
        return None
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise MalformedSubmission(f"Submitted CV is not valid JSON: {exc}") from exc
    if data is None or data == {}:
        return None
    if not isinstance(data, dict):
        raise MalformedSubmission("Submitted CV must be a JSON object")
    try:
        return CVRecord.model_validate(data)
    except ValidationError as exc:
        raise MalformedSubmission(f"Submitted CV has an invalid shape: {exc}") from exc
