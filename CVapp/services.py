"""
Gateways used by the CV page.

This module defines the two external boundaries of the CV workflow:
loading a user's stored CV and enhancing a CV.  Each boundary is an
abstract class with interchangeable implementations, so the page
controller depends only on the abstractions (Dependency Inversion) and
backends can be swapped without touching it (Strategy pattern).

Both boundaries are one-shot calls: nothing here retries.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Optional

from django.conf import settings
from openai import OpenAI
from pydantic import ValidationError

from .models import Resume
from .schemas import CVRecord, serialize_cv

logger = logging.getLogger(__name__)


class CVStoreGateway(ABC):
    """Abstract source of stored CV records."""

    @abstractmethod
    def load_cv(self, user_id: int) -> Optional[CVRecord]:
        """Return the stored CV of ``user_id`` or ``None`` if there is none.

        Implementations must not modify any stored data.
        """


class DatabaseCVStore(CVStoreGateway):
    """Read the most recent ``Resume`` of a user from the database."""

    def load_cv(self, user_id: int) -> Optional[CVRecord]:
        resume = (
            Resume.objects.filter(uploaded_by_id=user_id)
            .order_by("-uploaded_at", "-id")
            .first()
        )
        if resume is None or not resume.extracted_cv:
            return None
        return CVRecord.model_validate(resume.extracted_cv)


class EnhancementGateway(ABC):
    """Abstract service turning a CV record into an improved one."""

    @abstractmethod
    def enhance(self, record: CVRecord) -> CVRecord:
        """Return a new, enhanced CV with the same shape as ``record``."""


ENHANCEMENT_PROMPT = """
You are an expert resume writer. You receive a CV as a JSON object and
return an improved version of the same CV as a JSON object.
- Keep exactly the same keys and structure: name, contact (email,
  linkedin, phone), skills, technologies, experience (title, company,
  years) and education (degree, school, year).
- Keep personal information such as name, email, phone and LinkedIn
  unchanged.
- Keep the order of every list.
- Rephrase titles, skills and technologies so they read clearly and
  professionally, and fix spelling and capitalisation.
- Do not invent data, titles, employers or experience that are not
  present in the original CV.
- Reply with the JSON object only, without any introduction or comment.
"""


class OpenAIEnhancementService(EnhancementGateway):
    """Enhancement backed by the OpenAI chat completions API."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gpt-4o-mini",
        temperature: float = 0.7,
        client: Optional[OpenAI] = None,
    ) -> None:
        self.client = client if client is not None else OpenAI(api_key=api_key)
        self.model = model
        self.temperature = temperature

    def enhance(self, record: CVRecord) -> CVRecord:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": ENHANCEMENT_PROMPT.strip()},
                {"role": "user", "content": serialize_cv(record)},
            ],
            response_format={"type": "json_object"},
            temperature=self.temperature,
        )
        content = (response.choices[0].message.content or "").strip()
        try:
            enhanced = CVRecord.model_validate(json.loads(content))
        except (ValueError, ValidationError) as exc:
            raise ValueError(f"Enhancement reply is not a valid CV record: {exc}") from exc
        logger.debug("Model %s enhanced CV of %s", self.model, record.name)
        return enhanced


class MockEnhancementService(EnhancementGateway):
    """Deterministic enhancement used when no API key is configured.

    It tidies whitespace in every text field and otherwise returns the
    CV unchanged, which keeps the workflow usable offline and in tests.
    """

    def enhance(self, record: CVRecord) -> CVRecord:
        data = record.to_payload()
        return CVRecord.model_validate(_strip_strings(data))


def _strip_strings(value):
    if isinstance(value, str):
        return " ".join(value.split())
    if isinstance(value, list):
        return [_strip_strings(item) for item in value]
    if isinstance(value, dict):
        return {key: _strip_strings(item) for key, item in value.items()}
    return value


def get_enhancement_service() -> EnhancementGateway:
    """Select the enhancement backend from the project settings."""
    api_key = getattr(settings, "OPENAI_API_KEY", None)
    if api_key:
        return OpenAIEnhancementService(
            api_key,
            model=settings.OPENAI_MODEL,
            temperature=settings.OPENAI_TEMPERATURE,
        )
    logger.warning("OPENAI_API_KEY is not set, using the mock enhancement service")
    return MockEnhancementService()
