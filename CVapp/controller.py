"""
Page controller for the CV page.

A ``CVPageController`` is created for each rendered page.  It resolves
the signed-in user, loads their stored CV through a ``CVStoreGateway``
and, when the user submits the CV, sends it to an
``EnhancementGateway``.  The controller owns the submission state of
its page; nothing is shared between requests or users.

Submission states::

    IDLE --begin_submission--> SUBMITTING --ok / no data--> IDLE
                                    |
                                    +--failure--> FAILED --begin_submission--> SUBMITTING
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .exceptions import EnhancementFailed, MalformedSubmission, SubmissionInProgress
from .schemas import CVRecord, parse_submission
from .services import CVStoreGateway, EnhancementGateway

logger = logging.getLogger(__name__)

ENHANCED_MESSAGE = "Enhanced CV data received"
NO_DATA_MESSAGE = "No CV data received"
ENHANCEMENT_FAILED_MESSAGE = "Failed to enhance CV"


class SubmissionState(str, enum.Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    FAILED = "failed"


class DisplayMode(str, enum.Enum):
    ENHANCED = "enhanced"
    EXTRACTED = "extracted"
    NONE = "none"


@dataclass(frozen=True)
class PageLoad:
    """Outcome of the load phase.

    Exactly one of three shapes is produced: a redirect (``redirect_to``
    set, nothing else), a loaded page (``user_id`` and possibly
    ``cv_record``) or a failed load (``user_id`` and ``error``).
    """

    user_id: Optional[int] = None
    cv_record: Optional[CVRecord] = None
    error: Optional[str] = None
    redirect_to: Optional[str] = None

    @property
    def is_redirect(self) -> bool:
        return self.redirect_to is not None


@dataclass(frozen=True)
class SubmissionResult:
    message: str
    enhanced_cv: Optional[CVRecord] = None

    def as_payload(self) -> dict:
        payload = {"message": self.message}
        if self.enhanced_cv is not None:
            payload["enhancedCV"] = self.enhanced_cv.to_payload()
        return payload


def select_view(cv_record: Optional[CVRecord], enhanced_cv: Optional[CVRecord]) -> DisplayMode:
    """Pick the primary view of a page render."""
    if enhanced_cv is not None:
        return DisplayMode.ENHANCED
    if cv_record is not None:
        return DisplayMode.EXTRACTED
    return DisplayMode.NONE


class CVPageController:
    """Orchestrates the load and submit phases of one CV page."""

    def __init__(
        self,
        cv_store: CVStoreGateway,
        enhancer: EnhancementGateway,
        user_lookup: Callable[[str], object],
        sign_in_url: str = "/sign-in",
    ) -> None:
        self.cv_store = cv_store
        self.enhancer = enhancer
        self.user_lookup = user_lookup
        self.sign_in_url = sign_in_url
        self.page_load: Optional[PageLoad] = None
        self.state = SubmissionState.IDLE
        self.failure_message: Optional[str] = None

    def load(self, subject: Optional[str]) -> PageLoad:
        """Resolve the user behind ``subject`` and load their CV."""
        if not subject:
            self.page_load = PageLoad(redirect_to=self.sign_in_url)
            return self.page_load
        user = self.user_lookup(subject)
        user_id = getattr(user, "id", None)
        if user_id is None:
            self.page_load = PageLoad(redirect_to=self.sign_in_url)
            return self.page_load

        try:
            record = self.cv_store.load_cv(user_id)
        except Exception as exc:
            logger.exception("Error loading CV of user %s", user_id)
            self.page_load = PageLoad(user_id=user_id, error=str(exc))
            return self.page_load

        logger.info("Loaded CV page for user %s (cv present: %s)", user_id, record is not None)
        self.page_load = PageLoad(user_id=user_id, cv_record=record)
        return self.page_load

    def begin_submission(self) -> None:
        if self.state is SubmissionState.SUBMITTING:
            raise SubmissionInProgress("A CV submission is already in progress")
        self.state = SubmissionState.SUBMITTING
        self.failure_message = None

    def submit(self, raw: Optional[str]) -> SubmissionResult:
        """Enhance the serialised CV in ``raw``.

        Returns the neutral no-data result without calling the
        enhancement backend when nothing was submitted or when this page
        has no loaded CV.  Raises ``MalformedSubmission`` for unparsable
        data and ``EnhancementFailed`` when the backend fails.
        """
        if self.state is not SubmissionState.SUBMITTING:
            self.begin_submission()

        try:
            record = parse_submission(raw)
        except MalformedSubmission as exc:
            self._fail(str(exc))
            raise

        if record is None or self.page_load is None or self.page_load.cv_record is None:
            self.state = SubmissionState.IDLE
            return SubmissionResult(message=NO_DATA_MESSAGE)

        try:
            enhanced = self.enhancer.enhance(record)
        except Exception as exc:
            logger.exception("Error during enhancement of CV")
            self._fail(ENHANCEMENT_FAILED_MESSAGE)
            raise EnhancementFailed(ENHANCEMENT_FAILED_MESSAGE) from exc

        self.state = SubmissionState.IDLE
        return SubmissionResult(message=ENHANCED_MESSAGE, enhanced_cv=enhanced)

    def _fail(self, message: str) -> None:
        self.state = SubmissionState.FAILED
        self.failure_message = message
