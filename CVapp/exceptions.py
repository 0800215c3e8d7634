"""Errors raised by the CV enhancement workflow."""


class CVWorkflowError(Exception):
    """Base class for CV workflow failures."""


class MalformedSubmission(CVWorkflowError):
    """Submitted data could not be parsed into a CV record."""


class EnhancementFailed(CVWorkflowError):
    """The enhancement backend rejected or failed to process a CV."""


class SubmissionInProgress(CVWorkflowError):
    """A submission is already in flight for this page instance."""
