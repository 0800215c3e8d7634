"""
Views for viewing, enhancing and downloading a user's CV.

The views are thin: every request builds a ``CVPageController`` wired
to the module level gateways, lets it load the signed-in user's CV and,
on submission, enhance it.  Which backend is used is decided once at
import time from the settings, the same way for every request.
"""

from __future__ import annotations

import logging
from typing import Optional

from django.conf import settings
from django.http import HttpResponseBadRequest, JsonResponse
from django.shortcuts import redirect, render
from django.views import View
from django.views.decorators.http import require_POST

from users.services import SessionIdentityResolver, get_user_by_subject
from .controller import CVPageController, DisplayMode, SubmissionResult, select_view
from .exceptions import EnhancementFailed, MalformedSubmission
from .exports import EXPORTERS
from .forms import SelectOutputFormat
from .rendering import render_cv
from .schemas import parse_submission
from .services import CVStoreGateway, DatabaseCVStore, EnhancementGateway, get_enhancement_service

logger = logging.getLogger(__name__)

SUBMISSION_FIELD = "extractedCV"

_identity_resolver = SessionIdentityResolver()
_cv_store: CVStoreGateway = DatabaseCVStore()
_enhancement_service: EnhancementGateway = get_enhancement_service()


def _build_controller() -> CVPageController:
    return CVPageController(
        cv_store=_cv_store,
        enhancer=_enhancement_service,
        user_lookup=get_user_by_subject,
        sign_in_url=settings.SIGN_IN_URL,
    )


class CVPageView(View):
    """Show the stored CV, enhance it on submit and show the result.

    ``GET`` renders the extracted CV as a form (or an empty state, or the
    load error).  ``POST`` enhances the CV carried by the form and renders
    only the enhanced CV.  A failed enhancement keeps the form on screen
    with an inline error so the user can try again.
    """

    template_name = "cv/page.html"
    heading = "Dashboard"

    def dispatch(self, request, *args, **kwargs):  # type: ignore[override]
        self.controller = _build_controller()
        self.page_load = self.controller.load(_identity_resolver.resolve(request))
        if self.page_load.is_redirect:
            return redirect(self.page_load.redirect_to)
        return super().dispatch(request, *args, **kwargs)

    def get(self, request, *args, **kwargs):  # type: ignore[override]
        return render(request, self.template_name, self.get_context_data())

    def post(self, request, *args, **kwargs):  # type: ignore[override]
        self.controller.begin_submission()
        try:
            result = self.controller.submit(request.POST.get(SUBMISSION_FIELD))
        except MalformedSubmission as exc:
            logger.warning("Rejected malformed CV submission: %s", exc)
            return HttpResponseBadRequest("Malformed CV data")
        except EnhancementFailed:
            return render(request, self.template_name, self.get_context_data(), status=502)
        return render(request, self.template_name, self.get_context_data(result))

    def get_context_data(self, result: Optional[SubmissionResult] = None) -> dict:
        enhanced_cv = result.enhanced_cv if result else None
        mode = select_view(self.page_load.cv_record, enhanced_cv)
        cv = None
        export_form = None
        if mode is DisplayMode.ENHANCED:
            cv = render_cv(enhanced_cv)
            export_form = SelectOutputFormat(initial={"enhancedCV": cv.serialized})
        elif mode is DisplayMode.EXTRACTED:
            cv = render_cv(self.page_load.cv_record)
        return {
            "heading": self.heading,
            "user_id": self.page_load.user_id,
            "display_mode": mode.value,
            "cv": cv,
            "export_form": export_form,
            "load_error": self.page_load.error,
            "submission_state": self.controller.state.value,
            "failure_message": self.controller.failure_message,
            "message": result.message if result else None,
            "submission_field": SUBMISSION_FIELD,
        }


@require_POST
def enhance_cv(request):
    """Submission endpoint answering with JSON.

    Responds with ``{"message"}`` when no CV was received and with
    ``{"message", "enhancedCV"}`` on success.  A failed enhancement is
    not turned into a response: ``EnhancementFailed`` propagates and the
    request fails.
    """
    controller = _build_controller()
    page_load = controller.load(_identity_resolver.resolve(request))
    if page_load.is_redirect:
        return redirect(page_load.redirect_to)
    try:
        result = controller.submit(request.POST.get(SUBMISSION_FIELD))
    except MalformedSubmission as exc:
        logger.warning("Rejected malformed CV submission: %s", exc)
        return JsonResponse({"message": "Malformed CV data"}, status=400)
    return JsonResponse(result.as_payload())


@require_POST
def export_cv(request):
    """Download an enhanced CV as PDF, DOCX or plain text."""
    subject = _identity_resolver.resolve(request)
    if not subject or get_user_by_subject(subject) is None:
        return redirect(settings.SIGN_IN_URL)

    form = SelectOutputFormat(request.POST)
    if not form.is_valid():
        return HttpResponseBadRequest("Invalid export request")
    try:
        record = parse_submission(form.cleaned_data["enhancedCV"])
    except MalformedSubmission as exc:
        logger.warning("Rejected malformed CV export: %s", exc)
        return HttpResponseBadRequest("Malformed CV data")
    if record is None:
        return HttpResponseBadRequest("No CV data received")

    format_selected = form.cleaned_data["outputFormat"]
    logger.info("Exporting enhanced CV as %s", format_selected)
    return EXPORTERS[format_selected](render_cv(record))
