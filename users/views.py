"""
Views for signing users in and out.

The CV pages redirect unauthenticated visitors here.  ``LoginView``
overrides ``form_valid`` to handle session management and error
messages without cluttering the template logic.
"""

from __future__ import annotations

import logging

from django.contrib import messages
from django.contrib.auth.hashers import check_password
from django.shortcuts import redirect
from django.urls import reverse_lazy
from django.views.generic import FormView

from .forms import LoginForm
from .models import User
from .services import SESSION_KEY, sign_in

logger = logging.getLogger(__name__)


class LoginView(FormView):
    """Handle user login via a form.

    If the submitted credentials are valid, the user's ID is stored in
    the session and they are sent to the dashboard.  Otherwise an error
    message is displayed and the form is re-rendered.
    """

    template_name = "users/login.html"
    form_class = LoginForm
    success_url = reverse_lazy("dashboard")

    def form_valid(self, form: LoginForm):
        username = form.cleaned_data["username"]
        password = form.cleaned_data["password"]
        try:
            user = User.objects.get(username=username)
        except User.DoesNotExist:
            messages.error(self.request, "User not found.")
            return self.form_invalid(form)
        if not check_password(password, user.password):
            messages.error(self.request, "Incorrect password.")
            return self.form_invalid(form)
        sign_in(self.request, user)
        logger.info("User %s signed in", user.id)
        return super().form_valid(form)


def logout_view(request):
    """Function-based view for logging out the current user."""

    if SESSION_KEY in request.session:
        try:
            user = User.objects.get(id=request.session[SESSION_KEY])
            user.is_authenticated = False
            user.save(update_fields=["is_authenticated"])
        except User.DoesNotExist:
            pass
        request.session.flush()
    else:
        messages.warning(request, "No user is signed in.")
    return redirect("login")
