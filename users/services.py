"""
Identity resolution for session based authentication.

Two small collaborators are exposed to the rest of the project:

* ``SessionIdentityResolver`` turns an inbound request into an opaque
  subject identifier (or ``None`` when nobody is signed in).
* ``get_user_by_subject`` maps that subject to the local ``User`` row,
  returning ``None`` when the row does not exist.

Keeping both behind plain callables lets the CV page controller be
tested without a request or a database.
"""

from __future__ import annotations

import logging
from typing import Optional

from .models import User

logger = logging.getLogger(__name__)

SESSION_KEY = "user_id"


class SessionIdentityResolver:
    """Resolve the authenticated subject stored in the Django session."""

    session_key = SESSION_KEY

    def resolve(self, request) -> Optional[str]:
        value = request.session.get(self.session_key)
        if value in (None, ""):
            return None
        return str(value)


def get_user_by_subject(subject: str) -> Optional[User]:
    """Return the application user for ``subject`` or ``None``."""
    try:
        return User.objects.get(id=int(subject))
    except (User.DoesNotExist, ValueError, TypeError):
        logger.info("No application user for subject %r", subject)
        return None


def sign_in(request, user: User) -> None:
    """Store ``user`` in the session and mark them authenticated."""
    request.session.cycle_key()
    request.session[SESSION_KEY] = user.id
    user.is_authenticated = True
    user.save(update_fields=["is_authenticated"])
