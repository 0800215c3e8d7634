from django.db import models


class User(models.Model):
    """Application user of the CVEnhancer platform.

    Authentication is handled manually via session state, not via
    Django's built-in auth system.  The session stores the primary key
    of this model; a session pointing at a row that no longer exists is
    treated as signed out.
    """

    username = models.CharField(max_length=100, unique=True)
    first_name = models.CharField(max_length=100, blank=True)
    last_name = models.CharField(max_length=100, blank=True)
    email = models.EmailField(unique=True)
    password = models.CharField(max_length=128)
    is_authenticated = models.BooleanField(default=False)

    def __str__(self) -> str:
        return self.username
