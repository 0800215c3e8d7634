from django.db import models
from users.models import User


class Resume(models.Model):
    """A CV extracted for a user.

    ``extracted_cv`` holds the structured record produced by the
    extraction step, in the wire shape described by
    ``CVapp.schemas.CVRecord``.  A user may own several resumes; the
    most recent one is the one shown on the CV page.
    """

    version = models.CharField(max_length=10, default="1.0")
    name = models.CharField(max_length=100)
    extracted_cv = models.JSONField(blank=True, null=True)
    uploaded_by = models.ForeignKey(User, on_delete=models.CASCADE, related_name="resumes")
    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-uploaded_at", "-id"]

    def __str__(self) -> str:
        return self.name
