"""
URL configuration for the CVEnhancer project.

This module maps URL paths to application URL configurations.  It delegates
to the ``CVapp`` and ``users`` apps and exposes the Django admin, which is
where stored CV records are managed.
"""

from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path("admin/", admin.site.urls),
    path("", include("users.urls")),
    path("", include("CVapp.urls")),
]
