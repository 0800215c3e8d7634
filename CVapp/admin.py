from django.contrib import admin

from .models import Resume


@admin.register(Resume)
class ResumeAdmin(admin.ModelAdmin):
    list_display = ("name", "version", "uploaded_by", "uploaded_at")
    list_filter = ("uploaded_at",)
    search_fields = ("name", "uploaded_by__username")
