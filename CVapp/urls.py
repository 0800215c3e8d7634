from django.urls import path

from . import views

urlpatterns = [
    path("", views.CVPageView.as_view(), name="home"),
    path("dashboard/", views.CVPageView.as_view(), name="dashboard"),
    path("cv/", views.CVPageView.as_view(), name="cv"),
    path("cv/enhance/", views.enhance_cv, name="enhance_cv"),
    path("cv/export/", views.export_cv, name="export_cv"),
]
