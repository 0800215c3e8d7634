from django.urls import path

from . import views

urlpatterns = [
    path("sign-in", views.LoginView.as_view(), name="login"),
    path("sign-out/", views.logout_view, name="logout"),
]
