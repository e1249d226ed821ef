"""Authentication URL patterns."""

from django.urls import path

from . import views

app_name = "accounts"

urlpatterns = [
    path("signup", views.SignupView.as_view(), name="signup"),
    path("login", views.LoginView.as_view(), name="login"),
    path("logout", views.LogoutView.as_view(), name="logout"),
    path("reset-password", views.ResetPasswordView.as_view(), name="reset-password"),
    path("reset-password/<str:token>", views.NewPasswordFormView.as_view(), name="new-password-form"),
    path("new-password", views.NewPasswordView.as_view(), name="new-password"),
]
