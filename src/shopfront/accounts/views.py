"""Authentication views."""

from django.contrib import messages
from django.contrib.auth import authenticate, login, logout
from django.shortcuts import redirect, render
from django.views import View

from shopfront.core.exceptions import NotFoundError

from . import services
from .forms import LoginForm, NewPasswordForm, ResetPasswordForm, SignupForm


class FormPageView(View):
    """GET renders an empty form; invalid POSTs re-render it with status 422."""

    template_name = None
    form_class = None
    title = ""
    path = ""

    def render_form(self, form, status=200, **extra):
        context = {
            "title": self.title,
            "path": self.path,
            "form": form,
            "error_message": first_error(form),
        }
        context.update(extra)
        return render(self.request, self.template_name, context, status=status)

    def get(self, request, *args, **kwargs):
        return self.render_form(self.form_class())


def first_error(form):
    """The first validation message of a bound form, or None."""
    if not form.is_bound or not form.errors:
        return None
    for errors in form.errors.values():
        if errors:
            return errors[0]
    return None


class SignupView(FormPageView):
    """GET/POST /signup"""

    template_name = "auth/signup.html"
    form_class = SignupForm
    title = "Signup"
    path = "/signup"

    def post(self, request):
        form = SignupForm(request.POST)
        if not form.is_valid():
            return self.render_form(form, status=422)

        services.register_user(form.cleaned_data["email"], form.cleaned_data["password"])
        messages.success(request, "Account created. Please log in.")
        return redirect("/login")


class LoginView(FormPageView):
    """GET/POST /login"""

    template_name = "auth/login.html"
    form_class = LoginForm
    title = "Login"
    path = "/login"

    def post(self, request):
        form = LoginForm(request.POST)
        if not form.is_valid():
            return self.render_form(form, status=422)

        user = authenticate(
            request,
            username=form.cleaned_data["email"],
            password=form.cleaned_data["password"],
        )
        if user is None:
            form.add_error(None, "Invalid email or password.")
            return self.render_form(form, status=422)

        login(request, user)
        return redirect("/")


class LogoutView(View):
    """POST /logout"""

    http_method_names = ["post"]

    def post(self, request):
        logout(request)
        return redirect("/")


class ResetPasswordView(FormPageView):
    """GET/POST /reset-password"""

    template_name = "auth/reset_password.html"
    form_class = ResetPasswordForm
    title = "Reset Password"
    path = "/reset-password"

    def post(self, request):
        form = ResetPasswordForm(request.POST)
        if not form.is_valid():
            return self.render_form(form, status=422)

        try:
            services.request_password_reset(form.cleaned_data["email"])
        except NotFoundError as e:
            messages.error(request, e.message)
            return redirect("/reset-password")

        messages.success(request, "Check your email for a password reset link.")
        return redirect("/")


class NewPasswordFormView(FormPageView):
    """GET /reset-password/<token>"""

    template_name = "auth/new_password.html"
    form_class = NewPasswordForm
    title = "New Password"
    path = "/new-password"

    def get(self, request, token):
        try:
            user = services.get_user_for_reset_token(token)
        except NotFoundError as e:
            messages.error(request, e.message)
            return redirect("/reset-password")

        form = NewPasswordForm(initial={"user_id": user.pk, "password_token": token})
        return self.render_form(form)


class NewPasswordView(FormPageView):
    """POST /new-password"""

    template_name = "auth/new_password.html"
    form_class = NewPasswordForm
    title = "New Password"
    path = "/new-password"
    http_method_names = ["post"]

    def post(self, request):
        form = NewPasswordForm(request.POST)
        if not form.is_valid():
            return self.render_form(form, status=422)

        try:
            services.reset_password(
                token=form.cleaned_data["password_token"],
                user_id=form.cleaned_data["user_id"],
                new_password=form.cleaned_data["password"],
            )
        except NotFoundError as e:
            messages.error(request, e.message)
            return redirect("/reset-password")

        messages.success(request, "Password updated. Please log in.")
        return redirect("/login")
