"""Authentication forms."""

from django import forms
from django.contrib.auth import get_user_model
from django.core.validators import RegexValidator

PASSWORD_MESSAGE = "Password must be 5 characters long and alphanumeric."

alphanumeric = RegexValidator(r"^[0-9A-Za-z]+$", PASSWORD_MESSAGE)


def password_field(**kwargs):
    return forms.CharField(
        min_length=5,
        strip=True,
        widget=forms.PasswordInput(render_value=True),
        validators=[alphanumeric],
        error_messages={"min_length": PASSWORD_MESSAGE},
        **kwargs,
    )


class EmailField(forms.EmailField):
    default_error_messages = {"invalid": "Please enter a valid email."}

    def clean(self, value):
        value = super().clean(value)
        return value.strip().lower() if value else value


class SignupForm(forms.Form):
    email = EmailField()
    password = password_field()
    confirm_password = forms.CharField(strip=True, widget=forms.PasswordInput(render_value=True))

    def clean_email(self):
        email = self.cleaned_data["email"]
        if get_user_model().objects.filter(email__iexact=email).exists():
            raise forms.ValidationError("Email already exists.")
        return email

    def clean(self):
        cleaned_data = super().clean()
        password = cleaned_data.get("password")
        confirm = cleaned_data.get("confirm_password")
        if password and confirm is not None and password != confirm:
            self.add_error("confirm_password", "Passwords do not match.")
        return cleaned_data


class LoginForm(forms.Form):
    email = EmailField()
    password = password_field()


class ResetPasswordForm(forms.Form):
    email = EmailField()


class NewPasswordForm(forms.Form):
    password = password_field()
    user_id = forms.UUIDField(widget=forms.HiddenInput)
    password_token = forms.CharField(max_length=64, widget=forms.HiddenInput)
