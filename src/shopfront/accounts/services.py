"""Account service layer: registration and password reset."""

import logging
import secrets
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.db import DatabaseError, transaction
from django.utils import timezone

from shopfront.core.conf import get_setting
from shopfront.core.exceptions import NotFoundError, PersistenceError

from .mail import send_password_reset_email, send_signup_email

logger = logging.getLogger(__name__)

User = get_user_model()

RESET_TOKEN_BYTES = 32


def register_user(email: str, password: str):
    """Create an account and send the welcome email."""
    try:
        user = User.objects.create_user(email=email, password=password)
    except DatabaseError as e:
        raise PersistenceError("Could not create your account.") from e

    logger.info("User %s signed up", user.pk)
    send_signup_email(user)
    return user


def issue_reset_token(user, now=None) -> str:
    """Give ``user`` a fresh reset token valid for ``RESET_TOKEN_TTL`` seconds."""
    now = now or timezone.now()
    token = secrets.token_hex(RESET_TOKEN_BYTES)
    user.reset_token = token
    user.reset_token_expires_at = now + timedelta(seconds=int(get_setting("RESET_TOKEN_TTL", 3600)))
    try:
        user.save(update_fields=["reset_token", "reset_token_expires_at"])
    except DatabaseError as e:
        raise PersistenceError("Could not start password reset.") from e
    return token


def request_password_reset(email: str):
    """Issue a reset token for ``email`` and mail the reset link.

    Raises:
        NotFoundError: No account uses that email
    """
    user = User.objects.filter(email__iexact=email).first()
    if user is None:
        raise NotFoundError("No account with that email found.")

    token = issue_reset_token(user)
    logger.info("Password reset requested for %s", user.pk)
    send_password_reset_email(user, token)
    return user


def get_user_for_reset_token(token: str):
    """The user holding the unexpired reset ``token``.

    Raises:
        NotFoundError: Token unknown or expired
    """
    user = User.objects.with_active_reset_token(token).first()
    if user is None:
        raise NotFoundError("Password reset link is invalid or has expired.")
    return user


def reset_password(token: str, user_id, new_password: str):
    """Set a new password for the user holding ``token`` and retire the token.

    Raises:
        NotFoundError: Token unknown, expired, or issued to another user
    """
    try:
        with transaction.atomic():
            user = (
                User.objects.with_active_reset_token(token)
                .select_for_update()
                .filter(pk=user_id)
                .first()
            )
            if user is None:
                raise NotFoundError("Password reset link is invalid or has expired.")

            user.set_password(new_password)
            user.clear_reset_token()
            user.save(update_fields=["password", "reset_token", "reset_token_expires_at"])
    except DatabaseError as e:
        raise PersistenceError("Could not update your password.") from e

    logger.info("Password reset completed for %s", user.pk)
    return user
