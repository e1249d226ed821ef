"""Transactional email for accounts."""

import logging
from smtplib import SMTPException

from django.core.mail import send_mail
from django.template.loader import render_to_string

from shopfront.core.conf import get_setting, get_site_url

logger = logging.getLogger(__name__)


def _send(to: str, subject: str, template: str, context: dict) -> bool:
    """Send an HTML email. Returns True if handed to the mail backend."""
    html = render_to_string(template, context)
    try:
        send_mail(
            subject=subject,
            message="",
            html_message=html,
            from_email=get_setting("FROM_EMAIL"),
            recipient_list=[to],
            fail_silently=False,
        )
    except (SMTPException, OSError):
        logger.exception("Failed to send %r email to %s", subject, to)
        return False
    logger.info("Sent %r email to %s", subject, to)
    return True


def send_signup_email(user) -> bool:
    return _send(
        user.email,
        "Signup Succeeded",
        "emails/signup.html",
        {"user": user, "site_name": get_setting("SITE_NAME")},
    )


def send_password_reset_email(user, token: str) -> bool:
    """Email a link to the new-password page for ``token``."""
    return _send(
        user.email,
        "Password Reset",
        "emails/password_reset.html",
        {
            "user": user,
            "reset_url": f"{get_site_url()}/reset-password/{token}",
            "site_name": get_setting("SITE_NAME"),
        },
    )
