"""Core middleware for Shopfront."""

import logging

from django.contrib import messages
from django.shortcuts import redirect, render
from django.utils.http import url_has_allowed_host_and_scheme

from .exceptions import (
    AuthorizationError,
    NotFoundError,
    PaymentError,
    PersistenceError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def safe_referer(request):
    """The referring URL when it points back at this site, else the shop front."""
    referer = request.META.get("HTTP_REFERER")
    if referer and url_has_allowed_host_and_scheme(
        referer,
        allowed_hosts={request.get_host()},
        require_https=request.is_secure(),
    ):
        return referer
    return "/"


class ShopErrorMiddleware:
    """Translate shop errors that escape a view into responses.

    Missing or foreign resources redirect to the shop front with a flash
    message; store and payment failures render the generic error page.
    Anything else falls through to Django's own handling.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        if isinstance(exception, (NotFoundError, AuthorizationError)):
            logger.info(
                "%s on %s %s: %s",
                exception.__class__.__name__,
                request.method,
                request.path,
                exception.message,
            )
            messages.error(request, exception.message)
            return redirect("/")

        if isinstance(exception, ValidationError):
            messages.error(request, exception.message)
            return redirect(safe_referer(request))

        if isinstance(exception, (PersistenceError, PaymentError)):
            logger.error(
                "%s on %s %s: %s",
                exception.__class__.__name__,
                request.method,
                request.path,
                exception.message,
                exc_info=exception,
            )
            return render(
                request,
                "500.html",
                {"title": "Error!", "error_message": exception.message},
                status=exception.status_code,
            )

        return None
