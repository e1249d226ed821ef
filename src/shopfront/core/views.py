"""Core views for Shopfront."""

import logging

from django.db import connection
from django.http import JsonResponse
from django.shortcuts import render

logger = logging.getLogger(__name__)


def health_check(request):
    """Health check endpoint for container orchestration."""
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")

        return JsonResponse({"status": "healthy", "database": "connected"})
    except Exception as e:
        logger.exception("Health check failed")
        return JsonResponse(
            {"status": "unhealthy", "error": str(e)},
            status=503,
        )


def page_not_found(request, exception=None):
    return render(request, "404.html", {"title": "Page Not Found"}, status=404)


def server_error(request):
    return render(request, "500.html", {"title": "Error!"}, status=500)
