"""Shop configuration."""

from pathlib import Path

from django.conf import settings


def get_config():
    """Get shop configuration from settings."""
    defaults = {
        # Site branding
        "SITE_NAME": "Shopfront",
        "SITE_URL": "http://localhost:8000",

        # Catalog
        "PAGE_SIZE": 2,

        # Invoices
        "INVOICE_ROOT": Path(settings.BASE_DIR) / "data" / "invoices",

        # Payments
        "CURRENCY": "usd",

        # Accounts
        "RESET_TOKEN_TTL": 3600,  # seconds
        "FROM_EMAIL": getattr(settings, "DEFAULT_FROM_EMAIL", "shop@shopfront.local"),
    }

    user_config = getattr(settings, "SHOP", {})
    return {**defaults, **user_config}


def get_setting(name, default=None):
    """Get a specific shop setting."""
    config = get_config()
    return config.get(name, default)


def get_page_size():
    """Number of products per catalog page."""
    return int(get_setting("PAGE_SIZE", 2))


def get_invoice_root():
    """Directory where generated invoices are cached."""
    return Path(get_setting("INVOICE_ROOT"))


def get_site_url():
    """Absolute base URL used in outgoing links."""
    return get_setting("SITE_URL", "http://localhost:8000").rstrip("/")
