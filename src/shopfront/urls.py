"""URL configuration for Shopfront project."""

from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path

from shopfront.core.views import health_check

handler404 = "shopfront.core.views.page_not_found"
handler500 = "shopfront.core.views.server_error"

urlpatterns = [
    # Health check
    path("health/", health_check, name="health_check"),

    # Django admin
    path("site-admin/", admin.site.urls),

    # Product admin (owner-scoped)
    path("admin/", include("shopfront.catalog.admin_urls", namespace="catalog-admin")),

    # Authentication
    path("", include("shopfront.accounts.urls", namespace="accounts")),

    # Cart, checkout and orders
    path("", include("shopfront.store.urls", namespace="store")),

    # Catalog
    path("", include("shopfront.catalog.urls", namespace="catalog")),
]

# Serve media files in development
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
