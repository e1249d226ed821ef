"""Context processors for the store."""

import logging

from shopfront.core.exceptions import PersistenceError

from .services.cart import cart_item_count

logger = logging.getLogger(__name__)


def cart_context(request):
    """Add the cart badge count to templates."""
    user = getattr(request, "user", None)
    if user is None or not user.is_authenticated:
        return {"cart_count": 0}
    try:
        return {"cart_count": cart_item_count(user)}
    except PersistenceError:
        logger.warning("Cart badge unavailable for %s", user.pk, exc_info=True)
        return {"cart_count": None}
