"""Ownership checks shared by catalog, orders and invoices."""

from .exceptions import AuthorizationError


def is_owner(owner_id, user) -> bool:
    """True when ``user`` is authenticated and its pk matches ``owner_id``."""
    if user is None or not user.is_authenticated:
        return False
    return str(owner_id) == str(user.pk)


def check_owner(owner_id, user, resource: str = "resource"):
    """Raise AuthorizationError unless ``user`` owns the resource."""
    if not is_owner(owner_id, user):
        raise AuthorizationError(
            f"Not authorized to access this {resource}.",
            owner_id=str(owner_id),
            user_id=str(getattr(user, "pk", None)),
        )
