"""Core mixins for view access control."""

from django.contrib.auth.mixins import LoginRequiredMixin
from django.shortcuts import redirect

from .exceptions import AuthorizationError, NotFoundError
from .permissions import is_owner


class ShopLoginRequiredMixin(LoginRequiredMixin):
    """Send anonymous visitors to the login page."""

    login_url = "/login"
    redirect_field_name = None


class OwnerRequiredMixin(ShopLoginRequiredMixin):
    """Views that act on an object owned by the current user.

    Subclasses implement ``get_owned_object``. A missing object or an
    ownership mismatch redirects to ``denied_url`` instead of raising a
    distinguishable error.
    """

    denied_url = "/"
    owner_field = "owner_id"

    def get_owned_object(self):
        raise NotImplementedError

    def dispatch(self, request, *args, **kwargs):
        if not request.user.is_authenticated:
            return self.handle_no_permission()
        try:
            self.object = self.get_owned_object()
        except (NotFoundError, AuthorizationError):
            return redirect(self.denied_url)
        if not is_owner(getattr(self.object, self.owner_field), request.user):
            return redirect(self.denied_url)
        return super().dispatch(request, *args, **kwargs)
