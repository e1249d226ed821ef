"""Error taxonomy shared by the shop services.

Services raise these; views and ``ShopErrorMiddleware`` decide how each
surfaces to the user.
"""


class ShopError(Exception):
    """Base class for storefront errors."""

    status_code = 500

    def __init__(self, message: str = "", **details):
        self.message = message or self.__class__.__doc__
        self.details = details
        super().__init__(self.message)


class ValidationError(ShopError):
    """The request input was not acceptable."""

    status_code = 422


class NotFoundError(ShopError):
    """The requested resource does not exist."""

    status_code = 404


class AuthorizationError(ShopError):
    """The current user does not own the requested resource."""

    status_code = 403


class PersistenceError(ShopError):
    """The data store failed to read or write."""

    status_code = 503


class PaymentError(ShopError):
    """The payment processor rejected or failed the request."""

    status_code = 500
