"""Custom exceptions for the DirectPromo backend."""


class DirectPromoError(Exception):
    """Base exception for all DirectPromo errors."""

    pass


class CartNotFoundError(DirectPromoError):
    """Raised when a cart id is unknown to the store."""

    def __init__(self, cart_id: str):
        self.cart_id = cart_id
        super().__init__(f"Cart not found: {cart_id}")


class MailDeliveryError(DirectPromoError):
    """Raised when the mail transport fails to deliver a notification."""

    def __init__(self, recipient: str, reason: str | None = None):
        self.recipient = recipient
        msg = f"Failed to send mail to {recipient}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
