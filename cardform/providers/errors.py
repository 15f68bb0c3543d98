"""Error types raised by payment collaborators."""


class PaymentServiceError(Exception):
    """Base exception for tokenization and persistence failures.

    ``message`` is human readable and is shown to the user as-is.
    """

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class TokenizationError(PaymentServiceError):
    """The payment processor refused to tokenize the card."""

    pass


class PaymentMethodSaveError(PaymentServiceError):
    """The account service could not store the payment method."""

    pass
