class PaymentError(Exception):
    """Base class for failures the payment endpoints report as 400."""


class PaymentProviderError(PaymentError):
    """Stripe rejected or failed a request."""


class BookingStoreError(PaymentError):
    """The booking store could not be read or written."""


class PaymentNotCompleted(PaymentError):
    """Stripe reports the payment as not (yet) succeeded."""


class PaymentMismatch(PaymentError):
    """A succeeded payment does not cover the amount being booked."""


class DuplicatePayment(PaymentError):
    """Another booking already holds this checkout session or payment intent."""
