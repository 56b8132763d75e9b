from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from decimal import Decimal

import stripe
from django.conf import settings
from django.db import DEFAULT_DB_ALIAS, DatabaseError, transaction
from django.utils import timezone

from bookings.models import Booking
from bookings.services.emails import send_booking_paid_email
from notifications.services import notify
from payments.exceptions import BookingStoreError, PaymentProviderError

from .stripe_client import get_or_create_customer, stripe_locale, to_minor_units

logger = logging.getLogger(__name__)

STRIPE_PAID = "paid"


@dataclass(frozen=True)
class PaymentRequest:
    amount: Decimal
    currency: str
    receipt_email: str
    customer_name: str
    locale: str = ""
    name: str = ""
    description: str = ""

    @property
    def unit_amount(self) -> int:
        return to_minor_units(self.amount)


@dataclass(frozen=True)
class CheckoutSessionResult:
    session_id: str
    customer_id: str
    client_secret: str | None = None


@dataclass(frozen=True)
class PaymentIntentResult:
    payment_intent_id: str
    customer_id: str
    client_secret: str | None = None


class CheckoutState(enum.Enum):
    NOT_FOUND = "not_found"
    UNPAID = "unpaid"
    PAID = "paid"


@dataclass(frozen=True)
class CheckoutCheck:
    state: CheckoutState
    booking: Booking | None = None


def build_return_url() -> str:
    return f"{settings.FRONTEND_URL.rstrip('/')}/checkout-session/{{CHECKOUT_SESSION_ID}}"


def create_checkout_session(payment: PaymentRequest) -> CheckoutSessionResult:
    """
    Create an embedded Stripe Checkout session for the renter described by ``payment``.

    The Stripe customer is looked up by receipt email and created when missing, so
    repeated checkouts from the same email share one customer.
    """

    customer = get_or_create_customer(email=payment.receipt_email, name=payment.customer_name)

    product_data = {"name": payment.name}
    payment_intent_data = {}
    if payment.description:
        product_data["description"] = payment.description
        payment_intent_data["description"] = payment.description

    expires_at = int(timezone.now().timestamp()) + settings.STRIPE_SESSION_EXPIRE_AT
    try:
        session = stripe.checkout.Session.create(
            ui_mode="embedded",
            mode="payment",
            line_items=[
                {
                    "quantity": 1,
                    "price_data": {
                        "currency": payment.currency.lower(),
                        "unit_amount": payment.unit_amount,
                        "product_data": product_data,
                    },
                }
            ],
            return_url=build_return_url(),
            customer=customer.id,
            locale=stripe_locale(payment.locale),
            payment_intent_data=payment_intent_data,
            expires_at=expires_at,
        )
    except stripe.StripeError as exc:
        logger.warning("Failed to create Stripe checkout session for %s: %s", payment.receipt_email, exc)
        raise PaymentProviderError(str(exc)) from exc

    return CheckoutSessionResult(
        session_id=session.id,
        customer_id=customer.id,
        client_secret=getattr(session, "client_secret", None),
    )


def create_payment_intent(payment: PaymentRequest) -> PaymentIntentResult:
    customer = get_or_create_customer(email=payment.receipt_email, name=payment.customer_name)

    params = {
        "amount": payment.unit_amount,
        "currency": payment.currency.lower(),
        "payment_method_types": ["card"],
        "receipt_email": payment.receipt_email,
        "customer": customer.id,
    }
    if payment.description:
        params["description"] = payment.description

    try:
        intent = stripe.PaymentIntent.create(**params)
    except stripe.StripeError as exc:
        logger.warning("Failed to create Stripe payment intent for %s: %s", payment.receipt_email, exc)
        raise PaymentProviderError(str(exc)) from exc

    return PaymentIntentResult(
        payment_intent_id=intent.id,
        customer_id=customer.id,
        client_secret=getattr(intent, "client_secret", None),
    )


def retrieve_checkout_session(session_id: str):
    """Return the Stripe session, or None when Stripe does not know the id."""
    try:
        return stripe.checkout.Session.retrieve(session_id)
    except stripe.InvalidRequestError as exc:
        if exc.code == "resource_missing":
            logger.info("Checkout session %s does not exist.", session_id)
            return None
        logger.warning("Stripe rejected checkout session lookup %s: %s", session_id, exc)
        raise PaymentProviderError(str(exc)) from exc
    except stripe.StripeError as exc:
        logger.warning("Failed to retrieve checkout session %s: %s", session_id, exc)
        raise PaymentProviderError(str(exc)) from exc


def _confirm_booking(booking: Booking, *, using: str):
    booking.mark_paid(using=using)
    renter_name = booking.renter.get_display_name()
    notify(
        booking.agency,
        f"{renter_name} paid booking #{booking.pk} for {booking.property.name}.",
        booking=booking,
        using=using,
    )
    transaction.on_commit(lambda: send_booking_paid_email(booking), using=using, robust=True)


def check_checkout_session(session_id: str, *, using: str = DEFAULT_DB_ALIAS) -> CheckoutCheck:
    """
    Reconcile the booking tied to ``session_id`` with the Stripe session state.

    Unknown sessions and sessions without a booking yield NOT_FOUND. A paid session
    marks its booking PAID and clears the expiry; an unpaid one yields UNPAID and
    leaves the booking untouched so it expires on schedule. Database failures are
    raised as BookingStoreError.
    """

    session = retrieve_checkout_session(session_id)
    if session is None:
        return CheckoutCheck(CheckoutState.NOT_FOUND)

    try:
        with transaction.atomic(using=using):
            booking = (
                Booking.objects.using(using)
                .select_for_update()
                .filter(session_id=session_id)
                .first()
            )
            if booking is None:
                logger.info("No booking references checkout session %s.", session_id)
                return CheckoutCheck(CheckoutState.NOT_FOUND)

            if booking.is_paid:
                return CheckoutCheck(CheckoutState.PAID, booking)

            if session.payment_status != STRIPE_PAID:
                logger.info(
                    "Checkout session %s for booking %s is %s.",
                    session_id,
                    booking.pk,
                    session.payment_status,
                )
                return CheckoutCheck(CheckoutState.UNPAID, booking)

            _confirm_booking(booking, using=using)
    except DatabaseError as exc:
        logger.exception("Booking lookup failed for checkout session %s", session_id)
        raise BookingStoreError(str(exc)) from exc

    logger.info("Booking %s paid through checkout session %s.", booking.pk, session_id)
    return CheckoutCheck(CheckoutState.PAID, booking)
