from __future__ import annotations

import logging
from datetime import timedelta

import stripe
from django.conf import settings
from django.db import DEFAULT_DB_ALIAS, IntegrityError, transaction
from django.utils import timezone

from bookings.models import Booking
from notifications.services import notify
from payments.exceptions import (
    DuplicatePayment,
    PaymentMismatch,
    PaymentNotCompleted,
    PaymentProviderError,
)
from payments.services.stripe_client import to_minor_units

logger = logging.getLogger(__name__)

SUCCEEDED = "succeeded"


def _ensure_intent_succeeded(payment_intent_id: str, price):
    try:
        intent = stripe.PaymentIntent.retrieve(payment_intent_id)
    except stripe.StripeError as exc:
        logger.warning("Failed to retrieve payment intent %s: %s", payment_intent_id, exc)
        raise PaymentProviderError(str(exc)) from exc
    if intent.status != SUCCEEDED:
        raise PaymentNotCompleted(f"Payment intent {payment_intent_id} is {intent.status}.")
    expected = to_minor_units(price)
    if intent.amount != expected:
        raise PaymentMismatch(
            f"Payment intent {payment_intent_id} is for {intent.amount}, booking needs {expected}."
        )


def create_booking(
    *,
    renter,
    property,
    from_date,
    to_date,
    price,
    cancellation: bool = False,
    session_id: str | None = None,
    payment_intent_id: str | None = None,
    customer_id: str = "",
    using: str = DEFAULT_DB_ALIAS,
) -> Booking:
    """
    Record a booking for ``renter`` in the state matching how it is being paid.

    A checkout session id gives a VOID booking that expires unless the session is
    later confirmed; a payment intent id must already have succeeded for exactly
    ``price`` and gives a PAID booking; neither means the renter pays later and the
    booking is PENDING. A session or intent already held by another booking raises
    ``DuplicatePayment``.
    """

    status = Booking.PENDING
    expire_at = None
    if session_id:
        status = Booking.VOID
        expire_at = timezone.now() + timedelta(seconds=settings.BOOKING_EXPIRE_AT)
    elif payment_intent_id:
        _ensure_intent_succeeded(payment_intent_id, price)
        status = Booking.PAID

    try:
        with transaction.atomic(using=using):
            booking = Booking.objects.using(using).create(
                agency=property.agency,
                property=property,
                renter=renter,
                location=property.location,
                from_date=from_date,
                to_date=to_date,
                status=status,
                expire_at=expire_at,
                session_id=session_id or None,
                payment_intent_id=payment_intent_id or None,
                customer_id=customer_id or "",
                cancellation=cancellation,
                price=price,
            )
            if booking.is_paid:
                notify(
                    booking.agency,
                    f"{renter.get_display_name()} paid booking #{booking.pk} for {property.name}.",
                    booking=booking,
                    using=using,
                )
    except IntegrityError as exc:
        logger.warning(
            "Booking for session %s / intent %s already exists: %s", session_id, payment_intent_id, exc
        )
        raise DuplicatePayment("A booking already uses this payment.") from exc

    logger.info("Booking %s created for property %s (%s).", booking.pk, property.pk, status)
    return booking
