from __future__ import annotations

import logging
from decimal import ROUND_FLOOR, Decimal
from functools import lru_cache

import stripe
from django.conf import settings

from payments.exceptions import PaymentProviderError

logger = logging.getLogger(__name__)

# Locales accepted by Stripe Checkout; anything else falls back to "auto".
STRIPE_LOCALES = frozenset(
    {
        "bg", "cs", "da", "de", "el", "en", "es", "et", "fi", "fil", "fr", "hr",
        "hu", "id", "it", "ja", "ko", "lt", "lv", "ms", "mt", "nb", "nl", "pl",
        "pt", "ro", "ru", "sk", "sl", "sv", "th", "tr", "vi", "zh",
    }
)


def to_minor_units(amount) -> int:
    """Amount in the currency's minor unit, rounded down."""
    return int((Decimal(amount) * 100).to_integral_value(rounding=ROUND_FLOOR))


@lru_cache(maxsize=None)
def _http_client(timeout: int):
    return stripe.RequestsClient(timeout=timeout)


def configure_stripe():
    if not settings.STRIPE_SECRET_KEY:
        raise RuntimeError("STRIPE_SECRET_KEY is not configured.")
    stripe.api_key = settings.STRIPE_SECRET_KEY
    stripe.max_network_retries = settings.STRIPE_MAX_NETWORK_RETRIES
    stripe.default_http_client = _http_client(settings.STRIPE_TIMEOUT)


def stripe_locale(locale: str | None) -> str:
    if not locale:
        return "auto"
    locale = locale.strip().lower()
    if locale in STRIPE_LOCALES:
        return locale
    language = locale.split("-", 1)[0].split("_", 1)[0]
    return language if language in STRIPE_LOCALES else "auto"


def get_or_create_customer(*, email: str, name: str) -> stripe.Customer:
    """
    Return the first Stripe customer registered under ``email``, creating one if none exists.

    Raises PaymentProviderError when Stripe rejects the lookup or creation.
    """

    try:
        customers = stripe.Customer.list(email=email, limit=1)
        if customers.data:
            return customers.data[0]
        customer = stripe.Customer.create(email=email, name=name)
    except stripe.StripeError as exc:
        logger.warning("Stripe customer lookup failed for %s: %s", email, exc)
        raise PaymentProviderError(str(exc)) from exc
    logger.info("Created Stripe customer %s for %s", customer.id, email)
    return customer
