from decimal import Decimal

import pytest
import stripe

from payments.exceptions import PaymentProviderError
from payments.services.checkout import PaymentRequest
from payments.services.stripe_client import configure_stripe, get_or_create_customer, stripe_locale


@pytest.mark.parametrize(
    ("locale", "expected"),
    [
        ("en", "en"),
        ("FR", "fr"),
        ("pt-BR", "pt"),
        ("es_MX", "es"),
        ("xx", "auto"),
        ("", "auto"),
        (None, "auto"),
    ],
)
def test_stripe_locale(locale, expected):
    assert stripe_locale(locale) == expected


def test_unit_amount_rounds_down_to_minor_units():
    payment = PaymentRequest(
        amount=Decimal("19.999"),
        currency="EUR",
        receipt_email="guest@example.com",
        customer_name="Guest",
    )
    assert payment.unit_amount == 1999


def test_configure_stripe_applies_client_settings(fake_stripe, settings):
    settings.STRIPE_TIMEOUT = 12
    settings.STRIPE_MAX_NETWORK_RETRIES = 3

    configure_stripe()

    assert stripe.api_key == "sk_test_123"
    assert stripe.max_network_retries == 3
    assert stripe.default_http_client is not None


def test_configure_stripe_without_key_raises(settings):
    settings.STRIPE_SECRET_KEY = ""
    with pytest.raises(RuntimeError):
        configure_stripe()


def test_get_or_create_customer_wraps_provider_errors(fake_stripe):
    with pytest.raises(PaymentProviderError):
        get_or_create_customer(email="not-an-email", name="Nobody")

    first = get_or_create_customer(email="guest@example.com", name="Guest")
    again = get_or_create_customer(email="guest@example.com", name="Guest")
    assert first.id == again.id
