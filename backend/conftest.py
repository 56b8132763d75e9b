from decimal import Decimal
from types import SimpleNamespace

import pytest
import stripe
from rest_framework.test import APIClient

from accounts.models import User
from properties.models import Location, Property


class FakeStripe:
    """In-memory stand-in for the Stripe endpoints the payment flow calls."""

    def __init__(self):
        self.customers = {}
        self.sessions = {}
        self.intents = {}
        self.session_calls = []
        self.intent_calls = []

    def list_customers(self, email=None, limit=None, **kwargs):
        customer = self.customers.get(email)
        return SimpleNamespace(data=[customer] if customer else [])

    def create_customer(self, email=None, name=None, **kwargs):
        if not email or "@" not in email:
            raise stripe.InvalidRequestError(f"Invalid email address: {email}", "email")
        customer = SimpleNamespace(id=f"cus_test_{len(self.customers) + 1}", email=email, name=name)
        self.customers[email] = customer
        return customer

    def create_session(self, **kwargs):
        self.session_calls.append(kwargs)
        session_id = f"cs_test_{len(self.sessions) + 1}"
        session = SimpleNamespace(
            id=session_id,
            client_secret=f"{session_id}_secret",
            customer=kwargs.get("customer"),
            payment_status="unpaid",
            status="open",
        )
        self.sessions[session_id] = session
        return session

    def retrieve_session(self, session_id, **kwargs):
        try:
            return self.sessions[session_id]
        except KeyError:
            raise stripe.InvalidRequestError(
                f"No such checkout.session: '{session_id}'",
                "id",
                code="resource_missing",
            ) from None

    def create_intent(self, **kwargs):
        self.intent_calls.append(kwargs)
        intent_id = f"pi_test_{len(self.intents) + 1}"
        intent = SimpleNamespace(
            id=intent_id,
            client_secret=f"{intent_id}_secret",
            status="requires_payment_method",
            amount=kwargs.get("amount"),
            currency=kwargs.get("currency"),
        )
        self.intents[intent_id] = intent
        return intent

    def retrieve_intent(self, intent_id, **kwargs):
        try:
            return self.intents[intent_id]
        except KeyError:
            raise stripe.InvalidRequestError(
                f"No such payment_intent: '{intent_id}'",
                "intent",
                code="resource_missing",
            ) from None


@pytest.fixture
def fake_stripe(monkeypatch, settings):
    settings.STRIPE_SECRET_KEY = "sk_test_123"
    monkeypatch.setattr(stripe, "api_key", None)
    monkeypatch.setattr(stripe, "default_http_client", None, raising=False)
    monkeypatch.setattr(stripe, "max_network_retries", 0, raising=False)

    fake = FakeStripe()
    monkeypatch.setattr(stripe.Customer, "list", fake.list_customers)
    monkeypatch.setattr(stripe.Customer, "create", fake.create_customer)
    monkeypatch.setattr(stripe.checkout.Session, "create", fake.create_session)
    monkeypatch.setattr(stripe.checkout.Session, "retrieve", fake.retrieve_session)
    monkeypatch.setattr(stripe.PaymentIntent, "create", fake.create_intent)
    monkeypatch.setattr(stripe.PaymentIntent, "retrieve", fake.retrieve_intent)
    return fake


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def agency(db):
    return User.objects.create_user(
        username="agency@example.com",
        email="agency@example.com",
        password="examplepass",
        type=User.AGENCY,
        display_name="Seaside Rentals",
    )


@pytest.fixture
def renter(db):
    return User.objects.create_user(
        username="renter@example.com",
        email="renter@example.com",
        password="examplepass",
        first_name="Rita",
        last_name="Renter",
    )


@pytest.fixture
def location(db):
    return Location.objects.create(name="Lisbon")


@pytest.fixture
def listing(agency, location):
    return Property.objects.create(
        name="Alfama Loft",
        agency=agency,
        location=location,
        price=Decimal("120.00"),
    )
