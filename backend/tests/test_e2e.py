import pytest

from bookings.models import Booking


@pytest.mark.django_db
def test_end_to_end_checkout_flow(api_client, fake_stripe, renter, listing, agency):
    # Create a checkout session as the front end does before redirecting
    session_response = api_client.post(
        "/api/create-checkout-session",
        {
            "amount": 360,
            "currency": "eur",
            "receiptEmail": renter.email,
            "customerName": "Rita Renter",
            "locale": "pt-PT",
            "name": listing.name,
            "description": "3 nights in Lisbon",
        },
        format="json",
    )
    assert session_response.status_code == 200
    session_id = session_response.json()["sessionId"]
    customer_id = session_response.json()["customerId"]

    # Renter logs in and records the booking against the session
    login_response = api_client.post(
        "/api/auth/login/",
        {"email": renter.email, "password": "examplepass"},
        format="json",
    )
    assert login_response.status_code == 200
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {login_response.json()['access']}")

    checkout_response = api_client.post(
        "/api/checkout/",
        {
            "property": listing.pk,
            "from": "2030-05-01T14:00:00Z",
            "to": "2030-05-04T11:00:00Z",
            "price": "360.00",
            "sessionId": session_id,
            "customerId": customer_id,
        },
        format="json",
    )
    assert checkout_response.status_code == 200
    booking_id = checkout_response.json()["bookingId"]

    # Payment not finished yet
    pending_check = api_client.post(f"/api/check-checkout-session/{session_id}")
    assert pending_check.status_code == 400
    assert Booking.objects.get(pk=booking_id).status == Booking.VOID

    # Stripe reports the session paid
    fake_stripe.sessions[session_id].payment_status = "paid"
    paid_check = api_client.post(f"/api/check-checkout-session/{session_id}")
    assert paid_check.status_code == 200

    bookings_response = api_client.get("/api/bookings/", {"status": Booking.PAID})
    assert [item["id"] for item in bookings_response.json()] == [booking_id]

    # Agency sees the unread notification
    api_client.credentials()
    api_client.force_authenticate(agency)
    counter_response = api_client.get(f"/api/notification-counter/{agency.pk}/")
    assert counter_response.json()["count"] == 1
