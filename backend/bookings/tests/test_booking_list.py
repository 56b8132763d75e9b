from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from accounts.models import User
from bookings.models import Booking


def _booking(listing, renter, status):
    start = timezone.now() + timedelta(days=3)
    return Booking.objects.create(
        agency=listing.agency,
        property=listing,
        renter=renter,
        location=listing.location,
        from_date=start,
        to_date=start + timedelta(days=2),
        status=status,
        price=Decimal("240.00"),
    )


@pytest.mark.django_db
def test_renter_lists_own_bookings_by_status(api_client, renter, listing):
    paid = _booking(listing, renter, Booking.PAID)
    _booking(listing, renter, Booking.PENDING)
    stranger = User.objects.create_user(username="other@example.com", email="other@example.com")
    _booking(listing, stranger, Booking.PAID)
    api_client.force_authenticate(renter)

    response = api_client.get("/api/bookings/")
    assert response.status_code == 200
    assert len(response.json()) == 2

    response = api_client.get("/api/bookings/", {"status": Booking.PAID})
    data = response.json()
    assert [item["id"] for item in data] == [paid.pk]
    assert data[0]["property_name"] == "Alfama Loft"
    assert data[0]["location_name"] == "Lisbon"


@pytest.mark.django_db
def test_mark_paid_clears_expiry(listing, renter):
    booking = _booking(listing, renter, Booking.VOID)
    booking.expire_at = timezone.now() - timedelta(minutes=1)
    booking.save(update_fields=["expire_at"])
    assert booking.is_expired

    booking.mark_paid()

    booking.refresh_from_db()
    assert booking.status == Booking.PAID
    assert booking.is_paid
    assert booking.expire_at is None
    assert not booking.is_expired
    assert booking.property == listing
