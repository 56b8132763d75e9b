import pytest
from django.urls import reverse

from accounts.models import User
from notifications import services


@pytest.mark.django_db
def test_counter_endpoint_returns_own_count(api_client, agency):
    services.notify(agency, "New booking")
    api_client.force_authenticate(agency)

    response = api_client.get(reverse("notification-counter", args=[agency.pk]))

    assert response.status_code == 200
    assert response.json()["count"] == 1
    assert response.json()["user"] == agency.pk


@pytest.mark.django_db
def test_counter_endpoint_hides_other_users(api_client, agency, renter):
    api_client.force_authenticate(renter)

    response = api_client.get(reverse("notification-counter", args=[agency.pk]))

    assert response.status_code == 403


@pytest.mark.django_db
def test_admin_reads_any_counter(api_client, agency):
    admin = User.objects.create_user(
        username="admin@example.com",
        email="admin@example.com",
        password="examplepass",
        type=User.ADMIN,
    )
    api_client.force_authenticate(admin)

    response = api_client.get(reverse("notification-counter", args=[agency.pk]))

    assert response.status_code == 200
    assert response.json()["count"] == 0


@pytest.mark.django_db
def test_counter_endpoint_requires_authentication(api_client, agency):
    response = api_client.get(reverse("notification-counter", args=[agency.pk]))
    assert response.status_code == 401


@pytest.mark.django_db
def test_mark_as_read_updates_counter(api_client, agency):
    notification = services.notify(agency, "New booking")
    services.notify(agency, "Another booking")
    api_client.force_authenticate(agency)

    listing = api_client.get(reverse("notification-list"))
    assert listing.status_code == 200
    assert [item["message"] for item in listing.json()] == ["Another booking", "New booking"]

    response = api_client.post(
        reverse("notification-mark-read"), {"ids": [notification.pk]}, format="json"
    )

    assert response.status_code == 200
    assert response.json() == {"updated": 1, "count": 1}

    response = api_client.post(
        reverse("notification-mark-unread"), {"ids": [notification.pk]}, format="json"
    )
    assert response.json() == {"updated": 1, "count": 2}


@pytest.mark.django_db
def test_mark_as_read_requires_ids(api_client, agency):
    api_client.force_authenticate(agency)

    response = api_client.post(reverse("notification-mark-read"), {"ids": []}, format="json")

    assert response.status_code == 400
    assert "ids" in response.json()
