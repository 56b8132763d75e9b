import pytest
from django.contrib.auth import get_user_model

User = get_user_model()


@pytest.fixture
def user(db):
    return User.objects.create_user(
        username="renter@example.com",
        email="renter@example.com",
        password="examplepass",
        first_name="Rita",
        last_name="Renter",
    )


def test_login_returns_tokens_and_user_payload(api_client, user):
    response = api_client.post(
        "/api/auth/login/",
        {"email": "Renter@Example.com", "password": "examplepass"},
        format="json",
    )

    assert response.status_code == 200
    data = response.json()
    assert set(data.keys()) == {"access", "refresh", "user"}
    assert data["user"]["email"] == "renter@example.com"
    assert data["user"]["type"] == User.RENTER


def test_login_rejects_wrong_password(api_client, user):
    response = api_client.post(
        "/api/auth/login/",
        {"email": "renter@example.com", "password": "nope"},
        format="json",
    )
    assert response.status_code == 401


def test_refresh_issues_new_access_token(api_client, user):
    login_response = api_client.post(
        "/api/auth/login/",
        {"email": "renter@example.com", "password": "examplepass"},
        format="json",
    )

    refresh_token = login_response.json()["refresh"]
    refresh_response = api_client.post(
        "/api/auth/refresh/", {"refresh": refresh_token}, format="json"
    )

    assert refresh_response.status_code == 200
    assert "access" in refresh_response.json()


def test_me_endpoint_returns_authenticated_user(api_client, user):
    login_response = api_client.post(
        "/api/auth/login/",
        {"email": "renter@example.com", "password": "examplepass"},
        format="json",
    )
    access = login_response.json()["access"]

    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
    response = api_client.get("/api/auth/me/")

    assert response.status_code == 200
    assert response.json()["email"] == "renter@example.com"


def test_me_endpoint_requires_authentication(db, api_client):
    response = api_client.get("/api/auth/me/")
    assert response.status_code == 401


def test_display_name_falls_back_to_full_name(user):
    assert user.get_display_name() == "Rita Renter"
    user.display_name = "Rita R."
    assert user.get_display_name() == "Rita R."
