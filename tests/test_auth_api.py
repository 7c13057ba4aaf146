import pytest
from fastapi.testclient import TestClient

from event_hub_api.app.core.config import Settings
from event_hub_api.app.main import create_app

from tests.utils import MEETUP, SECRET, auth_headers, token_for

EVENTS = "/api/v1/events"


@pytest.mark.parametrize(
    "method, path",
    [
        ("post", EVENTS),
        ("put", f"{EVENTS}/1"),
        ("patch", f"{EVENTS}/1"),
        ("delete", f"{EVENTS}/1"),
        ("post", f"{EVENTS}/1/attendees/1"),
        ("delete", f"{EVENTS}/1/attendees/1"),
        ("get", "/api/v1/users/me"),
    ],
)
def test_protected_endpoints_require_credentials(client, method, path):
    kwargs = {"json": MEETUP} if method in ("post", "put", "patch") else {}
    response = getattr(client, method)(path, **kwargs)
    assert response.status_code == 401
    assert response.json() == {"error": "Authorization header missing"}
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_missing_credentials_never_reach_the_store(tmp_path):
    # Any store access against this path fails with a 500.
    settings = Settings(database_url=str(tmp_path / "absent" / "db.sqlite"), secret_key=SECRET)
    client = TestClient(create_app(settings))

    assert client.get(EVENTS).status_code == 500
    response = client.post(EVENTS, json=MEETUP)
    assert response.status_code == 401


def test_store_failure_is_opaque_500(tmp_path):
    settings = Settings(database_url=str(tmp_path / "absent" / "db.sqlite"), secret_key=SECRET)
    response = TestClient(create_app(settings)).get(EVENTS)
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


def test_store_failure_detail_in_debug_mode(tmp_path):
    settings = Settings(database_url=str(tmp_path / "absent" / "db.sqlite"), secret_key=SECRET, debug=True)
    response = TestClient(create_app(settings)).get(EVENTS)
    assert response.status_code == 500
    assert "unable to open database file" in response.json()["error"]


@pytest.mark.parametrize(
    "header, message",
    [
        ("Basic dXNlcjpwYXNz", "Bearer token missing"),
        ("Bearer not-a-token", "Token is not a valid JWT"),
    ],
)
def test_malformed_credentials(client, header, message):
    response = client.post(EVENTS, json=MEETUP, headers={"Authorization": header})
    assert response.status_code == 401
    assert response.json() == {"error": message}


def test_token_signed_with_other_secret(client, make_user):
    user = make_user()
    response = client.post(EVENTS, json=MEETUP, headers=auth_headers(user.id, secret="wrong"))
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid token signature"}


def test_token_without_subject(client):
    headers = {"Authorization": f"Bearer {token_for(None)}"}
    response = client.post(EVENTS, json=MEETUP, headers=headers)
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid token claims"}


def test_token_for_deleted_or_unknown_user(client):
    response = client.post(EVENTS, json=MEETUP, headers=auth_headers(4242))
    assert response.status_code == 401
    assert response.json() == {"error": "User not found"}


def test_me_returns_authenticated_user_without_password(client, make_user):
    user = make_user(name="Ann", email="ann@example.com")
    response = client.get("/api/v1/users/me", headers=auth_headers(user.id))
    assert response.status_code == 200
    assert response.json() == {"id": user.id, "email": "ann@example.com", "name": "Ann"}


def test_get_user(client, make_user):
    user = make_user(name="Ann", email="ann@example.com")
    assert client.get(f"/api/v1/users/{user.id}").json() == {"id": user.id, "email": "ann@example.com", "name": "Ann"}
    missing = client.get("/api/v1/users/999")
    assert missing.status_code == 404
    assert missing.json() == {"error": "User not found"}
    assert client.get("/api/v1/users/99999999999999999999").json() == {"error": "Invalid user ID"}


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
