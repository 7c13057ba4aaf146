from event_hub_api.app.core.security import create_access_token

SECRET = "test-secret"

MEETUP = {
    "name": "Meetup",
    "description": "Team sync session",
    "location": "HQ",
    "dateTime": "2025-01-01T10:00:00Z",
}


def token_for(user_id, secret=SECRET, **claims):
    return create_access_token({"sub": user_id, **claims}, secret, expires_in=3600)


def auth_headers(user_id, secret=SECRET):
    return {"Authorization": f"Bearer {token_for(user_id, secret)}"}


def create_event(client, owner_id, payload=None):
    response = client.post("/api/v1/events", json=payload or MEETUP, headers=auth_headers(owner_id))
    assert response.status_code == 201, response.text
    return response.json()
