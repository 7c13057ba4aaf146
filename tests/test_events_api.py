from tests.utils import MEETUP, auth_headers, create_event

EVENTS = "/api/v1/events"


def test_create_get_forbid_delete_scenario(client, make_user):
    alice, bob = make_user(), make_user()

    created = create_event(client, alice.id)
    assert created == {
        "id": created["id"],
        "ownerId": alice.id,
        "name": "Meetup",
        "description": "Team sync session",
        "dateTime": "2025-01-01T10:00:00Z",
        "location": "HQ",
    }

    fetched = client.get(f"{EVENTS}/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json() == created

    forbidden = client.put(f"{EVENTS}/{created['id']}", json={"name": "Hijacked"}, headers=auth_headers(bob.id))
    assert forbidden.status_code == 403
    assert forbidden.json() == {"error": "You can only update your own events"}

    deleted = client.delete(f"{EVENTS}/{created['id']}", headers=auth_headers(alice.id))
    assert deleted.status_code == 204
    assert deleted.content == b""

    gone = client.get(f"{EVENTS}/{created['id']}")
    assert gone.status_code == 404
    assert gone.json() == {"error": "Event not found"}


def test_create_accepts_pascal_case_and_date_aliases(client, make_user):
    owner = make_user()
    created = create_event(
        client,
        owner.id,
        {"Name": "Launch", "Description": "Product launch", "Location": "Main hall", "Date": "2025-03-03"},
    )
    assert created["name"] == "Launch"
    assert created["dateTime"] == "2025-03-03"


def test_first_non_empty_alias_wins(client, make_user):
    owner = make_user()
    created = create_event(client, owner.id, {**MEETUP, "name": "", "Name": "Fallback"})
    assert created["name"] == "Fallback"


def test_owner_comes_from_token_not_body(client, make_user):
    owner, other = make_user(), make_user()
    created = create_event(client, owner.id, {**MEETUP, "ownerId": other.id, "UserId": other.id})
    assert created["ownerId"] == owner.id


def test_create_rejects_missing_fields(client, make_user):
    owner = make_user()
    response = client.post(EVENTS, json={"name": "Meetup", "location": "HQ"}, headers=auth_headers(owner.id))
    assert response.status_code == 400
    assert response.json() == {"error": "All fields (name, description, location, dateTime) are required"}

    blank = client.post(EVENTS, json={**MEETUP, "description": "   "}, headers=auth_headers(owner.id))
    assert blank.status_code == 400


def test_create_rejects_non_object_body(client, make_user):
    owner = make_user()
    response = client.post(EVENTS, json=["not", "an", "object"], headers=auth_headers(owner.id))
    assert response.status_code == 400
    assert "error" in response.json()


def test_list_events_empty_is_array(client):
    response = client.get(EVENTS)
    assert response.status_code == 200
    assert response.json() == []


def test_list_events_returns_created(client, make_user):
    owner = make_user()
    first = create_event(client, owner.id)
    second = create_event(client, owner.id, {**MEETUP, "dateTime": "2026-01-01T10:00:00Z"})
    assert [e["id"] for e in client.get(EVENTS).json()] == [second["id"], first["id"]]


def test_partial_update_keeps_other_fields(client, make_user):
    owner = make_user()
    created = create_event(client, owner.id)

    response = client.patch(f"{EVENTS}/{created['id']}", json={"location": "Room 2"}, headers=auth_headers(owner.id))
    assert response.status_code == 200
    assert response.json() == {**created, "location": "Room 2"}

    fetched = client.get(f"{EVENTS}/{created['id']}").json()
    assert fetched["name"] == "Meetup"
    assert fetched["description"] == "Team sync session"
    assert fetched["dateTime"] == "2025-01-01T10:00:00Z"
    assert fetched["location"] == "Room 2"


def test_put_is_also_partial_and_accepts_aliases(client, make_user):
    owner = make_user()
    created = create_event(client, owner.id)
    response = client.put(
        f"{EVENTS}/{created['id']}",
        json={"DateTime": "2025-02-02T09:00:00Z", "name": ""},
        headers=auth_headers(owner.id),
    )
    assert response.status_code == 200
    assert response.json() == {**created, "dateTime": "2025-02-02T09:00:00Z"}


def test_update_cannot_change_owner(client, make_user):
    owner, other = make_user(), make_user()
    created = create_event(client, owner.id)
    response = client.put(f"{EVENTS}/{created['id']}", json={"ownerId": other.id}, headers=auth_headers(owner.id))
    assert response.status_code == 200
    assert response.json()["ownerId"] == owner.id


def test_update_and_delete_missing_event_is_not_found(client, make_user):
    user = make_user()
    assert client.put(f"{EVENTS}/999", json={"name": "x"}, headers=auth_headers(user.id)).status_code == 404
    assert client.delete(f"{EVENTS}/999", headers=auth_headers(user.id)).status_code == 404


def test_delete_by_non_owner_is_forbidden_and_keeps_event(client, make_user):
    owner, other = make_user(), make_user()
    created = create_event(client, owner.id)
    response = client.delete(f"{EVENTS}/{created['id']}", headers=auth_headers(other.id))
    assert response.status_code == 403
    assert response.json() == {"error": "You can only delete your own events"}
    assert client.get(f"{EVENTS}/{created['id']}").status_code == 200


def test_forbidden_update_does_not_modify(client, make_user):
    owner, other = make_user(), make_user()
    created = create_event(client, owner.id)
    client.patch(f"{EVENTS}/{created['id']}", json={"name": "Hijacked"}, headers=auth_headers(other.id))
    assert client.get(f"{EVENTS}/{created['id']}").json()["name"] == "Meetup"


def test_invalid_event_id_is_bad_request(client, make_user):
    user = make_user()
    response = client.get(f"{EVENTS}/abc")
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid event ID"}
    assert client.delete(f"{EVENTS}/abc", headers=auth_headers(user.id)).status_code == 400


def test_event_id_beyond_integer_range_is_bad_request(client, make_user):
    user = make_user()
    huge = f"{EVENTS}/99999999999999999999"
    response = client.get(huge)
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid event ID"}
    assert client.patch(huge, json={"name": "x"}, headers=auth_headers(user.id)).json() == {"error": "Invalid event ID"}
    assert client.delete(huge, headers=auth_headers(user.id)).status_code == 400
    assert client.get(f"{EVENTS}/0").json() == {"error": "Invalid event ID"}
