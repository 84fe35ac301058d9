from conftest import auth_headers_for, service_token


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_correlation_id_is_echoed(client):
    response = client.get("/health", headers={"X-Correlation-ID": "abc-123"})
    assert response.headers["X-Correlation-ID"] == "abc-123"


def test_missing_token_rejected(client):
    response = client.get("/conversations")
    assert response.status_code in (401, 403)


def test_expired_token_rejected(client):
    token = service_token("mike", expires_in=-60)
    response = client.get("/conversations", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json() == {"error": "Token has expired"}


def test_register_with_email(client):
    headers = auth_headers_for("mike", email="mike@example.com", name="Mike")

    response = client.post(
        "/users/register/email", json={"push_token": "fcm-1"}, headers=headers
    )

    assert response.status_code == 201
    assert response.json() == {
        "user_id": "mike",
        "display_name": "Mike",
        "email": "mike@example.com",
        "phone_number": None,
    }


def test_register_with_phone_number(client):
    headers = auth_headers_for("steve", phone_number="(212) 555-0123")

    response = client.post(
        "/users/register/phone", json={"display_name": "Steve"}, headers=headers
    )

    assert response.status_code == 201
    assert response.json()["phone_number"] == "+12125550123"

    lookup = client.get(
        "/users/lookup/phone", params={"phone_number": "212-555-0123"}, headers=headers
    )
    assert lookup.json()["user"]["user_id"] == "steve"


def test_register_twice_conflicts(client, signup):
    headers = signup("mike")
    response = client.post("/users/register/email", json={}, headers=headers)

    assert response.status_code == 409
    assert response.json() == {"error": "User already exists"}


def test_register_without_email_claim(client):
    headers = auth_headers_for("mike", name="Mike")
    response = client.post("/users/register/email", json={}, headers=headers)

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid parameters to call registerUserWithEmail"}


def test_register_invalid_email(client):
    headers = auth_headers_for("mike", email="nope", name="Mike")
    response = client.post("/users/register/email", json={}, headers=headers)

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid email nope"}


def test_get_and_lookup_users(client, signup):
    headers = signup("mike")

    assert client.get("/users/mike", headers=headers).json()["user"]["display_name"] == "Mike"
    assert client.get("/users/ghost", headers=headers).json() == {"user": None}

    lookup = client.get(
        "/users/lookup/email", params={"email": "mike@example.com"}, headers=headers
    )
    assert lookup.json()["user"]["user_id"] == "mike"


def test_update_and_delete_me(client, signup):
    headers = signup("mike")

    response = client.patch("/users/me", json={"display_name": "Michael"}, headers=headers)
    assert response.status_code == 200
    assert response.json()["display_name"] == "Michael"

    assert client.delete("/users/me", headers=headers).json() == {"deleted": True}
    assert client.delete("/users/me", headers=headers).json() == {"deleted": False}

    response = client.patch("/users/me", json={"display_name": "Mike"}, headers=headers)
    assert response.status_code == 404
    assert response.json() == {"error": "User does not exist"}


def test_validate_user_ids(client, signup):
    headers = signup("mike")
    signup("henry")

    ok = client.post("/users/validate", json={"user_ids": ["mike", "henry"]}, headers=headers)
    bad = client.post("/users/validate", json={"user_ids": ["mike", "ghost"]}, headers=headers)

    assert ok.json() == {"valid": True}
    assert bad.json() == {"valid": False}


def test_conversation_flow(client, signup):
    mike = signup("mike")
    henry = signup("henry")
    signup("steve")

    created = client.post(
        "/conversations", json={"user_ids": ["henry", "steve"]}, headers=mike
    )
    assert created.status_code == 200
    conversation_id = created.json()["conversation_id"]

    again = client.post("/conversations", json={"user_ids": ["steve", "henry"]}, headers=mike)
    assert again.json()["conversation_id"] == conversation_id

    posted = client.post(
        f"/conversations/{conversation_id}/messages", json={"message": "hi"}, headers=mike
    )
    assert posted.status_code == 201
    assert posted.json()["sender"]["user_id"] == "mike"

    view = client.get(f"/conversations/{conversation_id}", headers=henry).json()
    assert [u["user_id"] for u in view["members"]] == ["mike", "henry", "steve"]
    assert view["messages"][0]["message"] == "hi"
    assert view["messages"][0]["sender"]["user_id"] == "mike"

    users = client.get(f"/conversations/{conversation_id}/users", headers=henry).json()
    assert [u["user_id"] for u in users] == ["mike", "henry", "steve"]

    ids = client.get("/conversations/ids", headers=henry).json()
    assert ids == {"conversation_ids": [conversation_id]}

    existing = client.get(
        "/conversations/existing",
        params=[("user_ids", "mike"), ("user_ids", "henry"), ("user_ids", "steve")],
        headers=henry,
    )
    assert existing.json() == {"conversation_id": conversation_id}

    subset = client.get(
        "/conversations/existing",
        params=[("user_ids", "mike"), ("user_ids", "henry")],
        headers=henry,
    )
    assert subset.json() == {"conversation_id": None}

    history = client.get("/conversations", headers=mike).json()
    assert len(history) == 1
    assert history[0]["messages"][0]["message"] == "hi"


def test_conversation_with_unknown_user(client, signup):
    mike = signup("mike")
    response = client.post("/conversations", json={"user_ids": ["ghost"]}, headers=mike)

    assert response.status_code == 400
    assert response.json() == {"error": "UserIds not valid"}


def test_conversation_with_yourself(client, signup):
    mike = signup("mike")
    response = client.post("/conversations", json={"user_ids": ["mike"]}, headers=mike)
    assert response.status_code == 400


def test_membership_endpoints(client, signup):
    mike = signup("mike")
    henry = signup("henry")
    carol = signup("carol")
    conversation_id = client.post(
        "/conversations", json={"user_ids": ["henry"]}, headers=mike
    ).json()["conversation_id"]

    forbidden = client.get(f"/conversations/{conversation_id}", headers=carol)
    assert forbidden.status_code == 403
    assert forbidden.json() == {"error": "User is not part of conversation"}

    joined = client.post(f"/conversations/{conversation_id}/members", headers=carol)
    assert joined.status_code == 201
    again = client.post(f"/conversations/{conversation_id}/members", headers=carol)
    assert again.status_code == 409
    assert again.json() == {"error": "User already part of conversation"}

    left = client.delete(f"/conversations/{conversation_id}/members/me", headers=henry)
    assert left.status_code == 200

    blocked = client.post(
        f"/conversations/{conversation_id}/messages", json={"message": "hi"}, headers=henry
    )
    assert blocked.status_code == 403
    assert blocked.json() == {"error": "Sender is not part of the conversation"}

    not_member = client.delete(f"/conversations/{conversation_id}/members/me", headers=henry)
    assert not_member.status_code == 403


def test_unregistered_sender(client, signup):
    mike = signup("mike")
    signup("henry")
    conversation_id = client.post(
        "/conversations", json={"user_ids": ["henry"]}, headers=mike
    ).json()["conversation_id"]

    ghost = auth_headers_for("ghost")
    response = client.post(
        f"/conversations/{conversation_id}/messages", json={"message": "boo"}, headers=ghost
    )
    assert response.status_code == 403
    assert response.json() == {"error": "Sender is not valid"}


def test_get_conversation_since(client, signup):
    mike = signup("mike")
    signup("henry")
    conversation_id = client.post(
        "/conversations", json={"user_ids": ["henry"]}, headers=mike
    ).json()["conversation_id"]
    first = client.post(
        f"/conversations/{conversation_id}/messages", json={"message": "one"}, headers=mike
    ).json()
    client.post(
        f"/conversations/{conversation_id}/messages", json={"message": "two"}, headers=mike
    )

    view = client.get(
        f"/conversations/{conversation_id}",
        params={"since": first["timestamp"]},
        headers=mike,
    ).json()
    assert [m["message"] for m in view["messages"]] == ["two"]


def test_validation_error_shape(client, signup):
    mike = signup("mike")
    response = client.post("/conversations", json={"user_ids": "henry"}, headers=mike)

    assert response.status_code == 400
    assert response.json()["error"] == "Validation error"


def test_metrics_endpoint(client, signup):
    mike = signup("mike")
    client.get("/users/ghost", headers=mike)
    client.post("/conversations", json={"user_ids": ["ghost"]}, headers=mike)

    response = client.get("/metrics")

    assert response.status_code == 200
    body = response.text
    assert "parley_users_registered_total" in body
    assert 'parley_errors_total{error_type="InvalidParticipantsError"}' in body
    assert "http_server_request_duration_seconds" in body
