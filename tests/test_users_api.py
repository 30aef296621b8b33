from .conftest import API, PASSWORD, register_and_login

USERS = f"{API}/users"


def test_first_user_is_admin(client):
    first = client.post(USERS, json={"login": "Alice", "password": PASSWORD}).json()
    second = client.post(USERS, json={"login": "bob", "password": PASSWORD}).json()
    assert first["login"] == "alice"
    assert first["role_id"] == 1
    assert second["role_id"] == 2
    assert "password" not in first


def test_duplicate_login_is_rejected(client):
    client.post(USERS, json={"login": "alice", "password": PASSWORD})
    response = client.post(USERS, json={"login": "ALICE", "password": PASSWORD})
    assert response.status_code == 400
    assert response.json()["errorKey"] == "userexists"


def test_login_with_bad_credentials(client):
    client.post(USERS, json={"login": "alice", "password": PASSWORD})
    response = client.post(f"{USERS}/login", json={"login": "alice", "password": "wrong"})
    assert response.status_code == 401
    response = client.post(f"{USERS}/login", json={"login": "nobody", "password": PASSWORD})
    assert response.status_code == 401


def test_invalid_token_is_rejected(client):
    response = client.get(f"{USERS}/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_me_and_admin_listing(client, admin_headers, user_headers):
    me = client.get(f"{USERS}/me", headers=user_headers)
    assert me.status_code == 200
    assert me.json()["login"] == "user"

    assert client.get(USERS, headers=user_headers).status_code == 403
    response = client.get(USERS, headers=admin_headers)
    assert [u["login"] for u in response.json()] == ["admin", "user"]


def test_register_and_login_helper_returns_usable_headers(client):
    headers = register_and_login(client, "carol")
    assert client.get(f"{API}/tickets", headers=headers).status_code == 200
