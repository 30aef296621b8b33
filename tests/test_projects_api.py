from .conftest import API

PROJECTS = f"{API}/projects"


def create_project(client, headers, **fields):
    response = client.post(PROJECTS, json=fields, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_and_get_project(client, user_headers):
    project = create_project(client, user_headers, name="Backend", description="API")
    response = client.get(f"{PROJECTS}/{project['id']}", headers=user_headers)
    assert response.status_code == 200
    assert response.json() == {"id": project["id"], "name": "Backend", "description": "API"}


def test_list_sorted_and_paginated(client, admin_headers):
    for name in ("b", "c", "a"):
        create_project(client, admin_headers, name=name)

    response = client.get(
        PROJECTS, params={"sort": "name,desc", "size": 2}, headers=admin_headers
    )
    assert [p["name"] for p in response.json()] == ["c", "b"]
    assert response.headers["x-total-count"] == "3"
    link = response.headers["link"]
    assert 'rel="next"' in link
    assert "sort=name%2Cdesc" in link or "sort=name,desc" in link


def test_full_update_and_merge(client, admin_headers):
    project = create_project(client, admin_headers, name="Backend", description="API")
    url = f"{PROJECTS}/{project['id']}"

    response = client.patch(url, json={"id": project["id"], "name": "Core"}, headers=admin_headers)
    assert response.json() == {"id": project["id"], "name": "Core", "description": "API"}

    response = client.put(url, json={"id": project["id"], "name": "Core"}, headers=admin_headers)
    assert response.json()["description"] is None


def test_update_of_missing_project(client, admin_headers):
    response = client.put(
        f"{PROJECTS}/missing", json={"id": "missing", "name": "x"}, headers=admin_headers
    )
    assert response.status_code == 400
    assert response.json()["errorKey"] == "idnotfound"
    assert client.get(PROJECTS, headers=admin_headers).json() == []


def test_deleting_project_keeps_its_tickets(client, admin_headers):
    project = create_project(client, admin_headers, name="Backend")
    ticket = client.post(
        f"{API}/tickets", json={"title": "t1", "project": {"id": project["id"]}}, headers=admin_headers
    ).json()
    assert ticket["project"]["name"] == "Backend"

    assert client.delete(f"{PROJECTS}/{project['id']}", headers=admin_headers).status_code == 204

    response = client.get(f"{API}/tickets/{ticket['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["project"] is None
