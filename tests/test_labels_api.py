import json

from .conftest import API

LABELS = f"{API}/labels"


def create(client, headers, url, **fields):
    response = client.post(url, json=fields, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_label(client, admin_headers):
    response = client.post(LABELS, json={"value": "bug"}, headers=admin_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["value"] == "bug"
    assert body["tickets"] == []
    assert response.headers["location"] == f"{LABELS}/{body['id']}"
    assert response.headers["x-bugtrackerapp-alert"] == "bugTrackerApp.label.created"


def test_list_labels_as_json_and_ndjson(client, admin_headers):
    create(client, admin_headers, LABELS, value="feature")
    create(client, admin_headers, LABELS, value="bug")

    response = client.get(LABELS, headers=admin_headers)
    assert [label["value"] for label in response.json()] == ["bug", "feature"]

    response = client.get(LABELS, headers={**admin_headers, "Accept": "application/x-ndjson"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/x-ndjson")
    lines = [json.loads(line) for line in response.text.splitlines() if line]
    assert [label["value"] for label in lines] == ["bug", "feature"]


def test_partial_update_with_nothing_to_merge(client, admin_headers):
    label = create(client, admin_headers, LABELS, value="bug")
    url = f"{LABELS}/{label['id']}"

    response = client.patch(url, json={"id": label["id"]}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["value"] == "bug"

    response = client.patch(url, json={"id": label["id"], "value": "defect"}, headers=admin_headers)
    assert response.json()["value"] == "defect"
    assert client.get(url, headers=admin_headers).json()["value"] == "defect"


def test_partial_update_of_missing_label(client, admin_headers):
    response = client.patch(
        f"{LABELS}/missing", json={"id": "missing", "value": "x"}, headers=admin_headers
    )
    assert response.status_code == 400
    assert response.json()["errorKey"] == "idnotfound"
    assert response.headers["x-bugtrackerapp-params"] == "label"


def test_full_update_replaces_tickets(client, admin_headers):
    first = create(client, admin_headers, f"{API}/tickets", title="first")
    second = create(client, admin_headers, f"{API}/tickets", title="second")
    label = create(client, admin_headers, LABELS, value="bug", tickets=[{"id": first["id"]}])
    assert [t["id"] for t in label["tickets"]] == [first["id"]]

    response = client.put(
        f"{LABELS}/{label['id']}",
        json={"id": label["id"], "value": "bug", "tickets": [{"id": second["id"]}]},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert [t["id"] for t in response.json()["tickets"]] == [second["id"]]

    first_labels = client.get(f"{API}/tickets/{first['id']}", headers=admin_headers).json()["labels"]
    second_labels = client.get(f"{API}/tickets/{second['id']}", headers=admin_headers).json()["labels"]
    assert first_labels == []
    assert [l["id"] for l in second_labels] == [label["id"]]


def test_deleting_label_detaches_it_from_tickets(client, admin_headers):
    label = create(client, admin_headers, LABELS, value="bug")
    ticket = create(client, admin_headers, f"{API}/tickets", title="t1", labels=[{"id": label["id"]}])

    response = client.delete(f"{LABELS}/{label['id']}", headers=admin_headers)
    assert response.status_code == 204
    assert response.headers["x-bugtrackerapp-alert"] == "bugTrackerApp.label.deleted"

    assert client.get(f"{LABELS}/{label['id']}", headers=admin_headers).status_code == 404
    assert client.get(f"{API}/tickets/{ticket['id']}", headers=admin_headers).json()["labels"] == []
