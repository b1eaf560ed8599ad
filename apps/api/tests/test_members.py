def _seed_account(client):
    location = client.post("/v1/locations", json={"name": "Gym"}).json()
    return client.post("/v1/accounts", json={"location_guid": location["guid"]}).json()


def _add_member(client, account, name, is_primary=False):
    return client.post(
        "/v1/members",
        json={"account_guid": account["guid"], "is_primary": is_primary, "first_name": name},
    )


def _account_members(client, account):
    return client.get(f"/v1/accounts/{account['guid']}/members").json()["items"]


def test_primary_member_lifecycle(client):
    account = _seed_account(client)

    alice = _add_member(client, account, "Alice", is_primary=False)
    assert alice.status_code == 201
    assert alice.json()["is_primary"] is True
    assert alice.json()["cancelled"] is False

    bob = _add_member(client, account, "Bob", is_primary=True)
    assert bob.status_code == 409
    assert bob.json()["detail"]["reason"] == "duplicate_primary"

    carol = _add_member(client, account, "Carol", is_primary=False)
    assert carol.status_code == 201
    assert carol.json()["is_primary"] is False

    deleted = client.delete(f"/v1/members/{alice.json()['guid']}")
    assert deleted.status_code == 200
    body = deleted.json()
    assert body["deleted_count"] == 1
    assert body["new_primary_promoted"] is True
    assert body["promoted_member_guid"] == carol.json()["guid"]

    members = _account_members(client, account)
    assert [(item["first_name"], item["is_primary"]) for item in members] == [("Carol", True)]


def test_duplicate_primary_leaves_member_count_unchanged(client):
    account = _seed_account(client)
    _add_member(client, account, "Alice")
    _add_member(client, account, "Bob")

    rejected = _add_member(client, account, "Eve", is_primary=True)
    assert rejected.status_code == 409
    assert len(_account_members(client, account)) == 2


def test_last_member_cannot_be_deleted(client):
    account = _seed_account(client)
    only = _add_member(client, account, "Solo").json()

    response = client.delete(f"/v1/members/{only['guid']}")
    assert response.status_code == 409
    assert response.json()["detail"]["reason"] == "last_member"
    assert client.get(f"/v1/members/{only['guid']}").status_code == 200


def test_deleting_non_primary_does_not_promote(client):
    account = _seed_account(client)
    alice = _add_member(client, account, "Alice").json()
    _add_member(client, account, "Bob")
    carol = _add_member(client, account, "Carol").json()

    response = client.delete(f"/v1/members/{carol['guid']}")
    assert response.status_code == 200
    assert response.json()["new_primary_promoted"] is False

    primary = [item for item in _account_members(client, account) if item["is_primary"]]
    assert [item["guid"] for item in primary] == [alice["guid"]]


def test_member_requires_existing_account(client):
    response = _add_member(client, {"guid": "00000000-0000-0000-0000-000000000000"}, "Ghost")
    assert response.status_code == 404
    assert response.json()["detail"]["code"] == "not_found"


def test_delete_unknown_member(client):
    response = client.delete("/v1/members/00000000-0000-0000-0000-000000000000")
    assert response.status_code == 404


def test_member_field_lengths_are_validated(client):
    account = _seed_account(client)
    response = client.post(
        "/v1/members",
        json={"account_guid": account["guid"], "postal_code": "x" * 17},
    )
    assert response.status_code == 422


def test_list_members_groups_by_account(client):
    first = _seed_account(client)
    second = _seed_account(client)
    _add_member(client, first, "A1")
    _add_member(client, second, "B1")
    _add_member(client, first, "A2")

    items = client.get("/v1/members").json()["items"]
    assert len(items) == 3
    by_account = {}
    for item in items:
        by_account.setdefault(item["account_guid"], []).append(item["first_name"])
    assert by_account[first["guid"]] == ["A1", "A2"]
    assert by_account[second["guid"]] == ["B1"]


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
