from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from groupcart.main import app
from groupcart.services import InvariantViolationError

GROUPS = "/api/v1/groups"


def create(client, headers, name="Flat 4B", description=None):
    return client.post(GROUPS, json={"name": name, "description": description}, headers=headers)


def test_requests_without_token_are_unauthorized(client):
    assert client.post(GROUPS, json={"name": "x"}).status_code == 401
    assert client.post(f"{GROUPS}/join", json={"invite_code": "ABC"}).status_code == 401
    assert client.delete(f"{GROUPS}/1/leave").status_code == 401
    assert client.get(GROUPS).status_code == 401


def test_invalid_token_is_unauthorized(client):
    headers = {"Authorization": "Bearer not-a-jwt"}

    assert client.post(GROUPS, json={"name": "x"}, headers=headers).status_code == 401


def test_create_group_returns_projection(client, make_user, auth_headers):
    alice = make_user("Alice")

    response = create(client, auth_headers(alice), description="Weekly shop")

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Flat 4B"
    assert body["description"] == "Weekly shop"
    assert body["created_by"] == alice.id
    assert body["creator"]["name"] == "Alice"
    assert body["member_count"] == 1
    assert body["members"][0]["id"] == alice.id
    assert body["members"][0]["role"] == "ADMIN"
    assert body["shopping_lists"] == []
    assert len(body["invite_code"]) == 8


def test_create_group_without_name_is_bad_request(client, make_user, auth_headers):
    alice = make_user()

    response = client.post(GROUPS, json={}, headers=auth_headers(alice))

    assert response.status_code == 400
    assert response.json()["detail"] == "Group name is required"


def test_join_with_code_from_create(client, make_user, auth_headers):
    alice, bob = make_user(), make_user("Bob")
    code = create(client, auth_headers(alice)).json()["invite_code"]

    response = client.post(f"{GROUPS}/join", json={"invite_code": f" {code} "}, headers=auth_headers(bob))

    assert response.status_code == 200
    body = response.json()
    assert body["member_count"] == 2
    roles = {m["name"]: m["role"] for m in body["members"]}
    assert roles["Bob"] == "MEMBER"


def test_join_error_statuses(client, make_user, auth_headers):
    alice, bob = make_user(), make_user()
    code = create(client, auth_headers(alice)).json()["invite_code"]
    join = f"{GROUPS}/join"

    assert client.post(join, json={"invite_code": ""}, headers=auth_headers(bob)).status_code == 400
    assert client.post(join, json={"invite_code": "ZZZZ9999!"}, headers=auth_headers(bob)).status_code == 404
    assert client.post(join, json={"invite_code": code}, headers=auth_headers(bob)).status_code == 200

    again = client.post(join, json={"invite_code": code}, headers=auth_headers(bob))
    assert again.status_code == 409
    assert again.json()["detail"] == "You are already a member of this group"


def test_leave_transfers_ownership(client, make_user, auth_headers):
    alice, bob = make_user(), make_user()
    group = create(client, auth_headers(alice)).json()
    client.post(f"{GROUPS}/join", json={"invite_code": group["invite_code"]}, headers=auth_headers(bob))

    response = client.delete(f"{GROUPS}/{group['id']}/leave", headers=auth_headers(alice))

    assert response.status_code == 200
    assert response.json() == {
        "message": "Successfully left group",
        "outcome": "OWNERSHIP_TRANSFERRED",
    }
    detail = client.get(f"{GROUPS}/{group['id']}", headers=auth_headers(bob)).json()
    assert detail["created_by"] == bob.id
    assert detail["member_count"] == 1
    assert detail["members"][0]["id"] == bob.id
    assert detail["members"][0]["role"] == "ADMIN"


def test_last_member_leaving_deletes_group(client, make_user, auth_headers):
    alice = make_user()
    group_id = create(client, auth_headers(alice)).json()["id"]

    response = client.delete(f"{GROUPS}/{group_id}/leave", headers=auth_headers(alice))

    assert response.json()["outcome"] == "GROUP_DELETED"
    assert client.get(f"{GROUPS}/{group_id}", headers=auth_headers(alice)).status_code == 404


def test_leave_by_non_member_is_not_found(client, make_user, auth_headers):
    alice, mallory = make_user(), make_user()
    group_id = create(client, auth_headers(alice)).json()["id"]

    response = client.delete(f"{GROUPS}/{group_id}/leave", headers=auth_headers(mallory))

    assert response.status_code == 404
    assert response.json()["detail"] == "You are not a member of this group"


def test_group_detail_requires_membership(client, make_user, auth_headers):
    alice, mallory = make_user(), make_user()
    group_id = create(client, auth_headers(alice)).json()["id"]

    assert client.get(f"{GROUPS}/{group_id}", headers=auth_headers(mallory)).status_code == 403
    assert client.get(f"{GROUPS}/{group_id}/members", headers=auth_headers(mallory)).status_code == 403
    assert client.get(f"{GROUPS}/424242", headers=auth_headers(alice)).status_code == 404


def test_list_groups_and_members(client, make_user, auth_headers):
    alice, bob = make_user("Alice"), make_user("Bob")
    group = create(client, auth_headers(alice)).json()
    create(client, auth_headers(bob), name="Bob's own")
    client.post(f"{GROUPS}/join", json={"invite_code": group["invite_code"]}, headers=auth_headers(bob))

    alice_groups = client.get(GROUPS, headers=auth_headers(alice)).json()
    bob_groups = client.get(GROUPS, headers=auth_headers(bob)).json()
    members = client.get(f"{GROUPS}/{group['id']}/members", headers=auth_headers(bob)).json()

    assert [g["id"] for g in alice_groups] == [group["id"]]
    assert len(bob_groups) == 2
    assert [(m["name"], m["role"]) for m in members] == [("Alice", "ADMIN"), ("Bob", "MEMBER")]


def test_invariant_violation_is_reported_as_internal_error(client, make_user, auth_headers):
    alice = make_user()
    group_id = create(client, auth_headers(alice)).json()["id"]

    with patch(
        "groupcart.api.v1.groups.leave_group_service",
        side_effect=InvariantViolationError("no successor for group"),
    ):
        response = client.delete(f"{GROUPS}/{group_id}/leave", headers=auth_headers(alice))

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}


def test_store_failure_is_reported_without_detail(client, make_user, auth_headers):
    alice = make_user()
    group_id = create(client, auth_headers(alice)).json()["id"]
    quiet_client = TestClient(app, raise_server_exceptions=False)

    with patch(
        "groupcart.api.v1.groups.leave_group_service",
        side_effect=OperationalError("DELETE FROM group_members", {}, Exception("disk I/O error")),
    ):
        response = quiet_client.delete(f"{GROUPS}/{group_id}/leave", headers=auth_headers(alice))

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
