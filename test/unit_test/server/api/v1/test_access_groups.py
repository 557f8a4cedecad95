"""HTTP tests for the access group and membership endpoints."""

from __future__ import annotations


def _members_url(group: dict) -> str:
    return f"/api/v1/access-groups/{group['id']}/members"


class TestAccessGroups:
    async def test_create(self, created_group, sample_group_data):
        assert created_group["name"] == sample_group_data["name"]
        assert created_group["description"] == sample_group_data["description"]

    async def test_duplicate_name_is_conflict(self, client, created_group):
        response = await client.post("/api/v1/access-groups", json={"name": created_group["name"]})

        assert response.status_code == 409

    async def test_empty_name_is_rejected(self, client):
        response = await client.post("/api/v1/access-groups", json={"name": ""})

        assert response.status_code == 422

    async def test_list(self, client, created_group):
        response = await client.get("/api/v1/access-groups")

        assert [g["id"] for g in response.json()] == [created_group["id"]]

    async def test_patch(self, client, created_group):
        response = await client.patch(
            f"/api/v1/access-groups/{created_group['id']}", json={"description": "Refunds only"}
        )

        assert response.json()["description"] == "Refunds only"

    async def test_patch_null_clears_description(self, client, created_group):
        response = await client.patch(f"/api/v1/access-groups/{created_group['id']}", json={"description": None})

        assert response.status_code == 200
        assert response.json()["description"] is None

    async def test_get_with_members(self, client, created_group, created_user):
        await client.post(_members_url(created_group), json={"user_id": created_user["id"]})

        response = await client.get(f"/api/v1/access-groups/{created_group['id']}")

        assert response.json()["members"] == [
            {"id": created_user["id"], "email": created_user["email"], "is_active": True}
        ]

    async def test_delete(self, client, created_group, created_user):
        await client.post(_members_url(created_group), json={"user_id": created_user["id"]})

        response = await client.delete(f"/api/v1/access-groups/{created_group['id']}")

        assert response.status_code == 204
        assert (await client.get(f"/api/v1/access-groups/{created_group['id']}")).status_code == 404
        groups = await client.get(f"/api/v1/users/{created_user['id']}/groups")
        assert groups.json() == []

    async def test_delete_missing(self, client):
        response = await client.delete("/api/v1/access-groups/404")

        assert response.status_code == 404


class TestMemberships:
    async def test_add_member(self, client, created_group, created_user):
        response = await client.post(_members_url(created_group), json={"user_id": created_user["id"]})

        assert response.status_code == 201
        body = response.json()
        assert (body["user_id"], body["group_id"]) == (created_user["id"], created_group["id"])
        assert body["granted_at"]

    async def test_add_member_twice_is_a_no_op(self, client, created_group, created_user):
        await client.post(_members_url(created_group), json={"user_id": created_user["id"]})
        second = await client.post(_members_url(created_group), json={"user_id": created_user["id"]})

        assert second.status_code == 201
        assert second.json()["user_id"] == created_user["id"]
        group = await client.get(f"/api/v1/access-groups/{created_group['id']}")
        assert len(group.json()["members"]) == 1

    async def test_add_unknown_user(self, client, created_group):
        response = await client.post(_members_url(created_group), json={"user_id": 404})

        assert response.status_code == 404

    async def test_add_inactive_user_is_conflict(self, client, created_group, created_user):
        await client.post(f"/api/v1/users/{created_user['id']}/deactivate")

        response = await client.post(_members_url(created_group), json={"user_id": created_user["id"]})

        assert response.status_code == 409
        assert response.json()["error_type"] == "InactiveUserError"

    async def test_remove_member(self, client, created_group, created_user):
        await client.post(_members_url(created_group), json={"user_id": created_user["id"]})

        response = await client.delete(f"{_members_url(created_group)}/{created_user['id']}")
        again = await client.delete(f"{_members_url(created_group)}/{created_user['id']}")

        assert response.status_code == 204
        assert again.status_code == 404

    async def test_check_access(self, client, created_group, created_user):
        params = {"user_id": created_user["id"], "group_name": created_group["name"]}

        before = await client.get("/api/v1/access-groups/check", params=params)
        await client.post(_members_url(created_group), json={"user_id": created_user["id"]})
        after = await client.get("/api/v1/access-groups/check", params=params)

        assert before.json()["has_access"] is False
        assert after.json() == {
            "user_id": created_user["id"],
            "group_name": created_group["name"],
            "has_access": True,
        }
