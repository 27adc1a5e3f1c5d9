"""
API tests for users, regions and groups.
"""
from tests.conftest import auth


class TestUsers:
    async def test_me(self, client, org):
        response = await client.get("/users/me", headers=auth(org.alpha_member))
        assert response.status_code == 200
        body = response.json()
        assert body["role"] == "GROUP_MEMBER"
        assert body["group_id"] == org.alpha.id
        assert body["region_id"] is None

    async def test_me_singular_alias(self, client, org):
        response = await client.get("/user/me", headers=auth(org.director))
        assert response.status_code == 200

    async def test_list_is_scoped(self, client, org):
        response = await client.get("/users/", headers=auth(org.alpha_leader))
        names = {user["name"] for user in response.json()}
        assert names == {"alpha_leader", "alpha_member", "alpha_member2"}

    async def test_director_creates_group_member(self, client, org):
        response = await client.post(
            "/users/",
            json={"email": "new@example.org", "name": "new", "role": "GROUP_MEMBER", "group_id": org.gamma.id},
            headers=auth(org.director),
        )
        assert response.status_code == 201
        assert response.json()["group_id"] == org.gamma.id

        scope = await client.get("/users/", headers=auth(org.south_leader))
        assert "new" in {user["name"] for user in scope.json()}

    async def test_only_directors_create_users(self, client, org):
        response = await client.post(
            "/users/",
            json={"email": "new@example.org", "name": "new", "role": "DIRECTOR"},
            headers=auth(org.north_leader),
        )
        assert response.status_code == 403

    async def test_profile_must_match_role(self, client, org):
        response = await client.post(
            "/users/",
            json={"email": "new@example.org", "name": "new", "role": "REGION_LEADER"},
            headers=auth(org.director),
        )
        assert response.status_code == 400

    async def test_unknown_group(self, client, org):
        response = await client.post(
            "/users/",
            json={"email": "new@example.org", "name": "new", "role": "GROUP_LEADER", "group_id": "missing"},
            headers=auth(org.director),
        )
        assert response.status_code == 404

    async def test_duplicate_email(self, client, org):
        response = await client.post(
            "/users/",
            json={"email": org.alpha_member.email, "name": "dup", "role": "DIRECTOR"},
            headers=auth(org.director),
        )
        assert response.status_code == 400


class TestRegions:
    async def test_director_lists_all_regions(self, client, org):
        response = await client.get("/regions/", headers=auth(org.director))
        assert [region["name"] for region in response.json()] == ["North", "South"]

    async def test_member_sees_home_region(self, client, org):
        response = await client.get("/regions/", headers=auth(org.gamma_member))
        body = response.json()
        assert [region["name"] for region in body] == ["South"]
        assert [group["name"] for group in body[0]["groups"]] == ["Gamma"]

    async def test_orphan_leader_sees_no_regions(self, client, org):
        response = await client.get("/regions/", headers=auth(org.orphan_region_leader))
        assert response.json() == []

    async def test_only_directors_create_regions(self, client, org):
        denied = await client.post("/regions/", json={"name": "East"}, headers=auth(org.north_leader))
        created = await client.post("/regions/", json={"name": "East"}, headers=auth(org.director))
        assert denied.status_code == 403
        assert created.status_code == 201
        assert created.json()["groups"] == []

    async def test_list_groups_of_other_region_is_404(self, client, org):
        response = await client.get(f"/regions/{org.south.id}/groups", headers=auth(org.north_leader))
        assert response.status_code == 404

    async def test_list_groups_of_home_region(self, client, org):
        response = await client.get(f"/regions/{org.north.id}/groups", headers=auth(org.beta_member))
        assert [group["name"] for group in response.json()] == ["Alpha", "Beta"]

    async def test_region_leader_creates_group_in_own_region(self, client, org):
        response = await client.post(
            f"/regions/{org.north.id}/groups", json={"name": "Delta"}, headers=auth(org.north_leader)
        )
        assert response.status_code == 201
        assert response.json()["region_id"] == org.north.id

    async def test_region_leader_cannot_create_group_elsewhere(self, client, org):
        response = await client.post(
            f"/regions/{org.south.id}/groups", json={"name": "Delta"}, headers=auth(org.north_leader)
        )
        assert response.status_code == 403

    async def test_group_leader_cannot_create_groups(self, client, org):
        response = await client.post(
            f"/regions/{org.north.id}/groups", json={"name": "Delta"}, headers=auth(org.alpha_leader)
        )
        assert response.status_code == 403

    async def test_create_group_in_missing_region(self, client, org):
        response = await client.post("/regions/missing/groups", json={"name": "Delta"}, headers=auth(org.director))
        assert response.status_code == 404
