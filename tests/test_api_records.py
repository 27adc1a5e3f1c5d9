"""
API tests for contacts, student records and the dashboard.
"""
from datetime import datetime, timedelta, timezone

from app.features.contacts.models import EvangelismContact
from app.features.students.models import StudentRecord
from tests.conftest import auth


BASE_TIME = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


async def seed_contacts(db_session, *owners):
    records = [
        EvangelismContact(
            contact_name=f"contact {i}",
            created_by_id=owner.id,
            contacted=i % 2 == 0,
            created_at=BASE_TIME + timedelta(minutes=i),
            updated_at=BASE_TIME + timedelta(minutes=i),
        )
        for i, owner in enumerate(owners)
    ]
    db_session.add_all(records)
    await db_session.commit()
    return records


class TestAuthentication:
    async def test_public_endpoints(self, client):
        assert (await client.get("/")).status_code == 200
        assert (await client.get("/health")).json() == {"status": "healthy"}

    async def test_missing_token(self, client, org):
        response = await client.get("/contacts")
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    async def test_unknown_user(self, client, org):
        response = await client.get("/contacts", headers={"Authorization": "Bearer nobody"})
        assert response.status_code == 401

    async def test_inactive_user(self, client, db_session, org):
        org.beta_member.is_active = False
        await db_session.commit()
        response = await client.get("/contacts", headers=auth(org.beta_member))
        assert response.status_code == 401


class TestContacts:
    async def test_create_owned_by_caller(self, client, org):
        response = await client.post(
            "/contacts",
            json={"contact_name": "Jordan", "location": "Market square", "created_by_id": org.director.id},
            headers=auth(org.alpha_member),
        )
        assert response.status_code == 201
        body = response.json()
        assert body["created_by_id"] == org.alpha_member.id
        assert body["contacted"] is False

    async def test_create_validation_error(self, client, org):
        response = await client.post("/contacts", json={"contact_name": ""}, headers=auth(org.alpha_member))
        assert response.status_code == 400
        assert "contact_name" in response.json()

    async def test_list_is_scoped(self, client, db_session, org):
        await seed_contacts(db_session, org.alpha_member, org.alpha_member2, org.beta_member, org.gamma_member)

        member = await client.get("/contacts", headers=auth(org.alpha_member))
        leader = await client.get("/contacts", headers=auth(org.alpha_leader))
        region = await client.get("/contacts", headers=auth(org.north_leader))
        director = await client.get("/contacts", headers=auth(org.director))

        assert [c["contact_name"] for c in member.json()] == ["contact 0"]
        assert [c["contact_name"] for c in leader.json()] == ["contact 1", "contact 0"]
        assert [c["contact_name"] for c in region.json()] == ["contact 2", "contact 1", "contact 0"]
        assert [c["contact_name"] for c in director.json()] == ["contact 3", "contact 2", "contact 1", "contact 0"]

    async def test_orphan_leader_sees_nothing(self, client, db_session, org):
        await seed_contacts(db_session, org.alpha_member, org.gamma_member)
        response = await client.get("/contacts", headers=auth(org.orphan_region_leader))
        assert response.status_code == 200
        assert response.json() == []

    async def test_get_out_of_scope_is_404(self, client, db_session, org):
        (record,) = await seed_contacts(db_session, org.gamma_member)
        response = await client.get(f"/contacts/{record.id}", headers=auth(org.north_leader))
        assert response.status_code == 404

    async def test_get_in_scope(self, client, db_session, org):
        (record,) = await seed_contacts(db_session, org.gamma_member)
        response = await client.get(f"/contacts/{record.id}", headers=auth(org.south_leader))
        assert response.status_code == 200
        assert response.json()["id"] == record.id

    async def test_leader_marks_member_contact_contacted(self, client, db_session, org):
        record = EvangelismContact(contact_name="Casey", created_by_id=org.alpha_member.id)
        db_session.add(record)
        await db_session.commit()

        response = await client.patch(
            f"/contacts/{record.id}",
            json={"contacted": True, "notes": "Visited on Sunday"},
            headers=auth(org.alpha_leader),
        )

        assert response.status_code == 200
        body = response.json()
        assert body["contacted"] is True
        assert body["notes"] == "Visited on Sunday"
        assert body["contact_name"] == "Casey"

    async def test_patch_null_clears_follow_up(self, client, db_session, org):
        record = EvangelismContact(
            contact_name="Casey",
            created_by_id=org.alpha_member.id,
            notes="Prayer request",
            follow_up_date=BASE_TIME,
        )
        db_session.add(record)
        await db_session.commit()

        response = await client.patch(
            f"/contacts/{record.id}",
            json={"follow_up_date": None, "contact_name": None},
            headers=auth(org.alpha_member),
        )

        assert response.status_code == 200
        body = response.json()
        assert body["follow_up_date"] is None
        assert body["contact_name"] == "Casey"
        assert body["notes"] == "Prayer request"

    async def test_member_cannot_update_peer_contact(self, client, db_session, org):
        (record,) = await seed_contacts(db_session, org.alpha_member2)
        response = await client.patch(
            f"/contacts/{record.id}", json={"contacted": True}, headers=auth(org.alpha_member)
        )
        assert response.status_code == 403

    async def test_update_missing_contact(self, client, org):
        response = await client.patch("/contacts/missing", json={"notes": "x"}, headers=auth(org.director))
        assert response.status_code == 404


class TestStudents:
    async def test_create_and_update(self, client, org):
        created = await client.post(
            "/students",
            json={"student_name": "Robin", "last_lesson": "Lesson 1"},
            headers=auth(org.beta_member),
        )
        assert created.status_code == 201
        record_id = created.json()["id"]
        assert created.json()["tracker_id"] == org.beta_member.id

        updated = await client.patch(
            f"/students/{record_id}",
            json={"last_lesson": "Lesson 2"},
            headers=auth(org.north_leader),
        )
        assert updated.status_code == 200
        assert updated.json()["last_lesson"] == "Lesson 2"
        assert updated.json()["tracker_id"] == org.beta_member.id

    async def test_other_region_cannot_update(self, client, db_session, org):
        record = StudentRecord(student_name="Robin", tracker_id=org.beta_member.id)
        db_session.add(record)
        await db_session.commit()

        response = await client.patch(
            f"/students/{record.id}", json={"is_active": False}, headers=auth(org.south_leader)
        )
        assert response.status_code == 403

    async def test_list_is_scoped(self, client, db_session, org):
        db_session.add_all([
            StudentRecord(student_name="mine", tracker_id=org.gamma_member.id),
            StudentRecord(student_name="theirs", tracker_id=org.alpha_member.id),
        ])
        await db_session.commit()

        response = await client.get("/students", headers=auth(org.gamma_leader))

        assert [s["student_name"] for s in response.json()] == ["mine"]


class TestDashboard:
    async def test_counts_follow_scope(self, client, db_session, org):
        await seed_contacts(db_session, org.alpha_member, org.alpha_member2, org.gamma_member)
        db_session.add_all([
            StudentRecord(student_name="a", tracker_id=org.alpha_member.id),
            StudentRecord(student_name="b", tracker_id=org.alpha_member2.id, is_active=False),
        ])
        await db_session.commit()

        response = await client.get("/dashboard", headers=auth(org.alpha_leader))

        assert response.status_code == 200
        body = response.json()
        assert body["role"] == "GROUP_LEADER"
        assert body["total_contacts"] == 2
        assert body["contacted"] == 1
        assert body["pending_follow_ups"] == 1
        assert body["total_students"] == 2
        assert body["active_students"] == 1
        assert [c["contact_name"] for c in body["recent_contacts"]] == ["contact 1", "contact 0"]
