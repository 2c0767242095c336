"""Tests for the admin dashboard stats and moderation queues."""
from tests.conftest import adoption_pet_form, image_file, lost_pet_form


async def test_stats_requires_admin(client, auth):
    resp = await client.get("/api/v1/admin/stats", headers=auth)
    assert resp.status_code == 403


async def test_stats_requires_login(client):
    resp = await client.get("/api/v1/admin/stats")
    assert resp.status_code == 401


async def test_stats_counts_by_domain_and_status(client, auth, admin_auth):
    lost = await client.post("/api/v1/lost-pets", headers=auth, data=lost_pet_form(), files=image_file())
    await client.post("/api/v1/lost-pets", headers=auth, data=lost_pet_form(pet_name="Luna"), files=image_file())
    await client.post("/api/v1/adoption-pets", headers=auth, data=adoption_pet_form(), files=image_file())
    await client.post(f"/api/v1/admin/lost-pets/{lost.json()['id']}/approve", headers=admin_auth)

    resp = await client.get("/api/v1/admin/stats", headers=admin_auth)
    assert resp.status_code == 200
    stats = resp.json()
    assert stats["domains"]["lost-pets"] == {"pending": 1, "approved": 1, "rejected": 0}
    assert stats["domains"]["adoption-pets"]["pending"] == 1
    assert stats["domains"]["donation-campaigns"] == {"pending": 0, "approved": 0, "rejected": 0}
    assert stats["totals"] == {"pending": 2, "approved": 1, "rejected": 0}
    assert stats["total"] == 3


async def test_pending_queue_newest_first_and_approval_moves_item(client, auth, admin_auth):
    rex = (await client.post("/api/v1/lost-pets", headers=auth, data=lost_pet_form(), files=image_file())).json()
    luna = (await client.post(
        "/api/v1/lost-pets", headers=auth, data=lost_pet_form(pet_name="Luna"), files=image_file(),
    )).json()

    pending = (await client.get("/api/v1/admin/lost-pets", headers=admin_auth)).json()["data"]
    assert [r["id"] for r in pending] == [luna["id"], rex["id"]]

    await client.post(f"/api/v1/admin/lost-pets/{rex['id']}/approve", headers=admin_auth)
    pending = (await client.get("/api/v1/admin/lost-pets", headers=admin_auth)).json()["data"]
    assert [r["id"] for r in pending] == [luna["id"]]

    approved = (await client.get("/api/v1/admin/lost-pets?status=approved", headers=admin_auth)).json()["data"]
    assert [r["id"] for r in approved] == [rex["id"]]
    assert approved[0]["reviewed_by"] is not None
