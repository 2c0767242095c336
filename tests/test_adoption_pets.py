"""Tests for adoption listings."""
from tests.conftest import adoption_pet_form, image_file


async def _submit(client, auth, **overrides):
    resp = await client.post(
        "/api/v1/adoption-pets", headers=auth, data=adoption_pet_form(**overrides), files=image_file("mishi.webp"),
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


async def test_submit_and_publish_adoption(client, auth, admin_auth):
    created = await _submit(client, auth)
    assert created["status"] == "pending"
    assert created["image_url"].startswith("/storage/adoption-pet-images/reports/")
    assert created["image_url"].endswith(".webp")

    resp = await client.post(f"/api/v1/admin/adoption-pets/{created['id']}/approve", headers=admin_auth)
    assert resp.status_code == 200

    listings = (await client.get("/api/v1/adoption-pets")).json()["data"]
    assert len(listings) == 1
    mishi = listings[0]
    assert mishi["status"] == "adoption"
    assert mishi["location"] == "San Justo - Villa Luzuriaga"
    assert mishi["med_status"] == ["vacunado", "castrado"]
    assert mishi["requirements"] == "Patio cerrado"
    assert mishi["description"] == "Muy cariñosa"
    assert mishi["reward"] is None


async def test_empty_med_status_stored_as_null(client, auth, admin_auth):
    form = adoption_pet_form()
    del form["med_status"]
    resp = await client.post("/api/v1/adoption-pets", headers=auth, data=form, files=image_file())
    assert resp.status_code == 201
    listing_id = resp.json()["id"]

    rows = (await client.get("/api/v1/admin/adoption-pets", headers=admin_auth)).json()["data"]
    row = next(r for r in rows if r["id"] == listing_id)
    assert row["med_status"] is None


async def test_empty_description_displayed_as_null(client, auth, admin_auth):
    created = await _submit(client, auth, description="")
    await client.post(f"/api/v1/admin/adoption-pets/{created['id']}/approve", headers=admin_auth)
    mishi = (await client.get("/api/v1/adoption-pets")).json()["data"][0]
    assert mishi["description"] is None


async def test_rejected_adoption_not_public(client, auth, admin_auth):
    created = await _submit(client, auth)
    resp = await client.post(
        f"/api/v1/admin/adoption-pets/{created['id']}/reject", headers=admin_auth, json={"reason": "  Duplicada  "},
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "rejected"
    assert resp.json()["rejection_reason"] == "Duplicada"
    assert (await client.get("/api/v1/adoption-pets")).json()["total"] == 0


async def test_invalid_gender_rejected(client, auth):
    resp = await client.post(
        "/api/v1/adoption-pets", headers=auth, data=adoption_pet_form(gender="unknown"), files=image_file(),
    )
    assert resp.status_code == 422
    fields = [d["field"] for d in resp.json()["details"]]
    assert any("gender" in f for f in fields)
