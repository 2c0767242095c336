"""Tests for donation campaigns."""
from tests.conftest import donation_campaign_form, image_file


async def _submit(client, auth, **overrides):
    resp = await client.post(
        "/api/v1/donation-campaigns", headers=auth,
        data=donation_campaign_form(**overrides), files=image_file("toby.jpeg"),
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


async def test_contact_info_combined_on_submit(client, auth, admin_auth):
    created = await _submit(client, auth)
    rows = (await client.get("/api/v1/admin/donation-campaigns", headers=admin_auth)).json()["data"]
    row = next(r for r in rows if r["id"] == created["id"])
    assert row["contact_info"] == "whatsapp:+5491122223333;email:marta@example.com"
    assert row["goal"] == 120000
    assert row["type"] == "medical"


async def test_published_campaign_splits_contact_info(client, auth, admin_auth):
    created = await _submit(client, auth)
    await client.post(f"/api/v1/admin/donation-campaigns/{created['id']}/approve", headers=admin_auth)

    campaigns = (await client.get("/api/v1/donation-campaigns")).json()["data"]
    assert len(campaigns) == 1
    toby = campaigns[0]
    assert toby["title"] == "Operación de Toby"
    assert toby["whatsapp_number"] == "+5491122223333"
    assert toby["contact_email"] == "marta@example.com"
    assert toby["urgency"] is True
    assert toby["image"] == created["image_url"]


async def test_goal_must_be_positive(client, auth):
    resp = await client.post(
        "/api/v1/donation-campaigns", headers=auth, data=donation_campaign_form(goal="0"), files=image_file(),
    )
    assert resp.status_code == 422


async def test_contact_email_validated(client, auth):
    resp = await client.post(
        "/api/v1/donation-campaigns", headers=auth,
        data=donation_campaign_form(contact_email="no-es-un-email"), files=image_file(),
    )
    assert resp.status_code == 422
    messages = [d["message"] for d in resp.json()["details"]]
    assert any("Introduce un email válido." in m for m in messages)


async def test_unknown_campaign_type_rejected(client, auth):
    resp = await client.post(
        "/api/v1/donation-campaigns", headers=auth, data=donation_campaign_form(type="party"), files=image_file(),
    )
    assert resp.status_code == 422


async def test_remove_published_campaign(client, auth, admin_auth):
    created = await _submit(client, auth)
    await client.post(f"/api/v1/admin/donation-campaigns/{created['id']}/approve", headers=admin_auth)

    resp = await client.post(f"/api/v1/admin/donation-campaigns/{created['id']}/remove", headers=admin_auth)
    assert resp.status_code == 200
    assert resp.json()["status"] == "rejected"
    assert resp.json()["rejection_reason"] == "Publicación eliminada por un administrador"
    assert (await client.get("/api/v1/donation-campaigns")).json()["total"] == 0


async def test_remove_requires_approved_campaign(client, auth, admin_auth):
    created = await _submit(client, auth)
    resp = await client.post(f"/api/v1/admin/donation-campaigns/{created['id']}/remove", headers=admin_auth)
    assert resp.status_code == 409
    assert resp.json()["error"] == "invalid_transition"
