"""
Integration tests for admin moderation.
"""

import pytest

from ratethedogs.constants import DOG_STATUS_PENDING
from ratethedogs.db.models import AnonymousUser, Dog


ADMIN_HEADERS = {"X-Admin-Secret": "test-admin-secret"}


class TestAdminAuth:
    """Tests for the X-Admin-Secret check."""

    @pytest.mark.parametrize("headers", [{}, {"X-Admin-Secret": "wrong"}, {"X-Admin-Secret": ""}])
    def test_rejects_bad_credentials(self, client, headers):
        response = client.get("/api/admin/dogs/pending", headers=headers)

        assert response.status_code == 401
        assert response.json()["error"] == {
            "code": "UNAUTHORIZED",
            "message": "Invalid admin credentials",
        }

    def test_unconfigured_secret_rejects_everything(self, client, monkeypatch):
        from ratethedogs.config import settings

        monkeypatch.setattr(settings, "admin_secret", "")

        response = client.get("/api/admin/dogs/pending", headers={"X-Admin-Secret": ""})
        assert response.status_code == 401


class TestModeration:
    """Tests for approving and rejecting dogs."""

    def test_pending_dogs(self, client, make_dog):
        pending = make_dog(status=DOG_STATUS_PENDING, name="Waiting")
        make_dog()

        response = client.get("/api/admin/dogs/pending", headers=ADMIN_HEADERS)

        assert response.status_code == 200
        items = response.json()["data"]["items"]
        assert [i["id"] for i in items] == [pending.id]
        assert items[0]["name"] == "Waiting"
        assert items[0]["image_source"] == "dog_ceo"

    def test_approve(self, client, db, make_dog):
        dog = make_dog(status=DOG_STATUS_PENDING)
        assert client.get(f"/api/dogs/{dog.id}").status_code == 404

        response = client.post(f"/api/admin/dogs/{dog.id}/approve", headers=ADMIN_HEADERS)

        assert response.status_code == 200
        assert response.json()["data"] == {"id": dog.id, "status": "approved"}
        assert client.get(f"/api/dogs/{dog.id}").status_code == 200

        db.expire_all()
        stored = db.get(Dog, dog.id)
        assert stored.moderated_by == "admin"
        assert stored.moderated_at is not None

    def test_reject(self, client, make_dog):
        dog = make_dog()

        response = client.post(f"/api/admin/dogs/{dog.id}/reject", headers=ADMIN_HEADERS)

        assert response.json()["data"] == {"id": dog.id, "status": "rejected"}
        assert client.get(f"/api/dogs/{dog.id}").status_code == 404

    def test_moderate_missing_dog(self, client):
        response = client.post("/api/admin/dogs/999/approve", headers=ADMIN_HEADERS)
        assert response.status_code == 404


class TestBans:
    """Tests for banning anonymous users."""

    def test_banned_user_cannot_write(self, anon_client, anon_id, db, make_dog):
        dog = make_dog()

        response = anon_client.post(f"/api/admin/anon/{anon_id}/ban", headers=ADMIN_HEADERS)
        assert response.status_code == 200
        assert response.json()["data"] == {"anon_id": anon_id, "banned": True}

        for path, body in [
            (f"/api/dogs/{dog.id}/rate", {"value": 4.0}),
            (f"/api/dogs/{dog.id}/skip", None),
            ("/api/dogs/upload-url", {"contentType": "image/jpeg"}),
        ]:
            response = anon_client.post(path, json=body)
            assert response.status_code == 403
            assert response.json()["error"] == {
                "code": "FORBIDDEN",
                "message": "This account has been suspended",
            }

        # Reads still work
        assert anon_client.get("/api/dogs/next").status_code == 200

        db.expire_all()
        assert db.get(AnonymousUser, anon_id).is_banned is True

    def test_invalid_anon_id(self, client):
        response = client.post("/api/admin/anon/not-a-uuid/ban", headers=ADMIN_HEADERS)

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Invalid anonymous ID"
