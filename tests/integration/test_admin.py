"""Integration tests for the operator dashboard API."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import delete, func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InternalServerError
from app.core.security import generate_secret_key
from app.models import Form, Message, Website
from app.schemas.website import WebsiteCreate
from app.services import website_service
from app.services.website_service import WebsiteService


pytestmark = pytest.mark.integration


async def _count(db: AsyncSession, model) -> int:
    result = await db.execute(select(func.count()).select_from(model))
    return result.scalar_one()


class TestWebsites:

    async def test_register_issues_credentials(self, admin_client: AsyncClient):
        response = await admin_client.post(
            "/admin/websites", json={"name": "Acme", "domain": "acme.com"}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Acme"
        assert data["domain"] == "acme.com"
        assert len(data["uuid"]) == 36
        assert len(data["app_key"]) == 16
        assert len(data["secret_key"]) == 32
        int(data["app_key"], 16)
        int(data["secret_key"], 16)

    async def test_credentials_are_unique(self, admin_client: AsyncClient):
        first = (
            await admin_client.post(
                "/admin/websites", json={"name": "A", "domain": "a.com"}
            )
        ).json()
        second = (
            await admin_client.post(
                "/admin/websites", json={"name": "B", "domain": "b.com"}
            )
        ).json()

        assert first["uuid"] != second["uuid"]
        assert first["secret_key"] != second["secret_key"]

    async def test_duplicate_domain_is_409(
        self, admin_client: AsyncClient, website: Website
    ):
        response = await admin_client.post(
            "/admin/websites", json={"name": "Copycat", "domain": "acme.com"}
        )

        assert response.status_code == 409
        assert response.json() == {"message": "Domain already exists"}

    async def test_colliding_secret_key_is_reissued(
        self, db: AsyncSession, website: Website, monkeypatch: pytest.MonkeyPatch
    ):
        taken = website.secret_key
        issued = iter([taken])
        monkeypatch.setattr(
            website_service,
            "generate_secret_key",
            lambda: next(issued, None) or generate_secret_key(),
        )

        created = await WebsiteService.create_website(
            db, WebsiteCreate(name="Initech", domain="initech.com")
        )
        await db.commit()

        assert created.domain == "initech.com"
        assert created.secret_key != taken
        assert await _count(db, Website) == 2

    async def test_keys_that_keep_colliding_are_500(
        self, db: AsyncSession, website: Website, monkeypatch: pytest.MonkeyPatch
    ):
        taken = website.secret_key
        monkeypatch.setattr(website_service, "generate_secret_key", lambda: taken)

        with pytest.raises(InternalServerError):
            await WebsiteService.create_website(
                db, WebsiteCreate(name="Initech", domain="initech.com")
            )

        assert await _count(db, Website) == 1

    async def test_failed_commit_is_500_and_stores_nothing(
        self,
        app,
        db: AsyncSession,
        operator_headers: dict[str, str],
        monkeypatch: pytest.MonkeyPatch,
    ):
        async def failing_commit(session):
            raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(AsyncSession, "commit", failing_commit)

        async with AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://test",
            headers=operator_headers,
        ) as client:
            response = await client.post(
                "/admin/websites", json={"name": "Acme", "domain": "acme.com"}
            )

        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error"}
        assert await _count(db, Website) == 0

    async def test_missing_fields_are_422(self, admin_client: AsyncClient):
        response = await admin_client.post("/admin/websites", json={"name": "Acme"})

        assert response.status_code == 422
        assert response.json()["message"] == "Request validation failed"

    async def test_list_and_get(self, admin_client: AsyncClient, website: Website):
        listing = await admin_client.get("/admin/websites")
        single = await admin_client.get(f"/admin/websites/{website.uuid}")

        assert listing.status_code == 200
        assert [w["uuid"] for w in listing.json()] == [website.uuid]
        assert single.status_code == 200
        assert single.json()["domain"] == "acme.com"

    async def test_get_unknown_is_404(self, admin_client: AsyncClient):
        response = await admin_client.get("/admin/websites/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"message": "Website not found"}

    async def test_rename_keeps_credentials(
        self, admin_client: AsyncClient, website: Website
    ):
        response = await admin_client.patch(
            f"/admin/websites/{website.uuid}", json={"name": "Acme Inc"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Acme Inc"
        assert data["uuid"] == website.uuid
        assert data["secret_key"] == website.secret_key

    async def test_delete_cascades_to_forms_and_messages(
        self,
        admin_client: AsyncClient,
        client: AsyncClient,
        db: AsyncSession,
        website: Website,
        other_website: Website,
        form: Form,
        submit_headers: dict[str, str],
    ):
        second = await admin_client.post(
            "/admin/forms",
            json={"website_id": website.id, "title": "Newsletter", "fields": {}},
        )
        kept = await admin_client.post(
            "/admin/forms",
            json={"website_id": other_website.id, "title": "Keep me", "fields": {}},
        )
        for form_id in (form.form_id, second.json()["form_id"]):
            response = await client.post(
                f"/api/{website.uuid}/{form_id}",
                json={"email": "a@x.com"},
                headers=submit_headers,
            )
            assert response.status_code == 201

        response = await admin_client.delete(f"/admin/websites/{website.uuid}")

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert await _count(db, Website) == 1
        assert await _count(db, Message) == 0
        remaining = (await db.execute(select(Form.form_id))).scalars().all()
        assert remaining == [kept.json()["form_id"]]

    async def test_delete_unknown_is_404(self, admin_client: AsyncClient):
        response = await admin_client.delete("/admin/websites/does-not-exist")

        assert response.status_code == 404

    async def test_foreign_keys_cascade_from_website(
        self,
        client: AsyncClient,
        db: AsyncSession,
        website: Website,
        form: Form,
        submit_headers: dict[str, str],
    ):
        response = await client.post(
            f"/api/{website.uuid}/{form.form_id}",
            json={"email": "a@x.com"},
            headers=submit_headers,
        )
        assert response.status_code == 201

        await db.execute(delete(Website).where(Website.id == website.id))
        await db.commit()

        assert await _count(db, Form) == 0
        assert await _count(db, Message) == 0


class TestForms:

    async def test_create_and_list(self, admin_client: AsyncClient, website: Website):
        response = await admin_client.post(
            "/admin/forms",
            json={
                "website_id": website.id,
                "title": "Contact",
                "fields": {"name": "string", "email": "string"},
            },
        )

        assert response.status_code == 201
        created = response.json()
        assert created["form_schema"] == {"name": "string", "email": "string"}
        assert created["website_id"] == website.id

        listing = await admin_client.get(f"/admin/websites/{website.uuid}/forms")
        assert [f["form_id"] for f in listing.json()] == [created["form_id"]]

    async def test_create_for_unknown_website_is_404(self, admin_client: AsyncClient):
        response = await admin_client.post(
            "/admin/forms", json={"website_id": 999, "title": "Contact", "fields": {}}
        )

        assert response.status_code == 404

    async def test_fields_must_be_an_object(
        self, admin_client: AsyncClient, website: Website
    ):
        response = await admin_client.post(
            "/admin/forms",
            json={"website_id": website.id, "title": "Contact", "fields": ["name"]},
        )

        assert response.status_code == 422

    async def test_rename(self, admin_client: AsyncClient, form: Form):
        response = await admin_client.patch(
            f"/admin/forms/{form.id}", json={"title": "Get in touch"}
        )

        assert response.status_code == 200
        assert response.json()["title"] == "Get in touch"
        assert response.json()["form_id"] == form.form_id

    async def test_delete_removes_messages(
        self,
        admin_client: AsyncClient,
        client: AsyncClient,
        db: AsyncSession,
        website: Website,
        form: Form,
        submit_headers: dict[str, str],
    ):
        await client.post(
            f"/api/{website.uuid}/{form.form_id}",
            json={"email": "a@x.com"},
            headers=submit_headers,
        )

        response = await admin_client.delete(f"/admin/forms/{form.id}")

        assert response.status_code == 200
        assert await _count(db, Form) == 0
        assert await _count(db, Message) == 0
        assert await _count(db, Website) == 1

    async def test_rename_unknown_is_404(self, admin_client: AsyncClient):
        response = await admin_client.patch("/admin/forms/999", json={"title": "X"})

        assert response.status_code == 404


class TestMessages:

    async def test_list_for_form_is_newest_first(
        self,
        admin_client: AsyncClient,
        client: AsyncClient,
        website: Website,
        form: Form,
        submit_headers: dict[str, str],
    ):
        for n in range(3):
            await client.post(
                f"/api/{website.uuid}/{form.form_id}",
                json={"n": n},
                headers=submit_headers,
            )

        response = await admin_client.get(f"/admin/messages/form/{form.form_id}")

        assert response.status_code == 200
        assert [m["form_data"]["n"] for m in response.json()] == [2, 1, 0]

    async def test_list_for_unknown_form_is_404(self, admin_client: AsyncClient):
        response = await admin_client.get("/admin/messages/form/nope")

        assert response.status_code == 404

    async def test_list_all_joins_form_and_website(
        self,
        admin_client: AsyncClient,
        client: AsyncClient,
        website: Website,
        form: Form,
        submit_headers: dict[str, str],
    ):
        await client.post(
            f"/api/{website.uuid}/{form.form_id}",
            json={"email": "a@x.com"},
            headers=submit_headers,
        )

        response = await admin_client.get("/admin/messages")

        assert response.status_code == 200
        [message] = response.json()
        assert message["form"]["title"] == "Contact"
        assert message["form"]["website"]["uuid"] == website.uuid
        assert "secret_key" not in message["form"]["website"]


class TestEndToEnd:

    async def test_register_define_submit_list(
        self, admin_client: AsyncClient, client: AsyncClient
    ):
        website = (
            await admin_client.post(
                "/admin/websites", json={"name": "Acme", "domain": "acme.com"}
            )
        ).json()
        form = (
            await admin_client.post(
                "/admin/forms",
                json={
                    "website_id": website["id"],
                    "title": "Contact",
                    "fields": {"name": "string", "email": "string"},
                },
            )
        ).json()

        submitted = await client.post(
            f"/api/{website['uuid']}/{form['form_id']}",
            json={"name": "A", "email": "a@x.com"},
            headers={
                "Authorization": f"Bearer {website['secret_key']}",
                "Origin": "https://acme.com",
            },
        )
        listing = await admin_client.get(f"/admin/messages/form/{form['form_id']}")

        assert submitted.status_code == 201
        assert listing.status_code == 200
        assert len(listing.json()) == 1
        assert listing.json()[0]["form_data"] == {"name": "A", "email": "a@x.com"}
