"""Integration tests for the fill routes and host dispatch."""

from __future__ import annotations

import pytest

from backend.main import app
from backend.services.forms import get_assembly
from formengine.kernel.assembly import FormAssembly, MemoryStorage

pytestmark = pytest.mark.asyncio(loop_scope="session")


# ── host dispatch ───────────────────────────────────────────────────────────


class TestDispatch:
    """Tests for GET /form?mode=..."""

    @pytest.mark.parametrize("mode", ["view", "display"])
    async def test_design_modes_open_builder(self, async_client, sessions, mode):
        res = await async_client.get("/form", params={"mode": mode})

        assert res.status_code == 303
        assert res.headers["location"].startswith("/designs/")
        assert len(sessions) == 1

    @pytest.mark.parametrize("mode", ["new", "edit"])
    async def test_fill_modes_open_item_form(self, async_client, mode):
        res = await async_client.get("/form", params={"mode": mode, "item_id": 42})

        assert res.status_code == 303
        assert res.headers["location"] == "/items/42/form"

    async def test_fill_without_item(self, async_client):
        res = await async_client.get("/form", params={"mode": "edit"})

        assert res.status_code == 400

    async def test_unknown_mode(self, async_client):
        res = await async_client.get("/form", params={"mode": "print"})

        assert res.status_code == 400
        assert "Unknown display mode" in res.json()["detail"]


# ── fill page ───────────────────────────────────────────────────────────────


class TestFillPage:
    """Tests for GET /items/{id}/form."""

    async def test_renders_resolved_fields(self, async_client):
        """Item 42 → template 7 → one Email input and a submit button."""
        res = await async_client.get("/items/42/form")

        assert res.status_code == 200
        assert '<input type="text" name="Email" placeholder="Email">' in res.text
        assert '<button type="submit">Submit</button>' in res.text
        assert 'action="/items/42/form"' in res.text

    async def test_missing_record(self, async_client):
        """Broken lookup → 502 with the reason and a retry, no submit."""
        res = await async_client.get("/items/99/form")

        assert res.status_code == 502
        assert "Record 99 not found" in res.text
        assert "Retry" in res.text
        assert "Submit</button>" not in res.text

    async def test_record_without_template(self, async_client, storage):
        del storage.items[42]["TemplateId"]

        res = await async_client.get("/items/42/form")

        assert res.status_code == 502
        assert "Record 42 has no TemplateId" in res.text

    async def test_schema_api(self, async_client):
        res = await async_client.get("/api/items/42/form")

        assert res.status_code == 200
        data = res.json()
        assert data["item_id"] == 42
        assert [(f["name"], f["type"]) for f in data["fields"]] == [("Email", "text")]

    async def test_schema_api_failure(self, async_client):
        res = await async_client.get("/api/items/99/form")

        assert res.status_code == 502
        assert res.json()["detail"] == "Record 99 not found"


# ── submit ──────────────────────────────────────────────────────────────────


class TestSubmit:
    """Tests for POST /items/{id}/form and its JSON variant."""

    async def test_submit_creates_record(self, async_client, storage):
        res = await async_client.post("/items/42/form", data={"Email": "a@b.com"})

        assert res.status_code == 201
        assert "Form submitted successfully" in res.text
        assert storage.created == [{"Email": "a@b.com"}]

    async def test_submit_failure(self, async_client, storage):
        class Failing(MemoryStorage):
            async def create(self, data):
                raise ConnectionError("403 Forbidden")

        app.dependency_overrides[get_assembly] = lambda: FormAssembly(Failing(storage.items))

        res = await async_client.post("/items/42/form", data={"Email": "a@b.com"})

        assert res.status_code == 502
        assert "Form was not submitted: Failed to submit record: 403 Forbidden" in res.text
        # the form is still there to try again
        assert 'name="Email"' in res.text

    async def test_submit_api(self, async_client, storage):
        res = await async_client.post("/api/items/42/form", json={"Email": "a@b.com"})

        assert res.status_code == 201
        data = res.json()
        assert data["ok"] is True
        assert data["item"]["Email"] == "a@b.com"
        assert storage.created == [{"Email": "a@b.com"}]


class TestHealth:
    async def test_health(self, async_client):
        res = await async_client.get("/health")

        assert res.status_code == 200
        assert res.json() == {"status": "ok"}
