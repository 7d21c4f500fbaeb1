"""
Pytest configuration and fixtures for the form backend tests.

Routes run against in-memory list storage; no test reaches a real list API.
"""

from __future__ import annotations

import os

# Set test environment variables before importing config
os.environ.setdefault("TESTING", "true")
os.environ.setdefault("SITE_URL", "https://example.test/sites/forms")

import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402

from backend.main import app  # noqa: E402
from backend.services.design_sessions import DesignSessionStore  # noqa: E402
from backend.services.forms import get_assembly, get_design_sessions  # noqa: E402
from formengine.kernel.assembly import FormAssembly, MemoryStorage  # noqa: E402


@pytest.fixture
def storage():
    """One list holding template 7 and record 42, which points at it."""
    return MemoryStorage(
        {
            7: {"Id": 7, "Title": "Contact", "fields": [{"name": "Email", "type": "text", "options": []}]},
            42: {"Id": 42, "Title": "Record", "TemplateId": 7},
        }
    )


@pytest.fixture
def assembly(storage):
    return FormAssembly(storage)


@pytest.fixture
def sessions():
    return DesignSessionStore()


@pytest.fixture(autouse=True)
def override_dependencies(assembly, sessions):
    """Point the app at the test assembly and session store."""
    app.dependency_overrides[get_assembly] = lambda: assembly
    app.dependency_overrides[get_design_sessions] = lambda: sessions
    yield
    app.dependency_overrides.clear()


@pytest_asyncio.fixture(loop_scope="session")
async def async_client():
    """Async HTTP client against the ASGI app."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
