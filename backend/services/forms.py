"""Wires the form kernel to the configured list repositories."""

from __future__ import annotations

from backend.config import settings
from backend.repos.list_repo import ListRepo
from backend.services.design_sessions import DesignSessionStore, design_sessions
from formengine.kernel.assembly import FormAssembly
from formengine.kernel.types import HostCallbacks


def build_assembly(callbacks: HostCallbacks | None = None) -> FormAssembly:
    """
    Build a FormAssembly over the configured lists.

    When the record and template lists have the same title, one repository
    backs both hops of template resolution.
    """
    records = ListRepo(
        settings.SITE_URL,
        settings.RECORD_LIST_TITLE,
        token=settings.ACCESS_TOKEN or None,
        timeout=settings.REQUEST_TIMEOUT,
    )
    templates = None
    if settings.TEMPLATE_LIST_TITLE != settings.RECORD_LIST_TITLE:
        templates = ListRepo(
            settings.SITE_URL,
            settings.TEMPLATE_LIST_TITLE,
            token=settings.ACCESS_TOKEN or None,
            timeout=settings.REQUEST_TIMEOUT,
        )
    return FormAssembly(
        records,
        templates,
        callbacks=callbacks,
        template_id_field=settings.TEMPLATE_ID_FIELD,
    )


_assembly: FormAssembly | None = None


def get_assembly() -> FormAssembly:
    """FastAPI dependency: the process-wide FormAssembly."""
    global _assembly
    if _assembly is None:
        _assembly = build_assembly()
    return _assembly


def get_design_sessions() -> DesignSessionStore:
    """FastAPI dependency: the process-wide design session store."""
    return design_sessions
