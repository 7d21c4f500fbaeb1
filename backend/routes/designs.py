"""Design routes: build a schema field by field, then save it as a template."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from backend.models.form import DesignResponse, FieldResponse, OperationResponse, SaveTemplateRequest
from backend.services.design_sessions import DesignSession, DesignSessionStore
from backend.services.forms import get_assembly, get_design_sessions
from formengine.kernel.assembly import FormAssembly
from formengine.kernel.renderer import render
from formengine.kernel.types import FormError, FormState, OperationResult, RenderOptions, ValidationError

router = APIRouter(tags=["designs"])


def _design_url(session_id: str) -> str:
    return f"/designs/{session_id}"


def _get_session(store: DesignSessionStore, session_id: str) -> DesignSession:
    session = store.get(session_id)
    if session is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Design session not found.")
    return session


def _back_to_design(session_id: str) -> RedirectResponse:
    return RedirectResponse(_design_url(session_id), status_code=status.HTTP_303_SEE_OTHER)


def _render_design(session: DesignSession, notice: str | None = None, status_code: int = 200) -> HTMLResponse:
    html = render(
        FormState.idle(session.builder.fields),
        RenderOptions(title="Design Form", action_base=_design_url(session.session_id), notice=notice),
    )
    return HTMLResponse(content=html, status_code=status_code)


def _save_status(result: OperationResult) -> int:
    if result.ok:
        return status.HTTP_201_CREATED
    if result.error == "cancelled":
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_502_BAD_GATEWAY


@router.post("/designs", status_code=303)
async def create_design(store: DesignSessionStore = Depends(get_design_sessions)) -> RedirectResponse:
    """Open a new, empty design session."""
    session = store.create()
    return _back_to_design(session.session_id)


@router.get("/designs/{session_id}", response_class=HTMLResponse)
async def design_page(
    session_id: str,
    store: DesignSessionStore = Depends(get_design_sessions),
) -> HTMLResponse:
    """Serve the builder for a design session."""
    return _render_design(_get_session(store, session_id))


@router.get("/api/designs/{session_id}", status_code=200)
async def get_design(
    session_id: str,
    store: DesignSessionStore = Depends(get_design_sessions),
) -> DesignResponse:
    """Current schema of a design session, in order."""
    session = _get_session(store, session_id)
    return DesignResponse(
        session_id=session.session_id,
        fields=[FieldResponse.from_field(f) for f in session.builder.fields],
        created_at=session.created_at,
        updated_at=session.updated_at,
    )


@router.post("/designs/{session_id}/fields", status_code=303)
async def add_field(
    session_id: str,
    field_type: Annotated[str, Form(alias="type")] = "text",
    store: DesignSessionStore = Depends(get_design_sessions),
) -> RedirectResponse:
    """Append a field of the posted type."""
    session = _get_session(store, session_id)
    try:
        session.builder.add_field(field_type)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return _back_to_design(session_id)


@router.post("/designs/{session_id}/fields/{field_id}", status_code=303)
async def update_field(
    session_id: str,
    field_id: int,
    request: Request,
    store: DesignSessionStore = Depends(get_design_sessions),
) -> RedirectResponse:
    """
    Update a field's name and/or raw comma-separated options.
    Only the posted properties change; a posted empty value clears.
    """
    session = _get_session(store, session_id)
    form = await request.form()
    try:
        for prop in ("name", "options"):
            value = form.get(prop)
            if isinstance(value, str):
                session.builder.update_field(field_id, prop, value)
    except FormError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return _back_to_design(session_id)


@router.post("/designs/{session_id}/fields/{field_id}/remove", status_code=303)
async def remove_field(
    session_id: str,
    field_id: int,
    store: DesignSessionStore = Depends(get_design_sessions),
) -> RedirectResponse:
    session = _get_session(store, session_id)
    session.builder.remove_field(field_id)
    return _back_to_design(session_id)


@router.post("/designs/{session_id}/fields/{field_id}/move", status_code=303)
async def move_field(
    session_id: str,
    field_id: int,
    index: Annotated[int, Form()],
    store: DesignSessionStore = Depends(get_design_sessions),
) -> RedirectResponse:
    session = _get_session(store, session_id)
    session.builder.move_field(field_id, index)
    return _back_to_design(session_id)


@router.post("/designs/{session_id}/template", response_class=HTMLResponse)
async def save_template(
    session_id: str,
    template_name: Annotated[str, Form()] = "",
    store: DesignSessionStore = Depends(get_design_sessions),
    assembly: FormAssembly = Depends(get_assembly),
) -> HTMLResponse:
    """
    Save the session's schema as a template.

    A blank name cancels (400, nothing written). A storage failure is
    reported on the page with 502; the design stays open either way.
    """
    session = _get_session(store, session_id)
    result = await assembly.save_template(session.builder.fields, template_name)

    if result.ok:
        notice = "Template saved successfully"
    elif result.error == "cancelled":
        notice = "Template name is required"
    else:
        notice = f"Template was not saved: {result.error}"
    return _render_design(session, notice=notice, status_code=_save_status(result))


@router.post("/api/designs/{session_id}/template")
async def save_template_api(
    session_id: str,
    req: SaveTemplateRequest,
    store: DesignSessionStore = Depends(get_design_sessions),
    assembly: FormAssembly = Depends(get_assembly),
) -> OperationResponse:
    """JSON variant of save_template for programmatic hosts."""
    session = _get_session(store, session_id)
    result = await assembly.save_template(session.builder.fields, req.name)
    if not result.ok:
        raise HTTPException(status_code=_save_status(result), detail=result.error)
    return OperationResponse.from_result(result)
