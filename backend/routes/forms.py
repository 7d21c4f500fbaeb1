"""Fill routes: resolve an item's template, render it, submit records."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from backend.config import settings
from backend.models.form import OperationResponse
from backend.services.design_sessions import DesignSessionStore
from backend.services.forms import get_assembly, get_design_sessions
from formengine.kernel.assembly import FormAssembly
from formengine.kernel.renderer import render
from formengine.kernel.types import FormState, HostContext, OperationResult, RenderOptions

router = APIRouter(tags=["forms"])


def _fill_url(item_id: int) -> str:
    return f"/items/{item_id}/form"


def _fill_context(item_id: int) -> HostContext:
    return HostContext(site_url=settings.SITE_URL, display_mode="edit", item_id=item_id)


def _render_fill(state: FormState, notice: str | None = None, status_code: int | None = None) -> HTMLResponse:
    html = render(
        state,
        RenderOptions(
            title="Fill Form",
            submit_action=_fill_url(state.item_id) if state.item_id is not None else "",
            notice=notice,
        ),
    )
    if status_code is None:
        status_code = status.HTTP_200_OK if state.status == "ready" else status.HTTP_502_BAD_GATEWAY
    return HTMLResponse(content=html, status_code=status_code)


@router.get("/form")
async def dispatch_form(
    mode: str,
    item_id: int | None = None,
    store: DesignSessionStore = Depends(get_design_sessions),
) -> RedirectResponse:
    """
    Host entry point. New/Edit open the fill form for item_id;
    View/Display open a fresh builder.
    """
    try:
        context = HostContext(site_url=settings.SITE_URL, display_mode=mode, item_id=item_id)
        form_mode = context.mode
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    if form_mode == "design":
        session = store.create()
        return RedirectResponse(f"/designs/{session.session_id}", status_code=status.HTTP_303_SEE_OTHER)

    if item_id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="item_id is required to fill a form.")
    return RedirectResponse(_fill_url(item_id), status_code=status.HTTP_303_SEE_OTHER)


@router.get("/items/{item_id}/form", response_class=HTMLResponse)
async def fill_page(item_id: int, assembly: FormAssembly = Depends(get_assembly)) -> HTMLResponse:
    """
    Render the item's form. The template is resolved before anything is
    drawn; a failed lookup renders the reason with a retry action (502).
    """
    state = await assembly.load(_fill_context(item_id))
    return _render_fill(state)


@router.post("/items/{item_id}/form", response_class=HTMLResponse)
async def submit_form(
    item_id: int,
    request: Request,
    assembly: FormAssembly = Depends(get_assembly),
) -> HTMLResponse:
    """Create a record from the posted form and re-render with the outcome."""
    form = await request.form()
    result = await assembly.submit(list(form.multi_items()))

    state = await assembly.load(_fill_context(item_id))
    if result.ok:
        return _render_fill(state, notice="Form submitted successfully", status_code=status.HTTP_201_CREATED)
    return _render_fill(
        state,
        notice=f"Form was not submitted: {result.error}",
        status_code=status.HTTP_502_BAD_GATEWAY,
    )


@router.get("/api/items/{item_id}/form", status_code=200)
async def get_fill_schema(item_id: int, assembly: FormAssembly = Depends(get_assembly)) -> dict[str, Any]:
    """Resolved schema for an item, as JSON."""
    state = await assembly.load(_fill_context(item_id))
    if state.status != "ready":
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=state.reason)
    return {"item_id": item_id, "fields": [f.to_dict() for f in state.fields]}


@router.post("/api/items/{item_id}/form", status_code=201)
async def submit_form_api(
    item_id: int,
    data: dict[str, Any] = Body(...),
    assembly: FormAssembly = Depends(get_assembly),
) -> OperationResponse:
    """JSON variant of submit_form for programmatic hosts."""
    result: OperationResult = await assembly.submit(data)
    if not result.ok:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=result.error)
    return OperationResponse.from_result(result)
