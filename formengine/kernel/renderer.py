"""
Form Kernel: Renderer

Pure function: (form state, options?) → HTML string
No IO. Deterministic: same input → same output, always.

Two surfaces:
- design (idle): one editable row per field, add / save controls
- fill (loading / ready / error): one input per field, submit control

Fill-mode controls come from per-type mustache templates. Any type without
its own template falls back to the selection control, so an unknown type
is never rejected and never dropped.
"""

from __future__ import annotations

from html import escape as _html_escape

import chevron

from formengine.kernel.types import (
    FieldDefinition,
    FormState,
    RenderOptions,
    join_options,
)

# ---------------------------------------------------------------------------
# Field templates
# ---------------------------------------------------------------------------

# Values are escaped before they reach chevron, hence the triple braces.
TEXT_FIELD_TEMPLATE = (
    '<div class="form-field" data-field-id="{{id}}">'
    '<input type="text" name="{{{name}}}" placeholder="{{{name}}}">'
    "</div>"
)

SELECT_FIELD_TEMPLATE = (
    '<div class="form-field" data-field-id="{{id}}">'
    '<select name="{{{name}}}">'
    '{{#options}}<option value="{{{.}}}">{{{.}}}</option>{{/options}}'
    "</select>"
    "</div>"
)

FIELD_TEMPLATES: dict[str, str] = {
    "text": TEXT_FIELD_TEMPLATE,
    "choice": SELECT_FIELD_TEMPLATE,
}

DEFAULT_FIELD_TEMPLATE = SELECT_FIELD_TEMPLATE

LOADING_PLACEHOLDER = "Loading template..."

BASE_CSS = """
body { font-family: system-ui, sans-serif; margin: 0; }
.form-page { max-width: 640px; margin: 0 auto; padding: 24px; }
.form-field, .form-design-row { margin-bottom: 12px; }
.form-design-row form { display: inline-block; margin-right: 4px; }
.form-notice { padding: 8px; border: 1px solid #ccc; margin-bottom: 12px; }
.form-error { color: #a00; }
.form-loading { color: #888; font-style: italic; }
""".strip()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render(state: FormState, options: RenderOptions | None = None) -> str:
    """Render a complete HTML document for a form state."""
    opts = options or RenderOptions()

    parts: list[str] = []
    parts.append("<!DOCTYPE html>")
    parts.append('<html lang="en">')
    parts.append("<head>")
    parts.append('  <meta charset="utf-8">')
    parts.append(f"  <title>{escape(opts.title)}</title>")
    if opts.include_stylesheet:
        parts.append("  <style>")
        parts.append(BASE_CSS)
        parts.append("  </style>")
    parts.append("</head>")
    parts.append("<body>")
    parts.append(f'  <main class="form-page" data-mode="{state.mode}" data-status="{state.status}">')
    if opts.notice:
        parts.append(f'<div class="form-notice">{escape(opts.notice)}</div>')
    parts.append(render_body(state, opts))
    parts.append("  </main>")
    parts.append("</body>")
    parts.append("</html>")
    return "\n".join(parts)


def render_body(state: FormState, options: RenderOptions | None = None) -> str:
    """Render only the form surface (no document chrome)."""
    opts = options or RenderOptions()

    if state.status == "idle":
        return _render_design(state.fields, opts)
    if state.status == "ready":
        return _render_fill(state.fields, opts)
    if state.status == "error":
        return _render_error(state, opts)
    return _render_loading()


def render_field(field: FieldDefinition) -> str:
    """Render one fill-mode control for a field."""
    template = FIELD_TEMPLATES.get(field.type, DEFAULT_FIELD_TEMPLATE)
    context = {
        "id": field.id,
        "name": escape(field.name),
        "options": [escape(o) for o in field.options],
    }
    return chevron.render(template, context)


# ---------------------------------------------------------------------------
# Fill mode
# ---------------------------------------------------------------------------


def _render_loading() -> str:
    # No submit control while the template is unresolved
    return f'<form class="form-fill"><div class="form-loading">{LOADING_PLACEHOLDER}</div></form>'


def _render_fill(fields: list[FieldDefinition], opts: RenderOptions) -> str:
    action = f' action="{escape(opts.submit_action)}"' if opts.submit_action else ""
    parts = [f'<form class="form-fill" method="post"{action}>']
    for f in fields:
        parts.append(render_field(f))
    parts.append('<button type="submit">Submit</button>')
    parts.append("</form>")
    return "\n".join(parts)


def _render_error(state: FormState, opts: RenderOptions) -> str:
    reason = escape(state.reason or "Unknown error")
    retry = escape(opts.submit_action) if opts.submit_action else ""
    return (
        '<div class="form-error">'
        f"<p>Could not load template: {reason}</p>"
        f'<form method="get" action="{retry}"><button type="submit">Retry</button></form>'
        "</div>"
    )


# ---------------------------------------------------------------------------
# Design mode
# ---------------------------------------------------------------------------


def _render_design(fields: list[FieldDefinition], opts: RenderOptions) -> str:
    base = escape(opts.action_base)
    parts = ['<div class="form-design">']
    parts.append(_add_button(base, "text", "Add Text Field"))
    parts.append(_add_button(base, "choice", "Add Choice Field"))

    parts.append('<div id="fields">')
    last = len(fields) - 1
    for i, f in enumerate(fields):
        parts.append(_render_design_row(f, i, last, base))
    parts.append("</div>")

    parts.append(
        f'<form class="form-save" method="post" action="{base}/template">'
        '<input type="text" name="template_name" placeholder="Template name">'
        '<button type="submit">Save Template</button>'
        "</form>"
    )
    parts.append("</div>")
    return "\n".join(parts)


def _add_button(base: str, field_type: str, label: str) -> str:
    return (
        f'<form method="post" action="{base}/fields">'
        f'<input type="hidden" name="type" value="{field_type}">'
        f'<button type="submit">{label}</button>'
        "</form>"
    )


def _render_design_row(field: FieldDefinition, index: int, last: int, base: str) -> str:
    row_base = f"{base}/fields/{field.id}"
    parts = [f'<div class="form-design-row" data-field-id="{field.id}">']
    parts.append(f'<form method="post" action="{row_base}">')
    parts.append(f'<input type="text" name="name" placeholder="Field Name" value="{escape(field.name)}">')
    if field.type == "choice":
        parts.append(
            '<textarea name="options" placeholder="Options (comma separated)">'
            f"{escape(join_options(field.options))}"
            "</textarea>"
        )
    parts.append('<button type="submit">Update</button>')
    parts.append("</form>")
    if index > 0:
        parts.append(_move_button(row_base, index - 1, "Move Up"))
    if index < last:
        parts.append(_move_button(row_base, index + 1, "Move Down"))
    parts.append(f'<form method="post" action="{row_base}/remove"><button type="submit">Remove</button></form>')
    parts.append("</div>")
    return "".join(parts)


def _move_button(row_base: str, index: int, label: str) -> str:
    return (
        f'<form method="post" action="{row_base}/move">'
        f'<input type="hidden" name="index" value="{index}">'
        f'<button type="submit">{label}</button>'
        "</form>"
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def escape(text: str) -> str:
    """HTML-escape text, quotes included."""
    return _html_escape(str(text), quote=True)
