"""
Simple Notes — Notes Page Route
================================

What:  The single endpoint: GET / renders the page, POST / submits a note.
How:   Extracts method, form and query, hands them to PageService, then turns
       the outcome into a 303 redirect or a rendered HTML page.
Who:   Browsers (the page's own form posts back to "/").

The form is read from `request.form()` directly: `add_note` is a
presence-only marker and an empty value still counts as present.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from notes_app.rendering import templates
from notes_app.services.note_gateway import NoteGateway, get_note_gateway
from notes_app.services.page_service import page_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])


@router.api_route(
    "/",
    methods=["GET", "POST"],
    response_class=HTMLResponse,
    summary="Notes page",
)
async def notes_page(
    request: Request,
    gateway: NoteGateway = Depends(get_note_gateway),
) -> Response:
    """Render the notes page, or store a submitted note and redirect."""
    form = await request.form() if request.method == "POST" else None

    outcome = await page_service.handle(
        gateway,
        method=request.method,
        form=form,
        query=request.query_params,
    )

    if outcome.is_redirect:
        return RedirectResponse(
            url=outcome.redirect_to,
            status_code=status.HTTP_303_SEE_OTHER,
        )

    app_settings = request.app.state.settings
    return templates.TemplateResponse(
        request,
        "notes.html",
        {
            "view": outcome.view,
            "title": app_settings.app_title,
            "tagline": app_settings.app_tagline,
        },
    )
