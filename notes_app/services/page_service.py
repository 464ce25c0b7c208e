"""
Simple Notes — Page Service (Request Handling Logic)
=====================================================

What:  Maps one HTTP request on the notes page to one outcome: a redirect or
       a page view-model.
How:   Drives the NoteGateway it is given; validates and trims submissions;
       turns every application error into a structured PageMessage.
Who:   Called by the route in routes/notes.py, which only extracts the
       request data and turns the outcome into a response.

Request State Machine:
    ┌──────┐  StorageUnavailable   ┌───────────────────┐
    │ Init │──────────────────────▶│ STORE_UNAVAILABLE │  banner only
    └──┬───┘                       └───────────────────┘
       │ POST + add_note
       ├────────────▶ blank content ─────▶ VALIDATION_FAILED   (warning + list)
       │              insert fails ──────▶ WRITE_ERROR         (error + list)
       │              insert ok ─────────▶ REDIRECT_AFTER_WRITE (303, no body)
       │ otherwise
       └────────────▶ DISPLAY   (success banner if ?status=success_add; list or
                                 fetch error)

Submit-once contract:
    A successful write is always answered with a redirect to a GET URL that
    carries the success marker, never with a rendered page, so reloading the
    result page cannot resubmit the form.
"""

import logging
from typing import Any, Mapping, Optional
from urllib.parse import urlencode

from notes_app.exceptions import (
    ReadFailedError,
    StorageUnavailableError,
    ValidationError,
    WriteFailedError,
)
from notes_app.schemas.note import (
    MessageKind,
    Outcome,
    PageMessage,
    PageOutcome,
    PageView,
)
from notes_app.services.note_gateway import NoteGateway

logger = logging.getLogger(__name__)

# ── Form & Query Contract ─────────────────────────────────────────────────
CONTENT_FIELD = "note_content"
SUBMIT_MARKER = "add_note"
STATUS_PARAM = "status"
STATUS_SUCCESS_ADD = "success_add"
PAGE_PATH = "/"

# ── User-facing Messages ──────────────────────────────────────────────────
MSG_ADDED = "Note added successfully!"
MSG_EMPTY = "The note content cannot be empty."


class PageService:
    """
    Request handler for the single notes page.

    Stateless: everything it needs arrives as arguments, so one instance
    serves all requests.
    """

    async def handle(
        self,
        gateway: NoteGateway,
        method: str,
        form: Optional[Mapping[str, Any]] = None,
        query: Optional[Mapping[str, Any]] = None,
    ) -> PageOutcome:
        """
        Handle one request end to end.

        Args:
            gateway: Persistence gateway for this application
            method:  HTTP method of the request
            form:    Parsed form fields (POST only)
            query:   Query string parameters

        Returns:
            PageOutcome with either `redirect_to` or `view` set.
        """
        form = form or {}
        query = query or {}

        # ── Init: store must be usable before anything else ───────────────
        try:
            await gateway.ensure_schema()
        except StorageUnavailableError as e:
            logger.error("Rendering without store: %s | Context: %s", e.message, e.context)
            return PageOutcome(
                outcome=Outcome.STORE_UNAVAILABLE,
                view=PageView(connection_error=e.message, show_form=False),
            )

        outcome = Outcome.DISPLAY
        message: Optional[PageMessage] = None

        if method.upper() == "POST" and SUBMIT_MARKER in form:
            try:
                await self.submit_note(gateway, form.get(CONTENT_FIELD))
            except ValidationError as e:
                outcome = Outcome.VALIDATION_FAILED
                message = PageMessage(kind=MessageKind.WARNING, detail=e.message)
            except WriteFailedError as e:
                outcome = Outcome.WRITE_ERROR
                message = PageMessage(kind=MessageKind.ERROR, detail=e.message)
            else:
                return PageOutcome(
                    outcome=Outcome.REDIRECT_AFTER_WRITE,
                    redirect_to=self.success_url(),
                )
        elif query.get(STATUS_PARAM) == STATUS_SUCCESS_ADD:
            message = PageMessage(kind=MessageKind.SUCCESS, detail=MSG_ADDED)

        view = await self.build_view(gateway, message)
        return PageOutcome(outcome=outcome, view=view)

    async def submit_note(self, gateway: NoteGateway, raw_content: Any) -> int:
        """
        Trim and validate submitted content, then store it.

        Raises:
            ValidationError:  Content is missing or blank after trimming.
            WriteFailedError: Propagated from the gateway.
        """
        content = raw_content.strip() if isinstance(raw_content, str) else ""
        if not content:
            logger.info("Rejected blank note submission")
            raise ValidationError(message=MSG_EMPTY, field=CONTENT_FIELD)
        return await gateway.insert_note(content)

    async def build_view(
        self,
        gateway: NoteGateway,
        message: Optional[PageMessage] = None,
    ) -> PageView:
        """Assemble the view-model: the ordered list, or a fetch error in its place."""
        try:
            notes = await gateway.list_notes()
        except ReadFailedError as e:
            return PageView(
                message=message,
                list_error=PageMessage(kind=MessageKind.ERROR, detail=e.message),
            )
        return PageView(notes=notes, message=message)

    @staticmethod
    def success_url() -> str:
        """Display URL carrying the one-time success marker."""
        return f"{PAGE_PATH}?{urlencode({STATUS_PARAM: STATUS_SUCCESS_ADD})}"


# ── Singleton Instance ────────────────────────────────────────────────────
page_service = PageService()
