"""
Simple Notes — Pydantic View Models
====================================

What:  Pydantic models passed from the request handler to the template.
How:   PageService builds a PageView (pure data); the Jinja2 template turns it
       into HTML and performs all escaping. Messages are structured
       (kind + detail) so the template alone decides how each kind looks.
Who:   Produced by NoteGateway (NoteItem) and PageService (everything else);
       consumed by routes/notes.py and templates/notes.html.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class NoteItem(BaseModel):
    """
    What:  Read-only representation of a stored note.
    Who:   Returned by NoteGateway.list_notes(), newest first.
    """
    id: int = Field(description="Store-assigned note identifier")
    content: str = Field(description="Note text, exactly as stored")
    created_at: datetime = Field(description="Insertion time assigned by the store (UTC)")

    model_config = {"from_attributes": True}


class MessageKind(str, Enum):
    """Severity of an inline page message."""
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class PageMessage(BaseModel):
    """An inline message shown on the page: what kind it is and what to say."""
    kind: MessageKind
    detail: str


class PageView(BaseModel):
    """
    What:  Everything the page template needs to render one response.

    Fields:
        connection_error: Set when the store could not be opened; the page
                          then shows only this banner (no form, no list).
        notes:            Notes ordered newest first.
        message:          Result of this request (added, blank note, write error).
        show_form:        Whether the add-note form is rendered.
        list_error:       Fetch failure shown in place of the list.
    """
    connection_error: Optional[str] = None
    notes: List[NoteItem] = Field(default_factory=list)
    message: Optional[PageMessage] = None
    show_form: bool = True
    list_error: Optional[PageMessage] = None

    @property
    def just_added(self) -> bool:
        """True when this page follows a successful submission redirect."""
        return self.message is not None and self.message.kind == MessageKind.SUCCESS


class Outcome(str, Enum):
    """Terminal outcome of handling one request."""
    STORE_UNAVAILABLE = "store_unavailable"
    VALIDATION_FAILED = "validation_failed"
    WRITE_ERROR = "write_error"
    REDIRECT_AFTER_WRITE = "redirect_after_write"
    DISPLAY = "display"


class PageOutcome(BaseModel):
    """
    What:  Result of PageService.handle().

    Exactly one of `redirect_to` (REDIRECT_AFTER_WRITE) or `view` (every other
    outcome) is set.
    """
    outcome: Outcome
    redirect_to: Optional[str] = None
    view: Optional[PageView] = None

    @property
    def is_redirect(self) -> bool:
        return self.redirect_to is not None
