"""
Simple Notes — Custom Exception Hierarchy
==========================================

What:  Application-specific exceptions for every failure the page can show.
How:   Each exception carries a user-facing message and an optional context
       dict. The persistence gateway raises the storage errors, the page
       service raises ValidationError, and PageService.handle() converts all
       of them into inline page messages.
Who:   Raised by NoteGateway and PageService; caught by PageService and, as a
       last resort, by the global handlers registered in main.py.

Exception Hierarchy:
    NotesAppError (base)
    ├── StorageUnavailableError  → connection banner, no form, no list
    ├── WriteFailedError         → inline error, list still rendered
    ├── ReadFailedError          → inline error in place of the list
    └── ValidationError          → inline warning, nothing written
"""

from typing import Any, Dict, Optional


class NotesAppError(Exception):
    """
    Base exception for all Simple Notes application errors.

    Attributes:
        message:  User-facing error description (safe to render in the page)
        context:  Additional debug info (logged but NOT rendered)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class StorageUnavailableError(NotesAppError):
    """
    Raised when the note store cannot be opened or initialized.

    When:    The SQLite file cannot be created/opened, or the schema cannot be
             written (missing directory, permission denied, read-only file).
    Effect:  Fatal for the current request only; the process keeps serving.
    """

    def __init__(
        self,
        message: str = "Could not connect to the notes database.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class WriteFailedError(NotesAppError):
    """
    Raised when inserting a note fails after the store was available.

    When:    Constraint violation, I/O error, database locked.
    Effect:  Recoverable; the user sees an inline error and can resubmit.
    """

    def __init__(
        self,
        message: str = "A database error occurred while saving the note.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ReadFailedError(NotesAppError):
    """
    Raised when listing notes fails after the store was available.

    Effect:  Recoverable; the list is replaced by an inline error and the form
             stays usable.
    """

    def __init__(
        self,
        message: str = "An error occurred while fetching the notes.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ValidationError(NotesAppError):
    """
    Raised when submitted input fails validation.

    When:    The note content is empty after trimming surrounding whitespace.
    Effect:  User-caused; inline warning, no write attempted, no redirect.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field
