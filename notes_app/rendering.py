"""
Simple Notes — Template Rendering
==================================

What:  The Jinja2 environment used to render the notes page.
How:   Starlette's Jinja2Templates loads `notes_app/templates/`; `.html`
       templates are autoescaped, so every user-supplied string is escaped
       in exactly one place.
Who:   Used by routes/notes.py and by the fallback error handlers in main.py.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

TIMESTAMP_FORMAT = "%d/%m/%Y at %H:%M:%S"


def format_timestamp(value: Optional[datetime]) -> str:
    """Format a note timestamp for display (UTC, as stored)."""
    if value is None:
        return ""
    return value.strftime(TIMESTAMP_FORMAT)


templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["timestamp"] = format_timestamp
templates.env.globals["current_year"] = lambda: datetime.now().year
