"""
Simple Notes — Application Package Initializer
===============================================

What: Marks the `notes_app` directory as a Python package.
Who:  Used by uvicorn (`notes_app.main:app`), pytest, and the package itself.

Architecture Note:
    One HTML page backed by a single SQLite table, split into layers:

    ┌─────────────────────────────────────┐
    │        Routes (HTTP Layer)          │  ← form/query extraction, redirect vs render
    ├─────────────────────────────────────┤
    │   PageService (Request Handling)    │  ← validation, messages, view-model
    ├─────────────────────────────────────┤
    │  NoteGateway (Persistence Gateway)  │  ← schema, insert, ordered select
    ├─────────────────────────────────────┤
    │   Models, Schemas & Templates       │  ← SQLAlchemy ORM, Pydantic, Jinja2
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
