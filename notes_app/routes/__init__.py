"""
Simple Notes — Routes Package
==============================

Route Inventory:
    - notes.py:  GET  /   (render the notes page)
                 POST /   (submit a note, redirect on success)

Routes stay thin: they read the request, call PageService, and build the
response. Validation, messages and persistence live in services/.
"""
