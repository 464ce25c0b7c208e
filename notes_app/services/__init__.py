"""
Simple Notes — Services Package
================================

    - note_gateway.py:  NoteGateway, the persistence gateway (schema, insert, list)
    - page_service.py:  PageService, per-request handling and view-model assembly
"""
