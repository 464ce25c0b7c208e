"""
Simple Notes — Middleware Package
==================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → Route Handler

    - Request ID runs first so every log line of the request can carry it.
    - Logging captures the final status code and duration on the way out.
"""
