# Middleware package init
"""
Ride Service Backend: Middleware Package
==========================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    Request ID runs first so the logging middleware, and any error logged
    while handling the request, can include the id.
"""
