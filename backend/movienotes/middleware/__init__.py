# Middleware package init
"""
MovieNotes Backend: Middleware Package
=======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request context] → [CORS] → Route Handler

    request_context.py: correlation ID (X-Request-ID) and the access log
    CORS: FastAPI's CORSMiddleware, configured in main.py
"""
