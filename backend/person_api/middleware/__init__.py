# Middleware package init
"""
Person API: Middleware Package
=================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [CORS] → Route Handler

    Per-request access lines come from uvicorn's access log; the request id
    reaches application log lines through RequestIDLogFilter.
"""
