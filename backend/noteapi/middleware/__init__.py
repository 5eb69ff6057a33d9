# Middleware package init
"""
NoteAPI Backend — Middleware Package
======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [CORS] → [Request ID] → [Logging] → [Interceptors] → Route Handler

    1. CORS first: preflight requests are answered without credentials
    2. Request ID: correlation ID for logging and tracing
    3. Logging: sees the final status, including AuthGate rejections
    4. Interceptors: AuthGate for /notes; may end the request with 401/403/500
"""
