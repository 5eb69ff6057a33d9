# Routes package init
"""
NoteAPI Backend — API Routes Package
======================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - notes.py:   POST/GET        /notes
                  GET/PUT/PATCH/DELETE /notes/{id}
    - health.py:  GET  /health    (no authorization required)

Design Principle:
    Routes are THIN: parse inputs, call the NoteStore, pick the status code.
    Authorization is done before routing by the AuthGate interceptor.
"""
