"""
NoteAPI Backend — Application Package Initializer
==================================================

What: Marks the `noteapi` directory as a Python package.
Why:  Enables module imports like `from noteapi.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend is a small layered service:

    ┌─────────────────────────────────────┐
    │   Interceptors (AuthGate)           │  ← allow-list check before any handler
    ├─────────────────────────────────────┤
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (NoteStore, Directory)   │  ← in-memory notes, admin allow-list
    ├─────────────────────────────────────┤
    │           Schemas (Data)            │  ← Pydantic API contracts
    └─────────────────────────────────────┘

    Routes never touch module-level state: the NoteStore and AdminDirectory
    are owned by the FastAPI app instance created in `noteapi.main.create_app`.
"""

__version__ = "1.0.0"
