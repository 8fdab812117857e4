"""
Person API: Application Package Initializer
=============================================

What: Marks the `person_api` directory as a Python package.
Who:  Imported by uvicorn (`person_api.main:app`), pytest, and the services.

Architecture Note:
    The backend is layered the same way top to bottom:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (PersonStore, codec)   │  ← parsing, locking, appends
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← dataclasses + Pydantic
    ├─────────────────────────────────────┤
    │        CSV file (Persistence)       │  ← one record per line
    └─────────────────────────────────────┘

    Routes translate store results into status codes; the store never
    knows it is behind HTTP.
"""

__version__ = "1.0.0"
