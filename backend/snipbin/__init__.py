"""
SnipBin Backend: Application Package
======================================

Layered like this:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← keys, dispatch, orchestration
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Snippet Stores / Database         │  ← SQL or in-memory persistence
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
