"""
Blog API Backend - Application Package Initializer
===================================================

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, auth, timestamps
    ├─────────────────────────────────────┤
    │            Schemas (Data)           │  ← Pydantic contracts
    ├─────────────────────────────────────┤
    │          Store (In-Memory)          │  ← Process-local post list
    └─────────────────────────────────────┘

    Handlers depend on the PostStore interface, not the list behind it, so a
    persistent backend can be substituted without touching the routes.
"""

__version__ = "1.0.0"
