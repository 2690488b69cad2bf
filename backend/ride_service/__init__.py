"""
Ride Service Backend: Package Initializer
==========================================

What: Marks the `ride_service` directory as a Python package.
Who:  Imported by uvicorn (`ride_service.main:app`), pytest, and the console script.

Architecture Note:
    The backend is two layers composed linearly:

    ┌─────────────────────────────────────┐
    │   Routes + RideService (Handler)    │  ← HTTP parsing, validation, error mapping
    ├─────────────────────────────────────┤
    │         RideStore (Persistence)     │  ← insert / find_by_id / paginate
    ├─────────────────────────────────────┤
    │   Database (lazy async SQLAlchemy)  │  ← engine + table, created on first use
    └─────────────────────────────────────┘

    Validation happens before the store is touched; store failures are
    translated into SERVER_ERROR responses at the service boundary.
"""

__version__ = "1.0.0"
