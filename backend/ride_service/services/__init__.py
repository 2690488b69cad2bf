# Services package init
"""
Ride Service Backend: Services Layer
======================================

Service Inventory:
    - RideService: validation, parsing and error mapping for the ride endpoints
    - RideStore:   insert / find_by_id / paginate over the rides table

Why two classes:
    RideService makes every decision and never talks SQL; RideStore only
    persists and queries. Service tests run against a mocked store, store
    tests run against a real in-memory database.
"""
