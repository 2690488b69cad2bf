# Routes package init
"""
Ride Service Backend: API Routes Package
==========================================

Route Inventory:
    - rides.py:   POST /rides            (create a ride)
                  GET  /rides?page=N     (list rides, 10 per page)
                  GET  /rides/{id}       (get single ride)
    - health.py:  GET  /health           (service health check)
"""
