# Routes package init
"""
Person API: API Routes Package
=================================

Route Inventory:
    - persons.py: GET  /persons               (all persons)
                  GET  /persons/{id}          (one person, 404 if missing)
                  GET  /persons/color/{color} (persons with a color)
                  POST /persons               (append a person, 201)
    - health.py:  GET  /health                (service health check)

Routes stay thin: read the request, call PersonStore, shape the response.
"""
