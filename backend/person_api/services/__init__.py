# Services package init
"""
Person API: Services Layer
=============================

What:  Persistence and business rules, independent of HTTP.

Service Inventory:
    - csv_format:   Line codec and the color code table (pure functions)
    - PersonStore:  CSV-backed repository with locked appends

Routes only translate PersonStore results into responses, so the store can
be tested without an HTTP client.
"""
