# Services package init
"""
HelloWebAPI Backend — Services Layer
=====================================

What:  Query logic sitting between the routes (HTTP) and the static data.

Service Inventory:
    - ProductService: list, filter by name, and first-match get over the catalog
"""
