# Routes package init
"""
HelloWebAPI Backend — API Routes Package
=========================================

Route Inventory:
    - products.py: the /api product resource (route table in PRODUCT_ROUTES)
    - health.py:   GET /health

Routes stay thin: they pick the data from ProductService and hand it to the
negotiated formatter, or return a fixed response.
"""
