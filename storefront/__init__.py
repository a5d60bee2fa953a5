"""
Storefront Service - catalog, checkout and order management
"""
__version__ = "1.0.0"
