"""
Domain Models
Validated records shared by the ranking engine and the API.
"""

from .product import Product, as_utc, utc_now

__all__ = ["Product", "as_utc", "utc_now"]
