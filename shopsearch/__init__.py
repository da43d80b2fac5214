"""
ShopSearch
Query understanding and multi-factor ranking for product catalogs.
"""

__version__ = "0.1.0"
