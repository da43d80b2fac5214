"""
ShopSearch API
FastAPI service exposing product search and catalog endpoints.
"""
