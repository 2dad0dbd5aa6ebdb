"""
Sample Data Module
"""
from .generators import CatalogGenerator, OrderGenerator, catalog_index

__all__ = ["CatalogGenerator", "OrderGenerator", "catalog_index"]
