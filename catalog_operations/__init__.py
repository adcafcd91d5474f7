"""
Catalog Operations Module

Categories, classification groups and document types.
"""

from .manager import CatalogManager

__all__ = ['CatalogManager']
