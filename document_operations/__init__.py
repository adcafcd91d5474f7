"""
Document Operations Module

Creating, copying, moving, splitting, merging, classifying and deleting
capture documents.
"""

from .manager import DocumentManager

__all__ = ['DocumentManager']
