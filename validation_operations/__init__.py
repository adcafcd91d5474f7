"""
Validation Operations Module

Service-side validation of documents and field values.
"""

from .manager import ValidationManager

__all__ = ['ValidationManager']
