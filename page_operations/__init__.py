"""
Page Operations Module

Positional page operations, page images, renditions, text extensions and
page system properties.
"""

from .manager import PageManager

__all__ = ['PageManager']
