"""
Folder Operations Module

Creating, reading, moving, splitting and deleting capture folders.
"""

from .manager import FolderManager

__all__ = ['FolderManager']
