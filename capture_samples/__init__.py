"""
Capture Samples Module

Ready-made workflows that exercise the capture client end to end: building
folder trees, creating and restructuring documents, walking field and
review statuses, and working with page images and renditions.

Every workflow is a plain function taking a CaptureClient and a session id.
Faults raised by the service propagate; workflows that demonstrate a
service constraint run the refused call through CaptureClient.attempt.
"""

from . import folders, documents, pages, fields, validation
from .folders import create_folders, move_folder
from .documents import create_documents, create_documents2, create_document_with_pages, sample_document_type_ids

__all__ = [
    'folders',
    'documents',
    'pages',
    'fields',
    'validation',
    'create_folders',
    'move_folder',
    'create_documents',
    'create_documents2',
    'create_document_with_pages',
    'sample_document_type_ids'
]
