"""
Catalog Manager for the capture configuration.

Looks up categories, classification groups and document types, and
resolves a document type id from the three names that identify it.
"""

import logging
from typing import List

from connection_management import ConnectionManager
from capture_models import Category, ClassificationGroup, DocumentType
from capture_ops_exceptions import NotFoundFault

logger = logging.getLogger(__name__)


class CatalogManager:
    """Read-only access to the capture configuration catalog."""

    def __init__(self, connection_manager: ConnectionManager):
        self._connection_manager = connection_manager

    def get_categories(self, session_id: str, level: int = 2) -> List[Category]:
        results = self._connection_manager.call("GetCategories", session_id, level=level)
        return [Category.model_validate(r) for r in results]

    def get_classification_groups(self, session_id: str, category_id: str) -> List[ClassificationGroup]:
        results = self._connection_manager.call("GetClassificationGroups", session_id, category_id=category_id)
        return [ClassificationGroup.model_validate(r) for r in results]

    def get_document_types(self, session_id: str, classification_group_id: str) -> List[DocumentType]:
        results = self._connection_manager.call(
            "GetDocumentTypes", session_id, classification_group_id=classification_group_id
        )
        return [DocumentType.model_validate(r) for r in results]

    def find_document_type_id(
        self,
        session_id: str,
        category_name: str,
        group_name: str,
        document_type_name: str,
        level: int = 2
    ) -> str:
        """
        Resolve a document type id by category, classification group and type name.

        Raises:
            NotFoundFault: If any of the three names does not exist
        """
        category = next((c for c in self.get_categories(session_id, level) if c.name == category_name), None)
        if category is None:
            raise NotFoundFault(f"Category '{category_name}' not found", operation="GetCategories")

        group = next(
            (g for g in self.get_classification_groups(session_id, category.id) if g.name == group_name),
            None
        )
        if group is None:
            raise NotFoundFault(
                f"Classification group '{group_name}' not found in category '{category_name}'",
                operation="GetClassificationGroups"
            )

        document_type = next(
            (t for t in self.get_document_types(session_id, group.id) if t.name == document_type_name),
            None
        )
        if document_type is None:
            raise NotFoundFault(
                f"Document type '{document_type_name}' not found in group '{group_name}'",
                operation="GetDocumentTypes"
            )

        logger.debug(f"Resolved document type '{document_type_name}' to '{document_type.id}'")
        return document_type.id
