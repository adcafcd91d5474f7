"""Tests for catalog_operations."""

import pytest

from capture_ops_exceptions import NotFoundFault


class TestCatalog:
    def test_walk_catalog(self, client, session_id):
        categories = client.catalog.get_categories(session_id)
        assert [c.name for c in categories] == ["SDK Samples"]

        groups = client.catalog.get_classification_groups(session_id, categories[0].id)
        assert [g.name for g in groups] == ["SDK Samples Group"]

        types = client.catalog.get_document_types(session_id, groups[0].id)
        assert sorted(t.name for t in types) == ["NW Form", "TS Form"]
        assert types[0].field_names == ["CustomerName", "Address", "LineItems"]

    def test_other_level_is_empty(self, client, session_id):
        assert client.catalog.get_categories(session_id, level=1) == []

    def test_find_document_type_id(self, client, session_id):
        type_id = client.catalog.find_document_type_id(session_id, "SDK Samples", "SDK Samples Group", "TS Form")
        category = client.catalog.get_categories(session_id)[0]
        group = client.catalog.get_classification_groups(session_id, category.id)[0]
        names = {t.id: t.name for t in client.catalog.get_document_types(session_id, group.id)}
        assert names[type_id] == "TS Form"

    @pytest.mark.parametrize("category, group, document_type, operation", [
        ("Missing", "SDK Samples Group", "NW Form", "GetCategories"),
        ("SDK Samples", "Missing", "NW Form", "GetClassificationGroups"),
        ("SDK Samples", "SDK Samples Group", "Missing", "GetDocumentTypes"),
    ])
    def test_find_unknown_names(self, client, session_id, category, group, document_type, operation):
        with pytest.raises(NotFoundFault) as exc_info:
            client.catalog.find_document_type_id(session_id, category, group, document_type)
        assert exc_info.value.operation == operation

    def test_unknown_category_id_faults(self, client, session_id):
        with pytest.raises(NotFoundFault):
            client.catalog.get_classification_groups(session_id, "0" * 32)
