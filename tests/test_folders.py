"""Tests for folder_operations: creation order, moves, splits, deletes and review status."""

import pytest

from capture_models import ReviewStatus
from capture_ops_exceptions import InvalidOperationFault, NotFoundFault


class TestCreateFolder:
    """Sibling positions and folder types on creation."""

    def test_sample_tree_sibling_order(self, client, session_id, folders):
        root = client.folders.get_folder(session_id, folders.root_folder_id)
        assert [f.id for f in root.folders] == [
            folders.child_folder1_id,
            folders.child_folder2_id,
            folders.child_folder3_id,
        ]
        assert root.parent_id is None
        assert root.folder_type.name == "SDKSample"

    def test_minus_one_appends(self, client, session_id, folders):
        new_id = client.create_folder(session_id, parent_id=folders.root_folder_id, insert_index=-1)
        root = client.folders.get_folder(session_id, folders.root_folder_id)
        assert root.folders[-1].id == new_id

    def test_index_zero_inserts_first(self, client, session_id, folders):
        new_id = client.create_folder(session_id, parent_id=folders.root_folder_id, insert_index=0)
        root = client.folders.get_folder(session_id, folders.root_folder_id)
        assert root.folder_index(new_id) == 0
        assert root.folder_index(folders.child_folder1_id) == 1

    def test_initial_valid_field(self, client, session_id, folders):
        assert client.folders.get_folder(session_id, folders.child_folder1_id).valid is True
        assert client.folders.get_folder(session_id, folders.child_folder2_id).valid is False

    def test_unknown_parent_faults(self, client, session_id):
        with pytest.raises(NotFoundFault):
            client.create_folder(session_id, parent_id="0" * 32)

    def test_unknown_folder_type_faults(self, client, session_id):
        with pytest.raises(NotFoundFault):
            client.create_folder(session_id, folder_type="NoSuchType")

    def test_online_learning_folder(self, client, session_id):
        folder_id = client.folders.create_online_learning_folder(session_id, 5)
        folder = client.folders.get_folder(session_id, folder_id)
        assert folder.online_learning is True
        assert folder.parent_id is None

    def test_online_learning_rejects_zero_samples_locally(self, client, session_id, backend):
        calls_before = list(backend.calls)
        with pytest.raises(ValueError):
            client.folders.create_online_learning_folder(session_id, 0)
        assert backend.calls == calls_before


class TestMoveFolder:
    """Folders move freely among parents on the same tree level only."""

    def test_move_to_other_level_faults(self, client, session_id, folders):
        with pytest.raises(InvalidOperationFault) as exc_info:
            client.move_folder(session_id, folders.child_folder1_id, folders.child_folder2_id, 0)
        assert exc_info.value.operation == "MoveFolder"

        root = client.folders.get_folder(session_id, folders.root_folder_id)
        assert root.folder_index(folders.child_folder1_id) == 0

    def test_move_between_parents_on_same_level(self, client, session_id, folders):
        client.move_folder(session_id, folders.grand_child_folder1_id, folders.child_folder3_id, 0)

        child2 = client.folders.get_folder(session_id, folders.child_folder2_id)
        child3 = client.folders.get_folder(session_id, folders.child_folder3_id)
        assert child2.folders == []
        assert [f.id for f in child3.folders] == [folders.grand_child_folder1_id]
        assert client.folders.get_folder(session_id, folders.grand_child_folder1_id).parent_id == folders.child_folder3_id

    def test_reorder_and_restore(self, client, session_id, folders):
        original = [f.id for f in client.folders.get_folder(session_id, folders.root_folder_id).folders]

        client.move_folder(session_id, folders.child_folder3_id, folders.root_folder_id, 0)
        moved = client.folders.get_folder(session_id, folders.root_folder_id)
        assert moved.folder_index(folders.child_folder3_id) == 0

        client.move_folder(session_id, folders.child_folder3_id, folders.root_folder_id, 2)
        restored = [f.id for f in client.folders.get_folder(session_id, folders.root_folder_id).folders]
        assert restored == original


class TestSplitFolder:
    """split_folder moves trailing documents into a new next sibling."""

    def test_split_moves_trailing_documents(self, client, session_id, folders, make_document):
        documents = [make_document(page_count=1, parent_id=folders.child_folder3_id) for _ in range(3)]

        new_folder_id = client.split_folder(session_id, folders.child_folder3_id, 1)

        original = client.folders.get_folder(session_id, folders.child_folder3_id)
        new_folder = client.folders.get_folder(session_id, new_folder_id)
        assert [d.id for d in original.documents] == documents[:1]
        assert [d.id for d in new_folder.documents] == documents[1:]
        assert client.documents.get_document(session_id, documents[2]).parent_id == new_folder_id

        root = client.folders.get_folder(session_id, folders.root_folder_id)
        assert root.folder_index(new_folder_id) == root.folder_index(folders.child_folder3_id) + 1

    @pytest.mark.parametrize("index", [0, 2])
    def test_split_at_edges_faults(self, client, session_id, folders, make_document, index):
        for _ in range(2):
            make_document(page_count=1, parent_id=folders.child_folder3_id)
        with pytest.raises(InvalidOperationFault):
            client.split_folder(session_id, folders.child_folder3_id, index)


class TestDeleteFolder:
    """Deleting a folder removes its subtree."""

    def test_delete_cascades(self, client, session_id, folders, make_document):
        document_id = make_document(page_count=1, parent_id=folders.grand_child_folder1_id)

        client.delete_folder(session_id, folders.child_folder2_id)

        root = client.folders.get_folder(session_id, folders.root_folder_id)
        assert root.folder_index(folders.child_folder2_id) == -1
        with pytest.raises(NotFoundFault):
            client.folders.get_folder(session_id, folders.grand_child_folder1_id)
        with pytest.raises(NotFoundFault):
            client.documents.get_document(session_id, document_id)

    def test_delete_missing_folder_faults(self, client, session_id, folders):
        client.delete_folder(session_id, folders.child_folder3_id)
        with pytest.raises(NotFoundFault):
            client.delete_folder(session_id, folders.child_folder3_id)


class TestFolderStatus:
    """Review status changes drive the folder's Valid field."""

    def test_review_invalid_then_valid(self, client, session_id, folders):
        client.folders.set_folder_status(session_id, folders.child_folder1_id, ReviewStatus.REVIEW_INVALID, "bad")
        folder = client.folders.get_folder(session_id, folders.child_folder1_id)
        assert folder.valid is False
        assert folder.status == ReviewStatus.REVIEW_INVALID

        client.folders.set_folder_status(session_id, folders.child_folder1_id, ReviewStatus.REVIEW_VALID)
        assert client.folders.get_folder(session_id, folders.child_folder1_id).valid is True

    def test_override_and_restore(self, client, session_id, folders):
        client.folders.set_folder_status(session_id, folders.child_folder2_id, ReviewStatus.OVERRIDE)
        assert client.folders.get_folder(session_id, folders.child_folder2_id).valid is True

        client.folders.set_folder_status(session_id, folders.child_folder2_id, ReviewStatus.RESTORE)
        folder = client.folders.get_folder(session_id, folders.child_folder2_id)
        assert folder.valid is False
        assert folder.status == ReviewStatus.RESTORE

    def test_unknown_status_rejected_locally(self, client, session_id, folders):
        with pytest.raises(ValueError):
            client.folders.set_folder_status(session_id, folders.child_folder1_id, 9)
