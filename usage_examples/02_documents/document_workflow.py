"""
Document Workflow Example

Demonstrates creating typed documents from local files, splitting and
merging documents, split-and-classify, rejection, copying and reading
source files.

Runs against the in-memory capture backend unless CAPTURE_BASE_URL is set.
"""

import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from client import CaptureClient
from config import configure_logging, load_settings
from capture_ops_exceptions import CaptureOpsError
from capture_samples import documents as document_samples, folders as folder_samples
# Import usage_examples utils (not the project's utils package)
import importlib.util
utils_file_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'utils.py'))
spec = importlib.util.spec_from_file_location("example_utils", utils_file_path)
example_utils = importlib.util.module_from_spec(spec)
spec.loader.exec_module(example_utils)
print_section = example_utils.print_section
print_step = example_utils.print_step
print_success = example_utils.print_success
print_info = example_utils.print_info
print_error = example_utils.print_error
format_bytes = example_utils.format_bytes
write_sample_images = example_utils.write_sample_images

SESSION_ID = os.environ.get("CAPTURE_SESSION_ID", "example-session")


def main():
    """Main function to demonstrate document operations."""
    print_section("Capture Document Workflow Example")

    config = load_settings()
    configure_logging(config)
    image1, image2 = write_sample_images(2)

    with CaptureClient(config=config) as client:
        # Step 1: Create documents
        print_step(1, "Create two typed documents from local files")
        try:
            tree = folder_samples.create_folders(client, SESSION_ID)
            created = document_samples.create_documents(client, SESSION_ID, tree.child_folder1_id, image1, image2)
            print_info("Northwest form", created.document1_id)
            print_info("Tri-Spectrum form", created.document2_id)
            print_success("Documents created")
        except CaptureOpsError as e:
            print_error(f"Failed to create documents: {e}")
            return

        # Step 2: A document with two pages
        print_step(2, "Create a document with a front and a back page")
        multi_page_id = document_samples.create_document_with_pages(
            client, SESSION_ID, tree.child_folder1_id, image1, image2
        )
        print_info("Pages", len(client.documents.get_document(SESSION_ID, multi_page_id).pages))

        # Step 3: Split and merge back
        print_step(3, "Split the two-page document and merge it back")
        document_samples.split_document(client, SESSION_ID, multi_page_id, 1)
        print_info("Pages after merge", len(client.documents.get_document(SESSION_ID, multi_page_id).pages))

        # Step 4: Split and classify
        print_step(4, "Split off the second page as a low-confidence document")
        new_id = document_samples.split_document_and_classify(client, SESSION_ID, multi_page_id, 1)
        new_document = client.documents.get_document(SESSION_ID, new_id)
        print_info("New document", new_id)
        print_info("Confidence", new_document.confidence_level)

        # Step 5: Reject, unreject and copy
        print_step(5, "Reject and unreject, then copy a document")
        document_samples.reject_and_unreject(
            client, SESSION_ID, created.document1_id, created.document2_id, "Example rejection"
        )
        copy_id = document_samples.copy_document(client, SESSION_ID, created.document1_id, "CustomerName")
        print_info("Copy", copy_id)

        # Step 6: Source files
        print_step(6, "Read the source file back")
        source = document_samples.get_source_file(client, SESSION_ID, created.document1_id)
        print_info("File name", source.file_name)
        print_info("Size", format_bytes(len(source.source_file or b"")))
        print_info("As TIFF", format_bytes(
            document_samples.get_document_file_length(client, SESSION_ID, created.document1_id, "tif")
        ))

        folder_samples.delete_folder(client, SESSION_ID, tree.root_folder_id)
        print_success("Example finished")


if __name__ == "__main__":
    main()
