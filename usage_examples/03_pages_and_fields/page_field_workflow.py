"""
Page and Field Workflow Example

Demonstrates positional page moves, renditions, page properties, table
line items, field statuses and service-side validation.

Runs against the in-memory capture backend unless CAPTURE_BASE_URL is set.
"""

import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from client import CaptureClient
from config import configure_logging, load_settings
from capture_ops_exceptions import CaptureOpsError
from capture_samples import (
    documents as document_samples,
    fields as field_samples,
    folders as folder_samples,
    pages as page_samples,
    validation as validation_samples
)
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
write_sample_images = example_utils.write_sample_images

SESSION_ID = os.environ.get("CAPTURE_SESSION_ID", "example-session")


def main():
    """Main function to demonstrate page and field operations."""
    print_section("Capture Page and Field Workflow Example")

    config = load_settings()
    configure_logging(config)
    image1, image2 = write_sample_images(2)

    with CaptureClient(config=config) as client:
        print_step(1, "Create two documents with pages")
        try:
            tree = folder_samples.create_folders(client, SESSION_ID)
            first = document_samples.create_document_with_pages(client, SESSION_ID, tree.child_folder1_id, image1, image2)
            second = document_samples.create_document_with_pages(client, SESSION_ID, tree.child_folder1_id, image2, image1)
        except CaptureOpsError as e:
            print_error(f"Failed to create documents: {e}")
            return
        print_success("Documents created")

        print_step(2, "Move the first page of document 1 into document 2")
        page_samples.move_pages(client, SESSION_ID, first, [0], second)
        print_info("Pages in document 1", len(client.documents.get_document(SESSION_ID, first).pages))
        print_info("Pages in document 2", len(client.documents.get_document(SESSION_ID, second).pages))

        print_step(3, "Use a rendition as the page's source image")
        page_samples.set_page_source_image_from_rendition(client, SESSION_ID, second, image2)
        print_info("Image size", page_samples.get_image_length(client, SESSION_ID, second))

        print_step(4, "Update and read page properties")
        page_samples.update_pages(client, SESSION_ID, second, 0, "Sheet9", 850, 40, 12)
        for properties in page_samples.get_page_property_values(client, SESSION_ID, second):
            print_info(properties.page_id, f"sheet={properties.properties.get('SheetId')}")

        print_step(5, "Write a line item and walk a field through its statuses")
        field_samples.insert_table_field_row(client, SESSION_ID, second, "LineItems")
        field_samples.insert_line_item(
            client, SESSION_ID, second, "LineItems", 0,
            {"Quantity": 2, "Item": "Widget", "Unit Price": 4.5, "Amount": 9.0}
        )
        document_samples.set_document_field_status(client, SESSION_ID, second, "CustomerName")
        print_info("CustomerName", field_samples.get_document_field_value(
            client, SESSION_ID, second, "Valid", "CustomerName"
        ))

        print_step(6, "Validate")
        print_info("Document valid", validation_samples.validate_document(client, SESSION_ID, second))
        review = validation_samples.validate_document_for_review(client, SESSION_ID, second)
        print_info("Ready for review", review.is_valid)
        if review.invalid_fields:
            print_info("Invalid fields", ", ".join(review.invalid_fields))

        folder_samples.delete_folder(client, SESSION_ID, tree.root_folder_id)
        print_success("Example finished")


if __name__ == "__main__":
    main()
