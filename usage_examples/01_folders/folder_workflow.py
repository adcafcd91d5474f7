"""
Folder Workflow Example

Demonstrates building a folder tree, reordering folders among their
siblings, the refused move to a different tree level, folder review
statuses and folder field statuses.

Runs against the in-memory capture backend unless CAPTURE_BASE_URL is set.
"""

import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from client import CaptureClient
from config import configure_logging, load_settings
from capture_ops_exceptions import CaptureOpsError, InvalidOperationFault
from capture_samples import folders as folder_samples
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
print_note = example_utils.print_note
print_folder_tree = example_utils.print_folder_tree

SESSION_ID = os.environ.get("CAPTURE_SESSION_ID", "example-session")


def main():
    """Main function to demonstrate folder operations."""
    print_section("Capture Folder Workflow Example")

    config = load_settings()
    configure_logging(config)

    with CaptureClient(config=config) as client:
        # Step 1: Build the sample tree
        print_step(1, "Create the sample folder tree")
        try:
            created = folder_samples.create_folders(client, SESSION_ID)
            print_info("Root folder", created.root_folder_id)
            print_folder_tree(client, SESSION_ID, created.root_folder_id)
            print_success("Folder tree created")
        except CaptureOpsError as e:
            print_error(f"Failed to create folders: {e}")
            return

        # Step 2: Reorder among siblings
        print_step(2, "Move child folder 3 to the front and back again")
        folder_samples.move_folder(
            client, SESSION_ID, created.child_folder3_id, created.root_folder_id, created.child_folder1_id
        )
        print_folder_tree(client, SESSION_ID, created.root_folder_id)
        print_success("Sibling order restored")

        # Step 3: A move the service refuses
        print_step(3, "Try to move a child folder into its sibling")
        result = client.attempt(
            client.move_folder, SESSION_ID, created.child_folder1_id, created.child_folder2_id, 0,
            expected=(InvalidOperationFault,)
        )
        print_info("Succeeded", result.ok)
        if not result.ok:
            print_note(f"Refused by the service: {result.error.message}")

        # Step 4: Review statuses
        print_step(4, "Walk child folder 2 through every review status")
        folder_samples.set_folder_status(client, SESSION_ID, created.child_folder2_id)
        print_info("Valid after restore", client.folders.get_folder(SESSION_ID, created.child_folder2_id).valid)

        # Step 5: Field statuses
        print_step(5, "Walk the root folder's Region field through every field status")
        folder_samples.set_folder_field_status(client, SESSION_ID, created.root_folder_id, "Region")
        region = client.fields.get_folder_field_values(SESSION_ID, created.root_folder_id, ["Region"])[0]
        print_info("Region status", region.status.name)
        print_info("Region value", region.value)

        # Step 6: Clean up
        print_step(6, "Delete the tree")
        folder_samples.delete_folder(client, SESSION_ID, created.root_folder_id)
        print_success("Folder tree deleted")

        stats = client.connection_manager.get_operation_stats("GetFolder")
        if stats:
            print_info("GetFolder calls", stats.total_operations)
            print_info("GetFolder average", f"{stats.average_execution_time * 1000:.2f}ms")


if __name__ == "__main__":
    main()
