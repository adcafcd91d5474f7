"""
Common Utilities for Capture Usage Examples

Provides helper functions for formatting output and preparing sample input
files across all usage examples.
"""

import tempfile
from pathlib import Path
from typing import Any, List, Optional


def print_section(title: str, width: int = 60):
    """
    Print a formatted section header.

    Args:
        title: Section title
        width: Width of the header line
    """
    print("\n" + "=" * width)
    print(f" {title}")
    print("=" * width)


def print_step(step_num: int, description: str):
    """
    Print a step description.

    Args:
        step_num: Step number
        description: Step description
    """
    print(f"\n[Step {step_num}] {description}")


def print_success(message: str):
    """Print a success message."""
    print(f"[SUCCESS] {message}")


def print_error(message: str):
    """Print an error message."""
    print(f"[ERROR] {message}")


def print_note(message: str):
    """Print an informational note."""
    print(f"[NOTE] {message}")


def print_info(key: str, value: Any):
    """Print information in key-value format."""
    print(f"  - {key}: {value}")


def write_sample_images(count: int = 2, directory: Optional[Path] = None) -> List[Path]:
    """
    Write small placeholder TIFF files to use as page images.

    Args:
        count: Number of files to write
        directory: Target directory; a fresh temporary directory when None

    Returns:
        Paths of the written files
    """
    directory = Path(directory or tempfile.mkdtemp(prefix="capture_examples_"))
    paths = []
    for number in range(1, count + 1):
        path = directory / f"page{number}.tif"
        path.write_bytes(b"II*\x00" + f"sample page {number}".encode("ascii"))
        paths.append(path)
    return paths


def format_bytes(bytes_value: int) -> str:
    """
    Format bytes into human-readable string.

    Args:
        bytes_value: Number of bytes

    Returns:
        Formatted string (e.g., "1.5 MB")
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if bytes_value < 1024.0:
            return f"{bytes_value:.2f} {unit}"
        bytes_value /= 1024.0
    return f"{bytes_value:.2f} PB"


def print_folder_tree(client, session_id: str, folder_id: str, indent: int = 0):
    """
    Print a folder with its documents and child folders, in sibling order.

    Args:
        client: CaptureClient
        session_id: Session token
        folder_id: Folder to start from
        indent: Current indentation level
    """
    folder = client.folders.get_folder(session_id, folder_id)
    pad = "  " * indent
    print(f"{pad}Folder {folder.id} (valid={folder.valid})")
    for document in folder.documents:
        print(f"{pad}  Document {document.id}")
    for child in folder.folders:
        print_folder_tree(client, session_id, child.id, indent + 1)
