"""
Local file helpers.

Reading source images is an I/O concern of the caller; the managers only
accept bytes or a path and hand the bytes to the transport.
"""

import logging
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


def read_image_bytes(file_path: Union[str, Path]) -> bytes:
    """
    Read an image or source file from disk.

    Raises:
        FileNotFoundError: If the path does not exist
    """
    path = Path(file_path)
    data = path.read_bytes()
    logger.debug(f"Read {len(data)} bytes from '{path}'")
    return data
