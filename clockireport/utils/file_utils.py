"""File I/O utility functions for clockiReport."""
import logging
import os
from typing import TextIO

logger = logging.getLogger(__name__)


def open_output(path: str, overwrite: bool = False) -> TextIO:
    """Open the file a report is written to.

    An existing file is appended to unless ``overwrite`` is set.

    Args:
        path: Output file path
        overwrite: Whether to truncate an existing file

    Returns:
        Text stream opened for writing; the caller closes it
    """
    file_exists = os.path.exists(path)
    if file_exists and not overwrite:
        mode = 'a'
        logger.info("File '%s' exists. Appending output.", path)
    elif file_exists:
        mode = 'w'
        logger.info("File '%s' exists. Overwriting as requested.", path)
    else:
        mode = 'w'
        logger.info("File '%s' does not exist. Creating new file.", path)
    return open(path, mode, encoding='utf-8', newline='')
