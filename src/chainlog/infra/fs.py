from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Path naming and file opening primitives shared by the file-backed
handlers.
"""

import os
from typing import BinaryIO, Union

PathLike = Union[str, "os.PathLike[str]"]

# Separator between the base path and the rotation counter
ROTATION_SEPARATOR: str = "."


def rotated_path(base_path: PathLike, counter: int) -> str:
    """
    Build the on-disk name of a rotation segment.

    The counter is rendered as an unsigned decimal without padding:
    ``app.log`` + 3 -> ``app.log.3``.

    Args:
        base_path: Path shared by all segments.
        counter: Rotation counter (>= 0).

    Returns:
        str: Segment path.
    """
    if counter < 0:
        raise ValueError(f"Rotation counter must be >= 0, got {counter}")
    return f"{os.fspath(base_path)}{ROTATION_SEPARATOR}{int(counter)}"


def ensure_parent_dir(path: PathLike) -> None:
    """
    Create the parent directory hierarchy of a target file if missing.

    Args:
        path: Path to the target file.
    """
    parent = os.path.dirname(os.path.abspath(os.fspath(path)))
    if parent and not os.path.exists(parent):
        os.makedirs(parent, exist_ok=True)


def open_truncated(path: PathLike) -> BinaryIO:
    """
    Open a file for binary writing, discarding previous content.

    Args:
        path: Target file path.

    Returns:
        BinaryIO: The open file object.

    Raises:
        OSError: If the directory cannot be created or the file opened.
    """
    ensure_parent_dir(path)
    return open(path, "wb")
