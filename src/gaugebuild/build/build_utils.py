"""File utilities for gaugebuild.

Directory mirroring and removal helpers shared by staging and installation.
"""

import logging
import os
import shutil
import stat
import sys
import time
from pathlib import Path
from typing import Any, Callable


def remove_readonly(func: Callable[[str], None], path: str, excinfo: Any) -> None:
    """
    Error handler for shutil.rmtree on Windows.

    Clears the read-only attribute and retries the failed operation.

    Args:
        func: The function that raised the exception
        path: The path to the file/directory
        excinfo: Exception information (unused)
    """
    os.chmod(path, stat.S_IWRITE)
    func(path)


def safe_rmtree(path: Path, max_retries: int = 3) -> None:
    """
    Remove a directory tree, retrying on locked files.

    Args:
        path: Path to directory to remove
        max_retries: Maximum number of retry attempts for locked files

    Raises:
        OSError: If directory cannot be removed after all retries
    """
    if not path.exists():
        return

    for attempt in range(max_retries):
        try:
            if sys.version_info >= (3, 12):
                shutil.rmtree(path, onexc=remove_readonly)
            else:
                shutil.rmtree(path, onerror=remove_readonly)
            return
        except OSError as e:
            if attempt < max_retries - 1:
                # Files might be temporarily locked (antivirus, indexer)
                time.sleep(0.5)
            else:
                raise OSError(
                    f"Failed to remove directory {path} after {max_retries} attempts: {e}"
                ) from e


def mirror_file(src: Path, dst: Path) -> Path:
    """Copy a file, creating parent directories and keeping permissions."""
    dst.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(src, dst)
    return dst


def mirror_dir(src: Path, dst: Path) -> Path:
    """Copy a directory tree into dst, merging with anything already there."""
    logging.debug(f"Mirror {src} -> {dst}")
    shutil.copytree(src, dst, dirs_exist_ok=True)
    return dst
