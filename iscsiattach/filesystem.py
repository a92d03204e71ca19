"""
Filesystem Interface Module

This module provides the filesystem collaborator used by the device waiter and
the reference counter. Keeping these primitives behind one small class lets
tests substitute a Mock(spec=LocalFilesystem) instead of real device nodes.

The LocalFilesystem class implements:
- Existence checks for literal device paths
- Glob expansion for by-path names with unknown vendor segments
- Directory listing and directory checks with consistent error wrapping
"""

import glob
import logging
import os
from typing import List

from .exceptions import FilesystemError


class LocalFilesystem:
    """Filesystem primitives backed by the local OS.

    "Not found" is never an error here: exists() returns False and glob()
    returns an empty list. Other I/O failures from list_directory() are raised
    as FilesystemError so callers can tell them apart from absence.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def exists(self, path: str) -> bool:
        """Check whether a path exists (stat succeeds)"""
        try:
            os.stat(path)
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise FilesystemError(f"Error checking {path}: {e}", path)

    def glob(self, pattern: str) -> List[str]:
        """Return paths matching a shell-style pattern, sorted"""
        return sorted(glob.glob(pattern))

    def list_directory(self, path: str) -> List[str]:
        """List the entries of a directory.

        Raises:
            FilesystemError: If the directory cannot be read
        """
        try:
            return sorted(os.listdir(path))
        except OSError as e:
            raise FilesystemError(f"Error reading from {path}: {e}", path)

    def is_directory(self, path: str) -> bool:
        """Check if a path is a directory, following symlinks"""
        return os.path.isdir(path)
