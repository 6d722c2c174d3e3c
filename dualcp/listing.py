"""Directory listing model for a single pane."""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional

PARENT_NAME = ".."


class ListingUnreadable(Exception):
    """Raised when a directory cannot be listed."""

    def __init__(self, path, reason: str):
        super().__init__(f"Cannot list {path}: {reason}")
        self.path = path
        self.reason = reason


@dataclass(frozen=True)
class Entry:
    """A file or directory shown in a pane."""
    name: str
    is_directory: bool

    @property
    def is_parent(self) -> bool:
        return self.name == PARENT_NAME


# Synthesized, never looked up on disk
PARENT_ENTRY = Entry(PARENT_NAME, False)


class Direction(Enum):
    NEXT = 1
    PREVIOUS = -1


def list_directory(path) -> List[Entry]:
    """List a directory in filesystem read order.

    Args:
        path: Directory to read

    Returns:
        List of entries, unsorted

    Raises:
        ListingUnreadable: If the directory cannot be read
    """
    entries = []
    try:
        with os.scandir(path) as it:
            for dir_entry in it:
                try:
                    is_dir = dir_entry.is_dir()
                except OSError:
                    is_dir = False
                entries.append(Entry(dir_entry.name, is_dir))
    except OSError as e:
        raise ListingUnreadable(path, e.strerror or str(e)) from e
    return entries


def normalize_path(path) -> Path:
    """Expand ~ and make path absolute with any .. components collapsed."""
    return Path(os.path.abspath(os.path.expanduser(path)))


def filesystem_root(path: Path) -> Path:
    """Return the root of the filesystem containing path."""
    return Path(path.anchor or os.sep)


class DirectoryListing:
    """Entries, selection cursor and navigation for one pane."""

    def __init__(self, root, lister: Optional[Callable[[Path], List[Entry]]] = None):
        """Initialize listing bound to a root path.

        Args:
            root: Starting directory
            lister: Directory reading primitive, defaults to list_directory
        """
        self.current_path = normalize_path(root)
        self.lister = lister or list_directory
        self.entries: List[Entry] = []
        self.selected_index: Optional[int] = None
        self.refresh()

    def refresh(self):
        """Re-read current_path, falling back to the filesystem root."""
        try:
            items = self.lister(self.current_path)
        except ListingUnreadable as e:
            root = filesystem_root(self.current_path)
            logging.debug(f"refresh: {e}, falling back to {root}")
            self.current_path = root
            try:
                items = self.lister(root)
            except ListingUnreadable as root_error:
                logging.error(f"refresh: filesystem root unreadable: {root_error}")
                items = []

        self.entries = [PARENT_ENTRY] + list(items)
        self.selected_index = 0
        logging.debug(f"refresh: {self.current_path} has {len(self.entries) - 1} entries")

    def move_selection(self, direction: Direction):
        """Move the cursor one step, clamped to the list bounds."""
        if not self.entries:
            self.selected_index = None
            return
        index = (self.selected_index or 0) + direction.value
        self.selected_index = max(0, min(index, len(self.entries) - 1))

    def selected_entry(self) -> Optional[Entry]:
        if self.selected_index is None or not self.entries:
            return None
        return self.entries[self.selected_index]

    def enter_selected(self) -> bool:
        """Enter the selected directory, or go up on the parent entry.

        Returns:
            True if current_path changed
        """
        entry = self.selected_entry()
        if entry is None:
            return False
        if entry.is_parent:
            return self.go_to_parent()

        new_path = self.current_path / entry.name
        if not new_path.is_dir():
            return False

        self.current_path = new_path
        self.refresh()
        return True

    def go_to_parent(self) -> bool:
        """Move to the parent directory.

        Returns:
            False if already at a root
        """
        parent = self.current_path.parent
        if parent == self.current_path:
            return False

        logging.debug(f"go_to_parent: {self.current_path} -> {parent}")
        self.current_path = parent
        self.refresh()
        return True
