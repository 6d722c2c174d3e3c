"""Transfer destination resolution and execution."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dualcp.copy_engine import CopyEngine, CopyEngineError, CopyLaunchError
from dualcp.listing import DirectoryListing


@dataclass(frozen=True)
class TransferPlan:
    """Concrete paths for copying one pane's selection into the other."""
    source: Path
    destination: Path
    item_name: str


@dataclass(frozen=True)
class TransferOutcome:
    """Result of one copy engine invocation."""
    ok: bool
    diagnostic: str = ""
    launched: bool = True


@dataclass(frozen=True)
class TransferRecord:
    """A finished transfer, kept for the exit summary."""
    source: Path
    destination: Path
    ok: bool
    duration: float
    diagnostic: str = ""


def resolve_transfer(source: DirectoryListing, dest: DirectoryListing) -> Optional[TransferPlan]:
    """Compute source and destination paths for a transfer.

    When the parent entry is selected in the source pane, the directory
    being browsed is itself the source. A non-parent entry highlighted in
    the destination pane is treated as a directory to copy into; its type
    is not checked, so a highlighted file yields a path the copy engine
    will reject.

    Args:
        source: Pane the item is copied from
        dest: Pane the item is copied to

    Returns:
        TransferPlan, or None if the source pane has nothing to transfer
    """
    entry = source.selected_entry()
    if entry is None:
        return None

    if entry.is_parent:
        source_path = source.current_path
    else:
        source_path = source.current_path / entry.name

    item_name = source_path.name
    if not item_name:
        # The source is a filesystem root, which has no base name
        return None

    dest_entry = dest.selected_entry()
    if dest_entry is None or dest_entry.is_parent:
        destination = dest.current_path / item_name
    else:
        destination = dest.current_path / dest_entry.name / item_name

    return TransferPlan(source_path, destination, item_name)


def resolve_destination(source: DirectoryListing, dest: DirectoryListing) -> Optional[Path]:
    plan = resolve_transfer(source, dest)
    return plan.destination if plan else None


class TransferExecutor:
    """Runs a copy engine and turns its result into a TransferOutcome."""

    def __init__(self, engine: CopyEngine):
        self.engine = engine

    def execute(self, source_path: Path, dest_path: Path) -> TransferOutcome:
        """Copy source_path to dest_path.

        Never raises. Partial copies are left in place on failure.

        Args:
            source_path: File or directory to copy
            dest_path: Path the copy is created at

        Returns:
            TransferOutcome describing success or the failure diagnostic
        """
        logging.debug(f"execute: {source_path} -> {dest_path}")
        try:
            self.engine.copy(source_path, dest_path)
        except CopyLaunchError as e:
            logging.error(f"Failed to execute copy engine: {e.diagnostic}")
            return TransferOutcome(False, e.diagnostic, launched=False)
        except CopyEngineError as e:
            logging.error(f"Failed to copy {source_path} to {dest_path}: {e.diagnostic}")
            return TransferOutcome(False, e.diagnostic)
        except Exception as e:
            logging.error(f"Unexpected copy engine error: {e}", exc_info=True)
            return TransferOutcome(False, str(e) or type(e).__name__)

        logging.debug(f"execute: copied {source_path}")
        return TransferOutcome(True)
