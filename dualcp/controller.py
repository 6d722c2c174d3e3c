"""Two-pane application state and command dispatch."""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from dualcp.copy_engine import CopyEngine, CpCopyEngine
from dualcp.listing import DirectoryListing, Direction, Entry
from dualcp.transfer import TransferExecutor, TransferRecord, resolve_transfer

DEFAULT_STATUS_TICKS = 50


class PaneFocus(Enum):
    LEFT = "left"
    RIGHT = "right"

    @property
    def other(self) -> "PaneFocus":
        return PaneFocus.RIGHT if self is PaneFocus.LEFT else PaneFocus.LEFT


class Command(Enum):
    """Logical commands produced by the input layer."""
    QUIT = "quit"
    SWITCH_FOCUS = "switch_focus"
    SELECT_NEXT = "select_next"
    SELECT_PREVIOUS = "select_previous"
    ENTER = "enter"
    NAVIGATE_RIGHT = "navigate_right"
    NAVIGATE_LEFT = "navigate_left"
    TRANSFER_LEFT_TO_RIGHT = "transfer_left_to_right"
    TRANSFER_RIGHT_TO_LEFT = "transfer_right_to_left"


@dataclass
class StatusMessage:
    text: str
    remaining_ticks: int
    ok: bool = True


@dataclass(frozen=True)
class PaneSnapshot:
    """Read-only view of one pane for rendering."""
    label: str
    path: str
    entries: Tuple[Entry, ...]
    selected_index: Optional[int]
    focused: bool


class AppController:
    """Owns both panes, the focus and the status message."""

    def __init__(
        self,
        left_root,
        right_root,
        engine: Optional[CopyEngine] = None,
        labels: Optional[Dict[PaneFocus, str]] = None,
        status_ticks: int = DEFAULT_STATUS_TICKS,
        refresh_after_transfer: bool = True,
        lister: Optional[Callable[[Path], List[Entry]]] = None,
    ):
        """Initialize controller.

        Args:
            left_root: Starting directory of the left pane
            right_root: Starting directory of the right pane
            engine: Copy engine used for transfers, defaults to cp -r
            labels: Display name per pane
            status_ticks: Number of render iterations a status message lives
            refresh_after_transfer: Re-list the destination pane after a successful copy
            lister: Directory reading primitive passed to both panes
        """
        self.panes: Dict[PaneFocus, DirectoryListing] = {
            PaneFocus.LEFT: DirectoryListing(left_root, lister),
            PaneFocus.RIGHT: DirectoryListing(right_root, lister),
        }
        self.labels = labels or {PaneFocus.LEFT: "Left", PaneFocus.RIGHT: "Right"}
        self.focus = PaneFocus.LEFT
        self.executor = TransferExecutor(engine or CpCopyEngine())
        self.status_ticks = status_ticks
        self.refresh_after_transfer = refresh_after_transfer
        self.status: Optional[StatusMessage] = None
        self.transfer_records: List[TransferRecord] = []
        self.terminated = False

        self._handlers = {
            Command.QUIT: self.quit,
            Command.SWITCH_FOCUS: self.switch_focus,
            Command.SELECT_NEXT: lambda: self.focused_pane.move_selection(Direction.NEXT),
            Command.SELECT_PREVIOUS: lambda: self.focused_pane.move_selection(Direction.PREVIOUS),
            Command.ENTER: lambda: self.focused_pane.enter_selected(),
            Command.NAVIGATE_RIGHT: lambda: self.focused_pane.enter_selected(),
            Command.NAVIGATE_LEFT: lambda: self.focused_pane.go_to_parent(),
            Command.TRANSFER_LEFT_TO_RIGHT: lambda: self.transfer(PaneFocus.LEFT),
            Command.TRANSFER_RIGHT_TO_LEFT: lambda: self.transfer(PaneFocus.RIGHT),
        }

    @property
    def focused_pane(self) -> DirectoryListing:
        return self.panes[self.focus]

    def handle(self, command: Command):
        """Run one command to completion."""
        logging.debug(f"handle: {command.name} (focus={self.focus.name})")
        self._handlers[command]()

    def quit(self):
        self.terminated = True

    def switch_focus(self):
        self.focus = self.focus.other

    def transfer(self, source_focus: PaneFocus) -> Optional[TransferRecord]:
        """Copy the selection of one pane into the location picked in the other.

        Args:
            source_focus: Pane to copy from; the other pane is the destination

        Returns:
            TransferRecord, or None if there was nothing to transfer
        """
        dest_focus = source_focus.other
        plan = resolve_transfer(self.panes[source_focus], self.panes[dest_focus])
        if plan is None:
            logging.debug(f"transfer: nothing selected in {source_focus.name} pane")
            return None

        start = time.monotonic()
        outcome = self.executor.execute(plan.source, plan.destination)
        record = TransferRecord(
            plan.source, plan.destination, outcome.ok, time.monotonic() - start, outcome.diagnostic
        )
        self.transfer_records.append(record)

        dest_label = self.labels[dest_focus]
        if outcome.ok:
            self.show_status(f"Copied {plan.item_name} to {dest_label}: {plan.destination}")
            if self.refresh_after_transfer:
                self.panes[dest_focus].refresh()
        elif not outcome.launched:
            self.show_status(f"Could not run copy engine: {outcome.diagnostic}", ok=False)
        else:
            self.show_status(f"Failed to copy {plan.item_name} to {dest_label}: {outcome.diagnostic}", ok=False)
        return record

    def show_status(self, text: str, ok: bool = True):
        self.status = StatusMessage(text, self.status_ticks, ok)

    def tick(self):
        """Age the status message by one render iteration."""
        if self.status is None:
            return
        self.status.remaining_ticks -= 1
        if self.status.remaining_ticks <= 0:
            self.status = None

    def snapshot(self, focus: PaneFocus) -> PaneSnapshot:
        pane = self.panes[focus]
        return PaneSnapshot(
            label=self.labels[focus],
            path=str(pane.current_path),
            entries=tuple(pane.entries),
            selected_index=pane.selected_index,
            focused=focus is self.focus,
        )
