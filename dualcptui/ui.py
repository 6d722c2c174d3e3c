"""Terminal UI components using Textual."""

import logging
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Footer, Header, Static

from dualcp.controller import AppController, Command, PaneFocus, PaneSnapshot
from dualcp.transfer import TransferRecord

# Logging is configured in dualcp.main based on --debug


class PaneView(Static):
    """One pane: the current path as border title and the entry list."""

    def __init__(self, focus: PaneFocus, **kwargs):
        super().__init__("", **kwargs)
        self.pane_focus = focus
        self.snapshot: Optional[PaneSnapshot] = None
        self.first_row = 0

    def show(self, snapshot: PaneSnapshot) -> None:
        """Redraw the pane from a controller snapshot."""
        self.snapshot = snapshot
        self.border_title = f"{snapshot.label}: {snapshot.path}"
        self.set_class(snapshot.focused, "focused")
        self.update(self.render_entries())

    def visible_range(self, total: int) -> range:
        """Rows to draw so the selected entry stays in view."""
        height = self.content_size.height
        if height <= 0 or total <= height:
            self.first_row = 0
            return range(total)

        selected = self.snapshot.selected_index or 0
        if selected < self.first_row:
            self.first_row = selected
        elif selected >= self.first_row + height:
            self.first_row = selected - height + 1
        self.first_row = max(0, min(self.first_row, total - height))
        return range(self.first_row, self.first_row + height)

    def render_entries(self) -> Text:
        text = Text(no_wrap=True, overflow="ellipsis")
        if self.snapshot is None:
            return text

        entries = self.snapshot.entries
        for row, index in enumerate(self.visible_range(len(entries))):
            entry = entries[index]
            selected = index == self.snapshot.selected_index
            style = "bold blue" if entry.is_directory else "white"
            if selected:
                style += " reverse"
            if row:
                text.append("\n")
            text.append(">" if selected else " ", style="bold")
            text.append(entry.name, style=style)
        return text

    def on_resize(self) -> None:
        if self.snapshot is not None:
            self.update(self.render_entries())


class DualPaneBrowser(App):
    """Two directory panes side by side with one-key copy between them."""

    TITLE = "Dual Pane Copy"
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        background: $surface;
    }

    #panes {
        height: 1fr;
    }

    PaneView {
        width: 1fr;
        height: 100%;
        border: heavy $primary;
        border-title-style: bold;
        padding: 0 1;
    }

    PaneView.focused {
        border: heavy $success;
    }

    #status-bar {
        height: 1;
        padding: 0 2;
        background: $panel;
        content-align: center middle;
    }
    """

    BINDINGS = [
        Binding("q", "command('quit')", "Quit", priority=True),
        Binding("tab", "command('switch_focus')", "Switch", priority=True),
        Binding("j,down", "command('select_next')", "Down", show=False, priority=True),
        Binding("k,up", "command('select_previous')", "Up", show=False, priority=True),
        Binding("enter", "command('enter')", "Enter", priority=True),
        Binding("l,right", "command('navigate_right')", "Open", show=False, priority=True),
        Binding("h,left", "command('navigate_left')", "Go Up", priority=True),
        Binding("e", "command('transfer_left_to_right')", "Copy →", priority=True),
        Binding("i", "command('transfer_right_to_left')", "Copy ←", priority=True),
    ]

    def __init__(self, controller: AppController):
        """Initialize browser.

        Args:
            controller: Owns the pane state; the UI only reads snapshots from it
        """
        super().__init__()
        self.controller = controller

    def compose(self) -> ComposeResult:
        """Create child widgets."""
        yield Header()
        with Horizontal(id="panes"):
            yield PaneView(PaneFocus.LEFT, id="left-pane")
            yield PaneView(PaneFocus.RIGHT, id="right-pane")
        yield Static("", id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        self.refresh_panes()

    def pane_view(self, focus: PaneFocus) -> PaneView:
        return self.query_one(f"#{focus.value}-pane", PaneView)

    def refresh_panes(self) -> None:
        """Draw both panes and the status bar from controller state."""
        for view in self.query(PaneView):
            view.show(self.controller.snapshot(view.pane_focus))

        status_widget = self.query_one("#status-bar", Static)
        status = self.controller.status
        if status is None:
            status_widget.update("")
        elif status.ok:
            status_widget.update(Text(f"✅ {status.text}", style="green"))
        else:
            status_widget.update(Text(f"❌ {status.text}", style="red"))

    def action_command(self, name: str) -> None:
        """Run one logical command: age the status, dispatch, redraw."""
        command = Command(name)
        logging.debug(f"action_command: {command.name}")

        self.controller.tick()
        self.controller.handle(command)

        if self.controller.terminated:
            self.exit()
            return
        self.refresh_panes()


def format_duration(duration: float) -> str:
    if duration < 1:
        return f"{duration * 1000:.0f}ms"
    if duration < 60:
        return f"{duration:.2f}s"
    minutes = int(duration // 60)
    seconds = duration % 60
    return f"{minutes}m {seconds:.0f}s"


def display_transfer_summary(records: List[TransferRecord], console: Optional[Console] = None):
    """Print a table of the transfers made during the session."""
    if not records:
        return

    console = console or Console()
    console.print()
    console.print("📊 Transfer Summary", style="bold green")
    console.print()

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("From", style="cyan")
    table.add_column("To", style="cyan")
    table.add_column("Result")
    table.add_column("Time", justify="right", style="green")

    total_time = 0.0
    failed = 0
    for record in records:
        total_time += record.duration
        if record.ok:
            result = Text("ok", style="green")
        else:
            failed += 1
            result = Text(f"failed: {record.diagnostic}", style="red")
        # Full paths stay clickable in most terminals
        table.add_row(str(record.source), str(record.destination), result, format_duration(record.duration))

    console.print(table)
    console.print()
    console.print(f"✨ Total: {len(records)} transfer(s), {failed} failed", style="bold green")
    console.print(f"⏱️  Total time: {format_duration(total_time)}", style="bold cyan")
    console.print()
