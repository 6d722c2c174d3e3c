"""Tests for transfer destination resolution and the executor."""

import unittest
from pathlib import Path

from dualcp.copy_engine import CopyEngineError, CopyLaunchError
from dualcp.listing import DirectoryListing, Entry
from dualcp.transfer import (
    TransferExecutor,
    TransferOutcome,
    resolve_destination,
    resolve_transfer,
)

FAKE_TREE = {
    Path("/src"): [Entry("report.txt", False), Entry("photos", True)],
    Path("/dst"): [Entry("archive", True), Entry("notes.txt", False)],
}


def fake_lister(path):
    return list(FAKE_TREE.get(path, []))


def make_pane(path, selected=None):
    pane = DirectoryListing(path, lister=fake_lister)
    if selected is not None:
        pane.selected_index = [entry.name for entry in pane.entries].index(selected)
    return pane


class RecordingEngine:
    name = "recording"

    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def copy(self, source, destination):
        self.calls.append((source, destination))
        if self.error is not None:
            raise self.error


class ResolveTransferTests(unittest.TestCase):
    def test_file_into_destination_directory_when_parent_selected(self):
        source = make_pane("/src", "report.txt")
        dest = make_pane("/dst", "..")

        plan = resolve_transfer(source, dest)

        self.assertEqual(plan.source, Path("/src/report.txt"))
        self.assertEqual(plan.destination, Path("/dst/report.txt"))
        self.assertEqual(plan.item_name, "report.txt")

    def test_current_directory_into_highlighted_directory(self):
        source = make_pane("/src", "..")
        dest = make_pane("/dst", "archive")

        plan = resolve_transfer(source, dest)

        self.assertEqual(plan.source, Path("/src"))
        self.assertEqual(plan.destination, Path("/dst/archive/src"))
        self.assertNotIn("..", plan.destination.parts)

    def test_highlighted_file_is_still_treated_as_directory(self):
        source = make_pane("/src", "photos")
        dest = make_pane("/dst", "notes.txt")
        self.assertEqual(resolve_destination(source, dest), Path("/dst/notes.txt/photos"))

    def test_destination_without_selection_uses_current_path(self):
        source = make_pane("/src", "report.txt")
        dest = make_pane("/dst")
        dest.selected_index = None
        self.assertEqual(resolve_destination(source, dest), Path("/dst/report.txt"))

    def test_source_without_selection_resolves_nothing(self):
        source = make_pane("/src")
        source.entries = []
        source.selected_index = None
        self.assertIsNone(resolve_transfer(source, make_pane("/dst")))
        self.assertIsNone(resolve_destination(source, make_pane("/dst")))

    def test_filesystem_root_as_source_resolves_nothing(self):
        source = make_pane("/", "..")
        self.assertIsNone(resolve_transfer(source, make_pane("/dst")))

    def test_resolution_is_symmetric(self):
        left = make_pane("/src", "report.txt")
        right = make_pane("/dst", "archive")
        self.assertEqual(resolve_destination(left, right), Path("/dst/archive/report.txt"))
        self.assertEqual(resolve_destination(right, left), Path("/src/report.txt/archive"))


class TransferExecutorTests(unittest.TestCase):
    def test_success(self):
        engine = RecordingEngine()
        outcome = TransferExecutor(engine).execute(Path("/src/a"), Path("/dst/a"))
        self.assertEqual(outcome, TransferOutcome(True))
        self.assertEqual(engine.calls, [(Path("/src/a"), Path("/dst/a"))])

    def test_engine_failure_is_reported_with_diagnostic(self):
        engine = RecordingEngine(CopyEngineError("cp: cannot create regular file: No such file or directory"))
        outcome = TransferExecutor(engine).execute(Path("/src/a"), Path("/dst/x/a"))
        self.assertFalse(outcome.ok)
        self.assertTrue(outcome.launched)
        self.assertIn("No such file or directory", outcome.diagnostic)

    def test_launch_failure_is_distinguishable(self):
        engine = RecordingEngine(CopyLaunchError("Failed to execute cp: not found"))
        outcome = TransferExecutor(engine).execute(Path("/src/a"), Path("/dst/a"))
        self.assertFalse(outcome.ok)
        self.assertFalse(outcome.launched)
        self.assertEqual(outcome.diagnostic, "Failed to execute cp: not found")

    def test_unexpected_engine_error_does_not_escape(self):
        engine = RecordingEngine(RuntimeError("boom"))
        outcome = TransferExecutor(engine).execute(Path("/src/a"), Path("/dst/a"))
        self.assertFalse(outcome.ok)
        self.assertEqual(outcome.diagnostic, "boom")

    def test_no_retry_after_failure(self):
        engine = RecordingEngine(CopyEngineError("disk full"))
        TransferExecutor(engine).execute(Path("/src/a"), Path("/dst/a"))
        self.assertEqual(len(engine.calls), 1)


if __name__ == "__main__":
    unittest.main()
