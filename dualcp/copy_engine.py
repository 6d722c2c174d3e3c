"""Recursive copy engines used by transfers."""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Protocol


class CopyEngineError(Exception):
    """The copy engine ran and reported a failure."""

    def __init__(self, diagnostic: str):
        super().__init__(diagnostic)
        self.diagnostic = diagnostic


class CopyLaunchError(CopyEngineError):
    """The copy engine could not be started at all."""


class CopyEngine(Protocol):
    """Copies a file or a whole directory tree.

    The parent of the destination must already exist; engines do not
    create intermediate directories.
    """

    name: str

    def copy(self, source: Path, destination: Path) -> None:
        ...


class CpCopyEngine:
    """Copy engine backed by the ``cp -r`` command."""

    name = "cp"

    def __init__(self, command: str = "cp"):
        self.command = command

    def copy(self, source: Path, destination: Path) -> None:
        """Run cp -r source destination.

        Args:
            source: File or directory to copy
            destination: Path the copy is created at

        Raises:
            CopyLaunchError: If cp could not be executed
            CopyEngineError: If cp exited with a non-zero status
        """
        args = [self.command, "-r", str(source), str(destination)]
        logging.debug(f"CpCopyEngine: running {args}")

        try:
            result = subprocess.run(args, capture_output=True, text=True, errors="replace")
        except OSError as e:
            raise CopyLaunchError(f"Failed to execute {self.command}: {e}") from e

        if result.returncode != 0:
            error = result.stderr.strip() or f"{self.command} exited with status {result.returncode}"
            raise CopyEngineError(error)


class ShutilCopyEngine:
    """In-process copy engine using shutil."""

    name = "python"

    def copy(self, source: Path, destination: Path) -> None:
        source = Path(source)
        destination = Path(destination)
        logging.debug(f"ShutilCopyEngine: {source} -> {destination}")

        if not destination.parent.is_dir():
            raise CopyEngineError(f"Destination directory does not exist: {destination.parent}")

        try:
            if source.is_dir():
                shutil.copytree(source, destination, symlinks=True)
            else:
                shutil.copy2(source, destination)
        except shutil.Error as e:
            # copytree collects per-file failures as (src, dst, reason)
            details = e.args[0] if e.args else None
            if isinstance(details, list):
                diagnostic = "; ".join(str(failure[-1]) for failure in details)
            else:
                diagnostic = str(e)
            raise CopyEngineError(diagnostic or str(e)) from e
        except OSError as e:
            raise CopyEngineError(str(e)) from e


ENGINES = {
    CpCopyEngine.name: CpCopyEngine,
    ShutilCopyEngine.name: ShutilCopyEngine,
}


def make_copy_engine(name: str) -> CopyEngine:
    """Create a copy engine by name.

    Raises:
        ValueError: If no engine has that name
    """
    try:
        return ENGINES[name]()
    except KeyError:
        raise ValueError(f"Unknown copy engine: {name}") from None
