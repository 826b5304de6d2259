"""Whole-file text helpers."""

from __future__ import annotations

from pathlib import Path


def read_string(path: str | Path) -> str:
    """
    Read a whole text file.

    Raises OSError (FileNotFoundError, PermissionError, ...) if the
    file cannot be read or is not valid UTF-8.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            return f.read()
        except UnicodeDecodeError as e:
            raise OSError(f"could not load file '{path}': {e.reason}") from e


def write_string(path: str | Path, text: str) -> None:
    """Write text to a file, creating parent directories if needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
