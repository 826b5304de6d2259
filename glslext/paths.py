"""Resource path resolution across ordered search roots."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Tuple


class ResPaths:
    """
    Ordered set of resource roots.

    find() looks a logical path up in every root in order and falls back
    to the main folder. The first existing file wins, so roots listed
    earlier override later ones and the main folder.

    Example:
        paths = ResPaths("res", ["mods/water/res"])
        paths.find("shaders/lib/fog.glsl")
    """

    def __init__(self, main_folder: str | Path, roots: Iterable[str | Path] = ()):
        self._main_folder = Path(main_folder)
        self._roots: List[Path] = [Path(root) for root in roots]

    @property
    def main_folder(self) -> Path:
        return self._main_folder

    @property
    def roots(self) -> Tuple[Path, ...]:
        return tuple(self._roots)

    def add_root(self, root: str | Path) -> None:
        """Append a search root with the lowest priority among roots."""
        self._roots.append(Path(root))

    def find(self, filename: str) -> Path:
        """
        Resolve logical path to an existing file.

        Raises:
            FileNotFoundError: if no root contains the file.
        """
        for root in self._roots:
            candidate = root / filename
            if candidate.is_file():
                return candidate

        candidate = self._main_folder / filename
        if candidate.is_file():
            return candidate

        raise FileNotFoundError(f"resource '{filename}' not found in search roots")

    def __repr__(self) -> str:
        roots = ", ".join(str(r) for r in self._roots)
        return f"ResPaths(main_folder={str(self._main_folder)!r}, roots=[{roots}])"
