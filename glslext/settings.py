"""
Preprocessor settings - target version, defines and resource roots.

Settings are stored as JSON:

    {
        "version": "330 core",
        "defines": {"MAX_LIGHTS": "8"},
        "main_folder": "res",
        "search_roots": ["mods/water/res"]
    }

Relative paths are resolved against the directory of the settings file.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from glslext import log
from glslext.diagnostics import DiagnosticSink
from glslext.paths import ResPaths
from glslext.preprocessor import GlslExtension

DEFAULT_VERSION = "330 core"


@dataclass
class PreprocessorSettings:
    """Configuration of a GlslExtension instance."""

    version: str = DEFAULT_VERSION
    defines: Dict[str, str] = field(default_factory=dict)
    main_folder: str = "."
    search_roots: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "version": self.version,
            "defines": dict(self.defines),
            "main_folder": self.main_folder,
            "search_roots": list(self.search_roots),
        }

    @staticmethod
    def from_dict(data: dict) -> "PreprocessorSettings":
        """Deserialize from dictionary. Unknown keys are ignored."""
        defines = data.get("defines") or {}
        if not isinstance(defines, dict):
            raise ValueError("'defines' must be an object")
        roots = data.get("search_roots") or []
        if not isinstance(roots, list):
            raise ValueError("'search_roots' must be a list")

        return PreprocessorSettings(
            version=str(data.get("version", DEFAULT_VERSION)),
            defines={str(k): str(v) for k, v in defines.items()},
            main_folder=str(data.get("main_folder", ".")),
            search_roots=[str(r) for r in roots],
        )

    def resolve_paths(self, base: Path) -> "PreprocessorSettings":
        """Return a copy with relative folders made relative to base."""
        return PreprocessorSettings(
            version=self.version,
            defines=dict(self.defines),
            main_folder=str(base / self.main_folder),
            search_roots=[str(base / root) for root in self.search_roots],
        )


def load_settings(path: str | Path) -> PreprocessorSettings:
    """
    Load settings from a JSON file.

    A missing file gives default settings. A malformed file is reported
    to the log and default settings are used.
    """
    path = Path(path)
    if not path.exists():
        return PreprocessorSettings().resolve_paths(path.parent)

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("settings root must be an object")
        settings = PreprocessorSettings.from_dict(data)
        log.info(f"[Settings] Loaded from {path}")
    except (OSError, ValueError) as e:
        log.error(f"[Settings] Failed to load settings from {path}: {e}")
        settings = PreprocessorSettings()

    return settings.resolve_paths(path.parent)


def save_settings(settings: PreprocessorSettings, path: str | Path) -> None:
    """Save settings to a JSON file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(settings.to_dict(), f, indent=2)
    log.info(f"[Settings] Saved to {path}")


def create_preprocessor(
    settings: PreprocessorSettings,
    sink: DiagnosticSink | None = None,
) -> GlslExtension:
    """Build a GlslExtension configured from settings."""
    paths = ResPaths(settings.main_folder, settings.search_roots)
    ext = GlslExtension(version=settings.version, paths=paths, sink=sink)
    for name, value in settings.defines.items():
        ext.define(name, value)
    return ext
