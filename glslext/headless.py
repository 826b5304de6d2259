"""
Invisible GLFW window whose OpenGL context matches a GLSL version token.

Used by `python -m glslext --check` to compile preprocessed output:

    with headless_context("330 core"):
        compile_stage(text, "fragment")
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

# GLSL versions that predate the "major*100 + minor*10" numbering
_LEGACY_GL = {
    110: (2, 0),
    120: (2, 1),
    130: (3, 0),
    140: (3, 1),
    150: (3, 2),
}
_ES = {
    100: (2, 0),
    300: (3, 0),
    310: (3, 1),
    320: (3, 2),
}


@dataclass(frozen=True)
class ContextVersion:
    """OpenGL context needed to compile a given GLSL version."""

    major: int
    minor: int
    es: bool = False
    core: bool = False


def context_version(version: str) -> ContextVersion:
    """
    Map a #version token ("330 core", "300 es", "120") to a context version.

    Raises:
        ValueError: if the token does not start with a version number.
    """
    parts = version.split()
    if not parts or not parts[0].isdigit():
        raise ValueError(f"invalid GLSL version '{version}'")
    number = int(parts[0])
    profile = parts[1] if len(parts) > 1 else ""

    if profile == "es" or number == 100:
        if number not in _ES:
            raise ValueError(f"unsupported GLSL ES version '{version}'")
        major, minor = _ES[number]
        return ContextVersion(major, minor, es=True)

    if number in _LEGACY_GL:
        major, minor = _LEGACY_GL[number]
        return ContextVersion(major, minor, core=number >= 150 and profile != "compatibility")

    return ContextVersion(number // 100, number // 10 % 10, core=profile != "compatibility")


@contextmanager
def headless_context(version: str) -> Iterator[ContextVersion]:
    """Create an invisible window with a current context for `version`."""
    import glfw

    requested = context_version(version)
    if not glfw.init():
        raise RuntimeError("Failed to initialize GLFW")

    try:
        glfw.window_hint(glfw.VISIBLE, glfw.FALSE)
        glfw.window_hint(glfw.CONTEXT_VERSION_MAJOR, requested.major)
        glfw.window_hint(glfw.CONTEXT_VERSION_MINOR, requested.minor)
        if requested.es:
            glfw.window_hint(glfw.CLIENT_API, glfw.OPENGL_ES_API)
        elif requested.core:
            glfw.window_hint(glfw.OPENGL_PROFILE, glfw.OPENGL_CORE_PROFILE)
            glfw.window_hint(glfw.OPENGL_FORWARD_COMPAT, glfw.TRUE)

        window = glfw.create_window(1, 1, "glslext check", None, None)
        if not window:
            raise RuntimeError(
                f"Failed to create OpenGL {requested.major}.{requested.minor} "
                f"context for GLSL '{version}'"
            )
        try:
            glfw.make_context_current(window)
            yield requested
        finally:
            glfw.make_context_current(None)
            glfw.destroy_window(window)
    finally:
        glfw.terminate()
