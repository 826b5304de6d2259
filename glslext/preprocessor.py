"""
GLSL Preprocessor - resolves #include directives and prepends version/defines.

Usage:
    from glslext.paths import ResPaths
    from glslext.preprocessor import GlslExtension

    ext = GlslExtension(version="330 core", paths=ResPaths("res"))
    ext.define("MAX_LIGHTS", "8")
    text = ext.process("main.glslf", source)

Output layout:
    #version <version>
    #define <name> <value>        (one per define, sorted by name)
    #line 1
    <shader lines, with #include expanded and #version removed>

Every splice is surrounded with #line markers so that compiler errors keep
pointing at lines of the original unit.
"""

from __future__ import annotations

import re
from io import StringIO
from pathlib import Path
from typing import Dict, Iterator

from glslext.diagnostics import Diagnostic, DiagnosticSink, log_sink
from glslext.files import read_string
from glslext.paths import ResPaths

HEADERS_FOLDER = "shaders/lib"
HEADER_EXTENSION = ".glsl"

# Leading word of a directive: "include <fog>" -> ("include", " <fog>")
_DIRECTIVE_RE = re.compile(r"([A-Za-z_]\w*)(.*)", re.DOTALL)


class GlslPreprocessorError(Exception):
    """Error during GLSL preprocessing."""


class DirectiveSyntaxError(GlslPreprocessorError):
    """Malformed directive in a shader unit."""

    def __init__(self, file: str, line: int, message: str):
        self.file = file
        self.line = line
        self.message = message
        super().__init__(f"file {file}: {message} at line {line}")


class HeaderNotLoadedError(GlslPreprocessorError, LookupError):
    """Requested header is not in the header cache."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"no header '{name}' loaded")


def header_path(name: str) -> str:
    """Logical resource path of a header: shaders/lib/<name>.glsl"""
    return f"{HEADERS_FOLDER}/{name}{HEADER_EXTENSION}"


def _split_lines(source: str) -> Iterator[str]:
    """Yield lines split on '\\n', each keeping its terminator if present."""
    pos = 0
    length = len(source)
    while pos < length:
        end = source.find("\n", pos)
        if end == -1:
            yield source[pos:]
            return
        yield source[pos:end + 1]
        pos = end + 1


def _parse_directive(line: str) -> tuple[str, str] | None:
    """
    Split a '#' line into (keyword, rest).

    Returns None for lines that are not directives or have no keyword.
    """
    if not line.startswith("#"):
        return None
    match = _DIRECTIVE_RE.match(line[1:].strip())
    if match is None:
        return None
    return match.group(1), match.group(2)


def has_includes(source: str) -> bool:
    """Check if source contains any #include directives."""
    for line in _split_lines(source):
        directive = _parse_directive(line)
        if directive is not None and directive[0] == "include":
            return True
    return False


def _source_line(out: StringIO, linenum: int) -> None:
    out.write(f"#line {linenum}\n")


class GlslExtension:
    """
    Preprocessor context: target version, define table and header cache.

    Headers are loaded lazily from shaders/lib/<name>.glsl through the
    resource paths and stay cached for the lifetime of the instance.
    Not thread-safe; use one instance per thread.
    """

    def __init__(
        self,
        version: str = "330 core",
        paths: ResPaths | None = None,
        sink: DiagnosticSink | None = None,
    ):
        self.version = version
        self.paths = paths
        self.headers: Dict[str, str] = {}
        self.defines: Dict[str, str] = {}
        self._sink: DiagnosticSink = sink or log_sink

    # --- Configuration ---

    def set_version(self, version: str) -> None:
        self.version = version

    def set_paths(self, paths: ResPaths | None) -> None:
        self.paths = paths

    def set_sink(self, sink: DiagnosticSink | None) -> None:
        self._sink = sink or log_sink

    # --- Header store ---

    def has_header(self, name: str) -> bool:
        return name in self.headers

    def get_header(self, name: str) -> str:
        try:
            return self.headers[name]
        except KeyError:
            raise HeaderNotLoadedError(name) from None

    def add_header(self, name: str, source: str) -> None:
        self.headers[name] = source

    def load_header(self, name: str) -> None:
        """
        Read shaders/lib/<name>.glsl through the resource paths and cache it.

        Raises:
            OSError: if the file cannot be found or read.
        """
        if self.paths is None:
            raise FileNotFoundError(
                f"cannot load header '{name}': no resource paths set"
            )
        file = self.paths.find(header_path(name))
        self.add_header(name, read_string(file))

    # --- Define table ---

    def define(self, name: str, value: str = "") -> None:
        self.defines[name] = value

    def undefine(self, name: str) -> None:
        self.defines.pop(name, None)

    def has_define(self, name: str) -> bool:
        return name in self.defines

    def get_define(self, name: str) -> str:
        return self.defines.get(name, "")

    # --- Processing ---

    def _warning(self, file: str, linenum: int, message: str) -> None:
        self._sink(Diagnostic(file, linenum, message))

    def _include(self, file: str, linenum: int, argument: str) -> str:
        argument = argument.strip()
        if len(argument) < 3:
            raise DirectiveSyntaxError(file, linenum, "invalid 'include' syntax")
        if argument[0] != "<" or argument[-1] != ">":
            raise DirectiveSyntaxError(
                file, linenum, "expected '#include <filename>' syntax"
            )
        name = argument[1:-1]
        if not self.has_header(name):
            self.load_header(name)
        return self.get_header(name)

    def process(self, file: str | Path, source: str) -> str:
        """
        Preprocess one shader unit.

        Args:
            file: Name used in error messages and diagnostics only
            source: GLSL source code

        Returns:
            Self-contained source for the shader compiler

        Raises:
            DirectiveSyntaxError: malformed #include
            OSError: header file cannot be found or read
        """
        file = str(file)
        out = StringIO()
        linenum = 1

        out.write(f"#version {self.version}\n")
        for name in sorted(self.defines):
            out.write(f"#define {name} {self.defines[name]}\n")
        _source_line(out, linenum)

        for line in _split_lines(source):
            directive = _parse_directive(line)
            if directive is not None:
                keyword, argument = directive
                if keyword == "include":
                    header = self._include(file, linenum, argument)
                    _source_line(out, 1)
                    out.write(header)
                    out.write("\n")
                    linenum += 1
                    _source_line(out, linenum)
                    continue
                if keyword == "version":
                    self._warning(file, linenum, "removed redundant #version directive")
                    linenum += 1
                    _source_line(out, linenum)
                    continue
            linenum += 1
            out.write(line)

        return out.getvalue()

    def process_file(self, path: str | Path) -> str:
        """Read a shader file and process it, using its path as identifier."""
        return self.process(path, read_string(path))

    def __repr__(self) -> str:
        return (
            f"GlslExtension(version={self.version!r}, "
            f"headers={len(self.headers)}, defines={len(self.defines)})"
        )


__all__ = [
    "GlslExtension",
    "GlslPreprocessorError",
    "DirectiveSyntaxError",
    "HeaderNotLoadedError",
    "header_path",
    "has_includes",
]
