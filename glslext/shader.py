"""
Shader program assembly - loads vertex/fragment units and compiles them.

Shader units live next to each other under the resource roots:
    shaders/<name>.glslv   vertex stage
    shaders/<name>.glslf   fragment stage

Both are run through the same GlslExtension, so they share the version,
defines and header cache. Compilation needs a current OpenGL context.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from glslext.files import read_string
from glslext.preprocessor import GlslExtension

SHADERS_FOLDER = "shaders"
VERTEX_EXTENSION = ".glslv"
FRAGMENT_EXTENSION = ".glslf"


class ShaderCompilationError(RuntimeError):
    """Raised when GLSL compilation or program linking fails."""


@dataclass
class ShaderSource:
    """Preprocessed sources of a shader program."""

    name: str
    vertex: str
    fragment: str


def load_shader_source(ext: GlslExtension, name: str) -> ShaderSource:
    """
    Find, read and preprocess both stages of shader `name`.

    Raises:
        FileNotFoundError: no resource paths set or a stage file is missing
        DirectiveSyntaxError: malformed directive in either stage
    """
    if ext.paths is None:
        raise FileNotFoundError(f"cannot load shader '{name}': no resource paths set")

    stages = []
    for extension in (VERTEX_EXTENSION, FRAGMENT_EXTENSION):
        file = ext.paths.find(f"{SHADERS_FOLDER}/{name}{extension}")
        stages.append(ext.process(file, read_string(file)))

    return ShaderSource(name=name, vertex=stages[0], fragment=stages[1])


def _gl():
    # PyOpenGL binds to the platform GL library on import
    from OpenGL import GL
    return GL


def _decode_log(log) -> str:
    return log.decode("utf-8") if isinstance(log, bytes) else str(log)


def compile_shader(source: str, shader_type: int) -> int:
    gl = _gl()
    shader = gl.glCreateShader(shader_type)
    gl.glShaderSource(shader, source)
    gl.glCompileShader(shader)
    status = gl.glGetShaderiv(shader, gl.GL_COMPILE_STATUS)
    if not status:
        info = _decode_log(gl.glGetShaderInfoLog(shader))
        gl.glDeleteShader(shader)
        raise ShaderCompilationError(info)
    return shader


def link_program(shaders: List[int]) -> int:
    gl = _gl()
    program = gl.glCreateProgram()

    for shader in shaders:
        gl.glAttachShader(program, shader)

    gl.glLinkProgram(program)
    status = gl.glGetProgramiv(program, gl.GL_LINK_STATUS)

    for shader in shaders:
        gl.glDetachShader(program, shader)
        gl.glDeleteShader(shader)

    if not status:
        info = _decode_log(gl.glGetProgramInfoLog(program))
        gl.glDeleteProgram(program)
        raise ShaderCompilationError(info)

    return program


def compile_program(source: ShaderSource) -> int:
    """Compile and link both stages. Returns the GL program id."""
    gl = _gl()
    vert = compile_shader(source.vertex, gl.GL_VERTEX_SHADER)
    try:
        frag = compile_shader(source.fragment, gl.GL_FRAGMENT_SHADER)
    except ShaderCompilationError:
        gl.glDeleteShader(vert)
        raise
    return link_program([vert, frag])


def compile_stage(source: str, stage: str) -> None:
    """Compile a single stage ("vertex" or "fragment") and discard it."""
    gl = _gl()
    types = {"vertex": gl.GL_VERTEX_SHADER, "fragment": gl.GL_FRAGMENT_SHADER}
    if stage not in types:
        raise ValueError(f"unknown shader stage '{stage}'")
    gl.glDeleteShader(compile_shader(source, types[stage]))


__all__ = [
    "ShaderCompilationError",
    "ShaderSource",
    "load_shader_source",
    "compile_shader",
    "compile_stage",
    "link_program",
    "compile_program",
]
