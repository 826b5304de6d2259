"""
glslext - GLSL source preprocessor.

Main modules:
- preprocessor - #include expansion, version/define preamble, #line markers
- paths - resource lookup across ordered search roots
- settings - JSON configuration of a preprocessor instance
- shader - vertex/fragment assembly and OpenGL compilation
"""

from .diagnostics import CollectingSink, Diagnostic
from .paths import ResPaths
from .preprocessor import (
    DirectiveSyntaxError,
    GlslExtension,
    GlslPreprocessorError,
    HeaderNotLoadedError,
)

__version__ = '0.1.0'

__all__ = [
    'CollectingSink',
    'Diagnostic',
    'DirectiveSyntaxError',
    'GlslExtension',
    'GlslPreprocessorError',
    'HeaderNotLoadedError',
    'ResPaths',
]
