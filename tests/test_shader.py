"""Tests for shader assembly and compilation (OpenGL calls are faked)."""

import pytest

import glslext.shader as shader
from glslext.diagnostics import CollectingSink
from glslext.paths import ResPaths
from glslext.preprocessor import GlslExtension
from glslext.shader import (
    ShaderCompilationError,
    ShaderSource,
    compile_program,
    compile_stage,
    load_shader_source,
)


class FakeGL:
    """Records GL calls; sources containing 'error' fail to compile."""

    GL_VERTEX_SHADER = 1
    GL_FRAGMENT_SHADER = 2
    GL_COMPILE_STATUS = 10
    GL_LINK_STATUS = 11

    def __init__(self, link_ok=True):
        self.link_ok = link_ok
        self.sources = {}
        self.deleted_shaders = []
        self.deleted_programs = []
        self._next = 100

    def glCreateShader(self, shader_type):
        self._next += 1
        return self._next

    def glShaderSource(self, handle, source):
        self.sources[handle] = source

    def glCompileShader(self, handle):
        pass

    def glGetShaderiv(self, handle, pname):
        return "error" not in self.sources[handle]

    def glGetShaderInfoLog(self, handle):
        return b"0:3: syntax error"

    def glDeleteShader(self, handle):
        self.deleted_shaders.append(handle)

    def glCreateProgram(self):
        return 1

    def glAttachShader(self, program, handle):
        pass

    def glDetachShader(self, program, handle):
        pass

    def glLinkProgram(self, program):
        pass

    def glGetProgramiv(self, program, pname):
        return self.link_ok

    def glGetProgramInfoLog(self, program):
        return "link failed"

    def glDeleteProgram(self, program):
        self.deleted_programs.append(program)


@pytest.fixture
def fake_gl(monkeypatch):
    gl = FakeGL()
    monkeypatch.setattr(shader, "_gl", lambda: gl)
    return gl


@pytest.fixture
def res_dir(tmp_path):
    shaders = tmp_path / "shaders"
    (shaders / "lib").mkdir(parents=True)
    (shaders / "lib" / "common.glsl").write_text("uniform mat4 u_projview;", encoding="utf-8")
    (shaders / "ui.glslv").write_text(
        "#include <common>\nvoid main(){ gl_Position = u_projview * vec4(0.0); }\n",
        encoding="utf-8",
    )
    (shaders / "ui.glslf").write_text(
        "#version 330 core\nout vec4 f_color;\nvoid main(){ f_color = vec4(1.0); }\n",
        encoding="utf-8",
    )
    return tmp_path


def test_load_shader_source(res_dir):
    sink = CollectingSink()
    ext = GlslExtension(version="330 core", paths=ResPaths(res_dir), sink=sink)
    ext.define("UI", "1")

    source = load_shader_source(ext, "ui")

    assert source.name == "ui"
    assert source.vertex.startswith("#version 330 core\n#define UI 1\n")
    assert "uniform mat4 u_projview;" in source.vertex
    assert "out vec4 f_color;" in source.fragment
    assert source.fragment.count("#version") == 1
    assert len(sink.diagnostics) == 1
    assert sink.diagnostics[0].file.endswith("ui.glslf")


def test_load_shader_source_missing_stage(res_dir):
    (res_dir / "shaders" / "ui.glslf").unlink()
    ext = GlslExtension(paths=ResPaths(res_dir))
    with pytest.raises(FileNotFoundError):
        load_shader_source(ext, "ui")


def test_load_shader_source_without_paths():
    with pytest.raises(FileNotFoundError):
        load_shader_source(GlslExtension(), "ui")


def test_compile_program(fake_gl):
    program = compile_program(ShaderSource("ok", "void main(){}", "void main(){}"))
    assert program == 1
    assert len(fake_gl.deleted_shaders) == 2
    assert fake_gl.deleted_programs == []


def test_compile_error_reports_info_log(fake_gl):
    with pytest.raises(ShaderCompilationError) as excinfo:
        compile_program(ShaderSource("bad", "void main(){}", "error"))
    assert "syntax error" in str(excinfo.value)
    # vertex stage compiled first and is released
    assert len(fake_gl.deleted_shaders) == 2


def test_link_error(monkeypatch):
    gl = FakeGL(link_ok=False)
    monkeypatch.setattr(shader, "_gl", lambda: gl)
    with pytest.raises(ShaderCompilationError, match="link failed"):
        compile_program(ShaderSource("bad", "void main(){}", "void main(){}"))
    assert gl.deleted_programs == [1]


def test_compile_stage(fake_gl):
    compile_stage("void main(){}", "fragment")
    assert len(fake_gl.deleted_shaders) == 1
    with pytest.raises(ValueError):
        compile_stage("void main(){}", "geometry")
