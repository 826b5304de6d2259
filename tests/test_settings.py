"""Tests for preprocessor settings."""

import json

import pytest

from glslext.settings import (
    DEFAULT_VERSION,
    PreprocessorSettings,
    create_preprocessor,
    load_settings,
    save_settings,
)


def test_defaults():
    settings = PreprocessorSettings()
    assert settings.version == DEFAULT_VERSION
    assert settings.defines == {}
    assert settings.search_roots == []


def test_from_dict_stringifies_values():
    settings = PreprocessorSettings.from_dict(
        {"version": 460, "defines": {"MAX_LIGHTS": 8}, "search_roots": ["mods/a"]}
    )
    assert settings.version == "460"
    assert settings.defines == {"MAX_LIGHTS": "8"}
    assert settings.search_roots == ["mods/a"]


def test_from_dict_rejects_bad_types():
    with pytest.raises(ValueError):
        PreprocessorSettings.from_dict({"defines": ["A"]})
    with pytest.raises(ValueError):
        PreprocessorSettings.from_dict({"search_roots": "mods"})


def test_save_and_load(tmp_path):
    path = tmp_path / "config" / "glslext.json"
    settings = PreprocessorSettings(
        version="450 core",
        defines={"A": "1"},
        main_folder="res",
        search_roots=["mods/water"],
    )
    save_settings(settings, path)

    loaded = load_settings(path)
    assert loaded.version == "450 core"
    assert loaded.defines == {"A": "1"}
    assert loaded.main_folder == str(path.parent / "res")
    assert loaded.search_roots == [str(path.parent / "mods/water")]


def test_load_missing_file_gives_defaults(tmp_path):
    settings = load_settings(tmp_path / "nope.json")
    assert settings.version == DEFAULT_VERSION
    assert settings.main_folder == str(tmp_path / ".")


def test_load_malformed_file_logs_error(tmp_path):
    from glslext import log

    path = tmp_path / "glslext.json"
    path.write_text("{not json", encoding="utf-8")

    records = []
    log.set_callback(lambda level, msg: records.append((level, msg)))
    try:
        settings = load_settings(path)
    finally:
        log.set_callback(None)

    assert settings.version == DEFAULT_VERSION
    assert any(level == log.Level.ERROR for level, _ in records)


def test_create_preprocessor(tmp_path):
    lib = tmp_path / "res" / "shaders" / "lib"
    lib.mkdir(parents=True)
    (lib / "fog.glsl").write_text("float fogFactor;", encoding="utf-8")
    path = tmp_path / "glslext.json"
    path.write_text(
        json.dumps({"version": "330", "defines": {"B": "2", "A": "1"}, "main_folder": "res"}),
        encoding="utf-8",
    )

    ext = create_preprocessor(load_settings(path))
    result = ext.process("main.glslf", "#include <fog>\n")

    assert result.startswith("#version 330\n#define A 1\n#define B 2\n#line 1\n")
    assert "float fogFactor;" in result
