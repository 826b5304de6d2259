"""
Command-line entry point for the GLSL preprocessor.

Usage:
    python -m glslext shaders/main.glslf -V "330 core" -D MAX_LIGHTS=8 -I res
    python -m glslext shaders/main.glslv --config glslext.json --check
"""

import argparse
import sys
from pathlib import Path

from glslext import log
from glslext.files import read_string, write_string
from glslext.preprocessor import GlslPreprocessorError
from glslext.settings import PreprocessorSettings, create_preprocessor, load_settings

STAGES = {
    ".glslv": "vertex",
    ".vert": "vertex",
    ".glslf": "fragment",
    ".frag": "fragment",
}


def parse_define(text: str) -> tuple[str, str]:
    """Parse NAME or NAME=VALUE."""
    name, _, value = text.partition("=")
    if not name:
        raise argparse.ArgumentTypeError(f"invalid define '{text}'")
    return name, value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="glslext",
        description="Expand #include directives and prepend version/defines to a GLSL unit",
    )
    parser.add_argument(
        "source",
        type=str,
        help="Shader file to preprocess",
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="JSON settings file (version, defines, search roots)",
    )
    parser.add_argument(
        "--version-token", "-V",
        type=str,
        default=None,
        help="Target GLSL version, e.g. \"330 core\" (overrides config)",
    )
    parser.add_argument(
        "-D",
        dest="defines",
        type=parse_define,
        action="append",
        default=[],
        metavar="NAME[=VALUE]",
        help="Add a define (repeatable)",
    )
    parser.add_argument(
        "-I",
        dest="roots",
        type=str,
        action="append",
        default=[],
        metavar="DIR",
        help="Add a resource search root, searched before configured roots (repeatable)",
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Write result to file instead of stdout",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Compile the result in a headless OpenGL context",
    )
    return parser


def _check(source_path: Path, text: str, version: str) -> None:
    from glslext.headless import headless_context
    from glslext.shader import compile_stage

    stage = STAGES.get(source_path.suffix)
    if stage is None:
        raise ValueError(f"cannot tell shader stage from extension '{source_path.suffix}'")

    with headless_context(version):
        compile_stage(text, stage)
    log.info(f"[glslext] {source_path}: {stage} stage compiled")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    log.setup_console()

    if args.config is not None:
        if not Path(args.config).is_file():
            log.error(f"config file not found: {args.config}")
            return 1
        settings = load_settings(args.config)
    else:
        settings = PreprocessorSettings()

    if args.version_token is not None:
        settings.version = args.version_token
    settings.search_roots = args.roots + settings.search_roots

    ext = create_preprocessor(settings)
    for name, value in args.defines:
        ext.define(name, value)

    source_path = Path(args.source)
    try:
        text = ext.process(source_path, read_string(source_path))
        if args.check:
            _check(source_path, text, ext.version)
    except GlslPreprocessorError as e:
        log.error(str(e))
        return 1
    except (OSError, ValueError, RuntimeError) as e:
        log.error(f"{source_path}: {e}")
        return 1

    if args.output is not None:
        write_string(args.output, text)
    else:
        sys.stdout.write(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
