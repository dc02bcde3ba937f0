"""Command-line interface for the C6 compiler."""

from __future__ import annotations

import argparse
import sys
import time
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from c6 import __version__
from c6.catalog import DEFAULT_CATALOG, Catalog
from c6.errors import InputNotFound, MalformedTemplateParameter, WrongExtension

SOURCE_EXTENSION = ".c6"
DEFAULT_OUTPUT_EXTENSION = ".cpp"

# Passing this as --output writes the generated code to stdout
STDOUT = "-"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    extension: str = DEFAULT_OUTPUT_EXTENSION
    extra_headers: dict[str, list[str]] = field(default_factory=dict)
    benchmark: bool = False
    watch: bool = False
    debug: bool = False


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="c6",
        description=(
            "Compile a .c6 file to a C++ file of the same name in the same directory. "
            "The compiler does not check the C6 code: erroneous input may still compile."
        ),
    )
    p.add_argument("input", nargs="?", help="Input .c6 file")
    p.add_argument(
        "-o",
        "--output",
        help=f"Output file (default: input with {DEFAULT_OUTPUT_EXTENSION}; '-' for stdout)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover c6.toml)",
    )
    p.add_argument("--benchmark", action="store_true", help="Report how long compiling took")
    p.add_argument("--watch", action="store_true", help="Watch for changes and recompile")
    p.add_argument("--debug", action="store_true", help="Dump input tokens to stderr")
    p.add_argument(
        "-d",
        "--docs",
        action="store_true",
        help="Show documentation for the functions in the c6 namespace",
    )
    p.add_argument("-v", "--version", action="store_true", help="Show the C6 version")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "c6.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def header_rules(config: dict[str, Any]) -> dict[str, list[str]]:
    """Read the [headers] table: "<header>" = ["trigger", ...]."""
    rules: dict[str, list[str]] = {}
    cfg_headers = config.get("headers")
    if isinstance(cfg_headers, dict):
        for directive, triggers in cfg_headers.items():
            if not isinstance(triggers, list):
                raise argparse.ArgumentTypeError(
                    f"invalid [headers] entry for {directive}: expected a list of names"
                )
            rules[str(directive)] = [str(t) for t in triggers]
    return rules


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = Path(args.input.strip())
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    extra_headers = header_rules(config)

    extension = DEFAULT_OUTPUT_EXTENSION
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict):
        cfg_ext = cfg_output.get("extension")
        if isinstance(cfg_ext, str) and cfg_ext:
            extension = cfg_ext if cfg_ext.startswith(".") else "." + cfg_ext

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        extension=extension,
        extra_headers=extra_headers,
        benchmark=args.benchmark,
        watch=args.watch,
        debug=args.debug,
    )


def output_path_for(options: CliOptions) -> Path | None:
    """Return where generated code goes; None means stdout."""
    if options.output_file is not None:
        if str(options.output_file) == STDOUT:
            return None
        return options.output_file
    return options.input_file.with_suffix(options.extension)


def read_source(path: Path) -> str:
    """Read a .c6 file, raising WrongExtension or InputNotFound."""
    if path.suffix != SOURCE_EXTENSION:
        raise WrongExtension(path, SOURCE_EXTENSION)
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise InputNotFound(path, f"is not valid UTF-8 text (byte {exc.start})") from None
    except OSError:
        raise InputNotFound(path) from None


def catalog_for(options: CliOptions) -> Catalog:
    if options.extra_headers:
        return DEFAULT_CATALOG.with_headers(options.extra_headers)
    return DEFAULT_CATALOG


def compile_file(options: CliOptions) -> str:
    """Read and compile a C6 file to C++ source text."""
    from c6.assemble import compile_source
    from c6.debug import dump_tokens
    from c6.scanner import scan

    source = read_source(options.input_file)

    if options.debug:
        dump_tokens(scan(source))

    return compile_source(source, catalog_for(options))


def write_output(options: CliOptions, code: str) -> None:
    path = output_path_for(options)
    if path is None:
        sys.stdout.write(code)
    else:
        path.write_text(code, encoding="utf-8")


def docs_text(catalog: Catalog = DEFAULT_CATALOG) -> str:
    """Return signatures and descriptions for every built-in."""
    from c6.synth import param_text, template_text, type_text

    blocks: list[str] = []
    for fn in catalog.builtins:
        params = ", ".join(param_text(p) for p in fn.params)
        head = f"{type_text(fn.returns)} {catalog.namespace}::{fn.name}({params})"
        if fn.template is not None:
            head = f"{template_text(fn.template)}\n{head}"
        blocks.append(f"{head}\n    {fn.doc}")
    return "\n\n".join(blocks) + "\n"


def _report(exc: Exception, options: CliOptions) -> None:
    if isinstance(exc, MalformedTemplateParameter):
        print(exc.format(str(options.input_file)), file=sys.stderr)
    else:
        print(str(exc), file=sys.stderr)


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, recompile on each modification."""
    last_mtime = 0.0
    print(f"Watching {options.input_file} for changes...", file=sys.stderr)
    try:
        while True:
            try:
                mtime = options.input_file.stat().st_mtime
            except OSError:
                time.sleep(0.5)
                continue
            if mtime != last_mtime:
                last_mtime = mtime
                try:
                    write_output(options, compile_file(options))
                    print(f"Compiled {options.input_file}", file=sys.stderr)
                except (InputNotFound, WrongExtension, MalformedTemplateParameter) as exc:
                    _report(exc, options)
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"C6 Version {__version__}")
        return 0
    if args.docs:
        sys.stdout.write(docs_text())
        return 0
    if args.input is None:
        parser.print_help()
        return 0

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config file: {exc}", file=sys.stderr)
        return 2

    if options.watch:
        watch_loop(options)
        return 0

    print(f"Compiling {options.input_file}...", file=sys.stderr)
    start = time.perf_counter()
    try:
        code = compile_file(options)
    except (InputNotFound, WrongExtension, MalformedTemplateParameter) as exc:
        _report(exc, options)
        return 1

    write_output(options, code)
    destination = output_path_for(options) or "stdout"
    print(f"Compilation successful: wrote {destination}", file=sys.stderr)

    if options.benchmark:
        elapsed = (time.perf_counter() - start) * 1000
        print(f"[BENCHMARK] Time took: {elapsed:.4f}ms", file=sys.stderr)

    return 0
