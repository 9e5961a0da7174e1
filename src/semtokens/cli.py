"""Command-line interface for semtokens."""

from __future__ import annotations

import argparse
import importlib
import json
import logging
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from semtokens.errors import ConfigError

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options merged with the config file."""

    command: str
    program: str | None
    walker: str | None
    log_level: str
    as_json: bool
    input_file: Path | None
    source_file: Path | None


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="semtokens",
        description="LSP semantic token encoder",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover semtokens.toml)",
    )
    p.add_argument(
        "--log-level",
        choices=_LOG_LEVELS,
        default=None,
        type=str.upper,
        help="Logging level (default: WARNING)",
    )
    sub = p.add_subparsers(dest="command", required=True)

    legend = sub.add_parser("legend", help="Print the token legend")
    legend.add_argument("--json", action="store_true", help="Print as JSON")

    decode = sub.add_parser("decode", help="Decode an encoded token array")
    decode.add_argument("input", help="JSON file with an integer array ('-' for stdin)")
    decode.add_argument("--source", metavar="FILE", help="Source text to show token text")

    serve = sub.add_parser("serve", help="Run the language server on stdio")
    serve.add_argument("--program", metavar="MODULE:ATTR", help="Program factory")
    serve.add_argument("--walker", metavar="MODULE:ATTR", help="Walker factory")
    return p


def load_config(config_path: Path | None, search_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else search_dir / "semtokens.toml"

    if not path.is_file():
        return {}

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid config file {path}: {exc}") from exc


def resolve_options(args: argparse.Namespace, search_dir: Path | None = None) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, search_dir if search_dir is not None else Path("."))

    program: str | None = None
    walker: str | None = None
    cfg_backend = config.get("backend")
    if isinstance(cfg_backend, dict):
        cfg_program = cfg_backend.get("program")
        if isinstance(cfg_program, str):
            program = cfg_program
        cfg_walker = cfg_backend.get("walker")
        if isinstance(cfg_walker, str):
            walker = cfg_walker
    if getattr(args, "program", None):
        program = args.program
    if getattr(args, "walker", None):
        walker = args.walker

    log_level = "WARNING"
    cfg_logging = config.get("logging")
    if isinstance(cfg_logging, dict):
        cfg_level = cfg_logging.get("level")
        if isinstance(cfg_level, str):
            if cfg_level.upper() not in _LOG_LEVELS:
                raise ConfigError(f"invalid logging level in config: {cfg_level!r}")
            log_level = cfg_level.upper()
    if args.log_level is not None:
        log_level = args.log_level

    input_file = getattr(args, "input", None)
    source_file = getattr(args, "source", None)

    return CliOptions(
        command=args.command,
        program=program,
        walker=walker,
        log_level=log_level,
        as_json=getattr(args, "json", False),
        input_file=Path(input_file) if input_file and input_file != "-" else None,
        source_file=Path(source_file) if source_file else None,
    )


def load_reference(ref: str) -> Any:
    """Import ``module:attr`` and return the attribute."""
    module_name, sep, attr = ref.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigError(f"invalid reference (expected MODULE:ATTR): {ref}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigError(f"cannot import {module_name!r}: {exc}") from exc
    obj: Any = module
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise ConfigError(f"{module_name!r} has no attribute {attr!r}") from None
    return obj


def read_encoded(text: str) -> list[int]:
    """Parse a JSON integer array, or an object with a ``data`` array."""
    try:
        value = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON: {exc}") from exc
    if isinstance(value, dict):
        value = value.get("data")
    if not isinstance(value, list) or not all(
        isinstance(v, int) and not isinstance(v, bool) and v >= 0 for v in value
    ):
        raise ValueError("expected an array of non-negative integers")
    return value


def _print_legend(options: CliOptions) -> None:
    from semtokens.debug import dump_legend
    from semtokens.legend import LEGEND

    if options.as_json:
        payload = {
            "tokenTypes": list(LEGEND.token_types),
            "tokenModifiers": list(LEGEND.token_modifiers),
        }
        sys.stdout.write(json.dumps(payload, indent=2) + "\n")
    else:
        dump_legend(LEGEND, file=sys.stdout)


def _decode(options: CliOptions) -> None:
    from semtokens.debug import dump_tokens

    if options.input_file is None:
        text = sys.stdin.read()
    else:
        text = options.input_file.read_text(encoding="utf-8")
    data = read_encoded(text)
    source = (
        options.source_file.read_text(encoding="utf-8")
        if options.source_file is not None
        else None
    )
    dump_tokens(data, source=source, file=sys.stdout)


def _serve(options: CliOptions) -> None:
    from semtokens.lsp import main as lsp_main

    if options.program is None or options.walker is None:
        raise ConfigError("serve needs a backend: set [backend] program and walker")
    logger.info("loading backend program=%s walker=%s", options.program, options.walker)
    program_factory = load_reference(options.program)
    walker_factory = load_reference(options.walker)
    lsp_main(program_factory, walker_factory)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except ConfigError as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=options.log_level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if options.command == "legend":
            _print_legend(options)
        elif options.command == "decode":
            _decode(options)
        elif options.command == "serve":
            _serve(options)
    except ConfigError as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return 2
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    return 0
