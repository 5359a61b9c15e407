"""CLI entrypoints for errgen commands."""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from .attrs import StandardAttributeParser
from .config import ConfigError, ErrgenConfig, load_config
from .errors import ExtractionError
from .extractor import extract_input
from .frontend import RustDeclarationReader
from .logging import configure_logging, get_logger
from .probe import ProbeEnvironment, run_probes
from .serialization import input_to_dict


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )


def _add_log_file_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write log records to this file.",
    )


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=None,
        help="Path to .errgen.yml or its directory (defaults to the current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="errgen",
        description="Extract error type models and probe toolchain capabilities.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    probe_parser = subparsers.add_parser(
        "probe",
        help="Compile capability probes and print cargo cfg directives.",
    )
    _add_verbose_option(probe_parser, suppress_default=True)
    _add_config_option(probe_parser)
    _add_log_file_option(probe_parser)

    extract_parser = subparsers.add_parser(
        "extract",
        help="Print the typed model of the error declarations in a Rust file.",
    )
    _add_verbose_option(extract_parser, suppress_default=True)
    _add_config_option(extract_parser)
    _add_log_file_option(extract_parser)
    extract_parser.add_argument("path", help="Rust source file to read.")
    extract_parser.add_argument(
        "--type",
        dest="type_name",
        default=None,
        help="Only extract the declaration with this name.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for errgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if args.log_file else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)

    try:
        config = _load_config(args.config)
    except ConfigError as exc:
        if args.command != "probe":
            parser.exit(1, f"{exc}\n")
        # Probing never fails the build, so fall back to the default probes.
        get_logger("cli").warning("Ignoring invalid configuration: %s", exc)
        config = ErrgenConfig(root=Path.cwd())

    if args.command == "probe":
        run_probes(
            config.probe.probes,
            ProbeEnvironment.from_environ(os.environ),
            options=config.probe.options,
        )
    elif args.command == "extract":
        _run_extract(parser, Path(args.path), args.type_name)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_extract(
    parser: argparse.ArgumentParser, path: Path, type_name: str | None
) -> None:
    logger = get_logger("cli")
    reader = RustDeclarationReader()
    if not reader.enabled:
        parser.exit(
            1,
            "tree-sitter-rust is required for extraction. Install it with `pip install tree-sitter tree-sitter-rust`.\n",
        )
    try:
        declarations = reader.read_file(path)
    except (OSError, UnicodeDecodeError) as exc:
        parser.exit(1, f"Unable to read {path}: {exc}\n")

    if type_name is not None:
        declarations = [node for node in declarations if node.name == type_name]
        if not declarations:
            parser.exit(1, f"No declaration named {type_name} in {path}\n")
    logger.debug("Read %d declarations from %s", len(declarations), path)

    attribute_parser = StandardAttributeParser()
    models = []
    for node in declarations:
        try:
            models.append(input_to_dict(extract_input(node, attribute_parser)))
        except ExtractionError as exc:
            parser.exit(1, f"{exc.format()}\n")
    print(json.dumps(models, indent=2))


def _load_config(config_path: str | None) -> ErrgenConfig:
    return load_config(Path(config_path) if config_path else Path.cwd())


if __name__ == "__main__":
    main(sys.argv[1:])
