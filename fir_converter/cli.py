"""Command-line entry point for the FIR boundary converter.

This module is purely the wiring layer between the command line and the
engine: it reads files, picks the mode from the arguments, calls
``parse`` / ``validate`` / ``repair`` / ``serialize`` and prints the
outcome.

Modes:
    fir-converter INPUT                validate INPUT, exit 1 on findings
    fir-converter INPUT OUTPUT         same format: fix INPUT into OUTPUT
                                       other format: convert INPUT to OUTPUT
"""

from __future__ import annotations

import argparse
import enum
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from fir_converter import __version__
from fir_converter.codecs import BoundaryFormat, parse, serialize
from fir_converter.core.config import ConverterConfig
from fir_converter.core.exceptions import FirConverterError
from fir_converter.operations import repair, validate

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger("fir_converter.cli")

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_ERROR = 2


class Mode(enum.Enum):
    VALIDATE = "validate"
    FIX = "fix"
    CONVERT = "convert"


def select_mode(input_format: BoundaryFormat, output_format: BoundaryFormat | None) -> Mode:
    """Validate with one file, fix between same formats, convert otherwise."""
    if output_format is None:
        return Mode.VALIDATE
    if output_format is input_format:
        return Mode.FIX
    return Mode.CONVERT


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fir-converter",
        description="Validate, fix and convert FIR boundaries between .dat and GeoJSON.",
    )
    parser.add_argument(
        "input", type=Path, help="Input file (.dat, .geojson or .json)"
    )
    parser.add_argument(
        "output",
        type=Path,
        nargs="?",
        help=(
            "If missing, only validation is done. If the same type as INPUT, "
            "fixes are applied and written here. If the other type, INPUT is "
            "converted into it."
        ),
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log every finding and codec step"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = ConverterConfig.from_env()
        input_format = BoundaryFormat.from_path(args.input)
        output_format = BoundaryFormat.from_path(args.output) if args.output else None
        mode = select_mode(input_format, output_format)
        logger.info("Mode: %s (%s)", mode.value, args.input)

        data = args.input.read_bytes()
        if output_format is None:
            return _run_validate(input_format, data, config)
        if mode is Mode.FIX:
            return _run_fix(input_format, data, args.output, config)
        return _run_convert(input_format, output_format, data, args.output, config)
    except FirConverterError as exc:
        print(f"{args.input}: {exc}", file=sys.stderr)
        return EXIT_ERROR
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_ERROR


def _run_validate(fmt: BoundaryFormat, data: bytes, config: ConverterConfig) -> int:
    document = parse(fmt, data, config=config)
    report = validate(document)
    for finding in report:
        print(finding)
    if report.is_valid:
        print(f"OK: {len(document)} boundary(ies), no issues found")
        return EXIT_OK
    print(f"{len(report)} issue(s) found in {len(document)} boundary(ies)")
    return EXIT_FINDINGS


def _run_fix(
    fmt: BoundaryFormat,
    data: bytes,
    output: Path,
    config: ConverterConfig,
) -> int:
    document = parse(fmt, data, config=config, strict=False)
    for skipped in document.skipped_lines:
        print(f"[skipped] {skipped}")
    document, notes = repair(document, validate(document))
    for note in notes:
        print(note)
    output.write_bytes(serialize(fmt, document, config=config))
    print(f"Wrote {len(document)} boundary(ies) to {output}")
    return EXIT_OK


def _run_convert(
    source: BoundaryFormat,
    target: BoundaryFormat,
    data: bytes,
    output: Path,
    config: ConverterConfig,
) -> int:
    document = parse(source, data, config=config)
    output.write_bytes(serialize(target, document, config=config))
    print(f"Converted {len(document)} boundary(ies) to {output}")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
