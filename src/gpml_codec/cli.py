"""Command-line interface for converting GPML documents between dialects."""
import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from lxml import etree as ET

from gpml_codec.core.codec import CodecConfig, GpmlCodec
from gpml_codec.core.dialects.base import Dialect
from gpml_codec.exceptions.codec import GpmlCodecError, SchemaValidationError
from gpml_codec.utils.logging import setup_logger
from gpml_codec.utils.validation import ValidationLevel

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gpml-codec",
        description="Read and write GPML pathway documents.",
    )
    parser.add_argument("--debug", action="store_true", help="Log debug output")
    parser.add_argument("--log-dir", help="Also write gpml_codec.log to this directory")

    subparsers = parser.add_subparsers(dest="command")

    convert_parser = subparsers.add_parser("convert", help="Convert a GPML document")
    convert_parser.add_argument("input", help="Input GPML file (2013a or 2021)")
    convert_parser.add_argument("-o", "--output", required=True, help="Output GPML path")
    convert_parser.add_argument(
        "--dialect",
        choices=[dialect.value for dialect in Dialect],
        default=Dialect.GPML2021.value,
        help="Dialect to write (default: %(default)s)",
    )
    convert_parser.add_argument("--validate", action="store_true",
                                help="Validate input and output against XSD schemas")
    convert_parser.add_argument(
        "--xsd",
        action="append",
        default=[],
        metavar="PATH",
        help="XSD file; its targetNamespace selects the dialect (repeatable)",
    )
    convert_parser.add_argument("--report", help="Save the conversion report to this path")
    convert_parser.add_argument("--strict", action="store_true",
                                help="Fail instead of dropping information the target dialect cannot hold")
    return parser


def _schema_paths(paths: List[str]) -> Dict[Dialect, Path]:
    """Map XSD files to the dialect named by their target namespace.

    Raises:
        SchemaValidationError: If a file cannot be read or targets no known dialect
    """
    schema_paths = {}
    for path in paths:
        try:
            root = ET.parse(path).getroot()
        except (OSError, ET.XMLSyntaxError) as e:
            raise SchemaValidationError(f"Cannot read schema {path}: {e}") from e
        namespace = root.get("targetNamespace")
        schema_paths[Dialect.parse(namespace or "")] = Path(path)
    return schema_paths


def _handle_convert(args: argparse.Namespace) -> int:
    config = CodecConfig(
        validate_schema=args.validate,
        schema_paths=_schema_paths(args.xsd),
        validation_level=ValidationLevel.STRICT if args.strict else ValidationLevel.NORMAL,
        default_dialect=Dialect.parse(args.dialect),
        report_path=Path(args.report) if args.report else None,
    )
    codec = GpmlCodec(config)
    logger.debug("Converting %s to GPML %s", args.input, config.default_dialect.value)

    model, collector = codec.read_file(args.input)
    codec.write_file(model, args.output, collector=collector)
    if config.report_path is not None:
        # refresh with the warnings raised while writing
        collector.save_report(config.report_path)

    print(f"Wrote {args.output} ({len(collector.results)} issues)")
    return 0


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    setup_logger("gpml_codec", logging.DEBUG if args.debug else logging.WARNING, args.log_dir)

    if args.command != "convert":
        parser.print_help()
        return 2

    try:
        return _handle_convert(args)
    except GpmlCodecError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
