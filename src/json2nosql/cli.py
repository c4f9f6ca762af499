"""Command-line entrypoint for json2nosql."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from json2nosql import __version__

DEFAULT_EXPORT_STEM = "nosql_export"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="json2nosql",
        description=(
            "Turn a JSON document into insertion code and index suggestions "
            "for MongoDB, Firebase, DynamoDB and CouchDB."
        ),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override JSON2NOSQL_LOG_LEVEL (DEBUG, INFO, WARNING, ERROR).",
    )

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser(
        "config-check",
        help="Validate environment configuration for json2nosql.",
    )
    subparsers.add_parser(
        "backends",
        help="List supported backends and document structures.",
    )
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate insertion code for a JSON document.",
    )
    generate_parser.add_argument(
        "input", help="Path to a JSON file, or '-' to read standard input."
    )
    generate_parser.add_argument(
        "--backend",
        "-b",
        default=None,
        help="Target backend (default: JSON2NOSQL_DEFAULT_BACKEND or mongodb).",
    )
    generate_parser.add_argument(
        "--structure",
        "-s",
        default=None,
        help=(
            "Document structure: nested, flat, references or arrays "
            "(default: JSON2NOSQL_DEFAULT_STRUCTURE or nested)."
        ),
    )
    generate_parser.add_argument(
        "--add-ids", action="store_true", help="Synthesize a primary key per document."
    )
    generate_parser.add_argument(
        "--add-timestamps",
        action="store_true",
        help="Add createdAt/updatedAt fields set to the generation time.",
    )
    generate_parser.add_argument(
        "--add-indexes", action="store_true", help="Append index suggestions."
    )
    generate_parser.add_argument("--db-name", default=None, help="Database name.")
    generate_parser.add_argument(
        "--collection-name", default=None, help="Collection name (MongoDB, Firebase)."
    )
    generate_parser.add_argument(
        "--table-name", default=None, help="Table name (DynamoDB)."
    )
    generate_parser.add_argument(
        "--sort-key", default=None, help="Sort-key attribute name (DynamoDB)."
    )
    generate_parser.add_argument(
        "--detect-dates",
        action="store_true",
        help="Render ISO-8601 date-time strings with the backend date literal.",
    )
    generate_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed the ID generator for reproducible output.",
    )
    generate_parser.add_argument(
        "--output",
        "-o",
        default=None,
        help=(
            "Write code to this file. When a directory is given the file is "
            f"named {DEFAULT_EXPORT_STEM}_<backend>.js."
        ),
    )
    generate_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the generation payload as JSON instead of plain code.",
    )
    indexes_parser = subparsers.add_parser(
        "suggest-indexes",
        help="Show index candidates for a JSON document.",
    )
    indexes_parser.add_argument(
        "input", help="Path to a JSON file, or '-' to read standard input."
    )
    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Report duplicate keys, structural warnings and metrics for a JSON document.",
    )
    inspect_parser.add_argument(
        "input", help="Path to a JSON file, or '-' to read standard input."
    )
    inspect_parser.add_argument(
        "--json", action="store_true", help="Print the report as JSON."
    )
    format_parser = subparsers.add_parser(
        "format",
        help="Pretty-print or minify a JSON document.",
    )
    format_parser.add_argument(
        "input", help="Path to a JSON file, or '-' to read standard input."
    )
    format_parser.add_argument(
        "--indent", type=int, default=2, help="Indentation width (default: 2)."
    )
    format_parser.add_argument(
        "--sort-keys", action="store_true", help="Sort object keys alphabetically."
    )
    format_parser.add_argument(
        "--minify", action="store_true", help="Remove all insignificant whitespace."
    )
    return parser


def _output_path(output: str, backend: str) -> Path:
    path = Path(output).expanduser()
    if path.is_dir():
        return path / f"{DEFAULT_EXPORT_STEM}_{backend}.js"
    return path


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        from json2nosql.config import ConfigError, load_settings
        from json2nosql.log import configure_logging
    except ModuleNotFoundError:
        print(
            "Runtime dependencies are missing. "
            "Install project dependencies first (pip install -e .).",
            file=sys.stderr,
        )
        return 2

    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"Configuration error:\n{exc}", file=sys.stderr)
        return 2

    level = args.log_level.upper() if args.log_level else settings.log_level_number
    try:
        configure_logging(level)
    except ValueError:
        print(f"Unknown log level: {args.log_level}", file=sys.stderr)
        return 2

    if args.command == "config-check":
        print("Configuration loaded successfully:")
        print(f"- JSON2NOSQL_DEFAULT_DB_NAME: {settings.default_db_name}")
        print(f"- JSON2NOSQL_DEFAULT_BACKEND: {settings.default_backend}")
        print(f"- JSON2NOSQL_DEFAULT_STRUCTURE: {settings.default_structure}")
        print(
            "- JSON2NOSQL_STRICT_STRUCTURE: "
            f"{'true' if settings.strict_structure else 'false'}"
        )
        print(f"- JSON2NOSQL_LOG_LEVEL: {settings.log_level}")
        return 0

    if args.command == "backends":
        from json2nosql.models.options import Backend, Structure

        print("Backends:")
        for backend in Backend:
            print(f"- {backend.value}")
        print("Structures:")
        for structure in Structure:
            print(f"- {structure.value}")
        return 0

    if args.command == "suggest-indexes":
        from json2nosql.indexes.advisor import advise_indexes
        from json2nosql.parsing import DocumentParseError, read_document

        try:
            document = read_document(args.input)
        except DocumentParseError as exc:
            print(f"Input could not be parsed:\n{exc}", file=sys.stderr)
            return 1

        advice = advise_indexes(document)
        print("Index candidates:")
        if not advice.has_candidates:
            print("- (none)")
            return 0
        for candidate in advice.candidates:
            print(f"- {candidate.field}")
            print(f"  reasons: {', '.join(candidate.reasons)}")
        if advice.compound:
            print(f"Compound suggestion: {', '.join(advice.compound)}")
        return 0

    if args.command == "inspect":
        from dataclasses import asdict

        from json2nosql.inspection import inspect_text
        from json2nosql.parsing import DocumentParseError, read_text

        try:
            report = inspect_text(read_text(args.input))
        except DocumentParseError as exc:
            print(f"Input could not be parsed:\n{exc}", file=sys.stderr)
            return 1

        if args.json:
            payload = asdict(report)
            payload["valid"] = report.valid
            print(json.dumps(payload, indent=2, sort_keys=True))
            return 0 if report.valid else 1

        metrics = report.metrics
        print(f"Valid: {'yes' if report.valid else 'no'}")
        print("Issues:")
        for duplicate in report.duplicate_keys:
            print(f"- {duplicate.message}")
        if not report.duplicate_keys:
            print("- (none)")
        print("Warnings:")
        for warning in report.warnings:
            print(f"- {warning.message}")
        if not report.warnings:
            print("- (none)")
        print("Metrics:")
        print(f"- size: {metrics.size} bytes")
        print(f"- nodes: {metrics.node_count}")
        print(f"- depth: {metrics.depth}")
        print(f"- objects: {metrics.object_count}")
        print(f"- arrays: {metrics.array_count}")
        print(f"- keys: {metrics.key_count}")
        print(
            "- value types: "
            + ", ".join(f"{name}={count}" for name, count in metrics.value_types.items())
        )
        return 0 if report.valid else 1

    if args.command == "format":
        from json2nosql.inspection import format_document, minify_document
        from json2nosql.parsing import DocumentParseError, read_document

        try:
            document = read_document(args.input)
        except DocumentParseError as exc:
            print(f"Input could not be parsed:\n{exc}", file=sys.stderr)
            return 1

        if args.minify:
            print(minify_document(document))
        else:
            print(format_document(document, indent=args.indent, sort_keys=args.sort_keys))
        return 0

    if args.command == "generate":
        from json2nosql.generator import generate_artifact
        from json2nosql.models.options import (
            InvalidOptionsError,
            UnsupportedStructureError,
        )
        from json2nosql.parsing import DocumentParseError, read_document
        from json2nosql.serialize.literals import SerializationError
        from json2nosql.sources import RandomIdSource
        from json2nosql.transform.documents import InvalidInputError

        options = {
            "add_ids": args.add_ids,
            "add_timestamps": args.add_timestamps,
            "add_indexes": args.add_indexes,
            "db_name": args.db_name,
            "collection_name": args.collection_name,
            "table_name": args.table_name,
            "sort_key": args.sort_key,
            "detect_dates": args.detect_dates,
        }
        id_source = RandomIdSource(seed=args.seed) if args.seed is not None else None

        try:
            document = read_document(args.input)
            artifact = generate_artifact(
                document,
                args.backend or settings.default_backend,
                args.structure or settings.default_structure,
                options,
                settings=settings,
                id_source=id_source,
            )
        except DocumentParseError as exc:
            print(f"Input could not be parsed:\n{exc}", file=sys.stderr)
            return 1
        except (UnsupportedStructureError, InvalidOptionsError) as exc:
            print(f"Invalid generation request:\n{exc}", file=sys.stderr)
            return 2
        except InvalidInputError as exc:
            print(f"Document cannot be converted:\n{exc}", file=sys.stderr)
            return 1
        except SerializationError as exc:
            print(f"Document could not be serialized:\n{exc}", file=sys.stderr)
            return 1

        if args.output:
            path = _output_path(args.output, artifact.backend.value)
            try:
                path.write_text(artifact.code, encoding="utf-8")
            except OSError as exc:
                print(f"Failed to write output file:\n{exc}", file=sys.stderr)
                return 1
            print("Code generation succeeded:")
            print(f"- backend: {artifact.backend.value}")
            print(f"- structure: {artifact.structure.value}")
            print(f"- target: {artifact.target_name}")
            print(f"- documents: {artifact.document_count}")
            print(f"- output: {path}")
            return 0

        if args.json:
            print(json.dumps(artifact.model_dump(mode="json"), indent=2, sort_keys=True))
            return 0

        sys.stdout.write(artifact.code)
        return 0

    parser.print_help()
    return 2


if __name__ == "__main__":
    sys.exit(main())
