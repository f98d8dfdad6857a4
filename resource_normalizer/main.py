"""Command-line entry point: normalize a raw API response file into a canonical document."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from resource_normalizer.config.exceptions import ConfigurationError
from resource_normalizer.config.loader import load_config
from resource_normalizer.config.models import AppConfig
from resource_normalizer.logging import get_logger
from resource_normalizer.logging.config import configure_logging
from resource_normalizer.normalization.exceptions import NormalizationError
from resource_normalizer.normalization.models import RequestContext
from resource_normalizer.schema.exceptions import SchemaError

logger = get_logger(__name__, component="cli")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_BAD_INPUT = 2


def parse_type_map(entries: List[str]) -> Dict[str, str]:
    """Parse ``name=type`` pairs given with --type-map.

    Raises:
        ConfigurationError: If an entry is not of the form name=type
    """
    type_map = {}
    errors = []
    for entry in entries:
        name, sep, target = entry.partition("=")
        if not sep or not name.strip() or not target.strip():
            errors.append(f"Invalid --type-map entry '{entry}'")
            continue
        type_map[name.strip()] = target.strip()
    if errors:
        raise ConfigurationError(
            "Invalid relationship type map",
            errors=errors,
            suggestions=["Use --type-map relationship=type, e.g. --type-map author=user"],
            source="--type-map",
        )
    return type_map


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resource-normalizer",
        description="Normalize a raw REST API response into a canonical resource document",
    )
    parser.add_argument("input", help="JSON file with the raw response, or '-' for stdin")
    parser.add_argument("--config", type=Path, default=None, help="Path to configuration file")
    parser.add_argument("--schema", type=Path, default=None, help="YAML schema declarations")
    parser.add_argument("--url", default=None, help="Request URL used as the base of links")
    parser.add_argument(
        "--type-map",
        action="append",
        default=[],
        metavar="NAME=TYPE",
        help="Relationship type override (repeatable); replaces the configured map",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on resources without id, slug, username or name",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation (default: 2)")
    return parser


def load_runtime_config(args: argparse.Namespace) -> AppConfig:
    """Load configuration and apply CLI overrides (CLI > environment > file).

    Raises:
        ConfigurationError: If configuration or CLI overrides are invalid
    """
    app_config, _ = load_config(args.config)

    updates: Dict[str, Any] = {}
    if args.schema is not None:
        updates["schema_path"] = args.schema
    if args.url is not None:
        updates["base_url"] = args.url.strip().rstrip("/")
    if args.type_map:
        updates["relationship_type_map"] = parse_type_map(args.type_map)
    if args.strict:
        updates["strict_identifiers"] = True
    if args.log_level:
        updates["logging"] = app_config.logging.model_copy(update={"level": args.log_level})

    return app_config.model_copy(update=updates) if updates else app_config


def read_payload(source: str) -> Any:
    """Read and parse the raw JSON payload from a file path or stdin."""
    if source == "-":
        return json.load(sys.stdin)
    with open(source, "r", encoding="utf-8") as f:
        return json.load(f)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the resource normalizer CLI.

    Returns:
        Exit code (0 success, 1 configuration/normalization failure, 2 unreadable input)
    """
    args = build_parser().parse_args(argv)

    try:
        app_config = load_runtime_config(args)
        configure_logging(
            level=app_config.logging.level,
            format_type=app_config.logging.format,
        )
        registry = app_config.build_registry()
    except (ConfigurationError, SchemaError) as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return EXIT_FAILED

    try:
        payload = read_payload(args.input)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(
            f"Could not read input {args.input}: {e}",
            extra={"event": "cli.input.unreadable", "error_type": type(e).__name__},
        )
        print(f"Input Error: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    normalizer = app_config.build_normalizer()
    request = RequestContext(schema=registry, url=app_config.base_url)

    try:
        document = normalizer.normalize(payload, request, app_config.relationship_type_map)
    except NormalizationError as e:
        logger.error(
            f"Normalization failed: {e}",
            extra={"event": "cli.normalization.failed", "error_type": type(e).__name__},
        )
        print(f"Normalization Error: {e}", file=sys.stderr)
        return EXIT_FAILED

    json.dump(document, sys.stdout, indent=args.indent if args.indent > 0 else None, ensure_ascii=False)
    sys.stdout.write("\n")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
