# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Page Schema CLI: detect, generate, validate commands.

Usage:
    pageschema detect [FILE]
    pageschema generate [FILE] [--url URL] [--script-tag] [--indent N]
    pageschema validate [FILE]

FILE defaults to stdin. Environment overrides:
    PAGESCHEMA_PAGE_URL   default for --url
    PAGESCHEMA_LOG_LEVEL  default for --log-level
    PAGESCHEMA_JSON_LOGS  1/true/yes for JSON log lines
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from .entity_detector import detect_entities, score_entities
from .errors import SchemaParseError
from .logging_config import configure_from_env
from .schema_generator import generate_from_content, to_script_tag
from .serializer import parse, serialize
from .validator import validate_schema

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_PARSE_ERROR = 2


def _read_input(path: str | None) -> str:
    if not path or path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def cmd_detect(args: argparse.Namespace) -> int:
    """Print detected entities (and optionally every type's score) as JSON."""
    content = _read_input(args.file)
    result: dict = {"entities": [e.to_dict() for e in detect_entities(content)]}
    if args.explain:
        result["scores"] = [
            {
                "type": s.entity_type.value,
                "score": round(s.score, 2),
                "maxScore": s.max_score,
                "confidence": round(s.confidence, 4),
                "strong": s.strong_matches,
                "medium": s.medium_matches,
                "negative": s.negative_matches,
                "keywords": list(s.keywords),
                **({"excludedBy": s.excluded_by.value} if s.excluded_by else {}),
            }
            for s in score_entities(content)
        ]
    print(json.dumps(result, ensure_ascii=False, indent=args.indent))
    return EXIT_OK


def cmd_generate(args: argparse.Namespace) -> int:
    """Print JSON-LD for the input content."""
    schema = generate_from_content(_read_input(args.file), args.url or None)
    print(to_script_tag(schema) if args.script_tag else serialize(schema, indent=args.indent))
    return EXIT_OK


def cmd_validate(args: argparse.Namespace) -> int:
    """Parse a JSON-LD document and report required-property issues."""
    try:
        schema = parse(_read_input(args.file))
    except SchemaParseError as e:
        print(f"Parse error ({e.field}): {e}", file=sys.stderr)
        return EXIT_PARSE_ERROR

    result = validate_schema(schema)
    print(
        json.dumps(
            {"valid": result.valid, "errors": [i.to_dict() for i in result.errors]},
            ensure_ascii=False,
            indent=args.indent,
        )
    )
    return EXIT_OK if result.valid else EXIT_INVALID


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pageschema", description="Entity detection and JSON-LD generation")
    parser.add_argument("--log-level", default=None, help="Log level (default: WARNING)")
    parser.add_argument("--json-logs", action="store_true", default=False, help="Emit JSON log lines on stderr")
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation (default: 2)")

    sub = parser.add_subparsers(dest="command", required=True)

    p_detect = sub.add_parser("detect", help="Detect entities in page content")
    p_detect.add_argument("file", nargs="?", help="Input file (default: stdin)")
    p_detect.add_argument("--explain", action="store_true", help="Include per-type scoring trace")

    p_generate = sub.add_parser("generate", help="Generate JSON-LD from page content")
    p_generate.add_argument("file", nargs="?", help="Input file (default: stdin)")
    p_generate.add_argument("--url", default=None, help="Page URL used for @id (env: PAGESCHEMA_PAGE_URL)")
    p_generate.add_argument("--script-tag", action="store_true", help="Wrap output in a script tag")

    p_validate = sub.add_parser("validate", help="Validate a JSON-LD document")
    p_validate.add_argument("file", nargs="?", help="Input file (default: stdin)")

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    args = build_parser().parse_args(argv)

    # Env var overrides (flags win)
    if args.command == "generate" and not args.url:
        env_url = os.environ.get("PAGESCHEMA_PAGE_URL", "").strip()
        if env_url:
            args.url = env_url

    return args


COMMANDS = {"detect": cmd_detect, "generate": cmd_generate, "validate": cmd_validate}


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_from_env(json_output=True if args.json_logs else None, level=args.log_level)
    try:
        return COMMANDS[args.command](args)
    except OSError as e:
        logger.error("cannot read input: %s", e)
        return EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
