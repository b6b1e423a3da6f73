# src/main.py
"""CLI entry point: ask, parse, classify commands.

Usage:
    answerfinder ask "<question>" --data questions.txt [options]
    answerfinder parse <file>
    answerfinder classify "<question>"
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from answerfinder.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.verbose)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        return asyncio.run(args.func(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="answerfinder",
        description=f"answerfinder v{__version__}: tiered Q&A matching",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- ask ---
    p_ask = subparsers.add_parser("ask", help="Answer a question from Q&A files")
    p_ask.add_argument("query", help="Question text")
    p_ask.add_argument(
        "-d", "--data", type=Path, nargs="+", default=[],
        help="Q&A files to load (.txt or .json)",
    )
    p_ask.add_argument(
        "--min-confidence", type=float, default=None,
        help="Minimum confidence to accept a match (default from settings)",
    )
    p_ask.add_argument("--no-fuzzy", action="store_true", help="Disable tier 3")
    p_ask.add_argument("--no-partial", action="store_true", help="Disable tier 4")
    p_ask.add_argument(
        "--remote", default=None, metavar="URL",
        help="Enable the remote fallback against this endpoint",
    )
    p_ask.add_argument(
        "--json", action="store_true", help="Print the full result as JSON",
    )
    p_ask.set_defaults(func=_cmd_ask)

    # --- parse ---
    p_parse = subparsers.add_parser("parse", help="Parse a Q&A file and report issues")
    p_parse.add_argument("file", type=Path, help="Path to .txt or .json file")
    p_parse.set_defaults(func=_cmd_parse)

    # --- classify ---
    p_classify = subparsers.add_parser("classify", help="Classify a question's type")
    p_classify.add_argument("text", help="Question text")
    p_classify.set_defaults(func=_cmd_classify)

    return parser


async def _cmd_ask(args: argparse.Namespace) -> int:
    """Load data files, run one query and print the answer."""
    from answerfinder.api.facade import AppContext, find_answer
    from answerfinder.config.settings import load_settings
    from answerfinder.core.models import PipelineOptions

    settings = load_settings()
    options = PipelineOptions.from_settings(settings)
    updates: dict[str, object] = {}
    if args.min_confidence is not None:
        updates["min_confidence"] = args.min_confidence
    if args.no_fuzzy:
        updates["fuzzy_enabled"] = False
    if args.no_partial:
        updates["partial_enabled"] = False
    if args.remote:
        updates["remote_enabled"] = True
        updates["remote_endpoint"] = args.remote
    options = PipelineOptions.model_validate({**options.model_dump(), **updates})

    async with AppContext.create(settings) as ctx:
        for path in args.data:
            if not path.exists():
                logger.error("File not found: %s", path)
                return 1
            report = await ctx.import_file(path)
            logger.info(
                "Loaded %s: %d questions, %d issues",
                report.file_name, report.imported, len(report.issues),
            )

        result = await find_answer(args.query, options, context=ctx)

    if args.json:
        print(result.model_dump_json(indent=2))
    else:
        _print_answer(result)
    return 0 if result.success else 2


async def _cmd_parse(args: argparse.Namespace) -> int:
    """Parse a file and print counts and issues."""
    from answerfinder.config.settings import load_settings
    from answerfinder.ingestion.parser_factory import parse_file

    file_path: Path = args.file
    if not file_path.exists():
        logger.error("File not found: %s", file_path)
        return 1

    settings = load_settings()
    result = parse_file(file_path, max_bytes=settings.max_file_size_bytes)

    print(f"\nParsed {result.metadata.file_name} ({result.metadata.format}):")
    print(f"  Questions:  {result.metadata.total_questions}")
    print(f"  Issues:     {result.metadata.total_issues}")
    for issue in result.issues:
        print(f"    line {issue.line}: [{issue.type}] {issue.message}")
    return 0


async def _cmd_classify(args: argparse.Namespace) -> int:
    from answerfinder.normalization.question_classifier import (
        classify_question,
        question_type_display_name,
    )

    classification = classify_question(args.text)
    print(
        f"{question_type_display_name(classification.type)} "
        f"(confidence {classification.confidence:.2f})"
    )
    return 0


def _print_answer(result: object) -> None:
    """Print a human-readable summary of a FindAnswerResult."""
    if not result.success or result.match is None:
        print(f"\nNo answer: {result.message}")
        return

    match = result.match
    print(f"\nAnswer:       {match.answer}")
    if match.reasoning:
        print(f"Reasoning:    {match.reasoning}")
    print(f"Match:        {match.match_type} (tier {result.tier})")
    print(f"Confidence:   {match.confidence:.2f}  {match.explanation}")
    if match.document is not None:
        source = match.document.original
        print(f"Source:       {source.file_name}:{source.line_number}")
    print(f"Time:         {result.processing_time_ms:.1f} ms{' (cached)' if result.cached else ''}")


def _setup_logging(verbose: bool) -> None:
    """Configure logging for CLI usage from settings, -v forcing DEBUG."""
    from answerfinder.config.settings import load_settings
    from answerfinder.logging.logger import setup_logging

    settings = load_settings()
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )
    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


if __name__ == "__main__":
    sys.exit(main())
