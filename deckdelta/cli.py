"""
Command-line deck list comparison.

Usage:
    deckdelta-diff before.txt after.txt
    deckdelta-diff before.csv after.txt --sideboard-on-blank

Prints the diff as JSON using the same field names as the HTTP API.
"""

import argparse
import logging
import sys
from pathlib import Path

from deckdelta.analysis.differ import compute_diff
from deckdelta.api.diff import diff_to_response
from deckdelta.config import settings
from deckdelta.parsers.deck_list import parse

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="deckdelta-diff",
        description="Compare two deck lists and print the changelog as JSON",
    )
    parser.add_argument("before", type=Path, help="Older deck list file")
    parser.add_argument("after", type=Path, help="Newer deck list file")
    parser.add_argument(
        "--sideboard-on-blank",
        action="store_true",
        default=settings.blank_line_starts_sideboard,
        help="Start the sideboard at the first blank line when a list has no Sideboard header",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log parse warnings and debug output"
    )
    return parser


def run(argv: list[str] | None = None) -> int:
    """
    Run the comparison.

    Returns:
        Process exit code (0 on success)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    texts: list[str] = []
    for path in (args.before, args.after):
        try:
            texts.append(path.read_text(encoding="utf-8"))
        except OSError as e:
            parser.error(f"cannot read {path}: {e}")

    before = parse(texts[0], blank_line_starts_sideboard=args.sideboard_on_blank)
    after = parse(texts[1], blank_line_starts_sideboard=args.sideboard_on_blank)

    for label, parsed in (("before", before), ("after", after)):
        for warning in parsed.warnings:
            logger.info(
                "%s line %d: %s (%s)", label, warning.line_number, warning.message, warning.line
            )

    response = diff_to_response(compute_diff(before, after))
    sys.stdout.write(response.model_dump_json(indent=2) + "\n")
    return 0


def main() -> None:
    """CLI entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
