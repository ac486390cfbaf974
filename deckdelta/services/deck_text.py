"""
Deck Text Renderer.

Writes a ParsedList back out as plain deck-list text the parser accepts.
Snapshot storage keeps this text, so rendering followed by parsing gives
back the same keys and quantities for every entry that reads_back().

Card names have no quoting: a name whose tail looks like printing
metadata ("Lightning Bolt (foo)", "Card [12]", "Card *X*") is re-read as
that metadata. Such names only come from fallback lines; they are still
written, with a logged warning.
"""

import logging
from collections.abc import Mapping

from deckdelta.models.card import CardEntry, CardKey
from deckdelta.models.line import CardLine
from deckdelta.models.parsed_list import ParsedList
from deckdelta.parsers.line_classifier import classify

logger = logging.getLogger(__name__)


def format_card_line(entry: CardEntry) -> str:
    """
    Format a single card line.

    "1 Dragon Tempest (pdtk) [136p] *F*"; set, collector number and foil
    marker are only written when known.
    """
    line = f"{entry.quantity} {entry.display_name}"
    if entry.set_code:
        line += f" ({entry.set_code})"
    if entry.collector_number:
        line += f" [{entry.collector_number}]"
    if entry.is_foil:
        line += " *F*"
    return line


def reads_back(entry: CardEntry) -> bool:
    """True if the formatted line parses back to an identical entry."""
    kind = classify(format_card_line(entry))
    return isinstance(kind, CardLine) and not kind.fallback and kind.entry == entry


def _format_block(header: str, section: Mapping[CardKey, CardEntry]) -> list[str]:
    lines = [header]
    for entry in section.values():
        line = format_card_line(entry)
        if not reads_back(entry):
            logger.warning("Card line will not parse back as written: %r", line)
        lines.append(line)
    return lines


def format_parsed_list(parsed: ParsedList) -> str:
    """
    Format a parsed deck list as text.

    Blocks are written in the order Commander, Deck, Sideboard, separated by
    blank lines. Empty blocks are left out.
    """
    blocks: list[list[str]] = []

    if parsed.commanders:
        blocks.append(_format_block("Commander", parsed.commanders))
    if parsed.mainboard:
        blocks.append(_format_block("Deck", parsed.mainboard))
    if parsed.sideboard:
        blocks.append(_format_block("Sideboard", parsed.sideboard))

    return "\n\n".join("\n".join(block) for block in blocks)
