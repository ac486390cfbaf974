"""
Deck list parser.

Turns pasted deck-list text into a ParsedList with mainboard, sideboard
and commander sections. Accepts plain "N Name" style lists (Arena, MTGO,
Moxfield, Archidekt text exports) and CSV exports with a header row.

The mode is chosen once from the first non-blank line; plain text and CSV
are never mixed within one document.

INVARIANTS:
- parse() never raises for any input text
- Every card line lands in exactly one section
- Lines resolving to the same key within a section are merged
- Parsing the same text twice gives equal results
"""

import logging
from typing import Literal

from deckdelta.models.card import CardEntry, CardKey
from deckdelta.models.line import (
    Blank,
    CardLine,
    CsvHeaderRow,
    Ignored,
    Section,
    SectionHeader,
    SideboardPrefixedCardLine,
)
from deckdelta.models.parsed_list import ParsedList, ParseWarning, WarningKind
from deckdelta.parsers.csv_list import column_indices, parse_csv_rows
from deckdelta.parsers.line_classifier import (
    EXACT_FOIL_MARKER,
    classify,
    classify_csv_header,
)
from deckdelta.services.card_key import add_to_section

logger = logging.getLogger(__name__)


def split_lines(text: str) -> list[str]:
    """Split text into lines, accepting \\n, \\r\\n and \\r endings."""
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def detect_format(text: str) -> Literal["csv", "text"]:
    """
    Detect whether a deck list is a CSV export or plain text.

    Returns "csv" only if the first non-blank line is a CSV header row
    with a usable card name column.
    """
    for line in split_lines(text):
        if line.strip():
            header = classify_csv_header(line)
            if header is not None and "name" in column_indices(header):
                return "csv"
            return "text"
    return "text"


def parse(text: str | None, *, blank_line_starts_sideboard: bool = False) -> ParsedList:
    """
    Parse deck-list text into sections.

    Args:
        text: Raw deck list (clipboard paste, file contents or CSV export)
        blank_line_starts_sideboard: Treat the first blank line after
            mainboard cards as the start of the sideboard when the list has
            no explicit sideboard header (older paste convention)

    Returns:
        ParsedList. Empty if input is empty/whitespace.
    """
    if not text or not text.strip():
        return ParsedList()

    lines = split_lines(text)
    warnings: list[ParseWarning] = []

    first_index = next(i for i, line in enumerate(lines) if line.strip())
    header = classify_csv_header(lines[first_index])
    if header is not None:
        if "name" in column_indices(header):
            return parse_csv_rows(
                lines[first_index + 1 :],
                header,
                first_line_number=first_index + 2,
            )

        warnings.append(
            ParseWarning(
                kind=WarningKind.MALFORMED_INPUT,
                line_number=first_index + 1,
                line=lines[first_index].strip(),
                message="CSV header has no card name column; parsed as plain text",
            )
        )
        logger.info("CSV header without name column, falling back to plain text: %r", header)

    return _parse_text(lines, warnings, blank_line_starts_sideboard)


def _parse_text(
    lines: list[str],
    warnings: list[ParseWarning],
    blank_line_starts_sideboard: bool,
) -> ParsedList:
    """Run the section state machine over plain-text lines."""
    sections: dict[Section, dict[CardKey, CardEntry]] = {section: {} for section in Section}
    # Names of inline "(Commander)" cards, in list order
    tagged: list[str] = []

    current = Section.MAINBOARD
    explicit_sideboard = False
    # Whether the current block has received any card yet
    block_has_cards = False

    for line_number, raw in enumerate(lines, start=1):
        kind = classify(raw)

        if isinstance(kind, Blank):
            if current is Section.COMMANDER and block_has_cards:
                # "Commander", its cards, a blank line, then the deck
                current = Section.MAINBOARD
                block_has_cards = False
            elif (
                blank_line_starts_sideboard
                and current is Section.MAINBOARD
                and block_has_cards
                and not explicit_sideboard
            ):
                current = Section.SIDEBOARD
                block_has_cards = False
            continue

        if isinstance(kind, SectionHeader):
            current = kind.section
            explicit_sideboard = explicit_sideboard or kind.section is Section.SIDEBOARD
            block_has_cards = False
            continue

        if isinstance(kind, Ignored | CsvHeaderRow):
            continue

        if isinstance(kind, SideboardPrefixedCardLine):
            target = Section.SIDEBOARD
        else:
            target = current
            block_has_cards = True

        _check_line(kind, line_number, raw, warnings)

        if kind.commander_tag and kind.entry.display_name not in tagged:
            tagged.append(kind.entry.display_name)

        add_to_section(sections[target], kind.entry)

    logger.debug(
        "Parsed deck list: %d main, %d side, %d commander keys, %d warnings",
        len(sections[Section.MAINBOARD]),
        len(sections[Section.SIDEBOARD]),
        len(sections[Section.COMMANDER]),
        len(warnings),
    )

    return ParsedList.from_sections(
        mainboard=sections[Section.MAINBOARD],
        sideboard=sections[Section.SIDEBOARD],
        commanders=sections[Section.COMMANDER],
        warnings=warnings,
        tagged_commanders=tagged,
    )


def _check_line(
    kind: CardLine | SideboardPrefixedCardLine,
    line_number: int,
    raw: str,
    warnings: list[ParseWarning],
) -> None:
    """Record warnings for best-effort card lines and unusual finish markers."""
    if kind.fallback:
        warnings.append(
            ParseWarning(
                kind=WarningKind.MALFORMED_LINE,
                line_number=line_number,
                line=raw.strip(),
                message="No quantity found; read as 1 copy of the whole line",
            )
        )

    marker = kind.finish_marker
    if marker is not None and marker.upper() != EXACT_FOIL_MARKER:
        warnings.append(
            ParseWarning(
                kind=WarningKind.AMBIGUOUS_FOIL_MARKER,
                line_number=line_number,
                line=raw.strip(),
                message=(
                    f"Finish marker *{marker}* read as "
                    f"{'foil' if kind.entry.is_foil else 'non-foil'}"
                ),
            )
        )
