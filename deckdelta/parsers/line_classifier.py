"""
Line classifier for deck-list text.

Card line format:
    <quantity>[x] <card name> [(<set_code>)] [[<collector_number>] | <collector_number>] [*F*]

Example:
    4 Lightning Bolt
    4x Lightning Bolt
    4 Lightning Bolt (M10) 146
    1 Dragon Tempest (pdtk) [136p] *F*
    SB: 2 Fatal Push
    1 Atraxa, Praetors' Voice (Commander)

Sections are switched by headers: Deck / Mainboard, Sideboard / SB, Commander.
Classification never fails: a line that matches no card pattern becomes a
fallback card line with quantity 1 and the whole line as the name.
"""

import csv
import re

from deckdelta.models.card import CardEntry
from deckdelta.models.line import (
    Blank,
    CardLine,
    CsvHeaderRow,
    Ignored,
    LineKind,
    Section,
    SectionHeader,
    SideboardPrefixedCardLine,
)
from deckdelta.services.card_key import normalize_name

# Pattern: "4 Lightning Bolt ..." or "4x Lightning Bolt ..."
# Groups: (quantity, rest_of_line)
QUANTITY_PATTERN = re.compile(r"^(\d+)\s*x?\s+(.+)$", re.IGNORECASE)

# Pattern: "4,Lightning Bolt" or '4,"Lightning Bolt"' (headerless CSV rows)
# Groups: (quantity, card_name)
QUANTITY_COMMA_PATTERN = re.compile(r'^(\d+)\s*,\s*"?([^"]+)"?\s*$')

# Pattern: " (M10) 146" or " (pdtk) [136p]" or " (MH2)" at end of the line
# Groups: (set_code, bracketed_collector_number, bare_collector_number)
# Bare collector numbers are only accepted after a set code so that card
# name words are never mistaken for them.
SET_TAIL_PATTERN = re.compile(r"\s+\(([A-Za-z0-9]{2,6})\)(?:\s+\[([\w-]+)\]|\s+([\w-]+))?$")

# Pattern: " [227]" at end of the line, without a set code
BRACKET_TAIL_PATTERN = re.compile(r"\s+\[([\w-]+)\]$")

# Pattern: " *F*", " *E*", " *FOIL*" at end of the line
FINISH_MARKER_PATTERN = re.compile(r"\s+\*([A-Za-z-]+)\*$")

INLINE_COMMANDER_PATTERN = re.compile(r"\s*\(commander\)\s*$", re.IGNORECASE)
SB_PREFIX_PATTERN = re.compile(r"^SB:\s*", re.IGNORECASE)
COMMENT_PATTERN = re.compile(r"^(//|#)")
BARE_NUMBER_PATTERN = re.compile(r"^\d+$")

# Header lines, optionally followed by a count "(15)" and a ":" or "."
_HEADER_TAIL = r"(?:\s*\(\d+\))?\s*[:.]?$"
SECTION_HEADERS: tuple[tuple[re.Pattern[str], Section], ...] = (
    (re.compile(rf"^(sideboard|sb|companion){_HEADER_TAIL}", re.IGNORECASE), Section.SIDEBOARD),
    (re.compile(rf"^(mainboard|main|deck){_HEADER_TAIL}", re.IGNORECASE), Section.MAINBOARD),
    (
        re.compile(rf"^(commanders?|command zone){_HEADER_TAIL}", re.IGNORECASE),
        Section.COMMANDER,
    ),
)

# Known CSV header columns, by role
CSV_COLUMNS: dict[str, frozenset[str]] = {
    "quantity": frozenset({"quantity", "count", "qty", "amount"}),
    "name": frozenset({"name", "card", "card name", "cardname"}),
    "set": frozenset({"set", "edition", "set code", "set_code"}),
    "collector_number": frozenset({"collector number", "collector_number", "number", "cn"}),
    "foil": frozenset({"foil", "finish", "printing"}),
    "section": frozenset({"section", "board", "type", "location", "category"}),
}

# Markers treated as foil without an ambiguity warning
EXACT_FOIL_MARKER = "F"
ETCHED_MARKERS = frozenset({"E", "ETCHED"})


def column_role(column: str) -> str | None:
    """Role of a CSV header column ("quantity", "name", ...), or None if unknown."""
    normalized = column.strip().strip('"').lower()
    for role, names in CSV_COLUMNS.items():
        if normalized in names:
            return role
    return None


def classify_csv_header(line: str) -> CsvHeaderRow | None:
    """
    Recognize a CSV header row.

    Returns a CsvHeaderRow if the line is comma-separated and at least one
    column is a known column name, None otherwise (including lines the csv
    module cannot read).
    """
    stripped = line.strip()
    if "," not in stripped:
        return None

    try:
        fields = next(csv.reader([stripped]), [])
    except csv.Error:
        # Oversized field or broken quoting; not a header
        return None

    columns = tuple(col.strip().strip('"').lower() for col in fields)
    if any(column_role(col) for col in columns):
        return CsvHeaderRow(columns=columns)
    return None


def is_foil_marker(marker: str | None) -> bool:
    """Whether an asterisk marker denotes a foil (or etched) finish."""
    if not marker:
        return False
    upper = marker.upper()
    return "F" in upper or upper in ETCHED_MARKERS


def classify(line: str) -> LineKind:
    """
    Classify one physical line of deck-list text.

    Args:
        line: Raw line (surrounding whitespace is ignored)

    Returns:
        The LineKind for the line. Never raises.

    Handles:
        - Blank lines and // or # comments
        - Section headers (Deck, Sideboard, SB, Commander, ...)
        - CSV header rows
        - "SB:" prefixed card lines
        - Card lines with optional set, collector number and finish marker
    """
    stripped = line.strip()

    if not stripped:
        return Blank()

    if COMMENT_PATTERN.match(stripped):
        return Ignored("comment")

    for pattern, section in SECTION_HEADERS:
        if pattern.match(stripped):
            return SectionHeader(section)

    header = classify_csv_header(stripped)
    if header is not None:
        return header

    prefix = SB_PREFIX_PATTERN.match(stripped)
    if prefix:
        kind = _classify_card(stripped[prefix.end() :])
        if isinstance(kind, CardLine):
            return SideboardPrefixedCardLine(
                entry=kind.entry,
                fallback=kind.fallback,
                commander_tag=kind.commander_tag,
                finish_marker=kind.finish_marker,
            )
        return kind

    return _classify_card(stripped)


def _classify_card(text: str) -> CardLine | Ignored:
    """Classify the card part of a line (SB: prefix already removed)."""
    commander_tag = False
    tag = INLINE_COMMANDER_PATTERN.search(text)
    if tag:
        commander_tag = True
        text = text[: tag.start()].strip()

    if not text:
        return Ignored("empty card line")

    match = QUANTITY_PATTERN.match(text) or QUANTITY_COMMA_PATTERN.match(text)
    if match:
        quantity = int(match.group(1))
        if quantity == 0:
            return Ignored("zero quantity")

        entry, marker = parse_card_text(quantity, match.group(2))
        if entry.display_name:
            return CardLine(entry=entry, commander_tag=commander_tag, finish_marker=marker)

    if BARE_NUMBER_PATTERN.match(text):
        return Ignored("bare number")

    # Line didn't match any pattern - best-effort guess
    return CardLine(
        entry=CardEntry(display_name=normalize_name(text), quantity=1),
        fallback=True,
        commander_tag=commander_tag,
    )


def parse_card_text(quantity: int, text: str) -> tuple[CardEntry, str | None]:
    """
    Split "<name> (SET) [NUM] *F*" into a CardEntry.

    Metadata is peeled off the end of the text, so names containing commas,
    apostrophes or " // " are kept intact.

    Returns:
        (entry, raw finish marker or None)
    """
    rest = text.strip()
    set_code: str | None = None
    collector_number: str | None = None
    marker: str | None = None

    match = FINISH_MARKER_PATTERN.search(rest)
    if match:
        marker = match.group(1)
        rest = rest[: match.start()]

    match = SET_TAIL_PATTERN.search(rest)
    if match:
        set_code = match.group(1).lower()
        collector_number = match.group(2) or match.group(3)
        rest = rest[: match.start()]
    else:
        match = BRACKET_TAIL_PATTERN.search(rest)
        if match:
            collector_number = match.group(1)
            rest = rest[: match.start()]

    entry = CardEntry(
        display_name=normalize_name(rest),
        quantity=quantity,
        set_code=set_code,
        collector_number=collector_number,
        is_foil=is_foil_marker(marker),
    )
    return entry, marker
