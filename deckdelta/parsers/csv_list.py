"""
Parser for CSV deck exports.

Expected columns (any order, matched case-insensitively):
    - Card Name / Name / Card / Cardname
    - Quantity / Count / Qty / Amount (optional, defaults to 1)
    - Set / Edition / Set Code (optional)
    - Collector Number / Number / CN (optional)
    - Foil / Finish / Printing (optional)
    - Section / Board / Type / Location / Category (optional)

Columns are mapped positionally from the header row.
"""

import csv
import logging
from collections.abc import Iterator

from deckdelta.models.card import CardEntry, CardKey
from deckdelta.models.line import CsvHeaderRow, Section
from deckdelta.models.parsed_list import ParsedList, ParseWarning, WarningKind
from deckdelta.parsers.line_classifier import column_role
from deckdelta.services.card_key import add_to_section, normalize_name

logger = logging.getLogger(__name__)

FOIL_VALUES = frozenset({"foil", "etched", "true", "yes", "1"})
SKIPPED_SECTIONS = frozenset({"considering", "maybe", "maybeboard", "wishlist"})


def column_indices(header: CsvHeaderRow) -> dict[str, int]:
    """Map each known column role to its first position in the header."""
    indices: dict[str, int] = {}
    for idx, column in enumerate(header.columns):
        role = column_role(column)
        if role is not None and role not in indices:
            indices[role] = idx
    return indices


def route_section(value: str) -> Section | None:
    """
    Section for a CSV row's section/board value.

    Returns None for rows that belong to no deck section (maybeboard).
    """
    value = value.strip().lower()
    if value in SKIPPED_SECTIONS:
        return None
    if "side" in value or value == "sb":
        return Section.SIDEBOARD
    if "commander" in value or value == "command zone":
        return Section.COMMANDER
    return Section.MAINBOARD


def _read_rows(
    rows: list[str],
    first_line_number: int,
    warnings: list[ParseWarning],
) -> Iterator[tuple[int, list[str]]]:
    """
    Yield (line number, fields) for each CSV row.

    Stops at the first row the csv module cannot read (oversized field,
    runaway quote) and records a warning; rows before it are kept.
    """
    reader = csv.reader(rows, skipinitialspace=True)
    while True:
        try:
            row = next(reader)
        except StopIteration:
            return
        except csv.Error as e:
            line_number = first_line_number + reader.line_num - 1
            index = reader.line_num - 1
            line = rows[index].strip() if 0 <= index < len(rows) else ""
            warnings.append(
                ParseWarning(
                    kind=WarningKind.MALFORMED_LINE,
                    line_number=line_number,
                    line=line[:200],
                    message=f"Unreadable CSV row ({e}); remaining rows skipped",
                )
            )
            logger.info("CSV rows from line %d skipped: %s", line_number, e)
            return
        yield first_line_number + reader.line_num - 1, row


def parse_csv_rows(
    rows: list[str],
    header: CsvHeaderRow,
    first_line_number: int = 2,
) -> ParsedList:
    """
    Parse CSV data rows (the lines after the header).

    Args:
        rows: Raw data lines
        header: The already-classified header row
        first_line_number: Line number of rows[0] in the original text

    Returns:
        ParsedList with rows routed by the section column (mainboard if absent).
    """
    indices = column_indices(header)
    sections: dict[Section, dict[CardKey, CardEntry]] = {section: {} for section in Section}
    warnings: list[ParseWarning] = []

    def cell(row: list[str], role: str) -> str:
        idx = indices.get(role)
        if idx is None or idx >= len(row):
            return ""
        return row[idx].strip().strip('"').strip()

    for line_number, row in _read_rows(rows, first_line_number, warnings):
        if not any(col.strip() for col in row):
            continue

        name = normalize_name(cell(row, "name"))
        if not name:
            continue

        quantity_text = cell(row, "quantity")
        try:
            quantity = int(quantity_text.rstrip("xX")) if quantity_text else 1
        except ValueError:
            quantity = 1
            warnings.append(
                ParseWarning(
                    kind=WarningKind.MALFORMED_LINE,
                    line_number=line_number,
                    line=",".join(row),
                    message=f"Unreadable quantity '{quantity_text}', assumed 1",
                )
            )

        if quantity <= 0:
            continue

        section = route_section(cell(row, "section"))
        if section is None:
            continue

        entry = CardEntry(
            display_name=name,
            quantity=quantity,
            set_code=cell(row, "set").lower() or None,
            collector_number=cell(row, "collector_number") or None,
            is_foil=cell(row, "foil").lower() in FOIL_VALUES,
        )
        add_to_section(sections[section], entry)

    logger.debug(
        "csv_list_parsed",
        extra={
            "mainboard_unique": len(sections[Section.MAINBOARD]),
            "sideboard_unique": len(sections[Section.SIDEBOARD]),
            "commander_unique": len(sections[Section.COMMANDER]),
        },
    )

    return ParsedList.from_sections(
        mainboard=sections[Section.MAINBOARD],
        sideboard=sections[Section.SIDEBOARD],
        commanders=sections[Section.COMMANDER],
        warnings=warnings,
    )
