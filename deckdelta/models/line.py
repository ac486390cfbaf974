"""
Line kinds produced by the line classifier.

Every physical line of a deck list maps to exactly one of these kinds.
Card lines carry a `fallback` flag so callers can tell a confidently
parsed line from a best-effort guess; classification itself never fails.
"""

from dataclasses import dataclass
from enum import Enum

from deckdelta.models.card import CardEntry


class Section(str, Enum):
    """The three independent card groupings of a deck list."""

    MAINBOARD = "mainboard"
    SIDEBOARD = "sideboard"
    COMMANDER = "commander"


@dataclass(frozen=True, slots=True)
class Blank:
    """Empty or whitespace-only line."""


@dataclass(frozen=True, slots=True)
class Ignored:
    """Line that carries no card (comment, bare number, zero quantity)."""

    reason: str


@dataclass(frozen=True, slots=True)
class SectionHeader:
    """A "Sideboard", "Deck", "Commander" style header line."""

    section: Section


@dataclass(frozen=True, slots=True)
class CsvHeaderRow:
    """
    Header row of a CSV export.

    Attributes:
        columns: Normalized (lowercase, unquoted) column names in order
    """

    columns: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class CardLine:
    """
    A card line for the current section.

    Attributes:
        entry: The parsed card
        fallback: True if the line matched no card pattern and the whole
            line was taken as a card name with quantity 1
        commander_tag: True if the line ended with an inline "(Commander)" tag
        finish_marker: Raw asterisk marker text ("F" for *F*), if any
    """

    entry: CardEntry
    fallback: bool = False
    commander_tag: bool = False
    finish_marker: str | None = None


@dataclass(frozen=True, slots=True)
class SideboardPrefixedCardLine:
    """A card line written with the "SB:" prefix; always belongs to the sideboard."""

    entry: CardEntry
    fallback: bool = False
    commander_tag: bool = False
    finish_marker: str | None = None


LineKind = (
    Blank | Ignored | SectionHeader | CsvHeaderRow | CardLine | SideboardPrefixedCardLine
)
