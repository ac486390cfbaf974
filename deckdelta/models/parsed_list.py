"""
Parsed deck list models.

INVARIANTS:
- A ParsedList is built fresh by every parse() call and never mutated
- Section mappings are read-only views keyed by CardKey
- Degradations are recorded as warnings, never raised
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from deckdelta.models.card import CardEntry, CardKey


class WarningKind(str, Enum):
    """Classification of non-fatal parse degradations."""

    # Line matched no card pattern; taken as a bare card name
    MALFORMED_LINE = "malformed_line"

    # CSV header without a usable name column; parsed as plain text
    MALFORMED_INPUT = "malformed_input"

    # Asterisk marker other than *F* treated as foil
    AMBIGUOUS_FOIL_MARKER = "ambiguous_foil_marker"


@dataclass(frozen=True, slots=True)
class ParseWarning:
    """A non-fatal problem found while parsing one deck list."""

    kind: WarningKind
    line_number: int
    line: str
    message: str


def _empty_section() -> Mapping[CardKey, CardEntry]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class ParsedList:
    """
    A deck list split into its three sections.

    Attributes:
        mainboard: Main deck cards {key: entry}
        sideboard: Sideboard cards {key: entry}
        commanders: Command zone cards {key: entry}
        warnings: Degradations found while parsing, in line order
        tagged_commanders: Names of cards marked with an inline "(Commander)"
            tag; the cards themselves stay in the section they were written in
    """

    mainboard: Mapping[CardKey, CardEntry] = field(default_factory=_empty_section)
    sideboard: Mapping[CardKey, CardEntry] = field(default_factory=_empty_section)
    commanders: Mapping[CardKey, CardEntry] = field(default_factory=_empty_section)
    warnings: tuple[ParseWarning, ...] = ()
    tagged_commanders: tuple[str, ...] = ()

    @classmethod
    def from_sections(
        cls,
        mainboard: dict[CardKey, CardEntry],
        sideboard: dict[CardKey, CardEntry],
        commanders: dict[CardKey, CardEntry],
        warnings: list[ParseWarning] | None = None,
        tagged_commanders: list[str] | None = None,
    ) -> "ParsedList":
        """Freeze freshly built section dicts into a ParsedList."""
        return cls(
            mainboard=MappingProxyType(dict(mainboard)),
            sideboard=MappingProxyType(dict(sideboard)),
            commanders=MappingProxyType(dict(commanders)),
            warnings=tuple(warnings or ()),
            tagged_commanders=tuple(tagged_commanders or ()),
        )

    @property
    def commander_names(self) -> list[str]:
        """
        Display names of the command zone cards, in list order.

        Falls back to inline-tagged names when the list has no Commander block.
        """
        if self.commanders:
            return [entry.display_name for entry in self.commanders.values()]
        return list(self.tagged_commanders)

    def total_cards(self) -> int:
        """Total copies across mainboard and sideboard."""
        return sum(e.quantity for e in self.mainboard.values()) + sum(
            e.quantity for e in self.sideboard.values()
        )

    def is_empty(self) -> bool:
        return not (self.mainboard or self.sideboard or self.commanders)
