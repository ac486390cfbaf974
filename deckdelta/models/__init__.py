from deckdelta.models.card import CardEntry, CardKey
from deckdelta.models.diff import (
    CardIn,
    CardOut,
    DiffResult,
    PrintingChange,
    QuantityChange,
    SectionDiff,
)
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
from deckdelta.models.parsed_list import ParsedList, ParseWarning, WarningKind

__all__ = [
    "Blank",
    "CardEntry",
    "CardIn",
    "CardKey",
    "CardLine",
    "CardOut",
    "CsvHeaderRow",
    "DiffResult",
    "Ignored",
    "LineKind",
    "ParseWarning",
    "ParsedList",
    "PrintingChange",
    "QuantityChange",
    "Section",
    "SectionDiff",
    "SectionHeader",
    "SideboardPrefixedCardLine",
    "WarningKind",
]
