"""
Deck list parsing endpoint.

Lets collaborators see how a pasted list was read: which section each
card landed in, under which key, and what had to be guessed.
"""

from collections.abc import Mapping
from typing import Literal

from fastapi import APIRouter
from pydantic import BaseModel, Field

from deckdelta.config import settings
from deckdelta.models.card import CardEntry, CardKey
from deckdelta.models.parsed_list import WarningKind
from deckdelta.parsers.deck_list import detect_format, parse

router = APIRouter(prefix="/parse", tags=["parse"])


class CardEntryResponse(BaseModel):
    """One card in a parsed section."""

    key: str = Field(..., description='Lookup key, "name" or "name|collector_number"')
    name: str
    quantity: int
    set_code: str | None = None
    collector_number: str | None = None
    is_foil: bool = False


class ParseWarningResponse(BaseModel):
    """A non-fatal problem found while parsing."""

    kind: WarningKind
    line_number: int
    line: str
    message: str


class ParseRequest(BaseModel):
    """Request model for parsing a deck list."""

    text: str = Field(
        ...,
        max_length=settings.max_list_chars,
        description="Raw deck list text (plain list, Arena/MTGO export, or CSV)",
        examples=["Commander\n1 Atraxa, Praetors' Voice\n\n1 Sol Ring (ltc) [284]"],
    )
    blank_line_starts_sideboard: bool | None = Field(
        default=None,
        description="Override the server default for lists without a Sideboard header",
    )


class ParseResponse(BaseModel):
    """Response model for a parsed deck list."""

    format: Literal["csv", "text"]
    mainboard: list[CardEntryResponse] = Field(default_factory=list)
    sideboard: list[CardEntryResponse] = Field(default_factory=list)
    commanders: list[CardEntryResponse] = Field(default_factory=list)
    commander_names: list[str] = Field(default_factory=list)
    total_cards: int = 0
    warnings: list[ParseWarningResponse] = Field(default_factory=list)


def _section_response(section: Mapping[CardKey, CardEntry]) -> list[CardEntryResponse]:
    return [
        CardEntryResponse(
            key=str(key),
            name=entry.display_name,
            quantity=entry.quantity,
            set_code=entry.set_code,
            collector_number=entry.collector_number,
            is_foil=entry.is_foil,
        )
        for key, entry in section.items()
    ]


@router.post("", response_model=ParseResponse)
async def parse_list(request: ParseRequest) -> ParseResponse:
    """
    Parse a deck list into mainboard, sideboard and commander sections.

    Never fails on odd input; best-effort guesses are listed in `warnings`.
    """
    blank_line_starts_sideboard = (
        settings.blank_line_starts_sideboard
        if request.blank_line_starts_sideboard is None
        else request.blank_line_starts_sideboard
    )
    parsed = parse(request.text, blank_line_starts_sideboard=blank_line_starts_sideboard)

    return ParseResponse(
        format=detect_format(request.text),
        mainboard=_section_response(parsed.mainboard),
        sideboard=_section_response(parsed.sideboard),
        commanders=_section_response(parsed.commanders),
        commander_names=parsed.commander_names,
        total_cards=parsed.total_cards(),
        warnings=[
            ParseWarningResponse(
                kind=warning.kind,
                line_number=warning.line_number,
                line=warning.line,
                message=warning.message,
            )
            for warning in parsed.warnings
        ],
    )
