"""
Diff API endpoint.

Compares two deck-list texts and returns the changelog structure.
"""

import logging

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from deckdelta.analysis.differ import compute_diff
from deckdelta.config import settings
from deckdelta.models.diff import DiffResult
from deckdelta.parsers.deck_list import parse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/diff", tags=["diff"])


class CardChangeResponse(BaseModel):
    """A card added to or removed from a section."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    quantity: int
    set_code: str | None = None
    collector_number: str | None = None
    is_foil: bool = False


class QuantityChangeResponse(BaseModel):
    """A card whose count changed."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    old_qty: int
    new_qty: int
    delta: int
    set_code: str | None = None
    collector_number: str | None = None
    is_foil: bool = False


class PrintingChangeResponse(BaseModel):
    """A card whose known printing changed while its count stayed the same."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    quantity: int
    old_set_code: str | None = None
    old_collector_number: str | None = None
    old_is_foil: bool = False
    new_set_code: str | None = None
    new_collector_number: str | None = None
    new_is_foil: bool = False


class SectionDiffResponse(BaseModel):
    """Changes within one deck section."""

    model_config = ConfigDict(from_attributes=True)

    cards_in: list[CardChangeResponse] = Field(default_factory=list)
    cards_out: list[CardChangeResponse] = Field(default_factory=list)
    quantity_changes: list[QuantityChangeResponse] = Field(default_factory=list)
    total_unique_cards: int = 0
    unchanged_count: int = 0
    printing_changes: list[PrintingChangeResponse] = Field(default_factory=list)
    collapsed_printings: list[str] = Field(
        default_factory=list,
        description="Cards whose several printings were merged because the other list "
        "did not say which printing each copy was",
    )


class DiffResponse(BaseModel):
    """Response model for a deck list comparison."""

    model_config = ConfigDict(from_attributes=True)

    mainboard: SectionDiffResponse
    sideboard: SectionDiffResponse
    has_sideboard: bool
    commanders: list[str] = Field(default_factory=list)
    command_zone: SectionDiffResponse = Field(default_factory=SectionDiffResponse)


class DiffRequest(BaseModel):
    """Request model for comparing two deck lists."""

    before: str = Field(
        ...,
        max_length=settings.max_list_chars,
        description="Older deck list text",
        examples=["4 Lightning Bolt"],
    )
    after: str = Field(
        ...,
        max_length=settings.max_list_chars,
        description="Newer deck list text",
        examples=["4 Lightning Bolt\n2 Counterspell"],
    )
    blank_line_starts_sideboard: bool | None = Field(
        default=None,
        description="Override the server default for lists without a Sideboard header",
    )


def diff_to_response(result: DiffResult) -> DiffResponse:
    """Convert a DiffResult into its API response model."""
    return DiffResponse.model_validate(result)


@router.post("", response_model=DiffResponse)
async def diff_lists(request: DiffRequest) -> DiffResponse:
    """
    Compare two deck lists.

    Returns cards in, cards out and quantity changes for mainboard and
    sideboard, plus the commander names of the newer list.
    """
    blank_line_starts_sideboard = (
        settings.blank_line_starts_sideboard
        if request.blank_line_starts_sideboard is None
        else request.blank_line_starts_sideboard
    )

    before = parse(request.before, blank_line_starts_sideboard=blank_line_starts_sideboard)
    after = parse(request.after, blank_line_starts_sideboard=blank_line_starts_sideboard)
    result = compute_diff(before, after)

    logger.info(
        "diff_computed",
        extra={
            "before_warnings": len(before.warnings),
            "after_warnings": len(after.warnings),
            "has_sideboard": result.has_sideboard,
        },
    )

    return diff_to_response(result)
