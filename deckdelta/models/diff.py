from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class CardIn:
    """A card present after but not before."""

    name: str
    quantity: int
    set_code: str | None = None
    collector_number: str | None = None
    is_foil: bool = False


@dataclass(frozen=True, slots=True)
class CardOut:
    """A card present before but not after."""

    name: str
    quantity: int
    set_code: str | None = None
    collector_number: str | None = None
    is_foil: bool = False


@dataclass(frozen=True, slots=True)
class QuantityChange:
    """
    A card present on both sides with a different count.

    delta is always new_qty - old_qty and never zero.
    """

    name: str
    old_qty: int
    new_qty: int
    delta: int
    set_code: str | None = None
    collector_number: str | None = None
    is_foil: bool = False


@dataclass(frozen=True, slots=True)
class PrintingChange:
    """Same card and count on both sides, but a different known printing."""

    name: str
    quantity: int
    old_set_code: str | None
    old_collector_number: str | None
    old_is_foil: bool
    new_set_code: str | None
    new_collector_number: str | None
    new_is_foil: bool


@dataclass
class SectionDiff:
    """
    Changes within one deck section.

    Attributes:
        cards_in: Cards added, sorted by name
        cards_out: Cards removed, sorted by name
        quantity_changes: Cards whose count changed, sorted by name
        total_unique_cards: Number of reconciled keys across both sides
        unchanged_count: Keys with the same count on both sides
        printing_changes: Unchanged-count cards whose known printing changed
        collapsed_printings: Names whose several printings had to be merged
            because the other side could not tell them apart
    """

    cards_in: list[CardIn] = field(default_factory=list)
    cards_out: list[CardOut] = field(default_factory=list)
    quantity_changes: list[QuantityChange] = field(default_factory=list)
    total_unique_cards: int = 0
    unchanged_count: int = 0
    printing_changes: list[PrintingChange] = field(default_factory=list)
    collapsed_printings: list[str] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        """True if any card was added, removed, or changed count."""
        return bool(self.cards_in or self.cards_out or self.quantity_changes)


@dataclass
class DiffResult:
    """
    Full comparison of two deck lists.

    Attributes:
        mainboard: Mainboard changes
        sideboard: Sideboard changes
        has_sideboard: True if either list has a sideboard
        commanders: Commander names of the newer list (older list if none)
        command_zone: Changes between the two commander sections
    """

    mainboard: SectionDiff
    sideboard: SectionDiff
    has_sideboard: bool
    commanders: list[str] = field(default_factory=list)
    command_zone: SectionDiff = field(default_factory=SectionDiff)
