from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CardEntry:
    """
    One deck-list line's worth of a card.

    Attributes:
        display_name: Card name with its original casing (e.g., "Fire // Ice")
        quantity: Number of copies on this line
        set_code: Lowercase edition code (e.g., "ltc", "fdn")
        collector_number: Collector number within set, kept as written ("227a", "DDO-20")
        is_foil: True if the line carried a foil (or etched) marker
    """

    display_name: str
    quantity: int
    set_code: str | None = None
    collector_number: str | None = None
    is_foil: bool = False

    @property
    def has_printing(self) -> bool:
        """True if the entry names one specific printing (set and collector number)."""
        return bool(self.set_code) and bool(self.collector_number)


@dataclass(frozen=True, slots=True)
class CardKey:
    """
    Lookup key for a card inside a parsed section.

    A bare key identifies a card by lowercased name only. A composite key
    also carries the collector number and is only built for entries that
    name a specific printing.
    """

    name: str
    collector_number: str | None = None

    @property
    def is_composite(self) -> bool:
        return self.collector_number is not None

    def bare(self) -> "CardKey":
        """The bare key for the same card name."""
        return CardKey(self.name)

    def __str__(self) -> str:
        if self.collector_number is None:
            return self.name
        return f"{self.name}|{self.collector_number}"
