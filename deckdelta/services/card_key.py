"""
Card key normalization.

Computes the lookup key used for every section map. The same scheme is
used by the parser, the differ, and any collaborator that builds a
{key: metadata} lookup of its own, so everything here is a pure function.

Key scheme:
    bare:       "lightning bolt"
    composite:  "lightning bolt|163"   (only when set code AND collector number are known)
"""

import re

from deckdelta.models.card import CardEntry, CardKey

# Separator between the faces of a double-faced or split card
DFC_SEPARATOR = " // "

# Curly quotes, backtick and prime all become a plain apostrophe
_APOSTROPHES = re.compile("['\u2018\u2019`\u2032]")
_WHITESPACE = re.compile(r"\s+")


def normalize_name(name: str) -> str:
    """Collapse runs of whitespace and normalize apostrophe variants."""
    return _APOSTROPHES.sub("'", _WHITESPACE.sub(" ", name)).strip()


def bare_key(name: str) -> CardKey:
    """Bare key for a card name."""
    return CardKey(normalize_name(name).lower())


def key_for(entry: CardEntry) -> CardKey:
    """
    Canonical key for a card entry.

    Composite when the entry names a specific printing (both set code and
    collector number present), bare otherwise.
    """
    name = normalize_name(entry.display_name).lower()
    if entry.has_printing:
        return CardKey(name, entry.collector_number)
    return CardKey(name)


def key_string(entry: CardEntry) -> str:
    """External string form of an entry's key ("name" or "name|number")."""
    return str(key_for(entry))


def front_face(name: str) -> str:
    """
    Front face of a double-faced card name.

    "Sheoldred // The True Scriptures" -> "Sheoldred"
    Names without the separator are returned unchanged.
    """
    front, _, _ = name.partition(DFC_SEPARATOR)
    return front


def is_double_faced(name: str) -> bool:
    """True if the name is written as "Front // Back"."""
    return DFC_SEPARATOR in name


def merge_entries(existing: CardEntry, incoming: CardEntry) -> CardEntry:
    """
    Fold a second entry for the same key into the first.

    Quantities are summed; the incoming entry's printing metadata (set code,
    collector number, foil) wins. The first display name is kept.
    """
    return CardEntry(
        display_name=existing.display_name,
        quantity=existing.quantity + incoming.quantity,
        set_code=incoming.set_code,
        collector_number=incoming.collector_number,
        is_foil=incoming.is_foil,
    )


def add_to_section(
    section: dict[CardKey, CardEntry],
    entry: CardEntry,
    key: CardKey | None = None,
) -> CardKey:
    """
    Insert an entry into a section map, merging on key collision.

    Args:
        section: Section map being built (mutated in place)
        entry: Entry to insert
        key: Key to file the entry under; defaults to key_for(entry)

    Returns:
        The key the entry was filed under
    """
    if key is None:
        key = key_for(entry)
    existing = section.get(key)
    section[key] = entry if existing is None else merge_entries(existing, entry)
    return key
