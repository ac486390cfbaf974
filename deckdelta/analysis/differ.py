"""
Deck list diffing.

Compares two parsed deck lists section by section. Before comparing, the
two sides of a section are reconciled so that the same physical card
lines up under the same key even when it was written differently:

1. Double-faced cards: "Sheoldred // The True Scriptures" on one side and
   "Sheoldred" on the other are the same card.
2. Printings: a card keyed by a specific printing ("sol ring|284") on one
   side and by bare name ("sol ring") or another printing on the other is
   the same card. When one side lists several printings the other side
   cannot tell apart, they are collapsed into one bare entry.

INVARIANTS:
- Inputs are never mutated; reconciliation builds new maps
- Total copies per card name are preserved by reconciliation
- Same inputs always give the same output, in the same order
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from deckdelta.models.card import CardEntry, CardKey
from deckdelta.models.diff import (
    CardIn,
    CardOut,
    DiffResult,
    PrintingChange,
    QuantityChange,
    SectionDiff,
)
from deckdelta.models.parsed_list import ParsedList
from deckdelta.services.card_key import add_to_section, front_face

logger = logging.getLogger(__name__)

SectionMap = Mapping[CardKey, CardEntry]


@dataclass
class Reconciliation:
    """Both sides of a section re-keyed so equivalent cards share a key."""

    before: dict[CardKey, CardEntry]
    after: dict[CardKey, CardEntry]
    collapsed_printings: list[str] = field(default_factory=list)


def resolve_dfc_aliases(source: SectionMap, other: SectionMap) -> dict[CardKey, CardEntry]:
    """
    Re-key double-faced full names in `source` to their front face.

    Only keys absent from `other` are considered, and only when `other`
    knows the card by its front-face name. The collector number suffix of
    the key is kept.
    """
    other_names = {key.name for key in other}
    resolved: dict[CardKey, CardEntry] = {}

    for key, entry in source.items():
        if key not in other:
            front = front_face(key.name)
            if front != key.name:
                alias = CardKey(front, key.collector_number)
                if alias in other or front in other_names:
                    key = alias
        add_to_section(resolved, entry, key)

    return resolved


def _group_by_name(section: SectionMap) -> dict[str, list[CardKey]]:
    groups: dict[str, list[CardKey]] = {}
    for key in section:
        groups.setdefault(key.name, []).append(key)
    return groups


def collapse_entries(entries: list[CardEntry]) -> CardEntry:
    """
    Merge several printings of one card into a single entry.

    A lone entry is returned unchanged. Otherwise quantities are summed and
    the printing becomes unknown: collector number and foil are cleared and
    the set code is kept only when every entry shares it.
    """
    if len(entries) == 1:
        return entries[0]

    set_codes = {entry.set_code for entry in entries}
    return CardEntry(
        display_name=entries[0].display_name,
        quantity=sum(entry.quantity for entry in entries),
        set_code=set_codes.pop() if len(set_codes) == 1 else None,
        collector_number=None,
        is_foil=False,
    )


def reconcile_printings(before: SectionMap, after: SectionMap) -> Reconciliation:
    """
    Align bare and composite (printing-specific) keys between two sides.

    Per card name present on both sides:
        - same keys on both sides: kept as-is
        - one printing on one side, bare name on the other: the bare entry
          takes the printing's key
        - anything else: each side collapses to one bare entry
    """
    before_groups = _group_by_name(before)
    after_groups = _group_by_name(after)
    result = Reconciliation(before={}, after={})

    names = list(dict.fromkeys([*before_groups, *after_groups]))
    for name in names:
        before_keys = before_groups.get(name, [])
        after_keys = after_groups.get(name, [])

        if not before_keys or not after_keys or set(before_keys) == set(after_keys):
            for key in before_keys:
                result.before[key] = before[key]
            for key in after_keys:
                result.after[key] = after[key]
            continue

        bare = CardKey(name)
        if len(before_keys) == 1 and before_keys[0].is_composite and after_keys == [bare]:
            printing = before_keys[0]
            result.before[printing] = before[printing]
            result.after[printing] = after[bare]
            continue

        if len(after_keys) == 1 and after_keys[0].is_composite and before_keys == [bare]:
            printing = after_keys[0]
            result.before[printing] = before[bare]
            result.after[printing] = after[printing]
            continue

        result.before[bare] = collapse_entries([before[key] for key in before_keys])
        result.after[bare] = collapse_entries([after[key] for key in after_keys])

        if len(before_keys) > 1 or len(after_keys) > 1:
            display_name = after[after_keys[0]].display_name
            result.collapsed_printings.append(display_name)
            logger.debug(
                "Collapsed %d/%d printings of %s to one entry",
                len(before_keys),
                len(after_keys),
                display_name,
            )

    return result


def reconcile(before: SectionMap, after: SectionMap) -> Reconciliation:
    """Run double-faced alias resolution in both directions, then printing alignment."""
    before_aliased = resolve_dfc_aliases(before, after)
    after_aliased = resolve_dfc_aliases(after, before_aliased)
    return reconcile_printings(before_aliased, after_aliased)


def _printing_change(old: CardEntry, new: CardEntry) -> PrintingChange | None:
    """Printing change between two equal-count entries, if both printings are known."""
    if not old.set_code or not new.set_code:
        return None

    old_printing = (old.set_code, old.collector_number, old.is_foil)
    new_printing = (new.set_code, new.collector_number, new.is_foil)
    if old_printing == new_printing:
        return None

    return PrintingChange(
        name=new.display_name,
        quantity=new.quantity,
        old_set_code=old.set_code,
        old_collector_number=old.collector_number,
        old_is_foil=old.is_foil,
        new_set_code=new.set_code,
        new_collector_number=new.collector_number,
        new_is_foil=new.is_foil,
    )


def diff_section(before: SectionMap, after: SectionMap) -> SectionDiff:
    """
    Compute the changes between two versions of one deck section.

    Args:
        before: Older section {key: entry}
        after: Newer section {key: entry}

    Returns:
        SectionDiff with added, removed and quantity-changed cards sorted
        by name. Cards with the same count on both sides only count
        toward unchanged_count (and printing_changes if their printing moved).
    """
    reconciled = reconcile(before, after)
    old = reconciled.before
    new = reconciled.after

    diff = SectionDiff(collapsed_printings=reconciled.collapsed_printings)
    keys = list(dict.fromkeys([*old, *new]))

    for key in keys:
        old_entry = old.get(key)
        new_entry = new.get(key)
        before_qty = old_entry.quantity if old_entry is not None else 0
        after_qty = new_entry.quantity if new_entry is not None else 0

        # What the card looks like now
        shown = new_entry or old[key]

        if before_qty == 0 and after_qty > 0:
            diff.cards_in.append(
                CardIn(
                    name=shown.display_name,
                    quantity=after_qty,
                    set_code=shown.set_code,
                    collector_number=shown.collector_number,
                    is_foil=shown.is_foil,
                )
            )
        elif before_qty > 0 and after_qty == 0:
            diff.cards_out.append(
                CardOut(
                    name=shown.display_name,
                    quantity=before_qty,
                    set_code=shown.set_code,
                    collector_number=shown.collector_number,
                    is_foil=shown.is_foil,
                )
            )
        elif before_qty != after_qty:
            diff.quantity_changes.append(
                QuantityChange(
                    name=shown.display_name,
                    old_qty=before_qty,
                    new_qty=after_qty,
                    delta=after_qty - before_qty,
                    set_code=shown.set_code,
                    collector_number=shown.collector_number,
                    is_foil=shown.is_foil,
                )
            )
        else:
            diff.unchanged_count += 1
            if old_entry is not None and new_entry is not None and before_qty > 0:
                change = _printing_change(old_entry, new_entry)
                if change is not None:
                    diff.printing_changes.append(change)

    diff.cards_in.sort(key=lambda c: (c.name, c.collector_number or "", c.set_code or ""))
    diff.cards_out.sort(key=lambda c: (c.name, c.collector_number or "", c.set_code or ""))
    diff.quantity_changes.sort(
        key=lambda c: (c.name, c.collector_number or "", c.set_code or "")
    )
    diff.printing_changes.sort(key=lambda c: (c.name, c.new_collector_number or ""))
    diff.collapsed_printings.sort()
    diff.total_unique_cards = len(keys)

    return diff


def compute_diff(before: ParsedList, after: ParsedList) -> DiffResult:
    """
    Compare two parsed deck lists.

    Mainboard and sideboard are diffed independently; a card that moved
    between them shows up as removed from one and added to the other.

    Args:
        before: Older deck list
        after: Newer deck list

    Returns:
        DiffResult. Commander names come from the newer list, or from the
        older list if the newer one has none.
    """
    mainboard = diff_section(before.mainboard, after.mainboard)
    sideboard = diff_section(before.sideboard, after.sideboard)
    command_zone = diff_section(before.commanders, after.commanders)

    result = DiffResult(
        mainboard=mainboard,
        sideboard=sideboard,
        has_sideboard=bool(before.sideboard) or bool(after.sideboard),
        commanders=after.commander_names or before.commander_names,
        command_zone=command_zone,
    )

    logger.debug(
        "Diff computed: main +%d -%d ~%d, side +%d -%d ~%d",
        len(mainboard.cards_in),
        len(mainboard.cards_out),
        len(mainboard.quantity_changes),
        len(sideboard.cards_in),
        len(sideboard.cards_out),
        len(sideboard.quantity_changes),
    )
    return result
