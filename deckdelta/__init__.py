from deckdelta.analysis.differ import compute_diff, diff_section
from deckdelta.parsers.deck_list import parse
from deckdelta.services.card_key import front_face, key_for

__all__ = [
    "compute_diff",
    "diff_section",
    "front_face",
    "key_for",
    "parse",
]
