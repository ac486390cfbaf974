from deckdelta.services.card_key import (
    bare_key,
    front_face,
    is_double_faced,
    key_for,
    key_string,
    merge_entries,
    normalize_name,
)

__all__ = [
    "bare_key",
    "front_face",
    "is_double_faced",
    "key_for",
    "key_string",
    "merge_entries",
    "normalize_name",
]
