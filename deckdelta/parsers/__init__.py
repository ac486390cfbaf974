from deckdelta.parsers.csv_list import parse_csv_rows
from deckdelta.parsers.deck_list import detect_format, parse
from deckdelta.parsers.line_classifier import classify, classify_csv_header

__all__ = [
    "classify",
    "classify_csv_header",
    "detect_format",
    "parse",
    "parse_csv_rows",
]
