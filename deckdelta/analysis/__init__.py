from deckdelta.analysis.differ import compute_diff, diff_section, reconcile

__all__ = [
    "compute_diff",
    "diff_section",
    "reconcile",
]
