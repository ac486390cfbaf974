from deckdelta.api.diff import router as diff_router
from deckdelta.api.health import router as health_router
from deckdelta.api.lists import router as lists_router

__all__ = [
    "diff_router",
    "health_router",
    "lists_router",
]
