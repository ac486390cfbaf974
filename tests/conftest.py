from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_arena_export() -> str:
    """Sample Arena deck export for testing."""
    return """Deck
4 Lightning Bolt (LEB) 163
4 Monastery Swiftspear (BRO) 144
20 Mountain (NEO) 290

Sideboard
2 Abrade (VOW) 139"""


@pytest.fixture
def sample_commander_list() -> str:
    """Commander list in the "Commander, blank line, deck" export layout."""
    return """Commander
1 Atraxa, Praetors' Voice

1 Sol Ring (ltc) [284]
1 Sheoldred // The True Scriptures (mom) [125]
4 Swamp"""


@pytest.fixture
def fixture_text():
    """Read a text fixture from tests/fixtures by file name."""

    def _read(name: str) -> str:
        return (FIXTURES / name).read_text(encoding="utf-8")

    return _read
