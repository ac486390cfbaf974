"""Tests for diff API endpoint."""

from collections.abc import Callable

import pytest
from httpx import ASGITransport, AsyncClient

from deckdelta.config import settings
from deckdelta.main import app


@pytest.fixture
async def client():
    """Provide an async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestDiffEndpoint:
    async def test_card_added(self, client: AsyncClient) -> None:
        response = await client.post(
            "/diff",
            json={"before": "4 Lightning Bolt", "after": "4 Lightning Bolt\n2 Counterspell"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["mainboard"]["cards_in"] == [
            {
                "name": "Counterspell",
                "quantity": 2,
                "set_code": None,
                "collector_number": None,
                "is_foil": False,
            }
        ]
        assert data["mainboard"]["cards_out"] == []
        assert data["mainboard"]["unchanged_count"] == 1
        assert data["mainboard"]["total_unique_cards"] == 2
        assert data["has_sideboard"] is False
        assert data["commanders"] == []

    async def test_quantity_change(self, client: AsyncClient) -> None:
        response = await client.post("/diff", json={"before": "1 Sol Ring", "after": "3 Sol Ring"})

        change = response.json()["mainboard"]["quantity_changes"][0]
        assert change["name"] == "Sol Ring"
        assert change["old_qty"] == 1
        assert change["new_qty"] == 3
        assert change["delta"] == 2

    async def test_printing_change(self, client: AsyncClient) -> None:
        response = await client.post(
            "/diff",
            json={"before": "1 Sol Ring (ltc) [284]", "after": "1 Sol Ring (fdn) [355]"},
        )

        main = response.json()["mainboard"]
        assert main["quantity_changes"] == []
        assert main["printing_changes"][0]["old_set_code"] == "ltc"
        assert main["printing_changes"][0]["new_collector_number"] == "355"

    async def test_fixture_lists(
        self, client: AsyncClient, fixture_text: Callable[[str], str]
    ) -> None:
        response = await client.post(
            "/diff",
            json={
                "before": fixture_text("moxfield_before.txt"),
                "after": fixture_text("archidekt_after.csv"),
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["commanders"] == ["Atraxa, Praetors' Voice"]
        assert data["has_sideboard"] is True
        assert data["mainboard"]["collapsed_printings"] == ["Nazgul"]
        assert data["sideboard"]["quantity_changes"][0]["delta"] == 1
        assert data["command_zone"]["unchanged_count"] == 1

    async def test_blank_line_sideboard_override(self, client: AsyncClient) -> None:
        response = await client.post(
            "/diff",
            json={
                "before": "4 Lightning Bolt",
                "after": "4 Lightning Bolt\n\n2 Negate",
                "blank_line_starts_sideboard": True,
            },
        )

        data = response.json()
        assert data["has_sideboard"] is True
        assert data["sideboard"]["cards_in"][0]["name"] == "Negate"
        assert not data["mainboard"]["cards_in"]

    async def test_garbage_input_still_diffs(self, client: AsyncClient) -> None:
        response = await client.post("/diff", json={"before": "((((", "after": "*F*\n\n\n"})

        assert response.status_code == 200

    async def test_missing_field_rejected(self, client: AsyncClient) -> None:
        response = await client.post("/diff", json={"before": "4 Lightning Bolt"})

        assert response.status_code == 422

    async def test_oversized_list_rejected(self, client: AsyncClient) -> None:
        response = await client.post(
            "/diff",
            json={"before": "x" * (settings.max_list_chars + 1), "after": ""},
        )

        assert response.status_code == 422
