import pytest

from deckdelta.models.card import CardEntry
from deckdelta.models.line import (
    Blank,
    CardLine,
    CsvHeaderRow,
    Ignored,
    Section,
    SectionHeader,
    SideboardPrefixedCardLine,
)
from deckdelta.parsers.line_classifier import (
    classify,
    classify_csv_header,
    column_role,
    is_foil_marker,
    parse_card_text,
)


class TestBlankAndIgnored:
    def test_empty_line(self) -> None:
        assert classify("") == Blank()
        assert classify("   \t ") == Blank()

    def test_comment_lines(self) -> None:
        assert classify("// Creatures") == Ignored("comment")
        assert classify("# exported from somewhere") == Ignored("comment")

    def test_bare_number(self) -> None:
        assert classify("42") == Ignored("bare number")

    def test_zero_quantity(self) -> None:
        assert classify("0 Lightning Bolt") == Ignored("zero quantity")


class TestSectionHeaders:
    @pytest.mark.parametrize(
        ("line", "section"),
        [
            ("Sideboard", Section.SIDEBOARD),
            ("sideboard:", Section.SIDEBOARD),
            ("SB", Section.SIDEBOARD),
            ("SB:", Section.SIDEBOARD),
            ("Sideboard (15)", Section.SIDEBOARD),
            ("Companion", Section.SIDEBOARD),
            ("Deck", Section.MAINBOARD),
            ("Mainboard", Section.MAINBOARD),
            ("MAIN.", Section.MAINBOARD),
            ("Commander", Section.COMMANDER),
            ("Commanders", Section.COMMANDER),
            ("Command Zone", Section.COMMANDER),
        ],
    )
    def test_recognized_headers(self, line: str, section: Section) -> None:
        assert classify(line) == SectionHeader(section)

    def test_card_named_like_header_with_quantity_is_card(self) -> None:
        result = classify("1 Commander's Sphere")

        assert isinstance(result, CardLine)
        assert result.entry.display_name == "Commander's Sphere"


class TestCardLines:
    def test_simple_line(self) -> None:
        result = classify("4 Lightning Bolt")

        assert result == CardLine(entry=CardEntry(display_name="Lightning Bolt", quantity=4))

    def test_x_quantity(self) -> None:
        for line in ("4x Lightning Bolt", "4X Lightning Bolt", "4 x Lightning Bolt"):
            result = classify(line)
            assert isinstance(result, CardLine)
            assert result.entry.quantity == 4
            assert result.entry.display_name == "Lightning Bolt"

    def test_name_starting_with_x(self) -> None:
        result = classify("1 Xenagos, the Reveler")

        assert isinstance(result, CardLine)
        assert result.entry.display_name == "Xenagos, the Reveler"

    def test_set_and_bracketed_collector_number(self) -> None:
        result = classify("1 Sol Ring (LTC) [284]")

        assert isinstance(result, CardLine)
        assert result.entry.display_name == "Sol Ring"
        assert result.entry.set_code == "ltc"
        assert result.entry.collector_number == "284"
        assert result.fallback is False

    def test_set_and_bare_collector_number(self) -> None:
        """Arena style: collector number follows the set code without brackets."""
        result = classify("4 Lightning Bolt (M10) 146")

        assert isinstance(result, CardLine)
        assert result.entry.set_code == "m10"
        assert result.entry.collector_number == "146"

    def test_alphanumeric_collector_numbers(self) -> None:
        for line, number in (
            ("1 Dragon Tempest (pdtk) [136p]", "136p"),
            ("1 Mother of Runes (plst) [DDO-20]", "DDO-20"),
            ("1 Nykthos, Shrine to Nyx (ppro) [2022-3]", "2022-3"),
            ("1x Dragon Tempest (pdtk) 136p", "136p"),
        ):
            result = classify(line)
            assert isinstance(result, CardLine)
            assert result.entry.collector_number == number

    def test_set_only(self) -> None:
        result = classify("2 Counterspell (MH2)")

        assert isinstance(result, CardLine)
        assert result.entry.display_name == "Counterspell"
        assert result.entry.set_code == "mh2"
        assert result.entry.collector_number is None

    def test_bracketed_number_without_set(self) -> None:
        result = classify("1 Sol Ring [284]")

        assert isinstance(result, CardLine)
        assert result.entry.set_code is None
        assert result.entry.collector_number == "284"

    def test_trailing_number_without_set_stays_in_name(self) -> None:
        result = classify("1 Borrowing 100,000 Arrows")

        assert isinstance(result, CardLine)
        assert result.entry.display_name == "Borrowing 100,000 Arrows"
        assert result.entry.collector_number is None

    def test_foil_marker(self) -> None:
        result = classify("1 Dragon Tempest (pdtk) [136p] *F*")

        assert isinstance(result, CardLine)
        assert result.entry.is_foil is True
        assert result.finish_marker == "F"
        assert result.entry.collector_number == "136p"

    def test_etched_marker_is_foil(self) -> None:
        result = classify("1 Sol Ring (cmm) [410] *E*")

        assert isinstance(result, CardLine)
        assert result.entry.is_foil is True
        assert result.finish_marker == "E"

    def test_double_faced_name_kept_whole(self) -> None:
        result = classify("1 Sheoldred // The True Scriptures (mom) [125]")

        assert isinstance(result, CardLine)
        assert result.entry.display_name == "Sheoldred // The True Scriptures"

    def test_name_normalization(self) -> None:
        result = classify("1  Atraxa,   Praetors’ Voice")

        assert isinstance(result, CardLine)
        assert result.entry.display_name == "Atraxa, Praetors' Voice"

    def test_headerless_csv_row(self) -> None:
        result = classify('4,"Lightning Bolt"')

        assert isinstance(result, CardLine)
        assert result.entry.quantity == 4
        assert result.entry.display_name == "Lightning Bolt"

    def test_inline_commander_tag(self) -> None:
        result = classify("1 Atraxa, Praetors' Voice (Commander)")

        assert isinstance(result, CardLine)
        assert result.commander_tag is True
        assert result.entry.display_name == "Atraxa, Praetors' Voice"


class TestSideboardPrefix:
    def test_sb_prefix(self) -> None:
        result = classify("SB: 3 Fatal Push")

        assert isinstance(result, SideboardPrefixedCardLine)
        assert result.entry == CardEntry(display_name="Fatal Push", quantity=3)

    def test_sb_prefix_with_metadata(self) -> None:
        result = classify("sb: 1 Negate (rix) [44]")

        assert isinstance(result, SideboardPrefixedCardLine)
        assert result.entry.set_code == "rix"
        assert result.entry.collector_number == "44"


class TestFallback:
    def test_bare_name_is_fallback(self) -> None:
        result = classify("Lightning Bolt")

        assert isinstance(result, CardLine)
        assert result.fallback is True
        assert result.entry == CardEntry(display_name="Lightning Bolt", quantity=1)

    def test_garbage_never_raises(self) -> None:
        for line in ("((((", "*F*", "[]", "x", "SB: ???", "☃ snowman"):
            result = classify(line)
            assert result is not None

    def test_whole_line_kept_as_name(self) -> None:
        result = classify("Sol Ring (ltc) [284]")

        assert isinstance(result, CardLine)
        assert result.fallback is True
        assert result.entry.display_name == "Sol Ring (ltc) [284]"


class TestCsvHeader:
    def test_recognizes_header(self) -> None:
        result = classify_csv_header("Quantity,Name,Set,Collector Number")

        assert result == CsvHeaderRow(columns=("quantity", "name", "set", "collector number"))

    def test_quoted_header(self) -> None:
        result = classify_csv_header('"Count","Card Name"')

        assert result == CsvHeaderRow(columns=("count", "card name"))

    def test_card_line_with_comma_is_not_header(self) -> None:
        assert classify_csv_header("1 Nykthos, Shrine to Nyx") is None

    def test_no_comma_is_not_header(self) -> None:
        assert classify_csv_header("name") is None

    def test_oversized_field_is_not_header(self) -> None:
        assert classify_csv_header("name, " + "x" * 140_000) is None

    def test_classify_returns_header_row(self) -> None:
        assert isinstance(classify("name,quantity"), CsvHeaderRow)

    def test_column_roles(self) -> None:
        assert column_role("Card Name") == "name"
        assert column_role("QTY") == "quantity"
        assert column_role("edition") == "set"
        assert column_role("cn") == "collector_number"
        assert column_role("Board") == "section"
        assert column_role("price") is None


class TestHelpers:
    def test_is_foil_marker(self) -> None:
        assert is_foil_marker("F")
        assert is_foil_marker("foil")
        assert is_foil_marker("ETCHED")
        assert not is_foil_marker("CMDR")
        assert not is_foil_marker(None)

    def test_parse_card_text(self) -> None:
        entry, marker = parse_card_text(2, "Fire // Ice (mh2) 290 *F*")

        assert entry == CardEntry(
            display_name="Fire // Ice",
            quantity=2,
            set_code="mh2",
            collector_number="290",
            is_foil=True,
        )
        assert marker == "F"
