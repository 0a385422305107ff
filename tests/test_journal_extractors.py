"""Unit tests for single-value extractors used by the journal parser."""

from datetime import date

import pytest

from winejournal.services.journal_parser.extractors import (
    PRICE_RULES,
    VINTAGE_RULES,
    count_vintage_years,
    detect_color,
    extract_embedded_tasting,
    extract_wine_name,
    has_vintage_year,
    matching_rule,
    parse_date,
    parse_price,
    parse_quantity,
    parse_vintage_year,
    strip_accents,
)


# =============================================================================
# Dates
# =============================================================================


class TestParseDate:
    """Tests for parse_date."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("10/14/25", date(2025, 10, 14)),
            ("10/14/2025", date(2025, 10, 14)),
            ("3/26/2024", date(2024, 3, 26)),
            ("2024-03-26", date(2024, 3, 26)),
            (" 11/13/25 ", date(2025, 11, 13)),
        ],
    )
    def test_supported_formats(self, text, expected):
        """Test each supported date shape."""
        assert parse_date(text) == expected

    def test_two_and_four_digit_years_agree(self):
        """Test that 2- and 4-digit years give the same date."""
        assert parse_date("4/2/19") == parse_date("4/2/2019")

    def test_month_year_uses_first_of_month(self):
        """Test M/YY parses to the first day of the month."""
        assert parse_date("6/20") == date(2020, 6, 1)

    def test_two_digit_year_never_pivots_to_1900s(self):
        """Test that two-digit years always land in the 2000s."""
        assert parse_date("3/85") == date(2085, 3, 1)

    @pytest.mark.parametrize("text", ["", "hello", "13/45/25", "2/30/24", "2024/03/26"])
    def test_invalid_dates(self, text):
        """Test malformed or impossible dates return None."""
        assert parse_date(text) is None


# =============================================================================
# Vintage years
# =============================================================================


class TestVintageYear:
    """Tests for vintage year extraction."""

    def test_four_digit_year(self):
        """Test a plain four-digit vintage."""
        assert parse_vintage_year("Delille Chaleur White 2022 $40 (3)") == 2022

    def test_four_digit_year_out_of_range(self):
        """Test drinking-window years are not vintages."""
        assert parse_vintage_year("Best NOW-2030") is None
        assert parse_vintage_year("Old bottle 1975") is None

    def test_apostrophe_year(self):
        """Test '19 style vintages."""
        assert parse_vintage_year("Ridge Zinfandel '19") == 2019
        assert parse_vintage_year("Mondavi Reserve '97") == 1997

    def test_two_digit_after_word(self):
        """Test a bare two-digit year after the name."""
        assert parse_vintage_year("Cedarville Syrah 19") == 2019
        assert parse_vintage_year("Rocca Barbaresco 98, 45") == 1998

    def test_glued_two_digit_year(self):
        """Test a two-digit year glued to the end of the name."""
        assert parse_vintage_year("MALBEC18") == 2018

    def test_two_digit_out_of_pivot_ranges(self):
        """Test two-digit numbers outside 10-30 and 80-99 are not years."""
        assert parse_vintage_year("Wine 45") is None

    def test_no_vintage(self):
        """Test text without any year."""
        assert parse_vintage_year("Mystery red blend") is None

    def test_four_digit_rule_wins_first(self):
        """Test rule precedence is explicit in the rule table."""
        assert matching_rule(VINTAGE_RULES, "Opus '15 bought 2019") == "four_digit"
        assert matching_rule(VINTAGE_RULES, "Opus One '15") == "apostrophe"

    def test_has_vintage_year(self):
        """Test the looser vintage check used for classification."""
        assert has_vintage_year("ABADIA RETUERTA ESPECIAL, 29.99, 2015")
        assert has_vintage_year("Opus One '15")
        assert not has_vintage_year("Rich, minerally finish.")

    def test_count_vintage_years_counts_repeats(self):
        """Test repeated years count as separate occurrences."""
        assert count_vintage_years("Caymus 2018, 55+ Silver Oak Cabernet 2018, 55") == 2
        assert count_vintage_years("Caymus 2018") == 1
        assert count_vintage_years("No year") == 0


# =============================================================================
# Prices and quantities
# =============================================================================


class TestParsePrice:
    """Tests for parse_price."""

    def test_dollar_price(self):
        """Test $ prices."""
        assert parse_price("Wine 2019 $50") == 50
        assert parse_price("Wine 2019 $29.99") == pytest.approx(29.99)

    def test_comma_delimited_prices(self):
        """Test prices set off by commas."""
        assert parse_price("Chappellet Mountain Cuvee , 35") == 35
        assert parse_price("AALTO Tempranillo, Ribera del duero , 55") == 55
        assert parse_price("ABADIA RETUERTA ESPECIAL, 29.99, 2015") == pytest.approx(29.99)

    def test_year_comma_price_colon(self):
        """Test YEAR, PRICE: format."""
        assert parse_price("Wine 2015, 25:") == 25

    def test_plus_price(self):
        """Test 50+ style prices."""
        assert parse_price("Wine 7.5, 50+") == 50

    def test_paren_price(self):
        """Test (50) style prices."""
        assert parse_price("The Owl and the oak, Sonoma Cabernet 2013 (50) 7.5") == 50

    def test_unit_price(self):
        """Test receipt N @ price lines."""
        assert parse_price("2 @ 39.99") == pytest.approx(39.99)

    def test_trailing_price_with_tax_code(self):
        """Test a receipt price followed by a tax code letter."""
        assert parse_price("Some Wine 2019 45 T") == 45

    def test_bare_numbers_outside_range_rejected(self):
        """Test bare numbers outside the plausible price range."""
        assert parse_price("Wine 5") is None
        assert parse_price("Wine 2019 600") is None

    def test_dollar_price_not_range_checked(self):
        """Test explicit $ prices are trusted even when cheap."""
        assert parse_price("Table wine $9") == 9

    def test_no_price(self):
        """Test text without a price."""
        assert parse_price("Wine without price") is None

    def test_rule_names(self):
        """Test which rule picks up each shape."""
        assert matching_rule(PRICE_RULES, "Wine 7.5, 50+") == "plus_price"
        assert matching_rule(PRICE_RULES, "Wine 2015, 25: 8") == "year_comma_price_colon"


class TestParseQuantity:
    """Tests for parse_quantity."""

    def test_paren_quantity(self):
        """Test (3) style quantities."""
        assert parse_quantity("Wine (3)") == 3
        assert parse_quantity("Wine $50 (2)") == 2

    def test_x_quantity(self):
        """Test x6 style quantities."""
        assert parse_quantity("Wine x6") == 6

    def test_at_quantity(self):
        """Test receipt N @ price quantities."""
        assert parse_quantity("2 @ 39.99") == 2

    def test_quantity_field(self):
        """Test Quantity: N fields."""
        assert parse_quantity("Quantity: 4") == 4

    def test_counts_capped_at_four_digits(self):
        """Test huge digit runs are read as at most four digits."""
        assert parse_quantity("Wine x" + "9" * 5000) == 9999
        assert parse_quantity("9" * 5000 + " @ 39.99") == 9999

    def test_defaults_to_one(self):
        """Test missing or zero quantities default to one."""
        assert parse_quantity("Wine") == 1
        assert parse_quantity("Wine (0)") == 1


# =============================================================================
# Color
# =============================================================================


class TestDetectColor:
    """Tests for detect_color."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("SOALHEIRO ALVARINHO 2022", "white"),
            ("Delille Chaleur White 2022", "white"),
            ("Trimbach Gewürztraminer 2019", "white"),
            ("Whispering Angel Rosé 2023", "rose"),
            ("Egly-Ouriet Brut Pinot Noir", "sparkling"),
            ("Crémant de Bourgogne", "sparkling"),
            ("Caymus Cabernet 2019", "red"),
            ("Mystery Blend", "red"),
        ],
    )
    def test_colors(self, text, expected):
        """Test color keywords, including accented ones."""
        assert detect_color(text) == expected

    def test_rose_region_is_not_rose(self):
        """Test "Rose de ..." region names do not make a rose."""
        assert detect_color("Cabernet d'Anjou Rose de Loire") == "red"

    def test_strip_accents(self):
        """Test accent stripping."""
        assert strip_accents("Château Rosé Gewürz") == "Chateau Rose Gewurz"


# =============================================================================
# Wine names
# =============================================================================

NAME_CORPUS = [
    ("ABADIA RETUERTA ESPECIAL, 29.99, 2015", "ABADIA RETUERTA ESPECIAL"),
    ("ABADIA RETUERTA ESPECIAL, 29.99", "ABADIA RETUERTA ESPECIAL"),
    ("Chappellet Mountain Cuvee , 35", "Chappellet Mountain Cuvee"),
    ("AALTO Tempranillo, Ribera del duero , 55", "AALTO Tempranillo, Ribera del duero"),
    ("Delille Chaleur White 2022 $40 (3)", "Delille Chaleur White"),
    ("Cedarville SYrah, 2015, 25: 8.5, Nice red fruit", "Cedarville SYrah"),
    ("The Owl and the oak, Sonoma Cabernet 2013 (50) 7.5", "The Owl and the oak, Sonoma Cabernet"),
    ("14248 PINTAS CHARACTER 2019", "PINTAS CHARACTER"),
    ("Penfolds BIN 389 2018", "Penfolds BIN 389"),
    ("Wine $50", "Wine"),
    ("Wine 7.5", "Wine"),
    ("Wine (3)", "Wine"),
    ("Wine x2", "Wine"),
    ("** Ridge Geyserville '19", "Ridge Geyserville"),
]


class TestExtractWineName:
    """Tests for extract_wine_name."""

    @pytest.mark.parametrize("text,expected", NAME_CORPUS)
    def test_name_corpus(self, text, expected):
        """Test cleanup of each sample line."""
        assert extract_wine_name(text) == expected

    @pytest.mark.parametrize("text", [text for text, _ in NAME_CORPUS])
    def test_idempotent(self, text):
        """Test a second pass removes nothing further."""
        once = extract_wine_name(text)
        assert extract_wine_name(once) == once

    def test_identity_number_is_kept(self):
        """Test numbers that are part of the name survive."""
        assert extract_wine_name("Penfolds BIN 389 45") == "Penfolds BIN 389 45"


# =============================================================================
# Inline tastings
# =============================================================================


class TestEmbeddedTasting:
    """Tests for extract_embedded_tasting."""

    def test_inline_tasting(self, today):
        """Test a price: rating, notes tail."""
        tasting = extract_embedded_tasting(
            "Cedarville SYrah, 2015, 25: 8.5, Nice simple red fruit nose", today=today
        )
        assert tasting is not None
        assert tasting.rating == 8.5
        assert tasting.notes == "Nice simple red fruit nose"
        assert tasting.date == today

    def test_rating_out_of_range(self, today):
        """Test ratings above 10 are not tastings."""
        assert extract_embedded_tasting("Wine 2015, 25: 12, notes", today=today) is None

    def test_no_tasting(self, today):
        """Test lines without an inline tasting."""
        assert extract_embedded_tasting("Wine 2015 $25", today=today) is None
