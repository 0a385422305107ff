"""Tests for the bottle label OCR parser."""

from winejournal.services.journal_parser import parse_label_text


def test_winery_and_varietal_lines(today) -> None:
    """Test the winery line is combined with the varietal line."""
    text = """CHATEAU MONTELENA
Napa Valley
Chardonnay
2019
750 ml
13.5% alc/vol"""

    result = parse_label_text(text, today=today)

    assert len(result.batches) == 1
    batch = result.batches[0]
    assert batch.purchase_date == today
    assert len(batch.items) == 1

    item = batch.items[0]
    assert item.name == "CHATEAU MONTELENA Chardonnay"
    assert item.vintage_year == 2019
    assert item.color == "white"
    assert item.quantity == 1
    assert item.tastings == []
    assert result.ambiguities == []


def test_boilerplate_lines_are_ignored(today) -> None:
    """Test warnings, barcodes and bottler lines never reach the name."""
    text = """Tenuta San Guido
Sassicaia
2016
Contains Sulfites
GOVERNMENT WARNING: pregnant women
0 12345 67890 5
Product of Italy"""

    result = parse_label_text(text, today=today)

    item = result.batches[0].items[0]
    assert item.name == "Tenuta San Guido Sassicaia"
    assert item.vintage_year == 2016


def test_winery_without_varietal_uses_next_line(today) -> None:
    """Test the first other line is used when none names a varietal."""
    result = parse_label_text("Domaine Tempier\nBandol\nRouge\n2018", today=today)

    item = result.batches[0].items[0]
    assert item.name == "Domaine Tempier Bandol"
    assert item.color == "red"


def test_no_winery_joins_first_three_lines(today) -> None:
    """Test labels without a producer keyword."""
    result = parse_label_text("Opus One\nNapa Valley\nRed Wine\nOakville\n2015", today=today)

    assert result.batches[0].items[0].name == "Opus One Napa Valley Red Wine"


def test_single_line_label(today) -> None:
    """Test a one-line label has its year removed from the name."""
    result = parse_label_text("Opus One 2015", today=today)

    item = result.batches[0].items[0]
    assert item.name == "Opus One"
    assert item.vintage_year == 2015


def test_standalone_two_digit_year(today) -> None:
    """Test the two-digit fallback when no vintage rule matches."""
    result = parse_label_text("Ridge\nLytton Springs\nVintage: 18", today=today)

    assert result.batches[0].items[0].vintage_year == 2018
    assert result.ambiguities == []


def test_missing_vintage_defaults_with_ambiguity(today) -> None:
    """Test a label with no year gets a recent default for review."""
    text = "Domaine Tempier\nBandol\nRouge"

    result = parse_label_text(text, today=today)

    item = result.batches[0].items[0]
    assert item.vintage_year == today.year - 2

    assert len(result.ambiguities) == 1
    ambiguity = result.ambiguities[0]
    assert ambiguity.type == "vintage_parse"
    assert ambiguity.message == "Could not find vintage year, defaulting to recent"
    assert ambiguity.context == text
    assert ambiguity.suggestion == f"Using {today.year - 2}"


def test_ambiguity_context_is_truncated(today) -> None:
    """Test long label text is cut to 100 characters of context."""
    text = "Domaine " + "x" * 200

    result = parse_label_text(text, today=today)

    assert len(result.ambiguities[0].context) == 100


def test_empty_label(today) -> None:
    """Test empty text still produces one placeholder item."""
    result = parse_label_text("", today=today)

    assert len(result.batches) == 1
    assert result.batches[0].items[0].name == "Unknown Wine"
    assert len(result.ambiguities) == 1


def test_crlf_label(today) -> None:
    """Test Windows line endings."""
    result = parse_label_text("Opus One\r\nNapa Valley\r\n2015", today=today)

    item = result.batches[0].items[0]
    assert item.name == "Opus One Napa Valley"
    assert item.vintage_year == 2015
