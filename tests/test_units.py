import pytest

from src.normalization.units import Phase, parse_unit


@pytest.mark.parametrize(
    "unit_str, amount, phase",
    [
        ("5 kg", 5000, Phase.SOLID),
        ("400 g", 400, Phase.SOLID),
        ("1 l", 1000, Phase.LIQUID),
        ("200 ml", 200, Phase.LIQUID),
        ("1 L", 1000, Phase.LIQUID),
        ("250gm", 250, Phase.SOLID),
        ("1.5 ltr", 1500, Phase.LIQUID),
        ("2 litres", 2000, Phase.LIQUID),
        ("500 grams", 500, Phase.SOLID),
    ],
)
def test_direct_units_convert_to_base(unit_str: str, amount: float, phase: Phase) -> None:
    result = parse_unit(unit_str)
    assert result is not None
    assert result.amount == pytest.approx(amount)
    assert result.phase is phase


def test_multiplicative_form() -> None:
    result = parse_unit("2 x 400 g")
    assert result is not None
    assert result.amount == 800
    assert result.phase is Phase.SOLID


def test_multiplicative_variants() -> None:
    assert parse_unit("3*200 ml").amount == 600
    assert parse_unit("3*200 ml").phase is Phase.LIQUID
    assert parse_unit("4 × 1 kg").amount == 4000
    # no token after the size defaults to grams
    assert parse_unit("2x50").amount == 100


def test_piece_units_are_unparseable() -> None:
    assert parse_unit("3 pcs") is None
    assert parse_unit("1 pc") is None
    assert parse_unit("6 pieces") is None
    assert parse_unit("2 x 3 pcs") is None


def test_empty_input() -> None:
    assert parse_unit(None) is None
    assert parse_unit("") is None
    assert parse_unit("   ") is None


def test_bare_number_defaults_to_grams() -> None:
    result = parse_unit("750")
    assert result is not None
    assert result.amount == 750
    assert result.phase is Phase.SOLID


def test_unknown_token_falls_back_to_grams() -> None:
    result = parse_unit("12 dozen")
    assert result is not None
    assert result.phase is Phase.SOLID
    assert result.amount == 12


def test_no_number_or_zero_amount() -> None:
    assert parse_unit("kg") is None
    assert parse_unit("about a handful") is None
    assert parse_unit("0 g") is None


def test_first_number_wins_without_operator() -> None:
    result = parse_unit("500 g 2 kg")
    assert result is not None
    assert result.amount == 500


def test_thousands_separator_is_ignored() -> None:
    assert parse_unit("1,000 g").amount == 1000


def test_liquid_detection_is_by_token_not_substring() -> None:
    assert parse_unit("1 kg").phase is Phase.SOLID
    assert parse_unit("100 ml").phase is Phase.LIQUID
    assert parse_unit("1 l").phase is Phase.LIQUID


def test_numbers_without_leading_or_trailing_digits() -> None:
    assert parse_unit(".5 kg").amount == 500
    assert parse_unit("5. kg").amount == 5000
    assert parse_unit("2 x .5 l").amount == 1000
    assert parse_unit("2 x .5 l").phase is Phase.LIQUID
