from fractions import Fraction

from rateio.domain.money import format_money, round_half_up


def test_round_half_up_rounds_ties_toward_positive_infinity() -> None:
    assert round_half_up(Fraction(5, 2)) == 3
    assert round_half_up(Fraction(-5, 2)) == -2
    assert round_half_up(Fraction(7, 3)) == 2
    assert round_half_up(Fraction(8, 3)) == 3


def test_round_half_up_keeps_integers() -> None:
    assert round_half_up(42) == 42


def test_format_money_has_two_decimal_places() -> None:
    assert format_money(1234) == "12.34"
    assert format_money(5) == "0.05"
    assert format_money(0) == "0.00"
    assert format_money(-250) == "-2.50"
