"""Tests for the closed-form savings/withdrawal helpers."""

import pytest

from engine.annuity import adjust_to_today, annuity_withdrawal, future_value


def test_future_value_zero_months_returns_savings():
    assert future_value(50000, 500, 7.0, 0) == 50000
    assert future_value(50000, 500, 7.0, -3) == 50000


def test_future_value_zero_rate_is_linear():
    assert future_value(10000, 250, 0.0, 2) == pytest.approx(10000 + 250 * 24)


def test_future_value_compounds():
    """12%/yr → 1%/mo; one year of 100/mo on top of 1000."""
    growth = 1.01 ** 12
    expected = 1000 * growth + 100 * (growth - 1) / 0.01
    assert future_value(1000, 100, 12.0, 1) == pytest.approx(expected)


def test_annuity_withdrawal_empty_nest_egg():
    assert annuity_withdrawal(0, 5.0, 30) == (0.0, 0.0)
    assert annuity_withdrawal(-100, 5.0, 30) == (0.0, 0.0)


def test_annuity_withdrawal_zero_rate_splits_evenly():
    monthly, annual = annuity_withdrawal(120000, 0.0, 10)
    assert monthly == pytest.approx(1000)
    assert annual == pytest.approx(12000)


def test_annuity_withdrawal_standard_payment():
    """100k over 30 years at 6% is the familiar 599.55/mo amortization."""
    monthly, annual = annuity_withdrawal(100000, 6.0, 30)
    assert monthly == pytest.approx(599.55, abs=0.01)
    assert annual == pytest.approx(monthly * 12)


def test_annuity_withdrawal_at_least_one_month():
    monthly, _ = annuity_withdrawal(5000, 0.0, 0)
    assert monthly == pytest.approx(5000)


@pytest.mark.parametrize(
    "nominal, inflation, years, expected",
    [
        (1000, 0.0, 10, 1000),
        (1102.5, 5.0, 2, 1000),
        (1000, 3.0, -4, 1000),
    ],
)
def test_adjust_to_today(nominal, inflation, years, expected):
    assert adjust_to_today(nominal, inflation, years) == pytest.approx(expected)
