"""Tests for the yearly table, 4%-rule highlighting and the plan report."""

from dataclasses import replace

import pytest

from core.schema import MonthlyPercentiles, SimulationResult
from engine.projector import project
from engine.simulator import simulate
from reports.aggregator import (
    highlight_age,
    percentile_bands_frame,
    safe_withdrawal_threshold,
    yearly_percentile_table,
)
from reports.decisions import first_withdrawal_in_todays_dollars, generate_plan_report, success_band


def _result_from_p50(values, start_age=50.0):
    bands = tuple(
        MonthlyPercentiles(month=m, age=start_age + m / 12, p5=v, p10=v, p50=v, p90=v, p95=v, sample_count=1)
        for m, v in enumerate(values)
    )
    return SimulationResult(success_rate=100.0, monthly_percentiles=bands, trial_count=1)


def test_safe_withdrawal_threshold():
    assert safe_withdrawal_threshold(40000) == 1_000_000


def test_yearly_table_uses_first_month_of_each_age(growth_inputs, zero_noise):
    result = simulate(growth_inputs, 2, rng=zero_noise)
    table = yearly_percentile_table(result)

    assert list(table["year_age"]) == list(range(40, 90))
    assert list(table["month"]) == [12 * i for i in range(50)]
    bands = percentile_bands_frame(result)
    assert table["p50"].iloc[3] == pytest.approx(bands["p50"].iloc[36])


def test_yearly_table_with_fractional_start_age():
    result = _result_from_p50([1.0] * 24, start_age=50.5)
    table = yearly_percentile_table(result)

    assert list(table["year_age"]) == [50, 51, 52]
    assert list(table["month"]) == [0, 6, 18]


def test_highlight_is_year_after_threshold_first_reached():
    # threshold 25 * 40 = 1000, first reached at month 14 (age 51.1667)
    values = [0.0] * 30
    values[14] = 1000.0
    values[20] = 5000.0
    result = _result_from_p50(values)

    assert highlight_age(result, 40) == 52
    table = yearly_percentile_table(result, retirement_spending=40)
    assert list(table.loc[table["highlight"], "year_age"]) == [52]


def test_highlight_none_when_never_reached():
    result = _result_from_p50([10.0] * 24)

    assert highlight_age(result, 1000) is None
    table = yearly_percentile_table(result, retirement_spending=1000)
    assert not table["highlight"].any()


def test_yearly_table_empty_result():
    empty = SimulationResult(success_rate=0.0, monthly_percentiles=(), trial_count=1)
    table = yearly_percentile_table(empty, retirement_spending=100)
    assert len(table) == 0
    assert "highlight" in table.columns


@pytest.mark.parametrize(
    "rate, band",
    [(100.0, "on_track"), (80.0, "on_track"), (79.9, "borderline"), (60.0, "borderline"), (59.9, "at_risk"), (0.0, "at_risk")],
)
def test_success_band(rate, band):
    assert success_band(rate) == band


def test_plan_report_for_comfortable_plan(growth_inputs, zero_noise):
    projection = project(growth_inputs)
    result = simulate(growth_inputs, 3, rng=zero_noise)

    report = generate_plan_report(growth_inputs, projection, result)

    assert report.success_rate == 100.0
    assert report.success_band == "on_track"
    assert report.nest_egg == projection.nest_egg
    assert report.monthly_withdrawal == pytest.approx(5000)
    assert report.retirement_years == 25
    assert report.median_depletion_age is None
    assert report.median_final_balance == pytest.approx(projection.monthly_projections[-1].balance)
    assert report.first_withdrawal_nominal == pytest.approx(
        projection.monthly_projections[projection.retirement_index].withdrawal
    )
    assert report.sustainable_monthly_withdrawal > 0
    assert not any(f.startswith("LOW_SUCCESS") for f in report.flags)

    df = report.to_dataframe()
    assert "Success Probability" in list(df["Metric"])


def test_plan_report_flags_depleting_plan(scenario_inputs, zero_noise):
    projection = project(scenario_inputs)
    result = simulate(scenario_inputs, 3, rng=zero_noise)

    report = generate_plan_report(scenario_inputs, projection, result)

    assert report.success_band == "at_risk"
    assert report.median_depletion_age == pytest.approx(42 + 322 / 12)
    assert report.accumulation_estimate == pytest.approx(300000 + 1000 * 276)
    flags = " ".join(report.flags)
    assert "LOW_SUCCESS" in flags
    assert "MEDIAN_DEPLETES" in flags
    assert "BELOW_4PCT_RULE" in flags


def test_first_withdrawal_deflates_to_todays_dollars(growth_inputs):
    """Deflating by the same monthly compounding gives back spending / 12 exactly."""
    projection = project(growth_inputs)

    assert projection.monthly_projections[projection.retirement_index].withdrawal > 5000
    assert first_withdrawal_in_todays_dollars(growth_inputs, projection) == pytest.approx(5000, rel=1e-12)


def test_first_withdrawal_without_inflation_matches_spending(scenario_inputs):
    inputs = replace(scenario_inputs, current_savings=10_000_000)
    assert first_withdrawal_in_todays_dollars(inputs, project(inputs)) == pytest.approx(12500)


def test_first_withdrawal_is_zero_without_retirement(scenario_inputs):
    inputs = replace(scenario_inputs, retirement_age=95)
    assert first_withdrawal_in_todays_dollars(inputs, project(inputs)) == 0.0


def test_plan_report_labels_monthly_withdrawal_nominal(scenario_inputs, zero_noise):
    report = generate_plan_report(scenario_inputs, project(scenario_inputs), simulate(scenario_inputs, 1, rng=zero_noise))
    metrics = report.to_dataframe()["Metric"].tolist()
    assert "Monthly Withdrawal (nominal)" in metrics
