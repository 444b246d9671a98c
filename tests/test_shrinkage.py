import pytest

from bpo_staffing.errors import InvalidShrinkage
from bpo_staffing.shrinkage import ShrinkageFactors, adjust_for_shrinkage, plan_staffing, shrinkage_percent
from bpo_staffing.staffing import StaffingInput

DEFAULT_FACTORS = ShrinkageFactors(breaks=30, lunch=30, training=60, meetings=30, other=0)


def test_shrinkage_percent_of_an_eight_hour_shift():
    assert shrinkage_percent(DEFAULT_FACTORS) == pytest.approx(31.25)


def test_shrinkage_percent_custom_shift():
    assert shrinkage_percent(DEFAULT_FACTORS, shift_minutes=600) == pytest.approx(25.0)


def test_shrinkage_percent_is_not_clamped():
    assert shrinkage_percent(ShrinkageFactors(other=600)) == pytest.approx(125.0)


def test_shrinkage_percent_rejects_negative_minutes():
    with pytest.raises(InvalidShrinkage):
        shrinkage_percent(ShrinkageFactors(breaks=-10))


def test_adjust_for_shrinkage_example():
    assert adjust_for_shrinkage(18, 31.25) == 27


def test_adjust_without_shrinkage_keeps_headcount():
    assert adjust_for_shrinkage(18, 0.0) == 18


@pytest.mark.parametrize("pct", [0.5, 10.0, 31.25, 50.0, 99.9])
@pytest.mark.parametrize("agents", [1, 18, 250])
def test_shrinkage_never_reduces_headcount(agents, pct):
    assert adjust_for_shrinkage(agents, pct) >= agents


@pytest.mark.parametrize("pct", [100.0, 125.0, -5.0, float("nan")])
def test_adjust_rejects_out_of_range_shrinkage(pct):
    with pytest.raises(InvalidShrinkage):
        adjust_for_shrinkage(18, pct)


def test_plan_staffing_with_calculator_defaults():
    inputs = StaffingInput(
        calls_per_interval=100,
        average_handle_time=5,
        interval_minutes=30,
        target_service_level=80,
        target_answer_time=20,
    )
    plan = plan_staffing(inputs, DEFAULT_FACTORS)
    assert plan.result.required_agents == 18
    assert plan.shrinkage_percent == pytest.approx(31.25)
    assert plan.scheduled_agents == 27
    assert plan.shrinkage_impact == 9
