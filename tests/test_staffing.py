import logging
import math

import pytest

from bpo_staffing.errors import DomainError, InvalidInterval, InvalidTarget
from bpo_staffing.erlangc import service_level
from bpo_staffing.staffing import (
    StaffingInput,
    generate_staffing_scenarios,
    result_to_dict,
    scenario_table,
    solve_required_agents,
    staffing_input_from_form,
)


def _inputs(**overrides):
    values = dict(
        calls_per_interval=100,
        average_handle_time=5,
        interval_minutes=30,
        target_service_level=80,
        target_answer_time=20,
    )
    values.update(overrides)
    return StaffingInput(**values)


def test_default_calculator_inputs():
    res = solve_required_agents(_inputs())
    assert res.traffic_intensity == pytest.approx(16.6667, rel=1e-4)
    assert res.required_agents == 18
    assert res.occupancy == pytest.approx(16.6667 / 18 * 100, rel=1e-4)
    assert res.service_level >= 80.0
    assert res.target_met


def test_result_metrics_are_consistent():
    res = solve_required_agents(_inputs())
    gap = res.required_agents - res.traffic_intensity
    assert 0.0 < res.probability_of_waiting < 100.0
    assert res.average_speed_of_answer == pytest.approx(res.probability_of_waiting / 100 * 5 / gap)
    assert res.average_wait_time == pytest.approx(res.average_speed_of_answer)


def test_search_always_adds_an_agent_above_ceiling():
    # a = 9.5: 10 agents already meet 80%, but the search checks 11 first
    inputs = _inputs(calls_per_interval=95, interval_minutes=50)
    assert service_level(10, 9.5, 20, 5) >= 0.80
    res = solve_required_agents(inputs)
    assert res.required_agents == 11
    assert res.required_agents > math.ceil(res.traffic_intensity)


def test_solve_is_idempotent():
    inputs = _inputs(calls_per_interval=240, average_handle_time=4.5, target_answer_time=15)
    assert solve_required_agents(inputs) == solve_required_agents(inputs)


def test_zero_traffic_needs_one_agent():
    res = solve_required_agents(_inputs(calls_per_interval=0, target_service_level=100))
    assert res.traffic_intensity == 0.0
    assert res.required_agents == 1
    assert res.service_level == 100.0
    assert res.probability_of_waiting == 0.0
    assert res.occupancy == 0.0
    assert res.average_wait_time == 0.0


def test_zero_target_still_increments_once():
    res = solve_required_agents(_inputs(target_service_level=0))
    assert res.required_agents == 18


def test_ceiling_returns_best_effort(caplog):
    inputs = _inputs(target_service_level=100, target_answer_time=0)
    with caplog.at_level(logging.WARNING, logger="bpo_staffing.staffing"):
        res = solve_required_agents(inputs, max_agents=25)
    assert res.required_agents == 25
    assert not res.target_met
    assert res.service_level < 100.0
    assert "not reachable" in caplog.text


def test_ceiling_below_load_is_never_exceeded(caplog):
    # 100 calls * 5 min / 30 min = 16.67 Erlangs, more than 10 agents can carry
    with caplog.at_level(logging.WARNING, logger="bpo_staffing.staffing"):
        res = solve_required_agents(_inputs(), max_agents=10)
    assert res.required_agents == 10
    assert not res.target_met
    assert res.service_level == 0.0
    assert res.probability_of_waiting == pytest.approx(100.0)
    assert math.isinf(res.average_speed_of_answer)
    assert math.isinf(res.average_wait_time)
    assert "not reachable" in caplog.text


def test_ceiling_just_above_load_is_not_searched_past():
    # ceil(16.67) == 17 == max_agents: answered at the ceiling instead of 18
    res = solve_required_agents(_inputs(), max_agents=17)
    assert res.required_agents == 17
    assert res.target_met
    assert res.service_level > 80.0
    assert math.isfinite(res.average_wait_time)


@pytest.mark.parametrize(
    "overrides, exc",
    [
        ({"average_handle_time": 0}, InvalidInterval),
        ({"interval_minutes": 0}, InvalidInterval),
        ({"calls_per_interval": -5}, InvalidInterval),
        ({"target_service_level": 120}, InvalidTarget),
        ({"target_service_level": -1}, InvalidTarget),
        ({"target_answer_time": -1}, InvalidTarget),
    ],
)
def test_invalid_inputs_raise(overrides, exc):
    with pytest.raises(exc):
        solve_required_agents(_inputs(**overrides))


def test_domain_errors_are_value_errors():
    with pytest.raises(ValueError):
        solve_required_agents(_inputs(average_handle_time=0))


def test_scenarios_cover_21_contiguous_agent_counts():
    rows = generate_staffing_scenarios(_inputs())
    assert [r.agents for r in rows] == list(range(17, 38))


def test_scenarios_start_at_one_without_traffic():
    rows = generate_staffing_scenarios(_inputs(calls_per_interval=0))
    assert len(rows) == 21
    assert rows[0].agents == 1
    assert rows[0].service_level == 100.0


def test_scenarios_with_integer_load_start_at_the_load():
    # a = 10 exactly: first row is the unstable boundary
    rows = generate_staffing_scenarios(_inputs(calls_per_interval=60))
    first = rows[0]
    assert first.agents == 10
    assert first.service_level == 0.0
    assert first.probability_of_waiting == 100.0
    assert first.asa == float("inf")
    assert first.occupancy == pytest.approx(100.0)


def test_scenario_table_marks_recommendation():
    df = scenario_table(_inputs())
    assert len(df) == 21
    assert df["is_recommended"].sum() == 1
    assert int(df.loc[df["is_recommended"], "agents"].iloc[0]) == 18
    assert bool(df.loc[df["agents"] == 18, "meets_target"].iloc[0])


def test_form_parser_accepts_numeric_strings():
    inputs = staffing_input_from_form(
        {
            "calls_per_interval": "100",
            "average_handle_time": " 5 ",
            "interval_minutes": 30,
            "target_service_level": "80",
            "target_answer_time": 20.0,
        }
    )
    assert inputs == _inputs()


@pytest.mark.parametrize("bad", ["", "abc", None, True, "inf"])
def test_form_parser_rejects_non_numeric(bad):
    fields = {
        "calls_per_interval": bad,
        "average_handle_time": 5,
        "interval_minutes": 30,
        "target_service_level": 80,
        "target_answer_time": 20,
    }
    with pytest.raises(DomainError):
        staffing_input_from_form(fields)


def test_form_parser_rejects_missing_and_out_of_domain():
    with pytest.raises(DomainError):
        staffing_input_from_form({"calls_per_interval": 100})
    with pytest.raises(InvalidInterval):
        staffing_input_from_form(
            {
                "calls_per_interval": 100,
                "average_handle_time": "0",
                "interval_minutes": 30,
                "target_service_level": 80,
                "target_answer_time": 20,
            }
        )


def test_result_to_dict():
    d = result_to_dict(solve_required_agents(_inputs()))
    assert d["required_agents"] == 18
    assert set(d) >= {"traffic_intensity", "occupancy", "service_level", "probability_of_waiting"}
