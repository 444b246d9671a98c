# src/bpo_staffing/staffing.py
from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Mapping

import pandas as pd

from .erlangc import average_speed_of_answer, erlang_c_probability_of_wait, service_level, traffic_intensity
from .errors import DomainError, InvalidTarget

logger = logging.getLogger(__name__)

# Hard ceiling for the agent search; pathological targets (e.g. 100%) stop here.
MAX_AGENTS: int = 1000
# Scenario table covers ceil(a) .. ceil(a) + SCENARIO_SPAN.
SCENARIO_SPAN: int = 20


# -----------------------------
# Data models
# -----------------------------
@dataclass(frozen=True)
class StaffingInput:
    calls_per_interval: float
    average_handle_time: float  # minutes
    interval_minutes: float
    target_service_level: float  # percent, 0..100
    target_answer_time: float  # seconds


@dataclass(frozen=True)
class StaffingResult:
    required_agents: int
    traffic_intensity: float
    occupancy: float
    service_level: float
    average_speed_of_answer: float
    probability_of_waiting: float
    average_wait_time: float
    target_met: bool = True


@dataclass(frozen=True)
class StaffingScenario:
    agents: int
    service_level: float
    asa: float
    occupancy: float
    probability_of_waiting: float


FORM_FIELDS = (
    "calls_per_interval",
    "average_handle_time",
    "interval_minutes",
    "target_service_level",
    "target_answer_time",
)


# -----------------------------
# Internal helpers
# -----------------------------
def _validate_input(inputs: StaffingInput) -> float:
    """Validates inputs and returns the offered load in Erlangs."""
    a = traffic_intensity(inputs.calls_per_interval, inputs.average_handle_time, inputs.interval_minutes)

    if not math.isfinite(float(inputs.target_service_level)):
        raise InvalidTarget("target_service_level must be a finite number")
    if not (0.0 <= inputs.target_service_level <= 100.0):
        raise InvalidTarget("target_service_level must be between 0 and 100")
    if not math.isfinite(float(inputs.target_answer_time)) or inputs.target_answer_time < 0:
        raise InvalidTarget("target_answer_time must be >= 0")

    return a


def _scenario_at(inputs: StaffingInput, a: float, agents: int) -> StaffingScenario:
    sl = service_level(agents, a, inputs.target_answer_time, inputs.average_handle_time)
    return StaffingScenario(
        agents=agents,
        service_level=sl * 100.0,
        asa=average_speed_of_answer(agents, a, inputs.average_handle_time),
        occupancy=a / agents * 100.0,
        probability_of_waiting=erlang_c_probability_of_wait(agents, a) * 100.0,
    )


# -----------------------------
# Public API
# -----------------------------
def solve_required_agents(inputs: StaffingInput, max_agents: int = MAX_AGENTS) -> StaffingResult:
    """
    Find the agent count that meets the target service level.

    Linear search starting at ceil(a): the count is incremented *before* each
    service-level check, so below the ceiling the answer is at least ceil(a) + 1.
    The search never goes past max_agents; if the target is still missed the
    result at the ceiling is returned with target_met=False. A load that
    already needs ceil(a) >= max_agents is answered at the ceiling without
    searching, and counts as missed whenever max_agents <= a.
    """
    if max_agents < 1:
        raise ValueError("max_agents must be >= 1")

    a = _validate_input(inputs)
    target = float(inputs.target_service_level) / 100.0

    n = int(math.ceil(a))
    if n >= max_agents:
        n = max_agents
        sl = service_level(n, a, inputs.target_answer_time, inputs.average_handle_time)
    else:
        while True:
            n += 1
            sl = service_level(n, a, inputs.target_answer_time, inputs.average_handle_time)
            if sl >= target or n >= max_agents:
                break

    # n <= a is an unstable queue, never a met target
    target_met = n > a and sl >= target
    if not target_met:
        logger.warning(
            "Service level target %.2f%% not reachable within %d agents (achieved %.2f%%)",
            inputs.target_service_level,
            max_agents,
            sl * 100.0,
        )

    pw = erlang_c_probability_of_wait(n, a)
    result = StaffingResult(
        required_agents=n,
        traffic_intensity=a,
        occupancy=a / n * 100.0,
        service_level=sl * 100.0,
        average_speed_of_answer=average_speed_of_answer(n, a, inputs.average_handle_time),
        probability_of_waiting=pw * 100.0,
        average_wait_time=pw * float(inputs.average_handle_time) / (n - a) if n > a else math.inf,
        target_met=target_met,
    )
    logger.debug("Solved %.3f Erlangs -> %d agents (SL %.2f%%)", a, n, result.service_level)
    return result


def generate_staffing_scenarios(inputs: StaffingInput, span: int = SCENARIO_SPAN) -> List[StaffingScenario]:
    """One row per agent count from max(1, ceil(a)) to that + span, inclusive."""
    if span < 0:
        raise ValueError("span must be >= 0")

    a = _validate_input(inputs)
    min_agents = max(1, int(math.ceil(a)))
    return [_scenario_at(inputs, a, n) for n in range(min_agents, min_agents + span + 1)]


def scenario_table(
    inputs: StaffingInput,
    span: int = SCENARIO_SPAN,
    max_agents: int = MAX_AGENTS,
) -> pd.DataFrame:
    """
    Scenario sweep as a DataFrame, with the solver's answer marked:
      meets_target   -> service_level >= target_service_level
      is_recommended -> agents == required_agents
    """
    result = solve_required_agents(inputs, max_agents=max_agents)
    df = pd.DataFrame([scenario_to_dict(s) for s in generate_staffing_scenarios(inputs, span=span)])
    df["meets_target"] = df["service_level"] >= float(inputs.target_service_level)
    df["is_recommended"] = df["agents"] == result.required_agents
    return df


def staffing_input_from_form(fields: Mapping[str, Any]) -> StaffingInput:
    """
    Builds a validated StaffingInput from raw form values (strings or numbers).
    Blank or non-numeric entries raise DomainError instead of turning into 0.
    """
    values: Dict[str, float] = {}
    for name in FORM_FIELDS:
        if name not in fields or fields[name] is None:
            raise DomainError(f"Missing value for {name}")

        raw = fields[name]
        if isinstance(raw, bool):
            raise DomainError(f"{name} must be numeric, got {raw!r}")
        if isinstance(raw, str):
            raw = raw.strip()
            if not raw:
                raise DomainError(f"Missing value for {name}")
        try:
            value = float(raw)
        except (TypeError, ValueError):
            raise DomainError(f"{name} must be numeric, got {fields[name]!r}") from None
        if not math.isfinite(value):
            raise DomainError(f"{name} must be a finite number")
        values[name] = value

    inputs = StaffingInput(**values)
    _validate_input(inputs)
    return inputs


def result_to_dict(result: StaffingResult) -> Dict[str, Any]:
    return asdict(result)


def scenario_to_dict(scenario: StaffingScenario) -> Dict[str, Any]:
    return asdict(scenario)


__all__ = [
    "MAX_AGENTS",
    "SCENARIO_SPAN",
    "StaffingInput",
    "StaffingResult",
    "StaffingScenario",
    "solve_required_agents",
    "generate_staffing_scenarios",
    "scenario_table",
    "staffing_input_from_form",
    "result_to_dict",
    "scenario_to_dict",
]
