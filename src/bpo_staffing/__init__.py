# src/bpo_staffing/__init__.py
from __future__ import annotations

# -----------------------------
# Erlang-C formulas
# -----------------------------
from .erlangc import (
    traffic_intensity,
    erlang_c_probability_of_wait,
    service_level,
    average_speed_of_answer,
)

# -----------------------------
# Staffing solver + scenarios
# -----------------------------
from .staffing import (
    MAX_AGENTS,
    SCENARIO_SPAN,
    StaffingInput,
    StaffingResult,
    StaffingScenario,
    solve_required_agents,
    generate_staffing_scenarios,
    scenario_table,
    staffing_input_from_form,
    result_to_dict,
    scenario_to_dict,
)

from .shrinkage import (
    SHIFT_MINUTES,
    ShrinkageFactors,
    StaffingPlan,
    shrinkage_percent,
    adjust_for_shrinkage,
    plan_staffing,
)

from .errors import DomainError, InvalidInterval, InvalidShrinkage, InvalidTarget

__all__ = [
    # Erlang-C
    "traffic_intensity",
    "erlang_c_probability_of_wait",
    "service_level",
    "average_speed_of_answer",
    # Staffing
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
    # Shrinkage
    "SHIFT_MINUTES",
    "ShrinkageFactors",
    "StaffingPlan",
    "shrinkage_percent",
    "adjust_for_shrinkage",
    "plan_staffing",
    # Errors
    "DomainError",
    "InvalidInterval",
    "InvalidShrinkage",
    "InvalidTarget",
]
