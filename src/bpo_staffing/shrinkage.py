# src/bpo_staffing/shrinkage.py
from __future__ import annotations

import math
from dataclasses import dataclass, fields

from .errors import InvalidShrinkage
from .staffing import MAX_AGENTS, StaffingInput, StaffingResult, solve_required_agents

# Reference shift the shrinkage minutes are measured against (8 hours).
SHIFT_MINUTES: float = 480.0


@dataclass(frozen=True)
class ShrinkageFactors:
    """Minutes per agent per day spent off the phones."""
    breaks: float = 0.0
    lunch: float = 0.0
    training: float = 0.0
    meetings: float = 0.0
    other: float = 0.0

    def total_minutes(self) -> float:
        return float(sum(getattr(self, f.name) for f in fields(self)))


@dataclass(frozen=True)
class StaffingPlan:
    result: StaffingResult
    shrinkage_percent: float
    scheduled_agents: int

    @property
    def shrinkage_impact(self) -> int:
        """Extra heads needed on the schedule to cover shrinkage."""
        return self.scheduled_agents - self.result.required_agents


def shrinkage_percent(factors: ShrinkageFactors, shift_minutes: float = SHIFT_MINUTES) -> float:
    """
    Shrinkage % = total off-phone minutes / shift minutes * 100.
    Not clamped: more than a full shift of factors yields > 100.
    """
    if shift_minutes <= 0:
        raise ValueError("shift_minutes must be > 0")
    for f in fields(factors):
        value = float(getattr(factors, f.name))
        if not math.isfinite(value) or value < 0:
            raise InvalidShrinkage(f"{f.name} must be a non-negative number of minutes")
    return factors.total_minutes() / float(shift_minutes) * 100.0


def adjust_for_shrinkage(required_agents: int, shrinkage_percent: float) -> int:
    """scheduled = ceil(required / (1 - shrinkage/100)); shrinkage must be in [0, 100)."""
    if not math.isfinite(float(shrinkage_percent)):
        raise InvalidShrinkage("shrinkage_percent must be a finite number")
    if shrinkage_percent >= 100.0:
        raise InvalidShrinkage(f"shrinkage_percent must be < 100 (got {shrinkage_percent:.2f})")
    if shrinkage_percent < 0.0:
        raise InvalidShrinkage(f"shrinkage_percent must be >= 0 (got {shrinkage_percent:.2f})")
    return int(math.ceil(required_agents / (1.0 - shrinkage_percent / 100.0)))


def plan_staffing(
    inputs: StaffingInput,
    factors: ShrinkageFactors,
    *,
    shift_minutes: float = SHIFT_MINUTES,
    max_agents: int = MAX_AGENTS,
) -> StaffingPlan:
    """Solves on-phone agents and converts them to scheduled headcount."""
    result = solve_required_agents(inputs, max_agents=max_agents)
    pct = shrinkage_percent(factors, shift_minutes=shift_minutes)
    return StaffingPlan(
        result=result,
        shrinkage_percent=pct,
        scheduled_agents=adjust_for_shrinkage(result.required_agents, pct),
    )


__all__ = [
    "SHIFT_MINUTES",
    "ShrinkageFactors",
    "StaffingPlan",
    "shrinkage_percent",
    "adjust_for_shrinkage",
    "plan_staffing",
]
