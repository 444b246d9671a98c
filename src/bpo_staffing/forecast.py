# src/bpo_staffing/forecast.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from .errors import DomainError, InvalidShrinkage
from .shrinkage import SHIFT_MINUTES, ShrinkageFactors, adjust_for_shrinkage, shrinkage_percent
from .staffing import MAX_AGENTS, StaffingInput, solve_required_agents

logger = logging.getLogger(__name__)

FORECAST_INTERVAL_MINUTES: float = 30.0
QUICK_STAFFING_BUFFER: float = 1.2

_RESULT_COLUMNS = [
    "traffic_intensity",
    "required_agents",
    "service_level",
    "average_speed_of_answer",
    "occupancy",
    "probability_of_waiting",
    "target_met",
]


# -----------------------------
# Summary metrics
# -----------------------------
def total_predicted_volume(df: pd.DataFrame) -> float:
    return float(df["predicted_volume"].sum()) if len(df) else 0.0


def average_aht(df: pd.DataFrame) -> float:
    if len(df) == 0:
        return 0.0
    return float(df["predicted_aht"].mean())


def peak_interval(df: pd.DataFrame) -> Optional[pd.Series]:
    """Row with the highest predicted volume (first one on ties)."""
    if len(df) == 0:
        return None
    return df.loc[df["predicted_volume"].idxmax()]


def quick_required_agents(
    volume: float,
    aht: float,
    interval_minutes: float = FORECAST_INTERVAL_MINUTES,
    buffer: float = QUICK_STAFFING_BUFFER,
) -> int:
    """
    Rule-of-thumb headcount: offered load plus a flat buffer.
      ceil(volume * aht / interval_minutes * buffer)
    """
    if interval_minutes <= 0:
        raise ValueError("interval_minutes must be > 0")
    load = float(volume) * float(aht) / float(interval_minutes)
    return int(np.ceil(max(load, 0.0) * float(buffer)))


def summarize_forecast(
    df: pd.DataFrame,
    interval_minutes: float = FORECAST_INTERVAL_MINUTES,
    buffer: float = QUICK_STAFFING_BUFFER,
) -> Dict[str, Any]:
    """Headline numbers for a day's forecast (totals, averages, peak)."""
    peak = peak_interval(df)
    n = len(df)
    avg_volume = total_predicted_volume(df) / n if n else 0.0
    return {
        "intervals": n,
        "total_predicted_volume": total_predicted_volume(df),
        "average_aht": average_aht(df),
        "quick_required_agents": quick_required_agents(avg_volume, average_aht(df), interval_minutes, buffer) if n else 0,
        "peak_interval_start": None if peak is None else peak["interval_start"],
        "peak_volume": None if peak is None else float(peak["predicted_volume"]),
    }


# -----------------------------
# Per-interval staffing
# -----------------------------
def staff_forecast(
    df: pd.DataFrame,
    *,
    target_service_level: float,
    target_answer_time: float,
    interval_minutes: float = FORECAST_INTERVAL_MINUTES,
    shrinkage: Optional[ShrinkageFactors] = None,
    shift_minutes: float = SHIFT_MINUTES,
    max_agents: int = MAX_AGENTS,
    buffer: float = QUICK_STAFFING_BUFFER,
) -> pd.DataFrame:
    """
    Runs the Erlang-C solver for every forecast row.

    Rows with inputs outside the model's domain (e.g. AHT of 0) keep None
    in the result columns; the count is logged rather than failing the table.
    quick_required_agents is filled for every row, next to the Erlang-C answer.
    The result columns are always present, even for an empty forecast.
    """
    shrink_pct = shrinkage_percent(shrinkage, shift_minutes=shift_minutes) if shrinkage is not None else None
    if shrink_pct is not None and shrink_pct >= 100.0:
        raise InvalidShrinkage(f"shrinkage of {shrink_pct:.1f}% leaves no time on the phones")

    result_cols = _RESULT_COLUMNS + ["quick_required_agents"]
    if shrink_pct is not None:
        result_cols.append("scheduled_agents")

    rows: List[Dict[str, Any]] = []
    errors = 0

    for idx, r in df.iterrows():
        volume, aht = float(r["predicted_volume"]), float(r["predicted_aht"])
        quick = quick_required_agents(volume, aht, interval_minutes, buffer) if np.isfinite(volume + aht) else None
        inputs = StaffingInput(
            calls_per_interval=volume,
            average_handle_time=aht,
            interval_minutes=float(interval_minutes),
            target_service_level=float(target_service_level),
            target_answer_time=float(target_answer_time),
        )
        try:
            res = solve_required_agents(inputs, max_agents=max_agents)
        except DomainError as e:
            errors += 1
            logger.warning("Skipping forecast row %s: %s", idx, e)
            row: Dict[str, Any] = {c: None for c in _RESULT_COLUMNS}
            row["quick_required_agents"] = quick
            if shrink_pct is not None:
                row["scheduled_agents"] = None
            rows.append(row)
            continue

        row = {
            "traffic_intensity": res.traffic_intensity,
            "required_agents": res.required_agents,
            "service_level": res.service_level,
            "average_speed_of_answer": res.average_speed_of_answer,
            "occupancy": res.occupancy,
            "probability_of_waiting": res.probability_of_waiting,
            "target_met": res.target_met,
            "quick_required_agents": quick,
        }
        if shrink_pct is not None:
            row["scheduled_agents"] = adjust_for_shrinkage(res.required_agents, shrink_pct)
        rows.append(row)

    if errors:
        logger.warning("%d of %d forecast rows could not be staffed", errors, len(df))

    return pd.concat([df.reset_index(drop=True), pd.DataFrame(rows, columns=result_cols)], axis=1)


__all__ = [
    "FORECAST_INTERVAL_MINUTES",
    "QUICK_STAFFING_BUFFER",
    "total_predicted_volume",
    "average_aht",
    "peak_interval",
    "quick_required_agents",
    "summarize_forecast",
    "staff_forecast",
]
