from __future__ import annotations

import pandas as pd

from .io import REQUIRED_COLUMNS

CHANNELS = {"voice", "chat", "email", "all"}


def _minutes_of_day(s: pd.Series) -> pd.Series:
    parts = s.astype(str).str.extract(r"^(\d{1,2}):(\d{2})")
    return pd.to_numeric(parts[0], errors="coerce") * 60 + pd.to_numeric(parts[1], errors="coerce")


def validate_forecasts(df: pd.DataFrame) -> pd.DataFrame:
    """
    Structural checks raise; row-level problems are returned as flag columns:
      flag_volume_negative, flag_aht_nonpositive,
      flag_unknown_channel, flag_interval_order
    """
    missing = set(REQUIRED_COLUMNS) - set(df.columns)
    if missing:
        raise ValueError(
            f"Forecast dataframe missing required columns: {sorted(missing)}. "
            f"Expected: {sorted(REQUIRED_COLUMNS)}"
        )

    if df.empty:
        raise ValueError("Forecast dataframe is empty")

    parsed = pd.to_datetime(df["forecast_date"], errors="coerce")
    if parsed.isna().any():
        bad = df.index[parsed.isna()].tolist()[:10]
        raise ValueError(f"forecast_date has invalid dates. Example bad rows: {bad}")

    volume = pd.to_numeric(df["predicted_volume"], errors="coerce")
    if volume.isna().any():
        raise ValueError("predicted_volume must be numeric")

    aht = pd.to_numeric(df["predicted_aht"], errors="coerce")
    if aht.isna().any():
        raise ValueError("predicted_aht must be numeric")

    out = df.copy()
    out["flag_volume_negative"] = volume < 0
    out["flag_aht_nonpositive"] = aht <= 0
    out["flag_unknown_channel"] = ~out["channel"].astype(str).str.strip().str.lower().isin(CHANNELS)

    start = _minutes_of_day(out["interval_start"])
    end = _minutes_of_day(out["interval_end"])
    # an interval ending at 00:00 closes the day
    end = end.where(end != 0, 24 * 60)
    out["flag_interval_order"] = (start.isna() | end.isna() | (end <= start)).astype(bool)

    return out
