from __future__ import annotations

import pandas as pd


REQUIRED_COLUMNS = [
    "forecast_date",
    "interval_start",
    "interval_end",
    "channel",
    "predicted_volume",
    "predicted_aht",
]


def read_forecast_csv(file) -> pd.DataFrame:
    """
    Reads a demand-forecast CSV.
    Expected columns:
      forecast_date (date parsable)
      interval_start, interval_end ("HH:MM")
      channel (voice / chat / email / all)
      predicted_volume (float)
      predicted_aht (float, minutes)
      confidence_level (optional, float)

    Returns a normalized DataFrame sorted by date and interval start.
    """
    df = pd.read_csv(file, dtype={"interval_start": str, "interval_end": str})
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}. Required: {REQUIRED_COLUMNS}")

    df = df.copy()
    df["forecast_date"] = pd.to_datetime(df["forecast_date"])
    df["interval_start"] = df["interval_start"].astype(str).str.strip()
    df["interval_end"] = df["interval_end"].astype(str).str.strip()
    df["channel"] = df["channel"].astype(str).str.strip().str.lower()
    df["predicted_volume"] = df["predicted_volume"].astype(float)
    df["predicted_aht"] = df["predicted_aht"].astype(float)
    if "confidence_level" in df.columns:
        df["confidence_level"] = pd.to_numeric(df["confidence_level"], errors="coerce")

    return df.sort_values(["forecast_date", "interval_start"]).reset_index(drop=True)
