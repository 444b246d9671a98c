from __future__ import annotations

import math

from .errors import InvalidInterval


def traffic_intensity(calls_per_interval: float, average_handle_time: float, interval_minutes: float) -> float:
    """
    Offered load a (Erlangs) = calls * AHT / interval length.
    AHT and interval are both in minutes:
      a = calls_per_interval * average_handle_time / interval_minutes
    """
    for name, value in (
        ("calls_per_interval", calls_per_interval),
        ("average_handle_time", average_handle_time),
        ("interval_minutes", interval_minutes),
    ):
        if not math.isfinite(float(value)):
            raise InvalidInterval(f"{name} must be a finite number")
    if interval_minutes <= 0:
        raise InvalidInterval("interval_minutes must be > 0")
    if average_handle_time <= 0:
        raise InvalidInterval("average_handle_time must be > 0")
    if calls_per_interval < 0:
        raise InvalidInterval("calls_per_interval must be >= 0")
    return float(calls_per_interval) * float(average_handle_time) / float(interval_minutes)


def _erlang_b(agents: int, a: float) -> float:
    # B(0) = 1, B(k) = a*B(k-1) / (k + a*B(k-1))
    b = 1.0
    for k in range(1, agents + 1):
        b = (a * b) / (k + a * b)
    return b


def erlang_c_probability_of_wait(agents: int, traffic_intensity: float) -> float:
    """
    Erlang C probability of wait (Pw) as used by the calculator screen.

    Pw = (a^n/n!) / [ sum_{k=0..n-1} a^k/k! + (a^n/n!) * (n/(n-a)) ]

    Note the numerator carries no n/(n-a) factor, so this equals the
    textbook Erlang C value times (1 - a/n). Staffing baselines depend on it.

    Evaluated through the Erlang B recurrence,
      Pw = B * (1 - rho) / (1 - rho + rho*B),  rho = a/n
    so large agent counts do not overflow. Returns 1.0 when n <= a.
    """
    a = float(traffic_intensity)
    n = int(agents)
    if n <= a:
        return 1.0
    if a <= 0:
        return 0.0

    rho = a / n
    b = _erlang_b(n, a)
    return float(b * (1.0 - rho) / (1.0 - rho + rho * b))


def service_level(
    agents: int,
    traffic_intensity: float,
    target_answer_time: float,
    average_handle_time: float,
) -> float:
    """
    Fraction of calls answered within the target answer time:

    SL = 1 - Pw * exp(-(n-a) * (T / AHT))

    T is taken as entered (seconds) and AHT as entered (minutes); the ratio
    is used without unit conversion.
    """
    a = float(traffic_intensity)
    n = int(agents)
    if n <= a:
        return 0.0

    pw = erlang_c_probability_of_wait(n, a)
    expo = math.exp(-(n - a) * (float(target_answer_time) / float(average_handle_time)))
    return 1.0 - pw * expo


def average_speed_of_answer(agents: int, traffic_intensity: float, average_handle_time: float) -> float:
    """
    ASA = Pw * (AHT / (n-a)), in the unit of AHT.
    """
    a = float(traffic_intensity)
    n = int(agents)
    if n <= a:
        return float("inf")
    pw = erlang_c_probability_of_wait(n, a)
    return pw * float(average_handle_time) / (n - a)


__all__ = [
    "traffic_intensity",
    "erlang_c_probability_of_wait",
    "service_level",
    "average_speed_of_answer",
]
