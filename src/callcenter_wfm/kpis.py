"""History overview KPIs: what the stored days look like at a glance."""

from dataclasses import dataclass
from typing import Mapping

import numpy as np
import pandas as pd

from .history_store import HistoricalRecord, history_frame


@dataclass(frozen=True)
class HistoryOverview:
    """Aggregates over every stored day with calls.

    Attributes:
        days: Days with calls > 0.
        avg_calls: Mean daily calls.
        avg_aht: Call-weighted handle time in seconds.
        avg_sl: Call-weighted service level in percent.
        avg_agents: Mean daily agents.
        avg_tve: Call-weighted time-value-efficiency proxy.
        weekday_calls: Mean calls Monday-Friday.
        saturday_calls: Mean calls on Saturdays.
        sunday_calls: Mean calls on Sundays.
    """
    days: int = 0
    avg_calls: float = 0.0
    avg_aht: float = 0.0
    avg_sl: float = 0.0
    avg_agents: float = 0.0
    avg_tve: float = 0.0
    weekday_calls: float = 0.0
    saturday_calls: float = 0.0
    sunday_calls: float = 0.0


def _with_calls(records: Mapping[str, HistoricalRecord]) -> pd.DataFrame:
    df = history_frame(records)
    if df.empty:
        return df
    return df[df["calls"] > 0]


def _mean_or_zero(series: pd.Series) -> float:
    return float(series.mean()) if len(series) else 0.0


def summarize_history(records: Mapping[str, HistoricalRecord]) -> HistoryOverview:
    """KPI overview of the stored history.

    Weighted averages use daily calls as the weight. The TVE proxy for a
    day is aht * (sl / 100) / agents; days without agents contribute
    nothing to its numerator but still weigh in the denominator.
    """
    df = _with_calls(records)
    if df.empty:
        return HistoryOverview()

    calls = df["calls"].astype(float)
    total_calls = calls.sum()
    aht = df["resolved_aht"]
    sl = df["sl"]
    agents = df["agents"]

    tve = np.where(agents > 0, aht * (sl / 100) / agents.where(agents > 0, 1), 0.0)
    tve = np.where(tve > 0, tve, 0.0)

    dow = df["day_of_week"]
    return HistoryOverview(
        days=len(df),
        avg_calls=float(calls.mean()),
        avg_aht=float((calls * aht).sum() / total_calls),
        avg_sl=float((calls * sl).sum() / total_calls),
        avg_agents=float(agents.mean()),
        avg_tve=float((calls * tve).sum() / total_calls),
        weekday_calls=_mean_or_zero(calls[dow < 5]),
        saturday_calls=_mean_or_zero(calls[dow == 5]),
        sunday_calls=_mean_or_zero(calls[dow == 6]),
    )


def recent_series(records: Mapping[str, HistoricalRecord], days: int = 30) -> pd.DataFrame:
    """The last ``days`` stored days with calls, oldest first.

    Columns: date, calls, aht (rounded seconds), sl, agents.
    """
    columns = ["date", "calls", "aht", "sl", "agents"]
    df = _with_calls(records)
    if df.empty:
        return pd.DataFrame(columns=columns)

    recent = df.tail(days).copy()
    recent["aht"] = recent["resolved_aht"].round().astype(int)
    return recent[columns].reset_index(drop=True)
