"""
Demand Forecaster Module
========================

Forecasts daily call demand from historical daily records.
Uses the straight historical mean of calls and handle time per weekday:
no recency weighting and no outlier rejection, so every forecast can be
traced back to the days that produced it.
"""

from dataclasses import dataclass
from datetime import date
from typing import Mapping

import pandas as pd

from .history_store import HistoricalRecord, history_frame


@dataclass(frozen=True)
class TrafficEstimate:
    """Expected demand for one day.

    Attributes:
        calls: Predicted daily calls (mean of matching days).
        aht: Predicted average handle time in seconds.

    calls == aht == 0 means there was no usable history for the weekday,
    not a forecast of zero demand.
    """
    calls: float
    aht: float


NO_ESTIMATE = TrafficEstimate(calls=0, aht=0)


class WeekdayForecastModel:
    """Forecasts daily demand from the mean of matching historical weekdays.

    Data Flow:
        records (date -> HistoricalRecord) -> predict(weekday) -> TrafficEstimate

    Averages are recomputed on every call from the records mapping, so a
    model built on a snapshot always reflects exactly that snapshot.
    """

    def __init__(self, records: Mapping[str, HistoricalRecord]) -> None:
        """Initialize the model.

        Args:
            records: Read-only mapping of ISO date -> HistoricalRecord,
                usually ``HistoryStore.snapshot()``.
        """
        self.records = records

    def _usable_history(self) -> pd.DataFrame:
        df = history_frame(self.records)
        if df.empty:
            return df
        # Days without volume or a resolvable handle time carry no signal
        return df[(df["calls"] > 0) & (df["resolved_aht"] > 0)]

    def predict(self, weekday: int) -> TrafficEstimate:
        """Predict demand for a weekday.

        Args:
            weekday: Day of week, 0=Monday ... 6=Sunday.

        Returns:
            TrafficEstimate with mean calls and mean handle time, or
            NO_ESTIMATE when no historical day matches.
        """
        usable = self._usable_history()
        if usable.empty:
            return NO_ESTIMATE

        matches = usable[usable["day_of_week"] == weekday]
        if matches.empty:
            return NO_ESTIMATE

        return TrafficEstimate(
            calls=float(matches["calls"].mean()),
            aht=float(matches["resolved_aht"].mean()),
        )

    def predict_date(self, day: date | pd.Timestamp) -> TrafficEstimate:
        """Predict demand for a calendar date by its weekday."""
        return self.predict(day.weekday())

    def weekday_profile(self) -> pd.DataFrame:
        """Mean calls/aht and sample count for every weekday with history."""
        usable = self._usable_history()
        if usable.empty:
            return pd.DataFrame(columns=["day_of_week", "calls", "aht", "samples"])
        return (
            usable.groupby("day_of_week")
            .agg(
                calls=("calls", "mean"),
                aht=("resolved_aht", "mean"),
                samples=("calls", "size"),
            )
            .reset_index()
        )
