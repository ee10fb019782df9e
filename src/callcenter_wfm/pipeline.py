"""
Pipeline Module (The Forecast Generator)
========================================

Orchestrates the daily planning workflow: Forecast -> Solve -> Compare.
Connects the WeekdayForecastModel and StaffingSolver across a date range
and lines each planned day up against what was actually staffed.
"""

import logging
from dataclasses import asdict, dataclass
from datetime import date
from typing import Mapping

import pandas as pd

from .config import PlannerConfig
from .demand_forecaster import TrafficEstimate, WeekdayForecastModel
from .history_store import HistoricalRecord, date_key
from .staffing_solver import StaffingResult, StaffingSolver

logger = logging.getLogger(__name__)

DEFAULT_START = date(2025, 1, 1)
DEFAULT_END = date(2026, 1, 31)


@dataclass(frozen=True)
class ForecastRow:
    """One planned day.

    Attributes:
        date: The planned calendar date.
        weekday: Day of week, 0=Monday.
        predicted_calls: Forecast daily calls.
        predicted_aht: Forecast handle time in seconds.
        required_agents: Shrinkage-inflated headcount from the solver.
        actual_calls: Recorded calls for the date, 0 if none.
        actual_agents: Recorded agents for the date, 0 if none.
        actual_sl: Recorded service level (percent), 0 if none.
        diff: actual_agents - required_agents, None without actual staffing.
        realization_rate: actual_agents / required_agents, None when
            either side is zero.
        near_perfect: Realization rate within the near-perfect band.
    """
    date: date
    weekday: int
    predicted_calls: float
    predicted_aht: float
    required_agents: int
    actual_calls: int = 0
    actual_agents: int = 0
    actual_sl: float = 0.0
    diff: int | None = None
    realization_rate: float | None = None
    near_perfect: bool = False


@dataclass(frozen=True)
class ForecastSummary:
    """Aggregates over the generated rows.

    Attributes:
        avg_monthly_calls: Mean predicted daily calls scaled to 30 days.
        avg_required_agents: Mean daily required headcount.
        near_perfect_days: Rows whose realization rate was near-perfect.
        days: Number of planned days.
    """
    avg_monthly_calls: float
    avg_required_agents: float
    near_perfect_days: int
    days: int


@dataclass
class ForecastReport:
    """Complete result from a forecast run.

    Attributes:
        rows: Per-day forecast rows in date order.
        summary: Aggregates over the rows.
        target_service_level: Target (percent) the run was solved against.
    """
    rows: list[ForecastRow]
    summary: ForecastSummary
    target_service_level: float

    def to_frame(self) -> pd.DataFrame:
        """Per-day rows as a DataFrame (one column per ForecastRow field)."""
        if not self.rows:
            return pd.DataFrame(columns=list(ForecastRow.__dataclass_fields__))
        return pd.DataFrame([asdict(row) for row in self.rows])


class ForecastGenerator:
    """Plans staffing for every day in a date range.

    Uses Dependency Injection: takes the records snapshot and a solver so
    the loop is decoupled from the traffic model in use.

    Workflow (generate method):
        1. Predict demand per weekday with WeekdayForecastModel
        2. For each date: solve staffing for that weekday's demand
        3. Compare against the actual record for the date, if any
        4. Summarize into a ForecastReport
    """

    def __init__(
        self,
        records: Mapping[str, HistoricalRecord],
        solver: StaffingSolver | None = None,
    ) -> None:
        """Initialize the generator with its components.

        Args:
            records: Read-only mapping of ISO date -> HistoricalRecord.
            solver: StaffingSolver to size each day; a default-config
                solver when omitted.
        """
        self.records = records
        self.solver = solver or StaffingSolver()
        self.model = WeekdayForecastModel(records)

    @property
    def config(self) -> PlannerConfig:
        return self.solver.config

    def _compare(
        self, day: date, estimate: TrafficEstimate, staffing: StaffingResult
    ) -> ForecastRow:
        actual = self.records.get(date_key(day)) or HistoricalRecord()
        required = staffing.required_agents

        diff = None
        rate = None
        near_perfect = False
        if actual.agents > 0:
            diff = actual.agents - required
            if required > 0:
                rate = actual.agents / required
                near_perfect = (
                    self.config.near_perfect_low <= rate <= self.config.near_perfect_high
                )

        return ForecastRow(
            date=day,
            weekday=day.weekday(),
            predicted_calls=estimate.calls,
            predicted_aht=estimate.aht,
            required_agents=required,
            actual_calls=actual.calls,
            actual_agents=actual.agents,
            actual_sl=actual.sl,
            diff=diff,
            realization_rate=rate,
            near_perfect=near_perfect,
        )

    def generate(
        self,
        start: date | str = DEFAULT_START,
        end: date | str = DEFAULT_END,
        target_service_level: float | None = None,
    ) -> ForecastReport:
        """Execute the forecast-to-staffing workflow over [start, end].

        Args:
            start: First planned date (inclusive).
            end: Last planned date (inclusive).
            target_service_level: Target in percent; config default if None.

        Returns:
            ForecastReport with per-day rows and summary statistics.
        """
        if target_service_level is None:
            target_service_level = self.config.target_service_level

        # Step 1: Weekday demand and staffing, solved once per weekday
        per_weekday: dict[int, tuple[TrafficEstimate, StaffingResult]] = {}
        for weekday in range(7):
            estimate = self.model.predict(weekday)
            staffing = self.solver.solve(estimate.calls, estimate.aht, target_service_level)
            per_weekday[weekday] = (estimate, staffing)

        # Step 2: Walk the calendar and compare against actuals
        rows: list[ForecastRow] = []
        for stamp in pd.date_range(start=start, end=end, freq="D"):
            day = stamp.date()
            estimate, staffing = per_weekday[day.weekday()]
            rows.append(self._compare(day, estimate, staffing))

        # Step 3: Aggregate results
        summary = summarize_rows(rows)
        logger.debug(
            "Forecast %s..%s: %d days, avg required %.1f, near-perfect %d",
            start, end, summary.days, summary.avg_required_agents, summary.near_perfect_days,
        )
        return ForecastReport(
            rows=rows, summary=summary, target_service_level=target_service_level
        )


def summarize_rows(rows: list[ForecastRow]) -> ForecastSummary:
    """Summary statistics over forecast rows; all zeros for no rows."""
    if not rows:
        return ForecastSummary(
            avg_monthly_calls=0.0, avg_required_agents=0.0, near_perfect_days=0, days=0
        )
    days = len(rows)
    total_calls = sum(row.predicted_calls for row in rows)
    total_agents = sum(row.required_agents for row in rows)
    return ForecastSummary(
        avg_monthly_calls=total_calls / days * 30,
        avg_required_agents=total_agents / days,
        near_perfect_days=sum(1 for row in rows if row.near_perfect),
        days=days,
    )
