"""
Gap Analyzer Module
===================

Compares historical actual staffing with the Erlang-C requirement and
looks for days of the month that are systematically over- or understaffed.

Classification per day-of-month bucket (1-31, pooled across months):
    surplus:  mean_gap >= 1 and mean service level >= 86%
    deficit:  mean_gap <= -0.5
    balanced: anything else

Overstaffing is only called when the service level confirms it, so a
genuinely hard day is not flagged for cuts. The rebalancing suggestion
pairs the largest surplus with the largest deficit; it is a heuristic,
not an optimal transfer plan.
"""

import logging
import math
from dataclasses import asdict, dataclass
from typing import Mapping

import pandas as pd

from .config import PlannerConfig
from .history_store import HistoricalRecord, history_frame
from .staffing_solver import StaffingSolver

logger = logging.getLogger(__name__)

SURPLUS = "surplus"
DEFICIT = "deficit"
BALANCED = "balanced"


@dataclass(frozen=True)
class DayOfMonthStat:
    """Aggregated staffing gap for one day of the month.

    Attributes:
        day: Day of month (1-31).
        mean_gap: Mean of actual - required agents.
        mean_service_level: Mean observed service level (percent).
        mean_actual_agents: Mean agents actually deployed.
        sample_count: Historical days in the bucket.
        status: SURPLUS, DEFICIT or BALANCED.
    """
    day: int
    mean_gap: float
    mean_service_level: float
    mean_actual_agents: float
    sample_count: int
    status: str

    @property
    def suggested_change(self) -> int:
        """Agents to add (positive) or remove (negative) on this day."""
        return -math.floor(self.mean_gap + 0.5)


@dataclass(frozen=True)
class Rebalancing:
    """Shift capacity from one day of the month to another.

    Attributes:
        from_day: Day of month with the largest surplus.
        to_day: Day of month with the largest deficit.
        surplus: Mean surplus agents on from_day.
        deficit: Mean missing agents on to_day.
    """
    from_day: int
    to_day: int
    surplus: float
    deficit: float


@dataclass
class GapReport:
    """Result of a gap analysis pass.

    Attributes:
        day_stats: Every bucket with enough samples, by day of month.
        significant_days: Surplus and deficit buckets in day order.
        rebalancing: Paired suggestion, None unless both kinds exist.
    """
    day_stats: list[DayOfMonthStat]
    significant_days: list[DayOfMonthStat]
    rebalancing: Rebalancing | None = None

    @property
    def has_recommendations(self) -> bool:
        return bool(self.significant_days)

    @property
    def surpluses(self) -> list[DayOfMonthStat]:
        return [s for s in self.significant_days if s.status == SURPLUS]

    @property
    def deficits(self) -> list[DayOfMonthStat]:
        return [s for s in self.significant_days if s.status == DEFICIT]

    def to_frame(self) -> pd.DataFrame:
        """Significant days as a DataFrame, with the suggested change."""
        columns = [*DayOfMonthStat.__dataclass_fields__, "suggested_change"]
        if not self.significant_days:
            return pd.DataFrame(columns=columns)
        return pd.DataFrame(
            [{**asdict(s), "suggested_change": s.suggested_change} for s in self.significant_days]
        )[columns]


class GapAnalyzer:
    """Finds systematically over/understaffed days of the month.

    Data Flow:
        records -> per-record requirement (StaffingSolver) -> gap
                -> groupby day_of_month -> classify -> GapReport
    """

    def __init__(
        self,
        records: Mapping[str, HistoricalRecord],
        solver: StaffingSolver | None = None,
    ) -> None:
        """Initialize the analyzer.

        Args:
            records: Read-only mapping of ISO date -> HistoricalRecord.
            solver: Solver used for the requirement; it must use the same
                traffic model as the forecast it is compared against.
        """
        self.records = records
        self.solver = solver or StaffingSolver()

    @property
    def config(self) -> PlannerConfig:
        return self.solver.config

    def classify(self, mean_gap: float, mean_service_level: float) -> str:
        """Status for a bucket's mean gap and mean service level."""
        if (
            mean_gap >= self.config.surplus_gap
            and mean_service_level >= self.config.surplus_min_service_level
        ):
            return SURPLUS
        if mean_gap <= self.config.deficit_gap:
            return DEFICIT
        return BALANCED

    def gaps(self, target_service_level: float | None = None) -> pd.DataFrame:
        """Per-record requirement and gap for every staffed day with volume."""
        if target_service_level is None:
            target_service_level = self.config.target_service_level

        df = history_frame(self.records)
        if df.empty:
            return df.assign(required_agents=[], gap=[])

        df = df[(df["calls"] > 0) & (df["agents"] > 0)].copy()
        if df.empty:
            return df.assign(required_agents=[], gap=[])

        # Unlike the forecast path, a day without handle time still counts
        effective_aht = df["resolved_aht"].where(df["resolved_aht"] > 0, self.config.default_aht)
        df["required_agents"] = [
            self.solver.solve(calls, aht, target_service_level).required_agents
            for calls, aht in zip(df["calls"], effective_aht)
        ]
        df["gap"] = df["agents"] - df["required_agents"]
        return df

    def analyze(self, target_service_level: float | None = None) -> GapReport:
        """Aggregate gaps by day of month and build recommendations.

        Args:
            target_service_level: Target in percent; config default if None.

        Returns:
            GapReport with bucket stats, significant days and the paired
            rebalancing suggestion.
        """
        df = self.gaps(target_service_level)
        if df.empty:
            return GapReport(day_stats=[], significant_days=[])

        buckets = (
            df.groupby("day_of_month")
            .agg(
                mean_gap=("gap", "mean"),
                mean_service_level=("sl", "mean"),
                mean_actual_agents=("agents", "mean"),
                sample_count=("gap", "size"),
            )
            .sort_index()
        )
        # Single-sample buckets are noise, not a trend
        buckets = buckets[buckets["sample_count"] >= self.config.min_samples_per_day]

        day_stats = [
            DayOfMonthStat(
                day=int(day),
                mean_gap=float(row.mean_gap),
                mean_service_level=float(row.mean_service_level),
                mean_actual_agents=float(row.mean_actual_agents),
                sample_count=int(row.sample_count),
                status=self.classify(row.mean_gap, row.mean_service_level),
            )
            for day, row in buckets.iterrows()
        ]
        significant = [s for s in day_stats if s.status != BALANCED]

        report = GapReport(day_stats=day_stats, significant_days=significant)
        report.rebalancing = self._pair(report.surpluses, report.deficits)
        logger.debug(
            "Gap analysis: %d buckets, %d surplus, %d deficit",
            len(day_stats), len(report.surpluses), len(report.deficits),
        )
        return report

    @staticmethod
    def _pair(
        surpluses: list[DayOfMonthStat], deficits: list[DayOfMonthStat]
    ) -> Rebalancing | None:
        if not surpluses or not deficits:
            return None
        # sorted() is stable: ties keep the earlier day of month
        top_surplus = sorted(surpluses, key=lambda s: abs(s.mean_gap), reverse=True)[0]
        top_deficit = sorted(deficits, key=lambda s: abs(s.mean_gap), reverse=True)[0]
        return Rebalancing(
            from_day=top_surplus.day,
            to_day=top_deficit.day,
            surplus=abs(top_surplus.mean_gap),
            deficit=abs(top_deficit.mean_gap),
        )
