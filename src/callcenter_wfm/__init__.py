"""
Contact Center Forecast & Staffing Planner
==========================================

Core components for daily contact center staffing:

1. HistoryStore - Date-keyed daily records (calls, agents, AHT, SL)
2. WeekdayForecastModel - Predicts daily demand from weekday averages
3. StaffingSolver - Minimum headcount via Erlang-C plus shrinkage
4. ForecastGenerator - Plans a date range and compares with actuals
5. GapAnalyzer - Day-of-month surplus/deficit and rebalancing advice

Data Flow:
    import_file() / put() -> HistoryStore.snapshot() -> records
                                |
    records -> WeekdayForecastModel.predict(weekday) -> TrafficEstimate
                                                           |
                                                           v
                    StaffingSolver.solve(calls, aht, target) -> StaffingResult
                                                           |
                                                           v
           ForecastGenerator.generate(start, end)  /  GapAnalyzer.analyze()
"""

from .config import (
    OperatingHoursTrafficModel,
    PeakHourTrafficModel,
    PlannerConfig,
    traffic_model_from_name,
)
from .demand_forecaster import TrafficEstimate, WeekdayForecastModel
from .erlang_math import erlang_c, service_level
from .gap_analyzer import DayOfMonthStat, GapAnalyzer, GapReport, Rebalancing
from .history_store import HistoricalRecord, HistoryStore
from .importer import ImportResult, import_file, import_rows
from .kpis import HistoryOverview, recent_series, summarize_history
from .pipeline import ForecastGenerator, ForecastReport, ForecastRow, ForecastSummary
from .staffing_solver import StaffingResult, StaffingSolver

__all__ = [
    "OperatingHoursTrafficModel",
    "PeakHourTrafficModel",
    "PlannerConfig",
    "traffic_model_from_name",
    "TrafficEstimate",
    "WeekdayForecastModel",
    "erlang_c",
    "service_level",
    "DayOfMonthStat",
    "GapAnalyzer",
    "GapReport",
    "Rebalancing",
    "HistoricalRecord",
    "HistoryStore",
    "ImportResult",
    "import_file",
    "import_rows",
    "HistoryOverview",
    "recent_series",
    "summarize_history",
    "ForecastGenerator",
    "ForecastReport",
    "ForecastRow",
    "ForecastSummary",
    "StaffingResult",
    "StaffingSolver",
]
