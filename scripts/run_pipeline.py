"""
Run the full daily planning pipeline:
  1. Load stored history (JSON) and/or import a CSV/Excel sheet
  2. Forecast demand and required staffing over a date range
  3. Compare with actual staffing and find day-of-month gaps
  4. Print the staffing plan, summary and rebalancing advice

Usage:
    cd scripts/
    python mock_data.py
    python run_pipeline.py --import-file mock_daily_history.csv --start 2025-01-01 --end 2025-01-31
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to the Python path so callcenter_wfm is importable
_SRC = Path(__file__).resolve().parent.parent / "src"
sys.path.insert(0, str(_SRC))

from callcenter_wfm import (
    ForecastGenerator,
    GapAnalyzer,
    HistoryStore,
    PlannerConfig,
    StaffingSolver,
    import_file,
    summarize_history,
    traffic_model_from_name,
)
from callcenter_wfm.pipeline import DEFAULT_END, DEFAULT_START

WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def print_history(store):
    overview = summarize_history(store.snapshot())
    print("=" * 70)
    print("STEP 1: HISTORY")
    print("=" * 70)
    print(f"  Days with data        : {overview.days}")
    print(f"  Avg daily calls       : {overview.avg_calls:,.0f}")
    print(f"  Avg AHT               : {overview.avg_aht:.0f}s")
    print(f"  Avg service level     : {overview.avg_sl:.1f}%")
    print(f"  Avg agents            : {overview.avg_agents:.0f}")
    print(f"  Avg TVE               : {overview.avg_tve:.2f}")
    print(f"  Weekday / Sat / Sun   : {overview.weekday_calls:,.0f} / "
          f"{overview.saturday_calls:,.0f} / {overview.sunday_calls:,.0f}")


def print_forecast(report):
    print("\n" + "=" * 70)
    print(f"STEP 2: STAFFING PLAN (target SL {report.target_service_level:.0f}%)")
    print("=" * 70)
    print(f"\n{'Date':<12} {'Day':<5} {'Forecast':<10} {'Actual':<10} {'Required':<10} "
          f"{'Agents':<8} {'Diff':<6} {'Rate':<8} {'SL%':<6}")
    print("-" * 80)

    for row in report.rows:
        actual_calls = f"{row.actual_calls:,}" if row.actual_calls > 0 else "-"
        actual_agents = str(row.actual_agents) if row.actual_agents > 0 else "-"
        diff = f"{row.diff:+d}" if row.diff is not None else "-"
        rate = f"{row.realization_rate:.0%}" if row.realization_rate is not None else "-"
        if row.near_perfect:
            rate += "*"
        sl = f"{row.actual_sl:.0f}" if row.actual_sl > 0 else "-"
        print(
            f"{row.date.isoformat():<12} {WEEKDAYS[row.weekday]:<5} "
            f"{round(row.predicted_calls):<10,} {actual_calls:<10} {row.required_agents:<10} "
            f"{actual_agents:<8} {diff:<6} {rate:<8} {sl:<6}"
        )

    s = report.summary
    print(f"\n{'='*80}")
    print(f"  SUMMARY")
    print(f"{'='*80}")
    print(f"  Avg monthly calls     : {round(s.avg_monthly_calls):,}")
    print(f"  Avg required agents   : {round(s.avg_required_agents)}")
    print(f"  Near-perfect days     : {s.near_perfect_days}/{s.days}")


def print_gaps(gap_report):
    print("\n" + "=" * 70)
    print("STEP 3: DAY-OF-MONTH GAP ANALYSIS")
    print("=" * 70)

    if not gap_report.has_recommendations:
        print("  No significant systematic deviation found.")
        return

    if gap_report.rebalancing is not None:
        r = gap_report.rebalancing
        print(f"\n  Rebalancing: the surplus on day {r.from_day} (+{r.surplus:.1f}) "
              f"can cover the shortage on day {r.to_day} (-{r.deficit:.1f}).")

    print(f"\n{'Day':<6} {'Status':<10} {'Avg agents':<12} {'Avg gap':<10} {'Avg SL':<8} {'Change':<8}")
    print("-" * 60)
    for stat in gap_report.significant_days:
        print(
            f"{stat.day:<6} {stat.status:<10} {round(stat.mean_actual_agents):<12} "
            f"{stat.mean_gap:<+10.1f} {stat.mean_service_level:<8.1f} {stat.suggested_change:<+8d}"
        )


def main():
    parser = argparse.ArgumentParser(
        description="Forecast daily staffing and analyze historical gaps"
    )
    parser.add_argument("--history", type=str, default="history.json",
                        help="JSON history store to load (and update after import)")
    parser.add_argument("--import-file", type=str, default=None,
                        help="CSV/Excel sheet to merge into the history")
    parser.add_argument("--start", type=str, default=DEFAULT_START.isoformat(),
                        help="First planned date")
    parser.add_argument("--end", type=str, default=DEFAULT_END.isoformat(),
                        help="Last planned date")
    parser.add_argument("--target-sl", type=float, default=80.0,
                        help="Target service level in percent")
    parser.add_argument("--traffic-model", type=str, default="peak_hour",
                        choices=["peak_hour", "operating_hours"],
                        help="How daily volume is turned into Erlangs")
    parser.add_argument("--traffic-param", type=float, default=None,
                        help="Peak-hour ratio or operating hours (model default if omitted)")
    parser.add_argument("--shrinkage-availability", type=float, default=0.70,
                        help="Share of paid time agents are on queue")
    parser.add_argument("--log-level", type=str, default="WARNING",
                        help="Logging level (DEBUG, INFO, WARNING, ...)")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    store = HistoryStore.load(args.history)
    if args.import_file:
        result = import_file(store, args.import_file)
        if result.imported == 0:
            print("No rows could be read. Check the sheet headers (Date, Calls, AHT, ...).")
            return
        print(f"Imported {result.imported} rows ({result.skipped} skipped).")
        store.save(args.history)

    config = PlannerConfig(
        target_service_level=args.target_sl,
        availability_factor=args.shrinkage_availability,
        traffic_model=traffic_model_from_name(args.traffic_model, args.traffic_param),
    )
    solver = StaffingSolver(config)
    records = store.snapshot()

    print_history(store)

    report = ForecastGenerator(records, solver).generate(args.start, args.end)
    print_forecast(report)

    gap_report = GapAnalyzer(records, solver).analyze()
    print_gaps(gap_report)


if __name__ == "__main__":
    main()
