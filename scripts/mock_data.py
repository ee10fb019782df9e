import argparse

import numpy as np
import pandas as pd


def generate_daily_history(start_date_str="2024-01-01", days=365, seed=42):
    rng = np.random.default_rng(seed)
    dates = pd.date_range(start=start_date_str, periods=days, freq="D")

    # --- 1. Daily Volume (weekday shape + month-start rush) ---
    # Mon..Sun multipliers, Monday heaviest, Sunday lightest
    weekday_weight = np.array([1.25, 1.10, 1.00, 1.00, 0.95, 0.60, 0.40])
    base_calls = 2000

    dow = dates.dayofweek.to_numpy()
    dom = dates.day.to_numpy()
    month_start = np.where(dom <= 5, 1.15, 1.0)

    calls = base_calls * weekday_weight[dow] * month_start
    calls = rng.normal(calls, calls * 0.08).clip(min=50).astype(int)

    # --- 2. Handle Time ---
    # Roughly 5 minutes, a bit longer on busy days
    aht = rng.normal(300 * np.where(dom <= 5, 1.05, 1.0), 25).clip(min=120).astype(int)

    # --- 3. Staffing (planned for an average day, not the rush) ---
    agents = (calls * 0.14 * aht / 3600 * 1.25 / 0.70).round().astype(int)
    agents = agents + rng.integers(-3, 4, size=days)
    agents = agents.clip(min=1)

    # Service level drops when a day is short on staff
    load = calls / agents
    sl = (95 - (load - load.mean()) * 0.9 + rng.normal(0, 2, size=days)).clip(40, 99).round(1)

    df = pd.DataFrame({
        "Date": dates.strftime("%d.%m.%Y"),
        "Calls": calls,
        "Agents": agents,
        "AHT": aht,
        "Talk Time": (calls * aht / 3600).round().astype(int),
        "SL": sl,
    })

    # Leave a few holes like a hand-maintained sheet would have
    holes = rng.choice(days, size=max(1, days // 40), replace=False)
    df.loc[holes, ["Calls", "Agents"]] = 0

    return df


def main():
    parser = argparse.ArgumentParser(description="Generate a mock daily history sheet")
    parser.add_argument("--start", type=str, default="2024-01-01", help="First date (YYYY-MM-DD)")
    parser.add_argument("--days", type=int, default=365, help="Number of days to generate")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--out", type=str, default="mock_daily_history.csv", help="Output CSV path")
    args = parser.parse_args()

    df_mock = generate_daily_history(args.start, args.days, args.seed)
    df_mock.to_csv(args.out, index=False)
    print(f"Wrote {len(df_mock)} days to {args.out}")


if __name__ == "__main__":
    main()
