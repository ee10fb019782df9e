from datetime import date

from callcenter_wfm import HistoryStore, TrafficEstimate, WeekdayForecastModel


def test_four_mondays(four_mondays):
    model = WeekdayForecastModel(four_mondays.snapshot())
    estimate = model.predict(0)
    assert estimate.calls == 2000
    assert estimate.aht == 300


def test_empty_history_returns_zero_estimate():
    model = WeekdayForecastModel(HistoryStore().snapshot())
    for weekday in range(7):
        assert model.predict(weekday) == TrafficEstimate(calls=0, aht=0)


def test_mismatched_weekday_returns_zero_estimate(four_mondays):
    model = WeekdayForecastModel(four_mondays.snapshot())
    assert model.predict(2) == TrafficEstimate(calls=0, aht=0)


def test_mean_over_matching_days_only():
    store = HistoryStore()
    store.put("2024-01-02", calls=1000, aht=200)  # Tuesday
    store.put("2024-01-09", calls=3000, aht=400)  # Tuesday
    store.put("2024-01-03", calls=9999, aht=999)  # Wednesday
    estimate = WeekdayForecastModel(store.snapshot()).predict(1)
    assert estimate.calls == 2000
    assert estimate.aht == 300


def test_aht_derived_from_talk_time():
    store = HistoryStore()
    # 50 talk hours over 600 calls -> 300s
    store.put("2024-01-05", calls=600, talk_time=50)
    estimate = WeekdayForecastModel(store.snapshot()).predict(4)
    assert estimate.calls == 600
    assert estimate.aht == 300


def test_skips_days_without_volume_or_handle_time():
    store = HistoryStore()
    store.put("2024-01-06", calls=0, aht=300)   # no volume
    store.put("2024-01-13", calls=500)          # no aht, no talk time
    store.put("2024-01-20", calls=800, aht=250)
    estimate = WeekdayForecastModel(store.snapshot()).predict(5)
    assert estimate == TrafficEstimate(calls=800, aht=250)


def test_predict_date_uses_weekday(four_mondays):
    model = WeekdayForecastModel(four_mondays.snapshot())
    assert model.predict_date(date(2025, 3, 3)) == model.predict(0)


def test_weekday_profile(four_mondays):
    profile = WeekdayForecastModel(four_mondays.snapshot()).weekday_profile()
    assert list(profile["day_of_week"]) == [0]
    assert profile.loc[0, "samples"] == 4
    assert profile.loc[0, "calls"] == 2000
