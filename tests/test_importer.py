from datetime import date

import pandas as pd
import pytest

from callcenter_wfm import HistoricalRecord, HistoryStore, import_file, import_rows
from callcenter_wfm.importer import clean_float, clean_int, find_value, parse_date


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("06.01.2025", date(2025, 1, 6)),
        ("6/1/2025", date(2025, 1, 6)),
        ("2025-01-06", date(2025, 1, 6)),
        ("45663", date(2025, 1, 6)),
        (45663, date(2025, 1, 6)),
        (date(2025, 1, 6), date(2025, 1, 6)),
        ("31.02.2025", None),
        ("yesterday-ish", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_date(raw, expected):
    assert parse_date(raw) == expected


@pytest.mark.parametrize(
    "raw, expected", [("1.250", 1250), ("300 sn", 300), (42, 42), ("", 0), ("x", 0)]
)
def test_clean_int(raw, expected):
    assert clean_int(raw) == expected


@pytest.mark.parametrize(
    "raw, expected", [("87,5", 87.5), ("90%", 90.0), (88.2, 88.2), ("-", 0.0)]
)
def test_clean_float(raw, expected):
    assert clean_float(raw) == expected


def test_find_value_is_fuzzy_and_ordered():
    row = {"Tarih": "06.01.2025", " Gelen Çağrı ": "1500", "Total Calls": "999"}
    assert find_value(row, ["tarih", "date"]) == "06.01.2025"
    assert find_value(row, ["çağrı", "call"]) == "1500"
    assert find_value(row, ["temsilci"]) is None


def test_import_round_trip():
    store = HistoryStore()
    rows = [
        {"Date": "06.01.2025", "Calls": "1.500", "AHT": "280", "Agents": "30",
         "SL": "88,5", "Talk Time": "117"},
        {"Date": "2025-01-07", "Calls": "1200", "AHT": "", "Agents": "25",
         "SL": "91", "Talk Time": "100"},
    ]
    result = import_rows(store, rows)
    assert result.imported == 2
    assert result.skipped == 0
    assert store.get("2025-01-06") == HistoricalRecord(
        calls=1500, agents=30, aht=280, talk_time=117, sl=88.5
    )
    assert store.get("2025-01-07") == HistoricalRecord(
        calls=1200, agents=25, aht=0, talk_time=100, sl=91.0
    )


def test_import_merges_only_present_fields():
    store = HistoryStore()
    store.put("2025-01-06", calls=1500, agents=30, sl=88)
    import_rows(store, [{"Date": "06.01.2025", "Agents": "32", "Calls": "", "SL": "0"}])
    assert store.get("2025-01-06") == HistoricalRecord(calls=1500, agents=32, sl=88)


def test_bad_rows_are_counted_not_fatal(caplog):
    store = HistoryStore()
    rows = [
        {"Date": "not a date", "Calls": "10"},
        {"Calls": "10"},
        {"Date": "07.01.2025", "Calls": "10"},
    ]
    result = import_rows(store, rows)
    assert result.imported == 1
    assert result.skipped == 2
    assert [index for index, _ in result.errors] == [0, 1]
    assert store.all_dates() == {"2025-01-07"}
    assert "invalid date" in caplog.text


def test_import_csv_file(tmp_path):
    path = tmp_path / "history.csv"
    pd.DataFrame(
        {
            "Tarih": ["06.01.2025", "13.01.2025"],
            "Çağrı": ["2000", "2100"],
            "Temsilci": ["40", "41"],
            "AHT": ["300", "310"],
            "SL": ["85", "87,5"],
        }
    ).to_csv(path, index=False)

    store = HistoryStore()
    result = import_file(store, path)
    assert result.imported == 2
    assert store.get("2025-01-13") == HistoricalRecord(calls=2100, agents=41, aht=310, sl=87.5)


def test_import_excel_file(tmp_path):
    path = tmp_path / "history.xlsx"
    pd.DataFrame(
        {"Date": ["06.01.2025"], "Inbound": ["2000"], "Agents": ["40"], "AHT": ["300"]}
    ).to_excel(path, index=False)

    store = HistoryStore()
    assert import_file(store, path).imported == 1
    assert store.get("2025-01-06") == HistoricalRecord(calls=2000, agents=40, aht=300)
