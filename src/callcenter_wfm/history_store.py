"""
History Store Module
====================

Daily historical records keyed by calendar date (``YYYY-MM-DD``).

Raw values arrive hand-typed or imported from spreadsheets, so every
numeric field is coerced tolerantly: anything unparseable becomes 0, and
0 is read as "absent" by the forecasting and analysis code.
"""

import json
import logging
import math
from dataclasses import asdict, dataclass, replace
from datetime import date, datetime
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import pandas as pd

logger = logging.getLogger(__name__)

RECORD_FIELDS = ("calls", "agents", "aht", "talk_time", "sl")


def to_int(value: Any) -> int:
    """Leading-integer parse of a raw value; 0 when nothing parses."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return int(value) if math.isfinite(value) else 0
    text = str(value).strip()
    digits = ""
    for i, ch in enumerate(text):
        if ch.isdigit() or (i == 0 and ch in "+-"):
            digits += ch
        else:
            break
    try:
        return int(digits)
    except ValueError:
        return 0


def to_float(value: Any) -> float:
    """Float parse of a raw value; 0.0 when it does not parse."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        result = float(value)
    except (TypeError, ValueError):
        return 0.0
    return result if math.isfinite(result) else 0.0


def date_key(day: Any) -> str:
    """Canonical ``YYYY-MM-DD`` key for a date-like value.

    Raises:
        ValueError: If the value cannot be read as a date.
    """
    if isinstance(day, datetime):
        return day.date().isoformat()
    if isinstance(day, date):
        return day.isoformat()
    stamp = pd.Timestamp(day)
    if pd.isna(stamp):
        raise ValueError(f"Not a date: {day!r}")
    return stamp.date().isoformat()


@dataclass(frozen=True)
class HistoricalRecord:
    """One day of observed contact-center activity.

    Attributes:
        calls: Inbound contacts handled that day.
        agents: Staff-days actually deployed.
        aht: Average handle time in seconds (0 when not recorded).
        talk_time: Aggregate talk time in hours.
        sl: Observed service level in percent (0-100).
    """
    calls: int = 0
    agents: int = 0
    aht: int = 0
    talk_time: int = 0
    sl: float = 0.0

    def resolved_aht(self) -> float:
        """Handle time in seconds, derived from talk time when aht is 0."""
        if self.aht > 0:
            return float(self.aht)
        if self.talk_time > 0 and self.calls > 0:
            return self.talk_time * 3600 / self.calls
        return 0.0

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "HistoricalRecord":
        """Build a record from loosely typed stored values."""
        return cls(
            calls=to_int(raw.get("calls")),
            agents=to_int(raw.get("agents")),
            aht=to_int(raw.get("aht")),
            talk_time=to_int(raw.get("talk_time", raw.get("talkTime"))),
            sl=to_float(raw.get("sl")),
        )


_COERCE = {
    "calls": to_int,
    "agents": to_int,
    "aht": to_int,
    "talk_time": to_int,
    "sl": to_float,
}


class HistoryStore:
    """Date-keyed store of HistoricalRecord entries.

    The forecasting and analysis code never mutates the store; it reads a
    read-only snapshot taken at the start of each pass.

    Data Flow:
        put() / import / load() -> records
        snapshot() -> read-only mapping -> forecaster, gap analyzer
        save() -> JSON file
    """

    def __init__(self, records: Mapping[str, HistoricalRecord] | None = None) -> None:
        self._records: dict[str, HistoricalRecord] = dict(records or {})

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, day: Any) -> bool:
        return date_key(day) in self._records

    def get(self, day: Any) -> HistoricalRecord | None:
        return self._records.get(date_key(day))

    def all_dates(self) -> set[str]:
        return set(self._records)

    def put(self, day: Any, **fields: Any) -> HistoricalRecord:
        """Merge fields into the record for a day, creating it if needed.

        Only the supplied fields are overwritten; each value is coerced to
        its numeric type.

        Raises:
            ValueError: On an unknown field name.
        """
        unknown = set(fields) - set(RECORD_FIELDS)
        if unknown:
            raise ValueError(f"Unknown record fields: {sorted(unknown)}")

        key = date_key(day)
        current = self._records.get(key, HistoricalRecord())
        updates = {name: _COERCE[name](value) for name, value in fields.items()}
        record = replace(current, **updates)
        self._records[key] = record
        return record

    def clear(self) -> None:
        self._records.clear()

    def snapshot(self) -> Mapping[str, HistoricalRecord]:
        """Read-only view of the current records, safe to hand to the core."""
        return MappingProxyType(dict(self._records))

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    @classmethod
    def load(cls, path: str | Path, *fallback_paths: str | Path) -> "HistoryStore":
        """Load and merge records from one or more JSON files.

        Files are merged in the order given; a date present in several
        files keeps the values from the last one. Missing or unreadable
        files are logged and skipped.
        """
        store = cls()
        for source in (path, *fallback_paths):
            source = Path(source)
            if not source.exists():
                continue
            try:
                payload = json.loads(source.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as exc:
                logger.warning("Skipping unreadable history file %s: %s", source, exc)
                continue
            if not isinstance(payload, dict):
                logger.warning("Skipping history file %s: expected a JSON object", source)
                continue

            loaded = 0
            for key, raw in payload.items():
                if not isinstance(raw, dict):
                    continue
                try:
                    store._records[date_key(key)] = HistoricalRecord.from_raw(raw)
                except ValueError:
                    logger.warning("Skipping record with invalid date key %r in %s", key, source)
                    continue
                loaded += 1
            logger.debug("Merged %d records from %s", loaded, source)

        logger.info("History store loaded with %d unique records", len(store))
        return store

    def save(self, path: str | Path) -> None:
        """Write all records to a JSON file, sorted by date."""
        payload = {key: asdict(self._records[key]) for key in sorted(self._records)}
        Path(path).write_text(json.dumps(payload, indent=2), encoding="utf-8")
        logger.debug("Saved %d records to %s", len(payload), path)


def history_frame(records: Mapping[str, HistoricalRecord]) -> pd.DataFrame:
    """Tabular view of a records mapping, one row per date.

    Adds ``resolved_aht`` plus ``day_of_week`` (0=Mon) and ``day_of_month``
    calendar features. Rows are sorted by date.
    """
    columns = ["date", *RECORD_FIELDS, "resolved_aht", "day_of_week", "day_of_month"]
    if not records:
        return pd.DataFrame(columns=columns)

    rows = [
        {"date": key, **asdict(record), "resolved_aht": record.resolved_aht()}
        for key, record in records.items()
    ]
    df = pd.DataFrame(rows)
    df["date"] = pd.to_datetime(df["date"])
    df["day_of_week"] = df["date"].dt.dayofweek
    df["day_of_month"] = df["date"].dt.day
    return df.sort_values("date").reset_index(drop=True)[columns]
