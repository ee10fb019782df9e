"""
Importer Module
===============

Loads daily history from spreadsheet-style rows into a HistoryStore.

Column headers vary between exports (and languages), so each semantic
field is found by fuzzy matching: headers are lower-cased and stripped
of whitespace, then searched for any keyword in the field's list. Rows
whose date cannot be read are skipped and counted instead of aborting
the whole import.
"""

import logging
import math
import re
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Any, Iterable, Mapping

import pandas as pd

from .history_store import HistoryStore

logger = logging.getLogger(__name__)

COLUMN_KEYWORDS = {
    "date": ["tarih", "date", "gün", "day"],
    "calls": ["çağrı", "cagri", "call", "inbound", "vol"],
    "aht": ["aht", "süre", "time", "handle"],
    "agents": ["temsilci", "agent", "personel", "kisi"],
    "sl": ["sl", "service", "hizmet", "level", "seviye"],
    "talk_time": ["talk", "görüşme", "konusma"],
}

# Spreadsheet day numbers count from 1899-12-30; anything above this is
# treated as a serial date rather than a plain number.
EXCEL_EPOCH = date(1899, 12, 30)
SERIAL_DATE_MIN = 20000

_DOTTED = re.compile(r"^(\d{1,2})\.(\d{1,2})\.(\d{4})$")
_SLASHED = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")


@dataclass
class ImportResult:
    """Outcome of an import.

    Attributes:
        imported: Rows written to the store.
        skipped: Rows dropped for a missing or unreadable date.
        errors: (row index, reason) for each skipped row.
    """
    imported: int = 0
    skipped: int = 0
    errors: list[tuple[int, str]] = field(default_factory=list)


def _normalize_header(name: Any) -> str:
    return re.sub(r"\s+", "", str(name).lower()).strip()


def find_value(row: Mapping[str, Any], keywords: Iterable[str]) -> Any:
    """First value whose header contains any keyword, in column order."""
    for column, value in row.items():
        header = _normalize_header(column)
        for keyword in keywords:
            if keyword in header:
                return value
    return None


def parse_date(raw: Any) -> date | None:
    """Read a date from an import cell.

    Accepts spreadsheet serial numbers, ``DD.MM.YYYY``, ``DD/MM/YYYY``
    and anything pandas can parse (ISO first). Returns None if unreadable.
    """
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw

    text = str(raw).strip()
    if not text:
        return None

    try:
        serial = float(text)
    except ValueError:
        serial = None
    if serial is not None and math.isfinite(serial) and int(serial) > SERIAL_DATE_MIN:
        try:
            return EXCEL_EPOCH + timedelta(days=int(serial))
        except OverflowError:
            return None

    for pattern in (_DOTTED, _SLASHED):
        match = pattern.match(text)
        if match:
            day, month, year = (int(part) for part in match.groups())
            try:
                return date(year, month, day)
            except ValueError:
                return None

    try:
        stamp = pd.Timestamp(text)
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(stamp):
        return None
    return stamp.date()


def clean_int(raw: Any) -> int:
    """Integer from a cell, dropping separators and units ("1.250" -> 1250)."""
    if isinstance(raw, str):
        digits = re.sub(r"[^0-9]", "", raw)
        return int(digits) if digits else 0
    try:
        return int(raw)
    except (TypeError, ValueError, OverflowError):
        return 0


def clean_float(raw: Any) -> float:
    """Float from a cell, accepting a decimal comma ("87,5" -> 87.5)."""
    if isinstance(raw, str):
        raw = raw.replace(",", ".", 1)
        match = re.match(r"^\s*[-+]?(\d+\.?\d*|\.\d+)", raw)
        return float(match.group(0)) if match else 0.0
    try:
        return float(raw)
    except (TypeError, ValueError):
        return 0.0


_CLEANERS = {
    "calls": clean_int,
    "agents": clean_int,
    "sl": clean_float,
    "aht": clean_int,
    "talk_time": clean_int,
}


def _present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, float) and pd.isna(value):
        return False
    return bool(value) and value != "0"


def import_rows(store: HistoryStore, rows: Iterable[Mapping[str, Any]]) -> ImportResult:
    """Merge tabular rows into the store.

    Only fields with a non-empty, non-zero cell are written, so partial
    sheets update a record without blanking its other fields.

    Args:
        store: Destination store (mutated).
        rows: Mappings of column header -> raw cell value.

    Returns:
        ImportResult with imported/skipped counts.
    """
    result = ImportResult()
    for index, row in enumerate(rows):
        if index == 0:
            logger.debug("Import columns: %s", list(row.keys()))

        raw_date = find_value(row, COLUMN_KEYWORDS["date"])
        if not _present(raw_date):
            result.skipped += 1
            result.errors.append((index, "no date column"))
            logger.warning("Row %d: no date column found, keys: %s", index, list(row.keys()))
            continue

        day = parse_date(raw_date)
        if day is None:
            result.skipped += 1
            result.errors.append((index, f"invalid date {raw_date!r}"))
            logger.warning("Row %d: invalid date parsed from %r", index, raw_date)
            continue

        updates = {}
        for name, cleaner in _CLEANERS.items():
            value = find_value(row, COLUMN_KEYWORDS[name])
            if _present(value):
                updates[name] = cleaner(value)
        store.put(day, **updates)
        result.imported += 1

    logger.info("Import finished: %d rows imported, %d skipped", result.imported, result.skipped)
    return result


def read_table(path: str | Path) -> pd.DataFrame:
    """Read a CSV or Excel sheet with every cell kept as text."""
    path = Path(path)
    if path.suffix.lower() in (".xlsx", ".xls"):
        # First sheet only, like a manual export
        df = pd.read_excel(path, sheet_name=0, dtype=str)
    else:
        df = pd.read_csv(path, dtype=str)
    return df.fillna("")


def import_file(store: HistoryStore, path: str | Path) -> ImportResult:
    """Import every row of a CSV or Excel file into the store."""
    df = read_table(path)
    if df.empty:
        logger.warning("No rows found in %s", path)
        return ImportResult()
    return import_rows(store, df.to_dict(orient="records"))
