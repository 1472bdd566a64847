"""Load exported Case/Task records from JSON or CSV."""
import json
import logging
from pathlib import Path

import pandas as pd
from pydantic import TypeAdapter

from .models import Case, Task

logger = logging.getLogger(__name__)

RECORD_MODELS = {"case": Case, "task": Task}

# CSV columns holding JSON-encoded nested values, with their empty default.
NESTED_COLUMNS = {
    "categories": [],
    "creator": None,
    "answers": [],
    "metricScores": [],
    "metric_scores": [],
    "assignee": None,
    "activities": [],
}


def load_records(path: Path, kind: str) -> list[Case] | list[Task]:
    """Load all records of ``kind`` ("case" or "task") from an export file."""
    if kind not in RECORD_MODELS:
        raise ValueError(f"Unknown record kind: {kind!r}")
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Record export not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".json":
        rows = _json_rows(path, kind)
    elif suffix == ".csv":
        rows = _csv_rows(path)
    else:
        raise ValueError(f"Unsupported export format: {path.suffix!r}")

    records = TypeAdapter(list[RECORD_MODELS[kind]]).validate_python(rows)
    logger.info("Loaded %d %s records from %s", len(records), kind, path)
    return records


def _json_rows(path: Path, kind: str) -> list[dict]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get(f"{kind}s", [])
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of {kind} records in {path}")
    return data


def _csv_rows(path: Path) -> list[dict]:
    """Read one record per CSV row; nested fields are JSON-encoded columns."""
    df = pd.read_csv(path, dtype=str)

    rows = []
    for _, row in df.iterrows():
        record = {}
        for column, value in row.items():
            if pd.isna(value):
                continue
            if column in NESTED_COLUMNS:
                record[column] = _parse_nested(value, NESTED_COLUMNS[column])
            else:
                record[column] = value
        rows.append(record)
    return rows


def _parse_nested(value: str, default):
    try:
        return json.loads(value)
    except (json.JSONDecodeError, TypeError):
        logger.debug("Ignoring malformed nested value: %.80r", value)
        return default
