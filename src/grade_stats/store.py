# ABOUTME: Loads grade record snapshots from JSON, JSON-lines, or parquet exports.
# ABOUTME: Filters snapshots by learner or class and validates caller-supplied identifiers.

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Union

import numpy as np
import pandas as pd

from .schemas import ClassId, GradeRecord, ScoreEntry

JSON_SUFFIXES = {".json"}
JSON_LINES_SUFFIXES = {".jsonl", ".ndjson"}
PARQUET_SUFFIXES = {".parquet", ".pq"}
LEARNER_COLUMNS = ("learner_id", "student_id")


class InvalidIdentifierError(ValueError):
    """Raised when a learner or class identifier cannot be interpreted."""


def parse_identifier(raw: Union[str, int], name: str = "id") -> int:
    """Convert a caller-supplied identifier to an int or raise InvalidIdentifierError."""

    if isinstance(raw, bool):
        raise InvalidIdentifierError(f"Invalid {name} format: {raw!r}")
    if isinstance(raw, (int, np.integer)):
        return int(raw)
    if isinstance(raw, (float, np.floating)) and float(raw).is_integer():
        return int(raw)
    text = str(raw).strip()
    try:
        return int(text)
    except ValueError as exc:
        raise InvalidIdentifierError(f"Invalid {name} format: {raw!r}") from exc


def normalize_class_id(value: Any) -> ClassId:
    """Numeric class ids (including numeric strings) become ints; anything else a stripped string."""

    if isinstance(value, (int, np.integer)) and not isinstance(value, bool):
        return int(value)
    if isinstance(value, (float, np.floating)) and float(value).is_integer():
        return int(value)
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        return text


def load_grade_records(path: Union[str, Path]) -> List[GradeRecord]:
    """
    Read a grade snapshot exported from the record store.

    Supported layouts: a JSON array (``.json``), JSON lines (``.jsonl``/``.ndjson``),
    or parquet with a list-of-struct ``scores`` column.
    """

    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in JSON_SUFFIXES:
        df = pd.read_json(path, orient="records", dtype=False)
    elif suffix in JSON_LINES_SUFFIXES:
        df = pd.read_json(path, orient="records", lines=True, dtype=False)
    elif suffix in PARQUET_SUFFIXES:
        df = pd.read_parquet(path)
    else:
        raise ValueError(
            f"Unsupported records file '{path.name}'. "
            f"Expected one of: {', '.join(sorted(JSON_SUFFIXES | JSON_LINES_SUFFIXES | PARQUET_SUFFIXES))}."
        )
    return records_from_frame(df)


def records_from_frame(df: pd.DataFrame) -> List[GradeRecord]:
    if df is None or df.empty:
        return []

    learner_column = next((col for col in LEARNER_COLUMNS if col in df.columns), None)
    if learner_column is None or "class_id" not in df.columns:
        raise ValueError(f"Records need a class_id column and one of {LEARNER_COLUMNS}; got {list(df.columns)}.")

    frame = df.dropna(subset=[learner_column, "class_id"])
    scores_column = frame["scores"] if "scores" in frame.columns else [None] * len(frame)
    return [
        GradeRecord(
            learner_id=parse_identifier(_scalar(learner_id), name="learner_id"),
            class_id=normalize_class_id(_scalar(class_id)),
            scores=_parse_scores(scores),
        )
        for learner_id, class_id, scores in zip(frame[learner_column], frame["class_id"], scores_column)
    ]


def records_from_dicts(rows: Iterable[Mapping[str, Any]]) -> List[GradeRecord]:
    return records_from_frame(pd.DataFrame(list(rows)))


def filter_by_learner(records: Iterable[GradeRecord], learner_id: Union[str, int]) -> List[GradeRecord]:
    wanted = parse_identifier(learner_id, name="learner_id")
    return [record for record in records if record.learner_id == wanted]


def filter_by_class(records: Iterable[GradeRecord], class_id: ClassId) -> List[GradeRecord]:
    wanted = normalize_class_id(class_id)
    return [record for record in records if normalize_class_id(record.class_id) == wanted]


def _parse_scores(value: Any) -> tuple:
    if value is None:
        return ()
    if isinstance(value, np.ndarray):
        value = value.tolist()
    if not isinstance(value, (list, tuple)):
        return ()

    entries = []
    for item in value:
        if not isinstance(item, Mapping):
            continue
        entry_type = item.get("type")
        score = _to_float(item.get("score"))
        if entry_type is None or score is None:
            continue
        entries.append(ScoreEntry(type=str(entry_type), score=score))
    return tuple(entries)


def _to_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if np.isnan(number):
        return None
    return number


def _scalar(value: Any) -> Any:
    # pandas hands back numpy scalars; unwrap them for the dataclasses.
    return value.item() if isinstance(value, np.generic) else value
