"""Validation of raw response sheet rows into typed submissions."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
import logging
import re

from quiz_stats.constants.feed_constants import (
    ANSWER_COLUMN,
    PARTICIPANT_ID_COLUMN,
    TIMESTAMP_COLUMN,
)
from quiz_stats.core.models import Submission

logger = logging.getLogger(__name__)

_INTEGER_ID_PATTERN = re.compile(r"^(\d+)(?:\.0+)?$")


@dataclass(frozen=True, slots=True)
class FeedColumns:
    """Header names of the three columns read from a response sheet."""

    timestamp: str = TIMESTAMP_COLUMN
    participant_id: str = PARTICIPANT_ID_COLUMN
    answer: str = ANSWER_COLUMN


DEFAULT_FEED_COLUMNS = FeedColumns()


def normalize_row(
    raw_row: Mapping[str, object],
    columns: FeedColumns = DEFAULT_FEED_COLUMNS,
) -> Submission | None:
    """Return a ``Submission`` for ``raw_row``, or ``None`` if a required field is missing."""
    timestamp = _clean(raw_row.get(columns.timestamp))
    participant_id = canonical_participant_id(raw_row.get(columns.participant_id))
    answer = _clean(raw_row.get(columns.answer))
    if not timestamp or not participant_id or not answer:
        return None
    return Submission(
        timestamp=timestamp,
        participant_id=participant_id,
        raw_answer=normalize_answer(answer),
    )


def normalize_rows(
    raw_rows: Iterable[Mapping[str, object]],
    columns: FeedColumns = DEFAULT_FEED_COLUMNS,
) -> list[Submission]:
    submissions: list[Submission] = []
    dropped = 0
    for row_number, raw_row in enumerate(raw_rows, start=1):
        submission = normalize_row(raw_row, columns)
        if submission is None:
            dropped += 1
            logger.debug("Skipping malformed row %d: %r", row_number, dict(raw_row))
            continue
        submissions.append(submission)
    if dropped:
        logger.warning(
            "Skipped %d malformed row(s) missing %s, %s or %s",
            dropped,
            columns.timestamp,
            columns.participant_id,
            columns.answer,
        )
    return submissions


def normalize_answer(answer: str) -> str:
    return answer.strip().upper()


def canonical_participant_id(value: object) -> str | None:
    """Return the string key for a participant id.

    Integer-like ids ("0042", 42, "42.0") collapse to "42" so numeric and text
    exports of the same sheet key identically. Anything else is kept trimmed.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)

    text = str(value).strip()
    if not text:
        return None
    match = _INTEGER_ID_PATTERN.match(text)
    if match is None:
        return text
    return str(int(match.group(1)))


def _clean(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()
