"""Utilities for importing the question list (catalog) uploaded by the quiz host.

File format: CSV with a header row and one row per question::

    index,link,ans
    1,https://docs.google.com/spreadsheets/d/e/.../pub?output=csv,A
    2,https://docs.google.com/spreadsheets/d/e/.../pub?output=csv,C

``index`` orders the questions (values need not be contiguous), ``link``
points at the question's response sheet export, and ``ans`` is the expected
answer. Rows missing any of the three, or with a non-integer index, are
skipped.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import logging
from pathlib import Path

from quiz_stats.constants.catalog_constants import (
    ANSWER_COLUMN,
    CATALOG_FILE_SUFFIX,
    INDEX_COLUMN,
    LINK_COLUMN,
)
from quiz_stats.core.errors import CatalogError
from quiz_stats.core.feed_loader import parse_csv_text
from quiz_stats.core.models import Question
from quiz_stats.core.row_normalizer import normalize_answer

logger = logging.getLogger(__name__)


def load_catalog_from_file(file_path: Path) -> list[Question]:
    if file_path.suffix.lower() != CATALOG_FILE_SUFFIX:
        raise CatalogError("unsupported-file", "Please upload a CSV file.")
    text = file_path.read_text(encoding="utf-8-sig")
    return load_catalog_from_text(text)


def load_catalog_from_text(text: str) -> list[Question]:
    return parse_catalog_rows(parse_csv_text(text))


def parse_catalog_rows(rows: Iterable[Mapping[str, object]]) -> list[Question]:
    """Validate catalog rows and return the questions sorted by index."""
    rows = list(rows)
    if not rows:
        raise CatalogError("empty", "CSV file is empty.")

    questions: dict[int, Question] = {}
    for raw_row in rows:
        question = _parse_row(raw_row)
        if question is None:
            logger.debug("Skipping invalid catalog row: %r", dict(raw_row))
            continue
        if question.index in questions:
            logger.warning("Duplicate question index %d; keeping the first row", question.index)
            continue
        questions[question.index] = question

    if not questions:
        raise CatalogError("no-valid-rows", "No valid questions found in the CSV file.")

    skipped = len(rows) - len(questions)
    if skipped:
        logger.warning("Skipped %d catalog row(s)", skipped)
    return sorted(questions.values(), key=lambda q: q.index)


def _parse_row(raw_row: Mapping[str, object]) -> Question | None:
    index_text = _cell(raw_row, INDEX_COLUMN)
    link = _cell(raw_row, LINK_COLUMN)
    answer = _cell(raw_row, ANSWER_COLUMN)
    if not index_text or not link or not answer:
        return None
    try:
        index = int(index_text)
    except ValueError:
        return None
    return Question(index=index, link=link, answer=normalize_answer(answer))


def _cell(raw_row: Mapping[str, object], column: str) -> str:
    value = raw_row.get(column)
    if value is None:
        return ""
    return str(value).strip()
