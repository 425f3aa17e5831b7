"""Utilities for writing catalogs in the CSV format used for uploads."""

from __future__ import annotations

import csv
import io

from quiz_stats.constants.catalog_constants import CATALOG_COLUMNS, TEMPLATE_EXAMPLE_ROW
from quiz_stats.core.models import Question


def build_catalog_template() -> str:
    """Return a catalog with the header row and one example question."""
    return _write_rows([TEMPLATE_EXAMPLE_ROW])


def serialize_catalog(questions: list[Question]) -> str:
    """Serialize loaded questions so the file can be uploaded again."""

    if not questions:
        raise ValueError("Cannot export an empty catalog.")
    return _write_rows([(str(q.index), q.link, q.answer) for q in questions])


def _write_rows(rows: list[tuple[str, str, str]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CATALOG_COLUMNS)
    writer.writerows(rows)
    return buffer.getvalue()
