"""Download response sheets and turn CSV text into header-keyed rows.

Response sheets are usually published spreadsheet exports. The first non-blank
row is the header; each following row becomes a ``dict`` keyed by the trimmed
header cells. Rows whose cells are all blank are skipped, as are short rows'
missing trailing fields (those keys are simply absent).
"""

from __future__ import annotations

import csv
import io
import logging

import requests

from quiz_stats.core.errors import FetchError, ParseError

logger = logging.getLogger(__name__)

RawRow = dict[str, str]


def fetch_feed_rows(
    link: str,
    *,
    session: requests.Session | None = None,
    timeout: float | None = None,
) -> list[RawRow]:
    """Download the CSV behind ``link`` and return its rows.

    No retries are attempted and, unless ``timeout`` is given, no deadline is
    enforced; callers decide whether to try again.
    """
    get = session.get if session is not None else requests.get
    logger.info("Fetching submission feed from %s", link)
    try:
        response = get(link, timeout=timeout)
    except requests.RequestException as exc:
        raise FetchError(f"Failed to fetch CSV: {exc}") from exc

    if not response.ok:
        raise FetchError(
            f"Failed to fetch CSV: {response.status_code} {response.reason or ''}".rstrip(),
            status_code=response.status_code,
        )

    try:
        text = response.content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ParseError(f"Failed to parse CSV data: response is not UTF-8 ({exc.reason})") from exc

    rows = parse_csv_text(text)
    logger.info("Fetched %d row(s) from %s", len(rows), link)
    return rows


def parse_csv_text(text: str) -> list[RawRow]:
    if text.startswith("\ufeff"):
        text = text[1:]

    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    header: list[str] | None = None
    rows: list[RawRow] = []
    try:
        for cells in reader:
            if not any(cell.strip() for cell in cells):
                continue
            if header is None:
                header = [cell.strip() for cell in cells]
                continue
            rows.append(dict(zip(header, cells)))
    except csv.Error as exc:
        raise ParseError(f"Failed to parse CSV data (line {reader.line_num}): {exc}") from exc
    return rows
