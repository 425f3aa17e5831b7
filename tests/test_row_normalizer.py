from __future__ import annotations

import logging

from quiz_stats.core.models import Submission
from quiz_stats.core.row_normalizer import (
    FeedColumns,
    canonical_participant_id,
    normalize_row,
    normalize_rows,
)


def _row(timestamp="2024/01/15 09:00:00", participant="E1", answer="a"):
    return {"時間戳記": timestamp, "您的員工編號": participant, "本題答案": answer}


def test_normalize_row_trims_and_upper_cases_answer():
    submission = normalize_row(_row(answer="  b \n"))

    assert submission == Submission(
        timestamp="2024/01/15 09:00:00", participant_id="E1", raw_answer="B"
    )


def test_rows_missing_required_fields_are_skipped():
    assert normalize_row(_row(timestamp="")) is None
    assert normalize_row(_row(participant="  ")) is None
    assert normalize_row(_row(answer="")) is None
    assert normalize_row({"時間戳記": "2024/01/15 09:00:00"}) is None


def test_integer_like_ids_share_one_key():
    assert canonical_participant_id("0042") == "42"
    assert canonical_participant_id(42) == "42"
    assert canonical_participant_id("42.0") == "42"
    assert canonical_participant_id(42.0) == "42"
    assert canonical_participant_id(" E7 ") == "E7"
    assert canonical_participant_id("4.5") == "4.5"
    assert canonical_participant_id(None) is None
    assert canonical_participant_id("") is None


def test_custom_columns_are_used():
    columns = FeedColumns(timestamp="Timestamp", participant_id="Employee", answer="Answer")

    submission = normalize_row(
        {"Timestamp": "2024-01-15T09:00:00", "Employee": 7, "Answer": "c"}, columns
    )

    assert submission == Submission(
        timestamp="2024-01-15T09:00:00", participant_id="7", raw_answer="C"
    )


def test_normalize_rows_keeps_order_and_logs_drop_count(caplog):
    rows = [_row(participant="E2"), _row(answer=""), _row(participant="E1")]

    with caplog.at_level(logging.WARNING):
        submissions = normalize_rows(rows)

    assert [s.participant_id for s in submissions] == ["E2", "E1"]
    assert "Skipped 1 malformed row" in caplog.text


def test_only_plain_integer_text_collapses():
    assert canonical_participant_id("1e3") == "1e3"
    assert canonical_participant_id("1000") == "1000"
    assert canonical_participant_id("007.00") == "7"
    assert canonical_participant_id("+42") == "+42"
    assert canonical_participant_id("-42") == "-42"
    assert canonical_participant_id("4_2") == "4_2"
