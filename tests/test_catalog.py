from __future__ import annotations

from pathlib import Path

import pytest

from quiz_stats.core.catalog_exporter import (
    build_catalog_template,
    serialize_catalog,
)
from quiz_stats.core.catalog_importer import (
    load_catalog_from_file,
    load_catalog_from_text,
    parse_catalog_rows,
)
from quiz_stats.core.errors import CatalogError, ParseError
from quiz_stats.core.models import Question
from quiz_stats.core.services.question_catalog import QuestionCatalog


def test_questions_are_sorted_by_index():
    rows = [
        {"index": "2", "link": "L2", "ans": "B"},
        {"index": "1", "link": "L1", "ans": "A"},
    ]

    questions = parse_catalog_rows(rows)

    assert [q.index for q in questions] == [1, 2]
    assert questions[0] == Question(index=1, link="L1", answer="A")


def test_values_are_trimmed_and_answers_upper_cased():
    questions = parse_catalog_rows([{"index": " 7 ", "link": " https://x.test/a ", "ans": " c "}])

    assert questions == [Question(index=7, link="https://x.test/a", answer="C")]


def test_invalid_rows_are_skipped_and_gaps_allowed():
    rows = [
        {"index": "10", "link": "L10", "ans": "A"},
        {"index": "x", "link": "L", "ans": "A"},
        {"index": "3", "link": "", "ans": "A"},
        {"index": "4", "link": "L4"},
        {"index": "5", "link": "L5", "ans": "D"},
    ]

    assert [q.index for q in parse_catalog_rows(rows)] == [5, 10]


def test_duplicate_index_keeps_first_row():
    rows = [
        {"index": "1", "link": "first", "ans": "A"},
        {"index": "1", "link": "second", "ans": "B"},
    ]

    assert parse_catalog_rows(rows) == [Question(index=1, link="first", answer="A")]


def test_empty_catalog_is_rejected():
    with pytest.raises(CatalogError) as excinfo:
        parse_catalog_rows([])

    assert excinfo.value.reason == "empty"


def test_catalog_without_valid_rows_is_rejected():
    with pytest.raises(CatalogError) as excinfo:
        parse_catalog_rows([{"index": "", "link": "L", "ans": "A"}])

    assert excinfo.value.reason == "no-valid-rows"


def test_load_from_text_and_file(tmp_path: Path):
    text = "index,link,ans\n2,L2,b\n1,L1,a\n"
    catalog_file = tmp_path / "questions.csv"
    catalog_file.write_text(text, encoding="utf-8")

    assert [q.index for q in load_catalog_from_text(text)] == [1, 2]
    assert load_catalog_from_file(catalog_file) == load_catalog_from_text(text)


def test_load_from_file_requires_csv(tmp_path: Path):
    catalog_file = tmp_path / "questions.txt"
    catalog_file.write_text("index,link,ans\n1,L1,A\n", encoding="utf-8")

    with pytest.raises(CatalogError) as excinfo:
        load_catalog_from_file(catalog_file)

    assert excinfo.value.reason == "unsupported-file"


def test_malformed_catalog_text_raises_parse_error():
    with pytest.raises(ParseError):
        load_catalog_from_text('index,link,ans\n1,"L1,A\n')


def test_template_has_header_and_one_example_row():
    template = build_catalog_template()
    lines = template.splitlines()

    assert lines[0] == "index,link,ans"
    assert len(lines) == 2
    assert len(load_catalog_from_text(template)) == 1


def test_serialized_catalog_loads_back():
    questions = [Question(1, "https://x.test/a?x=1,2", "A"), Question(4, "L4", "D")]

    assert load_catalog_from_text(serialize_catalog(questions)) == questions
    with pytest.raises(ValueError):
        serialize_catalog([])


def test_question_catalog_lookup():
    catalog = QuestionCatalog()
    assert not catalog.has_questions()

    catalog.load_questions([Question(5, "L5", "B"), Question(2, "L2", "A")])

    assert catalog.get_question_count() == 2
    assert catalog.get_question_at(0).index == 2
    assert catalog.position_of(5) == 1
    assert catalog.position_of(9) is None
    with pytest.raises(IndexError):
        catalog.get_question_at(2)
    with pytest.raises(CatalogError):
        catalog.load_questions([])
