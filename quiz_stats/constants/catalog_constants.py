"""Catalog (question list) file format constants."""

INDEX_COLUMN: str = "index"
LINK_COLUMN: str = "link"
ANSWER_COLUMN: str = "ans"
CATALOG_COLUMNS: tuple[str, str, str] = (INDEX_COLUMN, LINK_COLUMN, ANSWER_COLUMN)

TEMPLATE_FILE_NAME: str = "question_template.csv"
EXPORT_FILE_NAME: str = "questions.csv"
TEMPLATE_EXAMPLE_ROW: tuple[str, str, str] = (
    "1",
    "https://docs.google.com/spreadsheets/d/e/EXAMPLE/pub?output=csv",
    "A",
)
CATALOG_FILE_SUFFIX: str = ".csv"
