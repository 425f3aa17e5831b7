"""Service holding the ordered list of questions for the active session."""

from __future__ import annotations

from quiz_stats.core.errors import CatalogError
from quiz_stats.core.models import Question


class QuestionCatalog:
    """Stores the loaded questions in navigation (index) order."""

    def __init__(self) -> None:
        self._questions: list[Question] = []

    def load_questions(self, questions: list[Question]) -> None:
        """Replace the current catalog with ``questions``."""
        if not questions:
            raise CatalogError("empty", "Catalog must contain at least one question.")
        self._questions = sorted(questions, key=lambda q: q.index)

    def get_questions(self) -> list[Question]:
        """Return a copy of all loaded questions."""
        return list(self._questions)

    def has_questions(self) -> bool:
        return bool(self._questions)

    def get_question_count(self) -> int:
        return len(self._questions)

    def get_question_at(self, position: int) -> Question:
        if not 0 <= position < len(self._questions):
            raise IndexError(f"Question position {position} out of range")
        return self._questions[position]

    def position_of(self, index: int) -> int | None:
        return next((i for i, q in enumerate(self._questions) if q.index == index), None)

    def contains(self, question: Question) -> bool:
        return question in self._questions
