"""Service for the state of one scoring session: catalog, position and results."""

from __future__ import annotations

import logging

from quiz_stats.core.models import Question, QuestionStats
from quiz_stats.core.services.question_catalog import QuestionCatalog

logger = logging.getLogger(__name__)


class ScoringSession:
    """Owns the catalog, the current question position and per-question stats.

    Stats are keyed by ``Question.index``. Every catalog load bumps the
    generation counter; results computed for an older generation are refused
    by ``record_stats``.
    """

    def __init__(self) -> None:
        self._catalog = QuestionCatalog()
        self._position: int = 0
        self._stats: dict[int, QuestionStats] = {}
        self._generation: int = 0

    # --- Catalog ---

    def load_catalog(self, questions: list[Question]) -> None:
        self._catalog.load_questions(questions)
        self._position = 0
        self._stats = {}
        self._generation += 1
        logger.info(
            "Loaded catalog with %d question(s) (generation %d)",
            self._catalog.get_question_count(),
            self._generation,
        )

    def get_questions(self) -> list[Question]:
        return self._catalog.get_questions()

    def has_questions(self) -> bool:
        return self._catalog.has_questions()

    def get_question_count(self) -> int:
        return self._catalog.get_question_count()

    def get_generation(self) -> int:
        return self._generation

    # --- Navigation ---

    def get_position(self) -> int:
        return self._position

    def position_of(self, index: int) -> int | None:
        return self._catalog.position_of(index)

    def set_position(self, position: int) -> Question:
        question = self._catalog.get_question_at(position)
        self._position = position
        return question

    def move_next(self) -> Question | None:
        if not self._catalog.has_questions():
            return None
        self._position = min(self._position + 1, self._catalog.get_question_count() - 1)
        return self.current_question()

    def move_previous(self) -> Question | None:
        if not self._catalog.has_questions():
            return None
        self._position = max(self._position - 1, 0)
        return self.current_question()

    def current_question(self) -> Question | None:
        if not self._catalog.has_questions():
            return None
        return self._catalog.get_question_at(self._position)

    # --- Results ---

    def record_stats(self, question: Question, stats: QuestionStats, generation: int) -> bool:
        """Store ``stats`` for ``question``. Returns False if the result is stale."""
        if generation != self._generation or not self._catalog.contains(question):
            logger.warning(
                "Discarding stale result for question %d (generation %d, current %d)",
                question.index,
                generation,
                self._generation,
            )
            return False
        self._stats[question.index] = stats
        return True

    def stats_for(self, index: int) -> QuestionStats:
        stats = self._stats.get(index)
        return stats if stats is not None else QuestionStats.not_loaded()

    def stats_snapshot(self) -> dict[int, QuestionStats]:
        return dict(self._stats)
