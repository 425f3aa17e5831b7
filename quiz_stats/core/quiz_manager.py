"""Business logic shared by the API: catalog upload, navigation, scoring and rankings."""

from __future__ import annotations

from collections.abc import Callable
import logging
from threading import Lock

from quiz_stats.constants.network_constants import FEED_TIMEOUT_SECONDS
from quiz_stats.core.catalog_importer import load_catalog_from_text
from quiz_stats.core.errors import (
    QuizStatsError,
    ScoringFailedError,
    ScoringInProgressError,
    StaleResultError,
)
from quiz_stats.core.feed_loader import RawRow, fetch_feed_rows
from quiz_stats.core.models import Question, QuestionStats, Ranking
from quiz_stats.core.row_normalizer import DEFAULT_FEED_COLUMNS, FeedColumns, normalize_rows
from quiz_stats.core.services.leaderboard import compute_rankings, top_rankings
from quiz_stats.core.services.scoring_engine import score_question
from quiz_stats.core.services.scoring_session import ScoringSession

logger = logging.getLogger(__name__)

FeedFetcher = Callable[[str], list[RawRow]]


def _default_fetcher(link: str) -> list[RawRow]:
    return fetch_feed_rows(link, timeout=FEED_TIMEOUT_SECONDS)


class QuizManager:
    """Facade over the scoring session, feed loader, scoring engine and leaderboard.

    The lock only guards session state; the network fetch runs outside it.
    Failures are recorded in ``last_error`` and re-raised so callers can map
    them to their own responses.
    """

    def __init__(
        self,
        feed_fetcher: FeedFetcher | None = None,
        feed_columns: FeedColumns = DEFAULT_FEED_COLUMNS,
    ) -> None:
        self._lock = Lock()
        self._session = ScoringSession()
        self._fetch_feed = feed_fetcher or _default_fetcher
        self._feed_columns = feed_columns
        self._is_loading: bool = False
        self._last_error: str | None = None

    # --- Catalog ---

    def load_catalog_from_text(self, text: str) -> list[Question]:
        """Replace the catalog. On failure the previous catalog and results stay."""
        try:
            questions = load_catalog_from_text(text)
        except QuizStatsError as exc:
            with self._lock:
                self._last_error = str(exc)
            logger.warning("Catalog upload rejected: %s", exc)
            raise
        return self.load_catalog(questions)

    def load_catalog(self, questions: list[Question]) -> list[Question]:
        """Replace the catalog, reset to the first question and drop all stats."""
        with self._lock:
            self._session.load_catalog(questions)
            self._last_error = None
            return self._session.get_questions()

    def get_loaded_questions(self) -> list[Question]:
        with self._lock:
            return self._session.get_questions()

    def has_loaded_catalog(self) -> bool:
        with self._lock:
            return self._session.has_questions()

    def get_question_count(self) -> int:
        with self._lock:
            return self._session.get_question_count()

    # --- Navigation ---

    def get_current_question(self) -> Question | None:
        with self._lock:
            return self._session.current_question()

    def get_current_position(self) -> int:
        with self._lock:
            return self._session.get_position()

    def get_position_of(self, index: int) -> int | None:
        with self._lock:
            return self._session.position_of(index)

    def set_current_position(self, position: int) -> Question:
        with self._lock:
            return self._session.set_position(position)

    def move_to_next_question(self) -> Question | None:
        with self._lock:
            return self._session.move_next()

    def move_to_previous_question(self) -> Question | None:
        with self._lock:
            return self._session.move_previous()

    # --- Scoring ---

    def calculate_current_question_scores(self) -> QuestionStats:
        """Fetch, normalize and score the current question's feed.

        The question's previous stats are kept when anything fails.
        """
        with self._lock:
            if self._is_loading:
                raise ScoringInProgressError("Scores are already being calculated.")
            question = self._session.current_question()
            if question is None:
                self._last_error = "No question selected."
                raise RuntimeError(self._last_error)
            generation = self._session.get_generation()
            self._is_loading = True
            self._last_error = None

        try:
            raw_rows = self._fetch_feed(question.link)
            submissions = normalize_rows(raw_rows, self._feed_columns)
            stats = score_question(question, submissions)
            with self._lock:
                if not self._session.record_stats(question, stats, generation):
                    raise StaleResultError(
                        "The question list changed while scores were being calculated."
                    )
            return stats
        except QuizStatsError as exc:
            message = f"Failed to process submissions: {exc}"
            logger.warning("Question %d: %s", question.index, message)
            with self._lock:
                self._last_error = message
            raise
        except Exception as exc:
            message = f"Failed to process submissions: {exc}"
            logger.exception("Question %d: unexpected scoring failure", question.index)
            with self._lock:
                self._last_error = message
            raise ScoringFailedError(str(exc)) from exc
        finally:
            with self._lock:
                self._is_loading = False

    def get_current_stats(self) -> QuestionStats:
        with self._lock:
            question = self._session.current_question()
            if question is None:
                return QuestionStats.not_loaded()
            return self._session.stats_for(question.index)

    def get_stats_for_index(self, index: int) -> QuestionStats:
        with self._lock:
            return self._session.stats_for(index)

    # --- Rankings ---

    def get_rankings(self, limit: int | None = None) -> list[Ranking]:
        with self._lock:
            snapshot = self._session.stats_snapshot()
        rankings = compute_rankings(snapshot)
        if limit is None:
            return rankings
        return top_rankings(rankings, limit)

    # --- Status ---

    def is_loading(self) -> bool:
        with self._lock:
            return self._is_loading

    def get_last_error(self) -> str | None:
        with self._lock:
            return self._last_error
