"""Service that turns one question's submissions into ranked, scored results."""

from __future__ import annotations

from collections.abc import Sequence
import logging

from quiz_stats.constants.scoring_constants import (
    FIRST_PLACE_POINTS,
    MINIMUM_POINTS,
    POINTS_DECAY_PER_RANK,
)
from quiz_stats.core.errors import EmptyFeedError
from quiz_stats.core.models import Question, QuestionStats, Score, Submission
from quiz_stats.core.timestamps import submission_sort_key

logger = logging.getLogger(__name__)


def points_for_rank(rank: int) -> int:
    """Points for the ``rank``-th (0-based) earliest correct participant."""
    if rank < 0:
        raise ValueError("Rank must not be negative.")
    return max(FIRST_PLACE_POINTS - POINTS_DECAY_PER_RANK * rank, MINIMUM_POINTS)


def score_question(question: Question, submissions: Sequence[Submission]) -> QuestionStats:
    """Score ``submissions`` against ``question``.

    Only exact matches of the normalized answer count. Correct submissions are
    ordered by submission time and only each participant's earliest one is
    credited, so repeated attempts never improve a rank.
    """
    if not submissions:
        raise EmptyFeedError("No valid submissions found in the response.")

    correct = [s for s in submissions if s.raw_answer == question.answer]
    correct.sort(key=lambda s: submission_sort_key(s.timestamp))

    seen_participants: set[str] = set()
    first_correct: list[Submission] = []
    for submission in correct:
        if submission.participant_id in seen_participants:
            continue
        seen_participants.add(submission.participant_id)
        first_correct.append(submission)

    scores = [
        Score(
            participant_id=submission.participant_id,
            points=points_for_rank(rank),
            timestamp=submission.timestamp,
        )
        for rank, submission in enumerate(first_correct)
    ]
    average = sum(score.points for score in scores) / len(scores) if scores else 0.0

    stats = QuestionStats(
        scores=scores,
        total_submissions=len(submissions),
        correct_submissions=len(scores),
        average_score=average,
        loaded=True,
    )
    logger.info(
        "Scored question %d: %d submission(s), %d credited, average %.1f",
        question.index,
        stats.total_submissions,
        stats.correct_submissions,
        stats.average_score,
    )
    return stats
