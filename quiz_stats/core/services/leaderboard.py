"""Cumulative leaderboard across every scored question."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from quiz_stats.core.models import QuestionStats, Ranking


@dataclass(slots=True)
class _Total:
    """Mutable per-participant accumulator used internally."""

    points: int = 0
    questions_scored: int = 0


def compute_rankings(stats_by_index: Mapping[int, QuestionStats]) -> list[Ranking]:
    """Sum each participant's points over all questions, highest total first.

    Ties are ordered by participant id so the result never depends on the
    order questions were scored in. Tied participants share the same rank
    (1, 1, 3). The mapping is only read.
    """
    totals: dict[str, _Total] = {}
    for stats in stats_by_index.values():
        for score in stats.scores:
            total = totals.get(score.participant_id)
            if total is None:
                total = _Total()
                totals[score.participant_id] = total
            total.points += score.points
            total.questions_scored += 1

    ordered = sorted(totals.items(), key=lambda item: (-item[1].points, item[0]))

    rankings: list[Ranking] = []
    previous_points: int | None = None
    current_rank = 0
    for position, (participant_id, total) in enumerate(ordered, start=1):
        if total.points != previous_points:
            current_rank = position
            previous_points = total.points
        rankings.append(
            Ranking(
                participant_id=participant_id,
                total_points=total.points,
                questions_scored=total.questions_scored,
                rank=current_rank,
            )
        )
    return rankings


def top_rankings(rankings: list[Ranking], limit: int) -> list[Ranking]:
    """Return the first ``limit`` rows of an already sorted leaderboard."""
    if limit < 0:
        raise ValueError("Limit must not be negative.")
    return rankings[:limit]
