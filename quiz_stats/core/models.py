"""Domain models for quiz scoring."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Question:
    """One catalog entry: where its answers are collected and the expected answer."""

    index: int
    link: str
    answer: str  # Trimmed and upper-cased


@dataclass(frozen=True, slots=True)
class Submission:
    """A validated response sheet row. Only lives for one scoring pass."""

    timestamp: str
    participant_id: str
    raw_answer: str


@dataclass(frozen=True, slots=True)
class Score:
    """Points credited to a participant for one question."""

    participant_id: str
    points: int
    timestamp: str


@dataclass(slots=True)
class QuestionStats:
    """Scoring result for a single question."""

    scores: list[Score] = field(default_factory=list)
    total_submissions: int = 0
    correct_submissions: int = 0
    average_score: float = 0.0
    loaded: bool = False

    @classmethod
    def not_loaded(cls) -> QuestionStats:
        return cls()

    @property
    def correct_rate(self) -> float:
        """Percentage of submissions that were credited."""
        if self.total_submissions <= 0:
            return 0.0
        return (self.correct_submissions / self.total_submissions) * 100


@dataclass(frozen=True, slots=True)
class Ranking:
    """Cumulative leaderboard row derived from every scored question."""

    participant_id: str
    total_points: int
    questions_scored: int
    rank: int
