"""Exceptions raised while loading catalogs and scoring submission feeds."""

from __future__ import annotations


class QuizStatsError(Exception):
    """Base class for errors that are reported back to the quiz host."""


class FetchError(QuizStatsError):
    """Raised when a submission feed cannot be downloaded."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseError(QuizStatsError):
    """Raised when tabular text cannot be parsed."""


class EmptyFeedError(QuizStatsError):
    """Raised when a feed holds no usable submissions (usually a wrong link)."""


class CatalogError(QuizStatsError):
    """Raised when an uploaded question list cannot be used."""

    def __init__(self, reason: str, message: str) -> None:
        super().__init__(message)
        self.reason = reason


class ScoringInProgressError(QuizStatsError):
    """Raised when scores are requested while another calculation is running."""


class StaleResultError(QuizStatsError):
    """Raised when a scoring result arrives after the catalog it belongs to was replaced."""


class ScoringFailedError(QuizStatsError):
    """Raised when a scoring pass fails for a reason not covered above."""
