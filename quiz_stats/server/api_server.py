"""FastAPI server exposing catalog upload, scoring and leaderboard endpoints."""

from __future__ import annotations

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel
import uvicorn

from quiz_stats.constants.about import APP_ABOUT_TEXT, APP_NAME, APP_VERSION
from quiz_stats.constants.catalog_constants import EXPORT_FILE_NAME, TEMPLATE_FILE_NAME
from quiz_stats.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from quiz_stats.core.catalog_exporter import build_catalog_template, serialize_catalog
from quiz_stats.core.errors import (
    CatalogError,
    EmptyFeedError,
    FetchError,
    ParseError,
    QuizStatsError,
    ScoringFailedError,
    ScoringInProgressError,
    StaleResultError,
)
from quiz_stats.core.models import Question, QuestionStats, Ranking
from quiz_stats.core.quiz_manager import QuizManager


class CatalogPayload(BaseModel):
    """Payload schema for catalog uploads."""

    csv_text: str


class PositionPayload(BaseModel):
    """Payload schema for jumping to a question."""

    position: int


def _status_for(exc: QuizStatsError) -> int:
    if isinstance(exc, FetchError):
        return 502
    if isinstance(exc, (ParseError, EmptyFeedError, CatalogError)):
        return 422
    if isinstance(exc, (ScoringInProgressError, StaleResultError)):
        return 409
    if isinstance(exc, ScoringFailedError):
        return 500
    return 400


def _question_payload(question: Question, position: int, count: int) -> dict[str, object]:
    return {
        "index": question.index,
        "link": question.link,
        "position": position,
        "question_count": count,
        "has_previous": position > 0,
        "has_next": position < count - 1,
    }


def _stats_payload(index: int | None, stats: QuestionStats) -> dict[str, object]:
    return {
        "question_index": index,
        "loaded": stats.loaded,
        "total_submissions": stats.total_submissions,
        "correct_submissions": stats.correct_submissions,
        "average_score": stats.average_score,
        "correct_rate": stats.correct_rate,
        "scores": [
            {
                "rank": rank,
                "participant_id": score.participant_id,
                "points": score.points,
                "timestamp": score.timestamp,
            }
            for rank, score in enumerate(stats.scores, start=1)
        ],
    }


def _ranking_payload(ranking: Ranking) -> dict[str, object]:
    return {
        "rank": ranking.rank,
        "participant_id": ranking.participant_id,
        "total_points": ranking.total_points,
        "questions_scored": ranking.questions_scored,
    }


def _get_quiz_manager_dependency(quiz_manager: QuizManager):
    def dependency() -> QuizManager:
        return quiz_manager

    return dependency


def create_api_app(quiz_manager: QuizManager) -> FastAPI:
    """Create a FastAPI application wired to the provided quiz manager."""
    app = FastAPI(title=f"{APP_NAME} API", description=APP_ABOUT_TEXT, version=APP_VERSION)
    quiz_manager_dep = _get_quiz_manager_dependency(quiz_manager)

    def require_question(manager: QuizManager) -> Question:
        question = manager.get_current_question()
        if question is None:
            raise HTTPException(status_code=409, detail="Please upload a question list first.")
        return question

    @app.post("/catalog", status_code=201)
    def upload_catalog(
        payload: CatalogPayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        try:
            questions = manager.load_catalog_from_text(payload.csv_text)
        except QuizStatsError as exc:
            raise HTTPException(status_code=_status_for(exc), detail=str(exc)) from exc
        return {
            "question_count": len(questions),
            "indexes": [question.index for question in questions],
        }

    @app.get("/catalog")
    def get_catalog(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        questions = manager.get_loaded_questions()
        return {
            "question_count": len(questions),
            "questions": [{"index": q.index, "link": q.link} for q in questions],
        }

    @app.get("/catalog/template", response_class=PlainTextResponse)
    def download_template() -> PlainTextResponse:
        return PlainTextResponse(
            build_catalog_template(),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{TEMPLATE_FILE_NAME}"'},
        )

    @app.get("/catalog/export", response_class=PlainTextResponse)
    def export_catalog(manager: QuizManager = Depends(quiz_manager_dep)) -> PlainTextResponse:
        questions = manager.get_loaded_questions()
        if not questions:
            raise HTTPException(status_code=409, detail="Please upload a question list first.")
        return PlainTextResponse(
            serialize_catalog(questions),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILE_NAME}"'},
        )

    @app.get("/question")
    def get_question(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        question = require_question(manager)
        return _question_payload(
            question, manager.get_current_position(), manager.get_question_count()
        )

    @app.post("/question/position")
    def set_position(
        payload: PositionPayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        require_question(manager)
        try:
            question = manager.set_current_position(payload.position)
        except IndexError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return _question_payload(question, payload.position, manager.get_question_count())

    @app.post("/question/next")
    def next_question(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        require_question(manager)
        question = manager.move_to_next_question()
        return _question_payload(
            question, manager.get_current_position(), manager.get_question_count()
        )

    @app.post("/question/previous")
    def previous_question(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        require_question(manager)
        question = manager.move_to_previous_question()
        return _question_payload(
            question, manager.get_current_position(), manager.get_question_count()
        )

    @app.get("/question/answer")
    def get_answer(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        question = require_question(manager)
        return {"index": question.index, "answer": question.answer}

    @app.post("/question/scores")
    def calculate_scores(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        question = require_question(manager)
        try:
            stats = manager.calculate_current_question_scores()
        except QuizStatsError as exc:
            raise HTTPException(
                status_code=_status_for(exc), detail=manager.get_last_error() or str(exc)
            ) from exc
        except RuntimeError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return _stats_payload(question.index, stats)

    @app.get("/question/stats")
    def get_stats(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        question = manager.get_current_question()
        index = question.index if question is not None else None
        return _stats_payload(index, manager.get_current_stats())

    @app.get("/questions/{index}/stats")
    def get_stats_for_index(
        index: int,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        if manager.get_position_of(index) is None:
            raise HTTPException(
                status_code=404, detail=f"Question {index} is not in the question list."
            )
        return _stats_payload(index, manager.get_stats_for_index(index))

    @app.get("/rankings")
    def get_rankings(
        limit: int | None = Query(default=None, ge=0),
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        rankings = manager.get_rankings(limit)
        return {"rankings": [_ranking_payload(ranking) for ranking in rankings]}

    @app.get("/status")
    def get_status(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        return {
            "is_loading": manager.is_loading(),
            "last_error": manager.get_last_error(),
            "catalog_loaded": manager.has_loaded_catalog(),
        }

    return app


def run_api_server(
    quiz_manager: QuizManager,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> None:
    """Serve the API in the calling thread until interrupted."""
    app = create_api_app(quiz_manager)
    uvicorn.run(app, host=host, port=port, log_level="info")
