"""Application entry point for the Quiz Stats service."""

from __future__ import annotations

from pathlib import Path
import sys

from quiz_stats.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from quiz_stats.core.catalog_importer import load_catalog_from_file
from quiz_stats.core.errors import QuizStatsError
from quiz_stats.core.quiz_manager import QuizManager
from quiz_stats.server.api_server import run_api_server
from quiz_stats.utils.logging_config import configure_logging


def main() -> None:
    """Initialize logging, optionally preload a catalog, and serve the API.

    Usage: ``quiz-stats [catalog.csv]``
    """
    logger = configure_logging()
    logger.info("Starting Quiz Stats…")

    quiz_manager = QuizManager()
    if len(sys.argv) > 1:
        catalog_path = Path(sys.argv[1])
        try:
            questions = quiz_manager.load_catalog(load_catalog_from_file(catalog_path))
        except (OSError, QuizStatsError) as exc:
            logger.error("Could not load catalog %s: %s", catalog_path, exc)
            sys.exit(1)
        logger.info("Preloaded %d question(s) from %s", len(questions), catalog_path)

    logger.info("API available at http://%s:%d/", DEFAULT_HOST, DEFAULT_PORT)
    run_api_server(quiz_manager=quiz_manager, host=DEFAULT_HOST, port=DEFAULT_PORT)


if __name__ == "__main__":
    main()
