from __future__ import annotations

from fastapi.testclient import TestClient

from quiz_stats.core.errors import FetchError
from quiz_stats.core.quiz_manager import QuizManager
from quiz_stats.server.api_server import create_api_app

CATALOG = "index,link,ans\n2,https://feeds.test/q2,B\n1,https://feeds.test/q1,A\n"

FEEDS = {
    "https://feeds.test/q1": [
        {"時間戳記": "2024/01/15 09:00:00", "您的員工編號": "1001", "本題答案": "A"},
        {"時間戳記": "2024/01/15 09:00:03", "您的員工編號": "1002", "本題答案": "a"},
    ],
    "https://feeds.test/q2": [
        {"時間戳記": "2024/01/15 09:10:00", "您的員工編號": "1001", "本題答案": "B"},
    ],
}


def _fetch(link: str) -> list[dict[str, str]]:
    feed = FEEDS.get(link)
    if feed is None:
        raise FetchError("Failed to fetch CSV: 404 Not Found", status_code=404)
    return feed


def _client() -> TestClient:
    return TestClient(create_api_app(QuizManager(feed_fetcher=_fetch)))


def test_question_endpoints_require_catalog():
    client = _client()

    assert client.get("/question").status_code == 409
    assert client.post("/question/scores").status_code == 409
    assert client.get("/catalog").json() == {"question_count": 0, "questions": []}


def test_catalog_upload_and_navigation():
    client = _client()

    response = client.post("/catalog", json={"csv_text": CATALOG})
    assert response.status_code == 201
    assert response.json() == {"question_count": 2, "indexes": [1, 2]}

    question = client.get("/question").json()
    assert question["index"] == 1
    assert question["has_previous"] is False

    assert client.post("/question/next").json()["index"] == 2
    assert client.post("/question/previous").json()["index"] == 1
    assert client.post("/question/position", json={"position": 1}).json()["index"] == 2
    assert client.post("/question/position", json={"position": 5}).status_code == 422
    assert client.get("/question/answer").json() == {"index": 2, "answer": "B"}


def test_invalid_catalog_is_rejected():
    client = _client()

    response = client.post("/catalog", json={"csv_text": "index,link,ans\n"})

    assert response.status_code == 422
    assert client.get("/status").json()["last_error"] == "CSV file is empty."


def test_scores_and_rankings():
    client = _client()
    client.post("/catalog", json={"csv_text": CATALOG})

    assert client.get("/question/stats").json()["loaded"] is False

    scored = client.post("/question/scores").json()
    assert scored["question_index"] == 1
    assert [(s["participant_id"], s["points"]) for s in scored["scores"]] == [
        ("1001", 130),
        ("1002", 128),
    ]
    assert scored["average_score"] == 129.0
    assert scored["correct_rate"] == 100.0

    client.post("/question/next")
    client.post("/question/scores")

    rankings = client.get("/rankings").json()["rankings"]
    assert rankings[0] == {
        "rank": 1,
        "participant_id": "1001",
        "total_points": 260,
        "questions_scored": 2,
    }
    assert len(client.get("/rankings", params={"limit": 1}).json()["rankings"]) == 1
    assert client.get("/rankings", params={"limit": -1}).status_code == 422


def test_fetch_failure_maps_to_bad_gateway():
    client = _client()
    client.post("/catalog", json={"csv_text": "index,link,ans\n1,https://feeds.test/gone,A\n"})

    response = client.post("/question/scores")

    assert response.status_code == 502
    assert response.json()["detail"].startswith("Failed to process submissions:")
    assert client.get("/status").json()["is_loading"] is False


def test_template_download():
    response = _client().get("/catalog/template")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "question_template.csv" in response.headers["content-disposition"]
    assert response.text.splitlines()[0] == "index,link,ans"


def test_unexpected_scoring_failure_returns_message():
    def broken_fetch(link: str) -> list[dict[str, str]]:
        raise ValueError("sheet export changed")

    client = TestClient(create_api_app(QuizManager(feed_fetcher=broken_fetch)))
    client.post("/catalog", json={"csv_text": CATALOG})

    response = client.post("/question/scores")

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to process submissions: sheet export changed"
    assert client.get("/status").json()["is_loading"] is False


def test_catalog_export_round_trips_upload():
    client = _client()
    assert client.get("/catalog/export").status_code == 409

    client.post("/catalog", json={"csv_text": CATALOG})
    response = client.get("/catalog/export")

    assert response.status_code == 200
    assert "questions.csv" in response.headers["content-disposition"]
    assert response.text == (
        "index,link,ans\n1,https://feeds.test/q1,A\n2,https://feeds.test/q2,B\n"
    )


def test_stats_by_question_index():
    client = _client()
    client.post("/catalog", json={"csv_text": CATALOG})
    client.post("/question/scores")

    scored = client.get("/questions/1/stats").json()
    assert scored["question_index"] == 1
    assert scored["loaded"] is True
    assert client.get("/questions/2/stats").json()["loaded"] is False
    assert client.get("/questions/7/stats").status_code == 404
