import pytest

from linmotion_quiz import server
from linmotion_quiz.config import QuizConfig
from linmotion_quiz.score import ScoreStore


@pytest.fixture
def client(tmp_path):
    server.init_session(QuizConfig(seed=1, test_mode=True), ScoreStore(tmp_path / "stats.json"))
    return server.app.test_client()


def test_next_hides_answer(client):
    data = client.get("/api/next").get_json()
    assert data["builder"] == "table-rate"
    assert data["token"] == 1
    for key in ("correctAnswer", "correctValue", "explanation", "explanationBase"):
        assert key not in data
    assert all(set(opt) == {"index", "label"} for opt in data["options"])


def test_answer_flow(client, tmp_path):
    data = client.get("/api/next").get_json()
    correct_index = server._session.current.correct_index
    resp = client.post("/api/answer", json={"index": correct_index, "token": data["token"]})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["correct"] is True
    assert body["correctIndex"] == correct_index
    assert body["explanation"]
    assert body["score"] == {"correctCount": 1, "currentStreak": 1}
    assert ScoreStore(tmp_path / "stats.json").load() == (1, 1)

    # 同一题不能再答
    resp = client.post("/api/answer", json={"index": correct_index})
    assert resp.status_code == 409

    assert client.get("/api/score").get_json() == {"correctCount": 1, "currentStreak": 1}


def test_wrong_answer_resets_streak(client):
    client.get("/api/next")
    q = server._session.current
    client.post("/api/answer", json={"index": q.correct_index})
    client.get("/api/next")
    q = server._session.current
    wrong = next(i for i, o in enumerate(q.options) if not o.is_correct)
    body = client.post("/api/answer", json={"index": wrong}).get_json()
    assert body["correct"] is False
    assert body["score"] == {"correctCount": 1, "currentStreak": 0}


def test_answer_before_question(client):
    assert client.post("/api/answer", json={"index": 0}).status_code == 409


def test_bad_index(client):
    client.get("/api/next")
    assert client.post("/api/answer", json={"index": "A"}).status_code == 400
    assert client.post("/api/answer", json={"index": True}).status_code == 400
    assert client.post("/api/answer", json={"index": 99}).status_code == 400
    assert client.post("/api/answer", data="not json").status_code == 400
    # 出错后本题仍可作答
    assert client.post("/api/answer", json={"index": 0}).status_code == 200


def test_stale_token(client):
    client.get("/api/next")
    client.get("/api/next")
    assert client.post("/api/answer", json={"index": 0, "token": 1}).status_code == 409
    assert client.post("/api/answer", json={"index": 0, "token": 2}).status_code == 200
