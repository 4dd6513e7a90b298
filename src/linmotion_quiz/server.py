"""答题 JSON API（Flask），界面渲染不在此处"""
from __future__ import annotations
from flask import Flask, jsonify, request
from linmotion_quiz.config import QuizConfig
from linmotion_quiz.formatting import format_option
from linmotion_quiz.models import Question
from linmotion_quiz.pipeline import QuizSession
from linmotion_quiz.score import ScoreStore

_session: QuizSession | None = None

# 出题时不能提前下发的字段
_HIDDEN_FIELDS = ("correctAnswer", "correctValue", "explanation", "explanationBase")


def _create_app() -> Flask:
    app = Flask(__name__)
    app.config["JSON_AS_ASCII"] = False
    app.json.ensure_ascii = False
    return app


app = _create_app()


def init_session(config: QuizConfig, store: ScoreStore | None = None) -> QuizSession:
    global _session
    _session = QuizSession(config, store)
    return _session


def _require_session() -> QuizSession:
    if _session is None:
        raise RuntimeError("答题会话未初始化，请先调用 init_session")
    return _session


def _score_payload(session: QuizSession) -> dict:
    return {
        "correctCount": session.state.correct_count,
        "currentStreak": session.state.current_streak,
    }


def _public_question(q: Question) -> dict:
    data = q.to_dict()
    for key in _HIDDEN_FIELDS:
        data.pop(key, None)
    data["options"] = [
        {"index": i, "label": format_option(opt, q)}
        for i, opt in enumerate(q.options)
    ]
    data["token"] = q.sequence
    return data


@app.get("/api/next")
def api_next():
    session = _require_session()
    return jsonify(_public_question(session.next_question()))


@app.post("/api/answer")
def api_answer():
    session = _require_session()
    payload = request.get_json(silent=True) or {}
    index = payload.get("index")
    if not isinstance(index, int) or isinstance(index, bool):
        return jsonify({"error": "index 必须是整数"}), 400
    token = payload.get("token")
    if session.current is None or (token is not None and token != session.current.sequence):
        return jsonify({"error": "题目已过期，请重新获取"}), 409
    if session.answered:
        return jsonify({"error": "本题已作答"}), 409
    try:
        is_correct = session.answer(index)
    except IndexError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify({
        "correct": is_correct,
        "correctIndex": session.current.correct_index,
        "explanation": session.current.explanation,
        "score": _score_payload(session),
    })


@app.get("/api/score")
def api_score():
    return jsonify(_score_payload(_require_session()))


def start_server(config: QuizConfig) -> None:
    store = ScoreStore(config.stats_path, config.storage_key)
    init_session(config, store)
    url = f"http://{config.host}:{config.port}"
    print(f"[INFO] 答题 API 已启动: {url}")
    print("[INFO] Ctrl+C 退出")
    app.run(host=config.host, port=config.port, debug=False, use_reloader=False)
