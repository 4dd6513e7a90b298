import json

import pytest

from linmotion_quiz.score import STATS_STORAGE_KEY, ScoreSnapshot, ScoreStore


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")


def test_missing_file_is_zero(tmp_path):
    assert ScoreStore(tmp_path / "none.json").load() == (0, 0)


def test_save_and_load(tmp_path):
    store = ScoreStore(tmp_path / "stats.json")
    store.save(4, 2)
    assert store.load() == (4, 2)
    raw = json.loads((tmp_path / "stats.json").read_text(encoding="utf-8"))
    assert raw == {STATS_STORAGE_KEY: {"correctCount": 4, "currentStreak": 2}}


def test_save_creates_parent_dir(tmp_path):
    store = ScoreStore(tmp_path / "nested" / "dir" / "stats.json")
    store.save(1, 1)
    assert store.load() == (1, 1)


def test_corrupt_file_is_zero(tmp_path):
    path = tmp_path / "stats.json"
    path.write_text("{not json", encoding="utf-8")
    assert ScoreStore(path).load() == (0, 0)


@pytest.mark.parametrize("payload", [
    {"correctCount": "3", "currentStreak": 1},
    {"correctCount": 3},
    {"correctCount": True, "currentStreak": 0},
    {"correctCount": -1, "currentStreak": 0},
    {"correctCount": 2.5, "currentStreak": 0},
    [3, 1],
    None,
])
def test_invalid_payload_is_zero(tmp_path, payload):
    path = tmp_path / "stats.json"
    _write(path, {STATS_STORAGE_KEY: payload})
    assert ScoreStore(path).load() == (0, 0)


def test_top_level_not_object(tmp_path):
    path = tmp_path / "stats.json"
    _write(path, [1, 2, 3])
    assert ScoreStore(path).load() == (0, 0)


def test_other_keys_preserved(tmp_path):
    path = tmp_path / "stats.json"
    _write(path, {"theme": "dark"})
    store = ScoreStore(path)
    store.save(2, 1)
    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw["theme"] == "dark"
    store.clear()
    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw == {"theme": "dark"}
    assert store.load() == (0, 0)


def test_custom_key(tmp_path):
    path = tmp_path / "stats.json"
    ScoreStore(path, key="a").save(1, 1)
    ScoreStore(path, key="b").save(5, 0)
    assert ScoreStore(path, key="a").load() == (1, 1)
    assert ScoreStore(path, key="b").load() == (5, 0)


def test_no_temp_files_left(tmp_path):
    store = ScoreStore(tmp_path / "stats.json")
    for i in range(3):
        store.save(i, i)
    assert [p.name for p in tmp_path.iterdir()] == ["stats.json"]


def test_snapshot_payload():
    snap = ScoreSnapshot(3, 1)
    assert snap.to_payload() == {"correctCount": 3, "currentStreak": 1}
    assert ScoreSnapshot.from_payload(snap.to_payload()) == snap
    with pytest.raises(ValueError):
        ScoreSnapshot.from_payload({"correctCount": 3, "currentStreak": False})
