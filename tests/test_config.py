import pytest

from linmotion_quiz.config import ConfigError, QuizConfig, load_config


def test_missing_file_gives_defaults(tmp_path):
    cfg = load_config(tmp_path / "missing.yaml")
    assert cfg == QuizConfig()
    assert cfg.count == 20
    assert cfg.formats == ["json"]
    assert cfg.storage_key == "physics-quiz-stats"


def test_load_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "seed: 7\n"
        "count: 5\n"
        "test_mode: true\n"
        "families: [uniform, dual]\n"
        "formats: [json, xlsx]\n",
        encoding="utf-8",
    )
    cfg = load_config(path)
    assert cfg.seed == 7
    assert cfg.count == 5
    assert cfg.test_mode is True
    assert cfg.families == ["uniform", "dual"]
    assert cfg.formats == ["json", "xlsx"]


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == QuizConfig()


@pytest.mark.parametrize("text", [
    "colour: red\n",
    "families: [circular]\n",
    "answer_types: [mass]\n",
    "count: 0\n",
    "seed: abc\n",
    "- just\n- a list\n",
    "count: [1\n",
])
def test_invalid_config(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


def test_merged_overrides():
    base = QuizConfig(seed=1, count=10, families=["uniform"])
    cfg = base.merged(count=3, seed=None, families=(), builders=("vt-area",))
    assert cfg.count == 3
    assert cfg.seed == 1
    assert cfg.families == ["uniform"]
    assert cfg.builders == ["vt-area"]
    # 原配置不变
    assert base.count == 10


def test_merged_rejects_unknown_key():
    with pytest.raises(ConfigError):
        QuizConfig().merged(colour="red")


def test_merged_validates():
    with pytest.raises(ConfigError):
        QuizConfig().merged(families=("circular",))
