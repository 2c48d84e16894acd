import json
import re
from pathlib import Path

import pytest

import zen_commit.config as config
from zen_commit.analyzer import Analyzer
from zen_commit.errors import ConfigError, InvalidPatternError


def write_config(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_load_engine_config_defaults_without_file(tmp_path: Path) -> None:
    loaded = config.load_engine_config(cwd=tmp_path)

    assert loaded == config.EngineConfig()
    assert loaded.resolved_overrides_path() == tmp_path / "data" / "overrides.json"


def test_load_engine_config_prefers_env_var(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    env_config = write_config(tmp_path / "env.json", {"match_timeout_ms": 250})
    write_config(tmp_path / ".zen-commit.json", {"match_timeout_ms": 500})
    monkeypatch.setenv("ZEN_COMMIT_CONFIG", str(env_config))

    loaded = config.load_engine_config(cwd=tmp_path)

    assert loaded.match_timeout_ms == 250


def test_load_engine_config_reads_project_file(tmp_path: Path) -> None:
    write_config(
        tmp_path / ".zen-commit.json",
        {
            "disabled_patterns": [" merge-commit ", ""],
            "overrides_path": str(tmp_path / "team-overrides.json"),
        },
    )

    loaded = config.load_engine_config(cwd=tmp_path)

    assert loaded.disabled_patterns == ["merge-commit"]
    assert loaded.resolved_overrides_path() == tmp_path / "team-overrides.json"


def test_load_engine_config_rejects_unknown_keys(tmp_path: Path) -> None:
    path = write_config(tmp_path / "config.json", {"max_size": 5})

    with pytest.raises(ConfigError) as excinfo:
        config.load_engine_config(path)

    assert str(path) in str(excinfo.value)


def test_load_engine_config_rejects_malformed_json(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{", encoding="utf-8")

    with pytest.raises(ConfigError):
        config.load_engine_config(path)


def test_load_engine_config_rejects_non_object(tmp_path: Path) -> None:
    path = write_config(tmp_path / "config.json", ["not", "an", "object"])

    with pytest.raises(ConfigError):
        config.load_engine_config(path)


def test_analyzer_config_compiles_custom_patterns() -> None:
    engine_config = config.EngineConfig.model_validate(
        {
            "include_builtin": False,
            "custom_patterns": [
                {
                    "id": "todo-marker",
                    "name": "Todo Marker",
                    "expression": r"\btodo\b",
                    "flags": "gi",
                    "severity": "warning",
                    "category": "content",
                }
            ],
            "disabled_patterns": ["merge-commit"],
            "max_message_size": 200,
        }
    )

    analyzer_config = engine_config.analyzer_config()
    pattern = analyzer_config.custom_patterns[0]

    assert pattern.multiple is True
    assert pattern.regex.flags & re.IGNORECASE
    assert analyzer_config.max_message_size == 200
    result = Analyzer(analyzer_config).analyze("TODO one, todo two")
    assert [match.offset for match in result.matches] == [0, 10]


def test_analyzer_config_rejects_invalid_expression() -> None:
    engine_config = config.EngineConfig.model_validate(
        {"custom_patterns": [{"id": "broken", "name": "Broken", "expression": "(unclosed"}]}
    )

    with pytest.raises(InvalidPatternError):
        engine_config.analyzer_config()


def test_utc_now_has_millisecond_precision() -> None:
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", config.utc_now())
