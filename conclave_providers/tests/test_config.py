"""Configuration layering tests: defaults, file, .env, environment, overrides."""

from __future__ import annotations

import json

import pytest
import yaml

from conclave_providers.config import ConfigError, example_config, get_provider_config, load_config, load_dotenv, parse_bool

BUILTIN = {"claude", "gemini", "qwen", "codex", "opencode", "mock"}


@pytest.fixture()
def no_dotenv(tmp_path):
    return tmp_path / "absent.env"


def _write_yaml(path, data) -> str:
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return str(path)


def test_defaults_only(clean_env, no_dotenv):
    cfg = load_config(env={}, dotenv_path=no_dotenv)
    assert set(cfg) == BUILTIN
    claude = cfg["claude"]
    assert claude.command == "claude"
    assert claude.args == ("--print",)
    assert claude.default_model == "sonnet-4.5"
    assert claude.timeout_seconds == 300
    assert cfg["mock"].timeout_seconds == 60
    assert all(c.enabled for c in cfg.values())


def test_file_layer_merges_and_adds_custom_providers(tmp_path, no_dotenv):
    path = _write_yaml(
        tmp_path / "config.yaml",
        {
            "providers": {
                "claude": {"timeout": "5m", "model": "opus-4.5"},
                "gemini": {"enabled": False},
                "my-tool": {"command": "/opt/bin/my-tool", "args": ["--quiet"]},
            }
        },
    )
    cfg = load_config(path, env={}, dotenv_path=no_dotenv)
    assert cfg["claude"].default_model == "opus-4.5"
    assert cfg["claude"].timeout_seconds == 300
    assert cfg["claude"].args == ("--print",)
    assert cfg["gemini"].enabled is False
    assert cfg["my-tool"].command == "/opt/bin/my-tool"
    assert cfg["my-tool"].args == ("--quiet",)
    assert cfg["my-tool"].timeout_seconds == 300


def test_json_config_file(tmp_path, no_dotenv):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"providers": {"qwen": {"timeout_seconds": 45}}}), encoding="utf-8")
    assert load_config(path, env={}, dotenv_path=no_dotenv)["qwen"].timeout_seconds == 45


def test_config_file_from_env_variable(tmp_path, no_dotenv):
    path = _write_yaml(tmp_path / "c.yaml", {"providers": {"codex": {"model": "gpt-5.2"}}})
    cfg = load_config(env={"CONCLAVE_CONFIG_FILE": path}, dotenv_path=no_dotenv)
    assert cfg["codex"].default_model == "gpt-5.2"


def test_environment_overrides(clean_env, no_dotenv):
    env = {
        "PROVIDER_CLAUDE_MODEL": "haiku-4.5",
        "PROVIDER_CLAUDE_COMMAND": "/usr/local/bin/claude",
        "PROVIDER_GEMINI_ENABLED": "false",
        "PROVIDER_TIMEOUT": "90s",
        "PROVIDER_QWEN_TIMEOUT": "10",
    }
    cfg = load_config(env=env, dotenv_path=no_dotenv)
    assert cfg["claude"].default_model == "haiku-4.5"
    assert cfg["claude"].command == "/usr/local/bin/claude"
    assert cfg["gemini"].enabled is False
    assert cfg["claude"].timeout_seconds == 90
    assert cfg["mock"].timeout_seconds == 90
    assert cfg["qwen"].timeout_seconds == 10


def test_hyphenated_provider_env_key(tmp_path, no_dotenv):
    path = _write_yaml(tmp_path / "c.yaml", {"providers": {"my-tool": {"command": "a"}}})
    cfg = load_config(path, env={"PROVIDER_MY_TOOL_COMMAND": "b"}, dotenv_path=no_dotenv)
    assert cfg["my-tool"].command == "b"


def test_invalid_enabled_value_is_ignored(clean_env, no_dotenv):
    cfg = load_config(env={"PROVIDER_CLAUDE_ENABLED": "maybe"}, dotenv_path=no_dotenv)
    assert cfg["claude"].enabled is True


def test_dotenv_sits_below_process_environment(clean_env, tmp_path):
    dotenv = tmp_path / ".env"
    dotenv.write_text("PROVIDER_CLAUDE_MODEL=from-dotenv\nPROVIDER_GEMINI_MODEL=gem-dotenv\n", encoding="utf-8")
    cfg = load_config(env={"PROVIDER_CLAUDE_MODEL": "from-env"}, dotenv_path=dotenv)
    assert cfg["claude"].default_model == "from-env"
    assert cfg["gemini"].default_model == "gem-dotenv"


def test_overrides_apply_last(tmp_path, no_dotenv):
    path = _write_yaml(tmp_path / "c.yaml", {"providers": {"claude": {"model": "file"}}})
    cfg = load_config(
        path,
        env={"PROVIDER_CLAUDE_MODEL": "env"},
        dotenv_path=no_dotenv,
        overrides={"claude": {"model": "code"}, "extra": {"command": "echo"}},
    )
    assert cfg["claude"].default_model == "code"
    assert cfg["extra"].command == "echo"


def test_missing_explicit_file_raises(tmp_path, no_dotenv):
    with pytest.raises(ConfigError) as info:
        load_config(tmp_path / "nope.yaml", env={}, dotenv_path=no_dotenv)
    assert info.value.path.endswith("nope.yaml")


def test_malformed_yaml_raises(tmp_path, no_dotenv):
    path = tmp_path / "bad.yaml"
    path.write_text("providers: [unclosed", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path, env={}, dotenv_path=no_dotenv)


def test_non_mapping_provider_entry_raises(tmp_path, no_dotenv):
    path = _write_yaml(tmp_path / "c.yaml", {"providers": {"claude": ["not", "a", "mapping"]}})
    with pytest.raises(ConfigError):
        load_config(path, env={}, dotenv_path=no_dotenv)


def test_invalid_timeout_raises_config_error(clean_env, no_dotenv):
    with pytest.raises(ConfigError):
        load_config(env={"PROVIDER_CLAUDE_TIMEOUT": "whenever"}, dotenv_path=no_dotenv)


def test_get_provider_config(clean_env, no_dotenv):
    assert get_provider_config("Claude", env={}, dotenv_path=no_dotenv).command == "claude"
    assert get_provider_config("nope", env={}, dotenv_path=no_dotenv) is None


def test_load_dotenv_parsing(tmp_path):
    path = tmp_path / ".env"
    path.write_text(
        "# comment\n\nexport A=1\nB='two words'\nC=\"q\"\nD=value # trailing\nnot a pair\n",
        encoding="utf-8",
    )
    assert load_dotenv(path) == {"A": "1", "B": "two words", "C": "q", "D": "value"}
    assert load_dotenv(tmp_path / "missing") == {}


@pytest.mark.parametrize("value, expected", [("TRUE", True), ("on", True), ("0", False), ("no", False), ("x", None), (None, None)])
def test_parse_bool(value, expected):
    assert parse_bool(value) is expected


def test_example_config_is_loadable(tmp_path, no_dotenv):
    text = example_config()
    assert text.startswith("# conclave provider configuration")
    data = yaml.safe_load(text)
    assert set(data["providers"]) == BUILTIN
    assert data["providers"]["claude"]["timeout"] == "5m"
    assert data["providers"]["mock"]["timeout"] == "1m"
    path = tmp_path / "example.yaml"
    path.write_text(text, encoding="utf-8")
    cfg = load_config(path, env={}, dotenv_path=no_dotenv)
    assert cfg["mock"].timeout_seconds == 60
