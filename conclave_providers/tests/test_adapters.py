"""Adapter tests with a recording fake executor (no subprocesses)."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import pytest

from conclave_providers.base.adapter import CLIProvider
from conclave_providers.base.dto import ProviderConfig
from conclave_providers.base.errors import CLIError, ErrorCode
from conclave_providers.base.interfaces import Provider
from conclave_providers.base.models import Request
from conclave_providers.claude import ClaudeProvider
from conclave_providers.codex import CodexProvider
from conclave_providers.gemini import GeminiProvider
from conclave_providers.generic import GenericProvider
from conclave_providers.opencode import OpencodeProvider
from conclave_providers.qwen import QwenProvider


class FakeExecutor:
    """Stands in for ``ProcessExecutor``; records each call."""

    def __init__(self, output: str = "", error: Optional[Exception] = None, command: str = "fake") -> None:
        self.output = output
        self.error = error
        self.command = command
        self.calls: List[Dict[str, Any]] = []

    def available(self) -> bool:
        return True

    def run(self, args, *, working_dir=None, timeout=None, cancel_token=None) -> str:
        self.calls.append({"args": list(args), "working_dir": working_dir, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.output


def _build(cls, output: str = "", **config: Any):
    fake = FakeExecutor(output)
    provider = cls(ProviderConfig(**config), executor=fake)
    return provider, fake


@pytest.mark.parametrize(
    "cls, flags",
    [
        (ClaudeProvider, ["--output-format", "json"]),
        (GeminiProvider, ["--output-format", "json"]),
        (QwenProvider, ["--output-format", "json"]),
        (CodexProvider, ["exec", "--json"]),
        (OpencodeProvider, ["--json"]),
        (GenericProvider, []),
    ],
)
def test_argument_order(cls, flags):
    provider, fake = _build(cls, "x", default_model="dm")
    provider.execute(Request(prompt="the prompt", model="m1", args=("--extra", "1")))
    assert fake.calls[0]["args"] == [*flags, "--model", "m1", "the prompt", "--extra", "1"]


def test_default_model_used_when_request_has_none():
    provider, fake = _build(ClaudeProvider, '{"result": "ok"}', default_model="sonnet-4.5")
    resp = provider.execute(Request(prompt="p"))
    assert fake.calls[0]["args"][2:4] == ["--model", "sonnet-4.5"]
    assert resp.model == "sonnet-4.5"
    assert resp.provider == "claude"


def test_no_model_flag_without_any_model():
    provider, fake = _build(GenericProvider, "out")
    provider.execute(Request(prompt="p"))
    assert fake.calls[0]["args"] == ["p"]


def test_working_dir_and_timeout_forwarded(tmp_path):
    provider, fake = _build(GeminiProvider, '{"response": "hi"}')
    provider.execute(Request(prompt="p", working_dir=str(tmp_path)), timeout=12)
    assert fake.calls[0]["working_dir"] == str(tmp_path)
    assert fake.calls[0]["timeout"] == 12


def test_claude_execute_parses_json():
    payload = {"content": [{"type": "text", "text": "Answer"}], "usage": {"input_tokens": 2, "output_tokens": 3}}
    provider, _ = _build(ClaudeProvider, json.dumps(payload))
    resp = provider.execute(Request(prompt="q"))
    assert resp.content == "Answer"
    assert resp.metadata.total_tokens == 5
    assert resp.raw == json.dumps(payload)


def test_generic_returns_output_verbatim_with_duration_metadata():
    provider, _ = _build(GenericProvider, '{"looks": "like json"}')
    resp = provider.execute(Request(prompt="q"))
    assert resp.content == '{"looks": "like json"}'
    assert resp.metadata is not None
    assert resp.metadata.input_tokens == 0
    assert resp.metadata.duration >= 0


def test_executor_errors_propagate_unchanged():
    err = CLIError("claude", "command timed out", ErrorCode.TIMEOUT)
    fake = FakeExecutor(error=err)
    provider = ClaudeProvider(ProviderConfig(), executor=fake)
    with pytest.raises(CLIError) as info:
        provider.execute(Request(prompt="q"))
    assert info.value is err


def test_identity_from_config_and_class():
    provider, _ = _build(CodexProvider, models=("gpt-5.2-codex", "gpt-5.2"), default_model="gpt-5.2-codex", timeout_seconds="2m")
    assert provider.name == "codex"
    assert provider.display_name == "OpenAI Codex"
    assert provider.models == ["gpt-5.2-codex", "gpt-5.2"]
    assert provider.default_model == "gpt-5.2-codex"
    assert provider.timeout == 120
    assert provider.available() is True
    assert isinstance(provider, Provider)


def test_name_and_display_name_overrides():
    provider = GenericProvider(ProviderConfig(command="my-tool", display_name="My Tool"), name="my-tool", executor=FakeExecutor())
    assert provider.name == "my-tool"
    assert provider.display_name == "My Tool"
    plain = GenericProvider(ProviderConfig(), name="other", executor=FakeExecutor())
    assert plain.display_name == "Other"


def test_builds_executor_from_config(python_exe):
    provider = CLIProvider(ProviderConfig(command=python_exe, args=("-c", "print('hi')"), timeout_seconds=20))
    assert provider.executor.command == python_exe
    assert provider.executor.args == ("-c", "print('hi')")
    assert provider.executor.timeout == 20
    assert provider.generate("ignored") == "hi"


def test_legacy_call_shapes(tmp_path):
    provider, fake = _build(GenericProvider, "done")
    assert provider.generate("a") == "done"
    assert provider.generate_with_model("b", "m") == "done"
    assert provider.generate_with_dir("c", "m", str(tmp_path)) == "done"
    resp = provider.generate_with_response("d", "", None)
    assert resp.content == "done"
    assert fake.calls[1]["args"] == ["--model", "m", "b"]
    assert fake.calls[2]["working_dir"] == str(tmp_path)


def test_health_check_through_adapter():
    provider, fake = _build(GeminiProvider, '{"response": "2"}')
    status = provider.health_check()
    assert status.available
    assert fake.calls[0]["args"][-1] == "1+1? One digit answer only"
    assert fake.calls[0]["timeout"] == 30
