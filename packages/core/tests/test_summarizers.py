"""Tests for summarization strategies.

Shared behaviour (prompt building, fallback) lives in GenerativeSummarizer and is
tested once via a stub. Provider-specific tests cover only SDK setup and _call_api.
"""

import types
from unittest.mock import MagicMock, patch

import pytest

from commitlens_core.config import GenerationConfig
from commitlens_core.providers.anthropic import AnthropicSummarizer
from commitlens_core.providers.base import FileListSummarizer, GenerativeSummarizer, SummaryRequest
from commitlens_core.providers.openai import OpenAISummarizer

SETTINGS = GenerationConfig(api_key="key", model="test-model")


def _request(**kwargs):
    defaults = {"sha": "a" * 40, "filenames": ["src/a.py", "README.md"], "path": "src/a.py", "diff_hunk": "+x = 1"}
    defaults.update(kwargs)
    return SummaryRequest(**defaults)


class _StubSummarizer(GenerativeSummarizer):
    def __init__(self, settings=SETTINGS, reply="Adds x."):
        super().__init__(settings)
        self.reply = reply
        self.prompts = []

    def _call_api(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply


class TestFileListSummarizer:
    def test_joins_filenames_in_order(self):
        assert FileListSummarizer().summarize(_request()) == "src/a.py, README.md"

    def test_single_file(self):
        assert FileListSummarizer().summarize(_request(filenames=["a.py"])) == "a.py"


class TestGenerativeSummarizer:
    def test_returns_stripped_model_text(self):
        assert _StubSummarizer(reply="  Adds x.\n").summarize(_request()) == "Adds x."

    def test_prompt_contains_files_and_hunk(self):
        stub = _StubSummarizer()
        stub.summarize(_request())
        assert "src/a.py" in stub.prompts[0]
        assert "README.md" in stub.prompts[0]
        assert "+x = 1" in stub.prompts[0]

    def test_prompt_truncated_to_max_query_length(self):
        stub = _StubSummarizer(settings=GenerationConfig(api_key="k", model="m", max_query_length=50))
        stub.summarize(_request(diff_hunk="+" + "y" * 500))
        assert len(stub.prompts[0]) == 50

    def test_falls_back_to_file_list_on_error(self):
        stub = _StubSummarizer(reply=RuntimeError("network error"))
        assert stub.summarize(_request()) == "src/a.py, README.md"

    def test_falls_back_to_file_list_on_empty_reply(self):
        assert _StubSummarizer(reply="").summarize(_request()) == "src/a.py, README.md"

    def test_single_attempt_only(self):
        stub = _StubSummarizer(reply=RuntimeError("boom"))
        stub.summarize(_request())
        assert len(stub.prompts) == 1


class TestOpenAISummarizer:
    def test_raises_import_error_without_sdk(self):
        import commitlens_core.providers.openai as openai_mod

        with patch.object(openai_mod, "_OpenAI", None):
            with pytest.raises(ImportError, match="commitlens\\[openai\\]"):
                OpenAISummarizer(SETTINGS)

    def test_call_api_uses_settings(self):
        import commitlens_core.providers.openai as openai_mod

        client = MagicMock()
        client.chat.completions.create.return_value.choices = [MagicMock(message=MagicMock(content="Summary"))]
        with patch.object(openai_mod, "_OpenAI", return_value=client):
            summarizer = OpenAISummarizer(SETTINGS)

        assert summarizer._call_api("prompt") == "Summary"
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["temperature"] == 0.9
        assert kwargs["max_tokens"] == 1024


class TestAnthropicSummarizer:
    def test_raises_import_error_without_sdk(self):
        with patch.dict("sys.modules", {"anthropic": None}):
            with pytest.raises(ImportError, match="commitlens\\[anthropic\\]"):
                AnthropicSummarizer(SETTINGS)

    def test_call_api_joins_text_blocks_and_uses_settings(self):
        class TextBlock:
            def __init__(self, text):
                self.text = text

        client = MagicMock()
        client.messages.create.return_value.content = [TextBlock("Adds "), MagicMock(), TextBlock("x.")]
        sdk = types.ModuleType("anthropic")
        sdk.Anthropic = MagicMock(return_value=client)
        sdk_types = types.ModuleType("anthropic.types")
        sdk_types.TextBlock = TextBlock

        with patch.dict("sys.modules", {"anthropic": sdk, "anthropic.types": sdk_types}):
            summarizer = AnthropicSummarizer(SETTINGS)
            text = summarizer._call_api("prompt")

        assert text == "Adds x."
        sdk.Anthropic.assert_called_once_with(api_key="key")
        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["temperature"] == 0.9
        assert kwargs["max_tokens"] == 1024
        assert kwargs["messages"] == [{"role": "user", "content": "prompt"}]
