from __future__ import annotations

from typing import TYPE_CHECKING

try:
    from openai import OpenAI as _OpenAI
except ImportError:
    _OpenAI = None  # type: ignore[assignment,misc]

from commitlens_core.providers.base import GenerativeSummarizer

if TYPE_CHECKING:
    from commitlens_core.config import GenerationConfig


class OpenAISummarizer(GenerativeSummarizer):
    def __init__(self, settings: GenerationConfig):
        if _OpenAI is None:
            raise ImportError(
                "The 'openai' package is required for this summarizer. "
                "Install it with: pip install 'commitlens[openai]'"
            )
        super().__init__(settings)
        self.client = _OpenAI(api_key=settings.api_key)

    def _call_api(self, prompt: str) -> str:
        response = self.client.chat.completions.create(
            model=self.settings.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.settings.temperature,
            max_tokens=self.settings.max_tokens,
        )
        return response.choices[0].message.content
