from __future__ import annotations

from typing import TYPE_CHECKING

from commitlens_core.providers.base import GenerativeSummarizer

if TYPE_CHECKING:
    from commitlens_core.config import GenerationConfig


class AnthropicSummarizer(GenerativeSummarizer):
    def __init__(self, settings: GenerationConfig):
        try:
            from anthropic import Anthropic
        except ImportError:
            raise ImportError(
                "The 'anthropic' package is required for this summarizer. "
                "Install it with: pip install 'commitlens[anthropic]'"
            )
        super().__init__(settings)
        self.client = Anthropic(api_key=settings.api_key)

    def _call_api(self, prompt: str) -> str:
        # anthropic is optional; __init__ already confirmed it is installed.
        from anthropic.types import TextBlock

        response = self.client.messages.create(
            model=self.settings.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.settings.temperature,
            max_tokens=self.settings.max_tokens,
        )
        return "".join(block.text for block in response.content if isinstance(block, TextBlock))
