"""Summarization strategies.

The orchestration in commitlens_core.summarizer only ever calls
``summarize(request)``, so the text that follows the comment marker can come
from a plain file list or from a text-generation model without the commit loop
changing.

Generative providers share one algorithm (Template Method):
    summarize() → _build_prompt() → _call_api()   (only this differs per provider)
               → fall back to the file list on failure

Subclasses implement two things only:
  - __init__: validate and store the SDK client
  - _call_api: make one raw API call and return the text response
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from commitlens_core.config import GenerationConfig

logger = logging.getLogger(__name__)


@dataclass
class SummaryRequest:
    """Diff context for one commit."""

    sha: str
    filenames: list[str] = field(default_factory=list)
    path: str = ""
    diff_hunk: str = ""


class BaseSummarizer(ABC):
    @abstractmethod
    def summarize(self, request: SummaryRequest) -> str:
        """Return the summary text placed after the comment marker."""


class FileListSummarizer(BaseSummarizer):
    """Lists the files the commit touched, in the order GitHub returned them."""

    def summarize(self, request: SummaryRequest) -> str:
        return ", ".join(request.filenames)


class GenerativeSummarizer(BaseSummarizer):
    def __init__(self, settings: GenerationConfig):
        self.settings = settings
        self._fallback = FileListSummarizer()

    # ------------------------------------------------------------------ #
    # Public interface                                                     #
    # ------------------------------------------------------------------ #

    def summarize(self, request: SummaryRequest) -> str:
        """Generate a summary, falling back to the file list on any failure.

        A single attempt is made; there is no retry.
        """
        prompt = self._build_prompt(request)
        try:
            text = self._call_api(prompt)
        except Exception as e:
            logger.warning(
                "%s API failed for %s: %s. Falling back to file list.",
                self.__class__.__name__,
                request.sha[:7],
                e,
            )
            return self._fallback.summarize(request)

        text = (text or "").strip()
        if not text:
            logger.warning("%s returned an empty summary for %s.", self.__class__.__name__, request.sha[:7])
            return self._fallback.summarize(request)
        return text

    # ------------------------------------------------------------------ #
    # Abstract: implement in each provider                                #
    # ------------------------------------------------------------------ #

    @abstractmethod
    def _call_api(self, prompt: str) -> str:
        """Make a single API call and return the raw text response."""

    # ------------------------------------------------------------------ #
    # Shared implementations                                               #
    # ------------------------------------------------------------------ #

    def _build_prompt(self, request: SummaryRequest) -> str:
        files = "\n".join(f"- {name}" for name in request.filenames)
        prompt = f"""Summarize the following commit in one or two sentences for a pull request reviewer.
Do not use markdown headings. Do not repeat the commit SHA.

## Files changed
{files}

## Diff excerpt from `{request.path}`
{request.diff_hunk}
"""
        limit = self.settings.max_query_length
        if len(prompt) > limit:
            prompt = prompt[:limit]
        return prompt
