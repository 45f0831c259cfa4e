"""Pull-request identity from the GitHub Actions event payload.

Inside a workflow run, GitHub writes the triggering webhook payload to the file
named by GITHUB_EVENT_PATH. For ``pull_request`` events it carries the PR under
``pull_request`` and the repository under ``repository``.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass

from commitlens_core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PullRequestRef:
    owner: str
    repo: str
    number: int

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


def parse_repo_name(full_name: str) -> tuple[str, str]:
    """Split ``owner/name`` into its two parts."""
    owner, sep, name = full_name.partition("/")
    if not sep or not owner or not name or "/" in name:
        raise ConfigurationError(f"Repository must be in owner/name format, got {full_name!r}.")
    return owner, name


def ref_from_payload(payload: dict) -> PullRequestRef:
    repository = payload.get("repository")
    if repository is None:
        raise ConfigurationError("Repository undefined")

    owner = (repository.get("owner") or {}).get("login")
    name = repository.get("name")
    if not owner or not name:
        raise ConfigurationError("Repository undefined")

    pull_request = payload.get("pull_request") or {}
    number = pull_request.get("number", payload.get("number"))
    if number is None:
        raise ConfigurationError("Pull request number undefined; was the workflow triggered by a pull_request event?")

    return PullRequestRef(owner=owner, repo=name, number=int(number))


def load_event_context(event_path: str | None = None) -> PullRequestRef:
    """Read the Actions event payload and return the PR it refers to."""
    path = event_path or os.environ.get("GITHUB_EVENT_PATH")
    if not path:
        raise ConfigurationError("GITHUB_EVENT_PATH is not set; pass --repo and --pr when running outside Actions.")

    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Could not read event payload {path}: {e}") from e

    ref = ref_from_payload(payload)
    logger.debug("Resolved pull request %s#%d from %s", ref.full_name, ref.number, path)
    return ref
