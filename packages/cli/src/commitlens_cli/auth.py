"""GitHub token resolution for commitlens.

Inside the Action, the workflow's GITHUB_TOKEN is enough to read the pull
request and post review comments. Some repositories restrict that token (for
example on pull requests from forks), so a separate token can be supplied as
COMMITLENS_GITHUB_TOKEN without shadowing the workflow's own GITHUB_TOKEN.
For local runs, a GitHub CLI session is reused.

Resolution order (stops at first success):
  1. COMMITLENS_GITHUB_TOKEN
  2. GITHUB_TOKEN
  3. `gh auth token`
"""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)

TOKEN_ENV_VARS = ("COMMITLENS_GITHUB_TOKEN", "GITHUB_TOKEN")


def _gh_cli_token() -> str | None:
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired) as e:
        logger.debug("gh CLI unavailable: %s", e)
        return None
    if result.returncode != 0:
        logger.debug("gh auth token exited with %d", result.returncode)
        return None
    return result.stdout.strip() or None


def resolve_github_token() -> str | None:
    """Return the token commitlens should post with, or None if none is available.

    Never raises; the summarize command turns None into a UsageError.
    """
    for name in TOKEN_ENV_VARS:
        token = os.environ.get(name)
        if token:
            logger.debug("Using GitHub token from %s.", name)
            return token

    token = _gh_cli_token()
    if token:
        logger.debug("Resolved GitHub token via gh CLI session.")
    return token
