"""Core commit summary orchestration."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from rich.console import Console

from commitlens_core.config import generation_config
from commitlens_core.exceptions import ConfigurationError, DataError
from commitlens_core.gh.event import PullRequestRef
from commitlens_core.gh.pull_request import (
    create_review_comment,
    get_commit_files,
    get_pull,
    get_repo,
    list_comments,
    list_commits,
    list_files,
)
from commitlens_core.providers.anthropic import AnthropicSummarizer
from commitlens_core.providers.base import BaseSummarizer, FileListSummarizer, SummaryRequest
from commitlens_core.providers.openai import OpenAISummarizer

console = Console()
logger = logging.getLogger(__name__)

MARKER_PREFIX = "GPT summary of "
HUNK_RADIUS = 5


@dataclass
class SummaryResult:
    """Outcome of run_summaries: which commits got a comment and why the rest were skipped."""

    repo: str
    pr_number: int
    posted: list[dict] = field(default_factory=list)
    skipped: list[dict] = field(default_factory=list)
    shadow: bool = False


def get_summarizer(config: dict) -> BaseSummarizer:
    name = config.get("summarizer", "filelist")
    if name == "filelist":
        return FileListSummarizer()
    if name == "openai":
        return OpenAISummarizer(generation_config(config, "openai"))
    if name == "anthropic":
        return AnthropicSummarizer(generation_config(config, "anthropic"))
    raise ConfigurationError(f"Unknown summarizer: {name!r}. Choose 'filelist', 'openai' or 'anthropic'.")


def summary_marker(sha: str) -> str:
    return f"{MARKER_PREFIX}{sha}: "


def compose_body(sha: str, summary: str) -> str:
    return summary_marker(sha) + summary


def has_existing_summary(comments, sha: str) -> bool:
    """Return True if any comment body starts with the summary marker for ``sha``."""
    pattern = re.compile("^" + re.escape(summary_marker(sha)))
    return any(pattern.match(c.body or "") for c in comments)


def find_matching_diff(diffs, commit_files):
    """Return the first PR diff entry whose filename was touched by the commit, or None.

    Diff order wins: the result is the earliest entry in ``diffs``, not the earliest
    file in the commit.
    """
    names = {f.filename for f in commit_files}
    for diff in diffs:
        if diff.filename in names:
            return diff
    return None


def find_anchor_line(lines: list[str]) -> int:
    """Index of the first added line in a split patch, or -1 if there is none."""
    for i, line in enumerate(lines):
        if line.startswith("+"):
            return i
    return -1


def diff_hunk_window(lines: list[str], index: int, radius: int = HUNK_RADIUS) -> str:
    """Join the lines in ``[index - radius, index + radius)``, with the start clamped to 0."""
    start = max(index - radius, 0)
    return "\n".join(lines[start : index + radius])


def print_shadow_comments(comments: list[dict]) -> None:
    """Print would-be comments to the terminal without posting to GitHub."""
    if not comments:
        console.print("[yellow]Shadow mode: no comments generated.[/yellow]")
        return
    console.print(f"\n[bold]Shadow run: {len(comments)} comment(s) (not posted)[/bold]\n")
    for c in comments:
        console.print(f"[bold cyan]{c['path']}[/bold cyan]  line [bold]{c['line']}[/bold]  [dim]{c['sha'][:7]}[/dim]")
        console.print(f"  {c['body']}")
        console.print()


def run_summaries(
    ref: PullRequestRef,
    config: dict,
    summarizer: BaseSummarizer | None = None,
    shadow: bool = False,
    repo_obj=None,
) -> SummaryResult:
    """Post one summary review comment per qualifying commit of the pull request.

    Per-commit skips (already commented, no matching diff, no patch, no added
    line) are recorded in the result and never raise. A commit whose detail has
    no file list raises DataError and stops the run; comments posted for earlier
    commits are left in place.
    """
    this_repo = repo_obj if repo_obj is not None else get_repo(ref.full_name, token=config["github_token"])
    this_pr = get_pull(this_repo, ref.number)
    summarizer = summarizer if summarizer is not None else get_summarizer(config)

    # Snapshots: nothing below re-fetches these during the run.
    comments = list(list_comments(this_pr))
    diffs = list(list_files(this_pr))
    commits = list(list_commits(this_pr))

    console.print(f"[cyan]{ref.full_name}#{ref.number}: {len(commits)} commit(s), {len(diffs)} changed file(s)[/cyan]")

    result = SummaryResult(repo=ref.full_name, pr_number=ref.number, shadow=shadow)
    processed: set[str] = set()

    def skip(sha: str, reason: str) -> None:
        logger.debug("Skipping %s: %s", sha[:7], reason)
        result.skipped.append({"sha": sha, "reason": reason})

    for commit in commits:
        sha = commit.sha

        if sha in processed:
            skip(sha, "processed")
            continue

        if has_existing_summary(comments, sha):
            skip(sha, "already-commented")
            continue

        commit_files = get_commit_files(this_repo, sha)
        if commit_files is None:
            raise DataError(f"Files undefined for commit {sha}")

        diff = find_matching_diff(diffs, commit_files)
        if diff is None:
            skip(sha, "no-matching-diff")
            continue

        if diff.patch is None:
            skip(sha, "no-patch")
            continue
        diff_lines = diff.patch.split("\n")

        line_index = find_anchor_line(diff_lines)
        if line_index < 0:
            skip(sha, "no-added-line")
            continue
        diff_hunk = diff_hunk_window(diff_lines, line_index)

        request = SummaryRequest(
            sha=sha,
            filenames=[f.filename for f in commit_files],
            path=diff.filename,
            diff_hunk=diff_hunk,
        )
        body = compose_body(sha, summarizer.summarize(request))

        comment = {"sha": sha, "path": diff.filename, "line": line_index, "diff_hunk": diff_hunk, "body": body}
        if not shadow:
            create_review_comment(
                this_pr,
                commit_id=sha,
                path=diff.filename,
                line=line_index,
                diff_hunk=diff_hunk,
                body=body,
            )
            console.print(f"  Commented on {sha[:7]} at {diff.filename}:{line_index}")
        result.posted.append(comment)
        processed.add(sha)

    if shadow:
        print_shadow_comments(result.posted)

    return result
