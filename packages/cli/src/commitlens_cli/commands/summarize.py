"""summarize command: post per-commit summary comments on a pull request."""

from __future__ import annotations

import click
from rich.console import Console

from commitlens_core.exceptions import CommitLensError
from commitlens_core.gh.event import PullRequestRef, load_event_context, parse_repo_name
from commitlens_core.summarizer import run_summaries

console = Console()


def _resolve_ref(repo: str | None, pr_number: int | None, event_path: str | None) -> PullRequestRef:
    """Build the PR reference from --repo/--pr, or from the Actions event payload."""
    if repo and pr_number is not None:
        owner, name = parse_repo_name(repo)
        return PullRequestRef(owner=owner, repo=name, number=pr_number)
    if repo or pr_number is not None:
        raise click.UsageError("--repo and --pr must be given together.")
    return load_event_context(event_path)


@click.command("summarize")
@click.option("--repo", default=None, help="GitHub repository in owner/name format.")
@click.option("--pr", "pr_number", type=int, default=None, help="Pull request number.")
@click.option(
    "--summarizer",
    type=click.Choice(["filelist", "openai", "anthropic"]),
    default=None,
    help="Summary strategy. Overrides config file.",
)
@click.option(
    "--event-path",
    default=None,
    help="GitHub Actions event payload. Defaults to $GITHUB_EVENT_PATH.",
)
@click.option(
    "--shadow",
    "-s",
    is_flag=True,
    help="Dry-run mode: print summary comments without posting to GitHub.",
)
@click.pass_context
def summarize_cmd(
    ctx,
    repo: str | None,
    pr_number: int | None,
    summarizer: str | None,
    event_path: str | None,
    shadow: bool,
):
    """Post a "GPT summary of <sha>: ..." review comment for each commit.

    Commits that already carry a summary comment are skipped. Without --repo and
    --pr the pull request is read from the GitHub Actions event payload.

    \b
    Required environment variables:
      GITHUB_TOKEN         GitHub token (or COMMITLENS_GITHUB_TOKEN, or gh CLI)
      OPENAI_API_KEY       Required when using --summarizer openai
      ANTHROPIC_API_KEY    Required when using --summarizer anthropic
    """
    from commitlens_cli.auth import resolve_github_token
    from commitlens_core.config import load_config

    config_path = (ctx.obj or {}).get("config_path", ".commitlens.yml")
    config = load_config(config_path, cli_overrides={"summarizer": summarizer})

    token = resolve_github_token()
    if not token:
        raise click.UsageError(
            "No GitHub token found. Set COMMITLENS_GITHUB_TOKEN or GITHUB_TOKEN, or run `gh auth login` first.\n"
            "Create a token at https://github.com/settings/tokens"
        )
    config["github_token"] = token

    try:
        ref = _resolve_ref(repo, pr_number, event_path)
        result = run_summaries(ref, config, shadow=shadow)
    except CommitLensError as e:
        raise click.ClickException(str(e))

    verb = "would be posted" if shadow else "posted"
    console.print(
        f"[green]{len(result.posted)} summary comment(s) {verb}, {len(result.skipped)} commit(s) skipped.[/green]"
    )
