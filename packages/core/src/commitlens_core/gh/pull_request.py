from __future__ import annotations

from itertools import chain

from github import Github


def get_repo(repo_name: str, token: str):
    return Github(token).get_repo(repo_name)


def get_pull(repo, pr_number: int):
    return repo.get_pull(pr_number)


def list_comments(pr):
    """Return the PR's conversation comments followed by its review comments.

    Summaries are posted as review comments, which the issue-comments endpoint
    does not list, so both are needed to spot an earlier run's summary.
    """
    return chain(pr.get_issue_comments(), pr.get_review_comments())


def list_files(pr):
    return pr.get_files()


def list_commits(pr):
    return pr.get_commits()


def get_commit(repo, sha: str):
    return repo.get_commit(sha)


def get_commit_files(repo, sha: str) -> list | None:
    """Return the files changed by commit ``sha``, or None if GitHub sent no file list.

    Commit.files always builds a PaginatedList and fails with a TypeError when the
    payload has no ``files`` key, so the raw payload is checked first.
    """
    commit = get_commit(repo, sha)
    if commit.raw_data.get("files") is None:
        return None
    return list(commit.files)


def create_review_comment(pr, commit_id: str, path: str, line: int, diff_hunk: str, body: str) -> dict:
    """Create a single review comment on ``pr`` anchored to ``commit_id``.

    PullRequest.create_review_comment() has no diff_hunk argument, so the POST goes
    through the PR's requester the same way PyGithub builds it internally.
    """
    payload = {
        "body": body,
        "commit_id": commit_id,
        "path": path,
        "line": line,
        "diff_hunk": diff_hunk,
    }
    _, data = pr._requester.requestJsonAndCheck("POST", f"{pr.url}/comments", input=payload)
    return data
