"""Helpers shared by the notifier tests."""

from __future__ import annotations

from collections.abc import Iterable

from prnotify.listeners import PullRequestListener
from prnotify.models import Comment, Hash, PullRequest, Repository, User

INTEGRATOR_ID = "42"
COMMIT_HEX = "0123456789abcdef0123456789abcdef01234567"
OTHER_COMMIT_HEX = "fedcba9876543210fedcba9876543210fedcba98"


class RecordingListener(PullRequestListener):
    """Collects every notification as a tuple."""

    def __init__(self) -> None:
        self.events: list[tuple[str, ...]] = []

    def on_new_pull_request(self, pr: PullRequest) -> None:
        self.events.append(("new_pr", pr.state_id))

    def on_new_issue(self, pr: PullRequest, issue_id: str) -> None:
        self.events.append(("new_issue", issue_id))

    def on_removed_issue(self, pr: PullRequest, issue_id: str) -> None:
        self.events.append(("removed_issue", issue_id))

    def on_integrated_pull_request(self, pr: PullRequest, commit: Hash) -> None:
        self.events.append(("integrated", commit.hex))

    def of_kind(self, kind: str) -> list[tuple[str, ...]]:
        return [event for event in self.events if event[0] == kind]


def issues_body(issue_ids: Iterable[str], *, heading: str = "### Issues") -> str:
    lines = [f" * [{issue_id}](https://bugs.example.org/browse/{issue_id}): Fix {issue_id}" for issue_id in issue_ids]
    if not lines:
        return "Some change"
    return "Some change\n\n" + heading + "\n" + "\n".join(lines)


def pushed_comment(commit_hex: str = COMMIT_HEX, author_id: str = INTEGRATOR_ID) -> Comment:
    return Comment(author=User(id=author_id), body=f"Going to push as commit {commit_hex}.\nPushed as commit {commit_hex}.")


def make_pr(
    issue_ids: Iterable[str] = (),
    *,
    pr_id: str = "17",
    repository: str = "jdk",
    commit_hex: str | None = None,
    integrated: bool | None = None,
    comments: Iterable[Comment] = (),
) -> PullRequest:
    all_comments = list(comments)
    if commit_hex is not None:
        all_comments.append(pushed_comment(commit_hex))
    if integrated is None:
        integrated = commit_hex is not None
    return PullRequest(
        id=pr_id,
        repository=Repository(name=repository),
        title=f"PR {pr_id}",
        body=issues_body(issue_ids),
        labels=frozenset({"integrated"} if integrated else {"rfr"}),
        comments=tuple(all_comments),
    )


