"""Typed models for live pull request data and persisted notifier state."""

from prnotify.models.hash import Hash
from prnotify.models.pull_request import Comment, PullRequest, Repository, User
from prnotify.models.state import CommitStatus, PullRequestState, ResultingCommit

__all__ = [
    "Comment",
    "CommitStatus",
    "Hash",
    "PullRequest",
    "PullRequestState",
    "Repository",
    "ResultingCommit",
    "User",
]
