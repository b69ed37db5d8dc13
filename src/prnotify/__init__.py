"""prnotify - pull request state reconciliation and notification dispatch."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("prnotify")
except PackageNotFoundError:
    __version__ = "0+local"
from prnotify.config import NotifyConfig
from prnotify.exceptions import (
    HistoryFormatError,
    MalformedHashError,
    NotifyConfigError,
    NotifyError,
    StorageError,
)
from prnotify.extract import parse_issues, resulting_commit_hash, snapshot_of
from prnotify.listeners import ListenerSet, LoggingListener, PullRequestListener
from prnotify.models import (
    Comment,
    CommitStatus,
    Hash,
    PullRequest,
    PullRequestState,
    Repository,
    ResultingCommit,
    User,
)
from prnotify.state import Storage, StorageBuilder
from prnotify.work_item import NotifyBot, PullRequestWorkItem

__all__ = [
    "__version__",
    "Comment",
    "CommitStatus",
    "Hash",
    "HistoryFormatError",
    "ListenerSet",
    "LoggingListener",
    "MalformedHashError",
    "NotifyBot",
    "NotifyConfig",
    "NotifyConfigError",
    "NotifyError",
    "PullRequest",
    "PullRequestListener",
    "PullRequestState",
    "PullRequestWorkItem",
    "Repository",
    "ResultingCommit",
    "Storage",
    "StorageBuilder",
    "StorageError",
    "User",
    "parse_issues",
    "resulting_commit_hash",
    "snapshot_of",
]
