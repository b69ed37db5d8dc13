"""Listener interface and multicast dispatch.

Listeners are told *that* something happened to a pull request; what they
do about it (post a mail, update an issue, ...) is up to them. All calls
are synchronous and in-process.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from prnotify.models.hash import Hash
from prnotify.models.pull_request import PullRequest

_logger = logging.getLogger(__name__)


class PullRequestListener:
    """Base class for notification listeners.

    Every callback does nothing by default; override the ones you need.
    """

    def on_new_pull_request(self, pr: PullRequest) -> None:
        """*pr* was seen for the first time."""

    def on_new_issue(self, pr: PullRequest, issue_id: str) -> None:
        """*pr* started referencing *issue_id*."""

    def on_removed_issue(self, pr: PullRequest, issue_id: str) -> None:
        """*pr* no longer references *issue_id*."""

    def on_integrated_pull_request(self, pr: PullRequest, commit: Hash) -> None:
        """*pr* was integrated as *commit*. Fired at most once per pull request."""


class LoggingListener(PullRequestListener):
    """Logs every notification at INFO level."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or _logger

    def on_new_pull_request(self, pr: PullRequest) -> None:
        self._logger.info("New pull request %s: %s", pr.state_id, pr.title)

    def on_new_issue(self, pr: PullRequest, issue_id: str) -> None:
        self._logger.info("%s now references %s", pr.state_id, issue_id)

    def on_removed_issue(self, pr: PullRequest, issue_id: str) -> None:
        self._logger.info("%s no longer references %s", pr.state_id, issue_id)

    def on_integrated_pull_request(self, pr: PullRequest, commit: Hash) -> None:
        self._logger.info("%s integrated as %s", pr.state_id, commit.abbreviate())


class ListenerSet:
    """An ordered, immutable group of listeners with one dispatch per event kind."""

    def __init__(self, listeners: Iterable[PullRequestListener] = ()) -> None:
        self._listeners: tuple[PullRequestListener, ...] = tuple(listeners)

    def __iter__(self) -> Iterator[PullRequestListener]:
        return iter(self._listeners)

    def __len__(self) -> int:
        return len(self._listeners)

    def notify_new_pull_request(self, pr: PullRequest) -> None:
        for listener in self._listeners:
            listener.on_new_pull_request(pr)

    def notify_new_issue(self, pr: PullRequest, issue_id: str) -> None:
        for listener in self._listeners:
            listener.on_new_issue(pr, issue_id)

    def notify_removed_issue(self, pr: PullRequest, issue_id: str) -> None:
        for listener in self._listeners:
            listener.on_removed_issue(pr, issue_id)

    def notify_integrated_pull_request(self, pr: PullRequest, commit: Hash) -> None:
        for listener in self._listeners:
            listener.on_integrated_pull_request(pr, commit)
