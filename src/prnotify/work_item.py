"""Per pull request reconciliation pass.

A :class:`PullRequestWorkItem` compares what listeners were last told about
one pull request with what the pull request looks like now, fires the
notifications for the difference and records the new state. Running it
again without any change on the forge fires nothing.

Scheduling is not done here. Items declare through :meth:`concurrent_with`
that two passes for the same pull request must not overlap; whoever runs
them is responsible for honouring that.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from prnotify.config import DEFAULT_INTEGRATED_LABEL, NotifyConfig
from prnotify.extract import snapshot_of
from prnotify.listeners import ListenerSet, PullRequestListener
from prnotify.models.pull_request import PullRequest
from prnotify.models.state import CommitStatus, PullRequestState
from prnotify.state.codec import deserialize_states, serialize_states
from prnotify.state.storage import Storage, StorageBuilder

_logger = logging.getLogger(__name__)

ErrorHandler = Callable[[Exception], None]

#: Folder below the scratch path that holds the notifier's files.
NOTIFY_FOLDER = "notify"


def log_error(exc: Exception) -> None:
    """Default error handler: log the failure with its traceback."""
    _logger.error("Notification pass failed: %s", exc, exc_info=exc)


class PullRequestWorkItem:
    """One reconciliation pass for one pull request."""

    def __init__(
        self,
        pr: PullRequest,
        storage_builder: StorageBuilder[PullRequestState],
        listeners: Iterable[PullRequestListener],
        *,
        integrator_id: str,
        integrated_label: str = DEFAULT_INTEGRATED_LABEL,
        error_handler: ErrorHandler | None = None,
    ) -> None:
        self.pr = pr
        self._storage_builder = storage_builder.serializer(serialize_states).deserializer(deserialize_states)
        self._listeners = listeners if isinstance(listeners, ListenerSet) else ListenerSet(listeners)
        self._integrator_id = integrator_id
        self._integrated_label = integrated_label
        self._error_handler = error_handler or log_error

    def __str__(self) -> str:
        return f"Notify.PR@{self.pr.repository.name}#{self.pr.id}"

    def __repr__(self) -> str:
        return f"<PullRequestWorkItem {self}>"

    def concurrent_with(self, other: object) -> bool:
        """Whether this item may run at the same time as *other*."""
        if not isinstance(other, PullRequestWorkItem):
            return True
        if self.pr.id != other.pr.id:
            return True
        return self.pr.repository.name != other.pr.repository.name

    def handle_runtime_exception(self, exc: Exception) -> None:
        self._error_handler(exc)

    def _snapshot(self) -> PullRequestState:
        return snapshot_of(self.pr, self._integrator_id, self._integrated_label)

    def _upgrade(self, storage: Storage[PullRequestState], stored: PullRequestState) -> PullRequestState:
        # Recorded before commits were tracked: take the commit from live data
        # so the integration of an already merged pull request is not re-announced.
        upgraded = stored.with_commit(self._snapshot().commit)
        _logger.debug("Upgrading legacy history entry %s to commit %s", stored.pr_id, upgraded.commit)
        storage.put(upgraded)
        return upgraded

    def _notify_changes(self, stored: PullRequestState, state: PullRequestState) -> None:
        removed = stored.issue_ids - state.issue_ids
        added = state.issue_ids - stored.issue_ids
        _logger.debug("%s: %d issue(s) removed, %d added", self, len(removed), len(added))
        for issue_id in sorted(removed):
            self._listeners.notify_removed_issue(self.pr, issue_id)
        for issue_id in sorted(added):
            self._listeners.notify_new_issue(self.pr, issue_id)

        if stored.commit.status is CommitStatus.UNKNOWN and state.commit.hash is not None:
            self._listeners.notify_integrated_pull_request(self.pr, state.commit.hash)

    def _notify_new(self, state: PullRequestState) -> None:
        self._listeners.notify_new_pull_request(self.pr)
        for issue_id in sorted(state.issue_ids):
            self._listeners.notify_new_issue(self.pr, issue_id)
        if state.commit.hash is not None:
            self._listeners.notify_integrated_pull_request(self.pr, state.commit.hash)

    def run(self, scratch_path: Path) -> list[Any]:
        """Run the pass. Returns follow-up work items, of which there are none."""
        storage = self._storage_builder.materialize(scratch_path / NOTIFY_FOLDER)

        state = self._snapshot()
        stored_states = storage.current()
        stored = next((s for s in stored_states if s.pr_id == state.pr_id), None)
        if stored is not None and stored.commit.is_known and not state.commit.is_known:
            # A recorded commit is never cleared, even if the label goes away.
            state = state.with_commit(stored.commit)

        if state in stored_states:
            _logger.debug("%s: already up to date", self)
            return []

        if stored is not None and stored.commit.is_placeholder:
            stored = self._upgrade(storage, stored)

        if stored is not None:
            self._notify_changes(stored, state)
        else:
            self._notify_new(state)

        storage.put(state)
        return []


class NotifyBot:
    """Creates notification work items for a set of pull requests."""

    def __init__(
        self,
        config: NotifyConfig,
        listeners: Iterable[PullRequestListener],
        *,
        error_handler: ErrorHandler | None = None,
    ) -> None:
        self.config = config
        self._listeners = ListenerSet(listeners)
        self._storage_builder: StorageBuilder[PullRequestState] = StorageBuilder(config.history_name)
        self._error_handler = error_handler

    def work_items(self, pull_requests: Iterable[PullRequest]) -> list[PullRequestWorkItem]:
        return [
            PullRequestWorkItem(
                pr,
                self._storage_builder,
                self._listeners,
                integrator_id=self.config.integrator_id,
                integrated_label=self.config.integrated_label,
                error_handler=self._error_handler,
            )
            for pr in pull_requests
        ]

    def run_once(self, pull_requests: Iterable[PullRequest]) -> int:
        """Run one pass per pull request, one after another.

        Failures are routed to the items' error handler. Returns the number
        of passes that completed.
        """
        completed = 0
        for item in self.work_items(pull_requests):
            try:
                item.run(self.config.scratch_path)
            except Exception as exc:
                item.handle_runtime_exception(exc)
                continue
            completed += 1
        return completed
