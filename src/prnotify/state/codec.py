"""Encode and decode the notification history.

The history is a JSON array with one object per pull request::

    [
    {"pr":"jdk#17","issues":["JDK-1","JDK-2"],"commit":"<40 hex>"},
    {"pr":"jdk#18","issues":[],"commit":null}
    ]

``"commit": null`` means no commit has been seen yet. Records written before
commits were tracked have no ``commit`` key at all; they decode to the
placeholder commit so the next pass can upgrade them in place, and a
placeholder is written back without the key.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Sequence

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from prnotify.exceptions import HistoryFormatError
from prnotify.models.hash import Hash
from prnotify.models.state import CommitStatus, PullRequestState, ResultingCommit

_logger = logging.getLogger(__name__)


class HistoryRecord(BaseModel):
    """One persisted history entry, exactly as it appears on disk."""

    model_config = ConfigDict(frozen=True, extra="ignore", strict=True)

    pr: str
    issues: list[str]
    commit: str | None = None

    @property
    def has_commit_key(self) -> bool:
        return "commit" in self.model_fields_set

    def to_state(self) -> PullRequestState:
        """Convert to the domain model.

        Raises :class:`~prnotify.exceptions.MalformedHashError` for a commit
        that is not a 40 character hex string.
        """
        if not self.has_commit_key:
            commit = ResultingCommit.placeholder()
        elif self.commit is None:
            commit = ResultingCommit.unknown()
        else:
            commit = ResultingCommit.known(Hash(self.commit))
        return PullRequestState(self.pr, frozenset(self.issues), commit)

    @classmethod
    def from_state(cls, state: PullRequestState) -> HistoryRecord:
        if state.commit.status is CommitStatus.PLACEHOLDER:
            return cls(pr=state.pr_id, issues=sorted(state.issue_ids))
        commit = state.commit.hash.hex if state.commit.hash is not None else None
        return cls(pr=state.pr_id, issues=sorted(state.issue_ids), commit=commit)

    def to_json(self) -> str:
        return json.dumps(self.model_dump(exclude_unset=True), separators=(",", ":"))


_RECORDS = TypeAdapter(list[HistoryRecord])


def _unique_by_pr(states: Iterable[PullRequestState]) -> dict[str, PullRequestState]:
    by_pr: dict[str, PullRequestState] = {}
    for state in states:
        by_pr[state.pr_id] = state
    return by_pr


def deserialize_states(text: str) -> set[PullRequestState]:
    """Decode a history file. Blank text is an empty history."""
    if not text.strip():
        return set()
    try:
        records = _RECORDS.validate_python(json.loads(text))
    except json.JSONDecodeError as exc:
        raise HistoryFormatError(f"history is not valid JSON: {exc}") from exc
    except ValidationError as exc:
        raise HistoryFormatError(f"history records are malformed: {exc}") from exc

    states = [record.to_state() for record in records]
    by_pr = _unique_by_pr(states)
    if len(by_pr) != len(states):
        _logger.warning("History holds %d duplicate entries; keeping the last of each", len(states) - len(by_pr))
    return set(by_pr.values())


def serialize_states(added: Sequence[PullRequestState], existing: Iterable[PullRequestState]) -> str:
    """Encode *existing* with every entry for a pull request in *added* replaced.

    Entries are sorted by pull request id so the output is deterministic.
    """
    by_pr = _unique_by_pr(existing)
    by_pr.update(_unique_by_pr(added))
    entries = [HistoryRecord.from_state(by_pr[pr_id]).to_json() for pr_id in sorted(by_pr)]
    return "[\n" + ",\n".join(entries) + "\n]"
