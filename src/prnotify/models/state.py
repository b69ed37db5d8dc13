"""Persisted notification state of a single pull request."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from enum import StrEnum
from typing import TYPE_CHECKING

from prnotify.models.hash import Hash

if TYPE_CHECKING:
    from prnotify.models.pull_request import PullRequest


class CommitStatus(StrEnum):
    UNKNOWN = "unknown"
    """No commit recorded yet (the pull request is not integrated)."""
    PLACEHOLDER = "placeholder"
    """Legacy record written before commits were tracked."""
    KNOWN = "known"
    """A real integration commit."""


@dataclasses.dataclass(frozen=True)
class ResultingCommit:
    """Three-valued integration commit of a pull request.

    Use the ``unknown``/``placeholder``/``known``/``of`` constructors rather
    than building instances by hand.
    """

    status: CommitStatus
    hash: Hash | None = None

    def __post_init__(self) -> None:
        if self.status is CommitStatus.KNOWN:
            if self.hash is None:
                raise ValueError("a known commit needs a hash")
            if self.hash.is_zero:
                # The zero hash is the legacy marker, never a real commit.
                object.__setattr__(self, "status", CommitStatus.PLACEHOLDER)
                object.__setattr__(self, "hash", None)
        elif self.hash is not None:
            raise ValueError(f"{self.status} commit must not carry a hash")

    @classmethod
    def unknown(cls) -> ResultingCommit:
        return cls(CommitStatus.UNKNOWN)

    @classmethod
    def placeholder(cls) -> ResultingCommit:
        return cls(CommitStatus.PLACEHOLDER)

    @classmethod
    def known(cls, commit: Hash) -> ResultingCommit:
        return cls(CommitStatus.KNOWN, commit)

    @classmethod
    def of(cls, commit: Hash | None) -> ResultingCommit:
        """Map an extractor result onto the variant."""
        return cls.unknown() if commit is None else cls.known(commit)

    @property
    def is_known(self) -> bool:
        return self.status is CommitStatus.KNOWN

    @property
    def is_placeholder(self) -> bool:
        return self.status is CommitStatus.PLACEHOLDER

    @property
    def is_present(self) -> bool:
        """Whether storage holds some commit value (real or legacy marker)."""
        return self.status is not CommitStatus.UNKNOWN

    def __str__(self) -> str:
        return self.hash.hex if self.hash is not None else f"<{self.status}>"


@dataclasses.dataclass(frozen=True)
class PullRequestState:
    """Comparable summary of what listeners have been told about a pull request."""

    pr_id: str
    issue_ids: frozenset[str] = frozenset()
    commit: ResultingCommit = dataclasses.field(default_factory=ResultingCommit.unknown)

    def __post_init__(self) -> None:
        if not self.pr_id:
            raise ValueError("pr_id must be non-empty")
        if not isinstance(self.issue_ids, frozenset):
            object.__setattr__(self, "issue_ids", frozenset(self.issue_ids))

    @classmethod
    def of(cls, pr: PullRequest, issue_ids: Iterable[str], commit: Hash | None) -> PullRequestState:
        return cls(pr.state_id, frozenset(issue_ids), ResultingCommit.of(commit))

    def with_commit(self, commit: ResultingCommit) -> PullRequestState:
        return dataclasses.replace(self, commit=commit)
