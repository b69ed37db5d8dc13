"""Tests for the hash, commit variant and live pull request models."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from support import COMMIT_HEX

from prnotify.exceptions import MalformedHashError
from prnotify.models import CommitStatus, Hash, PullRequest, PullRequestState, Repository, ResultingCommit

# ------------------------------------------------------------------
# Hash
# ------------------------------------------------------------------


class TestHash:
    def test_valid_hash(self) -> None:
        assert Hash(COMMIT_HEX).hex == COMMIT_HEX
        assert str(Hash(COMMIT_HEX)) == COMMIT_HEX

    def test_upper_case_is_normalised(self) -> None:
        assert Hash(COMMIT_HEX.upper()) == Hash(COMMIT_HEX)

    @pytest.mark.parametrize(
        "value",
        ["", "abc", COMMIT_HEX[:-1], COMMIT_HEX + "0", "g" * 40, " " + COMMIT_HEX, COMMIT_HEX + "\n"],
    )
    def test_malformed_hash_raises(self, value: str) -> None:
        with pytest.raises(MalformedHashError):
            Hash(value)

    def test_zero(self) -> None:
        zero = Hash.zero()
        assert zero.hex == "0" * 40
        assert zero.is_zero
        assert not Hash(COMMIT_HEX).is_zero

    def test_abbreviate(self) -> None:
        assert Hash(COMMIT_HEX).abbreviate() == "01234567"


# ------------------------------------------------------------------
# ResultingCommit / PullRequestState
# ------------------------------------------------------------------


class TestResultingCommit:
    def test_of_none_is_unknown(self) -> None:
        commit = ResultingCommit.of(None)
        assert commit.status is CommitStatus.UNKNOWN
        assert not commit.is_present

    def test_of_hash_is_known(self) -> None:
        commit = ResultingCommit.of(Hash(COMMIT_HEX))
        assert commit.is_known
        assert commit.hash == Hash(COMMIT_HEX)

    def test_zero_hash_collapses_to_placeholder(self) -> None:
        commit = ResultingCommit.known(Hash.zero())
        assert commit == ResultingCommit.placeholder()
        assert commit.hash is None
        assert commit.is_present

    def test_known_requires_hash(self) -> None:
        with pytest.raises(ValueError):
            ResultingCommit(CommitStatus.KNOWN)

    def test_unknown_rejects_hash(self) -> None:
        with pytest.raises(ValueError):
            ResultingCommit(CommitStatus.UNKNOWN, Hash(COMMIT_HEX))


class TestPullRequestState:
    def test_structural_equality(self) -> None:
        a = PullRequestState("jdk#1", frozenset({"JDK-1", "JDK-2"}), ResultingCommit.unknown())
        b = PullRequestState("jdk#1", frozenset({"JDK-2", "JDK-1"}), ResultingCommit.unknown())
        assert a == b
        assert hash(a) == hash(b)
        assert a in {b}

    def test_commit_is_part_of_equality(self) -> None:
        a = PullRequestState("jdk#1", frozenset(), ResultingCommit.unknown())
        assert a != a.with_commit(ResultingCommit.placeholder())
        assert a != a.with_commit(ResultingCommit.known(Hash(COMMIT_HEX)))

    def test_issue_ids_are_frozen(self) -> None:
        state = PullRequestState("jdk#1", {"JDK-1"})  # type: ignore[arg-type]
        assert isinstance(state.issue_ids, frozenset)

    def test_empty_id_rejected(self) -> None:
        with pytest.raises(ValueError):
            PullRequestState("")


# ------------------------------------------------------------------
# PullRequest
# ------------------------------------------------------------------


class TestPullRequest:
    SAMPLE_PAYLOAD: dict = {
        "id": 1234,
        "repository": {"name": "openjdk/jdk", "url": "https://git.example.org/openjdk/jdk"},
        "title": "8000001: Fix the thing",
        "body": "Fix\n\n### Issue\n * [JDK-8000001](https://bugs.example.org/browse/JDK-8000001): Fix the thing",
        "labels": ["integrated", "rfr"],
        "comments": [
            {"author": {"id": 42, "username": "bridgebot"}, "body": "hello", "createdAt": "2026-01-01T10:00:00Z"},
        ],
        "unrelated": True,
    }

    def test_parses_forge_payload(self) -> None:
        pr = PullRequest.model_validate(self.SAMPLE_PAYLOAD)
        assert pr.id == "1234"
        assert pr.repository == Repository(name="openjdk/jdk", url="https://git.example.org/openjdk/jdk")
        assert pr.labels == frozenset({"integrated", "rfr"})
        assert pr.comments[0].author.id == "42"
        assert pr.comments[0].created_at == datetime(2026, 1, 1, 10, tzinfo=UTC)

    def test_state_id(self) -> None:
        pr = PullRequest.model_validate(self.SAMPLE_PAYLOAD)
        assert pr.state_id == "openjdk/jdk#1234"

    def test_null_body_is_empty(self) -> None:
        pr = PullRequest.model_validate({**self.SAMPLE_PAYLOAD, "body": None})
        assert pr.body == ""

    def test_comments_by(self) -> None:
        pr = PullRequest.model_validate(self.SAMPLE_PAYLOAD)
        assert len(pr.comments_by("42")) == 1
        assert pr.comments_by("7") == ()
