"""Compare two notification histories entry by entry."""

from __future__ import annotations

from collections.abc import Iterable

from prnotify.models.state import PullRequestState

MISSING = "<missing>"


def diff_histories(
    old: Iterable[PullRequestState],
    new: Iterable[PullRequestState],
) -> list[tuple[str, str, str, str]]:
    """Return ``(pr_id, field, old, new)`` rows for every difference.

    ``field`` is ``"pr"`` for entries present on one side only, ``"issues"``
    or ``"commit"`` otherwise. Rows are sorted by pull request id.
    """
    old_by_pr = {state.pr_id: state for state in old}
    new_by_pr = {state.pr_id: state for state in new}

    rows: list[tuple[str, str, str, str]] = []
    for pr_id in sorted(old_by_pr.keys() | new_by_pr.keys()):
        before = old_by_pr.get(pr_id)
        after = new_by_pr.get(pr_id)
        if before is None:
            rows.append((pr_id, "pr", MISSING, "present"))
            continue
        if after is None:
            rows.append((pr_id, "pr", "present", MISSING))
            continue
        if before.issue_ids != after.issue_ids:
            rows.append((pr_id, "issues", ",".join(sorted(before.issue_ids)), ",".join(sorted(after.issue_ids))))
        if before.commit != after.commit:
            rows.append((pr_id, "commit", str(before.commit), str(after.commit)))
    return rows
