"""Derive a pull request's notification state from its live data.

Everything here is read-only. Issue references come from the "Issues"
section of the pull request body, parsed in two stages: a block-level
matcher finds the section, a line-level matcher picks the issue ids out of
it. The resulting commit comes from the integrator's "Pushed as commit"
comment, and only once the pull request carries the integrated label.
"""

from __future__ import annotations

import logging
import re

from prnotify.config import DEFAULT_INTEGRATED_LABEL
from prnotify.models.hash import Hash
from prnotify.models.pull_request import PullRequest
from prnotify.models.state import PullRequestState

_logger = logging.getLogger(__name__)

# A blank line, an "## Issue(s)" / "### Issue(s)" heading, then one or more
# lines that look like issue links.
_ISSUES_BLOCK = re.compile(r"\n\n###? Issues?((?:\n(?: \* )?\[.*)+)")
_ISSUE_LINE = re.compile(r"^(?: \* )?\[(\S+)\]\(.*\): .*$", re.MULTILINE)
_PUSHED_AS_COMMIT = re.compile(r"Pushed as commit ([a-f0-9]{40})\.")


def find_issues_block(body: str) -> str | None:
    """Return the lines of the first "Issues" section in *body*, if any."""
    match = _ISSUES_BLOCK.search(body)
    if match is None:
        return None
    return match.group(1)


def parse_issue_lines(block: str) -> set[str]:
    """Return the ids of all ``[ID](link): description`` lines in *block*.

    Lines that do not have that shape are skipped.
    """
    return {match.group(1) for match in _ISSUE_LINE.finditer(block)}


def parse_issues(body: str) -> set[str]:
    """Return the issue ids referenced by a pull request body.

    A missing or malformed section yields an empty set.
    """
    block = find_issues_block(body)
    if block is None:
        return set()
    return parse_issue_lines(block)


def resulting_commit_hash(
    pr: PullRequest,
    integrator_id: str,
    integrated_label: str = DEFAULT_INTEGRATED_LABEL,
) -> Hash | None:
    """Return the commit *pr* was integrated as, or ``None``.

    Only comments written by *integrator_id* count. When several match,
    the earliest one in comment order wins.
    """
    if integrated_label not in pr.labels:
        return None
    for comment in pr.comments_by(integrator_id):
        match = _PUSHED_AS_COMMIT.search(comment.body)
        if match is not None:
            return Hash(match.group(1))
    _logger.debug("%s is labeled %r but has no pushed-as comment yet", pr.state_id, integrated_label)
    return None


def snapshot_of(
    pr: PullRequest,
    integrator_id: str,
    integrated_label: str = DEFAULT_INTEGRATED_LABEL,
) -> PullRequestState:
    """Build the current :class:`PullRequestState` of *pr*."""
    return PullRequestState.of(
        pr,
        parse_issues(pr.body),
        resulting_commit_hash(pr, integrator_id, integrated_label),
    )
