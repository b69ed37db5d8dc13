#!/usr/bin/env python3
"""Print a notification history file, or compare two of them.

Usage
-----
    python scripts/show_history.py scratch/notify/history
    python scripts/show_history.py old-history new-history
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from prnotify.logging import configure_logging
from prnotify.models import PullRequestState
from prnotify.state import deserialize_states, diff_histories

MAX_VAL_WIDTH = 60


def _truncate(val: str, width: int = MAX_VAL_WIDTH) -> str:
    if len(val) <= width:
        return val
    return val[: width - 3] + "..."


def _load(path: Path) -> set[PullRequestState]:
    return deserialize_states(path.read_text(encoding="utf-8"))


def _print_table(header: tuple[str, ...], rows: list[tuple[str, ...]]) -> None:
    widths = [max([len(header[i])] + [len(_truncate(row[i])) for row in rows]) for i in range(len(header))]
    line = "  ".join(f"{title:<{width}}" for title, width in zip(header, widths))
    print(line)
    print("─" * len(line))
    for row in rows:
        print("  ".join(f"{_truncate(value):<{width}}" for value, width in zip(row, widths)))


def show(path: Path) -> None:
    states = sorted(_load(path), key=lambda state: state.pr_id)
    if not states:
        print("History is empty.")
        return
    rows = [(state.pr_id, ",".join(sorted(state.issue_ids)), str(state.commit)) for state in states]
    _print_table(("PR", "Issues", "Commit"), rows)
    print(f"\n{len(rows)} pull request(s).")


def diff(old: Path, new: Path) -> None:
    print(f"Old: {old}")
    print(f"New: {new}")
    print()

    rows = diff_histories(_load(old), _load(new))
    if not rows:
        print("No differences found.")
        return
    _print_table(("PR", "Field", "Old", "New"), rows)
    print(f"\n{len(rows)} difference(s) found.")


def main() -> None:
    parser = argparse.ArgumentParser(description="Show or diff notification history files.")
    parser.add_argument("history", help="History file")
    parser.add_argument("other", nargs="?", help="Newer history file to compare against")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        configure_logging(level=logging.DEBUG)

    if args.other is None:
        show(Path(args.history))
    else:
        diff(Path(args.history), Path(args.other))


if __name__ == "__main__":
    main()
