"""Commit hash value type."""

from __future__ import annotations

import dataclasses
import re

from prnotify.exceptions import MalformedHashError

_HEX40 = re.compile(r"[0-9a-f]{40}")


@dataclasses.dataclass(frozen=True, order=True)
class Hash:
    """A full 40 character commit hash.

    Validated at construction; upper-case input is normalised to lower case.
    """

    hex: str

    def __post_init__(self) -> None:
        if not isinstance(self.hex, str):
            raise MalformedHashError(repr(self.hex))
        normalized = self.hex.lower()
        if not _HEX40.fullmatch(normalized):
            raise MalformedHashError(self.hex)
        object.__setattr__(self, "hex", normalized)

    @classmethod
    def zero(cls) -> Hash:
        """The all-zero hash, used as the legacy "no commit recorded" marker."""
        return cls("0" * 40)

    @property
    def is_zero(self) -> bool:
        return self.hex == "0" * 40

    def abbreviate(self, length: int = 8) -> str:
        return self.hex[:length]

    def __str__(self) -> str:
        return self.hex
