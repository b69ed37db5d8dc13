"""Live pull request data as delivered by a review-hosting forge.

Fetching this data is somebody else's job; these models only define the
shape the notifier reads. ``PullRequest.model_validate`` accepts forge-shaped
dicts with camelCase or snake_case keys.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ForgeModel(BaseModel):
    """Base for forge payload models: frozen, camelCase aware, extras ignored."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )


class User(ForgeModel):
    id: str
    username: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> object:
        # Forges commonly send numeric user ids.
        if isinstance(value, int):
            return str(value)
        return value


class Comment(ForgeModel):
    author: User
    body: str = ""
    id: str = ""
    created_at: datetime | None = None


class Repository(ForgeModel):
    name: str
    url: str = ""

    @field_validator("name")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("repository name must be non-empty")
        return value


class PullRequest(ForgeModel):
    """A pull request as currently seen on the forge."""

    id: str
    repository: Repository
    title: str = ""
    body: str = ""
    labels: frozenset[str] = Field(default_factory=frozenset)
    comments: tuple[Comment, ...] = ()

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> object:
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("body", mode="before")
    @classmethod
    def _none_body(cls, value: object) -> object:
        return "" if value is None else value

    @property
    def state_id(self) -> str:
        """Key of this pull request in the notification history."""
        return f"{self.repository.name}#{self.id}"

    def comments_by(self, author_id: str) -> tuple[Comment, ...]:
        return tuple(comment for comment in self.comments if comment.author.id == author_id)
