"""Snapshots of Greenhouse jobs, job posts and job boards."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal

PostStatus = Literal["live", "offline"]


@dataclass(slots=True)
class BaseInfo:
    id: int
    name: str


@dataclass(slots=True)
class JobInfo(BaseInfo):
    """A job requisition and every post it had when it was last scraped."""

    posts: List["PostInfo"] = field(default_factory=list)

    @property
    def post_ids(self) -> set[int]:
        return {post.id for post in self.posts}


@dataclass(slots=True)
class PostInfo(BaseInfo):
    """One job post on one board at one location.

    Read-only snapshot: remote changes are observed by scraping the job
    again, never by editing this object.
    """

    location: str
    board_info: BaseInfo
    job: JobInfo = field(repr=False, compare=False)
    is_live: bool = False

    @property
    def log_name(self) -> str:
        return f"{self.name} | {self.location}"


@dataclass(frozen=True, slots=True)
class JobBoard:
    id: int
    name: str
    publish_status_id: int
    unpublish_status_id: int

    def status_id(self, status: PostStatus) -> int:
        return self.publish_status_id if status == "live" else self.unpublish_status_id
