from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Type


@dataclass(slots=True, frozen=True)
class ActivityEvent:
    type: str
    repo: str
    created_at: datetime

    @property
    def repo_owner(self) -> str:
        return self.repo.split("/", 1)[0]


@dataclass(slots=True, frozen=True)
class PushEvent(ActivityEvent):
    commit_count: int = 0


@dataclass(slots=True, frozen=True)
class CreateEvent(ActivityEvent):
    ref_type: Optional[str] = None


@dataclass(slots=True, frozen=True)
class IssuesEvent(ActivityEvent):
    action: Optional[str] = None


@dataclass(slots=True, frozen=True)
class PullRequestEvent(ActivityEvent):
    action: Optional[str] = None


@dataclass(slots=True, frozen=True)
class WatchEvent(ActivityEvent):
    pass


@dataclass(slots=True, frozen=True)
class ForkEvent(ActivityEvent):
    pass


@dataclass(slots=True, frozen=True)
class ReleaseEvent(ActivityEvent):
    pass


@dataclass(slots=True, frozen=True)
class ActivityStats:
    commit_count: int = 0
    repo_count: int = 0
    pr_count: int = 0
    issue_count: int = 0


_SIMPLE_EVENTS: Dict[str, Type[ActivityEvent]] = {
    "WatchEvent": WatchEvent,
    "ForkEvent": ForkEvent,
    "ReleaseEvent": ReleaseEvent,
}


def parse_event(raw: Dict[str, Any]) -> ActivityEvent:
    """Build the typed event for a raw ``/events`` item.

    Payload fields are read leniently: a missing or oddly shaped payload
    yields zero counts and ``None`` attributes instead of an error.
    """
    event_type = str(raw.get("type") or "")
    repo = str((raw.get("repo") or {}).get("name", ""))
    created_at = parse_timestamp(str(raw.get("created_at", "")))
    payload = raw.get("payload")
    if not isinstance(payload, dict):
        payload = {}

    if event_type == "PushEvent":
        commits = payload.get("commits")
        commit_count = len(commits) if isinstance(commits, list) else 0
        return PushEvent(event_type, repo, created_at, commit_count=commit_count)
    if event_type == "CreateEvent":
        return CreateEvent(event_type, repo, created_at, ref_type=payload.get("ref_type"))
    if event_type == "IssuesEvent":
        return IssuesEvent(event_type, repo, created_at, action=payload.get("action"))
    if event_type == "PullRequestEvent":
        return PullRequestEvent(event_type, repo, created_at, action=payload.get("action"))
    event_cls = _SIMPLE_EVENTS.get(event_type, ActivityEvent)
    return event_cls(event_type, repo, created_at)


def parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))
