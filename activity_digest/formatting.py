from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Sequence

from .config import TimeWindow
from .models import (
    ActivityEvent,
    CreateEvent,
    ForkEvent,
    IssuesEvent,
    PullRequestEvent,
    PushEvent,
    ReleaseEvent,
    WatchEvent,
)

_MAX_ALL_TIME_EVENTS = 20


def format_activity(
    events: Sequence[ActivityEvent],
    window: Optional[TimeWindow] = None,
    now: Optional[datetime] = None,
) -> str:
    """Render events as the plain-text log handed to the summary prompt."""
    current = _localize(now or datetime.now().astimezone(), window)
    lines: List[str] = []
    if window:
        lines.append(
            f"GitHub Activity from the Past {window.hours} Hours "
            f"(as of {format_long_time(current)} {window.label} time):"
        )
    else:
        lines.append(f"Recent GitHub Activity (as of {format_long_time(current)}):")
        events = events[:_MAX_ALL_TIME_EVENTS]
    lines.append("")

    if not events:
        if window:
            lines.append(f"No recent activity in personal repositories during the past {window.hours} hours.")
        else:
            lines.append("No recent activity in personal repositories.")
        return "\n".join(lines) + "\n"

    for event in events:
        stamp = format_short_time(_localize(event.created_at, window))
        lines.append(f"- {stamp}: {describe_event(event)}")
    return "\n".join(lines) + "\n"


def describe_event(event: ActivityEvent) -> str:
    repo = event.repo
    if isinstance(event, PushEvent):
        return f"Pushed {event.commit_count} commit(s) to {repo}"
    if isinstance(event, CreateEvent):
        return f"Created {event.ref_type} in {repo}"
    if isinstance(event, IssuesEvent):
        return f"{event.action} issue in {repo}"
    if isinstance(event, PullRequestEvent):
        return f"{event.action} pull request in {repo}"
    if isinstance(event, WatchEvent):
        return f"Starred {repo}"
    if isinstance(event, ForkEvent):
        return f"Forked {repo}"
    if isinstance(event, ReleaseEvent):
        return f"Released in {repo}"
    return f"{event.type} in {repo}"


def format_long_time(moment: datetime) -> str:
    # October 5, 2026, 09:07 PM
    return f"{moment:%B} {moment.day}, {moment:%Y, %I:%M %p}"


def format_short_time(moment: datetime) -> str:
    # Oct 5, 09:07 PM
    return f"{moment:%b} {moment.day}, {moment:%I:%M %p}"


def _localize(moment: datetime, window: Optional[TimeWindow]) -> datetime:
    if window:
        return moment.astimezone(window.tzinfo)
    return moment.astimezone()
