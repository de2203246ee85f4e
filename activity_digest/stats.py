from __future__ import annotations

from typing import Iterable, Set

from .models import ActivityEvent, ActivityStats, IssuesEvent, PullRequestEvent, PushEvent

_BADGE_STYLE = "flat"


def calculate_activity_stats(events: Iterable[ActivityEvent]) -> ActivityStats:
    commits = 0
    pull_requests = 0
    issues = 0
    repos: Set[str] = set()

    for event in events:
        repos.add(event.repo)
        if isinstance(event, PushEvent):
            commits += event.commit_count
        elif isinstance(event, PullRequestEvent) and event.action == "opened":
            pull_requests += 1
        elif isinstance(event, IssuesEvent) and event.action == "opened":
            issues += 1

    return ActivityStats(
        commit_count=commits,
        repo_count=len(repos),
        pr_count=pull_requests,
        issue_count=issues,
    )


def generate_badges(stats: ActivityStats) -> str:
    badges = [
        _badge("Recent Commits", stats.commit_count, "blue"),
        _badge("Active Repos", stats.repo_count, "green"),
        _badge("Pull Requests", stats.pr_count, "orange"),
        _badge("Issues Opened", stats.issue_count, "red"),
    ]
    return " ".join(badges)


def _badge(label: str, value: int, color: str) -> str:
    encoded = label.replace(" ", "%20")
    return f"![{label}](https://img.shields.io/badge/{encoded}-{value}-{color}?style={_BADGE_STYLE}&logoColor=white)"
