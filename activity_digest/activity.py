from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from .config import Settings, TimeWindow
from .errors import ActivityFetchError
from .github_api import GitHubSession, get_user, list_public_events
from .models import ActivityEvent, parse_event

logger = logging.getLogger(__name__)


def fetch_recent_activity(
    settings: Settings,
    session: Optional[GitHubSession] = None,
    now: Optional[datetime] = None,
) -> List[ActivityEvent]:
    """Return the user's public events on personal repositories, newest first.

    Events on repositories owned by anyone else (organizations included) are
    dropped, as are events older than the settings' time window when one is
    configured.
    """
    if session is None:
        with GitHubSession.create(settings.token) as owned:
            user, raw_events = _fetch_raw(owned, settings)
    else:
        user, raw_events = _fetch_raw(session, settings)

    login = user.get("login")
    if not login:
        raise ActivityFetchError(f"GitHub user lookup for {settings.username} returned no login")

    events = filter_personal_events(_parse_events(raw_events), login, settings.window, now=now)
    if settings.window:
        logger.info(
            "Filtered %d total events to %d personal repo events from past %d hours (%s time)",
            len(raw_events),
            len(events),
            settings.window.hours,
            settings.window.label,
        )
    else:
        logger.info("Filtered %d total events to %d personal repo events", len(raw_events), len(events))
    return events


def filter_personal_events(
    events: List[ActivityEvent],
    login: str,
    window: Optional[TimeWindow] = None,
    now: Optional[datetime] = None,
) -> List[ActivityEvent]:
    kept = [event for event in events if event.repo_owner == login]
    if window is None:
        return kept
    current = now or window.now()
    return [event for event in kept if window.contains(event.created_at, now=current)]


def _fetch_raw(session: GitHubSession, settings: Settings) -> Tuple[Dict[str, Any], List[Dict[str, Any]]]:
    user = get_user(session, settings.username)
    raw_events = list_public_events(session, settings.username, per_page=settings.event_limit)
    return user, raw_events


def _parse_events(raw_events: List[Dict[str, Any]]) -> List[ActivityEvent]:
    parsed: List[ActivityEvent] = []
    for raw in raw_events:
        try:
            parsed.append(parse_event(raw))
        except (AttributeError, TypeError, ValueError) as exc:
            raise ActivityFetchError(f"Unexpected event shape from GitHub: {raw!r:.80}") from exc
    return parsed
