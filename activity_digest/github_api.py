from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests
from requests import Response

from .errors import ActivityFetchError

API_ROOT = "https://api.github.com"
_USER_AGENT = "github-activity-digest/0.1"
_TIMEOUT = 30

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GitHubSession:
    http: requests.Session

    @classmethod
    def create(cls, token: Optional[str] = None) -> "GitHubSession":
        session = requests.Session()
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": _USER_AGENT,
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        session.headers.update(headers)
        return cls(http=session)

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "GitHubSession":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _raise_for_status(response: Response) -> None:
    try:
        response.raise_for_status()
    except requests.HTTPError as error:
        raise ActivityFetchError(
            f"GitHub API request failed: {response.status_code} {_error_message(response)}"
        ) from error


def _error_message(response: Response) -> str:
    if not response.headers.get("Content-Type", "").startswith("application/json"):
        return response.text
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text


def _get(session: GitHubSession, path: str, params: Optional[Dict[str, str]] = None) -> Any:
    url = f"{API_ROOT}{path}"
    logger.debug("GET %s params=%s", url, params)
    try:
        response = session.http.get(url, params=params, timeout=_TIMEOUT)
    except requests.RequestException as error:
        raise ActivityFetchError(f"GitHub API request to {path} failed: {error}") from error
    _raise_for_status(response)
    try:
        return response.json()
    except ValueError as error:
        raise ActivityFetchError(f"GitHub API returned invalid JSON for {path}") from error


def get_user(session: GitHubSession, username: str) -> Dict[str, Any]:
    return _get(session, f"/users/{username}")


def list_public_events(session: GitHubSession, username: str, per_page: int = 100) -> List[Dict[str, Any]]:
    events = _get(session, f"/users/{username}/events/public", params={"per_page": str(per_page)})
    if not isinstance(events, list):
        raise ActivityFetchError(f"Unexpected events payload for {username}: {type(events).__name__}")
    return events
