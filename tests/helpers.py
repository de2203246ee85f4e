from __future__ import annotations

from typing import Any, Dict, Optional


def raw_event(
    event_type: str,
    repo: str = "alice/proj",
    created_at: str = "2026-10-19T08:00:00Z",
    payload: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    return {
        "id": "1",
        "type": event_type,
        "repo": {"name": repo},
        "payload": payload if payload is not None else {},
        "created_at": created_at,
    }
