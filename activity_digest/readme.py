from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from .config import TimeWindow
from .errors import ReadmeUpdateError
from .formatting import format_long_time

START_MARKER = "<!-- GITHUB_ACTIVITY_START -->"
END_MARKER = "<!-- GITHUB_ACTIVITY_END -->"

logger = logging.getLogger(__name__)


def update_readme(
    path: Path,
    summary: str,
    badges: str,
    window: Optional[TimeWindow] = None,
    now: Optional[datetime] = None,
) -> str:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ReadmeUpdateError(f"Unable to read {path}: {exc}") from exc

    updated_at = now or datetime.now().astimezone()
    updated = splice_readme(content, render_activity_block(summary, badges, updated_at, window))

    try:
        path.write_text(updated, encoding="utf-8")
    except OSError as exc:
        raise ReadmeUpdateError(f"Unable to write {path}: {exc}") from exc
    logger.info("%s updated", path)
    return updated


def render_activity_block(
    summary: str,
    badges: str,
    updated_at: datetime,
    window: Optional[TimeWindow] = None,
) -> str:
    if window:
        stamp = f"{format_long_time(updated_at.astimezone(window.tzinfo))} ({window.label} time)"
    else:
        stamp = format_long_time(updated_at.astimezone())
    lines = [
        "",
        "",
        "## Recent Activity Stats",
        "",
        badges,
        "",
        summary,
        "",
        f"*Last updated: {stamp} *",
        "",
        "",
    ]
    return "\n".join(lines)


def splice_readme(content: str, block: str) -> str:
    """Replace everything between the activity markers with ``block``."""
    for marker in (START_MARKER, END_MARKER):
        count = content.count(marker)
        if count == 0:
            raise ReadmeUpdateError(
                f"README markers not found. Please add {START_MARKER} and {END_MARKER} markers."
            )
        if count > 1:
            raise ReadmeUpdateError(f"{marker} appears {count} times; exactly one is required")
    start = content.find(START_MARKER)
    end = content.find(END_MARKER)
    body_start = start + len(START_MARKER)
    if end < body_start:
        raise ReadmeUpdateError(f"{END_MARKER} must come after {START_MARKER}")
    return content[:body_start] + block + content[end:]
