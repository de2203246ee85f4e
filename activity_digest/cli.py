from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Any, Optional

from .activity import fetch_recent_activity
from .config import PromptConfig, Settings, load_prompt_config
from .errors import ActivityDigestError
from .formatting import format_activity
from .github_api import GitHubSession
from .llm import generate_summary
from .models import ActivityStats
from .readme import update_readme
from .stats import calculate_activity_stats, generate_badges

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class RunResult:
    stats: ActivityStats
    badges: str
    summary: str


def run(
    settings: Settings,
    prompt: PromptConfig,
    session: Optional[GitHubSession] = None,
    llm_client: Optional[Any] = None,
) -> RunResult:
    logger.info("Fetching recent GitHub activity for %s", settings.username)
    events = fetch_recent_activity(settings, session=session)
    logger.info("Found %d recent events", len(events))

    stats = calculate_activity_stats(events)
    logger.info(
        "Stats: %d commits, %d repos, %d PRs, %d issues",
        stats.commit_count,
        stats.repo_count,
        stats.pr_count,
        stats.issue_count,
    )
    badges = generate_badges(stats)
    activity = format_activity(events, window=settings.window)
    logger.debug("Formatted activity:\n%s", activity)

    summary = generate_summary(activity, prompt, settings, client=llm_client)
    logger.info("Updating %s", settings.readme_path)
    update_readme(settings.readme_path, summary, badges, window=settings.window)
    return RunResult(stats=stats, badges=badges, summary=summary)


def main() -> None:
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(level_name)
    logging.basicConfig(
        level=level if isinstance(level, int) else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    if not isinstance(level, int):
        logger.error("Invalid LOG_LEVEL %r", level_name)
        sys.exit(1)
    try:
        settings = Settings.from_env()
        prompt = load_prompt_config(settings.prompt_path)
        logger.info("Loaded config: %s - %s", prompt.name, prompt.description)
        logger.info("Using model: %s with temperature: %s", prompt.model, prompt.temperature)
        result = run(settings, prompt)
    except ActivityDigestError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        sys.exit(1)
    except Exception:
        logger.exception("Unexpected error while generating the activity digest")
        sys.exit(1)

    logger.info("Generated badges: %s", result.badges)
    logger.info("Generated summary: %s", result.summary)


if __name__ == "__main__":  # pragma: no cover
    main()
