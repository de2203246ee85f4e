from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from .errors import ConfigLoadError

DEFAULT_PROMPT_PATH = Path(".prompt.yaml")
DEFAULT_README_PATH = Path("README.md")
DEFAULT_USERNAME = "stonega"
DEFAULT_TIMEZONE = "Asia/Shanghai"
DEFAULT_WINDOW_HOURS = 24
MODELS_ENDPOINT = "https://models.github.ai/inference"

_WINDOWED_EVENT_LIMIT = 100
_ALL_TIME_EVENT_LIMIT = 50


@dataclass(slots=True, frozen=True)
class PromptMessage:
    role: str
    content: str


@dataclass(slots=True, frozen=True)
class PromptConfig:
    name: str
    description: str
    model: str
    temperature: float
    messages: Tuple[PromptMessage, ...]


@dataclass(slots=True, frozen=True)
class TimeWindow:
    """Rolling window ending at "now", evaluated in a fixed timezone."""

    duration: timedelta = timedelta(hours=DEFAULT_WINDOW_HOURS)
    timezone: str = DEFAULT_TIMEZONE

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @property
    def hours(self) -> int:
        return int(self.duration.total_seconds() // 3600)

    @property
    def label(self) -> str:
        # "Asia/Shanghai" -> "Shanghai", "America/New_York" -> "New York"
        return self.timezone.rsplit("/", 1)[-1].replace("_", " ")

    def now(self) -> datetime:
        return datetime.now(self.tzinfo)

    def contains(self, moment: datetime, now: Optional[datetime] = None) -> bool:
        current = (now or self.now()).astimezone(self.tzinfo)
        return moment.astimezone(self.tzinfo) >= current - self.duration


@dataclass(slots=True)
class Settings:
    token: str
    username: str = DEFAULT_USERNAME
    window: Optional[TimeWindow] = field(default_factory=TimeWindow)
    prompt_path: Path = DEFAULT_PROMPT_PATH
    readme_path: Path = DEFAULT_README_PATH
    models_endpoint: str = MODELS_ENDPOINT

    @property
    def event_limit(self) -> int:
        return _WINDOWED_EVENT_LIMIT if self.window else _ALL_TIME_EVENT_LIMIT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        token = env.get("GITHUB_TOKEN", "").strip()
        if not token:
            raise ConfigLoadError("GITHUB_TOKEN is not set; it is required for the GitHub and GitHub Models APIs")

        return cls(
            token=token,
            username=env.get("GITHUB_USERNAME") or DEFAULT_USERNAME,
            window=_window_from_env(env),
            prompt_path=Path(env.get("PROMPT_FILE") or DEFAULT_PROMPT_PATH),
            readme_path=Path(env.get("README_FILE") or DEFAULT_README_PATH),
        )


def _window_from_env(env: Mapping[str, str]) -> Optional[TimeWindow]:
    raw_hours = env.get("ACTIVITY_WINDOW_HOURS") or str(DEFAULT_WINDOW_HOURS)
    try:
        hours = int(raw_hours)
    except ValueError as exc:
        raise ConfigLoadError(f"ACTIVITY_WINDOW_HOURS must be an integer, got {raw_hours!r}") from exc
    if hours < 0:
        raise ConfigLoadError(f"ACTIVITY_WINDOW_HOURS must not be negative, got {hours}")
    if hours == 0:
        return None

    timezone = env.get("ACTIVITY_TIMEZONE") or DEFAULT_TIMEZONE
    try:
        ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigLoadError(f"Unknown ACTIVITY_TIMEZONE {timezone!r}") from exc
    return TimeWindow(duration=timedelta(hours=hours), timezone=timezone)


def load_prompt_config(path: Optional[Path] = None) -> PromptConfig:
    config_path = path or DEFAULT_PROMPT_PATH
    try:
        with config_path.open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle)
    except OSError as exc:
        raise ConfigLoadError(f"Unable to read prompt config {config_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigLoadError(f"Prompt config {config_path} is not valid YAML: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigLoadError(f"Prompt config {config_path} must be a mapping")

    try:
        return _parse_prompt_config(raw)
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigLoadError(f"Prompt config {config_path} is malformed: {exc!r}") from exc


def _parse_prompt_config(raw: Dict[str, Any]) -> PromptConfig:
    parameters = raw["modelParameters"]
    messages_raw = raw["messages"]
    if not isinstance(messages_raw, list):
        raise TypeError("messages must be a list")

    messages = tuple(
        PromptMessage(role=_require_str(item, "role"), content=_require_str(item, "content"))
        for item in messages_raw
    )
    return PromptConfig(
        name=_require_str(raw, "name"),
        description=_require_str(raw, "description"),
        model=_require_str(raw, "model"),
        temperature=float(parameters["temperature"]),
        messages=messages,
    )


def _require_str(raw: Dict[str, Any], key: str) -> str:
    value = raw[key]
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string, got {type(value).__name__}")
    return value
