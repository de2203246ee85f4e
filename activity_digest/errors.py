from __future__ import annotations


class ActivityDigestError(Exception):
    """Base class for every failure that aborts a digest run."""


class ConfigLoadError(ActivityDigestError):
    """The prompt file or the environment settings could not be loaded."""


class ActivityFetchError(ActivityDigestError):
    """A GitHub REST API call failed."""


class SummaryGenerationError(ActivityDigestError):
    """The chat-completion call failed."""


class ReadmeUpdateError(ActivityDigestError):
    """The README markers are missing or the file could not be read or written."""
