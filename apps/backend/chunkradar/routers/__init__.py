"""Router package exports."""

from . import chunks, groups, health, progress, stats, stories, user_settings

__all__ = [
    "chunks",
    "groups",
    "health",
    "progress",
    "stats",
    "stories",
    "user_settings",
]
