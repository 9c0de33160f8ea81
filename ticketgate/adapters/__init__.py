"""Ticket tracker and Git platform adapters."""

from ticketgate.adapters.base import (
    GitPlatformAdapter,
    GitPlatformError,
    TicketTrackerAdapter,
    TrackerError,
)
from ticketgate.adapters.github import GitHubAdapter
from ticketgate.adapters.jira import JiraAdapter

__all__ = [
    "GitPlatformAdapter",
    "GitPlatformError",
    "GitHubAdapter",
    "JiraAdapter",
    "TicketTrackerAdapter",
    "TrackerError",
]
