"""Abstract bases for the ticket tracker and the Git hosting platform."""

from abc import ABC, abstractmethod


class TrackerError(Exception):
    """Raised when a ticket lookup fails.

    status is the HTTP status code, or None for connection and parse
    failures.
    """

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class GitPlatformError(Exception):
    """Raised when a Git platform API call fails."""

    pass


class TicketTrackerAdapter(ABC):
    """Abstract interface for ticket trackers."""

    @abstractmethod
    def get_issue_summary(self, key: str) -> str:
        """Fetch the summary (title) of the ticket with this key."""
        ...

    @abstractmethod
    def browse_url(self, key: str) -> str:
        """Return the human-facing link to the ticket."""
        ...


class GitPlatformAdapter(ABC):
    """Abstract interface for Git hosting platforms."""

    @abstractmethod
    def update_pr_body(self, repo: str, pr_number: int, body: str) -> None:
        """Replace the description of a pull request."""
        ...
