"""Jira Cloud REST API adapter (issue lookup only)."""

import threading
from typing import Any, Dict

import requests
from requests.auth import HTTPBasicAuth

from ticketgate.adapters.base import TicketTrackerAdapter, TrackerError

AUTH_BEARER = "bearer"
AUTH_BASIC = "basic"


def _summary_from_api(data: Any) -> str:
    fields = data.get("fields") if isinstance(data, dict) else None
    summary = fields.get("summary") if isinstance(fields, dict) else None
    if not isinstance(summary, str):
        raise TrackerError("parse error: response has no fields.summary")
    return summary


class JiraAdapter(TicketTrackerAdapter):
    """Jira REST v3 implementation.

    auth="bearer" sends the token as a bearer token (PAT). auth="basic"
    sends user:token as HTTP basic auth (Atlassian Cloud API tokens).

    requests.Session is not documented as thread-safe, so each thread that
    calls the adapter (parallel lookups) gets its own session.
    """

    def __init__(
        self,
        domain: str,
        token: str,
        user: str | None = None,
        auth: str = AUTH_BEARER,
        timeout: float = 10,
    ) -> None:
        if auth == AUTH_BASIC:
            if not user:
                raise ValueError("Jira basic auth requires a user")
        elif auth != AUTH_BEARER:
            raise ValueError(f"Unknown Jira auth mode: {auth}")
        self._domain = domain.strip().rstrip("/")
        self._token = token
        self._user = user
        self._auth = auth
        self._timeout = timeout
        self._local = threading.local()

    def _new_session(self) -> requests.Session:
        session = requests.Session()
        session.headers["Accept"] = "application/json"
        if self._auth == AUTH_BASIC:
            session.auth = HTTPBasicAuth(self._user, self._token)
        else:
            session.headers["Authorization"] = f"Bearer {self._token}"
        return session

    @property
    def _session(self) -> requests.Session:
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._new_session()
            self._local.session = session
        return session

    def _issue_url(self, key: str) -> str:
        return f"https://{self._domain}/rest/api/3/issue/{key}"

    def browse_url(self, key: str) -> str:
        return f"https://{self._domain}/browse/{key}"

    def get_issue_summary(self, key: str) -> str:
        try:
            resp = self._session.request("GET", self._issue_url(key), timeout=self._timeout)
        except requests.RequestException as e:
            raise TrackerError(f"connection error: {e}") from e
        if not 200 <= resp.status_code < 300:
            raise TrackerError(f"HTTP {resp.status_code}", status=resp.status_code)
        try:
            data: Dict[str, Any] = resp.json()
        except ValueError as e:
            raise TrackerError(f"parse error: {e}") from e
        return _summary_from_api(data)
