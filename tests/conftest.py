"""Shared fixtures."""

import logging

import pytest

ENV_VARS = [
    "JIRA_DOMAIN",
    "JIRA_TOKEN",
    "JIRA_TOKEN_FILE",
    "JIRA_USER",
    "JIRA_AUTH",
    "JIRA_TIMEOUT",
    "GITHUB_TOKEN",
    "GITHUB_TOKEN_FILE",
    "GITHUB_API_URL",
    "GITHUB_TIMEOUT",
    "PR_NUMBER",
    "REPO_FULL_NAME",
    "PR_TITLE",
    "BRANCH_NAME",
    "PR_BODY_INPUT",
    "GATE_MODE",
    "GATE_MIN_TITLE_LENGTH",
    "GATE_MARKER_START",
    "GATE_MARKER_END",
    "GATE_HEADING",
    "GATE_MAX_WORKERS",
    "LOGGING_LEVEL",
    "LOGGING_FORMAT",
    "LOGGING_GITHUB_ANNOTATIONS",
]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Environment without any ticketgate settings (CI runners export GITHUB_*)."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def pr_env(clean_env: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Complete environment as a GitHub workflow would export it."""
    clean_env.setenv("JIRA_DOMAIN", "acme.atlassian.net")
    clean_env.setenv("JIRA_TOKEN", "jira-token")
    clean_env.setenv("GITHUB_TOKEN", "gh-token")
    clean_env.setenv("PR_NUMBER", "12")
    clean_env.setenv("REPO_FULL_NAME", "owner/repo")
    clean_env.setenv("PR_TITLE", "PROJ-42 add caching")
    clean_env.setenv("BRANCH_NAME", "feature/PROJ-42-cache")
    clean_env.setenv("PR_BODY_INPUT", "")
    return clean_env


@pytest.fixture(autouse=True)
def reset_ticketgate_logger():
    """Drop handlers setup_logging attached, so no test writes to another test's stream."""
    yield
    logger = logging.getLogger("ticketgate")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
