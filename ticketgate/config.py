"""Configuration loading from YAML and environment.

Secrets (tokens) are taken from environment variables or from files
(Docker/CI secrets). Never put real tokens in config files committed to the
repo. The PR fields use the variable names the CI workflow exports
(PR_NUMBER, REPO_FULL_NAME, PR_TITLE, BRANCH_NAME, PR_BODY_INPUT).
"""

import os
from pathlib import Path
from typing import Any, List, Literal, Mapping

import yaml
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ticketgate.description import DEFAULT_HEADING, DEFAULT_MARKER_END, DEFAULT_MARKER_START, Markers
from ticketgate.gate import EnforcementMode
from ticketgate.keys import DEFAULT_MIN_TITLE_LENGTH
from ticketgate.models import PRContext


def _read_secret(env: Mapping[str, str], env_key: str, file_env_key: str) -> str | None:
    """Read secret from env var or from file path in env (e.g. Docker
    secrets)."""
    value = env.get(env_key)
    if value:
        return value.strip()
    file_path = env.get(file_env_key)
    if file_path:
        return Path(file_path).read_text().strip()
    return None


def _is_placeholder(value: str | None) -> bool:
    return not value or value.startswith("${")


class JiraConfig(BaseSettings):
    """Jira site and credentials."""

    model_config = SettingsConfigDict(env_prefix="JIRA_", extra="ignore", env_ignore_empty=True)

    domain: str = Field(default="", description="Jira host, e.g. acme.atlassian.net")
    token: str | None = Field(default=None, description="API token or PAT; use env or secret file")
    user: str | None = Field(default=None, description="Account email/login (basic auth only)")
    auth: Literal["bearer", "basic"] = Field(default="bearer", description="bearer or basic")
    timeout: float = Field(default=10, gt=0, description="Per-request timeout in seconds")


class GitHubConfig(BaseSettings):
    """GitHub API settings."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore", env_ignore_empty=True)

    token: str | None = Field(default=None, description="Workflow or PAT token; use env or secret file")
    api_url: str = Field(default="https://api.github.com", description="API base URL")
    timeout: float = Field(default=30, gt=0, description="Per-request timeout in seconds")


class PullRequestConfig(BaseSettings):
    """The pull request under check, as exported by the CI workflow."""

    model_config = SettingsConfigDict(extra="ignore", env_ignore_empty=True)

    number: int | None = Field(default=None, validation_alias="PR_NUMBER")
    repository: str = Field(default="", validation_alias="REPO_FULL_NAME", description="owner/name")
    title: str = Field(default="", validation_alias="PR_TITLE")
    branch: str = Field(default="", validation_alias="BRANCH_NAME")
    body: str = Field(default="", validation_alias="PR_BODY_INPUT")


class GateConfig(BaseSettings):
    """Gate policy and ticket block layout."""

    model_config = SettingsConfigDict(env_prefix="GATE_", extra="ignore", env_ignore_empty=True)

    # strict: fail when no ticket could be verified; lenient: only annotate (env: GATE_MODE)
    mode: EnforcementMode = Field(default=EnforcementMode.STRICT, description="strict or lenient")
    min_title_length: int = Field(
        default=DEFAULT_MIN_TITLE_LENGTH, ge=0, description="Minimum title length without ticket keys"
    )
    marker_start: str = Field(default=DEFAULT_MARKER_START, min_length=1, description="Ticket block start marker")
    marker_end: str = Field(default=DEFAULT_MARKER_END, min_length=1, description="Ticket block end marker")
    heading: str = Field(default=DEFAULT_HEADING, description="Heading line inside the ticket block")
    # Above 1, lookups run on a thread pool; JiraAdapter keeps one session per thread
    max_workers: int = Field(default=1, ge=1, le=32, description="Parallel ticket lookups")

    @model_validator(mode="after")
    def _markers_differ(self) -> "GateConfig":
        if self.marker_start == self.marker_end:
            raise ValueError("marker_start and marker_end must differ")
        if self.marker_start in self.marker_end or self.marker_end in self.marker_start:
            raise ValueError("marker_start and marker_end must not contain each other")
        return self

    @property
    def markers(self) -> Markers:
        return Markers(start=self.marker_start, end=self.marker_end)


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )
    # Emit ::error:: / ::warning:: workflow commands so GitHub shows them on the run (env: LOGGING_GITHUB_ANNOTATIONS)
    github_annotations: bool = Field(default=False, description="Prefix warnings and errors with GitHub Actions commands")


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    jira: JiraConfig = Field(default_factory=JiraConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    pull_request: PullRequestConfig = Field(default_factory=PullRequestConfig)
    gate: GateConfig = Field(default_factory=GateConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def missing_required(self, require_github: bool = True) -> List[str]:
        """Names of required settings that are not set."""
        missing = []
        if not self.jira.domain:
            missing.append("JIRA_DOMAIN")
        if _is_placeholder(self.jira.token):
            missing.append("JIRA_TOKEN")
        if self.jira.auth == "basic" and not self.jira.user:
            missing.append("JIRA_USER")
        if require_github and _is_placeholder(self.github.token):
            missing.append("GITHUB_TOKEN")
        pr = self.pull_request
        if pr.number is None:
            missing.append("PR_NUMBER")
        if not pr.repository:
            missing.append("REPO_FULL_NAME")
        if not pr.title:
            missing.append("PR_TITLE")
        if not pr.branch:
            missing.append("BRANCH_NAME")
        return missing

    def to_context(self) -> PRContext:
        """Freeze the PR fields into the context the pipeline works on."""
        pr = self.pull_request
        if pr.number is None:
            raise ValueError("PR number is not configured")
        return PRContext(
            title=pr.title,
            branch=pr.branch,
            body=pr.body or "",
            number=pr.number,
            repository=pr.repository,
        )


def _substitute_env(value: Any, env: Mapping[str, str]) -> Any:
    """Replace ${VAR} and $VAR in strings with values from env."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return env.get(key, value)
        # Simple $VAR
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v, env) for v in value]
    return value


def _resolve_secrets(config: AppConfig, env: Mapping[str, str]) -> AppConfig:
    """Fill tokens from env or *_FILE secrets when the config has none."""
    if _is_placeholder(config.jira.token):
        config.jira.token = _read_secret(env, "JIRA_TOKEN", "JIRA_TOKEN_FILE") or config.jira.token
    if _is_placeholder(config.github.token):
        config.github.token = _read_secret(env, "GITHUB_TOKEN", "GITHUB_TOKEN_FILE") or config.github.token
    return config


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    Environment variables win over YAML values. Secrets: JIRA_TOKEN or
    JIRA_TOKEN_FILE, GITHUB_TOKEN or GITHUB_TOKEN_FILE.
    """
    env = dict(os.environ)

    path = config_path or Path("config.yaml")
    if not path.is_file():
        return _resolve_secrets(AppConfig(), env)

    raw = yaml.safe_load(path.read_text()) or {}
    raw = _substitute_env(raw, env)

    # Build nested models from raw dict; each model then applies its env overrides
    jira = JiraConfig(**_without_env_overrides(raw.get("jira"), JiraConfig, env))
    github = GitHubConfig(**_without_env_overrides(raw.get("github"), GitHubConfig, env))
    pull_request = PullRequestConfig(**_without_env_overrides(raw.get("pull_request"), PullRequestConfig, env))
    gate = GateConfig(**_without_env_overrides(raw.get("gate"), GateConfig, env))
    logging = LoggingConfig(**_without_env_overrides(raw.get("logging"), LoggingConfig, env))

    config = AppConfig(
        jira=jira,
        github=github,
        pull_request=pull_request,
        gate=gate,
        logging=logging,
    )
    return _resolve_secrets(config, env)


def _env_name(model: type[BaseSettings], field_name: str) -> str:
    field = model.model_fields[field_name]
    if isinstance(field.validation_alias, str):
        return field.validation_alias
    return f"{model.model_config.get('env_prefix', '')}{field_name}".upper()


def _without_env_overrides(
    section: Mapping[str, Any] | None,
    model: type[BaseSettings],
    env: Mapping[str, str],
) -> dict[str, Any]:
    """Drop YAML keys that are also set in env, rename aliased fields.

    Init kwargs beat env in pydantic-settings, so removing them lets the
    environment win. Fields with an alias (the PR variables) are passed under
    the alias, e.g. pull_request.title -> PR_TITLE.
    """
    result = {}
    for key, value in (section or {}).items():
        if key not in model.model_fields:
            result[key] = value
            continue
        env_name = _env_name(model, key)
        if env.get(env_name):
            continue
        alias = model.model_fields[key].validation_alias
        result[alias if isinstance(alias, str) else key] = value
    return result
