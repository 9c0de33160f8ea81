"""ticketgate entry point.

Runs the PR ticket gate once and returns the process exit code.
Usage: ticketgate [--config config.yaml] [--check] [--dry-run].
"""

import argparse
import logging
import sys
from pathlib import Path

import yaml

from ticketgate.adapters import GitHubAdapter, JiraAdapter
from ticketgate.config import AppConfig, load_config
from ticketgate.errors import InfoBlockError, InputError, PolicyFailure
from ticketgate.logging import LOGGER_NAME, setup_logging
from ticketgate.pipeline import run_pipeline


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="ticketgate",
        description="Check that a PR references Jira tickets and list them in the PR description",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to YAML config file (optional; env variables are enough)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Do everything except updating the PR description",
    )
    return parser.parse_args(argv)


def build_adapters(config: AppConfig, dry_run: bool = False) -> tuple[JiraAdapter, GitHubAdapter | None]:
    jira = JiraAdapter(
        domain=config.jira.domain,
        token=config.jira.token or "",
        user=config.jira.user,
        auth=config.jira.auth,
        timeout=config.jira.timeout,
    )
    if dry_run:
        return jira, None
    github = GitHubAdapter(
        token=config.github.token or "",
        api_url=config.github.api_url,
        timeout=config.github.timeout,
    )
    return jira, github


def main(argv: list[str] | None = None) -> int:
    """Entry point: load config, run the gate, map failures to exit code 1."""
    args = parse_args(argv)
    log = logging.getLogger(LOGGER_NAME)

    try:
        config = load_config(args.config)
    except (ValueError, OSError, yaml.YAMLError) as e:
        # Invalid values, unreadable secret files, broken YAML
        setup_logging()
        log.error("Invalid configuration: %s", e)
        return 1

    setup_logging(config.logging)

    missing = config.missing_required(require_github=not args.dry_run)
    if missing:
        log.error("Missing required settings: %s", ", ".join(missing))
        return 1

    if args.check:
        print("Config OK:", config.pull_request.repository, config.jira.domain, config.gate.mode.value)
        return 0

    try:
        tracker, platform = build_adapters(config, dry_run=args.dry_run)
        run_pipeline(
            config.to_context(),
            config.gate,
            tracker,
            platform,
            dry_run=args.dry_run,
        )
    except (InputError, PolicyFailure, InfoBlockError) as e:
        log.error("%s", e)
        return 1
    except Exception as e:
        log.exception("An unexpected error occurred: %s", e)
        return 1

    log.info("All PR standards met")
    return 0


if __name__ == "__main__":
    sys.exit(main())
