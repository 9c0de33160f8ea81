"""The gate: extract keys, check title, resolve tickets, enforce, update PR body.

run_pipeline works only on its arguments (context, gate settings and the
two adapters), so it can be driven from tests without touching the process
environment.
"""

import logging

from ticketgate.adapters.base import GitPlatformAdapter, TicketTrackerAdapter
from ticketgate.config import GateConfig
from ticketgate.description import merge_body, render_info_block
from ticketgate.errors import InputError, PolicyFailure
from ticketgate.gate import count_verified, enforce
from ticketgate.keys import check_title_length, extract_keys
from ticketgate.models import GateDecision, PipelineResult, PRContext
from ticketgate.resolver import resolve_keys


def run_pipeline(
    context: PRContext,
    settings: GateConfig,
    tracker: TicketTrackerAdapter,
    platform: GitPlatformAdapter | None,
    dry_run: bool = False,
    log: logging.Logger | None = None,
) -> PipelineResult:
    """
    Run the gate once for a pull request.

    1. Extract ticket keys from title and branch (InputError if none).
    2. Check the title length without keys (InputError if too short).
    3. Look up every key; failed lookups are kept as unverifiable.
    4. Enforce the gate mode (PolicyFailure in strict mode with nothing verified).
    5. Merge the ticket block into the body and PATCH it only if it changed.
    """
    logger = log or logging.getLogger("ticketgate.pipeline")
    logger.info("Checking PR #%s in %s", context.number, context.repository)

    keys = extract_keys(context.title, context.branch)
    if not keys:
        raise InputError("No Jira ticket key found in title or branch name")
    logger.info("Ticket keys: %s", ", ".join(keys))

    title_check = check_title_length(context.title, settings.min_title_length)
    if not title_check.ok:
        raise InputError(
            f"PR title description is too short ({title_check.length} chars). "
            f"Must be at least {settings.min_title_length}."
        )

    results = resolve_keys(tracker, keys, max_workers=settings.max_workers, log=log)

    decision = enforce(results, settings.mode)
    if decision is GateDecision.FAIL:
        raise PolicyFailure(f"None of the referenced tickets could be verified: {', '.join(keys)}")
    logger.info("%s/%s tickets verified (mode=%s)", count_verified(results), len(results), settings.mode.value)

    block = render_info_block(results, settings.markers, settings.heading)
    new_body = merge_body(context.body, block, settings.markers)
    updated = new_body != context.body

    if not updated:
        logger.info("PR description already up to date")
    elif dry_run or platform is None:
        logger.info("PR description would be updated (dry run)")
    else:
        logger.info("Updating PR description with ticket details")
        platform.update_pr_body(context.repository, context.number, new_body)

    return PipelineResult(keys=keys, results=results, decision=decision, body=new_body, updated=updated)
