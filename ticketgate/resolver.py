"""Look up every extracted key in the tracker and classify the result."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Sequence

from ticketgate.adapters.base import TicketTrackerAdapter, TrackerError
from ticketgate.models import TicketLookupResult, UnverifiableTicket, VerifiedTicket


def resolve_key(
    tracker: TicketTrackerAdapter,
    key: str,
    log: logging.Logger | None = None,
) -> TicketLookupResult:
    """Fetch one ticket. Failures are returned as UnverifiableTicket, never raised."""
    logger = log or logging.getLogger("ticketgate.resolver")
    try:
        summary = tracker.get_issue_summary(key)
    except TrackerError as e:
        logger.warning("Could not fetch ticket %s: %s", key, e)
        return UnverifiableTicket(key=key, reason=str(e))
    logger.info("Found ticket %s: %s", key, summary)
    return VerifiedTicket(key=key, url=tracker.browse_url(key), summary=summary)


def resolve_keys(
    tracker: TicketTrackerAdapter,
    keys: Sequence[str],
    max_workers: int = 1,
    log: logging.Logger | None = None,
) -> List[TicketLookupResult]:
    """Resolve all keys; the returned list follows the order of keys.

    With max_workers > 1 lookups run on a thread pool. Each task returns its
    own result and executor.map yields them in input order.
    """
    if max_workers <= 1 or len(keys) <= 1:
        return [resolve_key(tracker, key, log=log) for key in keys]
    with ThreadPoolExecutor(max_workers=min(max_workers, len(keys))) as executor:
        return list(executor.map(lambda key: resolve_key(tracker, key, log=log), keys))
