"""Pass/fail decision over the lookup results."""

from enum import Enum
from typing import Sequence

from ticketgate.models import GateDecision, TicketLookupResult


class EnforcementMode(str, Enum):
    """strict: fail when no ticket verified. lenient: never fail here."""

    STRICT = "strict"
    LENIENT = "lenient"


def count_verified(results: Sequence[TicketLookupResult]) -> int:
    return sum(1 for r in results if r.verified)


def enforce(results: Sequence[TicketLookupResult], mode: EnforcementMode | str) -> GateDecision:
    mode = EnforcementMode(mode)
    if mode is EnforcementMode.LENIENT:
        return GateDecision.PASS
    return GateDecision.PASS if count_verified(results) > 0 else GateDecision.FAIL
