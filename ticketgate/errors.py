"""Fatal pipeline errors.

Each one maps to exit code 1 in the CLI. Per-ticket lookup failures are
not here: they are recorded as UnverifiableTicket and never abort the run.
"""


class TicketGateError(Exception):
    """Base class for errors that stop the gate."""

    pass


class InputError(TicketGateError):
    """PR title/branch does not satisfy the input rules (no key, title too short)."""

    pass


class PolicyFailure(TicketGateError):
    """Strict mode: none of the referenced tickets could be verified."""

    pass


class InfoBlockError(TicketGateError):
    """PR body holds a malformed or duplicated ticket block."""

    pass
