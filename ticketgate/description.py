"""Render the related-tickets block and merge it into the PR description.

The block is delimited by a start and an end marker (invisible HTML
comments by default). A body holds zero or one block; anything else is
refused instead of guessed at.
"""

from typing import NamedTuple, Sequence

from ticketgate.errors import InfoBlockError
from ticketgate.models import TicketLookupResult, VerifiedTicket

DEFAULT_MARKER_START = "<!-- ticketgate:start -->"
DEFAULT_MARKER_END = "<!-- ticketgate:end -->"
DEFAULT_HEADING = "### 🎫 Related Jira Tickets"


class Markers(NamedTuple):
    start: str = DEFAULT_MARKER_START
    end: str = DEFAULT_MARKER_END


def render_ticket_line(result: TicketLookupResult) -> str:
    if isinstance(result, VerifiedTicket):
        return f"* [{result.key}]({result.url}) - {result.summary}"
    return f"* {result.key} (could not fetch title)"


def render_info_block(
    results: Sequence[TicketLookupResult],
    markers: Markers = Markers(),
    heading: str = DEFAULT_HEADING,
) -> str:
    """Build the block: start marker, heading, one line per result, end marker."""
    lines = "".join(f"{render_ticket_line(r)}\n" for r in results)
    return f"{markers.start}\n{heading}\n{lines}{markers.end}"


def find_info_block(body: str, markers: Markers = Markers()) -> tuple[int, int] | None:
    """Return (start, end) offsets of the existing block, or None.

    Raises InfoBlockError if the body holds more than one block or a
    start marker without a matching end marker.
    """
    starts = body.count(markers.start)
    ends = body.count(markers.end)
    if starts == 0:
        if ends:
            raise InfoBlockError("PR body has a ticket block end marker without a start marker")
        return None
    if starts > 1 or ends > 1:
        raise InfoBlockError(
            f"PR body has {starts} ticket block start markers and {ends} end markers; expected one of each"
        )
    begin = body.index(markers.start)
    end = body.find(markers.end, begin + len(markers.start))
    if end < 0:
        raise InfoBlockError("PR body has a ticket block start marker without an end marker after it")
    return begin, end + len(markers.end)


def merge_body(body: str, block: str, markers: Markers = Markers()) -> str:
    """Replace the existing block in place, or prepend the block and a blank line."""
    body = body or ""
    span = find_info_block(body, markers)
    if span is None:
        return f"{block}\n\n{body}"
    begin, end = span
    return body[:begin] + block + body[end:]
