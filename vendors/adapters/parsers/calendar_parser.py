"""
Spectre Fleet Calendar Parser - Extract fleets from the public schedule page

Calendar structure (one <tr> per fleet in table.calendar-table, tbody optional):
- td[2]: fleet commander (empty when unassigned)
- td[4]: <a href="/d/...">doctrine / fleet name</a>
- td[5]: formup system
- td[6]: start time, "April 18, 2022 12:00" (UTC)
- td[7]: <span class="dot-XX"> fleet type marker

All-or-nothing: one bad row fails the whole page. The layout is owned by a
third party, so a mismatch must surface as an error, never as a short list.
"""

from datetime import datetime, timezone
from typing import List

from bs4 import BeautifulSoup, ParserRejectedMarkup

from config import DEFAULT_BASE_URL, get_logger
from exceptions import ExtractionError
from fleets.models import Fleet, FleetType

logger = get_logger(__name__).bind(component="vendor")

# html.parser keeps the markup as written, so rows may sit with or without a tbody
ROWS_SELECTOR = "table.calendar-table > tbody > tr, table.calendar-table > tr"
# %B matches English month names only under the C/en locale the service runs in
START_FORMAT = "%B %d, %Y %H:%M"

FC_CELL = 2
NAME_CELL = 4
FORMUP_CELL = 5
START_CELL = 6
TYPE_CELL = 7

# Marker classes used by the calendar's colored dots
FLEET_TYPE_MARKERS = {
    "dot-HS": FleetType.HS,
    "dot-LS": FleetType.LS,
    "dot-NS": FleetType.NS,
    "dot-VNt": FleetType.EVENT,
    "dot-COv": FleetType.COVOPS,
}
DEFAULT_FLEET_TYPE = FleetType.EVENT


def parse_calendar(html: str, base_url: str = DEFAULT_BASE_URL) -> List[Fleet]:
    """
    Parse the calendar page into fleets, in page order.

    Args:
        html: Full HTML document of the calendar page
        base_url: Origin prefixed to the relative doctrine links

    Returns:
        List of Fleet (empty when the calendar has no rows)

    Raises:
        ExtractionError: document is not markup, or any row is malformed
    """
    if not isinstance(html, str):
        raise ExtractionError(reason=f"expected text, got {type(html).__name__}")

    try:
        soup = BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as e:
        raise ExtractionError(reason="malformed document", original_error=e) from e

    rows = soup.select(ROWS_SELECTOR)
    logger.debug("parsing calendar", parser="spectre", html_length=len(html), row_count=len(rows))

    fleets = [_row_to_fleet(index, row, base_url) for index, row in enumerate(rows)]

    logger.info("extracted fleets from calendar", parser="spectre", fleet_count=len(fleets))
    return fleets


def _row_to_fleet(index: int, row, base_url: str) -> Fleet:
    cells = row.find_all("td")
    if len(cells) <= TYPE_CELL:
        raise ExtractionError(row=index, reason=f"expected at least {TYPE_CELL + 1} cells, found {len(cells)}")

    link = cells[NAME_CELL].find("a")
    if link is None:
        raise ExtractionError(row=index, reason="missing doctrine link")
    href = link.get("href")
    if href is None:
        raise ExtractionError(row=index, reason="doctrine link has no href")

    return Fleet(
        name=link.decode_contents().strip(),
        fc=cells[FC_CELL].decode_contents(),
        formup=cells[FORMUP_CELL].decode_contents(),
        url=f"{base_url}{href}",
        start=_parse_start(index, cells[START_CELL].get_text()),
        fleet_type=_parse_fleet_type(index, cells[TYPE_CELL]),
    )


def _parse_start(index: int, text: str) -> datetime:
    try:
        start = datetime.strptime(text.strip(), START_FORMAT)
    except ValueError as e:
        raise ExtractionError(row=index, reason=f"unparsable start time {text!r}", original_error=e) from e
    return start.replace(tzinfo=timezone.utc)


def _parse_fleet_type(index: int, cell) -> FleetType:
    """Map the marker span's class to a fleet type, unknown markers are events"""
    span = cell.find("span")
    if span is None or not span.get("class"):
        raise ExtractionError(row=index, reason="missing fleet type marker")

    for marker in span.get("class"):
        if marker in FLEET_TYPE_MARKERS:
            return FLEET_TYPE_MARKERS[marker]

    logger.debug("unknown fleet type marker", parser="spectre", row=index, marker=" ".join(span.get("class")))
    return DEFAULT_FLEET_TYPE
