"""
MOTD Renderer - Turn extracted fleets into the in-game message of the day

Picks the next NUM_FLEETS fleets by start time and renders each as a colored
line of EVE chat markup. Values are inserted verbatim; the calendar is the
trusted source of every string here.
"""

from datetime import datetime, timezone
from typing import Sequence

from fleets.models import Fleet, FleetType

NUM_FLEETS = 3
SEPARATOR = "<br/>"
RESERVED_MARKER = "[RESERVED]"
UNASSIGNED_FC = "TBD"

FLEET_TEMPLATE = (
    '<font size="12" color="{color}"><b>{time} <a href="{url}">{name}</a>'
    ' w/{fc} @{location}</b></font>'
)

# ARGB - every FleetType must have an entry
FLEET_COLORS = {
    FleetType.HS: "#ff00ff00",
    FleetType.LS: "#ffffff00",
    FleetType.NS: "#ffff0000",
    FleetType.COVOPS: "#ffb2b2b2",
    FleetType.EVENT: "#ff00ffff",
    FleetType.GATECAMP: "#ffff8000",
    FleetType.TRAINING: "#ff8080ff",
}


def render_motd(fleets: Sequence[Fleet], now: datetime) -> str:
    """
    Render the next fleets as a MOTD string.

    Args:
        fleets: Fleets in any order
        now: Current time, used to label today's fleets

    Returns:
        Up to NUM_FLEETS fragments joined by SEPARATOR, "" for no fleets
    """
    upcoming = sorted(fleets, key=lambda fleet: fleet.start)[:NUM_FLEETS]
    return SEPARATOR.join(render_fleet(fleet, now) for fleet in upcoming)


def render_fleet(fleet: Fleet, now: datetime) -> str:
    return FLEET_TEMPLATE.format(
        color=FLEET_COLORS[fleet.fleet_type],
        time=format_start(fleet.start, now),
        url=fleet.url,
        name=fleet.name.replace(RESERVED_MARKER, "").strip(),
        fc=fleet.fc or UNASSIGNED_FC,
        location=fleet.formup,
    )


def format_start(start: datetime, now: datetime) -> str:
    """TODAY HH:MM when start falls on now's UTC day, else DD/MM HH:MM"""
    start = _as_utc(start)
    now = _as_utc(now)
    if (start.year, start.timetuple().tm_yday) == (now.year, now.timetuple().tm_yday):
        return start.strftime("TODAY %H:%M")
    return start.strftime("%d/%m %H:%M")


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
