"""
Fleet Models for fleetmotd

Pydantic dataclasses with runtime validation for calendar entries.
"""

from datetime import datetime, timezone
from enum import Enum

from pydantic import field_validator
from pydantic.dataclasses import dataclass


class FleetType(str, Enum):
    """Fleet categories - drives the MOTD color"""
    HS = "HS"  # High-sec
    LS = "LS"  # Low-sec
    NS = "NS"  # Null-sec
    COVOPS = "COVOPS"  # Covert ops
    EVENT = "EVENT"
    GATECAMP = "GATECAMP"
    TRAINING = "TRAINING"


@dataclass(frozen=True)
class Fleet:
    """One calendar entry, scoped to a single request"""

    name: str  # Raw title, may still carry "[RESERVED]"
    fc: str  # Fleet commander, "" when unassigned
    formup: str  # Formup system
    url: str  # Absolute doctrine link
    start: datetime  # Always UTC
    fleet_type: FleetType

    @field_validator("start")
    @classmethod
    def normalize_start(cls, v: datetime) -> datetime:
        """Naive datetimes are taken as UTC, aware ones converted to UTC"""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)
