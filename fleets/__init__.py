"""Fleets module - calendar entry models shared by the parser and renderer"""

from fleets.models import Fleet, FleetType

__all__ = ["Fleet", "FleetType"]
