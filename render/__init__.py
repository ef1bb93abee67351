"""Render module - MOTD formatting for extracted fleets"""

from render.motd import render_motd, NUM_FLEETS

__all__ = ["render_motd", "NUM_FLEETS"]
