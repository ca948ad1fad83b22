"""Agents moving on the synthesized layout."""

from urbansim.agent.vehicle import Vehicle

__all__ = ['Vehicle']
