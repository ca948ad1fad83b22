"""Planning state package."""

from urbansim.planning.planning_state import PlanningState

__all__ = ['PlanningState']
