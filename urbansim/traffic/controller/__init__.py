"""Traffic controller package."""

from urbansim.traffic.controller.traffic_controller import TrafficController

__all__ = ['TrafficController']
