"""Configuration management package.

This package loads the YAML configuration that holds every tunable weight of
the layout synthesizer, the traffic router and the planning state.
"""

from urbansim.config.config_loader import Config

__all__ = ['Config']
