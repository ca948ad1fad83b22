"""Utility network package for power and water lines."""

from urbansim.citygen.utility.utility_network_builder import (UtilityNetwork,
                                                              build_network)

__all__ = ['UtilityNetwork', 'build_network']
