"""Layout synthesis package.

Provides the deterministic layout synthesizer and the arterial road spacing
it shares with the traffic router.
"""

from urbansim.citygen.layout.layout_synthesizer import (LayoutSynthesizer,
                                                        cell_hash,
                                                        synthesize_layout)
from urbansim.citygen.layout.road_spacing import (arterial_step_for,
                                                  grid_to_world,
                                                  layout_bounds,
                                                  road_spacing_for)

__all__ = ['LayoutSynthesizer', 'cell_hash', 'synthesize_layout', 'arterial_step_for', 'grid_to_world',
           'layout_bounds', 'road_spacing_for']
