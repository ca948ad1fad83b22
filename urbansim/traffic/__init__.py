"""Traffic simulation package.

Builds arterial routes consistent with the layout's road spacing and moves a
vehicle population along them on every tick.
"""
