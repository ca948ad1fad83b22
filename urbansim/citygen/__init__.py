"""City generation package.

Holds the parameter model, the deterministic layout synthesizer, the
infrastructure placement overlay, the utility network builder and layout
metrics.
"""
