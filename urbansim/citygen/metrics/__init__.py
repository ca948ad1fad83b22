"""Layout metrics package."""

from urbansim.citygen.metrics.layout_metrics import (LayoutMetrics,
                                                     build_report_lines,
                                                     kind_height_table,
                                                     summarize_layout)

__all__ = ['LayoutMetrics', 'build_report_lines', 'kind_height_table', 'summarize_layout']
