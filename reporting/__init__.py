"""
Reporting — DataFrame views and CSV / Excel export.
"""

from .export import (
    break_even_grid_to_dataframe,
    chart_frame,
    export_csv,
    export_workbook,
    monte_carlo_to_dataframe,
    projections_to_dataframe,
    scenario_overlay_frame,
    sensitivity_to_dataframe,
)

__all__ = [
    "break_even_grid_to_dataframe",
    "chart_frame",
    "export_csv",
    "export_workbook",
    "monte_carlo_to_dataframe",
    "projections_to_dataframe",
    "scenario_overlay_frame",
    "sensitivity_to_dataframe",
]
