"""
Tabular views of engine/analysis output and file export (CSV, Excel).

DataFrames use snake_case columns; exports relabel them with
core.schema.PROJECTION_LABELS.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from pathlib import Path
from typing import BinaryIO, Optional, Sequence, Union

import pandas as pd

from core.config import FinancialInputs
from core.utils import require_columns
from core.schema import (
    PROJECTION_LABELS,
    BreakEvenCell,
    CalculationResults,
    MonteCarloResult,
    SensitivityAnalysis,
)

logger = logging.getLogger(__name__)

OVERLAY_METRICS = ("rent_net_worth", "buy_net_worth", "total_rent_paid", "cumulative_ownership_cost")


def projections_to_dataframe(results: CalculationResults) -> pd.DataFrame:
    return pd.DataFrame([asdict(p) for p in results.yearly_projections], columns=list(PROJECTION_LABELS))


def chart_frame(results: CalculationResults) -> pd.DataFrame:
    """Per-year series used by the cost / net worth / cash flow / tax charts."""
    df = projections_to_dataframe(results)
    return pd.DataFrame({
        "year": df["year"],
        "rent_cumulative": df["total_rent_paid"],
        "buy_cumulative": df["cumulative_ownership_cost"],
        "rent_net_worth": df["rent_net_worth"],
        "buy_net_worth": df["buy_net_worth"],
        "rent_cash_flow": df["rent_cash_flow"],
        "buy_cash_flow": df["buy_cash_flow"],
        "tax_savings": df["tax_savings"],
    })


def monte_carlo_to_dataframe(bands: Sequence[MonteCarloResult]) -> pd.DataFrame:
    rows = []
    for b in bands:
        row = {"year": b.year}
        for side, band in (("rent", b.rent_net_worth), ("buy", b.buy_net_worth)):
            for label, value in zip(("p10", "p25", "p50", "p75", "p90"), band.as_tuple()):
                row[f"{side}_{label}"] = value
        rows.append(row)
    return pd.DataFrame(rows)


def sensitivity_to_dataframe(analyses: Sequence[SensitivityAnalysis]) -> pd.DataFrame:
    """Long format: one row per (parameter, tested value)."""
    rows = []
    for a in analyses:
        for position, (value, be, diff) in enumerate(
            zip(a.values, a.break_even_years, a.final_net_worth_differences)
        ):
            rows.append({
                "parameter": a.parameter,
                "position": position,
                "value": value,
                "break_even_year": be,
                "net_worth_difference": diff,
            })
    return pd.DataFrame(rows, columns=["parameter", "position", "value", "break_even_year", "net_worth_difference"])


def break_even_grid_to_dataframe(
    cells: Sequence[BreakEvenCell],
    *,
    value: str = "break_even_year",
) -> pd.DataFrame:
    """Pivot: rows = y values, columns = x values."""
    df = pd.DataFrame([asdict(c) for c in cells])
    require_columns(df, ("x_value", "y_value", value))
    return df.pivot(index="y_value", columns="x_value", values=value)


def scenario_overlay_frame(scenarios: Sequence, metric: str = "buy_net_worth") -> pd.DataFrame:
    """
    Long format (year, scenario, value) of one metric across saved scenarios.
    Scenarios with shorter horizons simply have fewer rows.
    """
    if metric not in OVERLAY_METRICS:
        raise ValueError(f"metric must be one of {OVERLAY_METRICS}, got {metric!r}")
    rows = []
    for s in scenarios:
        for p in s.results.yearly_projections:
            rows.append({"year": p.year, "scenario": s.name, "color": s.color, "value": getattr(p, metric)})
    return pd.DataFrame(rows, columns=["year", "scenario", "color", "value"])


def inputs_to_dataframe(inputs: FinancialInputs) -> pd.DataFrame:
    return pd.DataFrame([{"input": k, "value": v} for k, v in asdict(inputs).items()])


def summary_to_dataframe(results: CalculationResults) -> pd.DataFrame:
    return pd.DataFrame([
        {"metric": "break_even_year", "value": results.break_even_year},
        {"metric": "total_cost_rent", "value": results.total_cost_rent},
        {"metric": "total_cost_buy", "value": results.total_cost_buy},
        {"metric": "net_worth_difference", "value": results.net_worth_difference},
        {"metric": "total_tax_savings", "value": results.total_tax_savings},
        {"metric": "total_interest_paid", "value": results.total_interest_paid},
    ])


def export_csv(results: CalculationResults, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    projections_to_dataframe(results).rename(columns=PROJECTION_LABELS).to_csv(path, index=False)
    logger.info("Wrote %d projection rows to %s", len(results.yearly_projections), path)
    return path


def export_workbook(
    target: Union[str, Path, BinaryIO],
    results: CalculationResults,
    *,
    sensitivity: Optional[Sequence[SensitivityAnalysis]] = None,
    inputs: Optional[FinancialInputs] = None,
) -> None:
    """
    Excel workbook, one sheet per table:
      Summary, Projections, [Monte Carlo], [Sensitivity], [Inputs]
    target may be a path or a writable binary buffer (e.g. io.BytesIO).
    """
    with pd.ExcelWriter(target, engine="openpyxl") as writer:
        summary_to_dataframe(results).to_excel(writer, sheet_name="Summary", index=False)
        projections_to_dataframe(results).rename(columns=PROJECTION_LABELS).to_excel(
            writer, sheet_name="Projections", index=False
        )
        if results.monte_carlo_results:
            monte_carlo_to_dataframe(results.monte_carlo_results).to_excel(
                writer, sheet_name="Monte Carlo", index=False
            )
        if sensitivity:
            sensitivity_to_dataframe(sensitivity).to_excel(writer, sheet_name="Sensitivity", index=False)
        if inputs is not None:
            inputs_to_dataframe(inputs).to_excel(writer, sheet_name="Inputs", index=False)
    logger.info("Wrote workbook to %s", target if isinstance(target, (str, Path)) else "buffer")
