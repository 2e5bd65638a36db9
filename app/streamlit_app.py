"""
Rent vs Buy — Projection Dashboard
==================================

Four views over the same inputs:
  1. Projection:    deterministic year-by-year rent vs buy comparison
  2. Monte Carlo:   percentile bands under volatile growth assumptions
  3. Sensitivity:   one-at-a-time sweeps and the two-parameter break-even grid
  4. Scenarios:     save / load / compare input sets

Run: streamlit run app/streamlit_app.py   (or the `rent-vs-buy` console script)
"""

from __future__ import annotations

import io
import sys
from dataclasses import fields
from pathlib import Path

import altair as alt
import pandas as pd
import streamlit as st

# ---------------------------------------------------------------------------
# Make project root importable
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from core.config import AppSettings, FinancialInputs, MonteCarloInputs
from core.utils import configure_logging

from distributions.sampler import MonteCarloSampler

from scenarios.storage import JsonFileScenarioRepository
from scenarios.store import ScenarioStore
from scenarios.validators import validate_inputs

from analysis.heatmap import GRID_AXES, run_break_even_grid
from analysis.metrics import compute_liquidity_timeline
from analysis.montecarlo import run_monte_carlo_simulation
from analysis.pipeline import run_full_analysis

from reporting.export import (
    break_even_grid_to_dataframe,
    chart_frame,
    export_workbook,
    monte_carlo_to_dataframe,
    projections_to_dataframe,
    scenario_overlay_frame,
    sensitivity_to_dataframe,
)

# ---------------------------------------------------------------------------
# Input form layout: (field, label, min, max, step)
# ---------------------------------------------------------------------------
INPUT_SECTIONS: dict[str, list[tuple[str, str, float, float, float]]] = {
    "Property": [
        ("home_price", "Home price ($)", 50_000.0, 5_000_000.0, 10_000.0),
        ("down_payment_percent", "Down payment (%)", 0.0, 100.0, 1.0),
        ("current_rent", "Monthly rent ($)", 0.0, 50_000.0, 50.0),
    ],
    "Loan": [
        ("interest_rate", "Interest rate (%)", 0.0, 20.0, 0.125),
        ("loan_term_years", "Loan term (years)", 1, 40, 1),
        ("pmi_rate", "PMI rate (%)", 0.0, 3.0, 0.05),
    ],
    "Ongoing costs": [
        ("property_tax_rate", "Property tax (%)", 0.0, 5.0, 0.05),
        ("home_insurance", "Insurance ($/yr)", 0.0, 20_000.0, 100.0),
        ("maintenance_rate", "Maintenance (%)", 0.0, 5.0, 0.1),
        ("hoa_fees", "HOA ($/yr)", 0.0, 50_000.0, 100.0),
    ],
    "Growth": [
        ("rent_growth_rate", "Rent growth (%)", -5.0, 15.0, 0.1),
        ("investment_return", "Investment return (%)", -10.0, 20.0, 0.1),
        ("inflation_rate", "Inflation (%)", -2.0, 15.0, 0.1),
        ("home_appreciation_rate", "Home appreciation (%)", -10.0, 15.0, 0.1),
    ],
    "Personal": [
        ("time_horizon_years", "Time horizon (years)", 1, 40, 1),
        ("marginal_tax_rate", "Marginal tax rate (%)", 0.0, 60.0, 1.0),
        ("other_deductions", "Other deductions ($/yr)", 0.0, 100_000.0, 500.0),
        ("closing_costs_percent", "Closing costs (%)", 0.0, 10.0, 0.1),
        ("selling_costs_percent", "Selling costs (%)", 0.0, 10.0, 0.1),
    ],
}

INT_FIELDS = {f.name for f in fields(FinancialInputs) if f.type in ("int", int)}

RENT_COLOR = "#ef4444"
BUY_COLOR = "#3b82f6"


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------
def _store() -> ScenarioStore:
    if "store" not in st.session_state:
        settings = _settings()
        store = ScenarioStore(JsonFileScenarioRepository(settings.scenario_path))
        store.load()
        st.session_state["store"] = store
    return st.session_state["store"]


def _settings() -> AppSettings:
    if "settings" not in st.session_state:
        settings = AppSettings.from_env()
        configure_logging(settings.log_level)
        st.session_state["settings"] = settings
    return st.session_state["settings"]


# ---------------------------------------------------------------------------
# Cached computations
# ---------------------------------------------------------------------------
@st.cache_data(show_spinner="Running Monte Carlo...")
def _monte_carlo(inputs: FinancialInputs, mc_inputs: MonteCarloInputs, seed):
    paths = MonteCarloSampler(mc_inputs, seed=seed).sample()
    return paths, run_monte_carlo_simulation(inputs, mc_inputs, sampled_paths=paths)


@st.cache_data(show_spinner="Computing break-even grid...")
def _grid(inputs: FinancialInputs, x_param: str, y_param: str):
    return run_break_even_grid(inputs, x_param, y_param)


# ---------------------------------------------------------------------------
# Chart helpers
# ---------------------------------------------------------------------------
def _fmt_money(val):
    return f"${val:,.0f}"


def _plot_two_series(df, *, x, rent_col, buy_col, title, y_title, height=300, mark="line"):
    if not isinstance(df, pd.DataFrame) or len(df) == 0:
        st.info("No data to plot.")
        return
    long = df[[x, rent_col, buy_col]].rename(columns={rent_col: "Rent", buy_col: "Buy"}).melt(
        id_vars=[x], var_name="path", value_name="value"
    )
    color = alt.Color(
        "path:N", title="Path",
        scale=alt.Scale(domain=["Rent", "Buy"], range=[RENT_COLOR, BUY_COLOR]),
    )
    base = alt.Chart(long)
    if mark == "bar":
        chart = base.mark_bar().encode(
            x=alt.X(f"{x}:O", title="Year"),
            xOffset="path:N",
            y=alt.Y("value:Q", title=y_title, axis=alt.Axis(format="$,.0f")),
            color=color,
        )
    else:
        chart = base.mark_line(point=True).encode(
            x=alt.X(f"{x}:O", title="Year"),
            y=alt.Y("value:Q", title=y_title, axis=alt.Axis(format="$,.0f")),
            color=color,
        )
    st.altair_chart(chart.properties(title=title, height=height), use_container_width=True)


def _plot_band_chart(bands_df, *, side, color, title, height=300):
    if bands_df is None or len(bands_df) == 0:
        return
    outer = alt.Chart(bands_df).mark_area(opacity=0.15, color=color).encode(
        x=alt.X("year:O", title="Year"),
        y=alt.Y(f"{side}_p10:Q", title="Net worth", axis=alt.Axis(format="$,.0f")),
        y2=f"{side}_p90:Q",
    )
    inner = alt.Chart(bands_df).mark_area(opacity=0.3, color=color).encode(
        x="year:O", y=f"{side}_p25:Q", y2=f"{side}_p75:Q",
    )
    median = alt.Chart(bands_df).mark_line(color=color, strokeWidth=2).encode(
        x="year:O", y=f"{side}_p50:Q",
    )
    st.altair_chart((outer + inner + median).properties(title=title, height=height), use_container_width=True)


def _plot_sensitivity(sens_df, *, height=260):
    if len(sens_df) == 0:
        return
    chart = (
        alt.Chart(sens_df).mark_line(point=True)
        .encode(
            x=alt.X("position:O", title="Sweep step (base = 2)"),
            y=alt.Y("net_worth_difference:Q", title="Buy − Rent", axis=alt.Axis(format="$,.0f")),
            color=alt.Color("parameter:N", title="Parameter"),
            tooltip=["parameter", "value", "break_even_year", "net_worth_difference"],
        )
        .properties(title="Final Net Worth Difference by Parameter", height=height)
    )
    st.altair_chart(chart, use_container_width=True)


def _plot_heatmap(cells_df, *, x_label, y_label, height=380):
    chart = (
        alt.Chart(cells_df).mark_rect()
        .encode(
            x=alt.X("x_value:O", title=x_label, axis=alt.Axis(format=",.2f")),
            y=alt.Y("y_value:O", title=y_label, sort="descending", axis=alt.Axis(format=",.2f")),
            color=alt.Color(
                "net_worth_difference:Q", title="Buy − Rent",
                scale=alt.Scale(scheme="redblue", domainMid=0),
            ),
            tooltip=["x_value", "y_value", "break_even_year", "net_worth_difference"],
        )
        .properties(title="Break-even Grid", height=height)
    )
    st.altair_chart(chart, use_container_width=True)


# ---------------------------------------------------------------------------
# Sidebar input form
# ---------------------------------------------------------------------------
def _input_form(store: ScenarioStore) -> None:
    current = store.inputs
    for section, specs in INPUT_SECTIONS.items():
        with st.expander(section, expanded=section == "Property"):
            for name, label, lo, hi, step in specs:
                value = getattr(current, name)
                if name in INT_FIELDS:
                    new = st.number_input(label, int(lo), int(hi), int(value), int(step), key=f"in_{name}")
                else:
                    new = st.number_input(label, float(lo), float(hi), float(value), float(step), key=f"in_{name}")
                if new != value:
                    store.update_input(name, new)

    with st.expander("Monte Carlo"):
        mc = store.monte_carlo_inputs
        show = st.checkbox("Run Monte Carlo", value=store.show_monte_carlo)
        if show != store.show_monte_carlo:
            store.toggle_monte_carlo()
        store.update_monte_carlo_input(
            "home_price_volatility", st.slider("Home price volatility (pp)", 0.0, 40.0, float(mc.home_price_volatility), 0.5)
        )
        store.update_monte_carlo_input(
            "rent_volatility", st.slider("Rent volatility (pp)", 0.0, 40.0, float(mc.rent_volatility), 0.5)
        )
        store.update_monte_carlo_input(
            "stock_market_volatility", st.slider("Stock market volatility (pp)", 0.0, 60.0, float(mc.stock_market_volatility), 0.5)
        )
        store.update_monte_carlo_input(
            "simulations", int(st.select_slider("Simulations", options=[100, 250, 500, 1000, 2500], value=mc.simulations))
        )

    if st.button("Reset to defaults", use_container_width=True):
        store.reset_inputs()
        for name in FinancialInputs.field_names():
            st.session_state.pop(f"in_{name}", None)
        st.rerun()


def _scenario_panel(store: ScenarioStore) -> None:
    st.subheader("Scenarios")
    name = st.text_input("Scenario name", value=f"Scenario {len(store.scenarios) + 1}")
    if st.button("Save current scenario", disabled=store.results is None):
        store.save_scenario(name)
        store.save()
        st.success(f"Saved '{name}'.")

    if not store.scenarios:
        st.caption("No saved scenarios yet.")
        return

    for scenario in list(store.scenarios):
        c1, c2, c3 = st.columns([4, 1, 1])
        active = " (active)" if scenario.id == store.active_scenario_id else ""
        c1.markdown(f"<span style='color:{scenario.color}'>●</span> **{scenario.name}**{active}", unsafe_allow_html=True)
        if c2.button("Load", key=f"load_{scenario.id}"):
            store.load_scenario(scenario.id)
            for field_name in FinancialInputs.field_names():
                st.session_state.pop(f"in_{field_name}", None)
            store.save()
            st.rerun()
        if c3.button("Delete", key=f"del_{scenario.id}"):
            store.delete_scenario(scenario.id)
            store.save()
            st.rerun()

    metric = st.radio(
        "Compare", options=["buy_net_worth", "rent_net_worth", "cumulative_ownership_cost", "total_rent_paid"],
        horizontal=True,
    )
    overlay = scenario_overlay_frame(store.scenarios, metric)
    chart = (
        alt.Chart(overlay).mark_line(point=True)
        .encode(
            x=alt.X("year:O", title="Year"),
            y=alt.Y("value:Q", title=metric, axis=alt.Axis(format="$,.0f")),
            color=alt.Color(
                "scenario:N",
                scale=alt.Scale(domain=[s.name for s in store.scenarios], range=[s.color for s in store.scenarios]),
            ),
        )
        .properties(title="Scenario Overlay", height=320)
    )
    st.altair_chart(chart, use_container_width=True)


# ═══════════════════════════════════════════════════════════════════════════
# PAGE
# ═══════════════════════════════════════════════════════════════════════════
def render() -> None:
    st.set_page_config(page_title="Rent vs Buy", layout="wide")
    st.title("Rent vs Buy")
    st.caption("Year-by-year projection of renting and investing vs buying and owning")

    settings = _settings()
    store = _store()

    with st.sidebar:
        st.header("Inputs")
        _input_form(store)

    inputs = store.inputs
    vr = validate_inputs(inputs)
    if not vr.is_valid:
        st.error("Input validation failed:\n" + vr.summary())
        st.stop()
    if vr.warnings:
        st.warning(vr.summary())

    paths = bands = None
    if store.show_monte_carlo:
        paths, bands = _monte_carlo(inputs, store.monte_carlo_inputs, settings.monte_carlo_seed)

    bundle = run_full_analysis(inputs, monte_carlo=bands)
    results = bundle.results
    store.set_results(results)

    # ═══════════════════════════════════════════════════════════════════════
    # KPIs
    # ═══════════════════════════════════════════════════════════════════════
    st.subheader(bundle.decision.headline())
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Break-even Year", str(results.break_even_year) if results.break_even_year else "None")
    c2.metric("Net Worth Difference (Buy − Rent)", _fmt_money(results.net_worth_difference))
    c3.metric("Total Tax Savings", _fmt_money(results.total_tax_savings))
    c4.metric("Total Interest Paid", _fmt_money(results.total_interest_paid))
    for flag in bundle.decision.flags:
        st.caption(f"⚑ {flag}")

    tab_proj, tab_mc, tab_sens, tab_scen = st.tabs(["Projection", "Monte Carlo", "Sensitivity", "Scenarios"])

    # -----------------------------------------------------------------------
    # Projection
    # -----------------------------------------------------------------------
    with tab_proj:
        frame = chart_frame(results)
        left, right = st.columns(2)
        with left:
            _plot_two_series(frame, x="year", rent_col="rent_net_worth", buy_col="buy_net_worth",
                             title="Net Worth", y_title="Net worth")
            _plot_two_series(frame, x="year", rent_col="rent_cash_flow", buy_col="buy_cash_flow",
                             title="Annual Cash Flow", y_title="Cash flow", mark="bar")
        with right:
            _plot_two_series(frame, x="year", rent_col="rent_cumulative", buy_col="buy_cumulative",
                             title="Cumulative Cost", y_title="Cumulative cost")
            tax = (
                alt.Chart(frame).mark_bar(color=BUY_COLOR)
                .encode(x=alt.X("year:O", title="Year"), y=alt.Y("tax_savings:Q", title="Tax savings", axis=alt.Axis(format="$,.0f")))
                .properties(title="Tax Savings", height=300)
            )
            st.altair_chart(tax, use_container_width=True)

        liquidity = compute_liquidity_timeline(results, inputs)
        liq_chart = (
            alt.Chart(liquidity).mark_line(point=True)
            .encode(
                x=alt.X("year:O", title="Year"),
                y=alt.Y("mobility_score:Q", title="Mobility score (%)", scale=alt.Scale(domain=[0, 100])),
                tooltip=["year", "net_proceeds_if_sold", "total_investment", "liquidity_penalty", "opportunity_cost"],
            )
            .properties(title="Liquidity Timeline (proceeds if sold / total invested)", height=260)
        )
        st.altair_chart(liq_chart, use_container_width=True)

        with st.expander("Yearly projection table", expanded=False):
            st.dataframe(projections_to_dataframe(results), use_container_width=True, hide_index=True)
        with st.expander("Decision report", expanded=False):
            st.dataframe(bundle.decision.to_dataframe(), use_container_width=True, hide_index=True)

        buffer = io.BytesIO()
        export_workbook(buffer, results, sensitivity=bundle.sensitivity, inputs=inputs)
        st.download_button(
            "Download Excel report",
            data=buffer.getvalue(),
            file_name="rent_vs_buy.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )

    # -----------------------------------------------------------------------
    # Monte Carlo
    # -----------------------------------------------------------------------
    with tab_mc:
        if not results.monte_carlo_results:
            st.info("Enable 'Run Monte Carlo' in the sidebar to simulate volatile growth assumptions.")
        else:
            bands_df = monte_carlo_to_dataframe(results.monte_carlo_results)
            left, right = st.columns(2)
            with left:
                _plot_band_chart(bands_df, side="rent", color=RENT_COLOR, title="Rent Net Worth (p10–p90)")
            with right:
                _plot_band_chart(bands_df, side="buy", color=BUY_COLOR, title="Buy Net Worth (p10–p90)")
            st.dataframe(bands_df, use_container_width=True, hide_index=True)

            with st.expander("Sampled perturbations (percentage points)", expanded=False):
                st.dataframe(paths.summary(), use_container_width=True, hide_index=True)
                st.download_button(
                    "Download sampled paths (CSV)",
                    data=paths.to_dataframe().to_csv(index=False),
                    file_name="monte_carlo_paths.csv",
                    mime="text/csv",
                )

    # -----------------------------------------------------------------------
    # Sensitivity
    # -----------------------------------------------------------------------
    with tab_sens:
        sens_df = sensitivity_to_dataframe(bundle.sensitivity)
        _plot_sensitivity(sens_df)
        st.dataframe(sens_df, use_container_width=True, hide_index=True)

        st.markdown("**Break-even Heatmap**")
        axis_names = list(GRID_AXES)
        c1, c2 = st.columns(2)
        x_param = c1.selectbox("X axis", axis_names, index=0, format_func=lambda k: GRID_AXES[k].label)
        y_param = c2.selectbox("Y axis", axis_names, index=1, format_func=lambda k: GRID_AXES[k].label)
        if x_param == y_param:
            st.info("Pick two different parameters.")
        else:
            cells = _grid(inputs, x_param, y_param)
            cells_df = pd.DataFrame([c.__dict__ for c in cells])
            _plot_heatmap(cells_df, x_label=GRID_AXES[x_param].label, y_label=GRID_AXES[y_param].label)
            with st.expander("Break-even years", expanded=False):
                st.dataframe(break_even_grid_to_dataframe(cells), use_container_width=True)

    # -----------------------------------------------------------------------
    # Scenarios
    # -----------------------------------------------------------------------
    with tab_scen:
        _scenario_panel(store)


def main() -> None:
    """Console entry point: launch this file under `streamlit run`."""
    from streamlit.web import cli as stcli

    sys.argv = ["streamlit", "run", str(Path(__file__).resolve())] + sys.argv[1:]
    sys.exit(stcli.main())


if __name__ == "__main__":
    render()
