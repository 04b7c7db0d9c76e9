"""
Mass Timber Designer - Streamlit Web GUI.
Preliminary sizing of MASSLAM joists, beams and columns for multi-storey
mass timber floor plates, with timber volume, cost and carbon estimates.

Run with: streamlit run run.py
"""

import pandas as pd
import streamlit as st

from .catalog import load_catalog
from .config import load_settings
from .fire_resistance import FIRE_RATINGS, FIRE_ALLOWANCE_MM
from .geometry import BAY_TOLERANCE, redistribute_bays, uniform_bays
from .loads import LOAD_TYPES, default_deflection_limit
from .material_data import get_dropdown_grades
from .optimal_layout import MAX_BAYS, find_optimal_layout
from .structure import BuildingInputs, calculate_structure
from .utils import format_bays

DEFLECTION_LIMITS = ["Auto (by load)", 250, 300, 360, 400, 480]


@st.cache_resource
def get_settings():
    return load_settings()


@st.cache_resource
def get_catalog(path):
    return load_catalog(path)


# ── Custom bay editing ───────────────────────────────────────────


def _store_bays(axis: str, widths: list) -> None:
    st.session_state[f"{axis}_bays"] = list(widths)
    for i, w in enumerate(widths):
        st.session_state[f"{axis}_bay_{i}"] = round(w, 2)


def _init_bays(axis: str, dimension: float, count: int) -> list:
    """Reset to uniform bays whenever the count or building dimension changes."""
    widths = st.session_state.get(f"{axis}_bays")
    if (widths is None or len(widths) != count
            or abs(sum(widths) - dimension) > BAY_TOLERANCE):
        widths = uniform_bays(dimension, count)
        _store_bays(axis, widths)
    elif any(f"{axis}_bay_{i}" not in st.session_state for i in range(count)):
        _store_bays(axis, widths)
    return widths


def _on_bay_edit(axis: str, index: int, dimension: float, max_span: float) -> None:
    widths = st.session_state[f"{axis}_bays"]
    new_width = st.session_state[f"{axis}_bay_{index}"]
    _store_bays(axis, redistribute_bays(widths, index, new_width, dimension,
                                        max_width=max_span))


def _render_bay_editor(axis: str, label: str, dimension: float, count: int,
                       max_span: float) -> tuple:
    """Render one number input per bay. Returns the current bay widths."""
    _init_bays(axis, dimension, count)
    st.caption(f"{label} bays (sum = {dimension:.2f} m)")
    cols = st.columns(min(count, 4))
    for i in range(count):
        with cols[i % len(cols)]:
            st.number_input(
                f"{label[0]}{i + 1} (m)",
                min_value=0.5, step=0.05, format="%.2f",
                key=f"{axis}_bay_{i}",
                on_change=_on_bay_edit,
                args=(axis, i, dimension, max_span),
            )
    return tuple(st.session_state[f"{axis}_bays"])


# ── Main ─────────────────────────────────────────────────────────


def main():
    st.set_page_config(page_title="Mass Timber Designer", layout="wide")
    settings = get_settings()
    catalog = get_catalog(settings.catalog_path)

    st.title("Mass Timber Designer")
    st.caption("MASSLAM floor framing -- joists, beams and columns")

    if catalog.is_empty:
        st.warning("Size catalog not loaded. Member sizes are approximate.")

    # ── Sidebar: Inputs ──────────────────────────────────────────────
    with st.sidebar:
        st.header("Inputs")

        with st.expander("Building", expanded=True):
            building_length = st.number_input("Building length (m)", min_value=1.0,
                                              value=20.0, step=0.5, key="length")
            building_width = st.number_input("Building width (m)", min_value=1.0,
                                             value=15.0, step=0.5, key="width")
            num_floors = st.number_input("Number of floors", min_value=1,
                                         value=4, step=1, key="floors")
            floor_height = st.number_input("Floor-to-floor height (m)", min_value=2.0,
                                           value=3.5, step=0.1, key="floor_height")

        with st.expander("Bays", expanded=True):
            lengthwise_bays = st.number_input("Bays along length", min_value=1,
                                              value=4, step=1, key="lw_count")
            widthwise_bays = st.number_input("Bays along width", min_value=1,
                                             value=3, step=1, key="ww_count")
            custom = st.checkbox("Custom bay widths", key="custom_bays")
            custom_lengthwise = custom_widthwise = None
            if custom:
                custom_lengthwise = _render_bay_editor(
                    "lw", "Lengthwise", building_length, int(lengthwise_bays),
                    settings.max_bay_span,
                )
                custom_widthwise = _render_bay_editor(
                    "ww", "Widthwise", building_width, int(widthwise_bays),
                    settings.max_bay_span,
                )

        with st.expander("Loading & Fire", expanded=True):
            load_type = st.selectbox("Load type", list(LOAD_TYPES.keys()), key="load_type")
            load = LOAD_TYPES[load_type].load_kpa
            st.caption(LOAD_TYPES[load_type].description)
            fire_rating = st.selectbox("Fire resistance level", FIRE_RATINGS, key="fire")
            st.caption(f"Fire allowance: {FIRE_ALLOWANCE_MM[fire_rating]:.0f} mm per face")

        with st.expander("Structure"):
            grades = get_dropdown_grades()
            grade = st.selectbox("Timber grade", grades,
                                 index=grades.index(settings.grade), key="grade")
            joist_spacing = st.number_input("Joist spacing (mm)", min_value=300.0,
                                            value=settings.joist_spacing_mm,
                                            step=50.0, key="spacing")
            joists_run_lengthwise = st.checkbox("Joists run lengthwise", value=True,
                                                key="joist_dir")
            limit_choice = st.selectbox("Deflection limit (L/n)", DEFLECTION_LIMITS,
                                        index=2, key="defl_limit")
            safety_factor = st.number_input("Safety factor (beams)", min_value=1.0,
                                            value=settings.safety_factor, step=0.1,
                                            key="safety_factor")

    deflection_limit = (default_deflection_limit(load)
                        if isinstance(limit_choice, str) else limit_choice)

    inputs = BuildingInputs.from_settings(
        settings,
        building_length=building_length,
        building_width=building_width,
        num_floors=int(num_floors),
        floor_height=floor_height,
        lengthwise_bays=int(lengthwise_bays),
        widthwise_bays=int(widthwise_bays),
        custom_lengthwise_bays=custom_lengthwise,
        custom_widthwise_bays=custom_widthwise,
        load=load,
        fire_rating=fire_rating,
        joist_spacing_mm=joist_spacing,
        joists_run_lengthwise=joists_run_lengthwise,
        deflection_limit=deflection_limit,
        safety_factor=safety_factor,
        grade=grade,
    )

    try:
        result = calculate_structure(inputs, catalog, settings.rates)
    except ValueError as e:
        st.error(f"Calculation failed: {e}")
        return

    # ── Main Area: Results ───────────────────────────────────────────
    for message in result.errors:
        st.error(message)
    for message in result.warnings:
        st.warning(message)

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Joists", result.joist.label + " mm")
        st.caption(f"@ {inputs.joist_spacing_mm:.0f} mm, span {result.joist.span:.2f} m")
    with col2:
        st.metric("Interior beams", result.interior_beam.label + " mm")
        st.caption(f"Span {result.interior_beam.span:.2f} m")
    with col3:
        st.metric("Edge beams", result.edge_beam.label + " mm")
        st.caption(f"Span {result.edge_beam.span:.2f} m")
    with col4:
        st.metric("Columns", result.column.label + " mm")
        st.caption(f"Axial load {result.column.axial_load:.0f} kN")

    st.dataframe(result.member_table(), hide_index=True)

    st.caption(f"Lengthwise bays: {format_bays(result.bays.lengthwise_bays)}  |  "
               f"Widthwise bays: {format_bays(result.bays.widthwise_bays)}")

    st.divider()

    # ── Quantities, cost & carbon ──
    st.subheader("Timber Quantities & Cost")
    q_col1, q_col2, q_col3, q_col4 = st.columns(4)
    with q_col1:
        st.metric("Timber volume", f"{result.volumes.total:.1f} m3")
    with q_col2:
        st.metric("Timber weight", f"{result.timber_weight / 1000.0:.1f} t")
    with q_col3:
        st.metric("Estimated cost", f"${result.cost.total:,.0f}")
    with q_col4:
        st.metric("Carbon savings", f"{result.carbon.carbon_savings:.1f} tCO2e")

    st.dataframe(result.quantities_table(), hide_index=True)

    with st.expander("Carbon"):
        carbon = result.carbon
        df_carbon = pd.DataFrame([
            {"Measure": "Carbon stored in timber", "tCO2e": carbon.carbon_storage},
            {"Measure": "Embodied carbon", "tCO2e": carbon.embodied_carbon},
            {"Measure": "Steel / concrete equivalent", "tCO2e": carbon.steel_concrete_emissions},
            {"Measure": "Savings", "tCO2e": carbon.carbon_savings},
        ])
        st.dataframe(df_carbon.round(1), hide_index=True)

    # ── Engineering details ──
    with st.expander("Engineering Details"):
        for m in (result.joist, result.interior_beam, result.edge_beam):
            st.markdown(f"**{m.role.capitalize() + ' beam' if m.role else 'Joist'}**")
            st.write(
                f"w = {m.load_per_meter:.2f} kN/m, M* = {m.bending_moment:.1f} kNm, "
                f"V* = {m.shear_force:.1f} kN"
            )
            st.write(
                f"Depth for bending = {m.bending_depth:.0f} mm, "
                f"for deflection = {m.deflection_depth:.0f} mm, "
                f"fire adjusted = {m.fire_adjusted_depth:.0f} mm"
            )
            st.write(
                f"Deflection = {m.deflection:.1f} mm "
                f"(allowable L/{m.deflection_limit:.0f} = {m.allowable_deflection:.1f} mm)"
            )
        st.markdown("**Column**")
        st.write(
            f"N* = {result.column.axial_load:.0f} kN, required area = "
            f"{result.column.required_area:.0f} mm^2, residual width = "
            f"{result.column.residual_width:.0f} mm"
        )

    st.divider()
    _render_layout_search(inputs, catalog, settings)


def _render_layout_search(inputs, catalog, settings) -> None:
    st.subheader("Cheapest Layout")
    st.caption(f"Uniform grids up to {MAX_BAYS} x {MAX_BAYS} bays in both joist directions, "
               f"spans up to {inputs.max_bay_span:.1f} m")
    if not st.button("Find cheapest layout", key="optimise"):
        return
    search = find_optimal_layout(inputs, catalog, settings.rates)
    best = search.best
    if best is None:
        st.warning("No layout keeps the joist and beam spans within the maximum span.")
        return
    direction = "lengthwise" if best.joists_run_lengthwise else "widthwise"
    st.success(f"{best.lengthwise_bays} x {best.widthwise_bays} bays, joists run {direction}: "
               f"${best.cost:,.0f}")
    st.dataframe(search.table(), hide_index=True)


if __name__ == "__main__":
    main()
