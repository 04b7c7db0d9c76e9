"""
Joist sizing for mass timber floors.

Joists are simply supported at the beams and carry the floor load over their
spacing. Width comes from the fire-rating policy; depth is the larger of the
bending and deflection demands, floored at 140 mm, plus the fire allowance,
then rounded up to a cataloged depth. Two long-span overrides apply:
    span >= 8.5 m : only depths >= 410 mm are candidates
    span >= 9.0 m : a result still below 410 mm is forced to 410 mm
The load is not multiplied by the safety factor for joists (beams are).
"""

import logging
import math

from .beam_analysis import governing_depth, calc_udl_deflection, allowable_deflection
from .catalog import JOIST, SizeCatalog, round_up_to
from .design_checks import check_bending, check_shear, check_deflection, utilisation_summary
from .fire_resistance import NO_FIRE_RATING, allowance_mm, width_for_rating
from .loads import default_deflection_limit, line_load
from .material_data import STRUCTURAL_GRADE, get_grade
from .members import MemberSpec, fallback_member
from .section_properties import TimberSection
from .utils import emit_trace

logger = logging.getLogger(__name__)

MIN_JOIST_DEPTH = 140.0

# Used when the catalog holds no joist sections
STANDARD_JOIST_DEPTHS = [200.0, 270.0, 335.0, 410.0, 480.0, 550.0, 620.0]

# ── Long-span overrides ──
LONG_SPAN_M = 8.5
VERY_LONG_SPAN_M = 9.0
LONG_SPAN_MIN_DEPTH = 410.0


def select_joist_depth(candidates: list[float], target_depth: float,
                       span_m: float) -> float:
    """Round a required depth up to a candidate depth, applying the
    long-span overrides."""
    candidates = sorted(candidates)
    if span_m >= LONG_SPAN_M:
        candidates = [d for d in candidates if d >= LONG_SPAN_MIN_DEPTH]
    depth = round_up_to(candidates, target_depth)
    if span_m >= VERY_LONG_SPAN_M and depth < LONG_SPAN_MIN_DEPTH:
        depth = LONG_SPAN_MIN_DEPTH
    return depth


def _structural_depth(span_m: float, w: float, grade: dict, width: float,
                      deflection_limit: float) -> float:
    d_bend, d_defl, _ = governing_depth(span_m, w, grade, width, deflection_limit)
    return max(MIN_JOIST_DEPTH, math.ceil(max(d_bend, d_defl)))


def size_joist(span_m: float, spacing_mm: float, load_kpa: float,
               catalog: SizeCatalog, grade: str = STRUCTURAL_GRADE,
               fire_rating: str = NO_FIRE_RATING,
               deflection_limit: float | None = None,
               safety_factor: float = 1.5, trace=None) -> MemberSpec:
    """
    Size a floor joist.

    span_m: clear span (m), spacing_mm: joist centres (mm), load_kpa: floor
    load (kPa). deflection_limit is the n in L/n; None picks it from the load.
    Invalid (non-positive) span, spacing or load returns a nominal 165x270
    joist with ``error`` set.
    """
    if span_m <= 0 or spacing_mm <= 0 or load_kpa <= 0:
        logger.warning("Invalid joist inputs: span=%s, spacing=%s, load=%s",
                       span_m, spacing_mm, load_kpa)
        return fallback_member(
            JOIST, grade, fire_rating,
            span=span_m, spacing=spacing_mm, load=load_kpa,
            safety_factor=safety_factor,
        )

    props = get_grade(grade)
    allowance = allowance_mm(fire_rating)
    if deflection_limit is None:
        deflection_limit = default_deflection_limit(load_kpa)

    w = line_load(load_kpa, spacing_mm / 1000.0)
    width_match = catalog.resolve_width(width_for_rating(fire_rating), JOIST)
    width = width_match.value
    emit_trace(trace, "joist.load", span=span_m, load_per_meter=w,
               width=width, deflection_limit=deflection_limit)

    d_bend, d_defl, actions = governing_depth(span_m, w, props, width, deflection_limit)
    is_deflection_governing = d_defl > d_bend
    fire_adjusted = max(MIN_JOIST_DEPTH, math.ceil(max(d_bend, d_defl))) + allowance

    if allowance > 0:
        # A rated joist is never shallower than the unrated one
        base_width = catalog.resolve_width(width_for_rating(NO_FIRE_RATING), JOIST).value
        fire_adjusted = max(
            fire_adjusted,
            _structural_depth(span_m, w, props, base_width, deflection_limit),
        )

    candidates = catalog.depths_for(width, JOIST)
    using_fallback = width_match.using_fallback
    if not candidates:
        logger.warning("No joist depths cataloged at %.0f mm, using standard depths", width)
        candidates = STANDARD_JOIST_DEPTHS
        using_fallback = True
    depth = select_joist_depth(candidates, fire_adjusted, span_m)
    emit_trace(trace, "joist.depth", bending_depth=d_bend, deflection_depth=d_defl,
               fire_adjusted_depth=fire_adjusted, depth=depth,
               using_fallback=using_fallback)

    section = TimberSection(width, depth)
    checks = [
        check_bending(actions.M_max, section, props),
        check_shear(actions.V_max, section, props),
        check_deflection(w, span_m, section, props, deflection_limit),
    ]

    return MemberSpec(
        member=JOIST,
        width=width,
        depth=depth,
        grade=grade,
        fire_rating=fire_rating,
        fire_allowance=allowance,
        span=span_m,
        load=load_kpa,
        is_deflection_governing=is_deflection_governing,
        using_fallback=using_fallback,
        spacing=spacing_mm,
        load_per_meter=w,
        safety_factor=safety_factor,
        deflection_limit=deflection_limit,
        bending_depth=math.ceil(d_bend),
        deflection_depth=math.ceil(d_defl),
        fire_adjusted_depth=fire_adjusted,
        bending_moment=actions.M_max,
        required_section_modulus=actions.M_Nmm / props["fb"],
        shear_force=actions.V_max,
        final_section_modulus=section.Zx,
        moment_of_inertia=section.Ix,
        deflection=calc_udl_deflection(w, span_m, props["E"], section.Ix),
        allowable_deflection=allowable_deflection(span_m, deflection_limit),
        utilisation=utilisation_summary(checks),
    )
