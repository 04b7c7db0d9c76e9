"""
Beam sizing for mass timber floors.

Beams carry the joist reactions as a UDL over their tributary width and are
sized like joists, with three differences:
    - the line load is multiplied by the safety factor
    - the minimum depth is 240 mm
    - width and depth are both cataloged: width = initial width + 2 x fire
      allowance rounded up, depth from the beam sections at that width
Self-weight is reported for the selected section but is not fed back into
the sizing.
"""

import logging
import math

from .beam_analysis import governing_depth, calc_udl_deflection, allowable_deflection
from .catalog import BEAM, SizeCatalog
from .design_checks import check_bending, check_shear, check_deflection, utilisation_summary
from .fire_resistance import NO_FIRE_RATING, allowance_mm, width_for_rating
from .geometry import tributary_width
from .loads import default_deflection_limit, line_load, calc_self_weight
from .material_data import STRUCTURAL_GRADE, get_grade
from .members import MemberSpec, fallback_member
from .section_properties import TimberSection
from .utils import emit_trace

logger = logging.getLogger(__name__)

MIN_BEAM_DEPTH = 240.0

INTERIOR = "interior"
EDGE = "edge"


def _structural_depth(span_m: float, w: float, grade: dict, width: float,
                      deflection_limit: float) -> float:
    d_bend, d_defl, _ = governing_depth(span_m, w, grade, width, deflection_limit)
    return max(MIN_BEAM_DEPTH, math.ceil(max(d_bend, d_defl)))


def size_beam(span_m: float, load_kpa: float, tributary_width_m: float,
              catalog: SizeCatalog, grade: str = STRUCTURAL_GRADE,
              fire_rating: str = NO_FIRE_RATING,
              deflection_limit: float | None = None,
              safety_factor: float = 1.5, role: str = "",
              trace=None) -> MemberSpec:
    """
    Size a simply supported beam under a floor load over a tributary width.
    Invalid (non-positive) span, load or tributary width returns a nominal
    205x335 beam with ``error`` set.
    """
    if span_m <= 0 or load_kpa <= 0 or tributary_width_m <= 0:
        logger.warning("Invalid beam inputs: span=%s, load=%s, tributary=%s",
                       span_m, load_kpa, tributary_width_m)
        return fallback_member(
            BEAM, grade, fire_rating, role=role,
            span=span_m, load=load_kpa, tributary_width=tributary_width_m,
            safety_factor=safety_factor,
        )

    props = get_grade(grade)
    allowance = allowance_mm(fire_rating)
    if deflection_limit is None:
        deflection_limit = default_deflection_limit(load_kpa)

    w = line_load(load_kpa, tributary_width_m, safety_factor)
    initial_width = width_for_rating(fire_rating)
    emit_trace(trace, "beam.load", role=role, span=span_m, load_per_meter=w,
               tributary_width=tributary_width_m, initial_width=initial_width)

    d_bend, d_defl, actions = governing_depth(span_m, w, props, initial_width, deflection_limit)
    is_deflection_governing = d_defl > d_bend
    fire_adjusted = max(MIN_BEAM_DEPTH, math.ceil(max(d_bend, d_defl))) + allowance

    if allowance > 0:
        # A rated beam is never shallower than the unrated one
        fire_adjusted = max(
            fire_adjusted,
            _structural_depth(span_m, w, props, width_for_rating(NO_FIRE_RATING),
                              deflection_limit),
        )

    width_match = catalog.nearest_width_at_least(initial_width + 2.0 * allowance)
    width = width_match.value
    if not width_match.using_fallback:
        width = catalog.resolve_width(width, BEAM).value
    depth_match = catalog.nearest_depth_at_least(width, fire_adjusted, BEAM)
    depth = depth_match.value
    using_fallback = width_match.using_fallback or depth_match.using_fallback
    emit_trace(trace, "beam.size", role=role, bending_depth=d_bend,
               deflection_depth=d_defl, fire_adjusted_depth=fire_adjusted,
               width=width, depth=depth, using_fallback=using_fallback)

    section = TimberSection(width, depth)
    checks = [
        check_bending(actions.M_max, section, props),
        check_shear(actions.V_max, section, props),
        check_deflection(w, span_m, section, props, deflection_limit),
    ]

    return MemberSpec(
        member=BEAM,
        width=width,
        depth=depth,
        grade=grade,
        fire_rating=fire_rating,
        fire_allowance=allowance,
        span=span_m,
        load=load_kpa,
        is_deflection_governing=is_deflection_governing,
        using_fallback=using_fallback,
        role=role,
        tributary_width=tributary_width_m,
        load_per_meter=w,
        safety_factor=safety_factor,
        deflection_limit=deflection_limit,
        bending_depth=math.ceil(d_bend),
        deflection_depth=math.ceil(d_defl),
        fire_adjusted_depth=fire_adjusted,
        bending_moment=actions.M_max,
        shear_force=actions.V_max,
        required_section_modulus=actions.M_Nmm / props["fb"],
        final_section_modulus=section.Zx,
        required_shear_area=1.5 * actions.V_N / props["fs"],
        moment_of_inertia=section.Ix,
        deflection=calc_udl_deflection(w, span_m, props["E"], section.Ix),
        allowable_deflection=allowable_deflection(span_m, deflection_limit),
        self_weight=calc_self_weight(width, depth, props["density"]),
        utilisation=utilisation_summary(checks),
    )


def size_multi_floor_beam(span_m: float, load_kpa: float, num_floors: int,
                          catalog: SizeCatalog,
                          avg_bay_width: float | None = None,
                          avg_bay_length: float | None = None,
                          joists_run_lengthwise: bool = True,
                          edge: bool = False,
                          grade: str = STRUCTURAL_GRADE,
                          fire_rating: str = NO_FIRE_RATING,
                          deflection_limit: float | None = None,
                          safety_factor: float = 1.5,
                          trace=None) -> MemberSpec:
    """Size an interior or edge beam from bay geometry.
    Floors act as a linear multiplier on the floor load. The default
    deflection limit follows the single-floor load."""
    if deflection_limit is None:
        deflection_limit = default_deflection_limit(load_kpa)
    trib = tributary_width(avg_bay_width, avg_bay_length, joists_run_lengthwise, edge)
    scaled_load = load_kpa * num_floors
    return size_beam(
        span_m, scaled_load, trib, catalog,
        grade=grade,
        fire_rating=fire_rating,
        deflection_limit=deflection_limit,
        safety_factor=safety_factor,
        role=EDGE if edge else INTERIOR,
        trace=trace,
    )
