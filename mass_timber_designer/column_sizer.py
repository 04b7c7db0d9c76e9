"""
Column sizing for mass timber frames.

Columns are sized for squash capacity fc * A of the section left after the
fire allowance is removed from every face. The width is given (normally the
width of the supporting beam); only the depth is solved, and it is never
less than the width.
"""

import logging

from .catalog import COLUMN, SizeCatalog
from .design_checks import check_compression, utilisation_summary
from .fire_resistance import NO_FIRE_RATING, allowance_mm, width_for_rating
from .loads import column_axial_load
from .material_data import STRUCTURAL_GRADE, get_grade
from .members import MemberSpec, fallback_member
from .section_properties import TimberSection
from .utils import emit_trace

logger = logging.getLogger(__name__)


def size_column(height_m: float, load_kn: float, catalog: SizeCatalog,
                grade: str = STRUCTURAL_GRADE,
                fire_rating: str = NO_FIRE_RATING,
                width_mm: float | None = None,
                trace=None) -> MemberSpec:
    """
    Size a column for an axial load (kN, already summed over the floors).
    Invalid (non-positive) height or load returns a nominal 335x335 column
    with ``error`` set.
    """
    if height_m <= 0 or load_kn <= 0:
        logger.warning("Invalid column inputs: height=%s, load=%s", height_m, load_kn)
        return fallback_member(COLUMN, grade, fire_rating, height=height_m, axial_load=load_kn)

    props = get_grade(grade)
    allowance = allowance_mm(fire_rating)
    width = width_mm if width_mm else width_for_rating(fire_rating)

    residual_width = width - 2.0 * allowance
    if residual_width <= 0:
        logger.warning("Column width %.0f mm consumed by fire allowance %.0f mm/face",
                       width, allowance)
        return fallback_member(
            COLUMN, grade, fire_rating,
            error=f"Width {width:.0f} mm is consumed by the {fire_rating} fire allowance",
            height=height_m, axial_load=load_kn, fire_allowance=allowance,
        )

    required_area = load_kn * 1000.0 / props["fc"]
    required_depth = required_area / residual_width
    fire_adjusted = required_depth + 2.0 * allowance
    match = catalog.nearest_depth_at_least(width, max(width, fire_adjusted), COLUMN)
    depth = match.value
    # The width is fixed by the beam, so a depth taken from a substituted
    # width does not give a cataloged column.
    using_fallback = match.using_fallback or not catalog.contains(width, depth, COLUMN)
    if using_fallback and not match.using_fallback:
        logger.warning("Column %.0fx%.0f mm is not a cataloged column section", width, depth)
    emit_trace(trace, "column.size", load=load_kn, required_area=required_area,
               fire_adjusted_depth=fire_adjusted, width=width, depth=depth,
               using_fallback=using_fallback)

    section = TimberSection(width, depth)
    checks = []
    if depth > 2.0 * allowance:
        checks.append(check_compression(load_kn, section.residual(allowance), props))

    return MemberSpec(
        member=COLUMN,
        width=width,
        depth=depth,
        grade=grade,
        fire_rating=fire_rating,
        fire_allowance=allowance,
        height=height_m,
        load=load_kn,
        using_fallback=using_fallback,
        fire_adjusted_depth=fire_adjusted,
        axial_load=load_kn,
        required_area=required_area,
        residual_width=residual_width,
        utilisation=utilisation_summary(checks),
    )


def size_multi_floor_column(load_kpa: float, tributary_area_m2: float,
                            num_floors: int, floor_height_m: float,
                            catalog: SizeCatalog,
                            beam_width_mm: float | None = None,
                            grade: str = STRUCTURAL_GRADE,
                            fire_rating: str = NO_FIRE_RATING,
                            trace=None) -> MemberSpec:
    """Size a ground-floor column carrying num_floors of tributary load plus
    a first-pass self-weight estimate."""
    if load_kpa <= 0 or tributary_area_m2 <= 0 or num_floors < 1:
        logger.warning("Invalid column loading: load=%s, area=%s, floors=%s",
                       load_kpa, tributary_area_m2, num_floors)
        return fallback_member(COLUMN, grade, fire_rating, height=floor_height_m)

    total_load = column_axial_load(load_kpa, tributary_area_m2, num_floors, floor_height_m)
    return size_column(
        floor_height_m, total_load, catalog,
        grade=grade,
        fire_rating=fire_rating,
        width_mm=beam_width_mm,
        trace=trace,
    )
