"""
Whole-structure calculation.

Order of work:
    bays -> joists (governing joist span)
         -> interior and edge beams (governing beam span)
         -> columns (width = interior beam width)
         -> counts and volumes -> cost and carbon
The result is an immutable StructureResult. Invalid inputs and catalog
misses are flagged on the members; span policy breaches are collected as
warnings. Neither stops the calculation.
"""

import logging
from dataclasses import dataclass, field

import pandas as pd

from .beam_sizer import size_multi_floor_beam
from .catalog import SizeCatalog
from .column_sizer import size_multi_floor_column
from .costing import RateTable, CostBreakdown, CarbonFigures, calculate_cost, calculate_carbon
from .fire_resistance import NO_FIRE_RATING
from .geometry import (
    BayGeometry, joist_layout, beam_layout, member_volume, beam_volumes, column_volume,
)
from .joist_sizer import size_joist
from .loads import default_deflection_limit
from .material_data import STRUCTURAL_GRADE, timber_weight
from .members import MemberSpec
from .utils import emit_trace, format_util

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildingInputs:
    """Building geometry, loading and design parameters.
    Dimensions in m, load in kPa, joist spacing in mm."""
    building_length: float
    building_width: float
    num_floors: int = 1
    floor_height: float = 3.0
    lengthwise_bays: int = 1
    widthwise_bays: int = 1
    custom_lengthwise_bays: tuple | None = None
    custom_widthwise_bays: tuple | None = None
    load: float = 2.0
    fire_rating: str = NO_FIRE_RATING
    joist_spacing_mm: float = 800.0
    joists_run_lengthwise: bool = True
    deflection_limit: float | None = 300
    safety_factor: float = 1.5
    grade: str = STRUCTURAL_GRADE
    max_bay_span: float = 9.0

    @classmethod
    def from_settings(cls, settings, **values) -> "BuildingInputs":
        """Inputs with design defaults taken from CalculatorSettings."""
        defaults = {
            "grade": settings.grade,
            "safety_factor": settings.safety_factor,
            "deflection_limit": settings.deflection_limit,
            "joist_spacing_mm": settings.joist_spacing_mm,
            "max_bay_span": settings.max_bay_span,
        }
        defaults.update(values)
        return cls(**defaults)

    def bay_geometry(self) -> BayGeometry:
        if self.custom_lengthwise_bays or self.custom_widthwise_bays:
            return BayGeometry.custom(
                self.building_length, self.building_width,
                self.custom_lengthwise_bays, self.custom_widthwise_bays,
                self.lengthwise_bays, self.widthwise_bays,
            )
        return BayGeometry.uniform(
            self.building_length, self.building_width,
            self.lengthwise_bays, self.widthwise_bays,
        )


@dataclass(frozen=True)
class VolumeSummary:
    """Timber volumes (m^3) for the whole building."""
    joists: float
    interior_beams: float
    edge_beams: float
    columns: float

    @property
    def beams(self) -> float:
        return self.interior_beams + self.edge_beams

    @property
    def total(self) -> float:
        return self.joists + self.beams + self.columns


@dataclass(frozen=True)
class MemberCounts:
    joists: int
    beams: int
    columns: int


@dataclass(frozen=True)
class StructureResult:
    inputs: BuildingInputs
    bays: BayGeometry
    joist: MemberSpec
    interior_beam: MemberSpec
    edge_beam: MemberSpec
    column: MemberSpec
    volumes: VolumeSummary
    counts: MemberCounts
    joist_area: float      # m^2, all floors
    timber_weight: float   # kg
    cost: CostBreakdown
    carbon: CarbonFigures
    warnings: tuple = field(default_factory=tuple)

    @property
    def members(self) -> list:
        return [self.joist, self.interior_beam, self.edge_beam, self.column]

    @property
    def using_fallback(self) -> bool:
        """True if any member was sized without a full catalog."""
        return any(m.using_fallback for m in self.members)

    @property
    def errors(self) -> list[str]:
        return [f"{_member_name(m)}: {m.error}" for m in self.members if m.error]

    def member_table(self) -> pd.DataFrame:
        """One row per sized member, formatted for display."""
        rows = []
        for m in self.members:
            overall = m.utilisation.get("overall")
            rows.append({
                "Member": _member_name(m),
                "Size (mm)": m.label,
                "Span / Height (m)": f"{m.span or m.height:.2f}",
                "Governing": _governing(m),
                "Fire allowance (mm)": f"{m.fire_allowance:.0f}",
                "Utilisation": format_util(overall) if overall is not None else "-",
                "Approximate": "Yes" if m.using_fallback else "",
                "Error": m.error or "",
            })
        return pd.DataFrame(rows)

    def quantities_table(self) -> pd.DataFrame:
        """Volumes and costs per element group."""
        rows = [
            {"Element": "Joists", "Count": self.counts.joists,
             "Volume (m3)": self.volumes.joists,
             "Quantity priced": f"{self.cost.joists.quantity:.1f} m2",
             "Cost ($)": self.cost.joists.cost},
            {"Element": "Beams", "Count": self.counts.beams,
             "Volume (m3)": self.volumes.beams,
             "Quantity priced": f"{self.cost.beams.quantity:.2f} m3",
             "Cost ($)": self.cost.beams.cost},
            {"Element": "Columns", "Count": self.counts.columns,
             "Volume (m3)": self.volumes.columns,
             "Quantity priced": f"{self.cost.columns.quantity:.2f} m3",
             "Cost ($)": self.cost.columns.cost},
        ]
        df = pd.DataFrame(rows)
        return df.round({"Volume (m3)": 2, "Cost ($)": 0})


def _member_name(m: MemberSpec) -> str:
    return f"{m.role.capitalize()} {m.member}" if m.role else m.member.capitalize()


def _governing(m: MemberSpec) -> str:
    if m.member == "column":
        return "Compression"
    return "Deflection" if m.is_deflection_governing else "Bending"


def calculate_structure(inputs: BuildingInputs, catalog: SizeCatalog,
                        rates: RateTable | None = None,
                        trace=None) -> StructureResult:
    """Size every member of the building and roll up quantities, cost and carbon."""
    warnings = []

    num_floors = inputs.num_floors
    if num_floors < 1:
        logger.warning("Number of floors %s invalid, using 1", num_floors)
        num_floors = 1

    bays = inputs.bay_geometry()
    jrl = inputs.joists_run_lengthwise
    joist_span = bays.joist_span(jrl)
    beam_span = bays.beam_span(jrl)
    emit_trace(trace, "structure.bays", lengthwise=bays.lengthwise_bays,
               widthwise=bays.widthwise_bays, joist_span=joist_span, beam_span=beam_span)

    for label, span in (("joist", joist_span), ("beam", beam_span)):
        if span > inputs.max_bay_span:
            message = (f"The {label} span ({span:.2f} m) exceeds the maximum "
                       f"allowable span ({inputs.max_bay_span:.2f} m)")
            logger.warning(message)
            warnings.append(message)

    deflection_limit = inputs.deflection_limit or default_deflection_limit(inputs.load)
    design = {
        "grade": inputs.grade,
        "fire_rating": inputs.fire_rating,
        "deflection_limit": deflection_limit,
        "safety_factor": inputs.safety_factor,
        "trace": trace,
    }

    joist = size_joist(joist_span, inputs.joist_spacing_mm, inputs.load, catalog, **design)

    beam_args = {
        "avg_bay_width": bays.avg_bay_width,
        "avg_bay_length": bays.avg_bay_length,
        "joists_run_lengthwise": jrl,
    }
    interior_beam = size_multi_floor_beam(beam_span, inputs.load, num_floors, catalog,
                                          edge=False, **beam_args, **design)
    edge_beam = size_multi_floor_beam(beam_span, inputs.load, num_floors, catalog,
                                      edge=True, **beam_args, **design)

    column = size_multi_floor_column(
        inputs.load, bays.tributary_area, num_floors, inputs.floor_height, catalog,
        beam_width_mm=interior_beam.width,
        grade=inputs.grade,
        fire_rating=inputs.fire_rating,
        trace=trace,
    )

    # ── Quantities ──
    length, width = inputs.building_length, inputs.building_width
    joists = joist_layout(length, width, inputs.joist_spacing_mm, jrl)
    beams = beam_layout(length, width, bays, jrl)
    interior_vol, edge_vol = beam_volumes(
        (interior_beam.width, interior_beam.depth), (edge_beam.width, edge_beam.depth),
        length, width, bays, jrl,
    )
    volumes = VolumeSummary(
        joists=member_volume(joist.width, joist.depth, joists.run_length,
                             joists.count) * num_floors,
        interior_beams=interior_vol * num_floors,
        edge_beams=edge_vol * num_floors,
        columns=column_volume(column.width, column.depth, inputs.floor_height,
                              num_floors, bays),
    )
    counts = MemberCounts(
        joists=joists.count * num_floors,
        beams=beams.count * num_floors,
        columns=bays.grid_points,
    )
    joist_area = max(length * width, 0.0) * num_floors
    emit_trace(trace, "structure.volumes", joists=volumes.joists, beams=volumes.beams,
               columns=volumes.columns, total=volumes.total)

    cost = calculate_cost(volumes.beams, volumes.columns, joist_area,
                          (joist.width, joist.depth), rates)
    carbon = calculate_carbon(volumes.total)

    for m in (joist, interior_beam, edge_beam, column):
        if m.using_fallback:
            warnings.append(f"{_member_name(m)} size is approximate (no matching catalog section)")

    return StructureResult(
        inputs=inputs,
        bays=bays,
        joist=joist,
        interior_beam=interior_beam,
        edge_beam=edge_beam,
        column=column,
        volumes=volumes,
        counts=counts,
        joist_area=joist_area,
        timber_weight=timber_weight(volumes.total, inputs.grade),
        cost=cost,
        carbon=carbon,
        warnings=tuple(warnings),
    )
