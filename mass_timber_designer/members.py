"""
Sized member records produced by the joist, beam and column sizers.
A MemberSpec is created once per calculation and never mutated.
"""

from dataclasses import dataclass, field

from .catalog import JOIST, BEAM, COLUMN
from .utils import format_size

# Nominal sizes returned when inputs cannot be sized (mm)
FALLBACK_SIZES = {
    JOIST: (165.0, 270.0),
    BEAM: (205.0, 335.0),
    COLUMN: (335.0, 335.0),
}

INVALID_INPUT_ERROR = "Invalid input parameters"


@dataclass(frozen=True)
class MemberSpec:
    """A sized joist, beam or column. Dimensions in mm, span/height in m."""
    member: str
    width: float
    depth: float
    grade: str
    fire_rating: str
    fire_allowance: float = 0.0
    span: float = 0.0
    height: float = 0.0
    load: float = 0.0
    is_deflection_governing: bool = False
    using_fallback: bool = False
    error: str | None = None
    role: str = ""
    # Engineering detail (joists and beams)
    spacing: float = 0.0
    tributary_width: float = 0.0
    load_per_meter: float = 0.0
    safety_factor: float = 1.0
    deflection_limit: float = 0.0
    bending_depth: float = 0.0
    deflection_depth: float = 0.0
    fire_adjusted_depth: float = 0.0
    bending_moment: float = 0.0
    shear_force: float = 0.0
    required_section_modulus: float = 0.0
    final_section_modulus: float = 0.0
    required_shear_area: float = 0.0
    moment_of_inertia: float = 0.0
    deflection: float = 0.0
    allowable_deflection: float = 0.0
    self_weight: float = 0.0
    # Engineering detail (columns)
    axial_load: float = 0.0
    required_area: float = 0.0
    residual_width: float = 0.0
    utilisation: dict = field(default_factory=dict)

    @property
    def label(self) -> str:
        return format_size(self.width, self.depth)

    @property
    def is_valid(self) -> bool:
        return self.error is None


def fallback_member(member: str, grade: str, fire_rating: str,
                    error: str = INVALID_INPUT_ERROR, **fields) -> MemberSpec:
    """Nominal member tagged with an error, for inputs that cannot be sized."""
    width, depth = FALLBACK_SIZES[member]
    return MemberSpec(
        member=member,
        width=width,
        depth=depth,
        grade=grade,
        fire_rating=fire_rating,
        error=error,
        is_deflection_governing=(member != COLUMN),
        **fields,
    )
