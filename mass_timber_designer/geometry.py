"""
Bay geometry, tributary areas, member counts and timber volumes.

Plan convention: the building length runs along x and is divided into
lengthwise bays; the building width runs along y and is divided into
widthwise bays. Columns sit at every grid intersection.

When joists run lengthwise they span across the widthwise bays and bear on
beams that run along the building length (spanning the lengthwise bays).
Otherwise the roles of the two axes swap. Beams only run perpendicular to the
joists.
"""

import logging
import math
from dataclasses import dataclass

logger = logging.getLogger(__name__)

MIN_BAY_WIDTH = 0.5       # m
BAY_TOLERANCE = 0.01      # m

# Tributary widths used when bay dimensions are unavailable (m)
DEFAULT_EDGE_TRIBUTARY = 2.5
DEFAULT_INTERIOR_TRIBUTARY = 5.0


# ═══════════════════════════════════════════════════════════════════
# Bay widths
# ═══════════════════════════════════════════════════════════════════


def uniform_bays(dimension: float, count: int) -> list[float]:
    """Split a building dimension into equal bays."""
    count = max(int(count), 1)
    return [dimension / count] * count


def normalise_bays(widths, dimension: float) -> list[float]:
    """Rescale all bays proportionally if their sum drifts from the building
    dimension by more than BAY_TOLERANCE."""
    widths = [float(w) for w in widths]
    total = sum(widths)
    if total <= 0:
        return uniform_bays(dimension, len(widths))
    if abs(total - dimension) <= BAY_TOLERANCE:
        return widths
    scale = dimension / total
    return [w * scale for w in widths]


def redistribute_bays(widths, index: int, new_width: float, dimension: float,
                      min_width: float = MIN_BAY_WIDTH,
                      max_width: float | None = None) -> list[float]:
    """
    Set one bay to new_width and absorb the change in the other bays in
    proportion to their current widths, none going below min_width.

    The edited bay is limited so the others can keep min_width each, and to
    max_width if given. The result sums to the building dimension.
    """
    widths = [float(w) for w in widths]
    n = len(widths)
    if n == 1:
        return [dimension]
    if not 0 <= index < n:
        raise IndexError(f"Bay index {index} out of range for {n} bays")

    upper = dimension - min_width * (n - 1)
    if max_width is not None:
        upper = min(upper, max_width)
    new_width = min(max(new_width, min_width), upper)

    if (new_width == widths[index]
            and abs(sum(widths) - dimension) <= BAY_TOLERANCE):
        return widths

    result = list(widths)
    result[index] = new_width
    free = [i for i in range(n) if i != index]
    remaining = dimension - new_width

    # Scale the others to the remaining width; bays that would fall below the minimum
    # are pinned there and the rest rescaled.
    while free:
        free_total = sum(widths[i] for i in free)
        scale = remaining / free_total if free_total > 0 else 0.0
        pinned = [i for i in free if widths[i] * scale < min_width]
        if not pinned:
            for i in free:
                result[i] = widths[i] * scale
            break
        for i in pinned:
            result[i] = min_width
            remaining -= min_width
            free.remove(i)

    return result


def _axis_bays(dimension: float, widths, count: int) -> list[float]:
    if widths:
        return normalise_bays(widths, dimension)
    return uniform_bays(dimension, count)


@dataclass(frozen=True)
class BayGeometry:
    """Bay widths (m) along the building length and width."""
    lengthwise_bays: tuple
    widthwise_bays: tuple

    @classmethod
    def uniform(cls, building_length: float, building_width: float,
                lengthwise_count: int, widthwise_count: int) -> "BayGeometry":
        return cls(
            tuple(uniform_bays(building_length, lengthwise_count)),
            tuple(uniform_bays(building_width, widthwise_count)),
        )

    @classmethod
    def custom(cls, building_length: float, building_width: float,
               lengthwise_widths, widthwise_widths,
               lengthwise_count: int = 1, widthwise_count: int = 1) -> "BayGeometry":
        """Custom bays, renormalised to the building dimensions. An axis
        without custom widths gets count uniform bays."""
        return cls(
            tuple(_axis_bays(building_length, lengthwise_widths, lengthwise_count)),
            tuple(_axis_bays(building_width, widthwise_widths, widthwise_count)),
        )

    @property
    def lengthwise_count(self) -> int:
        return len(self.lengthwise_bays)

    @property
    def widthwise_count(self) -> int:
        return len(self.widthwise_bays)

    @property
    def avg_bay_length(self) -> float:
        return sum(self.lengthwise_bays) / self.lengthwise_count

    @property
    def avg_bay_width(self) -> float:
        return sum(self.widthwise_bays) / self.widthwise_count

    @property
    def tributary_area(self) -> float:
        """Floor area carried by an interior column (m^2)."""
        return self.avg_bay_length * self.avg_bay_width

    @property
    def grid_points(self) -> int:
        return (self.lengthwise_count + 1) * (self.widthwise_count + 1)

    def joist_span(self, joists_run_lengthwise: bool) -> float:
        """Governing (largest) joist span (m)."""
        if joists_run_lengthwise:
            return max(self.widthwise_bays)
        return max(self.lengthwise_bays)

    def beam_span(self, joists_run_lengthwise: bool) -> float:
        """Governing (largest) beam span (m)."""
        if joists_run_lengthwise:
            return max(self.lengthwise_bays)
        return max(self.widthwise_bays)


def tributary_width(avg_bay_width: float | None, avg_bay_length: float | None,
                    joists_run_lengthwise: bool, edge: bool) -> float:
    """
    Tributary width (m) of a beam. The bay dimension perpendicular to the
    beam span is carried in full by an interior beam and halved for an edge
    beam.
    """
    perpendicular = avg_bay_width if joists_run_lengthwise else avg_bay_length
    if not perpendicular or perpendicular <= 0:
        fallback = DEFAULT_EDGE_TRIBUTARY if edge else DEFAULT_INTERIOR_TRIBUTARY
        logger.warning("Bay dimensions unavailable, using tributary width %.1f m", fallback)
        return fallback
    return perpendicular / 2.0 if edge else perpendicular


# ═══════════════════════════════════════════════════════════════════
# Counts and volumes (per floor unless noted)
# ═══════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class JoistLayout:
    count: int
    run_length: float  # m


@dataclass(frozen=True)
class BeamLayout:
    lines: int           # beam lines across the plan
    line_length: float   # m
    segments: int        # column-to-column beams per line

    @property
    def edge_lines(self) -> int:
        return min(self.lines, 2)

    @property
    def interior_lines(self) -> int:
        return max(0, self.lines - 2)

    @property
    def count(self) -> int:
        return self.lines * self.segments


def joist_layout(building_length: float, building_width: float,
                 spacing_mm: float, joists_run_lengthwise: bool) -> JoistLayout:
    """Joist count over the dimension perpendicular to the joist span and the
    run length parallel to it."""
    if joists_run_lengthwise:
        perpendicular, run_length = building_length, building_width
    else:
        perpendicular, run_length = building_width, building_length
    if spacing_mm <= 0 or perpendicular <= 0:
        return JoistLayout(0, max(run_length, 0.0))
    return JoistLayout(math.ceil(perpendicular / (spacing_mm / 1000.0)), run_length)


def beam_layout(building_length: float, building_width: float,
                bays: BayGeometry, joists_run_lengthwise: bool) -> BeamLayout:
    """Beam lines perpendicular to the joists, one per grid line."""
    if joists_run_lengthwise:
        return BeamLayout(bays.widthwise_count + 1, building_length, bays.lengthwise_count)
    return BeamLayout(bays.lengthwise_count + 1, building_width, bays.widthwise_count)


def member_volume(width_mm: float, depth_mm: float, length_m: float,
                  count: float = 1) -> float:
    """Volume (m^3) of count members of a rectangular section."""
    return max(width_mm / 1000.0 * depth_mm / 1000.0 * length_m * count, 0.0)


def joist_volume(width_mm: float, depth_mm: float, building_length: float,
                 building_width: float, spacing_mm: float,
                 joists_run_lengthwise: bool) -> float:
    layout = joist_layout(building_length, building_width, spacing_mm, joists_run_lengthwise)
    return member_volume(width_mm, depth_mm, layout.run_length, layout.count)


def beam_volumes(interior_size: tuple, edge_size: tuple, building_length: float,
                 building_width: float, bays: BayGeometry,
                 joists_run_lengthwise: bool) -> tuple:
    """(interior, edge) beam volumes (m^3) for one floor."""
    layout = beam_layout(building_length, building_width, bays, joists_run_lengthwise)
    interior = member_volume(*interior_size, layout.line_length, layout.interior_lines)
    edge = member_volume(*edge_size, layout.line_length, layout.edge_lines)
    return interior, edge


def column_volume(width_mm: float, depth_mm: float, floor_height: float,
                  num_floors: int, bays: BayGeometry) -> float:
    """Columns at every grid intersection, continuous over the full height."""
    return member_volume(width_mm, depth_mm, floor_height * num_floors, bays.grid_points)
