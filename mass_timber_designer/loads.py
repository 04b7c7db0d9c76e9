"""
Floor loading for mass timber framing.
Converts area loads (kPa) to line loads (kN/m) for joists and beams and
aggregates axial loads for columns over the number of floors.
"""

from dataclasses import dataclass

# Gravitational acceleration (m/s^2)
GRAVITY = 9.81


@dataclass(frozen=True)
class LoadType:
    """A named occupancy with its design floor load."""
    name: str
    load_kpa: float
    description: str = ""


LOAD_TYPES = {
    "Residential": LoadType("Residential", 2.0, "Residential occupancy (2 kPa)"),
    "Commercial": LoadType("Commercial", 3.0, "Commercial occupancy (3 kPa)"),
}

# Nominal section assumed for the first-pass column self-weight estimate
COLUMN_ESTIMATE_SIZE_M = 0.3
COLUMN_ESTIMATE_DENSITY = 600.0


def default_deflection_limit(load_kpa: float) -> int:
    """Deflection limit denominator (L/n) chosen by load magnitude."""
    if load_kpa >= 5.0:
        return 400
    if load_kpa >= 3.0:
        return 360
    return 300


def line_load(load_kpa: float, width_m: float, factor: float = 1.0) -> float:
    """Area load over a tributary width as a line load (kN/m)."""
    return load_kpa * width_m * factor


def calc_self_weight(b_mm: float, d_mm: float, density_kg_m3: float) -> float:
    """
    Member self-weight as a line load (kN/m).
    SW = density * b * d * g
    b, d in mm -> convert to m.  density in kg/m^3.  g = 9.81 m/s^2.
    Result in kN/m.
    """
    b_m = b_mm / 1000.0
    d_m = d_mm / 1000.0
    return density_kg_m3 * b_m * d_m * GRAVITY / 1000.0  # N/m -> kN/m


def column_self_weight_estimate(height_m: float, num_floors: int) -> float:
    """First-pass column self-weight from a nominal 300x300 section.
    Not re-solved against the final column size."""
    size = COLUMN_ESTIMATE_SIZE_M
    return size * size * height_m * num_floors * COLUMN_ESTIMATE_DENSITY / 1000.0


def column_axial_load(load_kpa: float, tributary_area_m2: float,
                      num_floors: int, height_m: float) -> float:
    """Total axial load (kN) at the base of a column supporting num_floors."""
    load_per_floor = load_kpa * tributary_area_m2
    return load_per_floor * num_floors + column_self_weight_estimate(height_m, num_floors)
