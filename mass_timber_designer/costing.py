"""
Cost and carbon estimates for the timber frame.

Beams and columns are priced by volume ($/m^3). Joists are priced by floor
area ($/m^2) at a rate looked up by joist size.
"""

import logging
from dataclasses import dataclass, field

from .utils import format_size

logger = logging.getLogger(__name__)

DEFAULT_BEAM_RATE = 3200.0    # $/m^3
DEFAULT_COLUMN_RATE = 3200.0  # $/m^3
DEFAULT_JOIST_RATE = 390.0    # $/m^2

DEFAULT_JOIST_RATES = {
    "120x200": 390.0,
    "165x270": 390.0,
    "205x335": 390.0,
    "250x410": 390.0,
    "290x480": 390.0,
    "335x550": 390.0,
    "380x620": 390.0,
    "420x690": 390.0,
    "450x760": 390.0,
    "450x830": 390.0,
}

# tonnes CO2e per m^3 of timber
CARBON_STORAGE_FACTOR = 0.9
EMBODIED_CARBON_FACTOR = 0.2
STEEL_CONCRETE_FACTOR = 2.5

# kg/m^3, converts a timber weight back to volume
CARBON_REFERENCE_DENSITY = 600.0


@dataclass(frozen=True)
class RateTable:
    """Unit rates used for costing."""
    beam_rate: float = DEFAULT_BEAM_RATE
    column_rate: float = DEFAULT_COLUMN_RATE
    joist_rates: dict = field(default_factory=lambda: dict(DEFAULT_JOIST_RATES))

    @classmethod
    def from_dict(cls, data: dict | None) -> "RateTable":
        """Build from a mapping with beam_rate, column_rate and joist_rates.
        Missing entries keep their defaults."""
        data = data or {}
        joist_rates = {str(k): float(v) for k, v in (data.get("joist_rates") or {}).items()}
        for key, rate in [("beam_rate", data.get("beam_rate")),
                          ("column_rate", data.get("column_rate"))] + list(joist_rates.items()):
            if rate is not None and float(rate) < 0:
                raise ValueError(f"Rate '{key}' must not be negative, got {rate}")
        return cls(
            beam_rate=float(data.get("beam_rate", DEFAULT_BEAM_RATE)),
            column_rate=float(data.get("column_rate", DEFAULT_COLUMN_RATE)),
            joist_rates=joist_rates or dict(DEFAULT_JOIST_RATES),
        )


def _parse_size_key(key: str) -> tuple | None:
    try:
        width, depth = key.lower().split("x")
        return float(width), float(depth)
    except ValueError:
        return None


def joist_rate_for(width_mm: float, depth_mm: float, rates: RateTable) -> tuple:
    """
    Joist rate ($/m^2) for a size. Returns (size_key, rate).
    Uses the exact WxD key if present, otherwise the key whose width*depth
    is closest to the requested section area.
    """
    key = format_size(width_mm, depth_mm)
    if key in rates.joist_rates:
        return key, rates.joist_rates[key]

    target_area = width_mm * depth_mm
    best_key, best_diff = None, None
    for candidate in rates.joist_rates:
        dims = _parse_size_key(candidate)
        if dims is None:
            continue
        diff = abs(dims[0] * dims[1] - target_area)
        if best_diff is None or diff < best_diff:
            best_key, best_diff = candidate, diff

    if best_key is None:
        logger.warning("No joist rates available, using default %.0f $/m2", DEFAULT_JOIST_RATE)
        return key, DEFAULT_JOIST_RATE
    logger.debug("No joist rate for %s, using closest size %s", key, best_key)
    return best_key, rates.joist_rates[best_key]


@dataclass(frozen=True)
class CostItem:
    """Cost of one element group."""
    cost: float
    rate: float
    quantity: float   # m^3 for beams and columns, m^2 for joists
    unit: str
    size_used: str = ""


@dataclass(frozen=True)
class CostBreakdown:
    beams: CostItem
    columns: CostItem
    joists: CostItem

    @property
    def total(self) -> float:
        return self.beams.cost + self.columns.cost + self.joists.cost


def calculate_cost(beam_volume: float, column_volume: float, joist_area: float,
                   joist_size: tuple, rates: RateTable | None = None) -> CostBreakdown:
    """Cost of the frame. Negative quantities count as zero."""
    rates = rates or RateTable()
    beam_volume = max(beam_volume, 0.0)
    column_volume = max(column_volume, 0.0)
    joist_area = max(joist_area, 0.0)
    size_key, joist_rate = joist_rate_for(*joist_size, rates)

    return CostBreakdown(
        beams=CostItem(beam_volume * rates.beam_rate, rates.beam_rate, beam_volume, "m3"),
        columns=CostItem(column_volume * rates.column_rate, rates.column_rate,
                         column_volume, "m3"),
        joists=CostItem(joist_area * joist_rate, joist_rate, joist_area, "m2", size_key),
    )


@dataclass(frozen=True)
class CarbonFigures:
    """Carbon figures in tonnes CO2e."""
    volume: float
    carbon_storage: float
    embodied_carbon: float
    steel_concrete_emissions: float

    @property
    def carbon_savings(self) -> float:
        return self.steel_concrete_emissions - self.embodied_carbon


def calculate_carbon(volume_m3: float | None = None,
                     weight_kg: float | None = None) -> CarbonFigures:
    """Carbon figures from a timber volume, or from a weight at 600 kg/m^3."""
    if volume_m3 is None:
        volume_m3 = (weight_kg or 0.0) / CARBON_REFERENCE_DENSITY
    volume_m3 = max(volume_m3, 0.0)
    return CarbonFigures(
        volume=volume_m3,
        carbon_storage=volume_m3 * CARBON_STORAGE_FACTOR,
        embodied_carbon=volume_m3 * EMBODIED_CARBON_FACTOR,
        steel_concrete_emissions=volume_m3 * STEEL_CONCRETE_FACTOR,
    )
