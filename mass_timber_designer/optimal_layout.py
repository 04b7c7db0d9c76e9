"""
Cheapest bay layout search.

Tries every uniform bay grid from 1x1 up to max_bays x max_bays in both
joist directions. Grids whose joist or beam span exceeds the maximum bay
span are skipped. The rest go through the full structure calculation and
are ranked by total cost.
"""

import logging
from dataclasses import dataclass, replace

import pandas as pd

from .catalog import SizeCatalog
from .costing import RateTable
from .geometry import BayGeometry
from .structure import BuildingInputs, StructureResult, calculate_structure
from .utils import emit_trace, format_bays

logger = logging.getLogger(__name__)

MIN_BAYS = 1
MAX_BAYS = 5


@dataclass(frozen=True)
class LayoutCandidate:
    lengthwise_bays: int
    widthwise_bays: int
    joists_run_lengthwise: bool
    result: StructureResult

    @property
    def cost(self) -> float:
        return self.result.cost.total


@dataclass(frozen=True)
class LayoutSearch:
    """Every layout that was calculated, in search order."""
    candidates: tuple
    skipped: int

    @property
    def best(self) -> LayoutCandidate | None:
        """Cheapest candidate; the first one searched wins a tie."""
        if not self.candidates:
            return None
        return min(self.candidates, key=lambda c: c.cost)

    def table(self) -> pd.DataFrame:
        """Candidates sorted by total cost."""
        rows = []
        for c in self.candidates:
            r = c.result
            rows.append({
                "Bays (L x W)": f"{c.lengthwise_bays} x {c.widthwise_bays}",
                "Joists run": "Lengthwise" if c.joists_run_lengthwise else "Widthwise",
                "Joist span (m)": r.joist.span,
                "Beam span (m)": r.interior_beam.span,
                "Joist": r.joist.label,
                "Interior beam": r.interior_beam.label,
                "Column": r.column.label,
                "Volume (m3)": r.volumes.total,
                "Cost ($)": c.cost,
            })
        if not rows:
            return pd.DataFrame(rows)
        df = pd.DataFrame(rows).sort_values("Cost ($)", kind="stable")
        return df.reset_index(drop=True).round({"Volume (m3)": 2, "Cost ($)": 0})


def find_optimal_layout(inputs: BuildingInputs, catalog: SizeCatalog,
                        rates: RateTable | None = None,
                        max_bays: int = MAX_BAYS,
                        trace=None) -> LayoutSearch:
    """
    Search uniform bay grids and joist directions for the lowest total cost.

    The building, loading and design parameters come from inputs; its bay
    counts, custom bays and joist direction are replaced for each layout.
    Layouts whose members come back with an error are not ranked.
    """
    candidates = []
    skipped = 0
    for lengthwise in range(MIN_BAYS, max_bays + 1):
        for widthwise in range(MIN_BAYS, max_bays + 1):
            bays = BayGeometry.uniform(inputs.building_length, inputs.building_width,
                                       lengthwise, widthwise)
            for jrl in (True, False):
                if (bays.joist_span(jrl) > inputs.max_bay_span
                        or bays.beam_span(jrl) > inputs.max_bay_span):
                    skipped += 1
                    continue
                layout_inputs = replace(
                    inputs,
                    lengthwise_bays=lengthwise,
                    widthwise_bays=widthwise,
                    custom_lengthwise_bays=None,
                    custom_widthwise_bays=None,
                    joists_run_lengthwise=jrl,
                )
                result = calculate_structure(layout_inputs, catalog, rates)
                if result.errors:
                    skipped += 1
                    continue
                candidates.append(LayoutCandidate(lengthwise, widthwise, jrl, result))

    search = LayoutSearch(tuple(candidates), skipped)
    best = search.best
    if best is None:
        logger.warning("No bay layout up to %dx%d keeps spans within %.2f m",
                       max_bays, max_bays, inputs.max_bay_span)
    else:
        logger.info("Cheapest layout %dx%d (joists %s): $%.0f, bays %s",
                    best.lengthwise_bays, best.widthwise_bays,
                    "lengthwise" if best.joists_run_lengthwise else "widthwise",
                    best.cost, format_bays(best.result.bays.lengthwise_bays))
    emit_trace(trace, "layout.search", candidates=len(candidates), skipped=skipped,
               best_cost=best.cost if best else None)
    return search
