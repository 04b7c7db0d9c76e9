"""Formatting helpers and the trace side channel for the sizing pipeline."""

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TraceEvent:
    """One observation emitted by a sizer or the structure pipeline."""
    stage: str
    data: dict = field(default_factory=dict)


def emit_trace(trace, stage: str, **data) -> None:
    """Log a pipeline step and forward it to an optional trace hook.
    Hooks observe only; their return value is ignored."""
    logger.debug("%s: %s", stage, data)
    if trace is not None:
        trace(TraceEvent(stage, data))


def format_util(util: float) -> str:
    """Format utilisation as percentage string with pass/fail indicator."""
    status = "OK" if util <= 100.0 else "FAIL"
    return f"{util:.0f}% [{status}]"


def format_size(width: float, depth: float) -> str:
    """Section label in the catalog convention, e.g. 205x335."""
    return f"{width:.0f}x{depth:.0f}"


def format_bays(widths) -> str:
    """Bay widths as a compact string, e.g. '5.00 + 5.00 + 10.00 m'."""
    return " + ".join(f"{w:.2f}" for w in widths) + " m"
