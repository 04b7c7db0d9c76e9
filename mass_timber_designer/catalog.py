"""
Catalog of commercially available MASSLAM sections.

The catalog is an immutable snapshot of (width, depth, type) entries loaded
once from a CSV file with a ``width,depth,type`` header. Sizers receive the
catalog as an argument and query it for the smallest available dimension at
or above a requirement ("catalog rounding").

An empty catalog is a valid state (sizing may run before the sizes are
loaded). Queries then return the requested value unchanged and report
``using_fallback=True`` so results can be flagged as approximate.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

logger = logging.getLogger(__name__)

JOIST = "joist"
BEAM = "beam"
COLUMN = "column"
MEMBER_TYPES = (JOIST, BEAM, COLUMN)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "masslam_sizes.csv"

REQUIRED_COLUMNS = ("width", "depth", "type")


@dataclass(frozen=True)
class Section:
    """A single catalog entry. width and depth in mm."""
    width: float
    depth: float
    type: str


@dataclass(frozen=True)
class CatalogMatch:
    """Result of a catalog query."""
    value: float
    using_fallback: bool = False


@dataclass(frozen=True)
class SizeCatalog:
    """Immutable collection of available sections, partitioned by type."""
    sections: tuple = ()

    @classmethod
    def from_sections(cls, sections) -> "SizeCatalog":
        return cls(tuple(sections))

    @property
    def is_empty(self) -> bool:
        return len(self.sections) == 0

    def __len__(self) -> int:
        return len(self.sections)

    # ── Read-only views ──────────────────────────────────────────

    def widths(self) -> list[float]:
        """Sorted unique widths across all member types."""
        return sorted({s.width for s in self.sections})

    def widths_for(self, member_type: str) -> list[float]:
        """Sorted unique widths available for one member type."""
        return sorted({s.width for s in self.sections if s.type == member_type})

    def depths_for(self, width: float, member_type: str) -> list[float]:
        """Sorted depths available at an exact (width, type)."""
        return sorted({
            s.depth for s in self.sections
            if s.width == width and s.type == member_type
        })

    def contains(self, width: float, depth: float, member_type: str) -> bool:
        """True if (width, depth) is a cataloged size for the type."""
        return Section(width, depth, member_type) in self.sections

    def resolve_width(self, width: float, member_type: str) -> CatalogMatch:
        """Return the width itself if cataloged for the type, otherwise the
        closest cataloged width for that type by absolute difference."""
        widths = self.widths_for(member_type)
        if not widths:
            logger.warning("No %s sections in catalog, keeping width %.0f mm",
                           member_type, width)
            return CatalogMatch(width, using_fallback=True)
        if width in widths:
            return CatalogMatch(width)
        closest = min(widths, key=lambda w: abs(w - width))
        logger.debug("Width %.0f mm not available for %s, using %.0f mm",
                     width, member_type, closest)
        return CatalogMatch(closest)

    # ── Rounding queries ─────────────────────────────────────────

    def nearest_width_at_least(self, target_width: float) -> CatalogMatch:
        """Smallest cataloged width >= target, else the largest width.
        Widths are compared across all member types."""
        widths = self.widths()
        if not widths:
            logger.warning("Catalog empty, width %.0f mm used unrounded", target_width)
            return CatalogMatch(target_width, using_fallback=True)
        for w in widths:
            if w >= target_width:
                return CatalogMatch(w)
        return CatalogMatch(widths[-1])

    def nearest_depth_at_least(self, width: float, target_depth: float,
                               member_type: str) -> CatalogMatch:
        """Smallest cataloged depth >= target at the (possibly substituted)
        width for the type, else the largest depth at that width."""
        resolved = self.resolve_width(width, member_type)
        if resolved.using_fallback:
            return CatalogMatch(target_depth, using_fallback=True)
        depths = self.depths_for(resolved.value, member_type)
        return CatalogMatch(round_up_to(depths, target_depth))


def round_up_to(candidates: list[float], target: float) -> float:
    """Smallest candidate >= target, else the largest candidate.
    Returns target unchanged when there are no candidates."""
    ordered = sorted(candidates)
    if not ordered:
        return target
    for c in ordered:
        if c >= target:
            return c
    return ordered[-1]


# ═══════════════════════════════════════════════════════════════════
# Loading
# ═══════════════════════════════════════════════════════════════════


def load_sections(path) -> list[Section]:
    """Read sections from a CSV file with a width,depth,type header.

    Types are normalised to lower case. Rows with an unknown type or
    non-positive dimensions are dropped with a warning.
    """
    df = pd.read_csv(path, skipinitialspace=True)
    df.columns = [str(c).strip().lower() for c in df.columns]
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(
            f"Catalog file {path} is missing column(s): {', '.join(missing)}"
        )

    df = df[list(REQUIRED_COLUMNS)].dropna().copy()
    df["type"] = df["type"].astype(str).str.strip().str.lower()
    df["width"] = pd.to_numeric(df["width"], errors="coerce")
    df["depth"] = pd.to_numeric(df["depth"], errors="coerce")

    valid = (
        df["type"].isin(MEMBER_TYPES)
        & (df["width"] > 0)
        & (df["depth"] > 0)
    )
    dropped = int((~valid).sum())
    if dropped:
        logger.warning("Dropped %d invalid row(s) from catalog %s", dropped, path)

    df = df[valid].drop_duplicates()
    return [
        Section(float(row.width), float(row.depth), row.type)
        for row in df.itertuples(index=False)
    ]


def load_catalog(path=None) -> SizeCatalog:
    """Load the size catalog. A missing file gives an empty catalog."""
    path = Path(path) if path is not None else DEFAULT_CATALOG_PATH
    if not path.exists():
        logger.warning("Catalog file not found: %s, sizing will use fallbacks", path)
        return SizeCatalog()
    sections = load_sections(path)
    logger.info("Loaded %d sections from %s", len(sections), path)
    return SizeCatalog.from_sections(sections)
