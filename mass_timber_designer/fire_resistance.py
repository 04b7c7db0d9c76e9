"""
Fire resistance allowances for exposed mass timber members.

Each fire-resistance level (FRL, structural/integrity/insulation minutes)
maps to a sacrificial allowance per exposed face:
    allowance = charring rate (0.7 mm/min) * minutes + 7 mm zero-strength layer
"""

NO_FIRE_RATING = "none"

# Ordered from least to most onerous
FIRE_RATINGS = (
    NO_FIRE_RATING,
    "30/30/30",
    "60/60/60",
    "90/90/90",
    "120/120/120",
)

# Sacrificial allowance per exposed face (mm)
FIRE_ALLOWANCE_MM = {
    NO_FIRE_RATING: 0.0,
    "30/30/30": 28.0,
    "60/60/60": 49.0,
    "90/90/90": 70.0,
    "120/120/120": 91.0,
}

# Starting member width for each rating (mm) before catalog rounding
FIRE_WIDTH_MM = {
    NO_FIRE_RATING: 120.0,
    "30/30/30": 165.0,
    "60/60/60": 165.0,
    "90/90/90": 205.0,
    "120/120/120": 250.0,
}


def _check_rating(fire_rating: str) -> None:
    if fire_rating not in FIRE_ALLOWANCE_MM:
        raise ValueError(
            f"Unknown fire rating '{fire_rating}'. "
            f"Available: {', '.join(FIRE_RATINGS)}"
        )


def allowance_mm(fire_rating: str) -> float:
    """Per-face fire allowance (mm) for a fire rating. 'none' -> 0."""
    _check_rating(fire_rating)
    return FIRE_ALLOWANCE_MM[fire_rating]


def width_for_rating(fire_rating: str) -> float:
    """Initial member width (mm) selected by fire rating."""
    _check_rating(fire_rating)
    return FIRE_WIDTH_MM[fire_rating]

