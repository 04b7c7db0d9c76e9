"""
Mass timber material properties for MASSLAM and glulam grades.
Strength values and modulus of elasticity in MPa, density in kg/m^3,
charring rate in mm/min.

ML38 is the project's structural grade. SL33 carries the same published
characteristic values as ML38 and is kept as a separate key for legacy projects.
"""

# Each grade stores: fb, ft, fc, fs (MPa), E (MPa), density (kg/m^3),
# charring_rate (mm/min)

TIMBER_GRADES = {
    # ── MASSLAM (Australian Sustainable Hardwoods) ──────────────
    "ML38": {
        "fb": 38.0, "ft": 19.0, "fc": 38.0, "fs": 5.0,
        "E": 14500.0, "density": 600.0, "charring_rate": 0.7,
    },
    "SL33": {
        "fb": 38.0, "ft": 19.0, "fc": 38.0, "fs": 5.0,
        "E": 14500.0, "density": 600.0, "charring_rate": 0.7,
    },

    # ── Glulam ──────────────────────────────────────────────────
    "GL18": {
        "fb": 18.0, "ft": 11.0, "fc": 18.0, "fs": 3.5,
        "E": 11500.0, "density": 600.0, "charring_rate": 0.7,
    },
    "GL21": {
        "fb": 21.0, "ft": 13.0, "fc": 21.0, "fs": 3.8,
        "E": 13000.0, "density": 650.0, "charring_rate": 0.7,
    },
    "GL24": {
        "fb": 38.0, "ft": 19.0, "fc": 38.0, "fs": 5.0,
        "E": 14500.0, "density": 600.0, "charring_rate": 0.7,
    },
}

STRUCTURAL_GRADE = "ML38"


def get_grade(grade_name: str) -> dict:
    """Return material properties for a given grade name."""
    if grade_name not in TIMBER_GRADES:
        raise ValueError(
            f"Unknown grade '{grade_name}'. "
            f"Available: {', '.join(TIMBER_GRADES.keys())}"
        )
    return TIMBER_GRADES[grade_name]


def get_dropdown_grades() -> list[str]:
    """Return list of grade names for the grade selector."""
    return list(TIMBER_GRADES.keys())


def timber_weight(volume_m3: float, grade_name: str = STRUCTURAL_GRADE) -> float:
    """Timber mass (kg) for a volume of the given grade. Negative volumes count as zero."""
    return max(volume_m3, 0.0) * get_grade(grade_name)["density"]
