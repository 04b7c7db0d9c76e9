"""
Capacity checks for a selected mass timber section.
Demand / capacity with utilisation as a percentage. Used to report how hard
the catalog-rounded section is working, not to drive the sizing.
"""

from dataclasses import dataclass

from .beam_analysis import calc_udl_deflection, allowable_deflection


@dataclass
class CheckResult:
    """Result of a single design check."""
    name: str
    demand: float
    capacity: float
    utilisation: float  # percentage
    passed: bool
    unit: str
    details: str = ""


def _utilisation(demand: float, capacity: float) -> float:
    return (demand / capacity * 100.0) if capacity > 0 else 999.0


def _result(name: str, demand: float, capacity: float, unit: str,
            details: str) -> CheckResult:
    util = _utilisation(demand, capacity)
    return CheckResult(
        name=name,
        demand=demand,
        capacity=capacity,
        utilisation=util,
        passed=util <= 100.0,
        unit=unit,
        details=details,
    )


def check_bending(M_kNm: float, section, grade: dict) -> CheckResult:
    """Bending: M <= fb * Zx."""
    capacity = grade["fb"] * section.Zx / 1e6
    return _result(
        "Bending", M_kNm, capacity, "kNm",
        f"fb={grade['fb']:.1f} MPa, Zx={section.Zx / 1e6:.2f}x10^6 mm^3",
    )


def check_shear(V_kN: float, section, grade: dict) -> CheckResult:
    """Shear: peak stress 1.5V/A <= fs, expressed as a force."""
    capacity = grade["fs"] * section.area / 1.5 / 1000.0
    return _result(
        "Shear", V_kN, capacity, "kN",
        f"fs={grade['fs']:.1f} MPa, A={section.area:.0f} mm^2",
    )


def check_deflection(w: float, span_m: float, section, grade: dict,
                     deflection_limit: float) -> CheckResult:
    """Midspan UDL deflection against L/deflection_limit."""
    delta = calc_udl_deflection(w, span_m, grade["E"], section.Ix)
    allowable = allowable_deflection(span_m, deflection_limit)
    return _result(
        "Deflection", delta, allowable, "mm",
        f"E={grade['E']:.0f} MPa, Ix={section.Ix / 1e6:.1f}x10^6 mm^4, "
        f"allow=L/{deflection_limit:.0f}={allowable:.1f} mm",
    )


def check_compression(N_kN: float, section, grade: dict) -> CheckResult:
    """Squash capacity fc * A of a column section."""
    capacity = grade["fc"] * section.area / 1000.0
    return _result(
        "Compression", N_kN, capacity, "kN",
        f"fc={grade['fc']:.1f} MPa, A={section.area:.0f} mm^2",
    )


def utilisation_summary(results: list) -> dict:
    """Map of check name (lower case) to utilisation %, plus 'overall'."""
    summary = {r.name.lower(): r.utilisation for r in results}
    summary["overall"] = max(summary.values()) if summary else 0.0
    return summary
