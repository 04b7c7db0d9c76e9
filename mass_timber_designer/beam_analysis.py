"""
Simply supported member under uniformly distributed load (UDL), and the
inverse problem: the rectangular depth required to satisfy bending strength
or a deflection limit at a fixed width.

Units: w in kN/m (numerically equal to N/mm), span in m unless noted,
moments in kNm, forces in kN, E in MPa, sections in mm.
"""

import math
from dataclasses import dataclass


@dataclass
class UDLActions:
    """Internal actions for a simply supported span under UDL."""
    span_m: float
    w: float          # design UDL (kN/m)
    M_max: float      # midspan moment (kNm)
    V_max: float      # end shear = reaction (kN)

    @property
    def M_Nmm(self) -> float:
        return self.M_max * 1e6

    @property
    def V_N(self) -> float:
        return self.V_max * 1000.0


def analyse_udl(span_m: float, w: float) -> UDLActions:
    """M = wL^2/8, V = wL/2."""
    return UDLActions(
        span_m=span_m,
        w=w,
        M_max=w * span_m ** 2 / 8.0,
        V_max=w * span_m / 2.0,
    )


def calc_udl_deflection(w: float, span_m: float, E_mpa: float, Ix_mm4: float) -> float:
    """
    Midspan deflection (mm) of a simply supported beam under UDL.
    delta = 5*w*L^4 / (384*E*I), w in kN/m == N/mm, L in mm.
    """
    if E_mpa <= 0 or Ix_mm4 <= 0:
        return 0.0
    L_mm = span_m * 1000.0
    return 5.0 * w * L_mm ** 4 / (384.0 * E_mpa * Ix_mm4)


def allowable_deflection(span_m: float, deflection_limit: float) -> float:
    """Allowable deflection (mm) for a limit of L/deflection_limit."""
    return span_m * 1000.0 / deflection_limit


def required_section_modulus(M_Nmm: float, fb_mpa: float) -> float:
    """Z = M / fb (mm^3)."""
    return M_Nmm / fb_mpa


def depth_for_bending(Z_req_mm3: float, width_mm: float) -> float:
    """Depth (mm) giving Z = b*d^2/6 at the given width."""
    return math.sqrt(6.0 * Z_req_mm3 / width_mm)


def depth_for_deflection(w: float, span_m: float, E_mpa: float,
                         delta_max_mm: float, width_mm: float) -> float:
    """
    Depth (mm) at which the UDL deflection equals delta_max.
    From delta = 5wL^4/(384EI) and I = b*d^3/12:
        d = (5wL^4 / (384*E*delta_max))^(1/3) * (12/b)^(1/3)
    """
    L_mm = span_m * 1000.0
    stiffness = 5.0 * w * L_mm ** 4 / (384.0 * E_mpa * delta_max_mm)
    return stiffness ** (1.0 / 3.0) * (12.0 / width_mm) ** (1.0 / 3.0)


def governing_depth(span_m: float, w: float, grade: dict, width_mm: float,
                    deflection_limit: float) -> tuple:
    """
    Structural depth demand at a fixed width.
    Returns (bending_depth, deflection_depth, actions).
    """
    actions = analyse_udl(span_m, w)
    Z_req = required_section_modulus(actions.M_Nmm, grade["fb"])
    d_bend = depth_for_bending(Z_req, width_mm)
    d_defl = depth_for_deflection(
        w, span_m, grade["E"], allowable_deflection(span_m, deflection_limit), width_mm
    )
    return d_bend, d_defl, actions
