"""
Rectangular mass timber section properties.
Dimensions in mm.
"""


class TimberSection:
    """Rectangular timber section with calculated properties."""

    def __init__(self, width_mm: float, depth_mm: float):
        if width_mm <= 0 or depth_mm <= 0:
            raise ValueError("Section dimensions must be positive")
        self.b = width_mm
        self.d = depth_mm

    @property
    def area(self) -> float:
        """Cross-sectional area (mm^2)."""
        return self.b * self.d

    @property
    def Zx(self) -> float:
        """Section modulus about major axis (mm^3). Zx = b*d^2/6."""
        return self.b * self.d ** 2 / 6.0

    @property
    def Ix(self) -> float:
        """Second moment of area about major axis (mm^4). Ix = b*d^3/12."""
        return self.b * self.d ** 3 / 12.0

    def residual(self, allowance_mm: float) -> "TimberSection":
        """Residual section after a per-face fire allowance on all four faces."""
        return TimberSection(self.b - 2.0 * allowance_mm, self.d - 2.0 * allowance_mm)

    def __repr__(self):
        return f"TimberSection({self.b:.0f}x{self.d:.0f})"
