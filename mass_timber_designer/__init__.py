"""Mass timber structural sizing: joists, beams and columns from MASSLAM sections."""

__version__ = "0.1.0"
