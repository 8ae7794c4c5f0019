"""Statistical gating of measurement residuals.

This package provides:
- The constant 95% chi-square critical value table (DOF 1-500)
- Chi-square critical values at other confidence levels
- Squared Mahalanobis distance and the accept/reject gate
"""

from vio_core.fusion.chi_square import (
    CHI_SQUARE_CONFIDENCE,
    CHI_SQUARE_MAX_DOF,
    CHI_SQUARE_THRESHOLDS,
    chi_square_critical_value,
    chi_square_threshold,
)
from vio_core.fusion.gating import chi_square_gate, mahalanobis_distance_squared

__all__ = [
    # Table
    "CHI_SQUARE_CONFIDENCE",
    "CHI_SQUARE_MAX_DOF",
    "CHI_SQUARE_THRESHOLDS",
    "chi_square_threshold",
    "chi_square_critical_value",
    # Gating
    "mahalanobis_distance_squared",
    "chi_square_gate",
]
