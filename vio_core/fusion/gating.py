"""Mahalanobis gating of filter residuals.

Helpers for the accept/reject test an estimator runs before applying a
measurement update:

    d^2 = r^T S^{-1} r
    accept if d^2 < χ²(m, α),    m = len(r)

The 95% critical values come from the constant table in
vio_core.fusion.chi_square; other confidence levels are computed with scipy.
What to do with a rejected measurement is left to the estimator.
"""

import numpy as np

from vio_core.fusion.chi_square import CHI_SQUARE_CONFIDENCE, chi_square_critical_value


def mahalanobis_distance_squared(r: np.ndarray, S: np.ndarray) -> float:
    """Compute squared Mahalanobis distance of a residual.

    Args:
        r: Residual vector (m,).
        S: Residual covariance matrix (m × m), must be positive definite.

    Returns:
        Squared Mahalanobis distance d^2 = r^T S^{-1} r.

    Raises:
        ValueError: If dimensions are incompatible or S is singular.

    Example:
        >>> mahalanobis_distance_squared(np.array([3.0, 4.0]), np.eye(2))
        25.0
    """
    r = np.asarray(r, dtype=np.float64)
    S = np.asarray(S, dtype=np.float64)

    if r.ndim != 1:
        raise ValueError(f"Residual r must be 1D, got shape {r.shape}")
    if S.ndim != 2:
        raise ValueError(f"Covariance S must be 2D, got shape {S.shape}")

    m = len(r)
    if S.shape != (m, m):
        raise ValueError(
            f"Residual dimension {m} incompatible with S shape {S.shape}"
        )

    try:
        S_inv_r = np.linalg.solve(S, r)
    except np.linalg.LinAlgError as e:
        raise ValueError(f"Residual covariance S is singular: {e}") from e

    return float(r @ S_inv_r)


def chi_square_gate(
    r: np.ndarray,
    S: np.ndarray,
    confidence: float = CHI_SQUARE_CONFIDENCE,
) -> bool:
    """Chi-square gating decision for a residual.

    Args:
        r: Residual vector (m,).
        S: Residual covariance matrix (m × m).
        confidence: Confidence level α (default 0.95).

    Returns:
        True if the residual is consistent and the measurement should be
        used, False if it is a likely outlier.

    Raises:
        ValueError: If dimensions are incompatible, S is singular,
            or confidence is not in (0, 1).

    Example:
        >>> chi_square_gate(np.array([0.1, 0.2]), np.eye(2))
        True
        >>> chi_square_gate(np.array([5.0, 5.0]), np.eye(2))
        False
    """
    d_squared = mahalanobis_distance_squared(r, S)

    threshold = chi_square_critical_value(dof=len(r), confidence=confidence)

    return bool(d_squared < threshold)
