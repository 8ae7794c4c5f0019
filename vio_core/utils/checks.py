"""
Opt-in precondition checks for rotation inputs.

The rotation algebra in vio_core.coords does not validate values, so a
non-unit quaternion or a drifted rotation matrix silently corrupts the
result. These predicates let a caller verify inputs where it matters
(e.g. after loading a calibration or before a batch of updates).
"""

import warnings

import numpy as np


# Tolerance constants
DEFAULT_UNIT_NORM_ATOL = 1e-9  # Allowed | ||q|| - 1 |
DEFAULT_ORTHONORMAL_ATOL = 1e-9  # Allowed deviation of R R^T from I and det(R) from 1


def is_unit_quaternion(
    q: np.ndarray,
    atol: float = DEFAULT_UNIT_NORM_ATOL,
    warn: bool = False
) -> bool:
    """
    Check that q is a 4-element quaternion with unit norm.

    Args:
        q: Quaternion [qx, qy, qz, qw]
        atol: Absolute tolerance on the norm
        warn: Emit a RuntimeWarning when the check fails

    Returns:
        True if q has shape (4,), finite components and ||q|| = 1 within atol
    """
    q = np.asarray(q, dtype=np.float64)

    if q.shape != (4,):
        message = f"Quaternion must have shape (4,), got {q.shape}"
    elif not np.all(np.isfinite(q)):
        message = "Quaternion has non-finite components"
    else:
        norm = np.linalg.norm(q)
        if abs(norm - 1.0) <= atol:
            return True
        message = f"Quaternion norm {norm:.12g} deviates from 1 by more than {atol:g}"

    if warn:
        warnings.warn(message, RuntimeWarning, stacklevel=2)
    return False


def is_rotation_matrix(
    R: np.ndarray,
    atol: float = DEFAULT_ORTHONORMAL_ATOL,
    warn: bool = False
) -> bool:
    """
    Check that R is a proper rotation matrix (R R^T = I, det(R) = +1).

    Args:
        R: 3x3 matrix
        atol: Absolute tolerance on each element of R R^T - I and on det(R) - 1
        warn: Emit a RuntimeWarning when the check fails

    Returns:
        True if R is a finite, orthonormal 3x3 matrix with determinant +1

    Example:
        >>> is_rotation_matrix(np.eye(3))
        True
        >>> is_rotation_matrix(np.diag([1.0, 1.0, -1.0]))  # reflection
        False
    """
    R = np.asarray(R, dtype=np.float64)

    if R.shape != (3, 3):
        message = f"Rotation matrix must have shape (3, 3), got {R.shape}"
    elif not np.all(np.isfinite(R)):
        message = "Rotation matrix has non-finite entries"
    elif not np.allclose(R @ R.T, np.eye(3), rtol=0.0, atol=atol):
        message = f"Rotation matrix is not orthonormal within {atol:g}"
    else:
        det = np.linalg.det(R)
        if abs(det - 1.0) <= atol:
            return True
        message = f"Rotation matrix determinant {det:.12g} is not +1"

    if warn:
        warnings.warn(message, RuntimeWarning, stacklevel=2)
    return False
