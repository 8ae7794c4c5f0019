"""JPL quaternion algebra and rotation conversions.

This module provides the rotation primitives consumed by a filtering-based
visual-inertial estimator:
- Skew-symmetric (cross-product) matrices
- JPL quaternion composition and inversion
- Quaternion <-> rotation matrix conversions

Conventions:
- Quaternions: [qx, qy, qz, qw] where qw is the scalar part (JPL, scalar last)
- Quaternion product follows the JPL (left-handed) rule, so that
  C(q1 ⊗ q2) = C(q1) @ C(q2)
- Rotation matrices: 3x3 numpy arrays describing the passive (frame)
  rotation encoded by the quaternion

Every quaternion returned by this module is unit norm with qw >= 0. A
quaternion and its negation describe the same rotation, so fixing the sign
of the scalar part makes outputs directly comparable.

Preconditions (unit-norm input, orthonormal matrices, non-zero quaternions)
are the caller's responsibility and are not checked here. See
vio_core.utils.checks for opt-in validation.

Reference: Trawny & Roumeliotis, "Indirect Kalman Filter for 3D Attitude
Estimation", Tech. Report 2005-002, Eqs. (8), (62), (78)
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray

# Smallest 1 + trace(R) (= 4 qw^2) for which qw is used as the pivot on ties
W_PIVOT_MIN_TRACE = 1e-10


def _as_vector(v: ArrayLike, size: int, name: str) -> NDArray[np.float64]:
    v = np.asarray(v, dtype=np.float64)
    if v.shape != (size,):
        raise ValueError(f"{name} must have shape ({size},), got {v.shape}")
    return v


def _normalize_canonical(q: NDArray[np.float64]) -> NDArray[np.float64]:
    """Scale q to unit norm and flip its sign so that qw >= 0."""
    q = q / np.linalg.norm(q)
    if q[3] < 0:
        q = -q
    return q


def quat_identity() -> NDArray[np.float64]:
    """Return the identity quaternion [0, 0, 0, 1]."""
    return np.array([0.0, 0.0, 0.0, 1.0], dtype=np.float64)


def skew(w: ArrayLike) -> NDArray[np.float64]:
    """Compute skew-symmetric matrix [w×] for cross products.

        [w×] = [  0   -w2    w1 ]
               [ w2     0   -w0 ]
               [-w1    w0     0 ]

    so that [w×] @ v = w × v for any 3-vector v.

    Args:
        w: 3D vector, shape (3,).

    Returns:
        Skew-symmetric matrix, shape (3, 3). Satisfies [w×]^T = -[w×]
        and [w×] @ w = 0.

    Raises:
        ValueError: If w is not a 3-element vector.

    Example:
        >>> S = skew([1.0, 0.0, 0.0])
        >>> S @ np.array([0.0, 1.0, 0.0])
        array([0., 0., 1.])
    """
    w0, w1, w2 = _as_vector(w, 3, "w")

    return np.array(
        [
            [0.0, -w2, w1],
            [w2, 0.0, -w0],
            [-w1, w0, 0.0],
        ],
        dtype=np.float64,
    )


def quat_left_matrix(q: ArrayLike) -> NDArray[np.float64]:
    """Build the 4x4 JPL left-multiplication matrix of q.

    With rows and columns ordered [x, y, z, w]:

        L(q) = [ qw   qz  -qy   qx ]
               [-qz   qw   qx   qy ]
               [ qy  -qx   qw   qz ]
               [-qx  -qy  -qz   qw ]

    so that q ⊗ p = L(q) @ p (before normalization).

    Args:
        q: Quaternion [qx, qy, qz, qw], shape (4,).

    Returns:
        4x4 matrix L(q).

    Raises:
        ValueError: If q is not a 4-element vector.

    Reference:
        Trawny & Roumeliotis (2005), Eq. (10)
    """
    qx, qy, qz, qw = _as_vector(q, 4, "q")

    return np.array(
        [
            [qw, qz, -qy, qx],
            [-qz, qw, qx, qy],
            [qy, -qx, qw, qz],
            [-qx, -qy, -qz, qw],
        ],
        dtype=np.float64,
    )


def quat_multiply(q1: ArrayLike, q2: ArrayLike) -> NDArray[np.float64]:
    """Compose two quaternions under the JPL convention (q1 ⊗ q2).

    The product is computed as L(q1) @ q2, then normalized and
    sign-canonicalized. This is NOT the Hamilton product: with JPL
    quaternions the rotation matrices compose in the same order,
    C(q1 ⊗ q2) = C(q1) @ C(q2).

    The product is associative but not commutative.

    Args:
        q1: Left quaternion [qx, qy, qz, qw], shape (4,).
        q2: Right quaternion [qx, qy, qz, qw], shape (4,).

    Returns:
        Unit quaternion q1 ⊗ q2 with qw >= 0.

    Raises:
        ValueError: If q1 or q2 is not a 4-element vector.

    Example:
        >>> q = np.array([0.0, 0.0, np.sin(0.25), np.cos(0.25)])
        >>> q_sq = quat_multiply(q, q)  # 1 rad about z
        >>> np.allclose(q_sq, [0.0, 0.0, np.sin(0.5), np.cos(0.5)])
        True
    """
    q2 = _as_vector(q2, 4, "q2")

    q = quat_left_matrix(q1) @ q2

    return _normalize_canonical(q)


def quat_inverse(q: ArrayLike) -> NDArray[np.float64]:
    """Invert a quaternion.

    If qw > 0 the vector part is negated; otherwise the scalar part is
    negated and the vector part kept. Both branches give the conjugate up
    to an overall sign, and the result always has qw >= 0. The result is
    normalized.

    Args:
        q: Quaternion [qx, qy, qz, qw], shape (4,).

    Returns:
        Unit quaternion q^-1 such that q ⊗ q^-1 = [0, 0, 0, 1].

    Raises:
        ValueError: If q is not a 4-element vector.
    """
    q = _as_vector(q, 4, "q")

    if q[3] > 0:
        q_inv = np.array([-q[0], -q[1], -q[2], q[3]], dtype=np.float64)
    else:
        q_inv = np.array([q[0], q[1], q[2], -q[3]], dtype=np.float64)

    return q_inv / np.linalg.norm(q_inv)


def quat_to_rotation_matrix(q: ArrayLike) -> NDArray[np.float64]:
    """Convert a JPL quaternion to a rotation matrix.

        C(q) = I - 2 qw [v×] + 2 [v×]^2,    v = [qx, qy, qz]

    The input must already be unit norm for C to be orthonormal; this is
    not checked.

    Args:
        q: Unit quaternion [qx, qy, qz, qw], shape (4,).

    Returns:
        3x3 rotation matrix C(q).

    Raises:
        ValueError: If q is not a 4-element vector.

    Example:
        >>> C = quat_to_rotation_matrix([0.0, 0.0, 0.0, 1.0])
        >>> np.array_equal(C, np.eye(3))
        True

    Reference:
        Trawny & Roumeliotis (2005), Eq. (78)
    """
    q = _as_vector(q, 4, "q")

    q_skew = skew(q[:3])

    return np.eye(3) - 2.0 * q[3] * q_skew + 2.0 * (q_skew @ q_skew)


def rotation_matrix_to_quat(R: ArrayLike) -> NDArray[np.float64]:
    """Convert a rotation matrix to a JPL quaternion.

    Follows the JPL procedure from the Breckenridge memo: the component
    with the largest magnitude is recovered first from the diagonal and
    the trace T, and the remaining three are derived from off-diagonal
    sums/differences divided by 4 times that pivot. The x, y, z pivots
    are selected when the diagonal entry is strictly the largest and
    exceeds T; everything else, ties included, pivots on qw.

    A tie on a 180° rotation (e.g. about [1, 1, 0]) leaves 1 + T = 4 qw^2
    at round-off level, where the qw pivot is meaningless. In that case
    the largest diagonal entry is used as the pivot instead, first index
    winning ties.

    Args:
        R: 3x3 rotation matrix (orthonormal, det = 1).

    Returns:
        Unit quaternion [qx, qy, qz, qw] with qw >= 0. For a 180° rotation
        qw is zero up to round-off, and the sign of the vector part is
        whichever the round-off in qw selects.

    Raises:
        ValueError: If R is not a 3x3 matrix.

    Notes:
        A non-orthonormal R can lead to the square root of a negative
        number and yields NaN (with a numpy RuntimeWarning) rather than
        an exception.

    Reference:
        Breckenridge, "Quaternions Proposed Standard Conventions",
        JPL IOM 343-79-1199 (1979)
    """
    R = np.asarray(R, dtype=np.float64)
    if R.shape != (3, 3):
        raise ValueError(f"Expected 3x3 matrix, got shape {R.shape}")

    T = np.trace(R)

    if R[0, 0] > T and R[0, 0] > R[1, 1] and R[0, 0] > R[2, 2]:
        pivot = 0
    elif R[1, 1] > T and R[1, 1] > R[0, 0] and R[1, 1] > R[2, 2]:
        pivot = 1
    elif R[2, 2] > T and R[2, 2] > R[0, 0] and R[2, 2] > R[1, 1]:
        pivot = 2
    elif 1.0 + T < W_PIVOT_MIN_TRACE:
        pivot = int(np.argmax(np.diag(R)))
    else:
        pivot = 3

    q = np.empty(4, dtype=np.float64)

    if pivot == 0:
        q[0] = np.sqrt((1.0 + 2.0 * R[0, 0] - T) / 4.0)
        d = 4.0 * q[0]
        q[1] = (R[0, 1] + R[1, 0]) / d
        q[2] = (R[0, 2] + R[2, 0]) / d
        q[3] = (R[1, 2] - R[2, 1]) / d
    elif pivot == 1:
        q[1] = np.sqrt((1.0 + 2.0 * R[1, 1] - T) / 4.0)
        d = 4.0 * q[1]
        q[0] = (R[0, 1] + R[1, 0]) / d
        q[2] = (R[1, 2] + R[2, 1]) / d
        q[3] = (R[2, 0] - R[0, 2]) / d
    elif pivot == 2:
        q[2] = np.sqrt((1.0 + 2.0 * R[2, 2] - T) / 4.0)
        d = 4.0 * q[2]
        q[0] = (R[0, 2] + R[2, 0]) / d
        q[1] = (R[1, 2] + R[2, 1]) / d
        q[3] = (R[0, 1] - R[1, 0]) / d
    else:
        q[3] = np.sqrt((1.0 + T) / 4.0)
        d = 4.0 * q[3]
        q[0] = (R[1, 2] - R[2, 1]) / d
        q[1] = (R[2, 0] - R[0, 2]) / d
        q[2] = (R[0, 1] - R[1, 0]) / d

    return _normalize_canonical(q)
