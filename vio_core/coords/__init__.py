"""Rotation representations for visual-inertial estimation.

Quaternions follow the JPL convention, [qx, qy, qz, qw] (scalar last),
and every quaternion returned by this package is unit norm with qw >= 0.
"""

from vio_core.coords.rotations import (
    quat_identity,
    quat_inverse,
    quat_left_matrix,
    quat_multiply,
    quat_to_rotation_matrix,
    rotation_matrix_to_quat,
    skew,
)

__all__ = [
    "skew",
    "quat_identity",
    "quat_left_matrix",
    "quat_multiply",
    "quat_inverse",
    "quat_to_rotation_matrix",
    "rotation_matrix_to_quat",
]
