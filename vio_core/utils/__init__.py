"""
Utility functions for validating estimator inputs.
"""

from .checks import (
    DEFAULT_ORTHONORMAL_ATOL,
    DEFAULT_UNIT_NORM_ATOL,
    is_rotation_matrix,
    is_unit_quaternion,
)

__all__ = [
    'DEFAULT_UNIT_NORM_ATOL',
    'DEFAULT_ORTHONORMAL_ATOL',
    'is_unit_quaternion',
    'is_rotation_matrix',
]
