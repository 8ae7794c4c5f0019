"""Core numerics for filtering-based visual-inertial state estimation.

This package contains the stateless math an estimator builds on:
- coords: JPL quaternion algebra and rotation conversions
- fusion: Chi-square critical values and Mahalanobis gating
- utils: Opt-in precondition checks
"""

__version__ = "0.1.0"
