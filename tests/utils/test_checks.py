"""Unit tests for vio_core.utils.checks."""

import unittest
import warnings

import numpy as np

from vio_core.coords.rotations import quat_to_rotation_matrix
from vio_core.utils.checks import is_rotation_matrix, is_unit_quaternion


class TestIsUnitQuaternion(unittest.TestCase):

    def test_unit_quaternion(self) -> None:
        self.assertTrue(is_unit_quaternion(np.array([0.0, 0.0, 0.0, 1.0])))
        self.assertTrue(is_unit_quaternion([0.5, 0.5, 0.5, 0.5]))

    def test_non_unit_quaternion(self) -> None:
        self.assertFalse(is_unit_quaternion([0.0, 0.0, 0.0, 2.0]))
        self.assertFalse(is_unit_quaternion(np.zeros(4)))

    def test_tolerance(self) -> None:
        q = np.array([0.0, 0.0, 0.0, 1.0 + 1e-6])

        self.assertFalse(is_unit_quaternion(q))
        self.assertTrue(is_unit_quaternion(q, atol=1e-5))

    def test_wrong_shape_and_nan(self) -> None:
        self.assertFalse(is_unit_quaternion([0.0, 0.0, 1.0]))
        self.assertFalse(is_unit_quaternion([np.nan, 0.0, 0.0, 1.0]))

    def test_warns_only_when_asked(self) -> None:
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            self.assertFalse(is_unit_quaternion([0.0, 0.0, 0.0, 2.0]))

        with self.assertWarns(RuntimeWarning):
            is_unit_quaternion([0.0, 0.0, 0.0, 2.0], warn=True)


class TestIsRotationMatrix(unittest.TestCase):

    def test_identity(self) -> None:
        self.assertTrue(is_rotation_matrix(np.eye(3)))

    def test_from_quaternion(self) -> None:
        q = np.array([0.1, -0.4, 0.2, 0.8])
        q = q / np.linalg.norm(q)

        self.assertTrue(is_rotation_matrix(quat_to_rotation_matrix(q)))

    def test_non_unit_quaternion_gives_invalid_matrix(self) -> None:
        R = quat_to_rotation_matrix(np.array([0.2, 0.0, 0.0, 2.0]))

        self.assertFalse(is_rotation_matrix(R))

    def test_reflection(self) -> None:
        self.assertFalse(is_rotation_matrix(np.diag([1.0, 1.0, -1.0])))

    def test_scaled(self) -> None:
        self.assertFalse(is_rotation_matrix(2.0 * np.eye(3)))

    def test_wrong_shape(self) -> None:
        self.assertFalse(is_rotation_matrix(np.eye(4)))

    def test_warns_when_asked(self) -> None:
        with self.assertWarns(RuntimeWarning):
            is_rotation_matrix(np.diag([1.0, 1.0, -1.0]), warn=True)


if __name__ == "__main__":
    unittest.main()
