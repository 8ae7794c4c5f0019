"""Unit tests for vio_core.fusion.chi_square.

Checks the constant 95% table against scipy and the lookup bounds.
"""

import unittest

import numpy as np
from scipy import stats

from vio_core.fusion.chi_square import (
    CHI_SQUARE_CONFIDENCE,
    CHI_SQUARE_MAX_DOF,
    CHI_SQUARE_THRESHOLDS,
    chi_square_critical_value,
    chi_square_threshold,
)


class TestChiSquareTable(unittest.TestCase):
    """Test suite for the constant critical value table."""

    def test_size(self) -> None:
        self.assertEqual(CHI_SQUARE_MAX_DOF, 500)
        self.assertEqual(CHI_SQUARE_THRESHOLDS.shape, (CHI_SQUARE_MAX_DOF,))
        self.assertEqual(CHI_SQUARE_THRESHOLDS.dtype, np.float64)

    def test_known_values(self) -> None:
        """Standard 95% values for 1 and 2 DOF."""
        self.assertAlmostEqual(CHI_SQUARE_THRESHOLDS[0], 3.841459, delta=1e-6)
        self.assertAlmostEqual(CHI_SQUARE_THRESHOLDS[1], 5.991465, delta=1e-6)
        self.assertAlmostEqual(CHI_SQUARE_THRESHOLDS[499], 553.126809, delta=1e-6)

    def test_strictly_increasing(self) -> None:
        self.assertTrue(np.all(np.diff(CHI_SQUARE_THRESHOLDS) > 0.0))

    def test_matches_scipy(self) -> None:
        """Every entry equals chi2.ppf(0.95, dof) to the stored precision."""
        dofs = np.arange(1, CHI_SQUARE_MAX_DOF + 1)
        expected = stats.chi2.ppf(CHI_SQUARE_CONFIDENCE, dofs)

        np.testing.assert_allclose(CHI_SQUARE_THRESHOLDS, expected, rtol=0.0, atol=1e-6)

    def test_read_only(self) -> None:
        with self.assertRaises(ValueError):
            CHI_SQUARE_THRESHOLDS[0] = 0.0
        self.assertAlmostEqual(CHI_SQUARE_THRESHOLDS[0], 3.841459, delta=1e-6)


class TestChiSquareThreshold(unittest.TestCase):
    """Test suite for chi_square_threshold lookup."""

    def test_lookup_is_one_based(self) -> None:
        self.assertEqual(chi_square_threshold(1), 3.841459)
        self.assertEqual(chi_square_threshold(2), 5.991465)
        self.assertEqual(chi_square_threshold(3), 7.814728)
        self.assertEqual(chi_square_threshold(500), 553.126809)

    def test_returns_python_float(self) -> None:
        self.assertIsInstance(chi_square_threshold(10), float)

    def test_numpy_integer_dof(self) -> None:
        self.assertEqual(chi_square_threshold(np.int64(4)), chi_square_threshold(4))

    def test_out_of_range_raises(self) -> None:
        for dof in (0, -1, CHI_SQUARE_MAX_DOF + 1):
            with self.subTest(dof=dof):
                with self.assertRaises(ValueError):
                    chi_square_threshold(dof)

    def test_non_integer_raises(self) -> None:
        for dof in (2.0, 2.5, True, "3"):
            with self.subTest(dof=dof):
                with self.assertRaises(TypeError):
                    chi_square_threshold(dof)


class TestChiSquareCriticalValue(unittest.TestCase):
    """Test suite for chi_square_critical_value."""

    def test_default_uses_table(self) -> None:
        for dof in (1, 6, 15, 500):
            with self.subTest(dof=dof):
                self.assertEqual(chi_square_critical_value(dof), chi_square_threshold(dof))

    def test_other_confidence(self) -> None:
        value = chi_square_critical_value(2, confidence=0.99)

        self.assertAlmostEqual(value, stats.chi2.ppf(0.99, 2), places=10)
        self.assertAlmostEqual(value, 9.2103, places=3)

    def test_higher_confidence_is_larger(self) -> None:
        self.assertLess(
            chi_square_critical_value(3, confidence=0.90),
            chi_square_critical_value(3, confidence=0.95),
        )
        self.assertLess(
            chi_square_critical_value(3, confidence=0.95),
            chi_square_critical_value(3, confidence=0.99),
        )

    def test_beyond_table(self) -> None:
        value = chi_square_critical_value(600)

        self.assertAlmostEqual(value, stats.chi2.ppf(0.95, 600), places=10)
        self.assertGreater(value, chi_square_threshold(CHI_SQUARE_MAX_DOF))

    def test_invalid_dof_raises(self) -> None:
        with self.assertRaises(ValueError):
            chi_square_critical_value(0)

    def test_rounded_99_percent_value(self) -> None:
        self.assertEqual(round(chi_square_critical_value(2, confidence=0.99), 4), 9.2103)

    def test_non_numeric_dof_raises(self) -> None:
        for dof in (True, False, np.bool_(True), "3", None):
            with self.subTest(dof=dof):
                with self.assertRaises(TypeError):
                    chi_square_critical_value(dof)

    def test_non_finite_dof_raises(self) -> None:
        for dof in (np.nan, np.inf, float("nan")):
            with self.subTest(dof=dof):
                with self.assertRaises(ValueError):
                    chi_square_critical_value(dof, confidence=0.99)

    def test_numpy_dof_accepted(self) -> None:
        self.assertEqual(chi_square_critical_value(np.int64(3)), chi_square_threshold(3))
        self.assertEqual(chi_square_critical_value(np.float64(3.0)), chi_square_threshold(3))

    def test_invalid_confidence_raises(self) -> None:
        for confidence in (0.0, 1.0, 1.5, -0.1):
            with self.subTest(confidence=confidence):
                with self.assertRaises(ValueError):
                    chi_square_critical_value(2, confidence=confidence)


if __name__ == "__main__":
    unittest.main()
