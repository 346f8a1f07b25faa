"""Unit tests for Chebyshev evaluation."""

import unittest

import numpy as np
from numpy.polynomial import chebyshev as npcheb
from numpy.polynomial import polynomial as nppoly

from deephem.chebyshev import chebyshev, chebyshev_derivative


class TestChebyshev(unittest.TestCase):
    """Test Chebyshev polynomial values."""

    def test_empty_coefficients(self):
        self.assertEqual(chebyshev([], 0.3), 0.0)

    def test_single_coefficient(self):
        self.assertEqual(chebyshev([2.5], 0.5), 2.5)

    def test_known_polynomials(self):
        """Test evaluation of individual basis polynomials."""
        # T_1(x) = x
        self.assertEqual(chebyshev([0.0, 1.0], 0.5), 0.5)

        # T_2(x) = 2x^2 - 1
        self.assertEqual(chebyshev([0.0, 0.0, 1.0], 0.5), -0.5)

        # T_3(x) = 4x^3 - 3x
        self.assertAlmostEqual(chebyshev([0.0, 0.0, 0.0, 1.0], 0.5), -1.0, places=14)

    def test_matches_power_basis_polynomial(self):
        """Chebyshev coefficients of a power series reproduce its values."""
        power = [0.5, -1.25, 3.0, 0.75, -2.0, 1.5]
        coeffs = npcheb.poly2cheb(power)
        for x in np.linspace(-1.0, 1.0, 41):
            self.assertAlmostEqual(
                chebyshev(coeffs, float(x)), nppoly.polyval(x, power), places=12
            )

    def test_matches_numpy_reference(self):
        rng = np.random.default_rng(1234)
        for n in (2, 3, 8, 13, 18):
            coeffs = rng.uniform(-10.0, 10.0, n)
            for x in rng.uniform(-1.0, 1.0, 10):
                self.assertAlmostEqual(
                    chebyshev(coeffs, float(x)), npcheb.chebval(x, coeffs), places=10
                )

    def test_endpoints(self):
        """T_k(1) = 1 and T_k(-1) = (-1)^k."""
        coeffs = [1.0, 2.0, 3.0, 4.0, 5.0]
        self.assertAlmostEqual(chebyshev(coeffs, 1.0), 15.0, places=12)
        self.assertAlmostEqual(chebyshev(coeffs, -1.0), 3.0, places=12)

    def test_accepts_numpy_slices(self):
        buffer = np.array([9.0, 9.0, 1.0, 2.0, 3.0, 9.0])
        self.assertAlmostEqual(
            chebyshev(buffer[2:5], 0.25), npcheb.chebval(0.25, [1.0, 2.0, 3.0]), places=14
        )


class TestChebyshevDerivative(unittest.TestCase):
    """Test Chebyshev polynomial derivatives."""

    def test_short_coefficient_lists(self):
        self.assertEqual(chebyshev_derivative([], 0.5), 0.0)
        self.assertEqual(chebyshev_derivative([4.0], 0.5), 0.0)
        self.assertEqual(chebyshev_derivative([4.0, 3.0], 0.5), 3.0)

    def test_known_derivatives(self):
        # d/dx T_2 = 4x
        self.assertAlmostEqual(chebyshev_derivative([0.0, 0.0, 1.0], 0.5), 2.0, places=14)
        # d/dx T_3 = 12x^2 - 3
        self.assertAlmostEqual(
            chebyshev_derivative([0.0, 0.0, 0.0, 1.0], 0.5), 0.0, places=14
        )

    def test_matches_numpy_reference(self):
        rng = np.random.default_rng(99)
        for n in (3, 7, 13, 18):
            coeffs = rng.uniform(-10.0, 10.0, n)
            derived = npcheb.chebder(coeffs)
            for x in rng.uniform(-1.0, 1.0, 10):
                self.assertAlmostEqual(
                    chebyshev_derivative(coeffs, float(x)),
                    npcheb.chebval(x, derived),
                    places=9,
                )

    def test_matches_finite_difference(self):
        """Central differences converge on the derivative as the step shrinks."""
        coeffs = [0.3, -1.2, 0.8, 0.5, -0.25, 0.1, 0.05]
        x = 0.3
        exact = chebyshev_derivative(coeffs, x)

        errors = []
        for h in (1e-2, 1e-3, 1e-4):
            estimate = (chebyshev(coeffs, x + h) - chebyshev(coeffs, x - h)) / (2 * h)
            errors.append(abs(estimate - exact))

        self.assertLess(errors[1], errors[0])
        self.assertLess(errors[2], errors[1])
        self.assertLess(errors[2], 1e-6)


if __name__ == "__main__":
    unittest.main()
