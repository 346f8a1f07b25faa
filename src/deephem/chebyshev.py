"""
Chebyshev polynomial evaluation.

Both functions carry the three-term recurrence in running variables instead
of materialising every T_k, and accept any indexable sequence of
coefficients (a list or a numpy slice of a record buffer).
"""

from typing import Sequence


def chebyshev(coeffs: Sequence[float], x: float) -> float:
    """Evaluate sum(coeffs[k] * T_k(x)).

    Args:
        coeffs: Chebyshev coefficients, lowest order first
        x: Point to evaluate at, normally in [-1, 1]

    Returns:
        The polynomial value
    """
    n = len(coeffs)
    if n == 0:
        return 0.0
    y = float(coeffs[0])
    if n == 1:
        return y
    y += float(coeffs[1]) * x

    t2, t1 = 1.0, x
    two_x = 2.0 * x
    for k in range(2, n):
        t0 = two_x * t1 - t2
        y += float(coeffs[k]) * t0
        t2, t1 = t1, t0
    return y


def chebyshev_derivative(coeffs: Sequence[float], x: float) -> float:
    """Evaluate d/dx of sum(coeffs[k] * T_k(x)).

    Uses T_k'(x) = k * U_{k-1}(x), with the second-kind polynomials U
    generated by U_0 = 1, U_1 = 2x, U_k = 2x * U_{k-1} - U_{k-2}.

    Args:
        coeffs: Chebyshev coefficients, lowest order first
        x: Point to evaluate at, normally in [-1, 1]

    Returns:
        The derivative with respect to x
    """
    y = 0.0
    u2, u1 = 0.0, 1.0
    two_x = 2.0 * x
    for k in range(1, len(coeffs)):
        y += float(coeffs[k]) * k * u1
        u2, u1 = u1, two_x * u1 - u2
    return y
