"""
Small numeric helpers shared by puzzle solutions.

- Greatest common divisor / least common multiple (cycle alignment puzzles).
- Solving a square linear system given as an augmented coefficient matrix,
  e.g. for

      x + y = 10
      x - y = 4

  pass `[[1, 1, 10], [1, -1, 4]]` and get `[7.0, 3.0]` back.
"""

from __future__ import annotations

from functools import reduce
from typing import List, Sequence

import math

import numpy as np

from .errors import SingularSystemError


def greatest_common_divisor(a: int, b: int) -> int:
    """
    Greatest common divisor of two integers (always non-negative).
    """
    return math.gcd(a, b)


def least_common_multiple(*values: int) -> int:
    """
    Least common multiple of one or more integers.

    Puzzles usually need the LCM of a whole list of cycle lengths, so this
    accepts any number of arguments:

        least_common_multiple(4, 6)        -> 12
        least_common_multiple(2, 3, 4, 5)  -> 60
    """
    if not values:
        raise ValueError("least_common_multiple needs at least one value.")

    def _lcm(a: int, b: int) -> int:
        if a == 0 or b == 0:
            return 0
        return abs(a * b) // math.gcd(a, b)

    return reduce(_lcm, values)


def linear_system_solution(coefficients: Sequence[Sequence[float]]) -> List[float]:
    """
    Solve a square linear system by Cramer's rule.

    Parameters
    ----------
    coefficients:
        Augmented matrix with `n` rows of `n + 1` numbers each; the last
        column holds the right-hand side.

    Returns
    -------
    List[float]
        The value of each of the `n` variables.

    Raises
    ------
    SingularSystemError
        If the matrix is not n x (n + 1) or its determinant is zero.
    """
    augmented = np.asarray(coefficients, dtype=float)
    if augmented.ndim != 2 or augmented.shape[0] == 0 or augmented.shape[1] != augmented.shape[0] + 1:
        raise SingularSystemError(
            f"Expected an n x (n + 1) augmented matrix, got shape {augmented.shape}."
        )

    size = augmented.shape[0]
    matrix = augmented[:, :size]
    rhs = augmented[:, size]

    denominator = float(np.linalg.det(matrix))
    if denominator == 0.0:
        raise SingularSystemError("Linear system has no unique solution (determinant is zero).")

    solution: List[float] = []
    for i in range(size):
        replaced = matrix.copy()
        replaced[:, i] = rhs
        solution.append(float(np.linalg.det(replaced)) / denominator)
    return solution


__all__ = [
    "greatest_common_divisor",
    "least_common_multiple",
    "linear_system_solution",
]
