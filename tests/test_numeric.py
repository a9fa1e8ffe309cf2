"""
Tests for puzzlegeom.numeric
"""

from __future__ import annotations

import numpy as np
import pytest

from puzzlegeom.errors import SingularSystemError
from puzzlegeom.numeric import (
    greatest_common_divisor,
    least_common_multiple,
    linear_system_solution,
)


def test_gcd():
    assert greatest_common_divisor(12, 18) == 6
    assert greatest_common_divisor(7, 13) == 1
    assert greatest_common_divisor(0, 5) == 5
    assert greatest_common_divisor(-4, 6) == 2


def test_lcm_of_many_values():
    assert least_common_multiple(4, 6) == 12
    assert least_common_multiple(2, 3, 4, 5) == 60
    assert least_common_multiple(7) == 7
    assert least_common_multiple(3, 0) == 0


def test_lcm_needs_a_value():
    with pytest.raises(ValueError):
        least_common_multiple()


def test_solve_two_by_two():
    # x + y = 10, x - y = 4
    assert linear_system_solution([[1, 1, 10], [1, -1, 4]]) == pytest.approx([7.0, 3.0])


def test_solve_matches_numpy():
    matrix = np.array([[2.0, 1.0, -1.0], [-3.0, -1.0, 2.0], [-2.0, 1.0, 2.0]])
    rhs = np.array([8.0, -11.0, -3.0])
    augmented = np.hstack([matrix, rhs[:, None]])

    solution = linear_system_solution(augmented.tolist())
    assert solution == pytest.approx(list(np.linalg.solve(matrix, rhs)))
    assert solution == pytest.approx([2.0, 3.0, -1.0])


def test_singular_system_raises():
    with pytest.raises(SingularSystemError):
        linear_system_solution([[1, 2, 3], [2, 4, 6]])


@pytest.mark.parametrize("bad", [[], [[1, 2, 3]], [[1, 2], [3, 4]]])
def test_bad_shape_raises(bad):
    with pytest.raises(SingularSystemError):
        linear_system_solution(bad)
