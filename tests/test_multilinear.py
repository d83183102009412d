"""Tests for multilinear extensions."""

import itertools

import numpy as np
import pytest

from primitives.field import FF
from primitives.multilinear import MultilinearExtension


def _boolean_points(n: int):
    return [[FF(b) for b in bits] for bits in itertools.product([0, 1], repeat=n)]


class TestConstruction:

    def test_new(self) -> None:
        poly = MultilinearExtension([1, 2, 3, 4], 2)
        assert poly.to_list() == [1, 2, 3, 4]
        assert poly.num_vars == 2

    def test_num_vars_inferred(self) -> None:
        assert MultilinearExtension([1, 2, 3, 4, 5, 6, 7, 8]).num_vars == 3

    def test_rejects_non_power_of_two(self) -> None:
        with pytest.raises(ValueError):
            MultilinearExtension([1, 2, 3])

    def test_rejects_wrong_num_vars(self) -> None:
        with pytest.raises(ValueError):
            MultilinearExtension([1, 2, 3, 4], 3)


class TestEvaluate:

    def test_evaluate_4y_7xy(self) -> None:
        """[0, 4, 0, 11] over (x, y) is 4y + 7xy; at (2, 3) that is 54."""
        poly = MultilinearExtension([0, 4, 0, 11])
        assert poly.evaluate([FF(2), FF(3)]) == FF(54)

    def test_agrees_on_hypercube(self) -> None:
        """The MLE interpolates its table: leading variable is the top bit."""
        values = [5, 8, 13, 21, 34, 55, 89, 144]
        poly = MultilinearExtension(values)
        for i, point in enumerate(_boolean_points(3)):
            assert poly.evaluate(point) == FF(values[i])

    def test_matches_product_formula(self) -> None:
        """evaluate == sum_i v_i * prod_j (p_j or 1 - p_j)."""
        poly = MultilinearExtension(FF.Random(8))
        point = [FF.Random() for _ in range(3)]
        expected = FF(0)
        for i in range(8):
            term = poly.values[i]
            for j in range(3):
                bit = (i >> (2 - j)) & 1
                term = term * (point[j] if bit else FF(1) - point[j])
            expected = expected + term
        assert poly.evaluate(point) == expected

    def test_wrong_point_length(self) -> None:
        poly = MultilinearExtension([1, 2, 3, 4])
        with pytest.raises(ValueError):
            poly.evaluate([FF(1)])


class TestPartialEvaluate:

    def test_partial_evaluate_4y_7xy_at_x_2(self) -> None:
        """Binding x = 2 in 4y + 7xy leaves 18y."""
        poly = MultilinearExtension([0, 4, 0, 11])
        assert poly.partial_evaluate(0, FF(2)).to_list() == [0, 18]

    @pytest.mark.parametrize("j", [0, 1, 2, 3])
    def test_consistent_with_evaluate(self, j: int) -> None:
        """P.partial_evaluate(j, v).evaluate(rest) == P.evaluate(point with x_j = v)."""
        poly = MultilinearExtension(FF.Random(16))
        point = [FF.Random() for _ in range(4)]
        rest = point[:j] + point[j + 1:]
        reduced = poly.partial_evaluate(j, point[j])
        assert reduced.num_vars == 3
        assert reduced.evaluate(rest) == poly.evaluate(point)

    def test_fix_variables_binds_leading(self) -> None:
        poly = MultilinearExtension(FF.Random(8))
        point = [FF.Random() for _ in range(3)]
        fixed = poly.fix_variables(point[:2])
        assert fixed.num_vars == 1
        assert fixed.evaluate(point[2:]) == poly.evaluate(point)

    def test_solve_skips_none(self) -> None:
        poly = MultilinearExtension(FF.Random(8))
        point = [FF.Random() for _ in range(3)]
        solved = poly.solve([point[0], None, point[2]])
        assert solved.num_vars == 1
        assert solved.evaluate([point[1]]) == poly.evaluate(point)

    def test_out_of_range_variable(self) -> None:
        with pytest.raises(ValueError):
            MultilinearExtension([1, 2]).partial_evaluate(1, FF(0))


class TestHypercubeSum:

    def test_sum_over_boolean_hypercube(self) -> None:
        poly = MultilinearExtension([1, 2, 3, 4])
        assert poly.sum_over_hypercube() == FF(10)

    def test_matches_brute_force(self) -> None:
        poly = MultilinearExtension(FF.Random(8))
        expected = FF(0)
        for point in _boolean_points(3):
            expected = expected + poly.evaluate(point)
        assert poly.sum_over_hypercube() == expected

    def test_evaluate_at_round(self) -> None:
        """Round 0 at x sums P(x, y) over y; at x = 0 and 1 it splits the total."""
        poly = MultilinearExtension([1, 2, 3, 4])
        assert poly.evaluate_at_round(0, [], FF(0)) == FF(3)
        assert poly.evaluate_at_round(0, [], FF(1)) == FF(7)
        assert poly.evaluate_at_round(1, [FF(1)], FF(1)) == FF(4)


class TestBlowUp:

    def test_blow_up_right_adds_variables(self) -> None:
        poly = MultilinearExtension([1, 2, 3, 4])
        result = poly.blow_up_right(1)
        assert result.num_vars == 3
        assert result.to_list() == [1, 1, 2, 2, 3, 3, 4, 4]

    def test_blow_up_left_adds_variables(self) -> None:
        poly = MultilinearExtension([1, 2, 3, 4])
        result = poly.blow_up_left(1)
        assert result.num_vars == 3
        assert result.to_list() == [1, 2, 3, 4, 1, 2, 3, 4]

    def test_blow_up_right_ignores_new_variable(self) -> None:
        w = MultilinearExtension(FF.Random(4))
        p = [FF.Random(), FF.Random()]
        blown = w.blow_up_right(1)
        for q in (FF(0), FF(1), FF.Random()):
            assert blown.evaluate(p + [q]) == w.evaluate(p)

    def test_blow_up_left_ignores_new_variable(self) -> None:
        w = MultilinearExtension(FF.Random(4))
        p = [FF.Random(), FF.Random()]
        blown = w.blow_up_left(1)
        for q in (FF(0), FF(1), FF.Random()):
            assert blown.evaluate([q] + p) == w.evaluate(p)

    def test_joint_space(self) -> None:
        """blow_up_right(k) + blow_up_left(k) evaluates to w(b) + w(c)."""
        w = MultilinearExtension(FF.Random(4))
        b = [FF.Random(), FF.Random()]
        c = [FF.Random(), FF.Random()]
        w_b = w.blow_up_right(2)
        w_c = w.blow_up_left(2)
        assert (w_b + w_c).evaluate(b + c) == w.evaluate(b) + w.evaluate(c)
        assert (w_b * w_c).evaluate(b + c) == w.evaluate(b) * w.evaluate(c)


class TestArithmetic:

    def test_scalar_mul(self) -> None:
        poly = MultilinearExtension([1, 2, 3, 4])
        assert poly.scalar_mul(FF(2)).to_list() == [2, 4, 6, 8]

    def test_pointwise_add_mul(self) -> None:
        a = MultilinearExtension([1, 2, 3, 4])
        b = MultilinearExtension([5, 6, 7, 8])
        assert a.add(b).to_list() == [6, 8, 10, 12]
        assert a.mul(b).to_list() == [5, 12, 21, 32]

    def test_mismatched_num_vars(self) -> None:
        a = MultilinearExtension([1, 2, 3, 4])
        b = MultilinearExtension([1, 2])
        with pytest.raises(ValueError):
            a.add(b)
        with pytest.raises(ValueError):
            a.mul(b)

    def test_equality(self) -> None:
        assert MultilinearExtension([1, 2]) == MultilinearExtension([1, 2])
        assert MultilinearExtension([1, 2]) != MultilinearExtension([2, 1])
        assert np.array_equal(MultilinearExtension([1, 2]).values, FF([1, 2]))
