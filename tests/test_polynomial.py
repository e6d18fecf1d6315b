"""
Factor representation tests: SparseTerm, SparsePolynomial, MultilinearTable, parser.
"""
import pytest

from product_sumcheck.common.polynomial import (
    MultilinearTable,
    SparsePolynomial,
    SparseTerm,
    parse_polynomial,
)


class TestSparseTerm:
    def test_merges_repeated_variables(self):
        assert SparseTerm.of((2, 1), (0, 1), (0, 1)) == SparseTerm(((0, 2), (2, 1)))

    def test_drops_zero_powers(self):
        assert SparseTerm.of((1, 0)) == SparseTerm()
        assert SparseTerm().is_constant()

    def test_degrees(self):
        term = SparseTerm.of((0, 3), (2, 1))
        assert term.degree == 4
        assert term.max_individual_degree == 3
        assert term.variables == [0, 2]

    def test_invalid_pair(self):
        with pytest.raises(ValueError):
            SparseTerm.of((-1, 1))


class TestSparsePolynomial:
    def test_evaluate(self, sparse):
        poly = sparse(3, (2, [(0, 3)]), (7, [(0, 1), (2, 1)]), (1, [(1, 1), (2, 1)]), (5, []))
        assert poly.evaluate([0, 1, 1]) == 6
        assert poly.evaluate([1, 1, 1]) == 15
        assert poly.evaluate([2, 0, 3]) == 2 * 8 + 7 * 6 + 5

    def test_like_terms_are_combined(self, sparse, field):
        poly1 = sparse(3, (2, [(0, 3)]), (7, [(0, 1), (2, 1)]), (1, [(1, 1), (2, 1)]), (5, []))
        poly2 = sparse(3, (2, [(0, 3)]), (1, [(0, 1), (2, 1)]), (6, [(0, 1), (2, 1)]),
                       (1, [(1, 1), (2, 1)]), (5, []))
        assert poly1 == poly2
        point = [123456789, 987654321, 55555]
        assert poly1.evaluate(point) == poly2.evaluate(point)

    def test_zero_coefficients_dropped(self, sparse, field):
        poly = sparse(1, (3, [(0, 1)]), (field.prime - 3, [(0, 1)]))
        assert poly.terms == []
        assert repr(poly) == "0"
        assert poly.evaluate([5]) == 0

    def test_variable_out_of_range(self, sparse):
        with pytest.raises(ValueError):
            sparse(2, (1, [(2, 1)]))

    def test_point_dimension_checked(self, sparse):
        with pytest.raises(ValueError):
            sparse(2, (1, [(0, 1)])).evaluate([1])

    def test_multilinearity(self, sparse):
        assert sparse(3, (1, [(0, 1), (1, 1), (2, 1)])).is_multilinear()
        assert not sparse(3, (7, [(0, 2), (2, 1)])).is_multilinear()
        assert sparse(3, (7, [(0, 2), (2, 1)])).max_individual_degree() == 2
        assert sparse(3, (7, [(0, 2), (2, 1)])).degree() == 3

    def test_repr(self, sparse):
        poly = sparse(3, (5, []), (2, [(0, 1)]), (1, [(1, 1), (2, 1)]))
        assert repr(poly) == "5 + 2*x_0 + x_1*x_2"


class TestParsePolynomial:
    def test_parse(self, field, sparse):
        parsed = parse_polynomial("2*x0 + 7*x0*x2 + x1*x2 + 5", 3, field)
        expected = sparse(3, (2, [(0, 1)]), (7, [(0, 1), (2, 1)]), (1, [(1, 1), (2, 1)]), (5, []))
        assert parsed == expected

    def test_subtraction_and_powers(self, field):
        parsed = parse_polynomial("-x_0^2 + 3*x1 - 4", 2, field)
        assert parsed.evaluate([2, 5]) == field.reduce(-4 + 15 - 4)
        assert not parsed.is_multilinear()

    def test_rejects_garbage(self, field):
        with pytest.raises(ValueError):
            parse_polynomial("2*y0", 1, field)
        with pytest.raises(ValueError):
            parse_polynomial("x0 +", 1, field)
        with pytest.raises(ValueError):
            parse_polynomial("", 1, field)

    def test_rejects_out_of_range_variable(self, field):
        with pytest.raises(ValueError):
            parse_polynomial("x3", 2, field)


class TestMultilinearTable:
    def test_num_vars(self, small_field):
        mle = MultilinearTable("f", [3, 7, 2, 5], small_field)
        assert mle.num_vars == 2
        assert mle.size == 4

    def test_size_must_be_power_of_two(self, small_field):
        with pytest.raises(ValueError):
            MultilinearTable("f", [1, 2, 3], small_field)

    def test_boolean_points_return_entries(self, small_field):
        mle = MultilinearTable("f", [3, 7, 2, 5, 1, 8, 4, 6], small_field)
        assert mle.evaluate([0, 0, 0]) == 3
        assert mle.evaluate([0, 1, 1]) == 5
        assert mle.evaluate([1, 0, 0]) == 1
        assert mle.evaluate([1, 1, 1]) == 6

    def test_matches_sparse_form(self, field, sparse):
        # f = x0 + 7 over 2 variables has table [7, 7, 8, 8]
        mle = MultilinearTable("f", [7, 7, 8, 8], field)
        poly = sparse(2, (1, [(0, 1)]), (7, []))
        for point in ([5, 9], [field.prime - 1, 3], [123, 456]):
            assert mle.evaluate(point) == poly.evaluate(point)
