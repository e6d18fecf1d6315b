"""
ProductClaim construction tests.
"""
import pytest

from product_sumcheck.common.field import PrimeField
from product_sumcheck.common.polynomial import MultilinearTable
from product_sumcheck.protocol import ClaimError, ProductClaim, get_num_vars


class TestGetNumVars:
    def test_common_count(self, sparse):
        assert get_num_vars([sparse(3, (1, [(0, 1)])), sparse(3, (1, []))]) == 3

    def test_mismatch(self, sparse):
        assert get_num_vars([sparse(3, (1, [(0, 1)])), sparse(2, (1, []))]) is None

    def test_empty(self):
        assert get_num_vars([]) is None


class TestProductClaim:
    def test_empty_claim_fails(self, field):
        with pytest.raises(ClaimError):
            ProductClaim([], field)

    def test_mismatched_variable_counts_fail(self, sparse, field):
        with pytest.raises(ClaimError, match="disagree"):
            ProductClaim([sparse(3, (1, [(0, 1)])), sparse(2, (1, [(0, 1)]))], field)

    def test_zero_variables_fail(self, sparse, field):
        with pytest.raises(ClaimError):
            ProductClaim([sparse(0, (5, []))], field)

    def test_field_must_exceed_factor_count(self):
        tiny = PrimeField(3)
        factors = [MultilinearTable(name, [1, 2], tiny) for name in "abc"]
        with pytest.raises(ClaimError, match="must exceed"):
            ProductClaim(factors, tiny)

    def test_claim_error_is_a_value_error(self, field):
        with pytest.raises(ValueError):
            ProductClaim([], field)

    def test_structural_multilinear_check(self, sparse, field):
        quadratic = sparse(3, (7, [(0, 2), (2, 1)]))
        ProductClaim([quadratic], field)
        with pytest.raises(ClaimError, match="not multilinear"):
            ProductClaim([quadratic], field, check_multilinear=True)

    def test_structural_check_skips_opaque_factors(self, field):
        table = MultilinearTable("f", [1, 2, 3, 4], field)
        claim = ProductClaim([table], field, check_multilinear=True)
        assert claim.num_vars == 2

    def test_properties(self, sparse, field):
        f1 = sparse(2, (1, [(0, 1)]), (7, []))
        f2 = sparse(2, (2, [(0, 1)]), (1, [(1, 1)]))
        claim = ProductClaim([f1, f2], field)
        assert claim.num_vars == 2
        assert claim.num_factors == 2
        assert claim.degree == 2
        assert len(claim) == 2
        assert claim.factors == [f1, f2]

    def test_evaluate_is_product(self, sparse, field):
        f1 = sparse(2, (1, [(0, 1)]), (7, []))
        f2 = sparse(2, (2, [(0, 1)]), (1, [(1, 1)]))
        claim = ProductClaim([f1, f2], field)
        assert claim.evaluate([3, 5]) == 10 * 11

    def test_factor_list_is_not_aliased(self, sparse, field):
        factors = [sparse(2, (1, [(0, 1)]))]
        claim = ProductClaim(factors, field)
        factors.append(sparse(2, (1, [(1, 1)])))
        claim.factors.append(sparse(2, (1, [])))
        assert claim.num_factors == 1
