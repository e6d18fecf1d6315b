import random

import pytest

from product_sumcheck.common.field import PrimeField
from product_sumcheck.common.polynomial import SparsePolynomial, SparseTerm
from product_sumcheck.protocol import ProductClaim, ProtocolConfig, SumCheckProtocol


class FixedChallenges:
    """Stand-in for random.Random that hands out a fixed challenge sequence."""

    def __init__(self, values):
        self._values = iter(values)

    def randrange(self, *args):
        return next(self._values)


@pytest.fixture
def field():
    return PrimeField(PrimeField.CURVE25519_PRIME)


@pytest.fixture
def small_field():
    return PrimeField(PrimeField.SMALL_TEST_PRIME)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def sparse(field):
    """
    Build a SparsePolynomial from (coefficient, [(var, power), ...]) pairs.

        sparse(2, (1, [(0, 1)]), (7, []))  ->  x_0 + 7 over 2 variables
    """
    def make(num_vars, *terms):
        return SparsePolynomial(
            num_vars,
            [(coeff, SparseTerm.of(*powers)) for coeff, powers in terms],
            field,
        )
    return make


@pytest.fixture
def claim(field):
    def make(*factors):
        return ProductClaim(list(factors), field)
    return make


@pytest.fixture
def protocol():
    def make(seed=0, **kwargs):
        return SumCheckProtocol(ProtocolConfig(name="test", seed=seed, **kwargs))
    return make


@pytest.fixture
def fixed_challenges():
    return FixedChallenges
