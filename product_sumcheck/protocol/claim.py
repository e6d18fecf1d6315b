"""
Product claims: the statement "the hypercube sum of f_1 * ... * f_m is C".
"""

from __future__ import annotations
from typing import List, Optional, Sequence
import logging

from ..common.field import PrimeField
from ..common.polynomial import MultilinearFactor
from .errors import ClaimError

logger = logging.getLogger(__name__)


def get_num_vars(factors: Sequence[MultilinearFactor]) -> Optional[int]:
    """Common variable count of the factors, or None if absent or mismatched."""
    if not factors:
        return None
    head = factors[0].num_vars
    if all(f.num_vars == head for f in factors[1:]):
        return head
    return None


class ProductClaim:
    """
    An ordered list of m >= 1 factors sharing the same variable count n.

    Construction is the only validation point: if it succeeds, n is
    well-defined and every round polynomial (degree <= m) can be
    reconstructed from m+1 points because p > m.

    Args:
        factors: The multilinear factors f_1, ..., f_m
        field: The prime field all factors evaluate in
        check_multilinear: Also reject factors that report a variable of
                           degree > 1 (only factors exposing is_multilinear())

    Raises:
        ClaimError: On an empty list, mismatched or zero variable counts,
                    a field too small for m, or (optionally) a factor that
                    is not multilinear
    """

    def __init__(self, factors: Sequence[MultilinearFactor], field: PrimeField,
                 check_multilinear: bool = False):
        factors = list(factors)
        num_vars = get_num_vars(factors)

        if num_vars is None:
            if not factors:
                raise ClaimError("A product claim needs at least one factor")
            counts = [f.num_vars for f in factors]
            raise ClaimError(f"Factors disagree on the number of variables: {counts}")
        if num_vars == 0:
            raise ClaimError("Factors must have at least one variable")
        if field.prime <= len(factors):
            raise ClaimError(
                f"Field order {field.prime} must exceed the number of factors "
                f"({len(factors)}) for round polynomials to be interpolated")

        if check_multilinear:
            for k, factor in enumerate(factors):
                is_multilinear = getattr(factor, "is_multilinear", None)
                if is_multilinear is not None and not is_multilinear():
                    raise ClaimError(f"Factor {k} is not multilinear: {factor!r}")

        self._factors: List[MultilinearFactor] = factors
        self.field = field
        self.num_vars = num_vars

        logger.debug("Built product claim: %d factors over %d variables",
                     len(factors), num_vars)

    @property
    def factors(self) -> List[MultilinearFactor]:
        return list(self._factors)

    @property
    def num_factors(self) -> int:
        return len(self._factors)

    @property
    def degree(self) -> int:
        """Upper bound on every round polynomial's degree."""
        return len(self._factors)

    def evaluate(self, point: Sequence[int]) -> int:
        """Product of all factors at ``point``."""
        result = 1
        for factor in self._factors:
            result = self.field.mul(result, self.field.reduce(factor.evaluate(point)))
        return result

    def __len__(self) -> int:
        return len(self._factors)

    def __repr__(self) -> str:
        return f"ProductClaim(num_factors={self.num_factors}, num_vars={self.num_vars})"
