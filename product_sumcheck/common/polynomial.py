"""
Polynomial Representations for the Sum-Check Protocol.

The protocol treats each factor f_k of a product claim as an oracle: it
only needs the factor's variable count and point evaluation. This module
provides two concrete oracles and a small text parser.

Key Concepts:
    - Multilinear Polynomial: degree at most 1 in each variable separately
    - Sparse form: a sum of coefficient * monomial terms, e.g.
          f(x0, x1, x2) = 2*x0 + 7*x0*x2 + x1*x2 + 5
    - Table form (MLE): the values of f at every point of {0,1}^n; the
      unique multilinear extension of those values is f itself

Indexing convention for table form:
    index i <-> point (b_0, ..., b_{n-1}) with b_0 the MOST significant bit,
    so index 0 = (0, ..., 0), index 1 = (0, ..., 0, 1), index 2^(n-1) =
    (1, 0, ..., 0).

Nothing here enforces multilinearity. A SparsePolynomial may carry
x0^2 terms; the protocol then rejects at its final oracle check.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Protocol, Sequence, Tuple, Union, TYPE_CHECKING
import math
import re

if TYPE_CHECKING:
    from .field import FieldElement, PrimeField


class MultilinearFactor(Protocol):
    """Anything the protocol can use as a factor f_k."""

    @property
    def num_vars(self) -> int:
        ...

    def evaluate(self, point: Sequence[int]) -> Union[int, FieldElement]:
        ...


@dataclass(frozen=True)
class SparseTerm:
    """
    A monomial x_{i1}^{e1} * x_{i2}^{e2} * ...

    Stored as a sorted tuple of (variable, power) pairs. Repeated variables
    are merged and zero powers dropped, so two equal monomials always
    compare equal. The empty tuple is the constant monomial 1.

    Example:
        >>> SparseTerm.of((2, 1), (0, 1), (0, 1))
        SparseTerm(x_0^2*x_2)
    """
    powers: Tuple[Tuple[int, int], ...] = ()

    @staticmethod
    def of(*pairs: Tuple[int, int]) -> 'SparseTerm':
        merged: Dict[int, int] = {}
        for var, power in pairs:
            if var < 0 or power < 0:
                raise ValueError(f"Invalid (variable, power) pair: ({var}, {power})")
            merged[var] = merged.get(var, 0) + power
        return SparseTerm(tuple(sorted((v, p) for v, p in merged.items() if p > 0)))

    @property
    def degree(self) -> int:
        """Total degree of the monomial."""
        return sum(p for _, p in self.powers)

    @property
    def max_individual_degree(self) -> int:
        return max((p for _, p in self.powers), default=0)

    @property
    def variables(self) -> List[int]:
        return [v for v, _ in self.powers]

    def is_constant(self) -> bool:
        return not self.powers

    def evaluate(self, point: Sequence[int], field: 'PrimeField') -> int:
        result = 1
        for var, power in self.powers:
            result = field.mul(result, field.pow(point[var], power))
            if result == 0:
                return 0
        return result

    def __repr__(self) -> str:
        return f"SparseTerm({self._format() or '1'})"

    def _format(self) -> str:
        parts = []
        for var, power in self.powers:
            parts.append(f"x_{var}" if power == 1 else f"x_{var}^{power}")
        return "*".join(parts)


@dataclass
class SparsePolynomial:
    """
    A multivariate polynomial over Z_p stored as a list of terms.

    Like terms are combined and zero coefficients dropped on construction.

    Attributes:
        num_vars: Number of variables n (point length for evaluate)
        terms: List of (coefficient, SparseTerm), coefficients in [1, p-1]
        field: The prime field

    Example:
        >>> field = PrimeField(PrimeField.CURVE25519_PRIME)
        >>> f = SparsePolynomial.from_coefficients(
        ...     2, [(1, SparseTerm.of((0, 1))), (7, SparseTerm())], field)
        >>> f.evaluate([1, 0])
        8
    """
    num_vars: int
    terms: List[Tuple[int, SparseTerm]]
    field: 'PrimeField'

    def __post_init__(self):
        if self.num_vars < 0:
            raise ValueError("num_vars must be non-negative")

        combined: Dict[SparseTerm, int] = {}
        for coeff, term in self.terms:
            for var in term.variables:
                if var >= self.num_vars:
                    raise ValueError(
                        f"Term {term!r} uses x_{var} but polynomial has "
                        f"{self.num_vars} variables")
            combined[term] = self.field.add(combined.get(term, 0), int(coeff))

        self.terms = [(c, t) for t, c in sorted(combined.items(),
                                               key=lambda item: item[0].powers)
                      if c != 0]

    @staticmethod
    def from_coefficients(num_vars: int,
                          terms: Sequence[Tuple[int, SparseTerm]],
                          field: 'PrimeField') -> 'SparsePolynomial':
        return SparsePolynomial(num_vars, list(terms), field)

    def degree(self) -> int:
        """Total degree (largest monomial degree)."""
        return max((t.degree for _, t in self.terms), default=0)

    def max_individual_degree(self) -> int:
        """Largest power of any single variable in any term."""
        return max((t.max_individual_degree for _, t in self.terms), default=0)

    def is_multilinear(self) -> bool:
        return self.max_individual_degree() <= 1

    def evaluate(self, point: Sequence[int]) -> int:
        """
        Evaluate at an arbitrary point of Z_p^n.

        Raises:
            ValueError: If len(point) != num_vars
        """
        if len(point) != self.num_vars:
            raise ValueError(f"Point dimension {len(point)} != num_vars {self.num_vars}")

        point = [int(x) % self.field.prime for x in point]
        total = 0
        for coeff, term in self.terms:
            total = self.field.add(total, self.field.mul(coeff, term.evaluate(point, self.field)))
        return total

    def __repr__(self) -> str:
        if not self.terms:
            return "0"

        parts = []
        for coeff, term in self.terms:
            monomial = term._format()
            if not monomial:
                parts.append(str(coeff))
            elif coeff == 1:
                parts.append(monomial)
            else:
                parts.append(f"{coeff}*{monomial}")
        return " + ".join(parts)


@dataclass
class MultilinearTable:
    """
    A multilinear polynomial stored by its values on {0,1}^n.

    Evaluation at a non-boolean point fixes one variable at a time:
        new[i] = old[i] + r * (old[i + half] - old[i])
    halving the table each step until one value remains.

    Attributes:
        name: Identifier for this factor (e.g. "w1")
        values: The 2^n hypercube values, first variable = MSB of the index
        field: The prime field

    Example:
        >>> field = PrimeField(97)
        >>> # f(0,0)=3, f(0,1)=7, f(1,0)=2, f(1,1)=5
        >>> mle = MultilinearTable("f", [3, 7, 2, 5], field)
        >>> mle.num_vars
        2
    """
    name: str
    values: List[int]
    field: 'PrimeField'

    def __post_init__(self):
        if self.size == 0 or (self.size & (self.size - 1)) != 0:
            raise ValueError(f"Table size must be a power of 2, got {self.size}")

        self.values = [int(v) % self.field.prime for v in self.values]

    @property
    def size(self) -> int:
        return len(self.values)

    @property
    def num_vars(self) -> int:
        return int(math.log2(self.size))

    def __getitem__(self, index: int) -> int:
        return self.values[index]

    def __repr__(self) -> str:
        if self.size <= 8:
            return f"MultilinearTable({self.name}, {self.values})"
        return f"MultilinearTable({self.name}, size={self.size}, first_few={self.values[:4]}...)"

    def fix_first_variable(self, r: int) -> List[int]:
        """Values of f(r, x_1, ..., x_{n-1}) over the remaining hypercube."""
        half = self.size // 2
        lo, hi = self.values[:half], self.values[half:]
        return [self.field.add(a, self.field.mul(r, self.field.sub(b, a)))
                for a, b in zip(lo, hi)]

    def evaluate(self, point: Sequence[int]) -> int:
        """
        Evaluate the multilinear extension at any point of Z_p^n.

        Raises:
            ValueError: If len(point) != num_vars
        """
        if len(point) != self.num_vars:
            raise ValueError(f"Point dimension {len(point)} != num_vars {self.num_vars}")

        values = self.values
        for r in point:
            values = MultilinearTable(self.name, values, self.field).fix_first_variable(int(r))
        return values[0]


_VARIABLE = re.compile(r"^x_?(\d+)(?:\^(\d+))?$")


def parse_polynomial(specification: str, num_vars: int,
                     field: 'PrimeField') -> SparsePolynomial:
    """
    Parse a polynomial specification string into a SparsePolynomial.

    Format: "term1 + term2 - term3 + ..."
    Each term: "coef*x0*x2", "x1^2", "x_3" or a bare constant "5".

    Example:
        >>> f = parse_polynomial("2*x0 + 7*x0*x2 + x1*x2 + 5", 3, field)
        >>> f
        5 + 2*x_0 + 7*x_0*x_2 + x_1*x_2

    Raises:
        ValueError: On an unrecognised factor or an out-of-range variable
    """
    text = specification.replace(" ", "")
    if not text:
        raise ValueError("Empty polynomial specification")

    parts = re.split(r"([+-])", text)
    if parts[0] == "":
        parts = parts[1:]
    else:
        parts = ["+"] + parts

    terms: List[Tuple[int, SparseTerm]] = []
    for sign, term_str in zip(parts[0::2], parts[1::2]):
        if not term_str:
            raise ValueError(f"Dangling '{sign}' in {specification!r}")

        coefficient = 1 if sign == "+" else -1
        powers: List[Tuple[int, int]] = []

        for factor in term_str.split("*"):
            if factor.isdigit():
                coefficient *= int(factor)
                continue
            match = _VARIABLE.match(factor)
            if match is None:
                raise ValueError(f"Cannot parse factor {factor!r} in {specification!r}")
            powers.append((int(match.group(1)), int(match.group(2) or 1)))

        terms.append((coefficient % field.prime, SparseTerm.of(*powers)))

    return SparsePolynomial(num_vars, terms, field)

