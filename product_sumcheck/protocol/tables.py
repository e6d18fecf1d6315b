"""
Evaluation Table Engine.

The prover never works with a factor's symbolic form. It evaluates each
factor once at all 2^n corners of the hypercube and from then on only
touches these dense tables:

    build     - 2^n oracle calls per factor, done once at protocol start
    extend    - affine extension along the leading free variable
    collapse  - fix the leading free variable to a challenge r, halving the
                table

Indexing:
    A table of size 2^k is indexed by the binary value of the k remaining
    free variables, most significant bit = leading variable. The two halves
    [0, 2^(k-1)) and [2^(k-1), 2^k) are therefore the sub-hypercubes with
    the leading variable fixed to 0 and to 1, and

        collapse(t, r)[b] = (1 - r) * t[b] + r * t[b + 2^(k-1)]

    is exact linear interpolation between them. It is only correct because
    each factor is assumed multilinear in that variable.

Values are Python ints held in numpy object arrays, so arithmetic is exact
for any prime size while still vectorizing over all table entries.
"""

from __future__ import annotations
from typing import List, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from ..common.field import PrimeField
    from ..common.polynomial import MultilinearFactor


def hypercube_point(index: int, num_vars: int) -> List[int]:
    """
    Binary expansion of ``index`` as a point of {0,1}^num_vars.

    The first coordinate is the most significant bit:
        hypercube_point(4, 5) == [0, 0, 1, 0, 0]
    """
    return [(index >> (num_vars - 1 - i)) & 1 for i in range(num_vars)]


class EvaluationTable:
    """
    Dense evaluations of one factor over the current (partially fixed)
    hypercube.

    Tables are never mutated. collapse() returns a new, half-sized table,
    so a prover state built from collapsed tables is updated atomically.

    Attributes:
        values: numpy object array of 2^k ints in [0, p-1]
        field: The prime field

    Example:
        >>> field = PrimeField(PrimeField.CURVE25519_PRIME)
        >>> t = EvaluationTable([67, 9, 28, 31, 93, 21, 72, 95], field)
        >>> t.collapse(83).to_list()
        [2225, 1005, 3680, 5343]
    """

    def __init__(self, values, field: 'PrimeField'):
        values = np.array([int(v) % field.prime for v in values], dtype=object)
        size = len(values)
        if size == 0 or (size & (size - 1)) != 0:
            raise ValueError(f"Table size must be a power of 2, got {size}")
        self._values = values
        self.field = field

    @classmethod
    def _wrap(cls, values: np.ndarray, field: 'PrimeField') -> 'EvaluationTable':
        """Adopt an already-reduced object array without copying."""
        table = cls.__new__(cls)
        table._values = values
        table.field = field
        return table

    @classmethod
    def build(cls, factor: 'MultilinearFactor', num_vars: int,
              field: 'PrimeField') -> 'EvaluationTable':
        """
        Evaluate ``factor`` at every point of {0,1}^num_vars.

        This is the engine's one exponential step (2^n oracle calls). It
        must run once per factor, never per round.
        """
        values = np.empty(1 << num_vars, dtype=object)
        for index in range(1 << num_vars):
            values[index] = field.reduce(factor.evaluate(hypercube_point(index, num_vars)))
        return cls._wrap(values, field)

    @property
    def size(self) -> int:
        return len(self._values)

    @property
    def num_vars(self) -> int:
        return self.size.bit_length() - 1

    @property
    def values(self) -> np.ndarray:
        """Read-only view of the entries."""
        view = self._values.view()
        view.flags.writeable = False
        return view

    def __getitem__(self, index: int) -> int:
        return self._values[index]

    def __len__(self) -> int:
        return self.size

    def __eq__(self, other: object) -> bool:
        if isinstance(other, EvaluationTable):
            return self.field == other.field and self.to_list() == other.to_list()
        if isinstance(other, (list, tuple)):
            return self.to_list() == [int(v) % self.field.prime for v in other]
        return NotImplemented

    def __repr__(self) -> str:
        if self.size <= 8:
            return f"EvaluationTable({self.to_list()})"
        return f"EvaluationTable(size={self.size}, first_few={self.to_list()[:4]}...)"

    def to_list(self) -> List[int]:
        return [int(v) for v in self._values]

    def halves(self):
        """(leading variable = 0 half, leading variable = 1 half)."""
        if self.size < 2:
            raise ValueError("A table with no free variables cannot be split")
        half = self.size // 2
        return self._values[:half], self._values[half:]

    def extend(self, j: int) -> np.ndarray:
        """
        Evaluate the affine extension along the leading variable at ``j``.

            ext[b] = (1 - j) * t[b] + j * t[b + half] = t[b] + j * (t[b + half] - t[b])

        At j = 0 and j = 1 these are the two halves; at j >= 2 they are the
        values the prover needs to describe a degree-m round polynomial.
        """
        lo, hi = self.halves()
        return (lo + (hi - lo) * j) % self.field.prime

    def collapse(self, r: int) -> 'EvaluationTable':
        """Fix the leading free variable to ``r``; returns a table of half the size."""
        return EvaluationTable._wrap(self.extend(int(r)), self.field)

    def sum(self) -> int:
        """Sum of all entries (the hypercube sum of this factor alone)."""
        return int(self._values.sum()) % self.field.prime


def build_tables(factors, num_vars: int, field: 'PrimeField') -> List[EvaluationTable]:
    """Build one table per factor."""
    return [EvaluationTable.build(f, num_vars, field) for f in factors]


def collapse_all(tables: List[EvaluationTable], r: int) -> List[EvaluationTable]:
    """Collapse every table with the same challenge."""
    return [t.collapse(r) for t in tables]


def product_sum(tables: List[EvaluationTable]) -> int:
    """
    Σ_b Π_k table_k[b] over all indices b.

    All tables must have the same size.
    """
    field = tables[0].field
    product = np.ones(tables[0].size, dtype=object)
    for table in tables:
        product = (product * table._values) % field.prime
    return int(product.sum()) % field.prime
