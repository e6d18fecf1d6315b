"""
Common utilities for Product Sum-Check.

This module provides:
    - Finite field arithmetic (PrimeField, FieldElement, BatchInverter)
    - Factor representations (SparsePolynomial, MultilinearTable)
    - A text parser for sparse polynomials
"""

from .field import PrimeField, FieldElement, BatchInverter
from .polynomial import (
    MultilinearFactor,
    MultilinearTable,
    SparsePolynomial,
    SparseTerm,
    parse_polynomial,
)

__all__ = [
    "PrimeField",
    "FieldElement",
    "BatchInverter",
    "MultilinearFactor",
    "MultilinearTable",
    "SparsePolynomial",
    "SparseTerm",
    "parse_polynomial",
]
