"""
Finite Field Arithmetic for Sum-Check.

Every value exchanged in the protocol (table entries, round messages,
challenges, running evaluations) lives in a prime field Z_p. This module
provides the integer-level operations used by the protocol's inner loops
and a small FieldElement wrapper for user-facing code.

Key Concepts:
    - All arithmetic is done modulo a prime p
    - Subtraction keeps results in [0, p-1]
    - Division multiplies by the modular inverse
    - Sampling draws a uniform element from an injected generator

Field Size and Soundness:
    A cheating prover escapes detection with probability at most n*m/p
    (n rounds, each round polynomial of degree <= m). With p ~ 2^255 that
    bound is negligible; with p = 97 it is not, so small primes are for
    hand-checkable examples only.

Example:
    >>> field = PrimeField(97)
    >>> a = field.element(45)
    >>> b = field.element(67)
    >>> a + b
    FieldElement(15, mod 97)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Union, List, Optional
import random


@dataclass
class FieldElement:
    """
    An element of a prime field Z_p.

    All operations automatically reduce the result modulo p. Comparison
    with a plain int compares against the int reduced modulo p, so
    round messages can be checked against literal fixtures.

    Attributes:
        value: The integer value (always in range [0, p-1])
        field: Reference to the parent PrimeField
    """
    value: int
    field: 'PrimeField'

    def __post_init__(self):
        self.value = self.value % self.field.prime

    def __repr__(self) -> str:
        return f"FieldElement({self.value}, mod {self.field.prime})"

    def __str__(self) -> str:
        return str(self.value)

    def __int__(self) -> int:
        return self.value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldElement):
            return self.value == other.value and self.field.prime == other.field.prime
        if isinstance(other, int):
            return self.value == (other % self.field.prime)
        return False

    def __hash__(self) -> int:
        return hash((self.value, self.field.prime))

    def __add__(self, other: Union[FieldElement, int]) -> FieldElement:
        other_val = other.value if isinstance(other, FieldElement) else other
        return FieldElement(self.value + other_val, self.field)

    def __radd__(self, other: int) -> FieldElement:
        return self.__add__(other)

    def __sub__(self, other: Union[FieldElement, int]) -> FieldElement:
        other_val = other.value if isinstance(other, FieldElement) else other
        return FieldElement(self.value - other_val, self.field)

    def __rsub__(self, other: int) -> FieldElement:
        return FieldElement(other - self.value, self.field)

    def __mul__(self, other: Union[FieldElement, int]) -> FieldElement:
        other_val = other.value if isinstance(other, FieldElement) else other
        return FieldElement(self.value * other_val, self.field)

    def __rmul__(self, other: int) -> FieldElement:
        return self.__mul__(other)

    def __truediv__(self, other: Union[FieldElement, int]) -> FieldElement:
        if isinstance(other, FieldElement):
            return self * other.inverse()
        return self * self.field.element(other).inverse()

    def __neg__(self) -> FieldElement:
        return FieldElement(-self.value, self.field)

    def __pow__(self, exp: int) -> FieldElement:
        if exp < 0:
            return self.inverse() ** (-exp)
        return FieldElement(pow(self.value, exp, self.field.prime), self.field)

    def inverse(self) -> FieldElement:
        """
        Compute the modular inverse with the Extended Euclidean Algorithm.

        Raises:
            ValueError: If self.value is 0 (no inverse exists)
        """
        if self.value == 0:
            raise ValueError("Cannot invert zero")

        old_r, r = self.value, self.field.prime
        old_s, s = 1, 0

        while r != 0:
            quotient = old_r // r
            old_r, r = r, old_r - quotient * r
            old_s, s = s, old_s - quotient * s

        if old_r != 1:
            raise ValueError(f"No inverse exists (gcd = {old_r})")

        return FieldElement(old_s, self.field)

    def is_zero(self) -> bool:
        return self.value == 0

    def is_one(self) -> bool:
        return self.value == 1


class PrimeField:
    """
    A prime field Z_p.

    The protocol code works on raw Python ints through the direct
    arithmetic methods (add, sub, mul, ...) and only wraps values in
    FieldElement at the edges.

    Attributes:
        prime: The prime modulus p

    Primes used here:
        - 97: hand-checkable examples
        - 2^64 - 2^32 + 1: Goldilocks prime (fast on 64-bit CPUs)
        - 2^255 - 19: default 256-bit protocol field
    """

    SMALL_TEST_PRIME = 97
    GOLDILOCKS_PRIME = (1 << 64) - (1 << 32) + 1
    CURVE25519_PRIME = (1 << 255) - 19

    def __init__(self, prime: int):
        """
        Args:
            prime: The prime modulus. Primality is not verified.
        """
        if prime < 2:
            raise ValueError("Prime must be at least 2")
        self.prime = prime

    def __repr__(self) -> str:
        return f"PrimeField({self.prime})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PrimeField):
            return self.prime == other.prime
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.prime)

    def element(self, value: int) -> FieldElement:
        """Create a field element from an integer."""
        return FieldElement(value, self)

    def zero(self) -> FieldElement:
        return FieldElement(0, self)

    def one(self) -> FieldElement:
        return FieldElement(1, self)

    def random(self, rng: Optional[random.Random] = None,
               exclude_zero: bool = False) -> int:
        """
        Sample a uniform field element.

        Args:
            rng: Source of randomness exposing ``randrange``. Defaults to
                 the operating system's CSPRNG (random.SystemRandom).
            exclude_zero: If True, sample from [1, p-1]

        Returns:
            A uniformly random integer in [0, p-1] (or [1, p-1])
        """
        rng = rng if rng is not None else random.SystemRandom()
        if exclude_zero:
            return rng.randrange(1, self.prime)
        return rng.randrange(self.prime)

    def reduce(self, a: Union[int, FieldElement]) -> int:
        """Bring an integer or FieldElement into [0, p-1]."""
        return int(a) % self.prime

    # Direct arithmetic on raw integers, used in the protocol's inner loops

    def add(self, a: int, b: int) -> int:
        return (a + b) % self.prime

    def sub(self, a: int, b: int) -> int:
        return (a - b) % self.prime

    def mul(self, a: int, b: int) -> int:
        return (a * b) % self.prime

    def neg(self, a: int) -> int:
        return (-a) % self.prime

    def inv(self, a: int) -> int:
        """Compute the modular inverse of an integer."""
        return self.element(a).inverse().value

    def pow(self, base: int, exp: int) -> int:
        return pow(base, exp, self.prime)


class BatchInverter:
    """
    Batch modular inversion using Montgomery's trick.

    Inverting n elements costs one field inversion plus 3(n-1)
    multiplications. The verifier uses it to invert all Lagrange
    denominators of a round polynomial at once.

    Algorithm:
        1. Compute partial products: P[i] = a[0] * a[1] * ... * a[i]
        2. Invert final product: I = P[n-1]^(-1)
        3. Recover individual inverses by "peeling off" elements

    Example:
        >>> field = PrimeField(97)
        >>> inverter = BatchInverter(field)
        >>> elements = [field.element(i) for i in range(1, 11)]
        >>> inverses = inverter.invert_batch(elements)
        >>> all((e * inv).is_one() for e, inv in zip(elements, inverses))
        True
    """

    def __init__(self, field: PrimeField):
        self.field = field

    def invert_batch(self, elements: List[FieldElement]) -> List[FieldElement]:
        """
        Compute inverses of all elements in a batch.

        Raises:
            ValueError: If any element is zero
        """
        if not elements:
            return []

        n = len(elements)

        for i, e in enumerate(elements):
            if e.is_zero():
                raise ValueError(f"Cannot invert zero (element {i})")

        products = [elements[0]]
        for i in range(1, n):
            products.append(products[i - 1] * elements[i])

        inv = products[n - 1].inverse()

        inverses = [self.field.zero()] * n

        for i in range(n - 1, 0, -1):
            # inv = (a[0]*...*a[i])^(-1), so inv * P[i-1] = a[i]^(-1)
            inverses[i] = inv * products[i - 1]
            inv = inv * elements[i]

        inverses[0] = inv

        return inverses

    def invert_batch_raw(self, values: List[int]) -> List[int]:
        """Batch inversion on raw integers."""
        elements = [self.field.element(v) for v in values]
        inverses = self.invert_batch(elements)
        return [inv.value for inv in inverses]
