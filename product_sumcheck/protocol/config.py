"""
Protocol Configuration.

Parameters that are not part of a claim but change how a protocol run
behaves: which field the claim lives in, where the verifier's randomness
comes from, and whether debug-time structural checks are performed.

Randomness:
    seed=None uses random.SystemRandom (the OS CSPRNG). A fixed seed uses
    random.Random(seed), which is NOT cryptographically secure and exists
    only to make transcripts reproducible in tests and demos.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import random

from ..common.field import PrimeField


@dataclass
class ProtocolConfig:
    """
    Configuration for one Sum-Check protocol run.

    Attributes:
        name: Configuration name for identification
        prime: Field modulus; must exceed the number of factors
        seed: Seed for the verifier's challenges (None = OS randomness)
        check_multilinear: Reject non-multilinear factors at setup instead
                           of relying on the final oracle check
        record_rounds: Keep per-round messages/challenges in the transcript

    Example:
        >>> config = ProtocolConfig(name="repro", seed=7)
        >>> rng = config.make_rng()
    """

    name: str = "default"
    prime: int = PrimeField.CURVE25519_PRIME
    seed: Optional[int] = None
    check_multilinear: bool = False
    record_rounds: bool = True

    def __post_init__(self):
        if self.prime < 2:
            raise ValueError("prime must be at least 2")

    @property
    def field(self) -> PrimeField:
        return PrimeField(self.prime)

    @property
    def deterministic(self) -> bool:
        return self.seed is not None

    def make_rng(self) -> random.Random:
        """Build a fresh challenge generator for one protocol run."""
        if self.seed is None:
            return random.SystemRandom()
        return random.Random(self.seed)

    def summary(self) -> str:
        return (
            f"ProtocolConfig '{self.name}':\n"
            f"  Field: Z_p, p has {self.prime.bit_length()} bits\n"
            f"  Randomness: {'seeded (' + str(self.seed) + ')' if self.deterministic else 'SystemRandom'}\n"
            f"  Multilinearity check: {'on' if self.check_multilinear else 'off'}"
        )


def create_default_config() -> ProtocolConfig:
    """256-bit field, OS randomness."""
    return ProtocolConfig(name="curve25519")


def create_goldilocks_config(seed: Optional[int] = None) -> ProtocolConfig:
    """64-bit Goldilocks field (2^64 - 2^32 + 1)."""
    return ProtocolConfig(name="goldilocks", prime=PrimeField.GOLDILOCKS_PRIME, seed=seed)


def create_test_config(seed: int = 0) -> ProtocolConfig:
    """Reproducible challenges over the 256-bit field, structural check on."""
    return ProtocolConfig(name="test", seed=seed, check_multilinear=True)
