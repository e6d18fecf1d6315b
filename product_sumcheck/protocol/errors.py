"""
Error types for the Sum-Check protocol.

Three distinct failure modes, never to be conflated:

    ClaimError          - the claim could not be constructed (setup failure);
                          no protocol state exists
    RejectError         - the verifier rejected a round message; the expected
                          outcome for a dishonest prover
    ProtocolStateError  - a party was driven out of order (a bug in the caller)

A failed final oracle check is not an exception at all: the verifier simply
returns accept=False.
"""

from typing import Optional


class SumCheckError(Exception):
    """Base class for all protocol errors."""


class ClaimError(SumCheckError, ValueError):
    """A ProductClaim could not be built from the supplied factors."""


class RejectError(SumCheckError):
    """
    The verifier's per-round consistency check failed.

    Attributes:
        reason: Human-readable explanation
        round_num: 1-indexed round in which the rejection happened
    """

    def __init__(self, reason: str, round_num: Optional[int] = None):
        super().__init__(reason)
        self.reason = reason
        self.round_num = round_num

    def __str__(self) -> str:
        if self.round_num is None:
            return self.reason
        return f"round {self.round_num}: {self.reason}"


class ProtocolStateError(SumCheckError, RuntimeError):
    """A prover or verifier operation was called in the wrong state."""
