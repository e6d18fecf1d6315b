"""
Protocol Orchestrator.

Drives an honest-verifier Sum-Check run between a Prover and a Verifier:

    setup:  claim -> (n, claimed sum, prover state, verifier state)
    run:    n x [ round_phase_1 -> Verifier.round -> round_phase_2 ]
            then Verifier.sanity_check

Rejection policy:
    The first RejectError ends the run. Remaining rounds never execute and
    the transcript reports accept=False with the challenges collected
    before the failing round (none if round 1 failed). A failure detected
    only by the final check reports the full n-length challenge vector.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence, Tuple
import logging

from ..common.polynomial import MultilinearFactor
from .claim import ProductClaim
from .config import ProtocolConfig
from .errors import RejectError
from .prover import Prover, ProverState, RoundMessage
from .verifier import Verifier, VerifierState

logger = logging.getLogger(__name__)


@dataclass
class RoundRecord:
    """
    What was exchanged in one round.

    Attributes:
        round_num: Round number (1-indexed)
        message: The prover's [g(0), ..., g(m)]
        challenge: The verifier's challenge (None if the round rejected)
        running_eval: g(challenge), the next round's target
    """
    round_num: int
    message: RoundMessage
    challenge: Optional[int] = None
    running_eval: Optional[int] = None

    @property
    def accepted(self) -> bool:
        return self.challenge is not None


@dataclass
class ProtocolTranscript:
    """
    Terminal output of a protocol run.

    Attributes:
        accept: Whether the verifier accepted the claim
        randomness: Challenges sampled before the run ended
        claimed_sum: The sum the verifier was asked to accept
        rounds: Per-round records (empty unless recording is on)
        reason: Why the run was rejected, if it was
    """
    accept: bool
    randomness: List[int]
    claimed_sum: Optional[int] = None
    rounds: List[RoundRecord] = field(default_factory=list)
    reason: Optional[str] = None

    @property
    def num_rounds(self) -> int:
        return len(self.randomness)


class SumCheckProtocol:
    """
    Wires a Prover and a Verifier together for one or more claims.

    Args:
        config: Protocol configuration (field, randomness, checks)
        prover: Prover to use; a subclass can model a dishonest prover
        verifier: Verifier to use; defaults to one drawing challenges from
                  config.make_rng()

    Example:
        >>> protocol = SumCheckProtocol(create_test_config(seed=1))
        >>> claim = protocol.make_claim([f1, f2])
        >>> transcript = protocol.prove(claim)
        >>> transcript.accept
        True
    """

    def __init__(self, config: Optional[ProtocolConfig] = None,
                 prover: Optional[Prover] = None,
                 verifier: Optional[Verifier] = None):
        self.config = config if config is not None else ProtocolConfig()
        self.prover = prover if prover is not None else Prover()
        self.verifier = verifier if verifier is not None else Verifier(self.config.make_rng())

    def make_claim(self, factors: Sequence[MultilinearFactor]) -> ProductClaim:
        """Build a ProductClaim over the configured field."""
        return ProductClaim(factors, self.config.field,
                            check_multilinear=self.config.check_multilinear)

    def setup(self, claim: ProductClaim, claimed_sum: Optional[int] = None
              ) -> Tuple[int, int, ProverState, VerifierState]:
        """
        Produce the initial states of both parties.

        Args:
            claim: The product claim
            claimed_sum: Sum the verifier is asked to accept. Defaults to
                         the prover's honest sum; anything else models a
                         false claim.

        Returns:
            (n, claimed sum, prover state, verifier state)
        """
        honest_sum, prover_state = self.prover.claim_sum(claim)
        if claimed_sum is None:
            claimed_sum = honest_sum
        claimed_sum = claim.field.reduce(claimed_sum)

        if claimed_sum != honest_sum:
            logger.debug("Claimed sum %d differs from the hypercube sum", claimed_sum)

        verifier_state = self.verifier.initialize(claim, claimed_sum)
        return claim.num_vars, claimed_sum, prover_state, verifier_state

    def run(self, num_vars: int, prover_state: ProverState,
            verifier_state: VerifierState) -> ProtocolTranscript:
        """Play all rounds and the final check."""
        claimed_sum = verifier_state.running_eval
        rounds: List[RoundRecord] = []

        for _ in range(num_vars):
            message, prover_state = self.prover.round_phase_1(prover_state)
            record = RoundRecord(round_num=verifier_state.round + 1, message=list(message))
            if self.config.record_rounds:
                rounds.append(record)

            try:
                r, verifier_state = self.verifier.round(verifier_state, message)
            except RejectError as e:
                logger.info("Verifier rejected the claim: %s", e)
                return ProtocolTranscript(
                    accept=False,
                    randomness=list(verifier_state.randomness),
                    claimed_sum=claimed_sum,
                    rounds=rounds,
                    reason=str(e),
                )

            record.challenge = r
            record.running_eval = verifier_state.running_eval
            prover_state = self.prover.round_phase_2(prover_state, r)

        accept, randomness = self.verifier.sanity_check(verifier_state)
        return ProtocolTranscript(
            accept=accept,
            randomness=randomness,
            claimed_sum=claimed_sum,
            rounds=rounds,
            reason=None if accept else "final oracle check failed",
        )

    def prove(self, claim: ProductClaim,
              claimed_sum: Optional[int] = None) -> ProtocolTranscript:
        """setup + run in one call."""
        num_vars, _, prover_state, verifier_state = self.setup(claim, claimed_sum)
        return self.run(num_vars, prover_state, verifier_state)


def setup_protocol(claim: ProductClaim, protocol: Optional[SumCheckProtocol] = None
                   ) -> Tuple[int, int, ProverState, VerifierState]:
    """Module-level shorthand for SumCheckProtocol().setup(claim)."""
    protocol = protocol if protocol is not None else SumCheckProtocol()
    return protocol.setup(claim)


def run_protocol(num_vars: int, prover_state: ProverState,
                 verifier_state: VerifierState,
                 protocol: Optional[SumCheckProtocol] = None) -> ProtocolTranscript:
    """Module-level shorthand for SumCheckProtocol().run(...)."""
    protocol = protocol if protocol is not None else SumCheckProtocol()
    return protocol.run(num_vars, prover_state, verifier_state)


def with_running_eval(state: VerifierState, running_eval: int) -> VerifierState:
    """Copy of ``state`` with a different target; used to model a false claim mid-run."""
    return replace(state, running_eval=state.claim.field.reduce(running_eval))
