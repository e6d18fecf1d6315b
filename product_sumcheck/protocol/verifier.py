"""
Sum-Check Verifier.

State machine:

    Initialized -> Round(1) -> ... -> Round(n) -> {Accepted, Rejected}

Round i receives [g(0), ..., g(m)] and
    1. checks g(0) + g(1) == running_eval          (the soundness anchor)
    2. samples a uniform challenge r_i
    3. sets running_eval = g(r_i) by Lagrange interpolation over 0..m

After round n the claim has been reduced to a single statement about one
point, which the verifier checks by querying the original factors:

    Π_k f_k(r_1, ..., r_n) == running_eval

Soundness:
    If the claimed sum is false, a cheating prover must send some g_i that
    differs from the true round polynomial yet agrees with it at r_i. Two
    distinct polynomials of degree <= m agree on at most m points, so each
    round is fooled with probability <= m/|F|, and the whole run with
    probability <= n*m/|F|.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple
import logging
import random

from ..common.field import BatchInverter, PrimeField
from .claim import ProductClaim
from .errors import ProtocolStateError, RejectError

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def _lagrange_weights(prime: int, num_points: int) -> Tuple[int, ...]:
    """
    w_j = 1 / Π_{l != j} (j - l)  for nodes 0, 1, ..., num_points - 1.

    All denominators are inverted together with one field inversion.
    """
    field = PrimeField(prime)
    denominators = []
    for j in range(num_points):
        den = 1
        for l in range(num_points):
            if l != j:
                den = field.mul(den, field.sub(j, l))
        denominators.append(den)
    return tuple(BatchInverter(field).invert_batch_raw(denominators))


def evaluate_round_polynomial(evaluations: Sequence[int], x: int,
                              field: PrimeField) -> int:
    """
    Evaluate at ``x`` the unique polynomial of degree < len(evaluations)
    through the points (0, e_0), (1, e_1), ..., (d, e_d).

        P(x) = Σ_j e_j * Π_{l != j} (x - l) / (j - l)

    Requires the field order to exceed d so that every (j - l) is
    invertible.
    """
    prime = field.prime
    num_points = len(evaluations)
    x = int(x) % prime

    if x < num_points:
        return int(evaluations[x]) % prime

    weights = _lagrange_weights(prime, num_points)
    diffs = [field.sub(x, l) for l in range(num_points)]

    # prefix[j] = Π_{l<j} (x - l), suffix[j] = Π_{l>=j} (x - l)
    prefix = [1] * (num_points + 1)
    for i in range(num_points):
        prefix[i + 1] = field.mul(prefix[i], diffs[i])
    suffix = [1] * (num_points + 1)
    for i in range(num_points - 1, -1, -1):
        suffix[i] = field.mul(suffix[i + 1], diffs[i])

    total = 0
    for j, e_j in enumerate(evaluations):
        basis = field.mul(weights[j], field.mul(prefix[j], suffix[j + 1]))
        total = field.add(total, field.mul(int(e_j), basis))
    return total


@dataclass(frozen=True)
class VerifierState:
    """
    Verifier state between rounds.

    Attributes:
        claim: The original product claim (queried once, at the final check)
        running_eval: Value the next round message must reconstruct
        randomness: Challenges sampled so far, one per completed round
        round: Number of completed rounds
    """
    claim: ProductClaim
    running_eval: int
    randomness: Tuple[int, ...] = ()
    round: int = 0

    @property
    def num_vars(self) -> int:
        return self.claim.num_vars

    @property
    def finished(self) -> bool:
        return self.round >= self.claim.num_vars


class Verifier:
    """
    Sum-Check verifier with an injected source of challenges.

    Args:
        rng: Object exposing ``randrange`` (random.Random API). Defaults to
             random.SystemRandom; pass a seeded random.Random for
             reproducible transcripts.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.SystemRandom()

    def initialize(self, claim: ProductClaim, claimed_sum: int) -> VerifierState:
        return VerifierState(
            claim=claim,
            running_eval=claim.field.reduce(claimed_sum),
        )

    def round(self, state: VerifierState,
              message: Sequence[int]) -> Tuple[int, VerifierState]:
        """
        Check one round message and issue the next challenge.

        Returns:
            (challenge r, next VerifierState)

        Raises:
            RejectError: If the message is malformed or g(0) + g(1) does not
                         equal the running evaluation
            ProtocolStateError: If all n rounds have already been played
        """
        if state.finished:
            raise ProtocolStateError(
                f"All {state.num_vars} rounds already completed; run the final check")

        field = state.claim.field
        round_num = state.round + 1
        expected_len = state.claim.num_factors + 1

        if len(message) != expected_len:
            logger.info("Rejecting round %d: %d evaluations, expected %d",
                        round_num, len(message), expected_len)
            raise RejectError(
                f"Round message has {len(message)} evaluations, expected {expected_len}",
                round_num)

        message = [field.reduce(v) for v in message]
        reconstructed = field.add(message[0], message[1])

        if reconstructed != state.running_eval:
            logger.info("Rejecting round %d: g(0) + g(1) = %d, expected %d",
                        round_num, reconstructed, state.running_eval)
            raise RejectError(
                f"g(0) + g(1) = {reconstructed} does not match the running "
                f"evaluation {state.running_eval}",
                round_num)

        r = field.random(self.rng)
        running_eval = evaluate_round_polynomial(message, r, field)

        logger.debug("Verifier round %d: challenge %d, next target %d",
                     round_num, r, running_eval)

        return r, replace(
            state,
            running_eval=running_eval,
            randomness=state.randomness + (r,),
            round=round_num,
        )

    def sanity_check(self, state: VerifierState) -> Tuple[bool, List[int]]:
        """
        Final oracle check: Π_k f_k(r_1, ..., r_n) == running_eval.

        Returns:
            (accept, the full n-length challenge vector)
        """
        if not state.finished:
            raise ProtocolStateError(
                f"Final check after {state.round} of {state.num_vars} rounds")

        randomness = list(state.randomness)
        oracle_value = state.claim.evaluate(randomness)
        accept = oracle_value == state.running_eval

        if accept:
            logger.info("Final check passed after %d rounds", state.round)
        else:
            logger.info("Final check failed: oracle %d != running evaluation %d",
                        oracle_value, state.running_eval)
        return accept, randomness
