"""
Sum-Check Prover.

The prover holds one evaluation table per factor and, in round i, sends the
univariate polynomial

    g_i(X) = Σ_{b ∈ {0,1}^k} Π_k f_k(r_1, ..., r_{i-1}, X, b)

described by its values g_i(0), ..., g_i(m). Each round is split in two
because the prover must commit to g_i before it learns the challenge r_i:

    round_phase_1(state)     -> message        (read-only)
    round_phase_2(state, r)  -> next state     (collapses every table)

Cost per round is O(m^2 * 2^k) field operations for k remaining variables,
so the whole proof is O(m^2 * 2^n) after the O(m * 2^n) table build.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import List, Tuple
import logging

import numpy as np

from ..common.field import PrimeField
from .claim import ProductClaim
from .errors import ProtocolStateError
from .tables import EvaluationTable, build_tables, collapse_all, product_sum

logger = logging.getLogger(__name__)


# Values g(0), g(1), ..., g(m) of one round polynomial
RoundMessage = List[int]


@dataclass(frozen=True)
class ProverState:
    """
    Prover state between rounds.

    Attributes:
        tables: One evaluation table per factor, each of size 2^(n - round)
        round: Number of completed rounds (0-indexed counter)
        num_vars: n
        num_factors: m
        field: The prime field
    """
    tables: Tuple[EvaluationTable, ...]
    round: int
    num_vars: int
    num_factors: int
    field: PrimeField

    @property
    def remaining_vars(self) -> int:
        return self.num_vars - self.round

    @property
    def finished(self) -> bool:
        return self.round >= self.num_vars


class Prover:
    """
    Honest prover for product sum-check claims.

    Example:
        >>> prover = Prover()
        >>> claimed_sum, state = prover.claim_sum(claim)
        >>> message, state = prover.round_phase_1(state)
        >>> state = prover.round_phase_2(state, challenge)
    """

    def claim_sum(self, claim: ProductClaim) -> Tuple[int, ProverState]:
        """
        Build all tables and compute Σ_b Π_k f_k(b) over {0,1}^n.

        Returns:
            (claimed sum, initial ProverState with round counter 0)
        """
        tables = build_tables(claim.factors, claim.num_vars, claim.field)
        state = ProverState(
            tables=tuple(tables),
            round=0,
            num_vars=claim.num_vars,
            num_factors=claim.num_factors,
            field=claim.field,
        )
        claimed = product_sum(tables)

        logger.debug("Prover built %d tables of size %d; claimed sum %d",
                     len(tables), 1 << claim.num_vars, claimed)
        return claimed, state

    def round_phase_1(self, state: ProverState) -> Tuple[RoundMessage, ProverState]:
        """
        Compute [g(0), ..., g(m)] for the current round.

        For every remaining point b and j in 0..m:
            v_k(j, b) = (1 - j) * t_k[b] + j * t_k[b + 2^k]
            g(j)      = Σ_b Π_k v_k(j, b)

        The state is returned unchanged.
        """
        if state.finished:
            raise ProtocolStateError(
                f"All {state.num_vars} rounds already completed; no message to send")

        prime = state.field.prime
        half = state.tables[0].size // 2
        message: RoundMessage = []

        for j in range(state.num_factors + 1):
            product = np.ones(half, dtype=object)
            for table in state.tables:
                product = (product * table.extend(j)) % prime
            message.append(int(product.sum()) % prime)

        logger.debug("Prover round %d message: %s", state.round + 1, message)
        return message, state

    def round_phase_2(self, state: ProverState, r: int) -> ProverState:
        """Fix the current variable to the verifier's challenge ``r``."""
        if state.finished:
            raise ProtocolStateError(
                f"All {state.num_vars} rounds already completed; cannot bind another challenge")

        tables = collapse_all(list(state.tables), state.field.reduce(r))
        return replace(state, tables=tuple(tables), round=state.round + 1)
