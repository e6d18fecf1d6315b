"""
Sum-Check protocol for products of multilinear factors.

Key Components:
    - EvaluationTable: dense hypercube tables backing the prover
    - Prover / ProverState: two-phase round messages
    - Verifier / VerifierState: consistency checks and final oracle check
    - SumCheckProtocol: setup + run, producing a ProtocolTranscript

Usage:
    >>> from product_sumcheck.common import PrimeField, parse_polynomial
    >>> from product_sumcheck.protocol import SumCheckProtocol, create_test_config
    >>>
    >>> protocol = SumCheckProtocol(create_test_config(seed=42))
    >>> field = protocol.config.field
    >>> f1 = parse_polynomial("x0 + 7", 2, field)
    >>> f2 = parse_polynomial("2*x0 + x1", 2, field)
    >>> transcript = protocol.prove(protocol.make_claim([f1, f2]))
    >>> transcript.accept
    True
"""

from .claim import ProductClaim, get_num_vars
from .config import (
    ProtocolConfig,
    create_default_config,
    create_goldilocks_config,
    create_test_config,
)
from .errors import ClaimError, ProtocolStateError, RejectError, SumCheckError
from .orchestrator import (
    ProtocolTranscript,
    RoundRecord,
    SumCheckProtocol,
    run_protocol,
    setup_protocol,
)
from .prover import Prover, ProverState
from .tables import EvaluationTable, hypercube_point
from .verifier import Verifier, VerifierState, evaluate_round_polynomial

__all__ = [
    "ProductClaim",
    "get_num_vars",
    "ProtocolConfig",
    "create_default_config",
    "create_goldilocks_config",
    "create_test_config",
    "SumCheckError",
    "ClaimError",
    "RejectError",
    "ProtocolStateError",
    "ProtocolTranscript",
    "RoundRecord",
    "SumCheckProtocol",
    "setup_protocol",
    "run_protocol",
    "Prover",
    "ProverState",
    "EvaluationTable",
    "hypercube_point",
    "Verifier",
    "VerifierState",
    "evaluate_round_polynomial",
]
