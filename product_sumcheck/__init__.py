"""
Product Sum-Check
=================

The Sum-Check interactive proof for claims of the form

    Σ_{x ∈ {0,1}^n} f_1(x) · f_2(x) · ... · f_m(x) = C

where every f_k is multilinear. The verifier does O(n·m) work plus one
evaluation of the factors at a random point instead of summing 2^n terms.

Modules:
    - common: Field arithmetic and factor representations
    - protocol: Evaluation tables, prover, verifier, orchestrator

Quick Start:
    >>> from product_sumcheck.protocol import SumCheckProtocol
    >>> from product_sumcheck.common import parse_polynomial
    >>> protocol = SumCheckProtocol()
    >>> f = parse_polynomial("x0 + 7", 2, protocol.config.field)
    >>> protocol.prove(protocol.make_claim([f])).accept
    True
"""

__version__ = "0.1.0"

from . import common
from . import protocol
