"""
Product Sum-Check - Demonstration Entry Point

Builds a sample claim (a product of three multilinear polynomials in three
variables), runs the protocol and prints every round plus the verdict.

Run with:
    python -m product_sumcheck.main
    python -m product_sumcheck.main --seed 42 --cheat
"""

import argparse
import logging
import sys
from typing import List, Optional

from tabulate import tabulate

from .common.polynomial import parse_polynomial
from .protocol.config import ProtocolConfig, create_default_config, create_goldilocks_config
from .protocol.orchestrator import ProtocolTranscript, SumCheckProtocol, with_running_eval

SAMPLE_FACTORS = [
    "x0*x2 + x1 + x2",
    "x0 + x1 + x2",
    "x0 + x1 + x2",
]
SAMPLE_NUM_VARS = 3


def print_banner():
    print()
    print("╔" + "═" * 68 + "╗")
    print("║" + " " * 22 + "PRODUCT SUM-CHECK DEMO" + " " * 24 + "║")
    print("╚" + "═" * 68 + "╝")
    print()


def _short(value: int, width: int = 18) -> str:
    text = str(value)
    if len(text) <= width:
        return text
    return text[:width // 2 - 1] + "…" + text[-(width // 2 - 1):]


def print_transcript(transcript: ProtocolTranscript):
    """Print the per-round table and the verdict."""
    rows = []
    for record in transcript.rounds:
        rows.append([
            record.round_num,
            ", ".join(_short(v) for v in record.message),
            _short(record.challenge) if record.accepted else "rejected",
            _short(record.running_eval) if record.accepted else "-",
        ])

    if rows:
        print(tabulate(rows, headers=["Round", "g(0), ..., g(m)", "Challenge", "Next target"]))
        print()

    print(f"Claimed sum: {_short(transcript.claimed_sum, 40)}")
    print(f"Challenges collected: {transcript.num_rounds}")
    if transcript.accept:
        print("\n✓ The verifier accepts the claim.")
    else:
        print(f"\n✗ The verifier rejects the claim ({transcript.reason}).")


def build_config(args: argparse.Namespace) -> ProtocolConfig:
    if args.field == "goldilocks":
        config = create_goldilocks_config(seed=args.seed)
    else:
        config = create_default_config()
        config.seed = args.seed
    return config


def run_demo(config: ProtocolConfig, cheat: bool = False) -> ProtocolTranscript:
    protocol = SumCheckProtocol(config)
    field = config.field
    factors = [parse_polynomial(spec, SAMPLE_NUM_VARS, field) for spec in SAMPLE_FACTORS]

    print(config.summary())
    print()
    print("Claim: Σ over {0,1}^3 of")
    for spec in SAMPLE_FACTORS:
        print(f"    ({spec})")
    print()

    claim = protocol.make_claim(factors)
    num_vars, claimed_sum, prover_state, verifier_state = protocol.setup(claim)
    if cheat:
        verifier_state = with_running_eval(verifier_state, claimed_sum + 1)
        print("Prover is cheating: claiming the true sum + 1\n")

    return protocol.run(num_vars, prover_state, verifier_state)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Run a sample product sum-check claim.")
    parser.add_argument("--field", choices=["curve25519", "goldilocks"], default="curve25519",
                        help="prime field for the claim")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed the verifier's challenges (not secure; for reproducibility)")
    parser.add_argument("--cheat", action="store_true",
                        help="claim a wrong sum to watch the verifier reject")
    parser.add_argument("--verbose", action="store_true",
                        help="log every round")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format="%(levelname)s %(name)s: %(message)s")

    print_banner()
    transcript = run_demo(build_config(args), cheat=args.cheat)
    print_transcript(transcript)
    return 0 if transcript.accept else 1


if __name__ == "__main__":
    sys.exit(main())
