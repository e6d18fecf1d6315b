"""
Verifier tests: interpolation, per-round checks, final oracle check.
"""
import random

import pytest

from product_sumcheck.protocol import (
    Prover,
    ProtocolStateError,
    RejectError,
    Verifier,
    evaluate_round_polynomial,
)


@pytest.fixture
def two_factor(sparse, claim):
    f1 = sparse(2, (1, [(0, 1)]), (7, []))
    f2 = sparse(2, (2, [(0, 1)]), (1, [(1, 1)]))
    return claim(f1, f2)


class TestEvaluateRoundPolynomial:
    def test_nodes_return_evaluations(self, field):
        evaluations = [21, 72, 135, 210]
        for j, e in enumerate(evaluations):
            assert evaluate_round_polynomial(evaluations, j, field) == e

    def test_cubic(self, field):
        # g(j) = 3 (j + 7)(2j + 1)
        evaluations = [3 * (j + 7) * (2 * j + 1) for j in range(4)]
        assert evaluate_round_polynomial(evaluations, 10, field) == 3 * 17 * 21

    def test_large_point(self, field):
        # g(x) = x^2 + 1 through (0, 1), (1, 2), (2, 5)
        x = field.prime - 5
        assert evaluate_round_polynomial([1, 2, 5], x, field) == field.add(field.mul(x, x), 1)

    def test_constant(self, field):
        assert evaluate_round_polynomial([42], 99, field) == 42

    def test_small_field(self, small_field):
        # g(x) = 5x + 3 over Z_97
        assert evaluate_round_polynomial([3, 8], 50, small_field) == (5 * 50 + 3) % 97


class TestInitialize:
    def test_initial_state(self, two_factor):
        state = Verifier().initialize(two_factor, 47)
        assert state.running_eval == 47
        assert state.randomness == ()
        assert state.round == 0
        assert state.claim is two_factor


class TestRound:
    def test_accepts_consistent_message(self, two_factor, fixed_challenges):
        verifier = Verifier(fixed_challenges([3]))
        state = verifier.initialize(two_factor, 47)
        r, next_state = verifier.round(state, [7, 40, 81])
        assert r == 3
        assert next_state.running_eval == 130
        assert next_state.randomness == (3,)
        assert next_state.round == 1

    def test_does_not_mutate_previous_state(self, two_factor, fixed_challenges):
        verifier = Verifier(fixed_challenges([3]))
        state = verifier.initialize(two_factor, 47)
        verifier.round(state, [7, 40, 81])
        assert state.randomness == ()
        assert state.running_eval == 47

    def test_rejects_inconsistent_sum(self, two_factor):
        verifier = Verifier(random.Random(0))
        state = verifier.initialize(two_factor, 48)
        with pytest.raises(RejectError) as excinfo:
            verifier.round(state, [7, 40, 81])
        assert excinfo.value.round_num == 1
        assert "47" in excinfo.value.reason

    def test_rejects_wrong_message_length(self, two_factor):
        verifier = Verifier(random.Random(0))
        state = verifier.initialize(two_factor, 47)
        with pytest.raises(RejectError, match="expected 3"):
            verifier.round(state, [7, 40])

    def test_no_round_after_last(self, two_factor, fixed_challenges):
        verifier = Verifier(fixed_challenges([3, 5]))
        state = verifier.initialize(two_factor, 47)
        _, state = verifier.round(state, [7, 40, 81])
        _, state = verifier.round(state, [60, 70, 80])
        with pytest.raises(ProtocolStateError):
            verifier.round(state, [110, 0, 0])

    def test_reject_error_message(self):
        assert str(RejectError("bad", 2)) == "round 2: bad"
        assert str(RejectError("bad")) == "bad"


class TestSanityCheck:
    def test_accepts_honest_transcript(self, two_factor, fixed_challenges):
        verifier = Verifier(fixed_challenges([3, 5]))
        state = verifier.initialize(two_factor, 47)
        _, state = verifier.round(state, [7, 40, 81])
        _, state = verifier.round(state, [60, 70, 80])
        assert state.running_eval == 110
        accept, randomness = verifier.sanity_check(state)
        assert accept
        assert randomness == [3, 5]

    def test_rejects_wrong_final_value(self, two_factor, fixed_challenges):
        verifier = Verifier(fixed_challenges([3, 5]))
        state = verifier.initialize(two_factor, 47)
        _, state = verifier.round(state, [7, 40, 81])
        # consistent with 130 but not the true restriction 10 * (6 + x1)
        _, state = verifier.round(state, [65, 65, 65])
        accept, randomness = verifier.sanity_check(state)
        assert not accept
        assert randomness == [3, 5]

    def test_requires_all_rounds(self, two_factor, fixed_challenges):
        verifier = Verifier(fixed_challenges([3]))
        state = verifier.initialize(two_factor, 47)
        _, state = verifier.round(state, [7, 40, 81])
        with pytest.raises(ProtocolStateError):
            verifier.sanity_check(state)

    def test_honest_prover_against_real_randomness(self, two_factor, rng):
        prover, verifier = Prover(), Verifier(rng)
        claimed, p_state = prover.claim_sum(two_factor)
        v_state = verifier.initialize(two_factor, claimed)
        for _ in range(two_factor.num_vars):
            message, p_state = prover.round_phase_1(p_state)
            r, v_state = verifier.round(v_state, message)
            p_state = prover.round_phase_2(p_state, r)
        accept, randomness = verifier.sanity_check(v_state)
        assert accept
        assert len(randomness) == 2
