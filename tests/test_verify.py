"""
End-to-End Tests for the Verification Entry Point
=================================================

Scenarios:
----------
1. Honest transfer 100 → 90 + fee 10 succeeds
2. Same with fee 11 → ConservationViolated
3. Public new commitment made for 80 while the witness holds 90 → CommitmentMismatch{new}
4. Zero transfer 0 → 0 + 0 succeeds (zero allowed policy)
5. fee > old_value → ValueOutOfRange
6. Batch verification returns results in input order
"""

import random

import pytest

from shielded_transfer import FailureReason, Verifier, verify
from shielded_transfer.commit import HashCommitment, PedersenCommitment
from shielded_transfer.config import Config
from shielded_transfer.field import AmountPolicy


class TestTransferScenarios:

    def test_1_honest_transfer(self, scheme, transfer_factory):
        instance = transfer_factory(100, 90, 10)
        result = verify(instance.public, instance.witness, scheme)
        assert result.ok
        assert bool(result)
        assert result.failure is None

    def test_2_fee_too_large_for_conservation(self, scheme, transfer_factory):
        instance = transfer_factory(100, 90, 11)
        result = verify(instance.public, instance.witness, scheme)
        assert not result
        assert result.reason == FailureReason.CONSERVATION_VIOLATED

    def test_3_new_commitment_for_other_value(self, scheme, transfer_factory):
        instance = transfer_factory(100, 90, 10, committed_new=80)
        result = verify(instance.public, instance.witness, scheme)
        assert result.reason == FailureReason.COMMITMENT_MISMATCH
        assert result.which == 'new'
        assert result.failure.tag == 'commitment_mismatch:new'

    def test_4_zero_transfer(self, scheme, transfer_factory):
        instance = transfer_factory(0, 0, 0)
        assert verify(instance.public, instance.witness, scheme).ok

    def test_4_zero_transfer_strict_policy(self, scheme, transfer_factory):
        instance = transfer_factory(0, 0, 0)
        result = verify(instance.public, instance.witness, scheme, AmountPolicy(allow_zero=False))
        assert result.reason == FailureReason.VALUE_OUT_OF_RANGE

    def test_5_fee_exceeds_old_value(self, scheme, transfer_factory):
        instance = transfer_factory(100, 0, 101)
        result = verify(instance.public, instance.witness, scheme)
        assert result.reason == FailureReason.VALUE_OUT_OF_RANGE
        assert result.which == 'fee'

    def test_drain_to_zero_with_fee(self, scheme, transfer_factory):
        instance = transfer_factory(100, 0, 100)
        assert verify(instance.public, instance.witness, scheme).ok

    def test_maximum_amount(self, scheme, transfer_factory):
        top = 2 ** 64 - 1
        instance = transfer_factory(top, top - 1, 1)
        assert verify(instance.public, instance.witness, scheme).ok


def test_random_valid_transfers_succeed(scheme, transfer_factory):
    rng = random.Random(1234)
    for _ in range(25):
        old_value = rng.randrange(0, 2 ** 64)
        fee = rng.randrange(0, old_value + 1)
        instance = transfer_factory(old_value, old_value - fee, fee)
        assert verify(instance.public, instance.witness, scheme).ok


def test_random_unbalanced_transfers_fail(scheme, transfer_factory):
    rng = random.Random(99)
    for _ in range(25):
        old_value = rng.randrange(1, 2 ** 63)
        fee = rng.randrange(0, old_value)
        delta = rng.choice([-1, 1]) * rng.randrange(1, 1000)
        new_value = old_value - fee + delta
        instance = transfer_factory(old_value, new_value, fee)
        result = verify(instance.public, instance.witness, scheme)
        assert not result.ok
        assert result.reason in (FailureReason.CONSERVATION_VIOLATED, FailureReason.VALUE_OUT_OF_RANGE)
        if 0 <= new_value < 2 ** 64:
            assert result.reason == FailureReason.CONSERVATION_VIOLATED


def test_wraparound_minting_rejected(scheme, transfer_factory, order):
    """new_value = old_value - fee + r balances mod r but mints value."""
    old_value, fee = 100, 1000
    instance = transfer_factory(old_value, old_value - fee + order, fee)
    result = verify(instance.public, instance.witness, scheme)
    assert not result.ok
    assert result.reason == FailureReason.VALUE_OUT_OF_RANGE


def test_mismatched_scheme_is_rejected(group, transfer_factory, scheme):
    """Commitments made under one scheme do not open under the other."""
    other = HashCommitment(group) if isinstance(scheme, PedersenCommitment) else PedersenCommitment(group)
    instance = transfer_factory(100, 90, 10)
    result = verify(instance.public, instance.witness, other)
    assert result.reason == FailureReason.COMMITMENT_MISMATCH
    assert result.which == 'old'


class TestVerifier:

    def test_verifier_is_reusable(self, scheme, transfer_factory):
        verifier = Verifier(scheme)
        good = transfer_factory(100, 90, 10)
        bad = transfer_factory(100, 90, 11)
        assert verifier.verify(good.public, good.witness).ok
        assert not verifier.verify(bad.public, bad.witness).ok
        assert verifier.verify(good.public, good.witness).ok

    def test_default_policy(self, scheme):
        verifier = Verifier(scheme)
        assert verifier.policy == AmountPolicy()
        assert verifier.scheme is scheme

    def test_verify_batch_preserves_order(self, scheme, transfer_factory):
        instances = [
            transfer_factory(100, 90, 10),
            transfer_factory(100, 90, 11),
            transfer_factory(50, 50, 0),
            transfer_factory(100, 90, 10, committed_old=99),
            transfer_factory(10, 0, 11),
        ]
        results = Verifier(scheme).verify_batch(instances, max_workers=3)
        assert [r.ok for r in results] == [True, False, True, False, False]
        assert results[1].reason == FailureReason.CONSERVATION_VIOLATED
        assert results[3].which == 'old'
        assert results[4].reason == FailureReason.VALUE_OUT_OF_RANGE

    def test_verify_batch_empty(self, scheme):
        assert Verifier(scheme).verify_batch([]) == []

    def test_verify_batch_rejects_bad_worker_count(self, scheme, transfer_factory):
        with pytest.raises(ValueError):
            Verifier(scheme).verify_batch([transfer_factory(1, 1, 0)], max_workers=0)

    def test_from_config(self):
        config = Config()
        config.pairing_curve = 'BN254'
        config.commitment_scheme = 'hash'
        config.amount_width = 32
        config.allow_zero_amounts = False
        config.batch_workers = 2
        verifier = Verifier.from_config(config)
        assert isinstance(verifier.scheme, HashCommitment)
        assert verifier.max_workers == 2
        assert verifier.policy == AmountPolicy(width=32, allow_zero=False)

    def test_from_config_unknown_scheme(self):
        config = Config()
        config.commitment_scheme = 'nope'
        with pytest.raises(ValueError):
            Verifier.from_config(config)
