"""Tests for the proving backend seam, using an in-memory stand-in backend."""

import hashlib

import pytest

from shielded_transfer.backend import ProvingBackend, prove_transfer
from shielded_transfer.constraints import TransferConstraintSet
from shielded_transfer.failures import FailureReason
from shielded_transfer.serialization import serialize_public_inputs


class RecordingBackend(ProvingBackend):
    """Issues a digest of the public inputs as its "proof"."""

    def __init__(self, group):
        self.group = group
        self.calls = 0

    def _digest(self, public_inputs):
        encoded = repr(sorted(serialize_public_inputs(public_inputs, self.group).items()))
        return hashlib.sha256(encoded.encode('utf-8')).digest()

    def prove(self, public_inputs, witness, constraint_set):
        self.calls += 1
        return self._digest(public_inputs)

    def verify_proof(self, proof, public_inputs):
        return proof == self._digest(public_inputs)


class ExplodingBackend(RecordingBackend):

    def prove(self, public_inputs, witness, constraint_set):
        raise RuntimeError("prover crashed")


def test_valid_transfer_is_proved(scheme, transfer_factory):
    backend = RecordingBackend(scheme.group)
    instance = transfer_factory(100, 90, 10)
    result, proof = prove_transfer(backend, instance.public, instance.witness, TransferConstraintSet(scheme))
    assert result.ok
    assert backend.calls == 1
    assert backend.verify_proof(proof, instance.public)


def test_invalid_transfer_yields_no_proof(scheme, transfer_factory):
    backend = RecordingBackend(scheme.group)
    instance = transfer_factory(100, 90, 11)
    result, proof = prove_transfer(backend, instance.public, instance.witness, TransferConstraintSet(scheme))
    assert proof is None
    assert result.reason == FailureReason.CONSERVATION_VIOLATED
    assert backend.calls == 0


def test_backend_errors_propagate(scheme, transfer_factory):
    instance = transfer_factory(100, 90, 10)
    with pytest.raises(RuntimeError, match="prover crashed"):
        prove_transfer(ExplodingBackend(scheme.group), instance.public, instance.witness,
                       TransferConstraintSet(scheme))


def test_backend_is_abstract():
    with pytest.raises(TypeError):
        ProvingBackend()
