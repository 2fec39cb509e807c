"""Shared fixtures: pairing group, commitment schemes, honest transfers."""

import pytest

from shielded_transfer import setup
from shielded_transfer.commit import HashCommitment, PedersenCommitment
from shielded_transfer.constraints import PrivateWitness, PublicInputs, TransferInstance
from shielded_transfer.note import Note


@pytest.fixture(scope="session")
def pairing_params():
    """Initialize pairing group."""
    return setup('BN254')


@pytest.fixture(scope="session")
def group(pairing_params):
    return pairing_params['group']


@pytest.fixture(scope="session")
def order(pairing_params):
    return pairing_params['order']


@pytest.fixture(scope="session")
def pedersen(group):
    return PedersenCommitment(group)


@pytest.fixture(scope="session")
def hash_scheme(group):
    return HashCommitment(group)


@pytest.fixture(scope="session", params=['pedersen', 'hash'])
def scheme(request, pedersen, hash_scheme):
    """Every scheme-independent test runs against both schemes."""
    return pedersen if request.param == 'pedersen' else hash_scheme


def make_transfer(scheme, old_value, new_value, fee, committed_old=None, committed_new=None):
    """
    Build a transfer instance with fresh blindings.

    committed_old / committed_new override the value the public commitment
    is computed from, to simulate a witness that does not match the ledger.
    """
    old_note = Note.random(old_value, scheme)
    new_note = Note.random(new_value, scheme)
    old_commitment = old_note.commitment(scheme)
    new_commitment = new_note.commitment(scheme)
    if committed_old is not None:
        old_commitment = scheme.commit(committed_old, old_note.blinding)
    if committed_new is not None:
        new_commitment = scheme.commit(committed_new, new_note.blinding)
    return TransferInstance(
        public=PublicInputs(old_commitment, new_commitment, fee),
        witness=PrivateWitness(old_note, new_note),
    )


@pytest.fixture
def transfer_factory(scheme):
    def factory(old_value, new_value, fee, **kwargs):
        return make_transfer(scheme, old_value, new_value, fee, **kwargs)
    return factory
