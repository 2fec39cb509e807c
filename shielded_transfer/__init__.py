"""
Shielded Transfer Verification
==============================

Soundness core for a single confidential value transfer: an old note and a
new note, each hidden behind a public commitment, and a public fee. A
transfer is valid iff both notes open their commitments, every amount is a
genuine ℓ-bit unsigned integer, the fee does not exceed the input, and

    old_value = new_value + fee

holds in the scalar field of the pairing group (charm-crypto).

Modules:
--------
- groups: Pairing group setup and deterministic generators
- field: Field arithmetic, bit-decomposition range gadget, amount policy
- commit: Pluggable commitment schemes (Pedersen, hash)
- note: Note value object
- constraints: The transfer constraint set
- verify: Direct-mode verification entry point and batch verification
- backend: Seam for an external proving backend
- serialization: JSON codec for transfer documents
- config: Environment-driven configuration

Usage:
------
    from shielded_transfer import setup, get_scheme, Note, verify
    from shielded_transfer import PublicInputs, PrivateWitness

    group = setup('BN254')['group']
    scheme = get_scheme('pedersen', group)

    old_note = Note.random(100, scheme)
    new_note = Note.random(90, scheme)
    public = PublicInputs(old_note.commitment(scheme), new_note.commitment(scheme), fee=10)

    result = verify(public, PrivateWitness(old_note, new_note), scheme)
    assert result.ok
"""

__version__ = "0.1.0"

from .groups import setup
from .field import AmountPolicy, AMOUNT_WIDTH
from .commit import CommitmentScheme, PedersenCommitment, HashCommitment, get_scheme, register_scheme
from .note import Note
from .constraints import PublicInputs, PrivateWitness, TransferInstance, TransferConstraintSet
from .failures import FailureReason, Failure, VerificationResult
from .verify import Verifier, verify

__all__ = [
    'setup',
    'AmountPolicy',
    'AMOUNT_WIDTH',
    'CommitmentScheme',
    'PedersenCommitment',
    'HashCommitment',
    'get_scheme',
    'register_scheme',
    'Note',
    'PublicInputs',
    'PrivateWitness',
    'TransferInstance',
    'TransferConstraintSet',
    'FailureReason',
    'Failure',
    'VerificationResult',
    'Verifier',
    'verify',
]
