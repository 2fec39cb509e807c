"""
Proving Backend Interface
=========================

The succinct proof system (SNARK/STARK) is an external collaborator. This
module only fixes the seam it plugs into:

- ProvingBackend.prove(public, witness, constraint_set) -> proof bytes
- ProvingBackend.verify_proof(proof, public) -> bool

prove_transfer() evaluates the constraint set directly before calling the
backend. An unsatisfied constraint set has no satisfying assignment, so no
proof is requested and the failing constraint is returned instead.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from .constraints import PrivateWitness, PublicInputs, TransferConstraintSet, TransferInstance
from .failures import VerificationResult


class ProvingBackend(ABC):

    @abstractmethod
    def prove(self, public_inputs: PublicInputs, witness: PrivateWitness,
              constraint_set: TransferConstraintSet) -> bytes:
        """Produce an opaque proof that the witness satisfies constraint_set."""

    @abstractmethod
    def verify_proof(self, proof: bytes, public_inputs: PublicInputs) -> bool:
        """Check a proof against the public inputs only."""


def prove_transfer(backend: ProvingBackend, public_inputs: PublicInputs, witness: PrivateWitness,
                   constraint_set: TransferConstraintSet) -> Tuple[VerificationResult, Optional[bytes]]:
    """
    Generate a proof for a transfer if, and only if, it is valid.

    Returns
    -------
    (VerificationResult, bytes or None)
        The direct-mode result and the backend's proof, which is None
        whenever the result is a rejection. Backend exceptions propagate.
    """
    result = constraint_set.evaluate(TransferInstance(public_inputs, witness))
    if not result.ok:
        return result, None
    return result, backend.prove(public_inputs, witness, constraint_set)
