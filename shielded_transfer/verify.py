"""
Verification Entry Point
========================

verify(public_inputs, witness) evaluates the transfer constraint set directly
and returns a VerificationResult naming the first violated constraint.

In a circuit realization the same constraint set is handed to an external
proving backend (see backend.py); here it is evaluated off-circuit, which is
what tests and reference checks use.

Each call is pure: no I/O, no shared mutable state. verify_batch() exploits
that by fanning independent instances out over a thread pool.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List

from .commit import CommitmentScheme, get_scheme
from .constraints import PrivateWitness, PublicInputs, TransferConstraintSet, TransferInstance
from .failures import VerificationResult
from .field import AmountPolicy
from .groups import setup

logger = logging.getLogger(__name__)


class Verifier:
    """
    Direct-mode verifier for single transfer steps.

    The verifier holds only configuration (commitment scheme and amount
    policy) and never mutates it, so one instance can be shared freely.
    """

    def __init__(self, scheme: CommitmentScheme, policy: AmountPolicy = None, max_workers: int = 4):
        self.constraint_set = TransferConstraintSet(scheme, policy)
        self.max_workers = max_workers

    @classmethod
    def from_config(cls, config) -> "Verifier":
        """
        Build group, scheme and policy from a Config.

        Parameters
        ----------
        config : Config
            Usually shielded_transfer.config.config
        """
        params = setup(config.pairing_curve)
        scheme = get_scheme(config.commitment_scheme, params['group'])
        return cls(scheme, config.amount_policy(), max_workers=config.batch_workers)

    @property
    def scheme(self) -> CommitmentScheme:
        return self.constraint_set.scheme

    @property
    def policy(self) -> AmountPolicy:
        return self.constraint_set.policy

    def verify(self, public_inputs: PublicInputs, witness: PrivateWitness) -> VerificationResult:
        return self.verify_instance(TransferInstance(public_inputs, witness))

    def verify_instance(self, instance: TransferInstance) -> VerificationResult:
        result = self.constraint_set.evaluate(instance)
        if not result.ok:
            logger.debug("transfer rejected: %s", result.failure)
        return result

    def verify_batch(self, instances: Iterable[TransferInstance], max_workers: int = None) -> List[VerificationResult]:
        """
        Verify independent transfers concurrently.

        max_workers defaults to the pool size the verifier was built with.

        Returns
        -------
        List[VerificationResult]
            One result per instance, in input order.
        """
        instances = list(instances)
        if max_workers is None:
            max_workers = self.max_workers
        if max_workers < 1:
            raise ValueError(f"max_workers must be positive, got {max_workers}")
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            results = list(pool.map(self.verify_instance, instances))
        rejected = sum(1 for r in results if not r.ok)
        logger.info("verified batch of %d transfers, %d rejected", len(results), rejected)
        return results


def verify(public_inputs: PublicInputs, witness: PrivateWitness,
           scheme: CommitmentScheme, policy: AmountPolicy = None) -> VerificationResult:
    """
    Verify one transfer step.

    Parameters
    ----------
    public_inputs : PublicInputs
        old_commitment, new_commitment and fee
    witness : PrivateWitness
        old_note and new_note
    scheme : CommitmentScheme
        The scheme the public commitments were produced with
    policy : AmountPolicy, optional
        Amount width and zero policy; defaults to 64-bit, zero allowed

    Returns
    -------
    VerificationResult
        ok=True, or ok=False with the first violated constraint.
    """
    return Verifier(scheme, policy).verify(public_inputs, witness)
