"""
Transfer Constraint Set
=======================

A transfer consumes one old note and produces one new note plus a public fee.
It is valid iff all of the following hold:

    (1) commit(old_note) = old_commitment
    (2) commit(new_note) = new_commitment
    (3) old_value ∈ [0, 2^ℓ - 1]
    (4) new_value ∈ [0, 2^ℓ - 1]
    (5) fee       ∈ [0, 2^ℓ - 1]
    (6) fee ≤ old_value
    (7) old_value = new_value + fee   (mod r)

The checks are independent conjuncts. They are evaluated in the order above
so a witness that satisfies (7) only through modular wraparound is reported
as out of range rather than as a conservation problem.

Each constraint is a named predicate returning None when it holds and a
Failure otherwise; constraints() exposes them in order so a circuit compiler
can enumerate the same set.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .failures import (
    Failure,
    VerificationResult,
    commitment_mismatch,
    conservation_violated,
    value_out_of_range,
)
from .field import AmountPolicy, FieldLike, field_add, field_eq, field_to_int, in_range, leq
from .note import Note


@dataclass(frozen=True)
class PublicInputs:
    old_commitment: object
    new_commitment: object
    fee: FieldLike


@dataclass(frozen=True)
class PrivateWitness:
    old_note: Note
    new_note: Note


@dataclass(frozen=True)
class TransferInstance:
    public: PublicInputs
    witness: PrivateWitness


Constraint = Callable[[TransferInstance], Optional[Failure]]


class TransferConstraintSet:
    """
    The conjunction of checks defining one valid transfer step.

    Stateless apart from its configuration (scheme and policy); evaluate()
    may be called concurrently from several threads.
    """

    def __init__(self, scheme, policy: AmountPolicy = None):
        self.scheme = scheme
        self.group = scheme.group
        self.policy = policy or AmountPolicy()
        self.policy.validate(self.group)

    def constraints(self) -> List[Tuple[str, Constraint]]:
        return [
            ('old_commitment', self.check_old_commitment),
            ('new_commitment', self.check_new_commitment),
            ('old_value_range', self.check_old_value_range),
            ('new_value_range', self.check_new_value_range),
            ('fee_range', self.check_fee_range),
            ('fee_bound', self.check_fee_bound),
            ('conservation', self.check_conservation),
        ]

    def evaluate(self, instance: TransferInstance) -> VerificationResult:
        """Evaluate constraints in order and report the first failure."""
        passed = []
        for name, check in self.constraints():
            failure = check(instance)
            if failure is not None:
                return VerificationResult.rejected(failure, tuple(passed))
            passed.append(name)
        return VerificationResult.success(tuple(passed))

    def evaluate_all(self, instance: TransferInstance) -> List[Tuple[str, Optional[Failure]]]:
        """
        Outcome of every constraint, without stopping at the first failure.

        conservation is the bare field equation; it implies value conservation
        only when the range checks hold as well.
        """
        return [(name, check(instance)) for name, check in self.constraints()]

    # (1), (2)

    def check_old_commitment(self, instance: TransferInstance) -> Optional[Failure]:
        note = instance.witness.old_note
        if not self.scheme.equal(note.commitment(self.scheme), instance.public.old_commitment):
            return commitment_mismatch('old')
        return None

    def check_new_commitment(self, instance: TransferInstance) -> Optional[Failure]:
        note = instance.witness.new_note
        if not self.scheme.equal(note.commitment(self.scheme), instance.public.new_commitment):
            return commitment_mismatch('new')
        return None

    # (3), (4), (5)

    def check_old_value_range(self, instance: TransferInstance) -> Optional[Failure]:
        return self._check_note_value('old_value', instance.witness.old_note.value)

    def check_new_value_range(self, instance: TransferInstance) -> Optional[Failure]:
        return self._check_note_value('new_value', instance.witness.new_note.value)

    def check_fee_range(self, instance: TransferInstance) -> Optional[Failure]:
        if not in_range(instance.public.fee, self.policy.width, self.group):
            return value_out_of_range('fee', f"fee not in [0, 2^{self.policy.width} - 1]")
        return None

    def _check_note_value(self, which: str, value: FieldLike) -> Optional[Failure]:
        width = self.policy.width
        if not in_range(value, width, self.group):
            return value_out_of_range(which, f"{which} not in [0, 2^{width} - 1]")
        if not self.policy.allow_zero and field_to_int(value, self.group) == 0:
            return value_out_of_range(which, f"{which} must be strictly positive")
        return None

    # (6)

    def check_fee_bound(self, instance: TransferInstance) -> Optional[Failure]:
        old_value = instance.witness.old_note.value
        width = self.policy.width
        # leq is only sound for in-range operands
        if not (in_range(instance.public.fee, width, self.group) and in_range(old_value, width, self.group)):
            return value_out_of_range('fee', "fee bound undefined for out-of-range operands")
        if not leq(instance.public.fee, old_value, width, self.group):
            return value_out_of_range('fee', "fee exceeds old_value")
        return None

    # (7)

    def check_conservation(self, instance: TransferInstance) -> Optional[Failure]:
        old_value = instance.witness.old_note.value
        new_value = instance.witness.new_note.value
        rhs = field_add(new_value, instance.public.fee, self.group)
        if not field_eq(old_value, rhs, self.group):
            return conservation_violated()
        return None
