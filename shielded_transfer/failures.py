"""
Failure Taxonomy
================

Every way a transfer can be rejected is enumerable, so rejections are plain
result values rather than exceptions:

- CommitmentMismatch{which: old|new}
- ValueOutOfRange{which: old_value|new_value|fee}
- ConservationViolated
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class FailureReason(Enum):
    COMMITMENT_MISMATCH = "commitment_mismatch"
    VALUE_OUT_OF_RANGE = "value_out_of_range"
    CONSERVATION_VIOLATED = "conservation_violated"


@dataclass(frozen=True)
class Failure:
    """The first violated constraint of a rejected transfer."""

    reason: FailureReason
    which: Optional[str] = None
    detail: str = ""

    @property
    def tag(self) -> str:
        if self.which is None:
            return self.reason.value
        return f"{self.reason.value}:{self.which}"

    def __str__(self):
        return f"{self.tag} ({self.detail})" if self.detail else self.tag


def commitment_mismatch(which: str) -> Failure:
    return Failure(
        FailureReason.COMMITMENT_MISMATCH,
        which,
        f"{which} note does not open the {which} commitment",
    )


def value_out_of_range(which: str, detail: str) -> Failure:
    return Failure(FailureReason.VALUE_OUT_OF_RANGE, which, detail)


def conservation_violated() -> Failure:
    return Failure(
        FailureReason.CONSERVATION_VIOLATED,
        None,
        "old_value != new_value + fee",
    )


@dataclass(frozen=True)
class VerificationResult:
    """
    Outcome of verifying one transfer.

    ok
        True iff every constraint holds.
    failure
        The first failing constraint, None on success.
    checks_passed
        Names of the constraints that held before evaluation stopped.
    """

    ok: bool
    failure: Optional[Failure] = None
    checks_passed: Tuple[str, ...] = ()

    def __bool__(self):
        return self.ok

    @property
    def reason(self) -> Optional[FailureReason]:
        return self.failure.reason if self.failure else None

    @property
    def which(self) -> Optional[str]:
        return self.failure.which if self.failure else None

    @classmethod
    def success(cls, checks_passed: Tuple[str, ...]) -> "VerificationResult":
        return cls(ok=True, failure=None, checks_passed=checks_passed)

    @classmethod
    def rejected(cls, failure: Failure, checks_passed: Tuple[str, ...]) -> "VerificationResult":
        return cls(ok=False, failure=failure, checks_passed=checks_passed)
