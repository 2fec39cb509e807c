"""Note model: a hidden balance (value, blinding) and its commitment."""

from dataclasses import dataclass

from .field import FieldLike


@dataclass(frozen=True)
class Note:
    """
    A private (value, blinding) pair.

    Notes are not validated here: whether a value is an acceptable amount
    depends on how the note is used, which is the constraint set's business.
    """

    value: FieldLike
    blinding: FieldLike

    def commitment(self, scheme):
        return scheme.commit(self.value, self.blinding)

    @classmethod
    def random(cls, value: FieldLike, scheme) -> "Note":
        """Note for `value` with a fresh blinding drawn from the scheme's group."""
        return cls(value=value, blinding=scheme.random_blinding())
