"""
Field Arithmetic Layer
======================

All amounts, blindings and hash commitments live in the scalar field ZR of the
pairing group (prime order r). This module provides:

- Lifting integers into the field and back to canonical representatives
- Field addition, subtraction and equality
- Bit decomposition / recomposition
- The range gadget: x ∈ [0, 2^ℓ - 1]
- The comparison gadget: a ≤ b for in-range a, b

Security Notes:
---------------
A prime field has no ordering. "Negative" amounts are just large elements:
-100 is represented by r - 100. The conservation equation

    old_value = new_value + fee  (mod r)

is therefore satisfiable for any old_value and fee by choosing
new_value = old_value - fee + r. Every amount MUST pass in_range() before
the equation means anything.
"""

from dataclasses import dataclass
from typing import List, Union

from charm.toolbox.pairinggroup import PairingGroup, ZR, pc_element

from .groups import field_order

AMOUNT_WIDTH = 64

FieldLike = Union[int, pc_element]

# group.serialize() prefixes every element with its type id
_SCALAR_PREFIX = b"%d:" % ZR


def is_scalar(x, group: PairingGroup) -> bool:
    """True if x is an element of the scalar field ZR (not G1, G2 or GT)."""
    return isinstance(x, pc_element) and group.serialize(x).startswith(_SCALAR_PREFIX)


def to_field(x: FieldLike, group: PairingGroup) -> ZR:
    """
    Lift an integer (of any sign) or a ZR element into ZR.

    Integers are reduced modulo the group order first, so -1 maps to r - 1.
    """
    if isinstance(x, bool):
        raise TypeError("bool is not a field value")
    if isinstance(x, int):
        return group.init(ZR, x % field_order(group))
    if isinstance(x, pc_element):
        if not is_scalar(x, group):
            raise TypeError("group element is not in ZR")
        return x
    raise TypeError(f"cannot lift {type(x).__name__} into the field")


def field_to_int(x: FieldLike, group: PairingGroup) -> int:
    """Canonical representative of x in [0, r)."""
    return int(to_field(x, group)) % field_order(group)


def field_add(a: FieldLike, b: FieldLike, group: PairingGroup) -> ZR:
    return to_field(a, group) + to_field(b, group)


def field_sub(a: FieldLike, b: FieldLike, group: PairingGroup) -> ZR:
    return to_field(a, group) - to_field(b, group)


def field_eq(a: FieldLike, b: FieldLike, group: PairingGroup) -> bool:
    return field_to_int(a, group) == field_to_int(b, group)


def to_bits(x: int, width: int) -> List[int]:
    """
    Little-endian bit vector [x_1, ..., x_ℓ] with x = ∑ x_i 2^{i-1}.

    Only the low `width` bits are kept; higher bits are dropped, which is
    exactly what makes in_range() reject oversized values.

    Examples
    --------
    >>> to_bits(13, 4)
    [1, 0, 1, 1]
    """
    return [(x >> i) & 1 for i in range(width)]


def from_bits(bits: List[int], group: PairingGroup) -> ZR:
    """
    Recompose a bit vector in the field: x = ∑_{i=1}^{ℓ} x_i 2^{i-1}.

    Raises
    ------
    ValueError
        If any entry is not 0 or 1 (booleanity constraint).
    """
    x = group.init(ZR, 0)
    for i, bit in enumerate(bits):
        if bit not in (0, 1):
            raise ValueError(f"Bit {i} has value {bit}, must be 0 or 1")
        if bit:
            x += group.init(ZR, 1 << i)
    return x


def in_range(x: FieldLike, width: int, group: PairingGroup) -> bool:
    """
    Range gadget: does x, read as an unsigned integer, lie in [0, 2^width - 1]?

    Formula:
    --------
    Witness bits b_i = bit i of the canonical representative of x, then
    require  x == ∑_{i=1}^{width} b_i 2^{i-1}  (mod r).

    The equality can only hold when the representative fits in `width`
    bits. Wrapped negatives such as r - 100 have high bits set and fail.
    """
    bits = to_bits(field_to_int(x, group), width)
    return from_bits(bits, group) == to_field(x, group)


def leq(a: FieldLike, b: FieldLike, width: int, group: PairingGroup) -> bool:
    """
    Comparison gadget: a ≤ b for a, b already known to be in [0, 2^width - 1].

    b - a is computed in the field; it lands in range iff a ≤ b, otherwise it
    wraps to r - (a - b), far above 2^width.
    """
    return in_range(field_sub(b, a, group), width, group)


@dataclass(frozen=True)
class AmountPolicy:
    """
    Amount width and zero-amount policy applied by the constraint set.

    width
        Amounts must lie in [0, 2^width - 1].
    allow_zero
        When False, zero is rejected for note values (fees may still be 0).
    """

    width: int = AMOUNT_WIDTH
    allow_zero: bool = True

    def validate(self, group: PairingGroup) -> None:
        """
        Check the width is usable with this field.

        Two in-range amounts sum to less than 2^(width+1); that sum must stay
        below r or the conservation equation could wrap.
        """
        if self.width < 1:
            raise ValueError(f"amount width must be positive, got {self.width}")
        if self.width + 1 >= field_order(group).bit_length():
            raise ValueError(
                f"amount width {self.width} too large for a "
                f"{field_order(group).bit_length()}-bit field"
            )

    @property
    def max_amount(self) -> int:
        return (1 << self.width) - 1
