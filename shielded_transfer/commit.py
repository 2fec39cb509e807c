"""
Commitment Schemes
==================

This module implements the commitment schemes a note can be bound with:
- PedersenCommitment: two-generator commitment C = g^v · h^r in G1
- HashCommitment: C = H("STCOMMIT" || v || r) hashed into ZR

Both satisfy the scheme contract:
- commit(value, blinding) is pure and deterministic
- binding: no two distinct (value, blinding) pairs share a commitment
  (discrete log / collision resistance)
- hiding: a fresh random blinding makes commitments to equal values unlinkable

The core never depends on which scheme is in use; schemes are selected by
name through get_scheme(), normally from configuration.
"""

import hashlib

from charm.toolbox.pairinggroup import PairingGroup, ZR, G1
from charm.core.engine.util import objectToBytes

from .field import FieldLike, field_to_int, to_field
from .groups import derive_generator, field_order

PEDERSEN_G_LABEL = "shielded_transfer/pedersen/G"
PEDERSEN_H_LABEL = "shielded_transfer/pedersen/H"
HASH_DOMAIN = b"STCOMMIT"


class CommitmentScheme:
    """
    Capability interface: commit(value, blinding) -> Commitment.

    Subclasses set `name` and implement commit().
    """

    name = None

    def __init__(self, group: PairingGroup):
        self.group = group

    def commit(self, value: FieldLike, blinding: FieldLike):
        raise NotImplementedError()

    def random_blinding(self) -> ZR:
        """Fresh single-use blinding factor."""
        return self.group.random(ZR)

    def equal(self, a, b) -> bool:
        """Compare commitments by canonical encoding, so mixed types compare unequal."""
        return objectToBytes(a, self.group) == objectToBytes(b, self.group)

    def __repr__(self):
        return f"{type(self).__name__}()"


class PedersenCommitment(CommitmentScheme):
    """
    Pedersen commitment in G1.

    Formula:
    --------
    C := g^{v} · h^{r} ∈ G

    where g, h are hashed onto the curve from fixed labels, so log_g(h) is
    unknown. Binding under discrete log, perfectly hiding.
    """

    name = "pedersen"

    def __init__(self, group: PairingGroup):
        super().__init__(group)
        self.g = derive_generator(group, PEDERSEN_G_LABEL)
        self.h = derive_generator(group, PEDERSEN_H_LABEL)

    def commit(self, value: FieldLike, blinding: FieldLike) -> G1:
        v = to_field(value, self.group)
        r = to_field(blinding, self.group)
        return (self.g ** v) * (self.h ** r)


class HashCommitment(CommitmentScheme):
    """
    Hash commitment into ZR.

    Formula:
    --------
    C := H_ZR(SHA-256("STCOMMIT" || v || r))

    with v and r encoded as fixed-width big-endian canonical representatives,
    so the encoding is injective. The commitment is itself a field element.
    """

    name = "hash"

    def __init__(self, group: PairingGroup):
        super().__init__(group)
        self.element_size = (field_order(group).bit_length() + 7) // 8

    def commit(self, value: FieldLike, blinding: FieldLike) -> ZR:
        v = field_to_int(value, self.group).to_bytes(self.element_size, 'big')
        r = field_to_int(blinding, self.group).to_bytes(self.element_size, 'big')
        digest = hashlib.sha256(HASH_DOMAIN + v + r).digest()
        return self.group.hash(digest, ZR)


_SCHEMES = {
    PedersenCommitment.name: PedersenCommitment,
    HashCommitment.name: HashCommitment,
}


def register_scheme(name: str, cls) -> None:
    """Make a CommitmentScheme subclass selectable by name."""
    if not (isinstance(cls, type) and issubclass(cls, CommitmentScheme)):
        raise TypeError(f"{cls!r} is not a CommitmentScheme subclass")
    _SCHEMES[name] = cls


def available_schemes():
    return sorted(_SCHEMES)


def get_scheme(name: str, group: PairingGroup) -> CommitmentScheme:
    """
    Instantiate the commitment scheme registered under `name`.

    Raises
    ------
    ValueError
        If no scheme is registered under that name.
    """
    try:
        cls = _SCHEMES[name]
    except KeyError:
        raise ValueError(
            f"unknown commitment scheme {name!r}, expected one of {available_schemes()}"
        ) from None
    return cls(group)
