"""
Group Initialization and Setup
===============================

This module initializes the pairing group whose scalar field ZR is the prime
field used for every amount, blinding and hash commitment in the transfer
core, and whose source group G1 carries the Pedersen commitments.

According to charm-crypto documentation (https://jhuisi.github.io/charm/tutorial.html):
- PairingGroup('BN254') has a 254-bit prime-order scalar field (the usual SNARK field)
- Alternative curves: 'MNT224', 'SS512'
- group.order() returns the prime order r of ZR
- group.hash(data, G1) hashes bytes onto the curve
"""

import logging

from charm.toolbox.pairinggroup import PairingGroup, ZR, G1

logger = logging.getLogger(__name__)

FALLBACK_CURVES = ('BN254', 'MNT224', 'SS512')


def setup(group_name: str = 'BN254') -> dict:
    """
    Initialize the pairing group for the transfer core.

    Parameters
    ----------
    group_name : str, optional
        The pairing curve identifier. Default is 'BN254'.
        If the curve is not available the remaining entries of
        FALLBACK_CURVES are tried in order.

    Returns
    -------
    dict
        A dictionary containing:
        - 'group': The PairingGroup object
        - 'group_name': The name of the curve actually used
        - 'order': The prime order r of the scalar field ZR
        - 'ZR': The ZR (scalar field) type constant
        - 'G1': The G1 group type constant

    Examples
    --------
    >>> params = setup('BN254')
    >>> group = params['group']
    >>> blinding = group.random(ZR)
    """
    candidates = [group_name] + [c for c in FALLBACK_CURVES if c != group_name]
    last_error = None
    for name in candidates:
        try:
            group = PairingGroup(name)
        except Exception as e:
            logger.warning("%s not available (%s), trying next curve", name, e)
            last_error = e
            continue
        if name != group_name:
            logger.warning("falling back from %s to %s", group_name, name)
        return {
            'group': group,
            'group_name': name,
            'order': field_order(group),
            'ZR': ZR,
            'G1': G1,
        }
    raise ValueError(f"no pairing curve available (last error: {last_error})")


def field_order(group: PairingGroup) -> int:
    """Prime order r of the scalar field ZR."""
    return int(group.order())


def derive_generator(group: PairingGroup, label: str) -> G1:
    """
    Derive a G1 generator by hashing a domain-separated label onto the curve.

    Parameters
    ----------
    group : PairingGroup
        The initialized pairing group
    label : str
        Domain-separation label, e.g. "shielded_transfer/pedersen/G"

    Returns
    -------
    G1
        A point whose discrete logarithm with respect to any other derived
        generator is unknown to everyone.

    Notes
    -----
    The points are deterministic, so every process that uses the same curve
    and label agrees on them without exchanging a setup. Random generators
    (group.random(G1)) would make commitments incomparable across processes.
    """
    return group.hash(label.encode('utf-8'), G1)
