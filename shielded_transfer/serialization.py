"""
JSON serialization for transfer documents.
Group elements are base64 of charm's objectToBytes; amounts are plain ints.
"""

import base64
from typing import Tuple

from charm.toolbox.pairinggroup import PairingGroup, ZR, pc_element
from charm.core.engine.util import objectToBytes, bytesToObject

from .commit import CommitmentScheme, get_scheme
from .constraints import PrivateWitness, PublicInputs, TransferInstance
from .failures import VerificationResult
from .field import field_to_int, is_scalar, to_field
from .note import Note


def serialize_element(elem, group: PairingGroup) -> str:
    """Serialize a ZR or G1 element to a base64 string."""
    return base64.b64encode(objectToBytes(elem, group)).decode('utf-8')


def deserialize_element(data: str, group: PairingGroup):
    """Deserialize a ZR or G1 element from a base64 string."""
    if not isinstance(data, str):
        raise ValueError(f"expected base64 string, got {type(data).__name__}")
    try:
        elem = bytesToObject(base64.b64decode(data), group)
    except Exception as e:
        raise ValueError(f"malformed group element: {e}") from e
    if not isinstance(elem, pc_element):
        raise ValueError(f"expected a group element, got {type(elem).__name__}")
    return elem


def deserialize_zr(data: str, group: PairingGroup) -> ZR:
    """Deserialize a ZR element (a blinding) from a base64 string."""
    elem = deserialize_element(data, group)
    if not is_scalar(elem, group):
        raise ValueError("expected a ZR element, got a curve point")
    return elem


def serialize_amount(value, group: PairingGroup) -> int:
    """Amounts travel as their canonical field representative."""
    return field_to_int(value, group)


def deserialize_amount(data, group: PairingGroup):
    if isinstance(data, bool) or not isinstance(data, int):
        raise ValueError(f"amount must be an integer, got {data!r}")
    return to_field(data, group)


def serialize_note(note: Note, group: PairingGroup) -> dict:
    return {
        'value': serialize_amount(note.value, group),
        'blinding': serialize_element(to_field(note.blinding, group), group),
    }


def deserialize_note(data: dict, group: PairingGroup) -> Note:
    return Note(
        value=deserialize_amount(_field(data, 'value'), group),
        blinding=deserialize_zr(_field(data, 'blinding'), group),
    )


def serialize_public_inputs(public: PublicInputs, group: PairingGroup) -> dict:
    return {
        'old_commitment': serialize_element(public.old_commitment, group),
        'new_commitment': serialize_element(public.new_commitment, group),
        'fee': serialize_amount(public.fee, group),
    }


def deserialize_public_inputs(data: dict, group: PairingGroup) -> PublicInputs:
    return PublicInputs(
        old_commitment=deserialize_element(_field(data, 'old_commitment'), group),
        new_commitment=deserialize_element(_field(data, 'new_commitment'), group),
        fee=deserialize_amount(_field(data, 'fee'), group),
    )


def serialize_witness(witness: PrivateWitness, group: PairingGroup) -> dict:
    return {
        'old_note': serialize_note(witness.old_note, group),
        'new_note': serialize_note(witness.new_note, group),
    }


def deserialize_witness(data: dict, group: PairingGroup) -> PrivateWitness:
    return PrivateWitness(
        old_note=deserialize_note(_field(data, 'old_note'), group),
        new_note=deserialize_note(_field(data, 'new_note'), group),
    )


def serialize_instance(instance: TransferInstance, scheme: CommitmentScheme, curve: str) -> dict:
    """
    Serialize a transfer instance together with the curve and scheme it was
    committed under, so it can be reloaded without extra context.
    """
    group = scheme.group
    return {
        'curve': curve,
        'scheme': scheme.name,
        'public': serialize_public_inputs(instance.public, group),
        'witness': serialize_witness(instance.witness, group),
    }


def deserialize_instance(data: dict, group: PairingGroup) -> Tuple[CommitmentScheme, TransferInstance]:
    """
    Rebuild (scheme, instance) from a document produced by serialize_instance.

    The caller supplies the group for data['curve'].
    """
    scheme = get_scheme(_field(data, 'scheme'), group)
    instance = TransferInstance(
        public=deserialize_public_inputs(_field(data, 'public'), group),
        witness=deserialize_witness(_field(data, 'witness'), group),
    )
    return scheme, instance


def serialize_result(result: VerificationResult) -> dict:
    out = {
        'ok': result.ok,
        'checks_passed': list(result.checks_passed),
    }
    if result.failure is not None:
        out['failure'] = {
            'reason': result.failure.reason.value,
            'which': result.failure.which,
            'detail': result.failure.detail,
        }
    return out


def _field(data: dict, key: str):
    if not isinstance(data, dict):
        raise ValueError(f"expected an object containing {key!r}")
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"missing field {key!r}") from None
