"""
Command line interface.

    shielded-transfer commit --value 100
    shielded-transfer transfer --old-value 100 --fee 10 -o transfer.json
    shielded-transfer verify transfer.json
"""

import argparse
import json
import logging
import sys

from .commit import available_schemes, get_scheme
from .config import config
from .constraints import PrivateWitness, PublicInputs, TransferInstance
from .field import AmountPolicy
from .groups import setup
from .note import Note
from .serialization import (
    deserialize_instance,
    deserialize_zr,
    serialize_element,
    serialize_instance,
    serialize_result,
)
from .verify import Verifier

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='shielded-transfer',
                                     description="Confidential transfer commitment and verification tool")
    parser.add_argument('--curve', default=config.pairing_curve, help="pairing curve (default: %(default)s)")
    parser.add_argument('--scheme', default=config.commitment_scheme, choices=available_schemes(),
                        help="commitment scheme (default: %(default)s)")
    parser.add_argument('--width', type=int, default=config.amount_width,
                        help="amount width in bits (default: %(default)s)")
    parser.add_argument('--strict-positive', action='store_true', default=not config.allow_zero_amounts,
                        help="reject zero-value notes")
    parser.add_argument('--log-level', default=config.log_level)
    sub = parser.add_subparsers(dest='command', required=True)

    p_commit = sub.add_parser('commit', help="commit to a value")
    p_commit.add_argument('--value', type=int, required=True)
    p_commit.add_argument('--blinding', help="base64 blinding; random if omitted")

    p_transfer = sub.add_parser('transfer', help="build an honest transfer document")
    p_transfer.add_argument('--old-value', type=int, required=True)
    p_transfer.add_argument('--fee', type=int, required=True)
    p_transfer.add_argument('--new-value', type=int, help="defaults to old-value - fee")
    p_transfer.add_argument('-o', '--output', help="write to file instead of stdout")

    p_verify = sub.add_parser('verify', help="verify a transfer document")
    p_verify.add_argument('path', help="transfer document, '-' for stdin")
    return parser


def cmd_commit(args, scheme) -> int:
    group = scheme.group
    if args.blinding:
        blinding = deserialize_zr(args.blinding, group)
    else:
        blinding = scheme.random_blinding()
    note = Note(args.value, blinding)
    _emit({
        'scheme': scheme.name,
        'value': args.value,
        'blinding': serialize_element(blinding, group),
        'commitment': serialize_element(note.commitment(scheme), group),
    })
    return 0


def cmd_transfer(args, scheme, curve) -> int:
    new_value = args.old_value - args.fee if args.new_value is None else args.new_value
    old_note = Note.random(args.old_value, scheme)
    new_note = Note.random(new_value, scheme)
    instance = TransferInstance(
        public=PublicInputs(old_note.commitment(scheme), new_note.commitment(scheme), args.fee),
        witness=PrivateWitness(old_note, new_note),
    )
    _emit(serialize_instance(instance, scheme, curve), args.output)
    return 0


def cmd_verify(args, policy) -> int:
    if args.path == '-':
        document = json.load(sys.stdin)
    else:
        with open(args.path, 'r', encoding='utf-8') as f:
            document = json.load(f)
    if not isinstance(document, dict):
        raise ValueError("transfer document must be a JSON object")
    curve = document.get('curve', config.pairing_curve)
    params = setup(curve)
    if params['group_name'] != curve:
        raise ValueError(f"document was committed on {curve}, which is not available")
    scheme, instance = deserialize_instance(document, params['group'])
    result = Verifier(scheme, policy).verify_instance(instance)
    _emit(serialize_result(result))
    return 0 if result.ok else 1


def _emit(data: dict, path: str = None):
    text = json.dumps(data, indent=2)
    if path:
        with open(path, 'w', encoding='utf-8') as f:
            f.write(text + "\n")
    else:
        print(text)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    policy = AmountPolicy(width=args.width, allow_zero=not args.strict_positive)
    try:
        if args.command == 'verify':
            return cmd_verify(args, policy)
        params = setup(args.curve)
        scheme = get_scheme(args.scheme, params['group'])
        if args.command == 'commit':
            return cmd_commit(args, scheme)
        return cmd_transfer(args, scheme, params['group_name'])
    except (OSError, ValueError) as e:
        logger.error("%s", e)
        return 2


if __name__ == '__main__':
    sys.exit(main())
