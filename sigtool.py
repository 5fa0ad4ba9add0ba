#!/usr/bin/env python3
"""Command line tool for ssh-dss signatures: transcode, sign and verify."""
from dss_codec.colors import Colors, colored
from dss_codec.der import decode_der_signature
from dss_codec.engine import DSASignatureEngine, hash_algorithm
from dss_codec.envelope import encode_signature_envelope
from dss_codec.logger import get_logger, set_verbose_mode
from dss_codec.signature_dsa import SSH_DSS, SignatureDSA, der_to_raw, raw_to_der, unwrap_signature
from dss_codec.buffer_utils import to_hex

from cryptography.hazmat.primitives import serialization

import sys
import argparse


def parse_hex(value):
    try:
        return bytes.fromhex(value.replace(":", "").replace(" ", ""))
    except ValueError:
        raise argparse.ArgumentTypeError("not a hex string: %r" % value) from None


def parse_arguments(argv=None):
    """Parse command line arguments using argparse."""
    parser = argparse.ArgumentParser(
        description="Transcode, sign and verify ssh-dss signatures",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    to_der = commands.add_parser("to-der", help="Convert a wire signature to DER")
    to_der.add_argument("signature", type=parse_hex, help="Raw or encoded signature (hex)")

    from_der = commands.add_parser("from-der", help="Convert a DER signature to wire format")
    from_der.add_argument("signature", type=parse_hex, help="DER signature (hex)")
    from_der.add_argument("--envelope", action="store_true",
                          help="Wrap the result with the ssh-dss key type")

    for name, help_text in (("sign", "Sign a file"), ("verify", "Verify a file's signature")):
        sub = commands.add_parser(name, help=help_text)
        sub.add_argument("-k", "--key", required=True,
                         help="PEM %s key file" % ("private" if name == "sign" else "public"))
        sub.add_argument("-d", "--data", required=True, help="File holding the signed data")
        sub.add_argument("--hash", default="sha1", help="Digest algorithm (default: sha1)")

    commands.choices["sign"].add_argument("--envelope", action="store_true",
                                          help="Wrap the result with the ssh-dss key type")
    commands.choices["verify"].add_argument("-s", "--signature", required=True, type=parse_hex,
                                            help="Raw or encoded signature (hex)")

    return parser.parse_args(argv)


def read_file(path):
    with open(path, 'rb') as f:
        return f.read()


def load_engine(args):
    key_data = read_file(args.key)
    algorithm = hash_algorithm(args.hash)
    if args.command == "sign":
        key = serialization.load_pem_private_key(key_data, password=None)
        engine = DSASignatureEngine(private_key=key, algorithm=algorithm)
    else:
        key = serialization.load_pem_public_key(key_data)
        engine = DSASignatureEngine(public_key=key, algorithm=algorithm)
    return engine.update(read_file(args.data))


def run(args, logger):
    if args.command == "to-der":
        der = raw_to_der(unwrap_signature(args.signature))
        print(to_hex(der))
        return 0

    if args.command == "from-der":
        r, s = decode_der_signature(args.signature)
        logger.debug(f"r={r:#x} s={s:#x}")
        raw = der_to_raw(args.signature)
        print(to_hex(encode_signature_envelope(SSH_DSS, raw) if args.envelope else raw))
        return 0

    signer = SignatureDSA(load_engine(args))
    if args.command == "sign":
        raw = signer.sign()
        print(to_hex(encode_signature_envelope(SSH_DSS, raw) if args.envelope else raw))
        return 0

    if signer.verify(args.signature):
        print(colored("✓ Signature is valid", Colors.GREEN))
        return 0
    print(colored("✗ Signature is invalid", Colors.RED))
    return 1


def main(argv=None):
    """Main entry point for the signature tool."""
    args = parse_arguments(argv)

    set_verbose_mode(args.verbose)
    logger = get_logger()
    logger.debug(f"Running command: {args.command}")

    try:
        return run(args, logger)
    except Exception as e:
        print(colored(f"Error: {str(e)}", Colors.RED), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
