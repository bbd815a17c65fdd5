import argparse
import sys

from .assembler import Assembler
from .bitcoin import Bitcoin
from .keys import PublicKey
from .parser import parse
from .util import *

def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(prog='pybtcscript', description='Assemble Bitcoin Script source and print it as hex.')
    parser.add_argument('file', nargs='?', default=None, help='script source (default: read stdin)')
    parser.add_argument('--value', action='append', default=[], metavar='NAME=HEX', help='bytes pushed for the escape <NAME>')
    parser.add_argument('--int', action='append', default=[], metavar='NAME=N', help='integer pushed for the escape <NAME>')
    parser.add_argument('--key', action='append', default=[], metavar='NAME=HEX', help='public key pushed for the escape <NAME>')
    parser.add_argument('--no-minimal-ints', action='store_const', default=False, const=True, help='push every integer as a script number')
    parser.add_argument('--witness-hash', action='store_const', default=False, const=True, help='also print the SHA-256 of the script')
    parser.add_argument('--debug', action='store_const', default=False, const=True)
    args = parser.parse_args(argv)

    values = {}
    for option, items, convert in (('--value', args.value, lambda s: hexstring_to_bytes(s, reverse=False)),
                                   ('--int', args.int, int),
                                   ('--key', args.key, PublicKey.from_hex)):
        for item in items:
            if '=' not in item:
                parser.error('{} expects NAME=VALUE, got "{}"'.format(option, item))
            name, v = item.split('=', 1)
            try:
                values[name] = convert(v)
            except (ValueError, ScriptError) as e:
                parser.error('{} {}: {}'.format(option, name, e))

    args.values = values
    return args

def main(argv=None):
    args = parse_arguments(argv)
    logging_level = DEBUG if args.debug else WARNING

    if args.file is None:
        source = sys.stdin.read()
    else:
        try:
            with open(args.file, 'r') as f:
                source = f.read()
        except OSError as e:
            print('error: {}'.format(e), file=sys.stderr)
            return 1

    try:
        tokens = parse(source, values=args.values, logging_level=logging_level)
        program = Assembler(logging_level=logging_level, minimal_ints=not args.no_minimal_ints).assemble(tokens)
    except ScriptError as e:
        print('error: {}'.format(e), file=sys.stderr)
        return 1

    print(bytes_to_hexstring(program, reverse=False))
    if args.witness_hash:
        print(bytes_to_hexstring(Bitcoin.sha256(program), reverse=False))
    return 0
