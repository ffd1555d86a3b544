""" Interactive compiler for the kaleido language.

Statements are read line by line and separated by ';'. For example:

    ready> extern sin(x);
    ready> def f(x) if x < 1 then sin(x) else x * 2;
    ready> f(0.5)

When source files are given, their lines are handled instead of the
lines typed at the prompt.
"""

import argparse
import sys
from .base import base_parser, LogSetup
from ..toplevel import Toplevel


parser = argparse.ArgumentParser(
    description=__doc__,
    formatter_class=argparse.RawDescriptionHelpFormatter,
    parents=[base_parser],
)
parser.add_argument(
    'sources', metavar='source', nargs='*', type=argparse.FileType('r'),
    help='Source file to handle instead of standard input')
parser.add_argument(
    '--dump-ast', action='store_true', default=False,
    help='Print the syntax tree of each parsed statement')
parser.add_argument(
    '--dump-code', action='store_true', default=False,
    help='Print the python code generated for each function')
parser.add_argument(
    '--prompt', default=Toplevel.prompt,
    help='Text written before reading a line')


def kaleido(args=None):
    args = parser.parse_args(args)
    with LogSetup(args):
        toplevel = Toplevel(dump_ast=args.dump_ast, dump_code=args.dump_code)
        toplevel.prompt = args.prompt
        try:
            if args.sources:
                for source in args.sources:
                    with source:
                        toplevel.load_file(source)
            else:
                toplevel.main_loop()
        except KeyboardInterrupt:
            print()

    if args.sources and toplevel.diag.error_count:
        sys.exit(1)


if __name__ == '__main__':
    kaleido()
