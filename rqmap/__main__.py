#! /usr/bin/env python
# -*- coding: utf-8 -*-

# This file is part of RQMap.
# Licensed under MIT License.

""" Main functionality of RQMap

"""
import sys
import argparse

from rqmap import __version__
from .cli import count as cli_count
from .cli import coverage as cli_coverage
from .cli import hooks as cli_hooks


USAGE = ''' %(prog)s <command> [<args>]

The most commonly used commands are:
   count          Count reads or fragments overlapping BED regions
   coverage       Per-position coverage across a region
   list-hooks     List installed read filters and locus transforms

'''


def main():
    if len(sys.argv) == 1:
        empty_parser = argparse.ArgumentParser(
            description='Overlap counts and coverage from aligned reads',
            usage=USAGE,
        )
        empty_parser.print_help(sys.stderr)
        sys.exit(1)

    parser = argparse.ArgumentParser(
        description='Overlap counts and coverage from aligned reads',
    )
    parser.add_argument('--version',
        action='version',
        version=__version__,
    )

    subparser = parser.add_subparsers(help='Sub-command help', dest='subcommand')

    ''' Parser for count '''
    count_parser = subparser.add_parser('count',
        description='''Count reads or fragments overlapping BED regions''',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    cli_count.CountOptions.add_arguments(count_parser)
    count_parser.set_defaults(func=cli_count.run)

    ''' Parser for coverage '''
    coverage_parser = subparser.add_parser('coverage',
        description='''Per-position coverage across a region''',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    cli_coverage.CoverageOptions.add_arguments(coverage_parser)
    coverage_parser.set_defaults(func=cli_coverage.run)

    ''' Parser for list-hooks '''
    list_hooks_parser = subparser.add_parser('list-hooks',
        description='''List installed read filters and locus transforms''',
    )
    list_hooks_parser.set_defaults(func=cli_hooks.list_hooks)

    args = parser.parse_args()
    args.func(args)

if __name__ == '__main__':
    main()
