#
# ----------------------------------------------------------------------------------------------------
#
# Copyright (c) 2026, 2026, Oracle and/or its affiliates. All rights reserved.
# DO NOT ALTER OR REMOVE COPYRIGHT NOTICES OR THIS FILE HEADER.
#
# This code is free software; you can redistribute it and/or modify it
# under the terms of the GNU General Public License version 2 only, as
# published by the Free Software Foundation.
#
# This code is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or
# FITNESS FOR A PARTICULAR PURPOSE.  See the GNU General Public License
# version 2 for more details (a copy is included in the LICENSE file that
# accompanied this code).
#
# You should have received a copy of the GNU General Public License version
# 2 along with this work; if not, write to the Free Software Foundation,
# Inc., 51 Franklin St, Fifth Floor, Boston, MA 02110-1301 USA.
#
# Please contact Oracle, 500 Oracle Parkway, Redwood Shores, CA 94065 USA
# or visit www.oracle.com if you need additional information or have any
# questions.
#
# ----------------------------------------------------------------------------------------------------
#

"""
The command line of javaninja.
"""

from __future__ import annotations

__all__ = ["ArgParser", "main", "_main_wrapper"]

import shlex
import sys
from argparse import Action, ArgumentParser, HelpFormatter
from typing import List, Optional

from .build.definition.loader import DEFAULT_DEFINITION_FILE, Definition
from .config import VARIANTS
from .generator import Generator
from .jarspec import JarSpec
from .jartool import extract_jar, write_file_list, write_jar
from .javadeps import DependencyClassificationError
from .support.logging import abort, logv
from .support.options import set_opts


class _DirectoryAction(Action):
    """Remembers the directory of a `-C <dir> -l <list>` pair."""

    def __call__(self, parser, namespace, values, option_string=None):
        namespace.pending_dir = values


class _ListAction(Action):
    def __call__(self, parser, namespace, values, option_string=None):
        directory = getattr(namespace, 'pending_dir', None)
        if directory is None:
            parser.error(f'{option_string} {values} must follow -C <dir>')
        namespace.pending_dir = None
        namespace.specs = list(namespace.specs or []) + [JarSpec.directory(directory, values)]


class _ArchiveAction(Action):
    def __call__(self, parser, namespace, values, option_string=None):
        namespace.specs = list(namespace.specs or []) + [JarSpec.archive(values)]


class ArgParser(ArgumentParser):
    # Override parent to append the environment variables
    def format_help(self):
        return ArgumentParser.format_help(self) + """
environment variables:
  JAVANINJA_OUT_DIR     Default value of the output directory. Can be overridden with the --out-dir option.
  JAVANINJA_INSTALL_DIR Default value of the install directory. Can be overridden with the --install-dir option.
  JAVAC, JARJAR, DX, AIDL, AAPT
                        Commands used by the generated build actions.
  NO_OPTIMIZE_DX        Pass --no-optimize to dx.
  GENERATE_DEX_DEBUG    Make dx dump the generated code and keep debug information.
  EMMA_INSTRUMENT       Pass --no-locals to dx.
"""

    def __init__(self):
        ArgumentParser.__init__(self, prog='javaninja', formatter_class=lambda prog: HelpFormatter(prog, max_help_position=32, width=120))

        self.add_argument('-v', action='store_true', dest='verbose', help='enable verbose output')
        self.add_argument('-V', action='store_true', dest='very_verbose', help='enable very verbose output')
        self.add_argument('--no-warning', action='store_false', dest='warn', help='disable warning messages')
        self.add_argument('--quiet', action='store_true', help='disable log messages')

        commands = self.add_subparsers(dest='command', metavar='<command>', parser_class=ArgumentParser)

        gen = commands.add_parser('gen', help='generate the Ninja manifest of a module definition')
        gen.add_argument('-d', '--definition', default=DEFAULT_DEFINITION_FILE, help='module definition file', metavar='<path>')
        gen.add_argument('-o', '--manifest', default='build.ninja', help='manifest to write', metavar='<path>')
        gen.add_argument('--out-dir', help='directory of intermediate files', metavar='<path>')
        gen.add_argument('--install-dir', help='directory of installed files', metavar='<path>')
        gen.add_argument('--variants', help='comma separated variants to generate (default: all)', metavar='<variants>')
        gen.set_defaults(func=gen_command)

        jar = commands.add_parser('jar', help='merge directories and archives into an archive')
        jar.add_argument('-o', dest='output', required=True, help='archive to write', metavar='<path>')
        jar.add_argument('-m', dest='jar_manifest', help='manifest of the archive', metavar='<path>')
        jar.add_argument('-C', action=_DirectoryAction, help='directory of the files named by the next -l option', metavar='<dir>')
        jar.add_argument('-l', action=_ListAction, help='file listing the files to add', metavar='<list>')
        jar.add_argument('-j', action=_ArchiveAction, help='archive whose entries are added', metavar='<archive>')
        jar.add_argument('--abort-on-duplicates', action='store_true', help='abort instead of warning on duplicate entries')
        jar.set_defaults(func=jar_command, specs=[], pending_dir=None)

        extract = commands.add_parser('extract', help='extract an archive and list its classes and resources')
        extract.add_argument('-o', dest='output', required=True, help='directory to extract to', metavar='<dir>')
        extract.add_argument('--classes', required=True, help='file listing the extracted class files', metavar='<path>')
        extract.add_argument('--resources', required=True, help='file listing the other extracted files', metavar='<path>')
        extract.add_argument('archive', metavar='<archive>')
        extract.set_defaults(func=extract_command)

        filelist = commands.add_parser('filelist', help='write the sorted list of the files in a directory')
        filelist.add_argument('-C', dest='directory', required=True, help='directory to list', metavar='<dir>')
        filelist.add_argument('-i', dest='include', action='append', help='file name pattern to include (default: all)', metavar='<pattern>')
        filelist.add_argument('-o', dest='output', required=True, help='list to write', metavar='<path>')
        filelist.add_argument('--full-paths', action='store_true', help='list paths including the directory')
        filelist.set_defaults(func=filelist_command)


def _parse_variants(value: Optional[str]) -> Optional[List[str]]:
    if not value:
        return None
    variants = [v.strip() for v in value.split(',') if v.strip()]
    unknown = [v for v in variants if v not in VARIANTS]
    if unknown:
        abort('unknown variant(s): ' + ', '.join(unknown) + '. Known variants: ' + ', '.join(VARIANTS))
    return variants


def gen_command(args, argv: List[str]) -> int:
    """generate the Ninja manifest of a module definition"""
    overrides = {'out_dir': args.out_dir, 'install_dir': args.install_dir}
    definition = Definition.load(args.definition, overrides)
    generator = Generator(definition, args, _parse_variants(args.variants))
    generator.generate()
    generator.write(args.manifest, [shlex.quote(a) for a in argv])
    return 0


def jar_command(args, argv: List[str]) -> int:
    """merge directories and archives into an archive"""
    if args.pending_dir is not None:
        abort(f'-C {args.pending_dir} is not followed by -l <list>')
    write_jar(args.output, args.specs, args.jar_manifest, 'abort' if args.abort_on_duplicates else 'warn')
    return 0


def extract_command(args, argv: List[str]) -> int:
    """extract an archive and list its classes and resources"""
    classes, resources = extract_jar(args.archive, args.output, args.classes, args.resources)
    logv(f'{len(classes)} classes and {len(resources)} resources in {args.archive}')
    return 0


def filelist_command(args, argv: List[str]) -> int:
    """write the sorted list of the files in a directory"""
    write_file_list(args.directory, args.include or ['*'], args.output, args.full_paths)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    parser = ArgParser()
    args = parser.parse_args(argv)
    set_opts(args)
    if not args.command:
        parser.print_help()
        return 1
    try:
        return args.func(args, argv)
    except DependencyClassificationError as e:
        abort(str(e))


def _main_wrapper():
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        # no need to show the stack trace when the user presses CTRL-C
        abort(1)
