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
Writing of the Ninja build manifest.

For more details about Ninja, see https://ninja-build.org/manual.html.
"""

from __future__ import annotations

__all__ = ["NinjaManifestGenerator", "write_generated_file"]

import os
import tempfile
from typing import Dict, Sequence

from .build.context import BuildStatement, ModuleContext
from .config import Config
from .support.logging import logv


def write_generated_file(path: str, content: str) -> bool:
    """
    Writes `content` to `path` unless the file already has that content, so that
    unchanged file lists do not trigger rebuilds.

    :return: True if the file was written
    """
    if os.path.exists(path):
        with open(path) as fp:
            if fp.read() == content:
                return False
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, 'w') as fp:
        fp.write(content)
    return True


class NinjaManifestGenerator(object):
    """Abstracts the writing of the Ninja build manifest.

    Essentially, this is a wrapper around the `ninja_syntax.Writer` that declares the tool
    variables and the rules used by the build actions and writes the statements collected
    in `ModuleContext` objects. The flags composed for a module are written as variables
    of the individual build statements.
    """

    def __init__(self, config: Config, path: str, regen_args: Sequence[str] = ()):
        import ninja_syntax
        self.config = config
        self.path = path
        self.regen_args = list(regen_args)
        # The manifest replaces `path` only once it is complete.
        fd, self.tmpPath = tempfile.mkstemp(prefix=os.path.basename(path) + '.', dir=os.path.dirname(path) or os.curdir)
        self.n = ninja_syntax.Writer(os.fdopen(fd, 'w'))  # pylint: disable=invalid-name
        try:
            self._generate()
        except BaseException:
            self._discard()
            raise

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_val:
            self._discard()
        else:
            self.close()
            os.chmod(self.tmpPath, 0o644)
            os.replace(self.tmpPath, self.path)

    def _discard(self):
        self.close()
        os.remove(self.tmpPath)

    def newline(self):
        self.n.newline()

    def comment(self, text):
        self.n.comment(text)

    def variables(self, **kwargs):
        import ninja_syntax
        for key, value in kwargs.items():
            self.n.variable(key, ninja_syntax.escape(value))
        self.newline()

    def close(self):
        self.n.close()

    def _generate(self):
        self.comment('Generated by javaninja. Do not edit.')
        self.newline()

        self.variables(ninja_required_version='1.3')

        self.comment('Tools')
        c = self.config
        self.variables(
            javacCmd=c.javac,
            jarjarCmd=c.jarjar,
            dxCmd=c.dx,
            aidlCmd=c.aidl,
            aaptCmd=c.aapt,
            logtagsCmd=c.logtags,
            mergeLogtagsCmd=c.merge_logtags,
            javaninja=c.javaninja,
            javaVersion=c.java_version,
        )

        self._generate_rules()

    def _generate_rules(self):
        self.comment('Rules')
        self.n.rule('javac',
                    command='rm -rf $outDir && mkdir -p $outDir && '
                            '$javacCmd -encoding UTF-8 $javacFlags $bootClasspath $classpath '
                            '-source $javaVersion -target $javaVersion -d $outDir @$out.rsp $srcFileLists && '
                            "$javaninja filelist -C $outDir -i '*.class' -o $out",
                    description='JAVAC $outDir',
                    rspfile='$out.rsp',
                    rspfile_content='$in')
        self.newline()

        self.n.rule('jar',
                    command='$javaninja jar -o $out $jarArgs',
                    description='JAR $out')
        self.newline()

        self.n.rule('jarjar',
                    command='$jarjarCmd process $rulesFile $in $out',
                    description='JARJAR $out')
        self.newline()

        self.n.rule('extract',
                    command='rm -rf $outDir && $javaninja extract -o $outDir --classes $out --resources $resourcesList $in',
                    description='EXTRACT $in')
        self.newline()

        self.n.rule('dx',
                    command='rm -rf $outDir && mkdir -p $outDir && '
                            '$dxCmd --dex --output=$outDir $dxFlags $in && '
                            "$javaninja filelist -C $outDir -i 'classes*.dex' -o $out",
                    description='DX $outDir')
        self.newline()

        self.n.rule('aidl',
                    command='$aidlCmd -d$depFile $aidlFlags $in $out',
                    description='AIDL $in',
                    depfile='$depFile',
                    deps='gcc')
        self.newline()

        self.n.rule('logtags',
                    command='$logtagsCmd -o $out $in',
                    description='LOGTAGS $in')
        self.newline()

        self.n.rule('merge_logtags',
                    command='$mergeLogtagsCmd -o $out $in',
                    description='MERGE LOGTAGS $out')
        self.newline()

        self.n.rule('aapt',
                    command='rm -rf $genDir && mkdir -p $genDir && '
                            '$aaptCmd package -m -J $genDir -M $manifest $resDirs $aaptFlags && '
                            "$javaninja filelist -C $genDir -i '*.java' --full-paths -o $out",
                    description='AAPT $manifest')
        self.newline()

        self.n.rule('genrule',
                    command='mkdir -p $genDir && $cmd',
                    description='GEN $out')
        self.newline()

        self.n.rule('install',
                    command='mkdir -p $$(dirname $out) && cp -f $in $out',
                    description='INSTALL $out')
        self.newline()

        if self.regen_args:
            self.comment('Regenerates this manifest when the definition changes')
            self.n.rule('regen',
                        command='$javaninja ' + ' '.join(self.regen_args),
                        description='GEN $out',
                        generator=True)
            self.newline()

    def statement(self, s: BuildStatement):
        import ninja_syntax
        variables = [(k, ninja_syntax.escape(v)) for k, v in s.variables.items()]
        return self.n.build(s.outputs, s.rule, s.inputs,
                            implicit=s.implicit or None,
                            order_only=s.order_only or None,
                            variables=variables or None,
                            implicit_outputs=s.implicit_outputs or None)

    def module(self, ctx: ModuleContext):
        """Writes the statements of one module variant and the files it generated."""
        self.comment(f'Module {ctx.module}')
        for s in ctx.statements:
            self.statement(s)
        self.newline()
        for path, content in ctx.generated_files.items():
            if write_generated_file(path, content):
                logv(f'[wrote {path}]')

    def singleton(self, comment: str, statements: Sequence[BuildStatement]):
        self.comment(comment)
        for s in statements:
            self.statement(s)
        self.newline()

    def targets(self, contexts: Sequence[ModuleContext], definition_files: Sequence[str] = ()):
        """Writes a phony target per module name, the `checkbuild` target and the default target."""
        self.comment('Targets')
        by_name: Dict[str, list] = {}
        checkbuild = []
        for ctx in contexts:
            outputs = by_name.setdefault(ctx.module.name, [])
            outputs += ctx.checkbuild_files + ctx.install_files
            checkbuild += ctx.checkbuild_files
        for name, outputs in by_name.items():
            if name not in (self.path, 'checkbuild') and outputs:
                self.n.build(name, 'phony', outputs)
        self.n.build('checkbuild', 'phony', checkbuild)
        self.newline()
        if self.regen_args:
            self.n.build(self.path, 'regen', implicit=list(definition_files))
            self.newline()
        self.n.default('checkbuild')
