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
Emission of the individual build actions of Java modules.

Each function emits the actions of one step into a `ModuleContext` and returns the
JarSpec or paths produced by it. Problems with the inputs of a step are reported as
module errors; callers check `ctx.failed()` after every step.
"""

from __future__ import annotations

__all__ = [
    "BuilderFlags",
    "CompileError",
    "compile_java",
    "resource_dirs_to_jar_specs",
    "merge_archives",
    "repackage",
    "extract_classes",
    "translate",
    "final_assemble",
    "gen_aidl",
    "gen_logtags",
]

import glob
import os
from os.path import exists, isdir, join, normpath, relpath, splitext
from typing import List, Optional, Sequence, Tuple

from .build.context import ModuleContext
from .jarspec import JarSpec
from .support.logging import logv, logvv


class CompileError(Exception):
    pass


class BuilderFlags:
    """Flags composed for one module and passed to its actions as build-scoped variables."""

    def __init__(self):
        self.javac_flags = ''
        self.boot_classpath = ''
        self.classpath = ''
        self.aidl_flags = ''
        self.dx_flags = ''

    def __repr__(self):
        return f'BuilderFlags{vars(self)}'


def _check_src_exists(ctx: ModuleContext, path: str) -> bool:
    if not exists(path):
        ctx.module_error(f"module source path '{path}' does not exist")
        return False
    return True


def _module_relpath(ctx: ModuleContext, path: str) -> str:
    """
    Gets `path` relative to the module directory with parent directory segments
    replaced by `__`, so that files outside the module keep distinct intermediate paths.
    """
    rel = relpath(path, ctx.module.dir())
    return os.path.join(*['__' if part == os.pardir else part for part in rel.split(os.sep)])


def _gen_path(ctx: ModuleContext, subdir: str, src: str, ext: str) -> str:
    return ctx.out_path(subdir, splitext(_module_relpath(ctx, src))[0] + ext)


def compile_java(ctx: ModuleContext, srcs: Sequence[str], src_file_lists: Sequence[str], flags: BuilderFlags, deps: Sequence[str]) -> JarSpec:
    """
    Compiles `srcs` and the sources named in `src_file_lists` into the classes directory of the module.
    The resulting JarSpec lists all class files in sorted order.
    """
    if not srcs:
        raise CompileError(f'no sources to compile for {ctx.module}')
    classes_dir = ctx.out_path('classes')
    class_list = ctx.out_path('classes.list')
    ctx.build('javac', [class_list], srcs, implicit=list(src_file_lists) + list(deps), variables={
        'javacFlags': flags.javac_flags,
        'bootClasspath': flags.boot_classpath,
        'classpath': flags.classpath,
        'srcFileLists': ' '.join('@' + l for l in src_file_lists),
        'outDir': classes_dir,
    })
    return JarSpec.directory(classes_dir, class_list)


def _glob_dirs(ctx: ModuleContext, pattern: str) -> List[str]:
    path = ctx.module.src_path(pattern)
    if glob.has_magic(path):
        return sorted(normpath(d) for d in glob.glob(path, recursive=True) if isdir(d))
    return [path]


def resource_dirs_to_jar_specs(ctx: ModuleContext, dirs: Sequence[str], exclude_dirs: Sequence[str]) -> List[JarSpec]:
    """
    Creates one JarSpec per resource directory. The directories are scanned now and
    their file lists are written together with the manifest.
    """
    excluded = set()
    for pattern in exclude_dirs:
        excluded.update(_glob_dirs(ctx, pattern))
    specs = []
    seen = set()
    for pattern in dirs:
        for resource_dir in _glob_dirs(ctx, pattern):
            if resource_dir in excluded:
                continue
            if resource_dir in seen:
                logvv(f'{ctx.module}: {resource_dir} is already a java resource directory')
                continue
            seen.add(resource_dir)
            if not isdir(resource_dir):
                ctx.module_error(f"java resource directory '{resource_dir}' does not exist")
                continue
            files = []
            for root, dirnames, filenames in os.walk(resource_dir):
                dirnames.sort()
                for name in sorted(filenames):
                    files.append(relpath(join(root, name), resource_dir).replace(os.sep, '/'))
            file_list = ctx.out_path('res', _module_relpath(ctx, resource_dir), 'resources.list')
            ctx.write_file(file_list, files)
            logv(f'{ctx.module}: {len(files)} resources in {resource_dir}')
            specs.append(JarSpec.directory(resource_dir, file_list))
    return specs


def merge_archives(ctx: ModuleContext, class_specs: Sequence[JarSpec], resource_specs: Sequence[JarSpec], manifest: Optional[str]) -> JarSpec:
    """
    Combines classes and resources into `classes-full-debug.jar`. The entries are taken from
    `class_specs` followed by `resource_specs`, in order, and the first entry for a path wins.
    """
    out = ctx.out_path('classes-full-debug.jar')
    jar_args = []
    deps = []
    for spec in list(class_specs) + list(resource_specs):
        jar_args += spec.jar_args()
        deps += spec.deps()
    if manifest is not None:
        if not _check_src_exists(ctx, manifest):
            return None
        jar_args = ['-m', manifest] + jar_args
        deps.append(manifest)
    ctx.build('jar', [out], implicit=deps, variables={'jarArgs': ' '.join(jar_args)})
    return JarSpec.archive(out)


def repackage(ctx: ModuleContext, archive: JarSpec, rules: str) -> JarSpec:
    """Rewrites the class names in `archive` according to the jarjar `rules` file."""
    if not _check_src_exists(ctx, rules):
        return None
    out = ctx.out_path('classes-jarjar.jar')
    ctx.build('jarjar', [out], archive.deps(), implicit=[rules], variables={'rulesFile': rules})
    return JarSpec.archive(out)


def extract_classes(ctx: ModuleContext, archive: JarSpec, subdir: str = 'extracted') -> Tuple[JarSpec, JarSpec]:
    """
    Extracts an archive and derives a class JarSpec and a resource JarSpec from its contents.
    """
    out_dir = ctx.out_path(subdir)
    class_list = ctx.out_path(subdir + '.classes.list')
    resource_list = ctx.out_path(subdir + '.resources.list')
    ctx.build('extract', [class_list], archive.deps(), implicit_outputs=[resource_list], variables={
        'outDir': out_dir,
        'resourcesList': resource_list,
    })
    return JarSpec.directory(out_dir, class_list), JarSpec.directory(out_dir, resource_list)


def translate(ctx: ModuleContext, archive: JarSpec, flags: BuilderFlags) -> JarSpec:
    """Converts the classes in `archive` to dex files."""
    out_dir = ctx.out_path('dex')
    dex_list = ctx.out_path('dex.list')
    ctx.build('dx', [dex_list], archive.deps(), variables={
        'outDir': out_dir,
        'dxFlags': flags.dx_flags,
    })
    return JarSpec.directory(out_dir, dex_list)


def final_assemble(ctx: ModuleContext, resource_specs: Sequence[JarSpec], dex_spec: JarSpec) -> JarSpec:
    """Combines the resources and the translated classes into `javalib.jar`."""
    out = ctx.out_path('javalib.jar')
    jar_args = []
    deps = []
    for spec in list(resource_specs) + [dex_spec]:
        jar_args += spec.jar_args()
        deps += spec.deps()
    ctx.build('jar', [out], implicit=deps, variables={'jarArgs': ' '.join(jar_args)})
    return JarSpec.archive(out)


def gen_aidl(ctx: ModuleContext, aidl_file: str, flags: BuilderFlags) -> str:
    java_file = _gen_path(ctx, 'aidl', aidl_file, '.java')
    ctx.build('aidl', [java_file], [aidl_file], variables={
        'aidlFlags': flags.aidl_flags,
        'depFile': java_file + '.d',
    })
    return java_file


def gen_logtags(ctx: ModuleContext, logtags_file: str) -> str:
    java_file = _gen_path(ctx, 'logtags', logtags_file, '.java')
    ctx.build('logtags', [java_file], [logtags_file])
    return java_file
