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
Resolution of the source files of a Java module.
"""

from __future__ import annotations

__all__ = ["ResolvedSources", "expand_sources", "aidl_flags", "resolve_sources", "GENERATOR_PREFIX"]

import glob
from os.path import exists, isfile, join
from typing import List, Optional, Sequence

from .build.context import ModuleContext
from .build.definition import SourceFileGenerator
from .javabuilder import BuilderFlags, gen_aidl, gen_logtags

GENERATOR_PREFIX = ':'


class ResolvedSources:
    def __init__(self, srcs: List[str], src_file_lists: List[str], logtags: List[str]):
        self.srcs = srcs
        """Files passed to the compiler, in order"""
        self.src_file_lists = src_file_lists
        """Files listing additional files passed to the compiler"""
        self.logtags = logtags

    def __repr__(self):
        return f'ResolvedSources[{len(self.srcs)} srcs, {len(self.src_file_lists)} lists]'


def _expand(ctx: ModuleContext, pattern: str) -> List[str]:
    path = ctx.module.src_path(pattern)
    if glob.has_magic(path):
        return sorted(p for p in glob.glob(path, recursive=True) if isfile(p))
    if not exists(path):
        ctx.module_error(f"module source path '{path}' does not exist")
        return []
    return [path]


def expand_sources(ctx: ModuleContext, srcs: Sequence[str], exclude_srcs: Sequence[str]) -> List[str]:
    """
    Expands the patterns in `srcs` relative to the module directory. The matches of each
    pattern are sorted and patterns are expanded in declaration order. Generator references
    are skipped.
    """
    excluded = set()
    for pattern in exclude_srcs:
        path = ctx.module.src_path(pattern)
        excluded.update(glob.glob(path, recursive=True) if glob.has_magic(path) else [path])
    result = []
    for pattern in srcs:
        if pattern.startswith(GENERATOR_PREFIX):
            continue
        for path in _expand(ctx, pattern):
            if path not in excluded and path not in result:
                result.append(path)
    return result


def aidl_flags(ctx: ModuleContext, module, aidl_preprocessed: Optional[str], aidl_include_dirs: Sequence[str]) -> List[str]:
    flags = []
    if aidl_preprocessed:
        flags.append('-p' + aidl_preprocessed)
    else:
        flags += ['-I' + d for d in aidl_include_dirs]
    flags += ['-I' + d for d in module.export_aidl_include_dirs_paths()]
    flags += ['-I' + d for d in module.src_paths(module.aidl_includes)]
    flags.append('-I' + module.dir())
    flags.append('-I' + join(module.dir(), 'src'))
    return flags


def _gen_sources(ctx: ModuleContext, srcs: Sequence[str], flags: BuilderFlags, logtags: List[str]) -> List[str]:
    result = []
    for src in srcs:
        if src.endswith('.aidl'):
            result.append(gen_aidl(ctx, src, flags))
        elif src.endswith('.logtags'):
            logtags.append(src)
            result.append(gen_logtags(ctx, src))
        else:
            result.append(src)
    return result


def _generated_sources(ctx: ModuleContext, module) -> List[str]:
    referenced = [s[len(GENERATOR_PREFIX):] for s in module.srcs if s.startswith(GENERATOR_PREFIX)]
    result = []
    for dep in module.deps:
        if isinstance(dep, SourceFileGenerator) and dep.name in referenced:
            result += dep.generated_source_files()
    return result


def resolve_sources(ctx: ModuleContext, module, src_file_lists: Sequence[str], flags: BuilderFlags) -> ResolvedSources:
    """
    Gets the final ordered list of sources of `module`: the expanded `srcs` patterns with
    aidl and logtags files replaced by the generated Java files, followed by the sources
    of the referenced source generators.
    """
    logtags = []
    srcs = expand_sources(ctx, module.srcs, module.exclude_srcs)
    srcs = _gen_sources(ctx, srcs, flags, logtags)
    srcs += _generated_sources(ctx, module)
    return ResolvedSources(srcs, list(src_file_lists), logtags)
