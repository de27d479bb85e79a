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
Generation of the build actions of all modules of a definition.
"""

from __future__ import annotations

__all__ = ["Generator", "merge_logtags"]

import os
from collections import OrderedDict
from typing import Dict, List, Optional, Sequence

from .build.context import BuildStatement, ModuleContext, ModuleError
from .build.definition import Module
from .build.definition.loader import Definition
from .build.tasks.generate import GenerateTask
from .config import Config
from .ninja import NinjaManifestGenerator
from .support.logging import abort, log, log_error, logv


def merge_logtags(config: Config, modules: Sequence[Module]) -> List[BuildStatement]:
    """
    Creates the action merging the logtags sources of all `modules` into a single file.
    No action is created if there are no logtags sources.
    """
    srcs = []
    for m in modules:
        for src in getattr(m, 'logtags_srcs', []):
            if src not in srcs:
                srcs.append(src)
    if not srcs:
        return []
    return [BuildStatement('merge_logtags', [os.path.join(config.out_dir, 'event-log-tags')], srcs)]


class Generator:
    """
    Generates the build actions of the modules of `definition`. Every module variant is
    generated after all of its dependencies.
    """

    def __init__(self, definition: Definition, args=None, variants: Optional[Sequence[str]] = None):
        self.definition = definition
        self.args = args
        self.variants = variants
        self.contexts: List[ModuleContext] = []
        self.singletons: List[BuildStatement] = []

    def _tasks(self) -> List[GenerateTask]:
        tasks: Dict[Module, GenerateTask] = OrderedDict()

        def _visit(m: Module):
            tasks[m] = GenerateTask(m, self.args, self.definition.config)

        visited = set()
        for m in self.definition.modules_for(self.variants):
            m.walk_deps(_visit, visited)
        return list(tasks.values())

    def errors(self) -> List[ModuleError]:
        return [e for ctx in self.contexts for e in ctx.errors]

    def generate(self) -> List[ModuleContext]:
        """
        Generates the build actions of all modules. Module errors are collected in the
        returned contexts. A dependency that does not fit any category raises
        `DependencyClassificationError`.
        """
        self.contexts = []
        for task in self._tasks():
            task.enter()
            try:
                self.contexts.append(task.execute())
            finally:
                task.leave()
        self.singletons = merge_logtags(self.definition.config, [ctx.module for ctx in self.contexts if not ctx.failed()])
        return self.contexts

    def check_errors(self) -> None:
        """Reports all module errors and aborts if there are any."""
        errors = self.errors()
        if errors:
            for e in errors:
                log_error(str(e))
            abort(f'{len(errors)} module error(s) in {self.definition.name}')

    def write(self, manifest: str, regen_args: Sequence[str] = ()) -> None:
        """
        Writes the manifest and the files whose content is known at generation time.
        """
        self.check_errors()
        parent = os.path.dirname(manifest)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with NinjaManifestGenerator(self.definition.config, manifest, regen_args) as gen:
            for ctx in self.contexts:
                gen.module(ctx)
            if self.singletons:
                gen.singleton('Event log tags', self.singletons)
            gen.targets(self.contexts, [self.definition.path] if self.definition.path else [])
        logv(f'[wrote {manifest}]')
        log(f'{len(self.contexts)} module variants written to {manifest}')
