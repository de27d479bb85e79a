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

from __future__ import annotations

__all__ = ["GenerateTask"]

from typing import Optional

from ...config import Config
from ...support.logging import logv
from ..context import ModuleContext
from ..definition import Module
from .task import Args, Task


class GenerateTask(Task):
    """
    Generates the build actions of one module variant. The tasks of the dependencies of
    the module must have been executed before.
    """

    def __init__(self, subject: Module, args: Args, config: Config):
        Task.__init__(self, subject, args)
        self.ctx = ModuleContext(subject, config)

    def failed_deps(self):
        return [d for d in self.subject.deps if d.failed]

    def execute(self) -> Optional[ModuleContext]:
        failed = self.failed_deps()
        if failed:
            for dep in failed:
                self.ctx.module_error(f"dependency '{dep.name}' has errors")
        else:
            logv(f'[generating {self.subject}]')
            self.subject.generate_build_actions(self.ctx)
        if self.ctx.failed():
            self.subject.failed = True
        return self.ctx
