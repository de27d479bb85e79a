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

__all__ = ["BuildStatement", "ModuleContext", "ModuleError"]

import os.path
from collections import OrderedDict
from typing import Dict, List, Optional, Sequence

from ..config import Config
from ..support.logging import logv, logvv
from .definition import Module


class ModuleError:
    """An error reported against a module. Reporting it abandons the remaining actions of the module."""

    def __init__(self, module: Module, message: str):
        self.module = module
        self.message = message

    def __str__(self):
        return self.module.__abort_context__() + ':\n' + self.message


class BuildStatement:
    """One build action: running `rule` produces `outputs` from `inputs`."""

    def __init__(self, rule: str, outputs: Sequence[str], inputs: Sequence[str] = (), implicit: Sequence[str] = (),
                 order_only: Sequence[str] = (), implicit_outputs: Sequence[str] = (), variables: Optional[Dict[str, str]] = None):
        self.rule = rule
        self.outputs = list(outputs)
        self.inputs = list(inputs)
        self.implicit = list(implicit)
        self.order_only = list(order_only)
        self.implicit_outputs = list(implicit_outputs)
        self.variables = OrderedDict(variables or {})

    def __str__(self):
        return f"{self.rule}: {' '.join(self.inputs)} -> {' '.join(self.outputs)}"

    def __repr__(self):
        return str(self)


class ModuleContext:
    """
    Collects the build actions of a single module variant.

    Actions are recorded in the order in which they are emitted. Composed flags are stored
    on the statements as build-scoped variables, so nothing is shared between modules.
    """

    def __init__(self, module: Module, config: Config):
        self.module = module
        self.config = config
        self.statements: List[BuildStatement] = []
        self.generated_files: Dict[str, str] = OrderedDict()
        self.checkbuild_files: List[str] = []
        self.install_files: List[str] = []
        self.errors: List[ModuleError] = []

    def __str__(self):
        return f'ModuleContext[{self.module}]'

    @property
    def variant(self) -> str:
        return self.module.variant

    def module_name(self) -> str:
        return self.module.name

    def failed(self) -> bool:
        return len(self.errors) != 0

    def module_error(self, message: str) -> None:
        self.errors.append(ModuleError(self.module, message))
        logv(f"{self.module}: error: {message}")

    def out_path(self, *parts: str) -> str:
        """Gets a path in the intermediates directory of the module."""
        return os.path.join(self.config.intermediates_dir(self.variant, self.module.name), *parts)

    def build(self, rule: str, outputs: Sequence[str], inputs: Sequence[str] = (), implicit: Sequence[str] = (),
              order_only: Sequence[str] = (), implicit_outputs: Sequence[str] = (), variables: Optional[Dict[str, str]] = None) -> BuildStatement:
        statement = BuildStatement(rule, outputs, inputs, implicit, order_only, implicit_outputs, variables)
        logvv(f'{self.module}: {statement}')
        self.statements.append(statement)
        return statement

    def write_file(self, path: str, lines: Sequence[str]) -> str:
        """
        Records a file whose content is known at generation time.
        It is written next to the manifest when the manifest is written.
        """
        assert path not in self.generated_files, path
        self.generated_files[path] = ''.join(line + '\n' for line in lines)
        return path

    def install_file(self, install_dir: str, name: str, src: str, deps: Sequence[str] = ()) -> str:
        """
        Copies `src` to `install_dir/name`. The copy is not executed before all of `deps` exist,
        which orders installs without making them compile dependencies.
        """
        dst = os.path.join(install_dir, name)
        self.build('install', [dst], [src], implicit=deps)
        self.install_files.append(dst)
        return dst

    def checkbuild(self, path: str) -> None:
        self.checkbuild_files.append(path)
