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

import os.path
from abc import ABCMeta, abstractmethod
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence

from ...support.logging import abort, logvv, nyi, warn
from .constituent import DefinitionConstituent

if TYPE_CHECKING:
    from ...jarspec import JarSpec
    from ..context import ModuleContext
    from .loader import Definition

__all__ = [
    "Module",
    "JavaDependency",
    "SdkDependency",
    "SourceFileGenerator",
    "SrcListProvider",
]


class JavaDependency(metaclass=ABCMeta):
    """
    Capability of a module that can be compiled against or merged into another Java module.
    The values are only available after the module generated its build actions.
    """

    @abstractmethod
    def classpath_file(self) -> str:
        """Output file suitable for inserting into the classpath of another compile."""

    @abstractmethod
    def class_jar_specs(self) -> Sequence[JarSpec]:
        """JarSpecs suitable for inserting classes from a static library into another jar."""

    @abstractmethod
    def resource_jar_specs(self) -> Sequence[JarSpec]:
        """JarSpecs suitable for inserting resources from a static library into another jar."""

    @abstractmethod
    def aidl_include_dirs(self) -> Sequence[str]:
        """Directories that dependents pass to the aidl tool."""


class SdkDependency(JavaDependency):
    """A Java dependency that can also provide a preprocessed aidl file."""

    @abstractmethod
    def aidl_preprocessed(self) -> Optional[str]:
        pass


class SourceFileGenerator(metaclass=ABCMeta):
    """Capability of a module that generates source files for the modules referencing it in `srcs`."""

    @abstractmethod
    def generated_source_files(self) -> Sequence[str]:
        pass


class SrcListProvider(metaclass=ABCMeta):
    """
    Capability of a module that generates files listing extra sources
    which are passed to the compile step of its dependents.
    """

    @abstractmethod
    def extra_src_lists(self) -> Sequence[str]:
        pass


class Module(DefinitionConstituent):
    """
    A module variant declared in a definition file.
    The name must be unique across all modules of the same variant.
    """

    deps: List[Module]

    attributes: tuple = ()
    """Names of the attributes a definition may set for this kind of module"""

    def __init__(self, definition: Definition, name: str, variant: str, subDir: Optional[str], **kwArgs):
        DefinitionConstituent.__init__(self, definition, name, variant)
        self.subDir = subDir
        self.deps = []
        self.failed = False
        self.__dict__.update(kwArgs)

    def dir(self) -> str:
        """Directory of the module relative to the definition's source root."""
        return os.path.normpath(os.path.join(self.definition.dir, self.subDir or ''))

    def src_path(self, path: str) -> str:
        return os.path.normpath(os.path.join(self.dir(), path))

    def src_paths(self, paths: Sequence[str]) -> List[str]:
        return [self.src_path(p) for p in paths]

    def dependency_names(self) -> List[str]:
        """
        Gets the names of the modules this module depends on, in the order
        in which the edges are visited when the build actions are generated.
        """
        return []

    def resolveDeps(self) -> None:
        """
        Resolves the names returned by `dependency_names` to the modules of the same variant.
        """
        names = []
        for name in self.dependency_names():
            if name not in names:
                names.append(name)
            else:
                logvv(f'[{self}: ignoring duplicate dependency {name}]')
        self.deps = [self.definition.dependency(name, self.variant, context=self) for name in names]

    def walk_deps(self, visit: Callable[[Module], None], visited: Optional[set] = None, path: Optional[List[Module]] = None):
        """
        Walks the dependency graph rooted at this module, calling `visit` on every
        module after all of its dependencies have been visited.
        """
        if visited is None:
            visited = set()
        if path is None:
            path = []
        if self in path:
            cycle = path[path.index(self):] + [self]
            abort('dependency cycle: ' + ' -> '.join(str(m) for m in cycle), context=self)
        if self in visited:
            return
        path.append(self)
        for dep in self.deps:
            dep.walk_deps(visit, visited, path)
        path.pop()
        visited.add(self)
        visit(self)

    def generate_build_actions(self, ctx: ModuleContext) -> None:
        nyi('generate_build_actions', self)

    def abort(self, msg):
        """
        Aborts with given message prefixed by the origin of this module.
        """
        abort(msg, context=self)

    def warn(self, msg):
        """
        Warns with given message prefixed by the origin of this module.
        """
        warn(msg, context=self)
