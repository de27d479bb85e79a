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
Classification of the dependency edges of a Java module.

Every edge from a Java module to a module with a Java capability falls into exactly one
category, which determines how the dependency contributes to the compilation. The checks
are pure lookups against the declared properties of the depending module.
"""

from __future__ import annotations

__all__ = [
    "BOOT_CLASSPATH",
    "DEFAULT_LIBRARY",
    "SHARED_LIBRARY",
    "STATIC_LIBRARY",
    "SRC_LIST",
    "ClassifiedDeps",
    "DependencyClassificationError",
    "classify",
    "dependency_category",
    "is_classified",
]

from typing import List, Optional

from .build.context import ModuleContext
from .build.definition import JavaDependency, Module, SdkDependency, SrcListProvider
from .jarspec import JarSpec
from .support.logging import logvv

BOOT_CLASSPATH = 'boot classpath'
DEFAULT_LIBRARY = 'default library'
SHARED_LIBRARY = 'shared library'
STATIC_LIBRARY = 'static library'
SRC_LIST = 'extra source lists'


class DependencyClassificationError(Exception):
    """
    A dependency edge matches none of the categories. This means the dependency graph
    does not agree with the declared properties of the module and is never recoverable.
    """

    def __init__(self, module: Module, dependency: Module):
        super(DependencyClassificationError, self).__init__(f"unknown dependency '{dependency.name}' for '{module.name}' ({module.variant})")
        self.module_name = module.name
        self.dependency_name = dependency.name


class ClassifiedDeps:
    def __init__(self):
        self.classpath: List[str] = []
        self.boot_classpath: Optional[str] = None
        self.class_jar_specs: List[JarSpec] = []
        self.resource_jar_specs: List[JarSpec] = []
        self.aidl_include_dirs: List[str] = []
        self.aidl_preprocessed: Optional[str] = None
        self.src_file_lists: List[str] = []

    def __repr__(self):
        return f'ClassifiedDeps[classpath={self.classpath}, boot_classpath={self.boot_classpath}]'


def is_classified(dep: Module) -> bool:
    """Edges to modules without a Java capability, such as source generators, are not classified."""
    return isinstance(dep, (JavaDependency, SrcListProvider))


def dependency_category(module, dep: Module) -> str:
    """
    Gets the category of the edge from `module` to `dep`.
    :raises DependencyClassificationError: if no category matches
    """
    name = dep.name
    if isinstance(dep, JavaDependency):
        if name == module.boot_classpath():
            return BOOT_CLASSPATH
        if module.uses_default_libraries() and name in module.definition.config.sdk.default_libraries:
            return DEFAULT_LIBRARY
        if name in module.java_libs:
            return SHARED_LIBRARY
        if name in module.java_static_libs:
            return STATIC_LIBRARY
    if isinstance(dep, SrcListProvider) and name in module.srclist_libs:
        return SRC_LIST
    raise DependencyClassificationError(module, dep)


def classify(ctx: ModuleContext, module, deps: Optional[List[Module]] = None) -> ClassifiedDeps:
    """
    Buckets the direct dependencies of `module` in the order of `deps`, which defaults to the
    resolved dependencies of the module. A conflict between preprocessed aidl files is reported
    as a module error on `ctx`.
    """
    result = ClassifiedDeps()
    for dep in module.deps if deps is None else deps:
        if not is_classified(dep):
            continue
        category = dependency_category(module, dep)
        logvv(f'{module}: {dep} is a {category} dependency')
        if category == BOOT_CLASSPATH:
            assert result.boot_classpath is None, module
            result.boot_classpath = dep.classpath_file()
        elif category in (DEFAULT_LIBRARY, SHARED_LIBRARY):
            result.classpath.append(dep.classpath_file())
        elif category == STATIC_LIBRARY:
            result.classpath.append(dep.classpath_file())
            result.class_jar_specs.extend(dep.class_jar_specs())
            result.resource_jar_specs.extend(dep.resource_jar_specs())
        else:
            assert category == SRC_LIST, category
            result.src_file_lists.extend(dep.extra_src_lists())

        if isinstance(dep, JavaDependency):
            result.aidl_include_dirs.extend(dep.aidl_include_dirs())
        if isinstance(dep, SdkDependency):
            preprocessed = dep.aidl_preprocessed()
            if preprocessed:
                if result.aidl_preprocessed:
                    ctx.module_error(f"multiple dependencies with preprocessed aidls:\n '{result.aidl_preprocessed}'\n '{preprocessed}'")
                else:
                    result.aidl_preprocessed = preprocessed
    return result
