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

__all__ = ["Definition", "DEFAULT_DEFINITION_FILE"]

import copy
import os
import runpy
from os.path import abspath, dirname, exists, relpath
from typing import Dict, List, Optional, Sequence

from ...config import VARIANTS, Config
from ...support.logging import abort, logv
from .dependency import Module

DEFAULT_DEFINITION_FILE = 'javamodules.py'

_supported_definition_attributes = frozenset(['name', 'config', 'modules'])
_common_module_attributes = frozenset(['type', 'dir', 'host_supported', 'device_supported'])


class Definition:
    """
    The modules declared by one definition file. A definition file is a Python file that
    assigns a dict to the global variable `definition`, e.g.::

        definition = {
            "name": "example",
            "config": {"java_version": "1.8"},
            "modules": {
                "example-lib": {
                    "type": "java_library",
                    "srcs": ["src/**/*.java"],
                    "host_supported": True,
                },
            },
        }

    Module directories are relative to the directory of the definition file and all
    generated paths are relative to the working directory.
    """

    def __init__(self, name: str, path: Optional[str], dir: str, config: Config):
        self.name = name
        self.path = path
        self.dir = dir
        self.config = config
        self.modules: List[Module] = []
        self._modules_by_variant: Dict[str, Dict[str, Module]] = {v: {} for v in VARIANTS}

    def __str__(self):
        return self.name

    def __abort_context__(self) -> str:
        return f'  File "{self.path}"' if self.path else f'  definition {self.name}'

    @staticmethod
    def load(path: str, overrides: Optional[Dict] = None) -> Definition:
        """
        Loads the definition file at `path` and resolves the dependencies of its modules.
        """
        if not exists(path):
            abort(f'definition file {path} does not exist')
        logv(f'[loading definition {path}]')
        namespace = runpy.run_path(path)
        d = namespace.get('definition')
        if not isinstance(d, dict):
            abort(f'{path} must assign a dict to the variable "definition"')
        return Definition.from_dict(d, path=path, overrides=overrides)

    @staticmethod
    def from_dict(d: Dict, path: Optional[str] = None, dir: Optional[str] = None, overrides: Optional[Dict] = None) -> Definition:
        """
        Creates a definition from its dict representation. The dict is not modified.
        """
        d = copy.deepcopy(d)
        context = path or 'definition'
        unknown = set(d.keys()) - _supported_definition_attributes
        if unknown:
            abort(f'{context} defines unsupported definition attribute: ' + ', '.join(sorted(unknown)))
        name = d.get('name')
        if not name:
            abort(f'{context} does not define a name')
        if dir is None:
            dir = relpath(dirname(abspath(path))) if path else os.curdir
        definition = Definition(name, path, dir, None)
        definition.config = Config.load(d.get('config'), overrides, context=definition)
        definition._load_modules(d.get('modules', {}))
        definition.resolve()
        return definition

    @staticmethod
    def _pop_bool(attrs, name, default, context):
        v = attrs.pop(name, default)
        if not isinstance(v, bool):
            abort(f'Attribute "{name}" for {context} must be a boolean')
        return v

    def _load_modules(self, modulesMap: Dict) -> None:
        from ...javamodules import module_type

        for name, attrs in sorted(modulesMap.items()):
            context = 'module ' + name
            typeName = attrs.pop('type', None)
            if not typeName:
                abort(f'{context} does not define a type', context=self)
            t = module_type(typeName, context=self)
            subDir = attrs.pop('dir', None)
            host_supported = Definition._pop_bool(attrs, 'host_supported', False, context)
            device_supported = Definition._pop_bool(attrs, 'device_supported', True, context)
            unknown = set(attrs.keys()) - frozenset(t.cls.attributes)
            if unknown:
                abort(f'{context} ({typeName}) defines unsupported attribute: ' + ', '.join(sorted(unknown)), context=self)
            for key, value in attrs.items():
                if isinstance(value, str) and key in ('srcs', 'exclude_srcs', 'java_libs', 'java_static_libs', 'srclist_libs', 'out'):
                    abort(f'Attribute "{key}" for {context} must be a list', context=self)
            variants = t.variants(host_supported, device_supported)
            if not variants:
                abort(f'{context} is not enabled for any variant', context=self)
            for variant in variants:
                m = t.create(self, name, variant, subDir, copy.deepcopy(attrs))
                self._register(m)

    def _register(self, m: Module) -> None:
        existing = self._modules_by_variant[m.variant].get(m.name)
        if existing is not None:
            abort(f'module {m.name} is defined twice for the {m.variant} variant', context=m)
        self._modules_by_variant[m.variant][m.name] = m
        self.modules.append(m)

    def dependency(self, name: str, variant: str, fatalIfMissing: bool = True, context=None) -> Optional[Module]:
        """
        Gets the module named `name` for `variant`.
        """
        m = self._modules_by_variant[variant].get(name)
        if m is None and fatalIfMissing:
            abort(f"module '{name}' ({variant}) not found", context=context)
        return m

    def modules_for(self, variants: Optional[Sequence[str]] = None) -> List[Module]:
        if variants is None:
            return list(self.modules)
        return [m for m in self.modules if m.variant in variants]

    def resolve(self) -> None:
        for m in self.modules:
            m.resolveDeps()
