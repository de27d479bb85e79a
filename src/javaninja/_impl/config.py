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

__all__ = ["Config", "SdkPolicy", "TranslateToggles", "HOST", "DEVICE", "VARIANTS"]

import os
import shlex
import sys
from dataclasses import dataclass, field, fields, replace
from typing import Dict, List, Optional, Tuple

from .support.envvars import env_var_is_set, get_env
from .support.logging import abort

HOST = 'host'
DEVICE = 'device'
VARIANTS = (DEVICE, HOST)


@dataclass(frozen=True)
class SdkPolicy:
    """
    Names of the libraries a module compiles against depending on its `sdk_version`.
    """
    default_boot_classpath: str = 'core-libart'
    public_stubs: str = 'android_stubs_current'
    system_stubs: str = 'android_system_stubs_current'
    versioned_prefix: str = 'sdk_v'
    default_libraries: Tuple[str, ...] = ('core-libart', 'core-junit', 'ext', 'framework')

    def boot_classpath(self, sdk_version: str) -> str:
        """Gets the boot classpath library of a device module."""
        if sdk_version == '':
            return self.default_boot_classpath
        elif sdk_version == 'current':
            return self.public_stubs
        elif sdk_version == 'system_current':
            return self.system_stubs
        else:
            return self.versioned_prefix + sdk_version


@dataclass(frozen=True)
class TranslateToggles:
    """Debug switches of the dx step, read from the environment."""
    no_optimize: bool = False
    debug_dump: bool = False
    instrument: bool = False

    @staticmethod
    def from_env() -> TranslateToggles:
        return TranslateToggles(
            no_optimize=env_var_is_set('NO_OPTIMIZE_DX'),
            debug_dump=env_var_is_set('GENERATE_DEX_DEBUG'),
            instrument=env_var_is_set('EMMA_INSTRUMENT'),
        )


def _default_tool_prefix() -> str:
    return shlex.quote(sys.executable) + ' -m javaninja'


@dataclass(frozen=True)
class Config:
    out_dir: str = 'out'
    install_dir: Optional[str] = None
    """Defaults to `<out_dir>/install`"""
    java_version: str = '1.7'
    javac: str = 'javac'
    jarjar: str = 'jarjar'
    dx: str = 'dx'
    aidl: str = 'aidl'
    aapt: str = 'aapt'
    logtags: str = 'java-event-log-tags.py'
    merge_logtags: str = 'merge-event-log-tags.py'
    javaninja: str = field(default_factory=_default_tool_prefix)
    """Command prefix running the archive tool commands of this package"""
    sdk: SdkPolicy = field(default_factory=SdkPolicy)
    toggles: TranslateToggles = field(default_factory=TranslateToggles)

    _env_vars = {
        'out_dir': 'JAVANINJA_OUT_DIR',
        'install_dir': 'JAVANINJA_INSTALL_DIR',
        'javac': 'JAVAC',
        'jarjar': 'JARJAR',
        'dx': 'DX',
        'aidl': 'AIDL',
        'aapt': 'AAPT',
    }

    @property
    def install_root(self) -> str:
        return self.install_dir or os.path.join(self.out_dir, 'install')

    def intermediates_dir(self, variant: str, name: str) -> str:
        return os.path.join(self.out_dir, variant, name)

    def install_path(self, variant: str, *parts: str) -> str:
        return os.path.join(self.install_root, variant, *parts)

    @staticmethod
    def load(settings: Optional[Dict] = None, overrides: Optional[Dict] = None, context=None) -> Config:
        """
        Creates a configuration from, in increasing precedence, the defaults, the environment,
        the `config` section of a definition file and command line overrides.
        """
        values = {'toggles': TranslateToggles.from_env()}
        for attr, var in Config._env_vars.items():
            value = get_env(var)
            if value:
                values[attr] = value
        known = {f.name for f in fields(Config)}
        for key, value in (settings or {}).items():
            if key == 'sdk':
                values['sdk'] = _load_sdk_policy(value, context)
            elif key in known and key != 'toggles':
                values[key] = value
            else:
                abort(f'unsupported config attribute: {key}', context=context)
        for key, value in (overrides or {}).items():
            if value is not None:
                values[key] = value
        return Config(**values)

    def with_overrides(self, **kwargs) -> Config:
        return replace(self, **kwargs)


def _load_sdk_policy(attrs: Dict, context) -> SdkPolicy:
    known = {f.name for f in fields(SdkPolicy)}
    unknown = set(attrs.keys()) - known
    if unknown:
        abort('unsupported sdk attribute: ' + ', '.join(sorted(unknown)), context=context)
    attrs = dict(attrs)
    if 'default_libraries' in attrs:
        libs: List[str] = attrs['default_libraries']
        attrs['default_libraries'] = tuple(libs)
    return SdkPolicy(**attrs)
