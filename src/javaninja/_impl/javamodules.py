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
The module types of Java definitions.

Properties are converted into the flags and file names of the individual build actions,
which are emitted by `javabuilder`.
"""

from __future__ import annotations

__all__ = [
    "JavaModule",
    "JavaLibrary",
    "JavaBinary",
    "JavaPrebuilt",
    "SdkPrebuilt",
    "GenRule",
    "ResourceBundle",
    "ModuleType",
    "module_type",
    "register_module_type",
    "UNCOMPILED",
    "MERGED",
    "REPACKAGED",
    "TRANSLATED",
    "FINAL",
]

import glob
import os
from os.path import basename, isdir, isfile, join
from typing import Dict, List, Optional, Sequence, Tuple

from .build.context import ModuleContext
from .build.definition import JavaDependency, Module, SdkDependency, SourceFileGenerator, SrcListProvider
from .config import DEVICE, HOST
from .jarspec import JarSpec
from .javabuilder import (BuilderFlags, compile_java, extract_classes, final_assemble, merge_archives, repackage,
                          resource_dirs_to_jar_specs, translate)
from .javadeps import classify
from .javasrcs import GENERATOR_PREFIX, aidl_flags, resolve_sources
from .support.logging import abort, logv

UNCOMPILED = 'uncompiled'
MERGED = 'compiled and merged'
REPACKAGED = 'repackaged'
TRANSLATED = 'translated and reassembled'
FINAL = 'final'


class JavaModule(Module, JavaDependency):
    """
    A module compiled from Java sources. The build actions run the following stages in order,
    each stage only if the previous one succeeded:

    #. classify the dependencies,
    #. resolve and generate the sources,
    #. compile the sources (skipped if there are none),
    #. merge the classes and resources with those of the static libraries,
    #. rewrite the merged archive if `jarjar_rules` is set,
    #. convert the result to dex and reassemble it with the resources if the module is dexed
       and has sources.
    """

    attributes = ('srcs', 'exclude_srcs', 'java_resource_dirs', 'exclude_java_resource_dirs', 'no_standard_libraries',
                  'javacflags', 'dxflags', 'java_libs', 'java_static_libs', 'srclist_libs', 'manifest', 'sdk_version',
                  'jarjar_rules', 'aidl_includes', 'export_aidl_include_dirs')

    def __init__(self, definition, name, variant, subDir, srcs=None, exclude_srcs=None, java_resource_dirs=None,
                 exclude_java_resource_dirs=None, no_standard_libraries=False, javacflags=None, dxflags=None, java_libs=None,
                 java_static_libs=None, srclist_libs=None, manifest=None, sdk_version='', jarjar_rules=None, aidl_includes=None,
                 export_aidl_include_dirs=None, dex=False, **kwArgs):
        Module.__init__(self, definition, name, variant, subDir, **kwArgs)
        self.srcs = srcs or []
        self.exclude_srcs = exclude_srcs or []
        self.java_resource_dirs = java_resource_dirs or []
        self.exclude_java_resource_dirs = exclude_java_resource_dirs or []
        self.no_standard_libraries = no_standard_libraries
        self.javacflags = javacflags or []
        self.dxflags = dxflags or []
        self.java_libs = java_libs or []
        self.java_static_libs = java_static_libs or []
        self.srclist_libs = srclist_libs or []
        self.manifest = manifest
        self.sdk_version = str(sdk_version)
        self.jarjar_rules = jarjar_rules
        self.aidl_includes = aidl_includes or []
        self.export_aidl_include_dirs = export_aidl_include_dirs or []
        self.dex = dex
        """Whether the classes are converted to dex. Set by the module type, not by the definition."""

        self.output_states = [UNCOMPILED]
        self.logtags_srcs: List[str] = []
        self._classpath_file: Optional[str] = None
        self._output_file: Optional[str] = None
        self._class_jar_specs: List[JarSpec] = []
        self._resource_jar_specs: List[JarSpec] = []
        self._export_aidl_include_dirs: List[str] = []

    @property
    def output_state(self) -> str:
        return self.output_states[-1]

    def _advance(self, state: str) -> None:
        logv(f'{self}: {self.output_state} -> {state}')
        self.output_states.append(state)

    def boot_classpath(self) -> str:
        """
        Gets the name of the library this module compiles against as boot classpath
        or '' if there is none.
        """
        if self.no_standard_libraries:
            return ''
        sdk = self.definition.config.sdk
        if self.variant == DEVICE:
            return sdk.boot_classpath(self.sdk_version)
        return sdk.default_boot_classpath if self.dex else ''

    def uses_default_libraries(self) -> bool:
        return not self.no_standard_libraries and self.variant == DEVICE and self.sdk_version == ''

    def dependency_names(self) -> List[str]:
        deps = []
        boot_classpath = self.boot_classpath()
        if boot_classpath:
            deps.append(boot_classpath)
        if self.uses_default_libraries():
            deps += self.definition.config.sdk.default_libraries
        deps += self.java_libs
        deps += self.java_static_libs
        deps += self.srclist_libs
        deps += [s[len(GENERATOR_PREFIX):] for s in self.srcs if s.startswith(GENERATOR_PREFIX)]
        return deps

    def export_aidl_include_dirs_paths(self) -> List[str]:
        return self.src_paths(self.export_aidl_include_dirs)

    def translate_flags(self, ctx: ModuleContext) -> List[str]:
        """
        Gets the dx flags. The environment toggles only add flags.
        """
        flags = list(self.dxflags)
        toggles = ctx.config.toggles
        if toggles.instrument:
            # dx does not maintain the local variable table of instrumented classes
            flags.append('--no-locals')
        if toggles.no_optimize:
            flags.append('--no-optimize')
        if toggles.debug_dump:
            flags += ['--debug', '--verbose', '--dump-to=' + ctx.out_path('classes.lst'), '--dump-width=1000']
        return flags

    def generate_build_actions(self, ctx: ModuleContext) -> None:
        self._export_aidl_include_dirs = self.export_aidl_include_dirs_paths()

        deps = classify(ctx, self)
        if ctx.failed():
            return

        flags = BuilderFlags()
        if self.javacflags:
            flags.javac_flags = ' '.join(self.javacflags)
        flags.aidl_flags = ' '.join(aidl_flags(ctx, self, deps.aidl_preprocessed, deps.aidl_include_dirs))

        javac_deps = []
        if deps.boot_classpath:
            flags.boot_classpath = '-bootclasspath ' + deps.boot_classpath
            javac_deps.append(deps.boot_classpath)
        if deps.classpath:
            flags.classpath = '-classpath ' + ':'.join(deps.classpath)
            javac_deps += deps.classpath

        sources = resolve_sources(ctx, self, deps.src_file_lists, flags)
        if ctx.failed():
            return
        self.logtags_srcs = sources.logtags

        class_specs = list(deps.class_jar_specs)
        if sources.srcs:
            classes = compile_java(ctx, sources.srcs, sources.src_file_lists, flags, javac_deps)
            if ctx.failed():
                return
            # the classes of this module take precedence over those of static libraries
            class_specs = [classes] + class_specs

        resource_specs = resource_dirs_to_jar_specs(ctx, self.java_resource_dirs, self.exclude_java_resource_dirs)
        if ctx.failed():
            return
        resource_specs += deps.resource_jar_specs

        manifest = self.src_path(self.manifest) if self.manifest else None
        output = merge_archives(ctx, class_specs, resource_specs, manifest)
        if ctx.failed():
            return
        self._advance(MERGED)

        if self.jarjar_rules:
            output = repackage(ctx, output, self.src_path(self.jarjar_rules))
            if ctx.failed():
                return
            classes, _ = extract_classes(ctx, output, 'jarjar')
            class_specs = [classes]
            self._advance(REPACKAGED)

        self._resource_jar_specs = resource_specs
        self._class_jar_specs = class_specs
        self._classpath_file = output.path

        if self.dex and sources.srcs:
            flags.dx_flags = ' '.join(self.translate_flags(ctx))
            dex_spec = translate(ctx, output, flags)
            if ctx.failed():
                return
            output = final_assemble(ctx, resource_specs, dex_spec)
            self._advance(TRANSLATED)

        ctx.checkbuild(output.path)
        self._output_file = output.path
        self._advance(FINAL)

    def classpath_file(self) -> str:
        return self._classpath_file

    def output_file(self) -> str:
        """The file suitable for installing or running."""
        return self._output_file

    def class_jar_specs(self) -> Sequence[JarSpec]:
        return self._class_jar_specs

    def resource_jar_specs(self) -> Sequence[JarSpec]:
        return self._resource_jar_specs

    def aidl_include_dirs(self) -> Sequence[str]:
        return self._export_aidl_include_dirs


class JavaLibrary(JavaModule):
    """A Java library, installed as `framework/<name>.jar`."""

    def __init__(self, definition, name, variant, subDir, **kwArgs):
        JavaModule.__init__(self, definition, name, variant, subDir, **kwArgs)
        self.installed_file: Optional[str] = None

    def generate_build_actions(self, ctx: ModuleContext) -> None:
        JavaModule.generate_build_actions(self, ctx)
        if ctx.failed():
            return
        self.installed_file = ctx.install_file(ctx.config.install_path(self.variant, 'framework'), self.name + '.jar', self.output_file())


class JavaBinary(JavaLibrary):
    """A Java library plus a wrapper script that executes it."""

    attributes = JavaLibrary.attributes + ('wrapper',)

    def __init__(self, definition, name, variant, subDir, wrapper=None, **kwArgs):
        JavaLibrary.__init__(self, definition, name, variant, subDir, **kwArgs)
        self.wrapper = wrapper

    def generate_build_actions(self, ctx: ModuleContext) -> None:
        JavaLibrary.generate_build_actions(self, ctx)
        if ctx.failed():
            return
        if not self.wrapper:
            ctx.module_error('a binary requires the "wrapper" attribute')
            return
        # Depend on the installed jar so that the wrapper can not be executed
        # by another action before the jar has been installed.
        ctx.install_file(ctx.config.install_path(self.variant, 'bin'), basename(self.wrapper), self.src_path(self.wrapper),
                         deps=[self.installed_file])


class JavaPrebuilt(Module, JavaDependency):
    """A library supplied as a single archive."""

    attributes = ('srcs',)

    def __init__(self, definition, name, variant, subDir, srcs=None, **kwArgs):
        Module.__init__(self, definition, name, variant, subDir, **kwArgs)
        self.srcs = srcs or []
        self._classpath_file: Optional[str] = None
        self._class_jar_specs: List[JarSpec] = []
        self._resource_jar_specs: List[JarSpec] = []

    def generate_build_actions(self, ctx: ModuleContext) -> None:
        if len(self.srcs) != 1:
            ctx.module_error('expected exactly one archive in sources')
            return
        prebuilt = self.src_path(self.srcs[0])
        if not isfile(prebuilt):
            ctx.module_error(f"module source path '{prebuilt}' does not exist")
            return

        class_spec, resource_spec = extract_classes(ctx, JarSpec.archive(prebuilt))

        self._classpath_file = prebuilt
        self._class_jar_specs = [class_spec]
        self._resource_jar_specs = [resource_spec]
        ctx.install_file(ctx.config.install_path(self.variant, 'framework'), self.name + '.jar', prebuilt)

    def classpath_file(self) -> str:
        return self._classpath_file

    def class_jar_specs(self) -> Sequence[JarSpec]:
        return self._class_jar_specs

    def resource_jar_specs(self) -> Sequence[JarSpec]:
        return self._resource_jar_specs

    def aidl_include_dirs(self) -> Sequence[str]:
        return []


class SdkPrebuilt(JavaPrebuilt, SdkDependency):
    """A prebuilt SDK archive, optionally accompanied by a preprocessed aidl file."""

    attributes = JavaPrebuilt.attributes + ('aidl_preprocessed',)

    def __init__(self, definition, name, variant, subDir, aidl_preprocessed=None, **kwArgs):
        JavaPrebuilt.__init__(self, definition, name, variant, subDir, **kwArgs)
        self.aidl_preprocessed_attr = aidl_preprocessed
        self._aidl_preprocessed: Optional[str] = None

    def generate_build_actions(self, ctx: ModuleContext) -> None:
        JavaPrebuilt.generate_build_actions(self, ctx)
        if self.aidl_preprocessed_attr:
            self._aidl_preprocessed = self.src_path(self.aidl_preprocessed_attr)

    def aidl_preprocessed(self) -> Optional[str]:
        return self._aidl_preprocessed


class GenRule(Module, SourceFileGenerator):
    """
    Generates source files by running `cmd`, in which `$(in)`, `$(out)` and `$(genDir)`
    are replaced by the inputs, the outputs and the output directory. Java modules use the
    generated files by referencing the module as ':<name>' in their `srcs`.
    """

    attributes = ('srcs', 'out', 'cmd')

    def __init__(self, definition, name, variant, subDir, srcs=None, out=None, cmd=None, **kwArgs):
        Module.__init__(self, definition, name, variant, subDir, **kwArgs)
        self.srcs = srcs or []
        self.out = out or []
        self.cmd = cmd
        self._outputs: List[str] = []

    def generate_build_actions(self, ctx: ModuleContext) -> None:
        if not self.cmd:
            ctx.module_error('a genrule requires the "cmd" attribute')
            return
        if not self.out:
            ctx.module_error('a genrule requires at least one file in "out"')
            return
        inputs = []
        for pattern in self.srcs:
            path = self.src_path(pattern)
            inputs += sorted(glob.glob(path, recursive=True)) if glob.has_magic(path) else [path]
        gen_dir = ctx.out_path('gen')
        outputs = [join(gen_dir, o) for o in self.out]
        cmd = self.cmd.replace('$(in)', ' '.join(inputs)).replace('$(out)', ' '.join(outputs)).replace('$(genDir)', gen_dir)
        ctx.build('genrule', outputs, inputs, variables={'cmd': cmd, 'genDir': gen_dir})
        self._outputs = outputs

    def generated_source_files(self) -> Sequence[str]:
        return self._outputs


class ResourceBundle(Module, SrcListProvider):
    """
    Compiles Android resources with aapt. The generated `R.java` sources are listed in a file that
    is passed to the compile step of the modules naming this module in `srclist_libs`.
    """

    attributes = ('resource_dirs', 'manifest', 'aaptflags')

    def __init__(self, definition, name, variant, subDir, resource_dirs=None, manifest='AndroidManifest.xml', aaptflags=None, **kwArgs):
        Module.__init__(self, definition, name, variant, subDir, **kwArgs)
        self.resource_dirs = resource_dirs if resource_dirs is not None else ['res']
        self.manifest = manifest
        self.aaptflags = aaptflags or []
        self._src_lists: List[str] = []

    def generate_build_actions(self, ctx: ModuleContext) -> None:
        manifest = self.src_path(self.manifest)
        if not isfile(manifest):
            ctx.module_error(f"module source path '{manifest}' does not exist")
            return
        resource_dirs = self.src_paths(self.resource_dirs)
        resources = []
        for resource_dir in resource_dirs:
            if not isdir(resource_dir):
                ctx.module_error(f"resource directory '{resource_dir}' does not exist")
                return
            for root, dirnames, filenames in os.walk(resource_dir):
                dirnames.sort()
                resources += [join(root, f) for f in sorted(filenames)]
        src_list = ctx.out_path('R.java.list')
        ctx.build('aapt', [src_list], [manifest], implicit=resources, variables={
            'genDir': ctx.out_path('gen'),
            'manifest': manifest,
            'aaptFlags': ' '.join(self.aaptflags),
            'resDirs': ' '.join('-S ' + d for d in resource_dirs),
        })
        self._src_lists = [src_list]

    def extra_src_lists(self) -> Sequence[str]:
        return self._src_lists


HOST_AND_DEVICE = 'host and device'
"""Device variant, plus a host variant if `host_supported` is set"""
HOST_ONLY = 'host'
DEVICE_ONLY = 'device'
ALL_VARIANTS = 'all'


class ModuleType:
    def __init__(self, name: str, cls: type, supported: str, defaults: Dict):
        self.name = name
        self.cls = cls
        self.supported = supported
        self.defaults = defaults

    def variants(self, host_supported: bool, device_supported: bool) -> Tuple[str, ...]:
        if self.supported == HOST_ONLY:
            return (HOST,)
        if self.supported == DEVICE_ONLY:
            return (DEVICE,)
        if self.supported == ALL_VARIANTS:
            return (DEVICE, HOST)
        return tuple(v for v, enabled in ((DEVICE, device_supported), (HOST, host_supported)) if enabled)

    def create(self, definition, name: str, variant: str, subDir: Optional[str], attrs: Dict) -> Module:
        kwArgs = dict(self.defaults)
        kwArgs.update(attrs)
        return self.cls(definition, name, variant, subDir, **kwArgs)


_module_types: Dict[str, ModuleType] = {}


def register_module_type(name: str, cls: type, supported: str = HOST_AND_DEVICE, **defaults) -> None:
    if name in _module_types:
        abort(f'module type {name} is already registered')
    _module_types[name] = ModuleType(name, cls, supported, defaults)


def module_type(name: str, context=None) -> ModuleType:
    t = _module_types.get(name)
    if t is None:
        abort(f"unknown module type '{name}'. Known types: " + ', '.join(sorted(_module_types)), context=context)
    return t


register_module_type('java_library', JavaLibrary, dex=True)
register_module_type('java_library_static', JavaLibrary, dex=True)
register_module_type('java_library_host', JavaLibrary, HOST_ONLY)
register_module_type('java_binary', JavaBinary, dex=True)
register_module_type('java_binary_host', JavaBinary, HOST_ONLY)
register_module_type('prebuilt_java_library', JavaPrebuilt)
register_module_type('prebuilt_sdk', SdkPrebuilt)
register_module_type('genrule', GenRule, ALL_VARIANTS)
register_module_type('resource_bundle', ResourceBundle, DEVICE_ONLY)
