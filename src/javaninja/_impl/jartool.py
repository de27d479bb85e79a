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
The archive commands run by the build actions: merging JarSpecs into an archive,
extracting an archive into a JarSpec and listing the files of a directory.
"""

from __future__ import annotations

__all__ = [
    "JarWriter",
    "DEFAULT_MANIFEST",
    "MANIFEST_NAME",
    "write_jar",
    "extract_jar",
    "list_files",
    "write_file_list",
    "read_file_list",
]

import fnmatch
import os
import tempfile
import zipfile
from os.path import basename, dirname, isabs, join, normpath, relpath
from typing import Dict, List, Optional, Sequence, Tuple

from .jarspec import JarSpec
from .support.logging import abort, abort_or_warn, logv, logvv

MANIFEST_NAME = 'META-INF/MANIFEST.MF'
DEFAULT_MANIFEST = 'Manifest-Version: 1.0\nCreated-By: javaninja\n'

# Entries get a fixed time stamp so that archives only depend on their content.
_FIXED_DATE_TIME = (2008, 1, 1, 0, 0, 0)


def read_file_list(path: str) -> List[str]:
    with open(path) as fp:
        return [line.rstrip('\n') for line in fp if line.strip()]


def _write_lines(path: str, lines: Sequence[str]) -> None:
    parent = dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, 'w') as fp:
        for line in lines:
            fp.write(line + '\n')


class JarWriter(object):
    """
    Creates an archive from ordered entries. The archive is written to a temporary file
    which replaces `path` only if no error occurred.

    The first entry added for a path is kept. Later entries for the same path are dropped
    and reported with the provenance of both entries.
    """

    def __init__(self, path: str, manifest: Optional[str] = None, duplicates_action: str = 'warn', context=None):
        assert duplicates_action in ['warn', 'abort']
        self.path = path
        self.manifest = manifest
        self.duplicates_action = duplicates_action
        self.context = context
        self.zf = None
        self.tmpPath = None
        self._provenance_map: Dict[str, str] = {}

    def __enter__(self):
        path_dir = dirname(self.path) or os.curdir
        os.makedirs(path_dir, exist_ok=True)
        # Temporary file must be on the same file system as self.path for os.replace to be atomic.
        fd, self.tmpPath = tempfile.mkstemp(suffix=basename(self.path), dir=path_dir)
        os.close(fd)
        try:
            self.zf = zipfile.ZipFile(self.tmpPath, 'w', compression=zipfile.ZIP_DEFLATED)
            if self.manifest is None:
                self._add_bytes(DEFAULT_MANIFEST.encode(), MANIFEST_NAME, '<default manifest>')
            else:
                self.add_file(self.manifest, MANIFEST_NAME, self.manifest)
        except BaseException:
            self._discard()
            raise
        return self

    def _discard(self):
        if self.zf is not None:
            self.zf.close()
        os.remove(self.tmpPath)

    def __exit__(self, exc_type, exc_value, traceback):
        if exc_value:
            self._discard()
        else:
            self.zf.close()
            os.chmod(self.tmpPath, 0o644)
            os.replace(self.tmpPath, self.path)

    def _add_provenance(self, archive_name: str, provenance: str) -> bool:
        old_provenance = self._provenance_map.get(archive_name)
        if old_provenance is not None:
            nl = os.linesep
            msg = f"Duplicate archive entry: '{archive_name}'" + nl
            msg += '  kept provenance: ' + old_provenance + nl
            msg += '  dropped provenance: ' + provenance
            abort_or_warn(msg, self.duplicates_action == 'abort', context=self.context)
            return False
        self._provenance_map[archive_name] = provenance
        return True

    @staticmethod
    def _zipinfo(archive_name: str, mode: int = 0o644) -> zipfile.ZipInfo:
        info = zipfile.ZipInfo(archive_name, date_time=_FIXED_DATE_TIME)
        info.compress_type = zipfile.ZIP_DEFLATED
        info.external_attr = (mode & 0xFFFF) << 16
        return info

    def _add_bytes(self, data: bytes, archive_name: str, provenance: str) -> None:
        if self._add_provenance(archive_name, provenance):
            self.zf.writestr(self._zipinfo(archive_name), data)

    def add_file(self, filename: str, archive_name: str, provenance: Optional[str] = None) -> None:
        if self._add_provenance(archive_name, provenance or filename):
            with open(filename, 'rb') as fp:
                self.zf.writestr(self._zipinfo(archive_name, os.stat(filename).st_mode), fp.read())

    def add_directory(self, directory: str, file_list: str) -> None:
        """Adds the files of `directory` named in `file_list`, in the order of the list."""
        for name in read_file_list(file_list):
            if name == MANIFEST_NAME:
                logvv(f'ignoring {join(directory, name)}')
                continue
            self.add_file(join(directory, name), name, join(directory, name))

    def add_archive(self, archive: str) -> None:
        """Adds the file entries of another archive, except for its manifest."""
        with zipfile.ZipFile(archive) as src:
            for info in src.infolist():
                if info.is_dir() or info.filename == MANIFEST_NAME:
                    continue
                if self._add_provenance(info.filename, f'{archive}!{info.filename}'):
                    mode = (info.external_attr >> 16) & 0xFFFF or 0o644
                    self.zf.writestr(self._zipinfo(info.filename, mode), src.read(info))

    def add_spec(self, spec: JarSpec) -> None:
        if spec.is_archive():
            self.add_archive(spec.path)
        else:
            self.add_directory(spec.path, spec.file_list)


def write_jar(path: str, specs: Sequence[JarSpec], manifest: Optional[str] = None, duplicates_action: str = 'warn') -> None:
    """Writes the entries of `specs`, in order, to the archive at `path`."""
    logv(f'Writing {path}')
    with JarWriter(path, manifest, duplicates_action) as jar:
        for spec in specs:
            jar.add_spec(spec)


def _is_sane_name(m: str) -> bool:
    if isabs(m):
        return False
    return not normpath(m).startswith('..')


def extract_jar(archive: str, dst: str, classes_list: str, resources_list: str) -> Tuple[List[str], List[str]]:
    """
    Extracts `archive` to `dst` and writes the sorted names of the extracted class files
    and of the other files, except for the manifest, to the given list files.
    """
    logv(f'Extracting {archive} to {dst}')
    classes = []
    resources = []
    with zipfile.ZipFile(archive) as zf:
        problematic_files = [m for m in zf.namelist() if not _is_sane_name(m)]
        if problematic_files:
            abort("Refusing to create files outside of the destination folder.\n" +
                  "Reasons might be entries with absolute paths or paths pointing to the parent directory (starting with `..`).\n" +
                  f"Archive: {archive} \nProblematic files:\n{os.linesep.join(problematic_files)}")
        os.makedirs(dst, exist_ok=True)
        for zipinfo in zf.infolist():
            if zipinfo.is_dir():
                continue
            extracted_file = zf.extract(zipinfo, dst)
            unix_attributes = (zipinfo.external_attr >> 16) & 0xFFFF
            if unix_attributes != 0:
                os.chmod(extracted_file, unix_attributes)
            if zipinfo.filename.endswith('.class'):
                classes.append(zipinfo.filename)
            elif zipinfo.filename != MANIFEST_NAME:
                resources.append(zipinfo.filename)
    classes.sort()
    resources.sort()
    _write_lines(classes_list, classes)
    _write_lines(resources_list, resources)
    return classes, resources


def list_files(directory: str, patterns: Sequence[str] = ('*',)) -> List[str]:
    """
    Gets the sorted paths, relative to `directory` and with '/' as separator, of the files
    whose name matches one of `patterns`.
    """
    result = []
    for root, _, filenames in os.walk(directory):
        for name in filenames:
            if any(fnmatch.fnmatch(name, p) for p in patterns):
                result.append(relpath(join(root, name), directory).replace(os.sep, '/'))
    return sorted(result)


def write_file_list(directory: str, patterns: Sequence[str], output: str, full_paths: bool = False) -> List[str]:
    files = list_files(directory, patterns)
    if full_paths:
        files = [join(directory, f) for f in files]
    _write_lines(output, files)
    return files
