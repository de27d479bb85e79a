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
Descriptors of partial archive contents.

A JarSpec is the unit that is merged into archives: either a directory of extracted or compiled
files together with a file list naming the files to take from it, or a complete archive whose
entries are all taken.
"""

from __future__ import annotations

__all__ = ["JarSpec", "ARCHIVE", "DIRECTORY"]

from dataclasses import dataclass
from typing import List, Optional

ARCHIVE = 'archive'
DIRECTORY = 'directory'


@dataclass(frozen=True)
class JarSpec:
    kind: str
    path: str
    """The archive file or the root directory of the listed files"""
    file_list: Optional[str] = None
    """File with one path per line, relative to `path`. Only used for directories."""

    def __post_init__(self):
        assert self.kind in (ARCHIVE, DIRECTORY), self.kind
        assert (self.kind == DIRECTORY) == (self.file_list is not None), self

    @staticmethod
    def directory(path: str, file_list: str) -> JarSpec:
        return JarSpec(DIRECTORY, path, file_list)

    @staticmethod
    def archive(path: str) -> JarSpec:
        return JarSpec(ARCHIVE, path)

    def is_archive(self) -> bool:
        return self.kind == ARCHIVE

    def jar_args(self) -> List[str]:
        """
        Gets the arguments selecting this spec on the command line of the `jar` tool command.
        """
        if self.is_archive():
            return ['-j', self.path]
        return ['-C', self.path, '-l', self.file_list]

    def deps(self) -> List[str]:
        """
        Gets the files an action reading this spec must depend on.
        The listed files of a directory are covered by the file list, which is rewritten whenever they change.
        """
        if self.is_archive():
            return [self.path]
        return [self.file_list]

    def __str__(self):
        if self.is_archive():
            return self.path
        return f'{self.path} ({self.file_list})'
