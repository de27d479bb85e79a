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
from abc import ABCMeta
import os.path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .loader import Definition

class DefinitionConstituent(metaclass=ABCMeta):
    name: str
    definition: Definition
    variant: str
    """The build variant ('host' or 'device') this constituent was created for"""

    def __init__(self, definition: Definition, name: str, variant: str):
        self.name = name
        self.definition = definition
        self.variant = variant

    def origin(self) -> Optional[tuple[str, int]]:
        """
        Gets a 2-tuple (file, line) describing the source file where this constituent
        is defined or None if the location cannot be determined.
        """
        path = self.definition.path
        if path and os.path.exists(path):
            import tokenize
            with open(path) as fp:
                candidate = None
                for t in tokenize.generate_tokens(fp.readline):
                    _, tval, (srow, _), _, _ = t
                    if candidate is None:
                        if tval in ('"' + self.name + '"', "'" + self.name + "'"):
                            candidate = srow
                    else:
                        if tval == ':':
                            return (path, srow)
                        else:
                            candidate = None
        return None

    def __abort_context__(self) -> str:
        """
        Gets a description of where this constituent was defined in terms of source file
        and line number.
        """
        loc = self.origin()
        if loc:
            path, lineNo = loc
            return f'  File "{path}", line {lineNo} in definition of {self.name} ({self.variant})'
        return f'  {self.definition.name}:{self.name} ({self.variant})'

    def _comparison_key(self) -> tuple[str, str, str]:
        return self.definition.name, self.name, self.variant

    def __eq__(self, other):
        if not isinstance(other, DefinitionConstituent):
            return NotImplemented
        return self._comparison_key() == other._comparison_key()

    def __ne__(self, other):
        if not isinstance(other, DefinitionConstituent):
            return NotImplemented
        return self._comparison_key() != other._comparison_key()

    def __lt__(self, other):
        if not isinstance(other, DefinitionConstituent):
            return NotImplemented
        return self._comparison_key() < other._comparison_key()

    def __hash__(self):
        return hash(self._comparison_key())

    def __str__(self):
        return f'{self.name}[{self.variant}]'

    def __repr__(self):
        return str(self)
