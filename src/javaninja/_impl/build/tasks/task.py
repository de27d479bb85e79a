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
from abc import ABCMeta, abstractmethod
from argparse import Namespace
from typing import Optional

from ...support.logging import _print_impl, setLogTask
from ...support.options import _opts
from ..definition import Module

__all__ = ["Task"]

Args = Namespace

class Task(object, metaclass=ABCMeta):
    """A task executed while generating build actions."""

    subject: Module
    args: Args

    def __init__(self, subject: Module, args: Args):
        """
        :param subject: the module variant for which this task is executed
        :param args: arguments of the generating command
        """
        self.subject = subject
        self.args = args

    def __str__(self) -> str:
        return f"{self.__class__.__name__}[{self.subject}]"

    def __repr__(self) -> str:
        return str(self)

    @property
    def name(self) -> str:
        return self.subject.name

    def enter(self):
        setLogTask(self)

    def leave(self):
        setLogTask(None)

    def log(self, msg: Optional[str]):
        if _opts.quiet:
            return
        _print_impl(f"[{self.subject}] {msg if msg is not None else ''}")

    @abstractmethod
    def execute(self) -> None:
        """Executes this task."""
