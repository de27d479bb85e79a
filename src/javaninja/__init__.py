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
The javaninja package.

Serves as the proxy for the implementation modules in `_impl`.

DO NOT WRITE IMPLEMENTATION CODE HERE.
"""

from ._impl.build.definition import *
from ._impl.build.definition.loader import Definition, DEFAULT_DEFINITION_FILE
from ._impl.build.context import BuildStatement, ModuleContext, ModuleError
from ._impl.config import Config, SdkPolicy, TranslateToggles, HOST, DEVICE, VARIANTS
from ._impl.generator import Generator
from ._impl.jarspec import JarSpec
from ._impl.javadeps import ClassifiedDeps, DependencyClassificationError, classify
from ._impl.javamodules import *
from ._impl.main import main
