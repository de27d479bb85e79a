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

__all__ = [
    "abort",
    "abort_or_warn",
    "log",
    "logv",
    "logvv",
    "log_error",
    "nyi",
    "colorize",
    "warn",
    "getLogTask",
    "setLogTask",
]

import sys, threading
import traceback
from typing import Any, NoReturn, Optional

from .options import _opts


# https://en.wikipedia.org/wiki/ANSI_escape_code#Colors
_ansi_color_table = {
    "black": "30",
    "red": "31",
    "green": "32",
    "yellow": "33",
    "blue": "34",
    "magenta": "35",
    "cyan": "36",
}

_logTask = threading.local()


def setLogTask(task):
    _logTask.task = task


def getLogTask():
    if not hasattr(_logTask, "task"):
        return None
    return _logTask.task


def _print_impl(msg: Optional[str] = None, end: Optional[str] = "\n", file=sys.stdout):
    try:
        print(msg, end=end, file=file)
    except UnicodeEncodeError as e:
        # Print the text as good as possible if the console can't encode it
        error_handler = "backslashreplace"
        print(colorize(f"[ENCODING ERROR] {e}. Encoding: {e.encoding}.", color="red"), file=sys.stderr)
        print(
            msg.encode(e.encoding, errors=error_handler).decode(e.encoding, errors="ignore"),
            end=end,
            file=file,
        )


def log(msg: Optional[str] = None, end: Optional[str] = "\n", file=sys.stdout):
    """
    Write a message to the console.
    All script output goes through this method thus allowing a subclass
    to redirect it.
    """
    task = getLogTask()
    if task is not None:
        task.log(msg)
        return
    if _opts.quiet:
        return
    if msg is None:
        _print_impl(end=end, file=file)
    else:
        _print_impl(str(msg), end=end, file=file)


def logv(msg: Optional[str] = None, end="\n") -> None:
    if _opts.verbose:
        log(msg, end=end)


def logvv(msg: Optional[str] = None, end="\n") -> None:
    if _opts.very_verbose:
        log(msg, end=end)


def log_error(msg: Optional[str] = None, end="\n") -> None:
    """
    Write an error message to the console.
    All script output goes through this method thus allowing a subclass
    to redirect it.
    """
    if msg is None:
        _print_impl(file=sys.stderr, end=end)
    else:
        _print_impl(colorize(str(msg), stream=sys.stderr), file=sys.stderr, end=end)


def colorize(msg: Optional[str], color="red", bright=True, stream=sys.stderr) -> Optional[str]:
    """
    Wraps `msg` in ANSI escape sequences to make it print to `stream` with foreground font color
    `color` and brightness `bright`. This method returns `msg` unchanged if it is None,
    if it already starts with the designated escape sequence or the execution environment does
    not support color printing on `stream`.
    """
    if msg is None:
        return None
    code = _ansi_color_table.get(color, None)
    if code is None:
        return abort("Unsupported color: " + color + ".\nSupported colors are: " + ", ".join(_ansi_color_table.keys()))
    if bright:
        code += ";1"
    color_on = "\033[" + code + "m"
    if not msg.startswith(color_on):
        isUnix = sys.platform.startswith("linux") or sys.platform in ["darwin", "freebsd"]
        if isUnix and hasattr(stream, "isatty") and stream.isatty():
            return color_on + msg + "\033[0m"
    return msg


def _context_message(context) -> str:
    if context is None:
        return ""
    if callable(context):
        return context()
    if hasattr(context, "__abort_context__"):
        return context.__abort_context__()
    return str(context)


def warn(msg: str, context=None) -> None:
    if _opts.warn and not _opts.quiet:
        contextMsg = _context_message(context)
        if contextMsg:
            msg = contextMsg + ":\n" + msg
        msg = colorize("WARNING: " + msg, color="magenta", bright=True, stream=sys.stderr)
        task = getLogTask()
        if task is None:
            _print_impl(msg, file=sys.stderr)
        else:
            task.log(msg)


def abort(codeOrMessage: str | int, context=None) -> NoReturn:
    """
    Aborts the program with a SystemExit exception.
    If `codeOrMessage` is a plain integer, it specifies the system exit status;
    if it is None, the exit status is zero; if it has another type (such as a string),
    the object's value is printed and the exit status is 1.

    The `context` argument can provide extra context for an error message.
    If `context` is callable, it is called and the returned value is printed.
    If `context` defines a __abort_context__ method, the latter is called and
    its return value is printed. Otherwise str(context) is printed.
    """
    from .envvars import is_continuous_integration

    sys.stdout.flush()
    if is_continuous_integration() or _opts.verbose:
        traceback.print_stack()
    contextMsg = _context_message(context)

    if isinstance(codeOrMessage, int):
        # Log the context separately so that SystemExit
        # communicates the intended exit status
        error_message = contextMsg
        error_code = codeOrMessage
    elif contextMsg:
        error_message = contextMsg + ":\n" + codeOrMessage
        error_code = 1
    else:
        error_message = codeOrMessage
        error_code = 1

    if error_message:
        t = getLogTask()
        log_error(error_message if t is None else f"[{t.subject}] {error_message}")
    raise SystemExit(error_code)


def abort_or_warn(message: str, should_abort: bool, context=None) -> Optional[NoReturn]:
    if should_abort:
        abort(message, context)
    else:
        warn(message, context)


def nyi(name: str, obj: Any) -> NoReturn:
    """Throw a not yet implemented error."""
    abort(f"{name} is not implemented for {obj.__class__.__name__}")
    raise NotImplementedError()
