#!/usr/bin/env python3
# ==============================================================================
# common.py
# ==============================================================================
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# SPDX-License-Identifier: BSD-3-Clause
# See LICENSE file in the project root.
#
# Purpose:
#   Shared terminal output helpers for project automation scripts.
#       Provides colored status lines, section banners and indented
#       detail lines used by prepare_release.
#
# Usage:
#   Import utilities in other scripts:
#          from common import print_success, print_warning, print_section
#
#          print_section("Managed replacements:")
#          print_success("package.json (name field)")
#
# Design Notes:
#   Design as pure utility module - no side effects
#       All functions are stateless and reusable
#       Terminal colors use ANSI escape codes, disabled when NO_COLOR is set
#       or the stream is not a terminal
#
# See Also:
#   prepare_release/prepare_release.py - renders the preparation report
# ==============================================================================

import os
import sys
from typing import TextIO


# ANSI color codes for terminal output
class Colors:
    """Terminal color codes for formatted output."""
    RED = '\033[0;31m'
    GREEN = '\033[0;32m'
    YELLOW = '\033[1;33m'
    BLUE = '\033[0;34m'
    CYAN = '\033[0;36m'
    NC = '\033[0m'  # No Color


def use_color(stream: TextIO) -> bool:
    """Check whether ANSI colors should be written to a stream."""
    if os.environ.get('NO_COLOR'):
        return False
    isatty = getattr(stream, 'isatty', None)
    return bool(isatty and isatty())


def _emit(color: str, message: str, stream: TextIO) -> None:
    if use_color(stream):
        print(f"{color}{message}{Colors.NC}", file=stream)
    else:
        print(message, file=stream)


def print_success(message: str) -> None:
    """Print a success message in green."""
    _emit(Colors.GREEN, f"✓ {message}", sys.stdout)


def print_error(message: str) -> None:
    """Print an error message in red."""
    _emit(Colors.RED, f"✗ {message}", sys.stderr)


def print_warning(message: str) -> None:
    """Print a warning message in yellow."""
    _emit(Colors.YELLOW, f"⚠ {message}", sys.stdout)


def print_info(message: str) -> None:
    """Print an info message in cyan."""
    _emit(Colors.CYAN, message, sys.stdout)


def print_section(message: str) -> None:
    """Print a section header in blue."""
    _emit(Colors.BLUE, message, sys.stdout)


def print_banner(title: str, width: int = 70) -> None:
    """Print a title framed by '=' rules."""
    print_section("=" * width)
    print_section(title)
    print_section("=" * width)


def print_detail(message: str, indent: int = 2) -> None:
    """Print an uncolored, indented detail line."""
    print(f"{' ' * indent}{message}")
