#!/usr/bin/env python3
# ==============================================================================
# scanner.py - Project tree scanning
# ==============================================================================
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# SPDX-License-Identifier: BSD-3-Clause
# See LICENSE file in the project root.
#
# Purpose:
#   Enumerate project files and report every line outside the managed
#   locations that still contains the devcode identifier.
#
# Design Notes:
#   Read-only. Nothing in this module writes to the project.
#   Best effort: unreadable directories and files (permissions, binary
#   content, invalid UTF-8) are skipped silently. An occurrence inside
#   such a file is therefore never reported; this is a known limitation.
#   Directory entries are visited in sorted order and symlinks are not
#   followed, so results are deterministic and traversal cannot loop.
#
# ==============================================================================

from pathlib import Path
from typing import AbstractSet, Iterable, List

from .models import DEFAULT_EXCLUDED_DIRS, PREVIEW_LENGTH, Occurrence


def find_files(root: Path, excluded_dirs: AbstractSet[str] = DEFAULT_EXCLUDED_DIRS) -> List[Path]:
    """
    Collect regular files under root, depth-first.

    Uses an explicit stack, so tree depth is not bounded by the
    interpreter recursion limit.

    Args:
        root: Directory to walk
        excluded_dirs: Directory names skipped at any depth

    Returns:
        File paths in traversal order
    """
    root = Path(root)
    files: List[Path] = []
    stack = [root]

    while stack:
        entry = stack.pop()
        try:
            if entry is not root:
                if entry.is_symlink():
                    continue
                if entry.is_file():
                    files.append(entry)
                    continue
                if not entry.is_dir() or entry.name in excluded_dirs:
                    continue
            children = sorted(entry.iterdir(), key=lambda p: p.name)
        except OSError:
            continue

        # Reversed so the first child in name order is popped first
        stack.extend(reversed(children))

    return files


def preview(line: str, limit: int = PREVIEW_LENGTH) -> str:
    """Trim a line and cut it to the report preview length."""
    return line.strip()[:limit]


def find_unmanaged_occurrences(
    root: Path,
    devcode: str,
    managed_files: Iterable[str],
    excluded_dirs: AbstractSet[str] = DEFAULT_EXCLUDED_DIRS,
) -> List[Occurrence]:
    """
    Scan the project for devcode occurrences outside managed files.

    Args:
        root: Project root
        devcode: Literal identifier to look for
        managed_files: Relative POSIX paths to leave out of the scan
        excluded_dirs: Directory names skipped at any depth

    Returns:
        Occurrences ordered by traversal order, then line number
    """
    root = Path(root)
    skip = set(managed_files)
    occurrences: List[Occurrence] = []

    for file_path in find_files(root, excluded_dirs):
        rel_path = file_path.relative_to(root).as_posix()
        if rel_path in skip:
            continue

        occurrences.extend(scan_lines(file_path, rel_path, devcode))

    return occurrences


def scan_lines(file_path: Path, rel_path: str, devcode: str) -> List[Occurrence]:
    """Occurrences of devcode in one file; empty if the file is unreadable."""
    try:
        with open(file_path, 'r', encoding='utf-8', newline='') as f:
            content = f.read()
    except (OSError, UnicodeDecodeError):
        return []

    return [
        Occurrence(file=rel_path, line=number, content=preview(line))
        for number, line in enumerate(content.split('\n'), 1)
        if devcode in line
    ]
