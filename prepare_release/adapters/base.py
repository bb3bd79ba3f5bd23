#!/usr/bin/env python3
# ==============================================================================
# adapters/base.py - Base adapter for managed devcode rewrites
# ==============================================================================
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# SPDX-License-Identifier: BSD-3-Clause
# See LICENSE file in the project root.
#
# Purpose:
#   Abstract base class for managed location adapters. Each adapter owns
#   exactly one file and knows the single surgical edit it may make there.
#
# Design Notes:
#   rewrite() is a template method: read -> transform -> write. Subclasses
#   only implement transform(), a pure string function, so every edit can
#   be exercised without touching the filesystem.
#   Files are read and written with newline='' so line endings outside the
#   edited region survive byte-for-byte.
#
# ==============================================================================

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from ..models import RewriteOutcome


class BaseRewriteAdapter(ABC):
    """
    Abstract base class for managed location rewrites.

    Subclasses must implement:
        - file: Path of the managed file, relative to the project root
        - description: What the rewrite touches, for the report
        - transform(): Pure content -> content edit

    Subclasses may set:
        - optional: True when an absent file means "nothing to do"
    """

    optional: bool = True

    @property
    @abstractmethod
    def file(self) -> str:
        """Managed file path relative to the project root (POSIX separators)."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable summary of the managed edit."""
        pass

    @abstractmethod
    def transform(self, content: str, devcode: str, publish_name: str) -> str:
        """
        Apply the managed edit to file content.

        Args:
            content: Current file content
            devcode: Detected devcode identifier
            publish_name: Name the project is released under

        Returns:
            New file content (identical to content when nothing applies)
        """
        pass

    def path_in(self, target_dir: Path) -> Path:
        """Absolute location of the managed file under target_dir."""
        return Path(target_dir).joinpath(*self.file.split('/'))

    def read(self, target_dir: Path) -> Optional[str]:
        """
        Read the managed file.

        Returns:
            File content, or None when the file is optional and absent

        Raises:
            FileNotFoundError: Required file is absent
            OSError: Any other I/O failure
        """
        try:
            with open(self.path_in(target_dir), 'r', encoding='utf-8', newline='') as f:
                return f.read()
        except FileNotFoundError:
            if self.optional:
                return None
            raise

    def write(self, target_dir: Path, content: str) -> None:
        with open(self.path_in(target_dir), 'w', encoding='utf-8', newline='') as f:
            f.write(content)

    def rewrite(
        self,
        target_dir: Path,
        devcode: str,
        publish_name: str,
        dry_run: bool = False
    ) -> RewriteOutcome:
        """
        Read, transform and write back the managed file.

        Args:
            target_dir: Project root
            devcode: Detected devcode identifier
            publish_name: Name the project is released under
            dry_run: Compute the edit but leave the file untouched

        Returns:
            UPDATED, UNCHANGED or MISSING

        Raises:
            OSError, ValueError: Propagated to the orchestrator, which
            records them against this location
        """
        content = self.read(target_dir)
        if content is None:
            return RewriteOutcome.MISSING

        new_content = self.transform(content, devcode, publish_name)
        if new_content == content:
            return RewriteOutcome.UNCHANGED

        if not dry_run:
            self.write(target_dir, new_content)
        return RewriteOutcome.UPDATED
