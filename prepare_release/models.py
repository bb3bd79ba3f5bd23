#!/usr/bin/env python3
# ==============================================================================
# models.py - Data models for prepare_release
# ==============================================================================
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# SPDX-License-Identifier: BSD-3-Clause
# See LICENSE file in the project root.
#
# Purpose:
#   Configuration, result records and error types shared by the devcode
#   detector, the managed rewrite adapters, the tree scanner and the
#   release preparation orchestrator.
#
# ==============================================================================

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import FrozenSet, List, Optional


MANIFEST_FILE = 'package.json'

# Directory names skipped at any depth when scanning for occurrences
DEFAULT_EXCLUDED_DIRS: FrozenSet[str] = frozenset({
    'node_modules',
    '.git',
    'dist',
    'bun.lockb',
})

# Maximum length of a reported occurrence line
PREVIEW_LENGTH = 80


# ==============================================================================
# Errors
# ==============================================================================

class PrepareReleaseError(Exception):
    """Base exception for release preparation failures."""
    exit_code = 1

    def __init__(self, message: str, exit_code: Optional[int] = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ManifestNotFoundError(PrepareReleaseError):
    """package.json is missing from the target directory."""
    exit_code = 2

    def __init__(self, message: str = f"{MANIFEST_FILE} not found. Are you in a project directory?"):
        super().__init__(message)


class NotDevcodeProjectError(PrepareReleaseError):
    """package.json does not carry "private": true."""
    exit_code = 3

    def __init__(self, message: str = (
            f'This project is not a devcode project (missing "private": true in {MANIFEST_FILE})')):
        super().__init__(message)


class ManifestFormatError(PrepareReleaseError):
    """package.json is not a JSON object with a string name."""
    exit_code = 4


# ==============================================================================
# Configuration
# ==============================================================================

class PreparationStage(Enum):
    """Linear stages of one release preparation run."""
    IDLE = 'idle'
    DETECTING = 'detecting'
    REWRITING = 'rewriting'
    SCANNING = 'scanning'
    REPORTING = 'reporting'
    DONE = 'done'


class RewriteOutcome(Enum):
    """What a managed rewrite did to its file."""
    UPDATED = 'updated'
    UNCHANGED = 'unchanged'
    MISSING = 'missing'
    FAILED = 'failed'


@dataclass
class ReleaseConfig:
    """Configuration for a release preparation run."""
    target_dir: Path
    publish_name: str
    dry_run: bool = False
    verbose: bool = False
    excluded_dirs: FrozenSet[str] = DEFAULT_EXCLUDED_DIRS

    def __post_init__(self):
        if isinstance(self.target_dir, str):
            self.target_dir = Path(self.target_dir)
        if not self.publish_name or not self.publish_name.strip():
            raise ValueError("Publish name cannot be empty")


# ==============================================================================
# Results
# ==============================================================================

@dataclass(frozen=True)
class Occurrence:
    """A line outside the managed locations that still holds the devcode."""
    file: str
    line: int
    content: str

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


@dataclass
class LocationResult:
    """Outcome of one managed location's rewrite."""
    file: str
    description: str
    outcome: RewriteOutcome
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.outcome is not RewriteOutcome.FAILED


@dataclass
class PreparationReport:
    """Everything a single run learned, rendered once and then discarded."""
    devcode: str
    publish_name: str
    dry_run: bool = False
    stage: PreparationStage = PreparationStage.IDLE
    locations: List[LocationResult] = field(default_factory=list)
    occurrences: List[Occurrence] = field(default_factory=list)

    @property
    def failed_locations(self) -> List[LocationResult]:
        return [result for result in self.locations if not result.succeeded]

    @property
    def succeeded(self) -> bool:
        """Unmanaged occurrences are advisory and never fail a run."""
        return self.stage is PreparationStage.DONE
