#!/usr/bin/env python3
# ==============================================================================
# prepare_release - Devcode release preparation
# ==============================================================================
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# SPDX-License-Identifier: BSD-3-Clause
# See LICENSE file in the project root.
# ==============================================================================

from .adapters import ManagedLocationRegistry, default_registry
from .detector import detect_devcode
from .models import (
    ManifestFormatError,
    ManifestNotFoundError,
    NotDevcodeProjectError,
    Occurrence,
    PreparationReport,
    PrepareReleaseError,
    ReleaseConfig,
)
from .prepare_release import main, prepare_release
from .scanner import find_files, find_unmanaged_occurrences

__all__ = [
    'ManagedLocationRegistry',
    'ManifestFormatError',
    'ManifestNotFoundError',
    'NotDevcodeProjectError',
    'Occurrence',
    'PreparationReport',
    'PrepareReleaseError',
    'ReleaseConfig',
    'default_registry',
    'detect_devcode',
    'find_files',
    'find_unmanaged_occurrences',
    'main',
    'prepare_release',
]
