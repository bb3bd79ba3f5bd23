#!/usr/bin/env python3
# ==============================================================================
# adapters/__init__.py - Managed location registry
# ==============================================================================
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# SPDX-License-Identifier: BSD-3-Clause
# See LICENSE file in the project root.
#
# Purpose:
#   Ordered, immutable table of managed locations. The orchestrator takes a
#   registry as an argument; default_registry() builds the standard one.
#
# ==============================================================================

from typing import FrozenSet, Iterable, Iterator, Tuple

from .base import BaseRewriteAdapter
from .codeql import CodeqlConfigAdapter
from .manifest import ManifestAdapter
from .workflow import TagprWorkflowAdapter


class ManagedLocationRegistry:
    """
    Ordered collection of managed location adapters.

    Order is the order rewrites run and are reported in. Each file may be
    registered once, which keeps managed locations disjoint.
    """

    def __init__(self, adapters: Iterable[BaseRewriteAdapter]):
        self._adapters: Tuple[BaseRewriteAdapter, ...] = tuple(adapters)
        seen = set()
        for adapter in self._adapters:
            if adapter.file in seen:
                raise ValueError(f"Managed file registered twice: {adapter.file}")
            seen.add(adapter.file)
        self._files: FrozenSet[str] = frozenset(seen)

    def __iter__(self) -> Iterator[BaseRewriteAdapter]:
        return iter(self._adapters)

    def __len__(self) -> int:
        return len(self._adapters)

    @property
    def managed_files(self) -> FrozenSet[str]:
        """Relative POSIX paths excluded from the unmanaged scan."""
        return self._files


def default_registry() -> ManagedLocationRegistry:
    """Build the standard registry: package.json, CodeQL config, tagpr workflow."""
    return ManagedLocationRegistry([
        ManifestAdapter(),
        CodeqlConfigAdapter(),
        TagprWorkflowAdapter(),
    ])


__all__ = [
    'BaseRewriteAdapter',
    'CodeqlConfigAdapter',
    'ManagedLocationRegistry',
    'ManifestAdapter',
    'TagprWorkflowAdapter',
    'default_registry',
]
