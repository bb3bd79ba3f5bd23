#!/usr/bin/env python3
# ==============================================================================
# adapters/codeql.py - CodeQL config adapter
# ==============================================================================
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# SPDX-License-Identifier: BSD-3-Clause
# See LICENSE file in the project root.
#
# Purpose:
#   Replace the devcode inside the first "name:" line of the CodeQL
#   config. Scanning is line by line with plain string checks; no
#   document-wide pattern is ever applied.
#
# ==============================================================================

from .base import BaseRewriteAdapter


CODEQL_CONFIG_FILE = '.github/codeql/codeql-config.yml'

NAME_KEY = 'name:'


class CodeqlConfigAdapter(BaseRewriteAdapter):
    """Managed rewrite of the CodeQL config "name" field."""

    @property
    def file(self) -> str:
        return CODEQL_CONFIG_FILE

    @property
    def description(self) -> str:
        return 'name field'

    def transform(self, content: str, devcode: str, publish_name: str) -> str:
        """
        Replace the first devcode occurrence on the first "name:" line.

        Every other line, including later "name:" lines and comments that
        mention the devcode, is returned unchanged.
        """
        lines = content.split('\n')
        for index, line in enumerate(lines):
            if line.lstrip().startswith(NAME_KEY):
                lines[index] = line.replace(devcode, publish_name, 1)
                break
        return '\n'.join(lines)
