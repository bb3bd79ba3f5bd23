#!/usr/bin/env python3
# ==============================================================================
# adapters/manifest.py - package.json adapter
# ==============================================================================
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# SPDX-License-Identifier: BSD-3-Clause
# See LICENSE file in the project root.
#
# Purpose:
#   Rename the package and drop the "private" flag. Works on the parsed
#   JSON object so no other field can be touched.
#
# ==============================================================================

import json

from .base import BaseRewriteAdapter
from ..detector import parse_manifest
from ..models import MANIFEST_FILE


class ManifestAdapter(BaseRewriteAdapter):
    """
    Managed rewrite of package.json.

    Sets "name" to the publish name and removes the "private" key
    entirely. Output uses 2-space indentation and a trailing newline;
    all other fields keep their order and values.
    """

    optional = False

    @property
    def file(self) -> str:
        return MANIFEST_FILE

    @property
    def description(self) -> str:
        return 'name field'

    def transform(self, content: str, devcode: str, publish_name: str) -> str:
        manifest = parse_manifest(content)
        manifest['name'] = publish_name
        manifest.pop('private', None)
        return json.dumps(manifest, indent=2, ensure_ascii=False) + '\n'
