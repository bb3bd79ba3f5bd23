#!/usr/bin/env python3
# ==============================================================================
# detector.py - Devcode project detection
# ==============================================================================
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# SPDX-License-Identifier: BSD-3-Clause
# See LICENSE file in the project root.
#
# Purpose:
#   Read package.json and decide whether a project is still in devcode
#   state ("private": true). The devcode identifier is the manifest name.
#
# ==============================================================================

import json
from pathlib import Path
from typing import Any, Dict

from .models import (
    MANIFEST_FILE,
    ManifestFormatError,
    ManifestNotFoundError,
    NotDevcodeProjectError,
)


def parse_manifest(content: str) -> Dict[str, Any]:
    """
    Parse package.json text into a dict.

    Args:
        content: Raw manifest text

    Returns:
        Manifest fields in file order

    Raises:
        ManifestFormatError: Invalid JSON, or not a JSON object
    """
    try:
        manifest = json.loads(content)
    except json.JSONDecodeError as e:
        raise ManifestFormatError(f"{MANIFEST_FILE} is not valid JSON: {e}") from e

    if not isinstance(manifest, dict):
        raise ManifestFormatError(f"{MANIFEST_FILE} must contain a JSON object")
    return manifest


def detect_devcode(target_dir: Path) -> str:
    """
    Detect the devcode identifier of a project.

    Args:
        target_dir: Project root containing package.json

    Returns:
        The manifest "name" field

    Raises:
        ManifestNotFoundError: package.json does not exist
        NotDevcodeProjectError: "private" is not exactly true
        ManifestFormatError: package.json is malformed or has no string name
    """
    manifest_path = Path(target_dir) / MANIFEST_FILE

    try:
        content = manifest_path.read_text(encoding='utf-8')
    except FileNotFoundError:
        raise ManifestNotFoundError() from None

    manifest = parse_manifest(content)

    if manifest.get('private') is not True:
        raise NotDevcodeProjectError()

    name = manifest.get('name')
    if not isinstance(name, str) or not name:
        raise ManifestFormatError(f'{MANIFEST_FILE} has no "name" field')

    return name
