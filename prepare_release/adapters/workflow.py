#!/usr/bin/env python3
# ==============================================================================
# adapters/workflow.py - tagpr workflow adapter
# ==============================================================================
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# SPDX-License-Identifier: BSD-3-Clause
# See LICENSE file in the project root.
#
# Purpose:
#   Switch the tagpr release workflow from the default GITHUB_TOKEN to the
#   PAT_FOR_TAGPR secret so tags pushed by tagpr trigger other workflows.
#
# Design Notes:
#   Four ordered edits, each anchored to a literal:
#     1. Secret reference  GITHUB_TOKEN -> PAT_FOR_TAGPR (everywhere)
#     2. Checkout step + sentinel comment -> "with: / token:" block
#     3. Remaining sentinel comments removed
#     4. Runs of 3+ newlines collapsed to a single blank line
#   Steps 2 and 3 are one-shot: once the sentinel is gone they do nothing.
#
# ==============================================================================

import re
from typing import List

from .base import BaseRewriteAdapter


TAGPR_WORKFLOW_FILE = '.github/workflows/tagpr.yml'

PAT_SECRET = '${{ secrets.PAT_FOR_TAGPR }}'
GITHUB_TOKEN_REFERENCE = 'GITHUB_TOKEN: ${{ secrets.GITHUB_TOKEN }}'
PAT_TOKEN_REFERENCE = f'GITHUB_TOKEN: {PAT_SECRET}'

CHECKOUT_ACTION = 'uses: actions/checkout@v'
SENTINEL_PREFIX = '# TODO: After replace-devcode'
CHECKOUT_SENTINEL = f'{SENTINEL_PREFIX}, add token: {PAT_SECRET}'

BLANK_RUN = re.compile(r"(?:\r?\n){3,}")


def _split_eol(line: str):
    """Split a line (already separated on \\n) into body and '\\r' ending."""
    if line.endswith('\r'):
        return line[:-1], '\r'
    return line, ''


def _first_break(run: str) -> str:
    return "\r\n" if run.startswith("\r") else "\n"


def is_checkout_line(line: str) -> bool:
    """True when a line ends with an actions/checkout@v<N> invocation."""
    body, _ = _split_eol(line)
    _, found, version = body.rpartition(CHECKOUT_ACTION)
    return bool(found) and version.isascii() and version.isdigit()


def add_checkout_token(lines: List[str]) -> List[str]:
    """Replace a sentinel directly under a checkout step with a token block."""
    result = []
    for index, line in enumerate(lines):
        body, eol = _split_eol(line)
        stripped = body.lstrip()
        if (index > 0 and is_checkout_line(lines[index - 1])
                and stripped.startswith(CHECKOUT_SENTINEL)):
            indent = body[:len(body) - len(stripped)]
            trailing = stripped[len(CHECKOUT_SENTINEL):]
            result.append(f"{indent}with:{eol}")
            result.append(f"{indent}  token: {PAT_SECRET}{trailing}{eol}")
        else:
            result.append(line)
    return result


def strip_sentinels(lines: List[str]) -> List[str]:
    """Drop sentinel comment lines; trim sentinels trailing other content."""
    result = []
    for line in lines:
        body, eol = _split_eol(line)
        position = body.find(SENTINEL_PREFIX)
        if position < 0:
            result.append(line)
            continue
        kept = body[:position].rstrip()
        if kept:
            result.append(f"{kept}{eol}")
    return result


def collapse_blank_lines(content: str) -> str:
    """Collapse runs of 3+ line breaks (LF or CRLF, mixed) into exactly two."""
    return BLANK_RUN.sub(lambda run: _first_break(run.group(0)) * 2, content)


class TagprWorkflowAdapter(BaseRewriteAdapter):
    """Managed rewrite of the tagpr workflow credentials."""

    @property
    def file(self) -> str:
        return TAGPR_WORKFLOW_FILE

    @property
    def description(self) -> str:
        return 'GITHUB_TOKEN -> PAT_FOR_TAGPR'

    def transform(self, content: str, devcode: str, publish_name: str) -> str:
        content = content.replace(GITHUB_TOKEN_REFERENCE, PAT_TOKEN_REFERENCE)

        lines = content.split('\n')
        lines = add_checkout_token(lines)
        lines = strip_sentinels(lines)
        content = '\n'.join(lines)

        return collapse_blank_lines(content)
